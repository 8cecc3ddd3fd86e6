"""OAuth authentication for the Flickr API."""

from flickr_oauth.auth.oauth import AuthorizationSurface, FlickrOAuth
from flickr_oauth.auth.tokens import FileSecretStore, MemorySecretStore, SecretStore

__all__ = [
    "AuthorizationSurface",
    "FileSecretStore",
    "FlickrOAuth",
    "MemorySecretStore",
    "SecretStore",
]
