"""Flickr REST API access."""

from flickr_oauth.api.base import BaseAPI
from flickr_oauth.api.rest import INVALID_TOKEN_CODES, FlickrAPI

__all__ = ["INVALID_TOKEN_CODES", "BaseAPI", "FlickrAPI"]
