"""Secret storage for OAuth tokens and the signed-in user."""

import json
import logging
import os
from pathlib import Path
from typing import Protocol

from pydantic import ValidationError

from flickr_oauth.models.auth import AccessToken, AuthenticatedUser

logger = logging.getLogger(__name__)

SERVICE_NAME = "com.flickr.oauth-token"

ACCESS_TOKEN_KEY = "access_token"
TOKEN_SECRET_KEY = "token_secret"
CURRENT_USER_KEY = "current_user"


def _get_token_path() -> Path:
    """Get default token storage path."""
    xdg_data = os.environ.get("XDG_DATA_HOME")
    base = Path(xdg_data) if xdg_data else Path.home() / ".local" / "share"
    return base / "flickr-oauth" / "tokens.json"


class SecretStore(Protocol):
    """Key-value secret storage namespaced under a service identifier."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def delete(self, key: str) -> None: ...


class MemorySecretStore:
    """In-process secret store. Contents are lost on exit."""

    def __init__(self, service: str = SERVICE_NAME) -> None:
        self.service = service
        self._data: dict[tuple[str, str], str] = {}

    def get(self, key: str) -> str | None:
        return self._data.get((self.service, key))

    def set(self, key: str, value: str) -> None:
        self._data[(self.service, key)] = value

    def delete(self, key: str) -> None:
        self._data.pop((self.service, key), None)

    def keys(self) -> list[str]:
        return [key for service, key in self._data if service == self.service]


class FileSecretStore:
    """Secret store backed by a JSON file.

    Layout: ``{"<service>": {"<key>": "<value>", ...}}``. The file is written
    with owner-only permissions. For production use, consider the platform
    keychain or a secrets manager instead.
    """

    def __init__(self, path: Path | None = None, *, service: str = SERVICE_NAME) -> None:
        self.path = path or _get_token_path()
        self.service = service

    def get(self, key: str) -> str | None:
        return self._read().get(self.service, {}).get(key)

    def set(self, key: str, value: str) -> None:
        data = self._read()
        data.setdefault(self.service, {})[key] = value
        self._write(data)

    def delete(self, key: str) -> None:
        data = self._read()
        entries = data.get(self.service, {})
        if key not in entries:
            return
        del entries[key]
        if not entries:
            data.pop(self.service)
        if data:
            self._write(data)
        else:
            self.path.unlink(missing_ok=True)

    def _read(self) -> dict[str, dict[str, str]]:
        if not self.path.exists():
            return {}

        try:
            with self.path.open() as f:
                data = json.load(f)
        except json.JSONDecodeError:
            logger.warning("Ignoring unreadable secret store at %s", self.path)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring unreadable secret store at %s", self.path)
            return {}
        return {
            service: entries for service, entries in data.items() if isinstance(entries, dict)
        }

    def _write(self, data: dict[str, dict[str, str]]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)

        with self.path.open("w") as f:
            json.dump(data, f, indent=2)

        # Set restrictive permissions (owner read/write only)
        self.path.chmod(0o600)


def load_access_token(store: SecretStore) -> AccessToken | None:
    """Return the stored token pair, or None unless both halves are present."""
    token = store.get(ACCESS_TOKEN_KEY)
    token_secret = store.get(TOKEN_SECRET_KEY)
    if not token or not token_secret:
        return None
    return AccessToken(token=token, token_secret=token_secret)


def save_access_token(store: SecretStore, token: AccessToken) -> None:
    store.set(ACCESS_TOKEN_KEY, token.token)
    store.set(TOKEN_SECRET_KEY, token.token_secret)


def clear_access_token(store: SecretStore) -> None:
    store.delete(ACCESS_TOKEN_KEY)
    store.delete(TOKEN_SECRET_KEY)


def load_user(store: SecretStore) -> AuthenticatedUser | None:
    raw = store.get(CURRENT_USER_KEY)
    if not raw:
        return None

    try:
        return AuthenticatedUser.model_validate_json(raw)
    except ValidationError:
        logger.warning("Discarding malformed stored user")
        return None


def save_user(store: SecretStore, user: AuthenticatedUser) -> None:
    store.set(CURRENT_USER_KEY, user.model_dump_json())


def clear_user(store: SecretStore) -> None:
    store.delete(CURRENT_USER_KEY)
