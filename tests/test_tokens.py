"""Tests for secret stores and token persistence."""

import json
from pathlib import Path

import pytest

from flickr_oauth.auth import FileSecretStore, MemorySecretStore
from flickr_oauth.auth.tokens import (
    SERVICE_NAME,
    clear_access_token,
    load_access_token,
    load_user,
    save_access_token,
    save_user,
)
from flickr_oauth.models.auth import AccessToken, AuthenticatedUser


@pytest.fixture
def token_path(tmp_path: Path) -> Path:
    return tmp_path / "flickr" / "tokens.json"


class TestMemorySecretStore:
    """Tests for the in-process store."""

    def test_set_get_delete(self) -> None:
        store = MemorySecretStore()

        store.set("access_token", "T")
        assert store.get("access_token") == "T"

        store.delete("access_token")
        assert store.get("access_token") is None

    def test_delete_missing_key_is_noop(self) -> None:
        MemorySecretStore().delete("nope")

    def test_keys_are_listed_for_service(self) -> None:
        store = MemorySecretStore(service="svc")
        store.set("a", "1")
        store.set("b", "2")

        assert sorted(store.keys()) == ["a", "b"]


class TestFileSecretStore:
    """Tests for the JSON file store."""

    def test_round_trip(self, token_path: Path) -> None:
        """Values survive a new store instance on the same file."""
        FileSecretStore(token_path).set("access_token", "T")

        assert FileSecretStore(token_path).get("access_token") == "T"

    def test_namespaced_under_service(self, token_path: Path) -> None:
        """Keys are stored under the service identifier."""
        FileSecretStore(token_path).set("access_token", "T")

        data = json.loads(token_path.read_text())
        assert data == {SERVICE_NAME: {"access_token": "T"}}

    def test_services_do_not_collide(self, token_path: Path) -> None:
        first = FileSecretStore(token_path, service="one")
        second = FileSecretStore(token_path, service="two")

        first.set("access_token", "A")
        second.set("access_token", "B")

        assert first.get("access_token") == "A"
        assert second.get("access_token") == "B"

    def test_restrictive_permissions(self, token_path: Path) -> None:
        """File should be readable by owner only."""
        FileSecretStore(token_path).set("token_secret", "S")

        assert token_path.stat().st_mode & 0o777 == 0o600

    def test_deleting_last_key_removes_file(self, token_path: Path) -> None:
        store = FileSecretStore(token_path)
        store.set("access_token", "T")

        store.delete("access_token")

        assert not token_path.exists()

    def test_missing_file_reads_as_empty(self, token_path: Path) -> None:
        store = FileSecretStore(token_path)

        assert store.get("access_token") is None
        store.delete("access_token")

    def test_corrupt_file_reads_as_empty(self, token_path: Path) -> None:
        token_path.parent.mkdir(parents=True)
        token_path.write_text("{not json")

        assert FileSecretStore(token_path).get("access_token") is None

    @pytest.mark.parametrize("content", ["[]", '{"com.flickr.oauth-token": []}', '"x"'])
    def test_wrong_shape_reads_as_empty(self, token_path: Path, content: str) -> None:
        token_path.parent.mkdir(parents=True)
        token_path.write_text(content)
        store = FileSecretStore(token_path)

        assert store.get("access_token") is None
        store.delete("access_token")

    def test_wrong_shape_is_replaced_on_write(self, token_path: Path) -> None:
        token_path.parent.mkdir(parents=True)
        token_path.write_text(json.dumps({SERVICE_NAME: ["junk"], "other": {"k": "v"}}))

        FileSecretStore(token_path).set("access_token", "T")

        assert json.loads(token_path.read_text()) == {
            "other": {"k": "v"},
            SERVICE_NAME: {"access_token": "T"},
        }

    def test_default_path_uses_xdg_data_home(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path))

        assert FileSecretStore().path == tmp_path / "flickr-oauth" / "tokens.json"


class TestTokenHelpers:
    """Tests for token and user persistence helpers."""

    def test_token_pair_round_trip(self) -> None:
        store = MemorySecretStore()
        save_access_token(store, AccessToken(token="T", token_secret="S"))

        assert load_access_token(store) == AccessToken(token="T", token_secret="S")

    def test_half_a_pair_is_absent(self) -> None:
        """Token without secret counts as not stored."""
        store = MemorySecretStore()
        store.set("access_token", "T")

        assert load_access_token(store) is None

    def test_clear_removes_both(self) -> None:
        store = MemorySecretStore()
        save_access_token(store, AccessToken(token="T", token_secret="S"))

        clear_access_token(store)

        assert store.get("access_token") is None
        assert store.get("token_secret") is None

    def test_user_round_trip_through_file(self, token_path: Path) -> None:
        """User is stored as JSON and decoded back."""
        user = AuthenticatedUser(user_id="123@N01", username="alice", fullname="Alice A")
        save_user(FileSecretStore(token_path), user)

        assert load_user(FileSecretStore(token_path)) == user
        assert json.loads(FileSecretStore(token_path).get("current_user") or "") == {
            "user_id": "123@N01",
            "username": "alice",
            "fullname": "Alice A",
        }

    def test_malformed_user_is_discarded(self) -> None:
        store = MemorySecretStore()
        store.set("current_user", "not json")

        assert load_user(store) is None
