"""Shared fixtures."""

import pytest

from flickr_oauth import FlickrConfig
from tests.fakes import RecordingSecretStore


@pytest.fixture
def config() -> FlickrConfig:
    """Create a test configuration."""
    return FlickrConfig(
        consumer_key="test_key",
        consumer_secret="test_secret",
        callback_url="https://cb",
    )


@pytest.fixture
def secret_store() -> RecordingSecretStore:
    return RecordingSecretStore()


@pytest.fixture(autouse=True)
def _clean_flickr_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep developer credentials out of the tests."""
    for var in ("FLICKR_CONSUMER_KEY", "FLICKR_CONSUMER_SECRET", "FLICKR_CALLBACK_URL"):
        monkeypatch.delenv(var, raising=False)
