"""Tests for the plaintext file store."""

import pytest

from registry_credentials.config.config_file import ConfigFile
from registry_credentials.credentials import (
    EMPTY_CREDENTIAL,
    Credential,
    CredentialNotFoundError,
    FileStore,
    PlaintextPutDisabledError,
)


class TestFileStore:
    """Test FileStore functionality."""

    @pytest.fixture
    def config(self, config_path):
        """Empty config document."""
        return ConfigFile.load(config_path)

    def test_backend_name(self, config):
        """Test backend name property."""
        assert FileStore(config).name == "file"

    def test_get_missing(self, config):
        """Test missing credential returns EMPTY_CREDENTIAL."""
        assert FileStore(config).get("registry.example.com") == EMPTY_CREDENTIAL

    def test_put_disabled(self, config, config_path):
        """Test disabled put raises with a suggestion."""
        store = FileStore(config, disable_put=True)

        with pytest.raises(PlaintextPutDisabledError) as exc_info:
            store.put("registry.example.com", Credential(username="u", password="p"))

        assert exc_info.value.reference == "registry.example.com"
        assert exc_info.value.suggestion is not None
        assert not config_path.exists()

    def test_get_still_works_when_put_disabled(self, config):
        """Test disable_put only affects writes."""
        FileStore(config).put("registry.example.com", Credential(username="u", password="p"))

        store = FileStore(config, disable_put=True)

        assert store.get("registry.example.com").username == "u"

    def test_put_and_get(self, config):
        """Test storing and retrieving a credential."""
        store = FileStore(config)
        cred = Credential(username="alice", password="s3cret")

        store.put("registry.example.com", cred)

        assert store.get("registry.example.com") == cred

    def test_delete(self, config):
        """Test deleting a stored credential."""
        store = FileStore(config)
        store.put("registry.example.com", Credential(refresh_token="tok"))

        store.delete("registry.example.com")

        assert store.get("registry.example.com") == EMPTY_CREDENTIAL

    def test_delete_missing_raises(self, config):
        """Test deleting a missing credential raises."""
        with pytest.raises(CredentialNotFoundError):
            FileStore(config).delete("registry.example.com")
