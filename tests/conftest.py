"""Pytest configuration and shared fixtures."""

import json
from pathlib import Path
from unittest.mock import Mock

import pytest

from registry_credentials.config.config_file import ConfigFile


@pytest.fixture
def config_path(tmp_path: Path) -> Path:
    """Location of a config.json inside a temporary docker config dir."""
    return tmp_path / "docker" / "config.json"


@pytest.fixture
def write_config(config_path: Path):
    """Write a config.json document and return its path."""

    def _write(content: dict) -> Path:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        config_path.write_text(json.dumps(content))
        return config_path

    return _write


@pytest.fixture
def mock_config() -> Mock:
    """Config view with nothing configured."""
    config = Mock(spec=ConfigFile)
    config.get_credential_helper.return_value = ""
    config.credentials_store.return_value = ""
    config.is_auth_configured.return_value = False
    return config
