"""Docker-style config.json document.

The document is the source of truth for which credential helper serves
which registry:

    {
        "auths": {
            "registry.example.com": {"auth": "dXNlcjpwYXNz"}
        },
        "credsStore": "osxkeychain",
        "credHelpers": {
            "registry.example.com": "ecr-login"
        }
    }

Keys this module does not understand are preserved on save.
"""

from __future__ import annotations

import base64
import binascii
import json
import logging
import os
import threading
from pathlib import Path
from typing import Any

from registry_credentials.exceptions import (
    ConfigurationError,
    CredentialFormatError,
    CredentialNotFoundError,
)
from registry_credentials.models.credential import EMPTY_CREDENTIAL, Credential

logger = logging.getLogger(__name__)

AUTHS_KEY = "auths"
CREDS_STORE_KEY = "credsStore"
CRED_HELPERS_KEY = "credHelpers"

# Fields of an entry under "auths"
AUTH_FIELD = "auth"
USERNAME_FIELD = "username"
PASSWORD_FIELD = "password"
IDENTITY_TOKEN_FIELD = "identitytoken"
REGISTRY_TOKEN_FIELD = "registrytoken"


class ConfigFile:
    """In-memory view of a config.json file with atomic write-back.

    All reads and writes go through a re-entrant lock, so a single instance
    can be shared between threads.

    Example:
        >>> config = ConfigFile.load(Path("~/.docker/config.json").expanduser())
        >>> config.get_credential_helper("registry.example.com")
        'ecr-login'
        >>> config.set_credentials_store("pass")
    """

    def __init__(self, path: Path, content: dict[str, Any] | None = None) -> None:
        """Initialize config view.

        Args:
            path: Location the document is saved to
            content: Parsed JSON document (empty when None)
        """
        self.path = path
        self._content: dict[str, Any] = content if content is not None else {}
        self._lock = threading.RLock()

    @classmethod
    def load(cls, path: Path | str) -> ConfigFile:
        """Load a config document from disk.

        A missing file is not an error: it yields an empty document that
        will be created on the first write.

        Args:
            path: Path to config.json

        Returns:
            ConfigFile instance

        Raises:
            ConfigurationError: If the file cannot be read or is not a JSON object
        """
        config_path = Path(path)
        if not config_path.exists():
            logger.debug(f"Config file not found, starting empty: {config_path}")
            return cls(config_path)

        try:
            with open(config_path, encoding="utf-8") as f:
                raw = f.read()
        except OSError as e:
            raise ConfigurationError(f"Cannot read config file: {config_path}") from e

        if not raw.strip():
            return cls(config_path)

        try:
            content = json.loads(raw)
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Invalid JSON in config file {config_path}: {e}") from e

        if not isinstance(content, dict):
            raise ConfigurationError(f"Config file must contain a JSON object: {config_path}")

        # null is accepted wherever a value is optional and reads as empty
        for key in (AUTHS_KEY, CRED_HELPERS_KEY):
            if content.get(key) is not None and not isinstance(content[key], dict):
                raise ConfigurationError(f"'{key}' must be a JSON object in {config_path}")
        for server, helper in (content.get(CRED_HELPERS_KEY) or {}).items():
            if helper is not None and not isinstance(helper, str):
                raise ConfigurationError(
                    f"'{CRED_HELPERS_KEY}' entry for {server} must be a string in {config_path}"
                )
        if content.get(CREDS_STORE_KEY) is not None and not isinstance(content[CREDS_STORE_KEY], str):
            raise ConfigurationError(f"'{CREDS_STORE_KEY}' must be a string in {config_path}")

        return cls(config_path, content)

    def get_credential_helper(self, server_address: str) -> str:
        """Return the per-registry helper name, or "" if none is configured."""
        with self._lock:
            helpers = self._content.get(CRED_HELPERS_KEY) or {}
            return helpers.get(server_address) or ""

    def credentials_store(self) -> str:
        """Return the global helper name, or "" if none is configured."""
        with self._lock:
            return str(self._content.get(CREDS_STORE_KEY) or "")

    def is_auth_configured(self) -> bool:
        """Check whether any authentication is configured in the document."""
        with self._lock:
            return bool(
                self._content.get(CREDS_STORE_KEY)
                or self._content.get(CRED_HELPERS_KEY)
                or self._content.get(AUTHS_KEY)
            )

    def set_credentials_store(self, name: str) -> None:
        """Persist the global credential helper name.

        Args:
            name: Helper suffix (e.g., 'osxkeychain')

        Raises:
            ConfigurationError: If the document cannot be saved
        """
        with self._lock:
            previous = dict(self._content)
            self._content[CREDS_STORE_KEY] = name
            self._save_or_restore(previous)
        logger.info(f"Saved credsStore '{name}' to {self.path}")

    def get_auth_config(self, server_address: str) -> Credential:
        """Read the plaintext credential stored under "auths".

        Returns:
            The decoded credential, or EMPTY_CREDENTIAL if no entry exists

        Raises:
            CredentialFormatError: If the entry cannot be decoded
        """
        with self._lock:
            entry = (self._content.get(AUTHS_KEY) or {}).get(server_address)
        if not entry:
            return EMPTY_CREDENTIAL
        if not isinstance(entry, dict):
            raise CredentialFormatError(
                "Auth entry must be a JSON object", reference=server_address
            )

        username = _string_field(entry, USERNAME_FIELD, server_address)
        password = _string_field(entry, PASSWORD_FIELD, server_address)
        if entry.get(AUTH_FIELD):
            username, password = _decode_auth(_string_field(entry, AUTH_FIELD, server_address), server_address)

        return Credential(
            username=username,
            password=password,
            refresh_token=_string_field(entry, IDENTITY_TOKEN_FIELD, server_address),
            access_token=_string_field(entry, REGISTRY_TOKEN_FIELD, server_address),
        )

    def put_auth_config(self, server_address: str, cred: Credential) -> None:
        """Write a plaintext credential under "auths".

        Raises:
            CredentialFormatError: If the username contains ':'
            ConfigurationError: If the document cannot be saved
        """
        if ":" in cred.username:
            raise CredentialFormatError(
                "Username must not contain ':'", reference=server_address
            )

        entry: dict[str, str] = {}
        if cred.username or cred.password:
            entry[AUTH_FIELD] = _encode_auth(cred.username, cred.password)
        if cred.refresh_token:
            entry[IDENTITY_TOKEN_FIELD] = cred.refresh_token
        if cred.access_token:
            entry[REGISTRY_TOKEN_FIELD] = cred.access_token

        with self._lock:
            previous = dict(self._content)
            auths = dict(self._content.get(AUTHS_KEY) or {})
            # Replace the whole entry but keep fields we do not manage
            existing = auths.get(server_address)
            merged = dict(existing) if isinstance(existing, dict) else {}
            for field in (AUTH_FIELD, USERNAME_FIELD, PASSWORD_FIELD, IDENTITY_TOKEN_FIELD, REGISTRY_TOKEN_FIELD):
                merged.pop(field, None)
            merged.update(entry)
            auths[server_address] = merged
            self._content[AUTHS_KEY] = auths
            self._save_or_restore(previous)

    def delete_auth_config(self, server_address: str) -> None:
        """Remove the "auths" entry for a server address.

        Raises:
            CredentialNotFoundError: If no entry exists
            ConfigurationError: If the document cannot be saved
        """
        with self._lock:
            auths = dict(self._content.get(AUTHS_KEY) or {})
            if server_address not in auths:
                raise CredentialNotFoundError(
                    "Credential not found in config file", reference=server_address
                )
            previous = dict(self._content)
            del auths[server_address]
            self._content[AUTHS_KEY] = auths
            self._save_or_restore(previous)

    def _save_or_restore(self, previous: dict[str, Any]) -> None:
        """Save the document, rolling the in-memory copy back on failure."""
        try:
            self._save()
        except ConfigurationError:
            self._content = previous
            raise

    def _save(self) -> None:
        """Write the document atomically with owner-only permissions.

        Raises:
            ConfigurationError: If the file cannot be written
        """
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)

            temp_file = self.path.with_suffix(".tmp")
            # Owner-only from creation; the chmod below covers a stale temp file
            fd = os.open(temp_file, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(self._content, f, indent="\t")

            try:
                temp_file.chmod(0o600)
            except OSError as e:
                logger.warning(f"Could not set config file permissions: {e}")

            temp_file.replace(self.path)
            logger.debug(f"Saved config file {self.path}")

        except OSError as e:
            raise ConfigurationError(f"Failed to save config file {self.path}: {e}") from e


def _encode_auth(username: str, password: str) -> str:
    return base64.b64encode(f"{username}:{password}".encode()).decode("ascii")


def _decode_auth(auth: str, server_address: str) -> tuple[str, str]:
    """Decode a base64 "user:password" string."""
    try:
        decoded = base64.b64decode(auth, validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError) as e:
        raise CredentialFormatError(
            "Auth entry is not valid base64", reference=server_address
        ) from e

    username, sep, password = decoded.partition(":")
    if not sep:
        raise CredentialFormatError(
            "Auth entry must have the form 'username:password'", reference=server_address
        )
    return username, password


def _string_field(entry: dict[str, Any], field: str, server_address: str) -> str:
    """Return a string field of an auth entry, treating a missing or null value as ""."""
    value = entry.get(field)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise CredentialFormatError(
            f"Auth entry field '{field}' must be a string", reference=server_address
        )
    return value
