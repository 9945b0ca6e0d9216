"""Plaintext file store backed by the config document's "auths" section."""

import logging

from registry_credentials.config.config_file import ConfigFile
from registry_credentials.exceptions import PlaintextPutDisabledError
from registry_credentials.models.credential import Credential

logger = logging.getLogger(__name__)


class FileStore:
    """Credential storage in plaintext inside config.json.

    This is the last resort used when no native credential helper is
    configured or detected.

    Security Considerations:
    - Credentials are only base64-encoded, not encrypted
    - Anyone who can read config.json can read the credentials
    - Writes are refused unless disable_put is False

    Example:
        >>> store = FileStore(ConfigFile.load(path), disable_put=False)
        >>> store.put("registry.example.com", Credential(username="u", password="p"))
        >>> store.get("registry.example.com").username
        'u'
    """

    def __init__(self, config: ConfigFile, disable_put: bool = False) -> None:
        """Initialize file store.

        Args:
            config: Config document holding the "auths" section
            disable_put: Refuse put() with PlaintextPutDisabledError
        """
        self.config = config
        self.disable_put = disable_put

    @property
    def name(self) -> str:
        """Backend identifier."""
        return "file"

    def get(self, server_address: str) -> Credential:
        """Retrieve credentials from the config file.

        Returns:
            Stored credential or EMPTY_CREDENTIAL if not found

        Raises:
            CredentialFormatError: If the stored entry is malformed
        """
        cred = self.config.get_auth_config(server_address)
        if not cred.is_empty:
            logger.debug(f"Retrieved credential from config file: {server_address}")
        return cred

    def put(self, server_address: str, cred: Credential) -> None:
        """Save credentials in plaintext.

        Raises:
            PlaintextPutDisabledError: If plaintext writes are disabled
            CredentialFormatError: If the username contains ':'
            ConfigurationError: If the config file cannot be saved
        """
        if self.disable_put:
            raise PlaintextPutDisabledError(reference=server_address)

        self.config.put_auth_config(server_address, cred)
        logger.warning(f"Stored credential in plaintext in {self.config.path}: {server_address}")

    def delete(self, server_address: str) -> None:
        """Delete credentials from the config file.

        Raises:
            CredentialNotFoundError: If nothing is stored for the address
            ConfigurationError: If the config file cannot be saved
        """
        self.config.delete_auth_config(server_address)
        logger.info(f"Deleted credential from config file: {server_address}")
