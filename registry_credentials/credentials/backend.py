"""Abstract store protocol for credential storage."""

from typing import Protocol

from registry_credentials.models.credential import Credential


class CredentialStore(Protocol):
    """Protocol defining the interface for credential stores.

    Native helpers, the plaintext file store, the fallback chain and the
    dynamic store all implement these three methods, so any of them can be
    used wherever another is expected.
    """

    def get(self, server_address: str) -> Credential:
        """Retrieve credentials for a server address.

        Args:
            server_address: Registry address (e.g., 'registry.example.com')

        Returns:
            The stored credential, or EMPTY_CREDENTIAL if nothing is stored

        Raises:
            CredentialError: If the backend itself fails
        """
        ...

    def put(self, server_address: str, cred: Credential) -> None:
        """Store credentials for a server address.

        Args:
            server_address: Registry address
            cred: Credential to store

        Raises:
            CredentialError: If the credential could not be stored
        """
        ...

    def delete(self, server_address: str) -> None:
        """Delete credentials for a server address.

        Args:
            server_address: Registry address

        Raises:
            CredentialError: If the credential could not be deleted
        """
        ...


class CredentialsConfig(Protocol):
    """Read/write view of the credentials configuration.

    select_helper only needs this view. DynamicStore takes a full ConfigFile
    because its plaintext fallback also reads and writes "auths".
    """

    def get_credential_helper(self, server_address: str) -> str:
        """Return the helper configured for this address, or ""."""
        ...

    def credentials_store(self) -> str:
        """Return the globally configured helper, or ""."""
        ...

    def is_auth_configured(self) -> bool:
        """Check whether any helper or auth entry is configured."""
        ...

    def set_credentials_store(self, name: str) -> None:
        """Persist the global helper name."""
        ...
