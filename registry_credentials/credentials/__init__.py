"""Credential stores for registry authentication.

This package provides:
- A dynamic store that picks, per registry, the credential helper to use
- A fallback store that searches several stores but writes to one
- Native helper (docker-credential-*) and plaintext file stores

Example usage:

    from registry_credentials.credentials import new_store_from_docker, Credential

    store = new_store_from_docker()
    store.put("registry.example.com", Credential(username="alice", password="s3cret"))
    cred = store.get("registry.example.com")

See the documentation for detailed usage and security considerations.
"""

from registry_credentials.config.settings import StoreOptions
from registry_credentials.exceptions import (
    BackendNotAvailableError,
    CredentialError,
    CredentialFormatError,
    CredentialNotFoundError,
    CredentialsStorePersistError,
    NativeHelperError,
    PlaintextPutDisabledError,
)
from registry_credentials.models.credential import EMPTY_CREDENTIAL, Credential

from .backend import CredentialsConfig, CredentialStore
from .file_backend import FileStore
from .native_backend import NativeStore
from .platform import get_default_helper_suffix, get_platform_default_helper_suffix
from .store import (
    DynamicStore,
    StoreWithFallbacks,
    get_docker_config_path,
    new_store,
    new_store_from_docker,
    new_store_with_fallbacks,
    select_helper,
)

__all__ = [
    # Models
    "Credential",
    "EMPTY_CREDENTIAL",
    # Stores
    "CredentialStore",
    "CredentialsConfig",
    "DynamicStore",
    "StoreWithFallbacks",
    "NativeStore",
    "FileStore",
    # Factories
    "StoreOptions",
    "new_store",
    "new_store_from_docker",
    "new_store_with_fallbacks",
    "get_docker_config_path",
    "select_helper",
    "get_default_helper_suffix",
    "get_platform_default_helper_suffix",
    # Exceptions
    "CredentialError",
    "CredentialNotFoundError",
    "CredentialFormatError",
    "BackendNotAvailableError",
    "PlaintextPutDisabledError",
    "NativeHelperError",
    "CredentialsStorePersistError",
]
