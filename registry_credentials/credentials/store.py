"""Credential stores that choose or combine other stores.

DynamicStore picks, per server address, which underlying store answers a
request. StoreWithFallbacks searches several stores for reads and writes to
the first one only.
"""

from __future__ import annotations

import os
import threading
from collections.abc import Callable
from pathlib import Path

import structlog

from registry_credentials.config.config_file import ConfigFile
from registry_credentials.config.settings import StoreOptions
from registry_credentials.exceptions import ConfigurationError, CredentialsStorePersistError
from registry_credentials.models.credential import EMPTY_CREDENTIAL, Credential

from .backend import CredentialsConfig, CredentialStore
from .file_backend import FileStore
from .native_backend import DEFAULT_TIMEOUT, NativeStore
from .platform import get_default_helper_suffix

log = structlog.get_logger(__name__)

DOCKER_CONFIG_DIR_ENV = "DOCKER_CONFIG"
DOCKER_CONFIG_FILE_DIR = ".docker"
DOCKER_CONFIG_FILE_NAME = "config.json"


def select_helper(server_address: str, config: CredentialsConfig, detected_creds_store: str) -> str:
    """Return the helper suffix that serves a server address.

    Order:
    1. Server-specific credential helper (credHelpers)
    2. Configured native store (credsStore)
    3. The detected platform default

    Returns:
        Helper suffix, or "" if the plaintext file store should be used
    """
    if helper := config.get_credential_helper(server_address):
        return helper
    if creds_store := config.credentials_store():
        return creds_store
    return detected_creds_store


class DynamicStore:
    """Store that decides per server address which store to use.

    The underlying store is determined on every call in this order:
      1. Native server-specific credential helper
      2. Native credentials store
      3. The detected platform-default native store (only when the config
         had no authentication configured at construction time)
      4. The plaintext config file itself

    The detected default is written back to the config as credsStore after
    the first successful put(), at most once per instance.
    """

    def __init__(
        self,
        config: ConfigFile,
        options: StoreOptions | None = None,
        detect_default: Callable[[], str] | None = None,
        helper_timeout: float | None = DEFAULT_TIMEOUT,
    ) -> None:
        """Initialize dynamic store.

        Args:
            config: Credentials configuration
            options: Store options (defaults to StoreOptions())
            detect_default: Returns the platform-default helper suffix
                (default: get_default_helper_suffix); only called when the
                config has no authentication configured
            helper_timeout: Timeout passed to native stores
        """
        self.config = config
        self.options = options or StoreOptions()
        self.helper_timeout = helper_timeout

        self.detected_creds_store = ""
        if not config.is_auth_configured():
            # No authentication configured, detect the default credentials store
            self.detected_creds_store = (detect_default or get_default_helper_suffix)()
            log.debug("default_creds_store_detected", creds_store=self.detected_creds_store)

        self._creds_store_lock = threading.Lock()
        self._creds_store_set = False

    def get(self, server_address: str) -> Credential:
        """Retrieve credentials for the server address."""
        return self._get_store(server_address).get(server_address)

    def put(self, server_address: str, cred: Credential) -> None:
        """Save credentials for the server address.

        Raises:
            PlaintextPutDisabledError: If no native store is available and
                StoreOptions.allow_plaintext_put is False
            CredentialsStorePersistError: If the credential was saved but the
                detected default store could not be written to the config
        """
        self._get_store(server_address).put(server_address, cred)

        # Save the detected creds store back to the config on first put
        with self._creds_store_lock:
            if self._creds_store_set:
                return
            self._creds_store_set = True

            if not self.detected_creds_store:
                return
            try:
                self.config.set_credentials_store(self.detected_creds_store)
            except Exception as e:
                log.warning(
                    "creds_store_persist_failed",
                    creds_store=self.detected_creds_store,
                    error=str(e),
                )
                raise CredentialsStorePersistError(
                    f"failed to set credsStore: {e}",
                    reference=server_address,
                ) from e
            log.info("creds_store_persisted", creds_store=self.detected_creds_store)

    def delete(self, server_address: str) -> None:
        """Remove credentials for the server address."""
        self._get_store(server_address).delete(server_address)

    def store_for(self, server_address: str) -> CredentialStore:
        """Return the store that would serve the server address."""
        return self._get_store(server_address)

    def _get_store(self, server_address: str) -> CredentialStore:
        helper = select_helper(server_address, self.config, self.detected_creds_store)
        if helper:
            log.debug("store_selected", server_address=server_address, helper=helper)
            return NativeStore(helper, timeout=self.helper_timeout)

        log.debug("store_selected", server_address=server_address, helper=None)
        return FileStore(self.config, disable_put=not self.options.allow_plaintext_put)


def new_store(
    config_path: Path | str,
    options: StoreOptions | None = None,
    detect_default: Callable[[], str] | None = None,
    helper_timeout: float | None = DEFAULT_TIMEOUT,
) -> CredentialStore:
    """Return a store based on the given configuration file.

    If the config file has no authentication information, a platform-default
    native store is used:
      - Windows: "wincred"
      - Linux: "pass" or "secretservice"
      - macOS: "osxkeychain"

    Raises:
        ConfigurationError: If the config file cannot be loaded
    """
    config = ConfigFile.load(config_path)
    return DynamicStore(config, options, detect_default=detect_default, helper_timeout=helper_timeout)


def new_store_from_docker(
    options: StoreOptions | None = None,
    helper_timeout: float | None = DEFAULT_TIMEOUT,
) -> CredentialStore:
    """Return a store based on the default docker config file.

    - If $DOCKER_CONFIG is set, $DOCKER_CONFIG/config.json is used.
    - Otherwise $HOME/.docker/config.json is used.
    """
    return new_store(get_docker_config_path(), options, helper_timeout=helper_timeout)


def get_docker_config_path() -> Path:
    """Return the path to the default docker config file.

    Raises:
        ConfigurationError: If the home directory cannot be determined
    """
    config_dir = os.environ.get(DOCKER_CONFIG_DIR_ENV)
    if not config_dir:
        try:
            home_dir = Path.home()
        except RuntimeError as e:
            raise ConfigurationError(f"failed to get user home directory: {e}") from e
        return home_dir / DOCKER_CONFIG_FILE_DIR / DOCKER_CONFIG_FILE_NAME
    return Path(config_dir) / DOCKER_CONFIG_FILE_NAME


class StoreWithFallbacks:
    """Store that has multiple fallback stores.

    - get() searches the primary and then the fallback stores in order and
      returns the first credential found.
    - put() saves the credential into the primary store.
    - delete() removes the credential from the primary store.

    Any error from a store stops get() immediately; later stores are not
    consulted.
    """

    def __init__(self, stores: tuple[CredentialStore, ...]) -> None:
        self.stores = stores

    def get(self, server_address: str) -> Credential:
        """Search all stores for the credentials of the server address."""
        for store in self.stores:
            cred = store.get(server_address)
            if cred != EMPTY_CREDENTIAL:
                return cred
        return EMPTY_CREDENTIAL

    def put(self, server_address: str, cred: Credential) -> None:
        """Save credentials into the primary store."""
        self.stores[0].put(server_address, cred)

    def delete(self, server_address: str) -> None:
        """Remove credentials from the primary store."""
        self.stores[0].delete(server_address)


def new_store_with_fallbacks(primary: CredentialStore, *fallbacks: CredentialStore) -> CredentialStore:
    """Return a store that reads from primary and fallbacks, writes to primary.

    With no fallbacks, primary itself is returned.
    """
    if not fallbacks:
        return primary
    return StoreWithFallbacks((primary, *fallbacks))
