"""Native credential store using docker-credential-* helper programs.

Platform Support:
- Linux: docker-credential-pass, docker-credential-secretservice
- macOS: docker-credential-osxkeychain
- Windows: docker-credential-wincred
- Any other helper following the same protocol (e.g., ecr-login)

Protocol (one process per operation, payload on stdin):
- get:   stdin = server address, stdout = {"ServerURL", "Username", "Secret"}
- store: stdin = {"ServerURL", "Username", "Secret"}
- erase: stdin = server address
"""

import json
import logging
import subprocess

from registry_credentials.exceptions import (
    BackendNotAvailableError,
    CredentialFormatError,
    NativeHelperError,
)
from registry_credentials.models.credential import EMPTY_CREDENTIAL, Credential

logger = logging.getLogger(__name__)

HELPER_PREFIX = "docker-credential-"

# Username a helper reports when the secret is an identity token
TOKEN_USERNAME = "<token>"

# Output of a helper when nothing is stored for the address
ERR_CREDENTIALS_NOT_FOUND = "credentials not found in native keychain"

DEFAULT_TIMEOUT = 30.0


class NativeStore:
    """Credential storage delegated to an OS-level helper program.

    Example:
        >>> store = NativeStore("osxkeychain")
        >>> store.put("registry.example.com", Credential(username="u", password="p"))
        >>> cred = store.get("registry.example.com")
        >>> store.delete("registry.example.com")
    """

    def __init__(self, helper_suffix: str, timeout: float | None = DEFAULT_TIMEOUT) -> None:
        """Initialize native store.

        Args:
            helper_suffix: Helper name without prefix (e.g., 'pass')
            timeout: Seconds to wait for the helper (None waits forever)
        """
        self.helper_suffix = helper_suffix
        self.timeout = timeout

    @property
    def name(self) -> str:
        """Backend identifier (e.g., 'native:osxkeychain')."""
        return f"native:{self.helper_suffix}"

    @property
    def program(self) -> str:
        """Executable name of the helper."""
        return HELPER_PREFIX + self.helper_suffix

    def get(self, server_address: str) -> Credential:
        """Retrieve credentials from the helper.

        Returns:
            Stored credential or EMPTY_CREDENTIAL if the helper has none

        Raises:
            BackendNotAvailableError: If the helper program is not installed
            NativeHelperError: If the helper fails
            CredentialFormatError: If the helper output is not valid JSON
        """
        try:
            output = self._execute("get", server_address, server_address)
        except NativeHelperError as e:
            if e.output and ERR_CREDENTIALS_NOT_FOUND in e.output:
                return EMPTY_CREDENTIAL
            raise

        try:
            payload = json.loads(output)
        except json.JSONDecodeError as e:
            raise CredentialFormatError(
                f"Credential helper {self.program} returned invalid JSON",
                reference=server_address,
            ) from e

        if not isinstance(payload, dict):
            raise CredentialFormatError(
                f"Credential helper {self.program} returned a non-object JSON payload",
                reference=server_address,
            )

        username = payload.get("Username") or ""
        secret = payload.get("Secret") or ""
        logger.debug(f"Retrieved credential from {self.program}: {server_address}")

        if username == TOKEN_USERNAME:
            return Credential(refresh_token=secret)
        return Credential(username=username, password=secret)

    def put(self, server_address: str, cred: Credential) -> None:
        """Store credentials with the helper.

        Identity tokens are stored under the "<token>" username.

        Raises:
            BackendNotAvailableError: If the helper program is not installed
            NativeHelperError: If the helper fails
        """
        if cred.refresh_token:
            payload = {"ServerURL": server_address, "Username": TOKEN_USERNAME, "Secret": cred.refresh_token}
        else:
            payload = {"ServerURL": server_address, "Username": cred.username, "Secret": cred.password}

        self._execute("store", json.dumps(payload), server_address)
        logger.info(f"Stored credential with {self.program}: {server_address}")

    def delete(self, server_address: str) -> None:
        """Erase credentials from the helper.

        Raises:
            BackendNotAvailableError: If the helper program is not installed
            NativeHelperError: If the helper fails
        """
        self._execute("erase", server_address, server_address)
        logger.info(f"Deleted credential with {self.program}: {server_address}")

    def _execute(self, action: str, stdin: str, server_address: str) -> str:
        """Run the helper with an action and return its stdout.

        Raises:
            BackendNotAvailableError: If the helper program is not installed
            NativeHelperError: On timeout or non-zero exit
        """
        try:
            result = subprocess.run(  # nosec B603 # helper name comes from config, no shell
                [self.program, action],
                input=stdin,
                capture_output=True,
                text=True,
                timeout=self.timeout,
                check=False,
            )
        except FileNotFoundError as e:
            raise BackendNotAvailableError(
                f"Credential helper not found: {self.program}",
                reference=server_address,
                suggestion=f"Install {self.program} and make sure it is on PATH",
            ) from e
        except subprocess.TimeoutExpired as e:
            raise NativeHelperError(
                f"Credential helper {self.program} timed out after {self.timeout}s",
                reference=server_address,
            ) from e
        except OSError as e:
            raise NativeHelperError(
                f"Failed to run credential helper {self.program}: {e}",
                reference=server_address,
            ) from e

        if result.returncode != 0:
            output = (result.stdout or result.stderr or "").strip()
            raise NativeHelperError(
                f"Credential helper {self.program} {action} failed: {output or f'exit status {result.returncode}'}",
                reference=server_address,
                output=output,
            )

        return result.stdout
