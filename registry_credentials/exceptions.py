"""Custom exception hierarchy for registry-credentials.

This module defines a structured exception hierarchy so callers can tell
apart configuration problems, missing or malformed credentials, and failures
of the underlying storage backends.

Exception Hierarchy:
    RegistryCredentialsError (base)
    ├── ConfigurationError
    └── CredentialError
        ├── CredentialNotFoundError
        ├── CredentialFormatError
        ├── BackendNotAvailableError
        ├── PlaintextPutDisabledError
        ├── NativeHelperError
        └── CredentialsStorePersistError

Example Usage:
    >>> from registry_credentials.exceptions import ConfigurationError
    >>> try:
    ...     ConfigFile.load(path)
    ... except json.JSONDecodeError as e:
    ...     raise ConfigurationError(f"Invalid config file: {path}") from e
"""


class RegistryCredentialsError(Exception):
    """Base exception for all registry-credentials errors.

    Attributes:
        message: Human-readable error description
    """

    def __init__(self, message: str) -> None:
        """Initialize exception.

        Args:
            message: Error message
        """
        self.message = message
        super().__init__(message)


class ConfigurationError(RegistryCredentialsError):
    """Configuration-related errors.

    Raised when the credentials configuration document cannot be read,
    parsed, or written back.

    Examples:
        - Invalid JSON syntax in config.json
        - Config document is not a JSON object
        - Config file cannot be saved
        - Home directory cannot be determined
    """

    pass


class CredentialError(RegistryCredentialsError):
    """Credential-related errors.

    This is the base class for every failure raised by a credential store.
    Subclasses:
    - CredentialNotFoundError: Nothing stored for the server address
    - CredentialFormatError: Stored or supplied credential is malformed
    - BackendNotAvailableError: Storage backend unavailable
    - PlaintextPutDisabledError: Plaintext write refused
    - NativeHelperError: Credential helper program failed
    - CredentialsStorePersistError: Detected default could not be saved

    Attributes:
        message: Human-readable error description
        reference: The server address the operation was about
        suggestion: Optional suggestion for resolution
    """

    def __init__(
        self,
        message: str,
        reference: str | None = None,
        suggestion: str | None = None,
    ) -> None:
        """Initialize exception.

        Args:
            message: Error message
            reference: The server address the operation was about
            suggestion: Optional suggestion for resolution
        """
        self.reference = reference
        self.suggestion = suggestion

        full_message = message
        if reference:
            full_message = f"{message} (reference: {reference})"
        if suggestion:
            full_message = f"{full_message}\nSuggestion: {suggestion}"

        super().__init__(full_message)
        # Preserve original message (super sets self.message to full_message)
        self.message = message


class CredentialNotFoundError(CredentialError):
    """No credential exists for the server address."""

    pass


class CredentialFormatError(CredentialError):
    """Credential has an invalid format."""

    pass


class BackendNotAvailableError(CredentialError):
    """Requested backend is not available on this system."""

    pass


class PlaintextPutDisabledError(CredentialError):
    """Saving credentials in plaintext is not allowed.

    Raised by the file store when no native credential helper is
    configured and plaintext writes were not explicitly allowed.
    """

    def __init__(self, reference: str | None = None) -> None:
        super().__init__(
            "Putting plaintext credentials is disabled",
            reference=reference,
            suggestion=(
                "Configure a credential helper (credsStore / credHelpers) "
                "or allow plaintext storage with --allow-plaintext-put"
            ),
        )


class NativeHelperError(CredentialError):
    """A docker-credential-* helper program failed.

    Attributes:
        output: Combined output reported by the helper, if any
    """

    def __init__(
        self,
        message: str,
        reference: str | None = None,
        suggestion: str | None = None,
        output: str | None = None,
    ) -> None:
        """Initialize exception.

        Args:
            message: Error message
            reference: The server address the operation was about
            suggestion: Optional suggestion for resolution
            output: Output reported by the helper program
        """
        super().__init__(message, reference=reference, suggestion=suggestion)
        self.output = output


class CredentialsStorePersistError(CredentialError):
    """The detected default credentials store could not be saved.

    The credential itself was stored successfully; only writing the
    ``credsStore`` entry back to the config document failed.
    """

    pass
