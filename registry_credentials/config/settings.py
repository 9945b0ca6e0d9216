"""
Configuration system using Pydantic for type-safe settings management.

This module provides the options recognized by the credential stores and the
process-level settings read from the environment by the CLI.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class StoreOptions(BaseModel):
    """Options for new_store().

    allow_plaintext_put controls what happens when no native credential
    helper is resolvable for a registry:
      - False (default): put() raises PlaintextPutDisabledError.
      - True: put() saves the credential in plaintext in the config file.
    """

    model_config = ConfigDict(frozen=True)

    allow_plaintext_put: bool = Field(
        default=False,
        description="Allow saving credentials in plaintext in the config file",
    )


class CredentialSettings(BaseSettings):
    """Process-level settings, read from REGCRED_* environment variables.

    Example:
        >>> # REGCRED_ALLOW_PLAINTEXT_PUT=true regcred store ...
        >>> settings = CredentialSettings()
        >>> options = settings.to_store_options()
    """

    model_config = SettingsConfigDict(
        env_prefix="REGCRED_",
        case_sensitive=False,
    )

    config_path: Path | None = Field(
        default=None,
        description="Path to config.json (default: $DOCKER_CONFIG/config.json or ~/.docker/config.json)",
    )
    allow_plaintext_put: bool = Field(default=False, description="Allow plaintext credential storage")
    helper_timeout: float = Field(default=30.0, gt=0, description="Seconds to wait for a credential helper")
    log_level: str = Field(default="WARNING", description="Minimum log level")

    def to_store_options(self) -> StoreOptions:
        """Build StoreOptions from these settings."""
        return StoreOptions(allow_plaintext_put=self.allow_plaintext_put)
