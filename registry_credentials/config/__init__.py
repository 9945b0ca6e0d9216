"""Configuration for registry credential stores.

Key Components:
    - ConfigFile: docker-style config.json with credsStore/credHelpers/auths
    - StoreOptions: Options recognized by new_store()
    - CredentialSettings: REGCRED_* environment settings for the CLI

Example:
    >>> from registry_credentials.config import ConfigFile
    >>> config = ConfigFile.load("config.json")
    >>> config.credentials_store()
    'osxkeychain'
"""

from registry_credentials.config.config_file import ConfigFile
from registry_credentials.config.settings import CredentialSettings, StoreOptions

__all__ = ["ConfigFile", "CredentialSettings", "StoreOptions"]
