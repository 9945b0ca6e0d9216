"""Value types shared by the credential stores.

Key Models:
    - Credential: Username/password pair or identity token
    - EMPTY_CREDENTIAL: Sentinel meaning "nothing stored"

Example:
    >>> from registry_credentials.models import Credential, EMPTY_CREDENTIAL
    >>> cred = Credential(username="alice", password="s3cret")
    >>> cred == EMPTY_CREDENTIAL
    False
"""

from registry_credentials.models.credential import EMPTY_CREDENTIAL, Credential

__all__ = ["Credential", "EMPTY_CREDENTIAL"]
