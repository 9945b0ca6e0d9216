"""Credential value type shared by all stores."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Credential:
    """Credential for authenticating to a registry.

    Either a username/password pair or an identity token. An access token
    may accompany either form. Instances are immutable and compare by value,
    so ``cred == EMPTY_CREDENTIAL`` tests for absence.

    Attributes:
        username: Principal name
        password: Secret for ``username``
        refresh_token: Identity token used to obtain access tokens
        access_token: Bearer token for direct registry access
    """

    username: str = ""
    password: str = ""
    refresh_token: str = ""
    access_token: str = ""

    @property
    def is_empty(self) -> bool:
        """True if this is the empty credential."""
        return self == EMPTY_CREDENTIAL

    def __repr__(self) -> str:
        # Secrets never end up in logs or tracebacks
        return (
            f"Credential(username={self.username!r}, "
            f"password={'***' if self.password else ''!r}, "
            f"refresh_token={'***' if self.refresh_token else ''!r}, "
            f"access_token={'***' if self.access_token else ''!r})"
        )


EMPTY_CREDENTIAL = Credential()
