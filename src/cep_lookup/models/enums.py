"""Provider and lookup-status enumerations."""

from __future__ import annotations

from enum import Enum


class Provider(str, Enum):
    """Known CEP lookup providers.

    The set is closed: supporting another provider means adding a member
    here, a payload schema, and an endpoint template.
    """

    VIACEP = "ViaCEP"
    BRASILAPI = "BrasilAPI"

    @classmethod
    def from_name(cls, name: str) -> Provider:
        """Look up a provider by value or member name, case-insensitively.

        Raises:
            ValueError: If no provider matches.
        """
        wanted = name.strip().lower()
        for provider in cls:
            if wanted in (provider.value.lower(), provider.name.lower()):
                return provider
        available = ", ".join(p.value for p in cls)
        raise ValueError(f"Unknown provider: {name}. Available providers: {available}")


class LookupStatus(str, Enum):
    """Terminal state of one lookup."""

    RESOLVED = "resolved"
    TIMED_OUT = "timed_out"
    FAILED = "failed"


# All providers, in the order their fetches are started
ALL_PROVIDERS: tuple[Provider, ...] = tuple(Provider)
