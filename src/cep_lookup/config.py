"""Lookup settings with environment-variable defaults.

Every field can be passed explicitly; when omitted it is read from the
environment at construction time:

- ``CEP_LOOKUP_TIMEOUT``: overall deadline in seconds (default ``1.0``)
- ``CEP_LOOKUP_PROVIDERS``: comma-separated provider names (default: all)
- ``CEP_LOOKUP_VIACEP_URL`` / ``CEP_LOOKUP_BRASILAPI_URL``: URL templates
  containing ``{cep}``
- ``CEP_LOOKUP_USER_AGENT``: User-Agent header sent to providers
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from cep_lookup.models.enums import ALL_PROVIDERS, Provider
from cep_lookup.providers.endpoints import (
    BRASILAPI_URL,
    VIACEP_URL,
    ProviderEndpoint,
    default_endpoints,
)
from cep_lookup.race import DEFAULT_TIMEOUT

DEFAULT_USER_AGENT = "cep-lookup"


def _env_timeout() -> float:
    value = os.getenv("CEP_LOOKUP_TIMEOUT")
    if not value:
        return DEFAULT_TIMEOUT
    try:
        return float(value)
    except ValueError as exc:
        raise ValueError(f"CEP_LOOKUP_TIMEOUT must be a number of seconds: {value!r}") from exc


def parse_providers(value: str) -> tuple[Provider, ...]:
    """Parse a comma-separated provider list such as ``"viacep,BrasilAPI"``."""
    names = [part for part in (p.strip() for p in value.split(",")) if part]
    return tuple(dict.fromkeys(Provider.from_name(name) for name in names))


def _env_providers() -> tuple[Provider, ...]:
    value = os.getenv("CEP_LOOKUP_PROVIDERS")
    if not value:
        return ALL_PROVIDERS
    return parse_providers(value)


@dataclass
class LookupSettings:
    """Configuration for :class:`~cep_lookup.service.CepLookupService`."""

    timeout: float = field(default_factory=_env_timeout)
    providers: tuple[Provider, ...] = field(default_factory=_env_providers)
    viacep_url: str = field(default_factory=lambda: os.getenv("CEP_LOOKUP_VIACEP_URL", VIACEP_URL))
    brasilapi_url: str = field(
        default_factory=lambda: os.getenv("CEP_LOOKUP_BRASILAPI_URL", BRASILAPI_URL)
    )
    user_agent: str = field(
        default_factory=lambda: os.getenv("CEP_LOOKUP_USER_AGENT", DEFAULT_USER_AGENT)
    )

    def __post_init__(self) -> None:
        if self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")
        self.providers = tuple(self.providers)

    def endpoints(self) -> dict[Provider, ProviderEndpoint]:
        """Endpoint table built from the configured URL templates."""
        return default_endpoints(viacep_url=self.viacep_url, brasilapi_url=self.brasilapi_url)
