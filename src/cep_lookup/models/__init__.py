"""Lookup models package.

Re-exports the canonical Address, provider payload schemas, enums and
result classes.
"""

from __future__ import annotations

from cep_lookup.models.address import (
    Address,
    BrasilApiPayload,
    ProviderPayload,
    ViaCepPayload,
)
from cep_lookup.models.enums import ALL_PROVIDERS, LookupStatus, Provider
from cep_lookup.models.results import LookupResult, RawProviderResponse

__all__ = [
    # Enums and constants
    "ALL_PROVIDERS",
    "LookupStatus",
    "Provider",
    # Address models
    "Address",
    "ProviderPayload",
    "ViaCepPayload",
    "BrasilApiPayload",
    # Results
    "LookupResult",
    "RawProviderResponse",
]
