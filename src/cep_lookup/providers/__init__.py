from __future__ import annotations

from cep_lookup.providers.endpoints import (
    BRASILAPI_URL,
    VIACEP_URL,
    ProviderEndpoint,
    default_endpoints,
    select_endpoints,
)
from cep_lookup.providers.fetcher import fetch_provider
from cep_lookup.providers.normalizer import PAYLOAD_SCHEMAS, normalize

__all__ = [
    "BRASILAPI_URL",
    "VIACEP_URL",
    "ProviderEndpoint",
    "default_endpoints",
    "select_endpoints",
    "fetch_provider",
    "PAYLOAD_SCHEMAS",
    "normalize",
]
