"""cep-lookup: resolve Brazilian CEPs by racing several lookup providers.

Every configured provider (ViaCEP, BrasilAPI) is queried concurrently and
the first response that decodes into an address wins; the other requests
are cancelled. One timeout bounds the whole lookup.

Quick Start:
    >>> from cep_lookup import lookup
    >>> address = lookup("89010-904")
    >>> print(address.city)

    # Inspect the outcome instead of raising
    >>> from cep_lookup import CepLookupService
    >>> result = CepLookupService().resolve("89010-904", timeout=0.5)
    >>> if result.is_resolved:
    ...     print(result.provider, result.address)
    ... else:
    ...     print(result.status, result.failed_providers)

    # From async code
    >>> from cep_lookup import alookup
    >>> address = await alookup("89010904")
"""

from __future__ import annotations

from cep_lookup.config import LookupSettings
from cep_lookup.core import (
    PACKAGE_NAME,
    AllProvidersFailedError,
    CepLookupError,
    CepParseError,
    CepValidationError,
    LookupTimeoutError,
    PostalCode,
    ProviderHTTPError,
    TransportError,
    UnknownProviderError,
    is_valid_cep,
    validate_cep,
)
from cep_lookup.models import (
    ALL_PROVIDERS,
    Address,
    LookupResult,
    LookupStatus,
    Provider,
    RawProviderResponse,
)
from cep_lookup.providers import ProviderEndpoint, default_endpoints, fetch_provider, normalize
from cep_lookup.race import DEFAULT_TIMEOUT, resolve
from cep_lookup.service import (
    CepLookupService,
    alookup,
    get_default_service,
    lookup,
    unwrap,
)

__version__ = "0.1.0"
__package_name__ = "cep-lookup"

__all__ = [
    # Version
    "__version__",
    # Primary interface
    "CepLookupService",
    "get_default_service",
    "lookup",
    "alookup",
    "unwrap",
    "LookupSettings",
    # Building blocks
    "validate_cep",
    "is_valid_cep",
    "fetch_provider",
    "normalize",
    "resolve",
    "DEFAULT_TIMEOUT",
    "ProviderEndpoint",
    "default_endpoints",
    # Models
    "Address",
    "PostalCode",
    "Provider",
    "ALL_PROVIDERS",
    "LookupStatus",
    "LookupResult",
    "RawProviderResponse",
    # Errors
    "PACKAGE_NAME",
    "CepLookupError",
    "CepValidationError",
    "TransportError",
    "ProviderHTTPError",
    "CepParseError",
    "UnknownProviderError",
    "LookupTimeoutError",
    "AllProvidersFailedError",
]
