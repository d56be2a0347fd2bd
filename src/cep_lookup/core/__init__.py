"""Core utilities: CEP validation and the error taxonomy.

Usage:
    from cep_lookup.core import (
        PostalCode,
        validate_cep,
        CepValidationError,
    )
"""

from __future__ import annotations

from cep_lookup.core.errors import (
    PACKAGE_NAME,
    AllProvidersFailedError,
    CepLookupError,
    CepParseError,
    CepValidationError,
    LookupTimeoutError,
    ProviderHTTPError,
    TransportError,
    UnknownProviderError,
)
from cep_lookup.core.postal_code import (
    CEP_LENGTH,
    PostalCode,
    clean_cep,
    is_valid_cep,
    validate_cep,
)

__all__ = [
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
    # CEP validation
    "CEP_LENGTH",
    "PostalCode",
    "clean_cep",
    "is_valid_cep",
    "validate_cep",
]
