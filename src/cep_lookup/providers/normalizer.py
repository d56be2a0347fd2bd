"""Normalize raw provider responses into the canonical Address.

Each provider names its fields differently (ViaCEP: logradouro, localidade,
uf, cep; BrasilAPI: street, city, state, cep). Dispatch is over the closed
set of :class:`~cep_lookup.models.enums.Provider` members; an unknown tag is
an error, not a fallback.
"""

from __future__ import annotations

import logging

from pydantic import ValidationError

from cep_lookup.core.errors import CepParseError, UnknownProviderError
from cep_lookup.models.address import (
    Address,
    BrasilApiPayload,
    ProviderPayload,
    ViaCepPayload,
)
from cep_lookup.models.enums import Provider
from cep_lookup.models.results import RawProviderResponse

logger = logging.getLogger(__name__)

PAYLOAD_SCHEMAS: dict[Provider, type[ProviderPayload]] = {
    Provider.VIACEP: ViaCepPayload,
    Provider.BRASILAPI: BrasilApiPayload,
}


def _provider_of(raw: RawProviderResponse) -> Provider:
    try:
        return Provider(raw.provider)
    except ValueError as exc:
        raise UnknownProviderError.for_provider(raw.provider) from exc


def normalize(raw: RawProviderResponse) -> Address:
    """Decode one provider response into an Address.

    Args:
        raw: Response produced by a fetch.

    Returns:
        The canonical Address. Fields the provider omitted are empty strings.

    Raises:
        UnknownProviderError: If ``raw.provider`` is not a known provider.
        CepParseError: If the body is not a JSON object with string fields,
            or the provider reported that the CEP does not exist.
        CepLookupError: The error carried by ``raw``, if any.
    """
    if raw.error is not None:
        raise raw.error

    provider = _provider_of(raw)
    schema = PAYLOAD_SCHEMAS.get(provider)
    if schema is None:
        raise UnknownProviderError.for_provider(provider.value)

    try:
        payload = schema.model_validate_json(raw.body)
    except ValidationError as exc:
        raise CepParseError.from_validation_error(provider.value, exc) from exc

    if payload.is_not_found():
        raise CepParseError.not_found(provider.value)

    address = payload.to_address()
    logger.debug("Normalized %s response into %s", provider.value, address)
    return address
