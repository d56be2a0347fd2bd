"""Fetch one CEP from one provider.

A fetch issues exactly one GET and never parses the body; it hands the raw
bytes (or the error that replaced them) to the race coordinator. Failures
are returned, not raised, so one provider cannot abort the race.
Cancellation is the exception: it propagates so the in-flight request is
torn down with the task.
"""

from __future__ import annotations

import asyncio
import logging

import httpx

from cep_lookup.core.errors import ProviderHTTPError, TransportError
from cep_lookup.core.postal_code import PostalCode
from cep_lookup.models.results import RawProviderResponse
from cep_lookup.providers.endpoints import ProviderEndpoint

logger = logging.getLogger(__name__)


async def fetch_provider(
    client: httpx.AsyncClient,
    postal_code: PostalCode,
    endpoint: ProviderEndpoint,
) -> RawProviderResponse:
    """Request ``postal_code`` from one provider.

    Args:
        client: Shared async HTTP client.
        postal_code: Validated CEP.
        endpoint: Provider endpoint to query.

    Returns:
        RawProviderResponse holding the body on a 2xx answer, otherwise a
        ProviderHTTPError or TransportError.

    Raises:
        asyncio.CancelledError: If the surrounding task is cancelled.
    """
    provider = endpoint.provider
    url = endpoint.build_url(postal_code)
    logger.debug("Requesting %s from %s: %s", postal_code, provider.value, url)

    try:
        response = await client.get(url)
    except asyncio.CancelledError:
        logger.debug("Abandoned %s request for %s", provider.value, postal_code)
        raise
    except httpx.HTTPError as exc:
        logger.debug("%s request for %s failed: %s", provider.value, postal_code, exc)
        return RawProviderResponse(
            provider,
            error=TransportError.from_exception(provider.value, exc),
        )

    if not response.is_success:
        logger.debug(
            "%s answered HTTP %s for %s", provider.value, response.status_code, postal_code
        )
        return RawProviderResponse(
            provider,
            status_code=response.status_code,
            error=ProviderHTTPError.for_status(provider.value, response.status_code),
        )

    return RawProviderResponse(provider, body=response.content, status_code=response.status_code)
