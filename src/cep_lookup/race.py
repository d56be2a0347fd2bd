"""Race the configured providers for one CEP.

One fetch task is started per provider. Tasks report through a single
queue, and the coordinator consumes completions in arrival order: errors
and unparseable payloads are recorded and skipped, and the first payload
that normalizes into an Address wins. One deadline bounds the whole
lookup. Whatever the outcome, every task still running is cancelled and
awaited before :func:`resolve` returns.

The winning provider depends on network timing, so two runs for the same
CEP may be answered by different providers.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable, Mapping

import httpx

from cep_lookup.core.errors import CepLookupError, TransportError
from cep_lookup.core.postal_code import PostalCode
from cep_lookup.models.enums import ALL_PROVIDERS, LookupStatus, Provider
from cep_lookup.models.results import LookupResult, RawProviderResponse
from cep_lookup.providers.endpoints import ProviderEndpoint, select_endpoints
from cep_lookup.providers.fetcher import fetch_provider
from cep_lookup.providers.normalizer import normalize

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 1.0


async def _fetch_into(
    completions: asyncio.Queue[RawProviderResponse],
    client: httpx.AsyncClient,
    postal_code: PostalCode,
    endpoint: ProviderEndpoint,
) -> None:
    try:
        raw = await fetch_provider(client, postal_code, endpoint)
    except Exception as exc:
        # Every task must report, or the coordinator waits for the deadline
        logger.exception(
            "Unexpected error fetching %s from %s", postal_code, endpoint.provider.value
        )
        raw = RawProviderResponse(
            endpoint.provider,
            error=TransportError.from_exception(endpoint.provider.value, exc),
        )
    completions.put_nowait(raw)


async def _first_address(
    completions: asyncio.Queue[RawProviderResponse],
    pending: int,
    deadline: float,
    result: LookupResult,
) -> LookupStatus:
    loop = asyncio.get_running_loop()
    while pending:
        remaining = deadline - loop.time()
        if remaining <= 0:
            return LookupStatus.TIMED_OUT
        try:
            raw = await asyncio.wait_for(completions.get(), remaining)
        except asyncio.TimeoutError:
            return LookupStatus.TIMED_OUT
        pending -= 1

        try:
            address = normalize(raw)
        except CepLookupError as exc:
            logger.debug("Discarding %s response: %s", raw.provider.value, exc)
            result.add_provider_error(raw.provider, exc)
            continue

        result.address = address
        result.provider = raw.provider
        return LookupStatus.RESOLVED

    return LookupStatus.FAILED


async def _cancel_all(tasks: list[asyncio.Task[None]]) -> None:
    for task in tasks:
        task.cancel()
    await asyncio.gather(*tasks, return_exceptions=True)


async def resolve(
    postal_code: PostalCode,
    providers: Iterable[Provider] = ALL_PROVIDERS,
    timeout: float = DEFAULT_TIMEOUT,
    *,
    client: httpx.AsyncClient | None = None,
    endpoints: Mapping[Provider, ProviderEndpoint] | None = None,
) -> LookupResult:
    """Race ``providers`` for ``postal_code`` and keep the first usable answer.

    Args:
        postal_code: Validated CEP.
        providers: Providers to query. Duplicates are ignored.
        timeout: Overall deadline in seconds.
        client: HTTP client to use. When omitted a client is created for
            this lookup and closed before returning.
        endpoints: Endpoint table. Defaults to the public provider URLs.

    Returns:
        LookupResult whose status is RESOLVED (address and provider set),
        TIMED_OUT, or FAILED (every provider answered without a usable
        address).

    Raises:
        ValueError: If ``timeout`` is not positive or a provider has no endpoint.
    """
    if timeout <= 0:
        raise ValueError(f"timeout must be positive, got {timeout}")

    selected = select_endpoints(providers, endpoints)
    result = LookupResult(postal_code=postal_code.digits, timeout=timeout)
    loop = asyncio.get_running_loop()
    started = loop.time()

    if not selected:
        logger.warning("No providers configured for CEP %s", postal_code)
        result.elapsed = 0.0
        return result

    owns_client = client is None
    http = client if client is not None else httpx.AsyncClient(timeout=timeout)
    completions: asyncio.Queue[RawProviderResponse] = asyncio.Queue()
    tasks = [
        asyncio.create_task(
            _fetch_into(completions, http, postal_code, endpoint),
            name=f"cep-fetch-{endpoint.provider.value}",
        )
        for endpoint in selected
    ]

    try:
        result.status = await _first_address(completions, len(tasks), started + timeout, result)
    finally:
        await _cancel_all(tasks)
        if owns_client:
            await http.aclose()
        result.elapsed = loop.time() - started

    if result.status is LookupStatus.RESOLVED:
        logger.info(
            "CEP %s resolved by %s in %.3fs",
            postal_code,
            result.provider.value if result.provider else "?",
            result.elapsed,
        )
    elif result.status is LookupStatus.TIMED_OUT:
        logger.info("CEP %s timed out after %.3fs", postal_code, timeout)
    else:
        logger.warning(
            "CEP %s: no usable answer from %s",
            postal_code,
            ", ".join(result.failed_providers),
        )
    return result
