from __future__ import annotations

import asyncio
from collections.abc import Iterable

import httpx

from cep_lookup.config import LookupSettings
from cep_lookup.core.errors import AllProvidersFailedError, LookupTimeoutError
from cep_lookup.core.postal_code import validate_cep
from cep_lookup.models import Address, LookupResult, LookupStatus, Provider
from cep_lookup.race import resolve


class CepLookupService:
    """High-level facade for CEP lookups.

    Validates the input, then races the configured providers. Invalid input
    raises before any request is made.

    Example:
        >>> service = CepLookupService()
        >>> address = service.lookup("89010-904")
        >>> print(address.city)  # "Blumenau"

        # Inspect the outcome instead of raising
        >>> result = service.resolve("89010-904", timeout=0.5)
        >>> result.status, result.provider
    """

    def __init__(
        self,
        settings: LookupSettings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the lookup service.

        Args:
            settings: Timeout, providers and endpoints. Defaults to
                ``LookupSettings()`` (read from the environment).
            transport: Optional httpx transport, e.g. ``httpx.MockTransport``
                in tests.
        """
        self.settings = settings or LookupSettings()
        self._transport = transport
        self._endpoints = self.settings.endpoints()

    def _client(self, timeout: float) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=timeout,
            transport=self._transport,
            headers={"User-Agent": self.settings.user_agent},
        )

    async def aresolve(
        self,
        cep: str,
        *,
        timeout: float | None = None,
        providers: Iterable[Provider] | None = None,
    ) -> LookupResult:
        """Validate ``cep`` and race the providers for it.

        Args:
            cep: Raw CEP, with or without hyphen.
            timeout: Overrides the configured deadline (seconds).
            providers: Overrides the configured providers.

        Returns:
            LookupResult describing the terminal outcome.

        Raises:
            CepValidationError: If ``cep`` is malformed.
        """
        postal_code = validate_cep(cep)
        effective_timeout = timeout if timeout is not None else self.settings.timeout
        selected = tuple(providers) if providers is not None else self.settings.providers

        async with self._client(effective_timeout) as client:
            return await resolve(
                postal_code,
                selected,
                effective_timeout,
                client=client,
                endpoints=self._endpoints,
            )

    async def alookup(
        self,
        cep: str,
        *,
        timeout: float | None = None,
        providers: Iterable[Provider] | None = None,
    ) -> Address:
        """Like :meth:`aresolve`, but return the Address or raise.

        Raises:
            CepValidationError: If ``cep`` is malformed.
            LookupTimeoutError: If no provider answered in time.
            AllProvidersFailedError: If every provider failed.
        """
        result = await self.aresolve(cep, timeout=timeout, providers=providers)
        return unwrap(result)

    def resolve(
        self,
        cep: str,
        *,
        timeout: float | None = None,
        providers: Iterable[Provider] | None = None,
    ) -> LookupResult:
        """Synchronous :meth:`aresolve`. Must not be called from a running event loop."""
        return asyncio.run(self.aresolve(cep, timeout=timeout, providers=providers))

    def lookup(
        self,
        cep: str,
        *,
        timeout: float | None = None,
        providers: Iterable[Provider] | None = None,
    ) -> Address:
        """Synchronous :meth:`alookup`. Must not be called from a running event loop."""
        return asyncio.run(self.alookup(cep, timeout=timeout, providers=providers))


def unwrap(result: LookupResult) -> Address:
    """Return the resolved Address or raise the error for the terminal state."""
    if result.status is LookupStatus.RESOLVED and result.address is not None:
        return result.address
    if result.status is LookupStatus.TIMED_OUT:
        raise LookupTimeoutError.for_lookup(result.postal_code, result.timeout or 0.0)
    raise AllProvidersFailedError.for_lookup(result.postal_code, result.failed_providers)


_default_service: CepLookupService | None = None


def get_default_service() -> CepLookupService:
    """Get the shared CepLookupService, creating it on first use."""
    global _default_service
    if _default_service is None:
        _default_service = CepLookupService()
    return _default_service


def lookup(cep: str, *, timeout: float | None = None) -> Address:
    """Resolve ``cep`` with the default service. See :meth:`CepLookupService.lookup`."""
    return get_default_service().lookup(cep, timeout=timeout)


async def alookup(cep: str, *, timeout: float | None = None) -> Address:
    """Async :func:`lookup`."""
    return await get_default_service().alookup(cep, timeout=timeout)
