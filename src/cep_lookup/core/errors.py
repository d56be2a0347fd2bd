"""Error classes for CEP lookups.

Every error carries the package name in its context so callers mixing
several libraries can tell where a failure came from. Per-provider errors
(transport, HTTP status, parse) are absorbed by the race coordinator and
only the terminal errors reach the caller.
"""

from __future__ import annotations

from typing import Any

from pydantic_core import PydanticCustomError

# Package identifier for error context
PACKAGE_NAME = "cep_lookup"


def _context(**extra: Any) -> dict[str, Any]:
    return {"package": PACKAGE_NAME, **extra}


class CepLookupError(PydanticCustomError):
    """Base error for cep_lookup.

    Inherits from PydanticCustomError so errors raised while decoding
    provider payloads keep Pydantic's ``type`` / ``message()`` / ``context``
    interface.
    """


class CepValidationError(CepLookupError):
    """The raw input is not a well-formed CEP. Raised before any network call."""

    @classmethod
    def for_input(cls, raw: object) -> CepValidationError:
        return cls(
            "invalid_cep",
            "Invalid CEP: {cep} (expected 8 digits, optionally hyphenated)",
            _context(cep=raw),
        )


class TransportError(CepLookupError):
    """The request to one provider failed below the HTTP layer."""

    @classmethod
    def from_exception(cls, provider: str, error: Exception) -> TransportError:
        return cls(
            "transport_error",
            "{provider} request failed: {detail}",
            _context(provider=provider, detail=str(error) or type(error).__name__),
        )


class ProviderHTTPError(TransportError):
    """A provider answered with a non-success status code."""

    @classmethod
    def for_status(cls, provider: str, status: int) -> ProviderHTTPError:
        return cls(
            "provider_http_error",
            "{provider} returned HTTP {status}",
            _context(provider=provider, status=status),
        )


class CepParseError(CepLookupError):
    """A provider payload could not be decoded into an address."""

    @classmethod
    def from_validation_error(cls, provider: str, error: Exception) -> CepParseError:
        """Wrap a pydantic.ValidationError raised while decoding a payload."""
        from pydantic import ValidationError

        if isinstance(error, ValidationError):
            detail = "; ".join(e.get("msg", str(e)) for e in error.errors())
        else:
            detail = str(error)
        return cls(
            "parse_error",
            "Could not parse {provider} response: {detail}",
            _context(provider=provider, detail=detail),
        )

    @classmethod
    def not_found(cls, provider: str) -> CepParseError:
        return cls(
            "provider_not_found",
            "{provider} has no address for this CEP",
            _context(provider=provider),
        )


class UnknownProviderError(CepLookupError):
    """The provider tag is not one of the known providers."""

    @classmethod
    def for_provider(cls, provider: object) -> UnknownProviderError:
        return cls(
            "unknown_provider",
            "Unknown provider: {provider}",
            _context(provider=str(provider)),
        )


class LookupTimeoutError(CepLookupError):
    """No provider produced an address before the deadline."""

    @classmethod
    def for_lookup(cls, cep: str, timeout: float) -> LookupTimeoutError:
        return cls(
            "lookup_timeout",
            "No provider answered for CEP {cep} within {timeout}s",
            _context(cep=cep, timeout=timeout),
        )


class AllProvidersFailedError(CepLookupError):
    """Every provider finished without a usable address."""

    @classmethod
    def for_lookup(cls, cep: str, providers: list[str]) -> AllProvidersFailedError:
        return cls(
            "all_providers_failed",
            "No provider returned a usable address for CEP {cep}",
            _context(cep=cep, providers=providers),
        )
