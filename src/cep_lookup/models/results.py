"""Result classes for CEP lookups.

RawProviderResponse is the hand-off between one fetch task and the race
coordinator. LookupResult is the terminal outcome of a whole lookup.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from abstract_validation_base import ProcessEntry, ProcessLog

from cep_lookup.models.address import Address
from cep_lookup.models.enums import LookupStatus, Provider


@dataclass(frozen=True)
class RawProviderResponse:
    """Raw body of one provider response, or the error that replaced it.

    Produced by exactly one fetch and consumed once by the coordinator.
    """

    provider: Provider
    body: bytes = b""
    status_code: int | None = None
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class LookupResult:
    """Outcome of racing the providers for one CEP.

    Which provider resolves a lookup depends on network timing and differs
    between runs; any configured provider is an acceptable source.
    """

    postal_code: str
    status: LookupStatus = LookupStatus.FAILED
    address: Address | None = None
    provider: Provider | None = None
    timeout: float | None = None
    elapsed: float | None = None
    # Provider failures absorbed during the race
    process_log: ProcessLog = field(default_factory=ProcessLog)

    @property
    def is_resolved(self) -> bool:
        return self.status is LookupStatus.RESOLVED and self.address is not None

    @property
    def failed_providers(self) -> list[str]:
        """Providers whose responses were discarded, in arrival order."""
        return [entry.field for entry in self.process_log.errors]

    def add_provider_error(self, provider: Provider, error: Exception) -> None:
        """Record a discarded provider failure."""
        context: dict[str, Any] = {"error_type": getattr(error, "type", type(error).__name__)}
        entry = ProcessEntry(
            entry_type="error",
            field=provider.value,
            message=str(error),
            context=context,
        )
        self.process_log.errors.append(entry)

    def to_dict(self) -> dict[str, Any]:
        return {
            "cep": self.postal_code,
            "status": self.status.value,
            "provider": self.provider.value if self.provider else None,
            "address": self.address.to_dict() if self.address else None,
            "errors": [
                {"provider": entry.field, "message": entry.message}
                for entry in self.process_log.errors
            ],
        }
