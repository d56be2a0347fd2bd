"""Provider URL templates."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from cep_lookup.core.postal_code import PostalCode
from cep_lookup.models.enums import Provider

VIACEP_URL = "https://viacep.com.br/ws/{cep}/json/"
BRASILAPI_URL = "https://brasilapi.com.br/api/cep/v1/{cep}"


@dataclass(frozen=True)
class ProviderEndpoint:
    """Where and how to ask one provider for a CEP.

    Attributes:
        provider: Provider this endpoint belongs to.
        url_template: URL with a ``{cep}`` placeholder.
        hyphenated: Substitute ``NNNNN-NNN`` instead of the bare digits.
    """

    provider: Provider
    url_template: str
    hyphenated: bool = False

    def __post_init__(self) -> None:
        if "{cep}" not in self.url_template:
            raise ValueError(
                f"URL template for {self.provider.value} must contain '{{cep}}': "
                f"{self.url_template}"
            )

    def build_url(self, postal_code: PostalCode) -> str:
        cep = postal_code.hyphenated if self.hyphenated else postal_code.digits
        return self.url_template.replace("{cep}", cep)


def default_endpoints(
    *,
    viacep_url: str = VIACEP_URL,
    brasilapi_url: str = BRASILAPI_URL,
) -> dict[Provider, ProviderEndpoint]:
    """Endpoints for every known provider."""
    return {
        Provider.VIACEP: ProviderEndpoint(Provider.VIACEP, viacep_url, hyphenated=True),
        Provider.BRASILAPI: ProviderEndpoint(Provider.BRASILAPI, brasilapi_url),
    }


def select_endpoints(
    providers: Iterable[Provider],
    endpoints: Mapping[Provider, ProviderEndpoint] | None = None,
) -> list[ProviderEndpoint]:
    """Endpoints for ``providers``, dropping duplicates but keeping order.

    Raises:
        ValueError: If a provider has no endpoint configured.
    """
    table = endpoints if endpoints is not None else default_endpoints()
    selected: list[ProviderEndpoint] = []
    for provider in dict.fromkeys(providers):
        if provider not in table:
            raise ValueError(f"No endpoint configured for provider: {provider}")
        selected.append(table[provider])
    return selected
