"""Address model classes.

This module contains the canonical Address model returned to callers and
the raw payload schemas of each provider. Payload schemas are lenient:
missing or null string fields decode to empty strings, and only a payload
that is not a JSON object (or holds non-string values) fails to decode.
"""

from __future__ import annotations

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class Address(BaseModel):
    """Canonical address resolved from a CEP.

    Every field is a string and may be empty when the provider omitted it.
    ``zip_code`` always holds the 8 CEP digits without separators.
    """

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        str_strip_whitespace=True,
    )

    street: str = Field(default="", description="Street name (logradouro)")
    neighborhood: str = Field(default="", description="Neighborhood (bairro)")
    city: str = Field(default="", description="City (localidade)")
    state: str = Field(default="", description="Two-letter state code (UF)")
    zip_code: str = Field(
        default="",
        description="CEP digits",
        validation_alias=AliasChoices("zip_code", "zipCode", "zipcode"),
        serialization_alias="zipCode",
    )

    def to_dict(self) -> dict[str, str]:
        """Convert to a dict keyed by the public field names (``zipCode``)."""
        return self.model_dump(by_alias=True)


def _text(value: str | None) -> str:
    return value or ""


def _digits(value: str | None) -> str:
    return _text(value).replace("-", "").strip()


class ProviderPayload(BaseModel):
    """Base class for provider response schemas."""

    model_config = ConfigDict(extra="ignore")

    def is_not_found(self) -> bool:
        """True when the provider signalled "no such CEP" inside a 200 response."""
        return False

    def to_address(self) -> Address:
        raise NotImplementedError


class ViaCepPayload(ProviderPayload):
    """ViaCEP ``/ws/{cep}/json/`` response."""

    logradouro: str | None = None
    bairro: str | None = None
    localidade: str | None = None
    uf: str | None = None
    cep: str | None = None
    # ViaCEP answers unknown CEPs with 200 and {"erro": true} (or "true")
    erro: bool | str | None = None

    def is_not_found(self) -> bool:
        return self.erro is True or (isinstance(self.erro, str) and self.erro.lower() == "true")

    def to_address(self) -> Address:
        return Address(
            street=_text(self.logradouro),
            neighborhood=_text(self.bairro),
            city=_text(self.localidade),
            state=_text(self.uf),
            zip_code=_digits(self.cep),
        )


class BrasilApiPayload(ProviderPayload):
    """BrasilAPI ``/api/cep/v1/{cep}`` response."""

    street: str | None = None
    neighborhood: str | None = None
    city: str | None = None
    state: str | None = None
    cep: str | None = None

    def to_address(self) -> Address:
        return Address(
            street=_text(self.street),
            neighborhood=_text(self.neighborhood),
            city=_text(self.city),
            state=_text(self.state),
            zip_code=_digits(self.cep),
        )
