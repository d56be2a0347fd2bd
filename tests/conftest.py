"""Shared pytest fixtures and Hypothesis configuration.

This module configures Hypothesis profiles and provides provider payload
fixtures used across the suite.
"""

from __future__ import annotations

from typing import Any

import pytest
from hypothesis import Verbosity, settings

# Configure Hypothesis settings for the test suite
settings.register_profile("ci", max_examples=200, deadline=None)
settings.register_profile("dev", max_examples=50, deadline=None)
settings.register_profile("debug", max_examples=10, deadline=None, verbosity=Verbosity.verbose)


@pytest.fixture
def viacep_body() -> dict[str, Any]:
    return {
        "cep": "89010-904",
        "logradouro": "Rua X",
        "complemento": "",
        "bairro": "Centro",
        "localidade": "Curitiba",
        "uf": "PR",
        "ibge": "4106902",
    }


@pytest.fixture
def brasilapi_body() -> dict[str, Any]:
    return {
        "cep": "89010904",
        "state": "PR",
        "city": "Curitiba",
        "neighborhood": "Centro",
        "street": "Rua X",
        "service": "open-cep",
    }


@pytest.fixture(autouse=True)
def _clear_lookup_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "CEP_LOOKUP_TIMEOUT",
        "CEP_LOOKUP_PROVIDERS",
        "CEP_LOOKUP_VIACEP_URL",
        "CEP_LOOKUP_BRASILAPI_URL",
        "CEP_LOOKUP_USER_AGENT",
    ):
        monkeypatch.delenv(name, raising=False)
