"""Tests for racing providers against one deadline.

The winning provider depends on timing; tests that let several providers
succeed accept any of them.
"""

from typing import Any

import httpx
import pytest

from cep_lookup import race
from cep_lookup.core import validate_cep
from cep_lookup.models import ALL_PROVIDERS, LookupStatus, Provider
from tests.stubs import ProviderStub, stub_providers

CEP = validate_cep("89010-904")


@pytest.mark.asyncio
async def test_first_success_wins_and_slow_provider_is_cancelled(
    brasilapi_body: dict[str, Any],
) -> None:
    providers = stub_providers(brasilapi=ProviderStub(json=brasilapi_body, delay=0.05))

    async with providers.client() as client:
        result = await race.resolve(CEP, ALL_PROVIDERS, 5.0, client=client)

    assert result.status is LookupStatus.RESOLVED
    assert result.is_resolved
    assert result.provider is Provider.BRASILAPI
    assert result.address is not None
    assert result.address.city == "Curitiba"
    assert result.elapsed is not None and result.elapsed < 5.0
    # The losing request was torn down before resolve returned
    assert providers.cancelled == [Provider.VIACEP]


@pytest.mark.asyncio
async def test_any_provider_is_an_acceptable_winner(
    viacep_body: dict[str, Any], brasilapi_body: dict[str, Any]
) -> None:
    providers = stub_providers(
        viacep=ProviderStub(json=viacep_body),
        brasilapi=ProviderStub(json=brasilapi_body),
    )

    async with providers.client() as client:
        result = await race.resolve(CEP, ALL_PROVIDERS, 5.0, client=client)

    assert result.status is LookupStatus.RESOLVED
    assert result.provider in (Provider.VIACEP, Provider.BRASILAPI)
    assert result.address is not None
    assert result.address.street == "Rua X"
    assert result.address.zip_code == "89010904"


@pytest.mark.asyncio
async def test_each_provider_gets_its_url_shape(brasilapi_body: dict[str, Any]) -> None:
    providers = stub_providers(
        viacep=ProviderStub(status=500, delay=0.05),
        brasilapi=ProviderStub(json=brasilapi_body, delay=0.1),
    )

    async with providers.client() as client:
        await race.resolve(CEP, ALL_PROVIDERS, 5.0, client=client)

    assert [r.url.path for r in providers.requested(Provider.VIACEP)] == ["/ws/89010-904/json/"]
    assert [r.url.path for r in providers.requested(Provider.BRASILAPI)] == [
        "/api/cep/v1/89010904"
    ]


@pytest.mark.asyncio
async def test_error_first_falls_through_to_next_provider(viacep_body: dict[str, Any]) -> None:
    providers = stub_providers(
        brasilapi=ProviderStub(status=500),
        viacep=ProviderStub(json=viacep_body, delay=0.05),
    )

    async with providers.client() as client:
        result = await race.resolve(CEP, ALL_PROVIDERS, 5.0, client=client)

    assert result.status is LookupStatus.RESOLVED
    assert result.provider is Provider.VIACEP
    assert result.failed_providers == ["BrasilAPI"]


@pytest.mark.asyncio
async def test_unparseable_first_falls_through_to_next_provider(
    brasilapi_body: dict[str, Any],
) -> None:
    providers = stub_providers(
        viacep=ProviderStub(content=b"<html>maintenance</html>"),
        brasilapi=ProviderStub(json=brasilapi_body, delay=0.05),
    )

    async with providers.client() as client:
        result = await race.resolve(CEP, ALL_PROVIDERS, 5.0, client=client)

    assert result.status is LookupStatus.RESOLVED
    assert result.provider is Provider.BRASILAPI
    entry = result.process_log.errors[0]
    assert entry.field == "ViaCEP"
    assert entry.context["error_type"] == "parse_error"


@pytest.mark.asyncio
async def test_transport_errors_from_all_providers_fail() -> None:
    providers = stub_providers(
        viacep=ProviderStub(exc=httpx.ConnectError("refused")),
        brasilapi=ProviderStub(exc=httpx.ReadTimeout("too slow")),
    )

    async with providers.client() as client:
        result = await race.resolve(CEP, ALL_PROVIDERS, 5.0, client=client)

    assert result.status is LookupStatus.FAILED
    assert not result.is_resolved
    assert result.address is None
    assert sorted(result.failed_providers) == ["BrasilAPI", "ViaCEP"]


@pytest.mark.asyncio
async def test_not_found_from_both_providers_fails() -> None:
    providers = stub_providers(
        viacep=ProviderStub(status=404),
        brasilapi=ProviderStub(status=404, json={"message": "CEP não encontrado"}),
    )

    async with providers.client() as client:
        result = await race.resolve(validate_cep("00000-000"), ALL_PROVIDERS, 5.0, client=client)

    assert result.status is LookupStatus.FAILED
    assert result.postal_code == "00000000"


@pytest.mark.asyncio
async def test_deadline_before_any_answer_times_out(brasilapi_body: dict[str, Any]) -> None:
    providers = stub_providers(
        viacep=ProviderStub(json={"localidade": "Curitiba"}, delay=0.1),
        brasilapi=ProviderStub(json=brasilapi_body, delay=0.1),
    )

    async with providers.client() as client:
        result = await race.resolve(CEP, ALL_PROVIDERS, 0.001, client=client)

    assert result.status is LookupStatus.TIMED_OUT
    assert result.address is None
    assert providers.answered == []
    # Every request that started was cancelled, none completed
    assert len(providers.cancelled) == len(providers.requests)


@pytest.mark.asyncio
async def test_error_then_silence_times_out() -> None:
    providers = stub_providers(viacep=ProviderStub(status=503))

    async with providers.client() as client:
        result = await race.resolve(CEP, ALL_PROVIDERS, 0.2, client=client)

    assert result.status is LookupStatus.TIMED_OUT
    assert result.failed_providers == ["ViaCEP"]
    assert providers.cancelled == [Provider.BRASILAPI]


@pytest.mark.asyncio
async def test_single_provider_and_duplicates(brasilapi_body: dict[str, Any]) -> None:
    providers = stub_providers(brasilapi=ProviderStub(json=brasilapi_body))

    async with providers.client() as client:
        result = await race.resolve(
            CEP, [Provider.BRASILAPI, Provider.BRASILAPI], 5.0, client=client
        )

    assert result.provider is Provider.BRASILAPI
    assert len(providers.requests) == 1


@pytest.mark.asyncio
async def test_no_providers_fails_without_requests() -> None:
    providers = stub_providers()

    async with providers.client() as client:
        result = await race.resolve(CEP, [], 5.0, client=client)

    assert result.status is LookupStatus.FAILED
    assert providers.requests == []


@pytest.mark.asyncio
@pytest.mark.parametrize("timeout", [0, -1.0])
async def test_non_positive_timeout_is_rejected(timeout: float) -> None:
    with pytest.raises(ValueError):
        await race.resolve(CEP, ALL_PROVIDERS, timeout)


@pytest.mark.asyncio
async def test_caller_client_is_left_open(brasilapi_body: dict[str, Any]) -> None:
    providers = stub_providers(brasilapi=ProviderStub(json=brasilapi_body))
    client = providers.client()

    try:
        await race.resolve(CEP, ALL_PROVIDERS, 5.0, client=client)
        assert not client.is_closed
    finally:
        await client.aclose()


@pytest.mark.asyncio
async def test_unexpected_fetch_error_counts_as_provider_failure(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    async def broken_fetch(*args: Any, **kwargs: Any) -> None:
        raise RuntimeError("boom")

    monkeypatch.setattr(race, "fetch_provider", broken_fetch)

    async with httpx.AsyncClient() as client:
        result = await race.resolve(CEP, ALL_PROVIDERS, 5.0, client=client)

    assert result.status is LookupStatus.FAILED
    assert result.elapsed is not None and result.elapsed < 5.0
