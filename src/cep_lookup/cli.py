from __future__ import annotations

import json
import logging
from typing import Optional

import typer

from cep_lookup.core.errors import CepValidationError
from cep_lookup.models import LookupResult, LookupStatus, Provider
from cep_lookup.service import CepLookupService

EXIT_OK = 0
EXIT_INVALID_CEP = 1
EXIT_TIMEOUT = 3
EXIT_FAILED = 4

app = typer.Typer(help="Resolve a Brazilian CEP by racing several lookup providers.")


def get_service() -> CepLookupService:
    return CepLookupService()


def _parse_providers(names: Optional[list[str]]) -> Optional[tuple[Provider, ...]]:
    if not names:
        return None
    try:
        return tuple(dict.fromkeys(Provider.from_name(name) for name in names))
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--provider") from exc


def _echo_result(result: LookupResult) -> None:
    address = result.address
    if address is None or result.provider is None:
        return
    typer.echo(f"Response from {result.provider.value}:")
    typer.echo(f"Street: {address.street}")
    typer.echo(f"Neighborhood: {address.neighborhood}")
    typer.echo(f"City: {address.city}")
    typer.echo(f"State: {address.state}")
    typer.echo(f"CEP: {address.zip_code}")


@app.command()
def lookup(
    cep: str = typer.Argument(..., help="CEP to resolve, e.g. 89010-904."),
    timeout: Optional[float] = typer.Option(  # noqa: B008
        None,
        "--timeout",
        "-t",
        help="Overall deadline in seconds (default: CEP_LOOKUP_TIMEOUT or 1.0).",
    ),
    provider: Optional[list[str]] = typer.Option(  # noqa: B008
        None,
        "--provider",
        "-p",
        help="Provider to query; repeat to race several (default: all).",
    ),
    as_json: bool = typer.Option(  # noqa: B008
        False,
        "--json",
        help="Print the full outcome as JSON.",
    ),
    verbose: bool = typer.Option(  # noqa: B008
        False,
        "--verbose",
        "-v",
        help="Log each provider request and failure.",
    ),
) -> None:
    """Look up the address for a CEP."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    if timeout is not None and timeout <= 0:
        raise typer.BadParameter("must be positive", param_hint="--timeout")
    providers = _parse_providers(provider)

    try:
        result = get_service().resolve(cep, timeout=timeout, providers=providers)
    except CepValidationError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=EXIT_INVALID_CEP) from exc

    if as_json:
        typer.echo(json.dumps(result.to_dict(), ensure_ascii=False))
    elif result.status is LookupStatus.RESOLVED:
        _echo_result(result)
    elif result.status is LookupStatus.TIMED_OUT:
        typer.echo(f"Timed out after {result.timeout}s waiting for a provider.", err=True)
    else:
        failed = ", ".join(result.failed_providers) or "none"
        typer.echo(f"No provider returned an address (failed: {failed}).", err=True)

    if result.status is LookupStatus.RESOLVED:
        raise typer.Exit(code=EXIT_OK)
    if result.status is LookupStatus.TIMED_OUT:
        raise typer.Exit(code=EXIT_TIMEOUT)
    raise typer.Exit(code=EXIT_FAILED)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
