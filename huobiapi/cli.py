"""CLI commands for the Huobi REST client."""

from __future__ import annotations

import json
import logging
from typing import Callable, List, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

app = typer.Typer(
    name="huobiapi",
    help="Huobi REST client - signed request tool",
    no_args_is_help=True,
)
console = Console()


def _setup_logging(verbose: bool = False, level: str = "INFO"):
    if verbose:
        level = "DEBUG"
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def _parse_params(pairs: Optional[List[str]]) -> dict[str, str]:
    params: dict[str, str] = {}
    for pair in pairs or []:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise typer.BadParameter(f"expected key=value, got {pair!r}", param_hint="--param")
        params[key] = value
    return params


def _make_client(verbose: bool = False, signed: bool = False):
    """Load config, set up logging and build a Client."""
    from huobiapi.config import load_config
    from huobiapi.data.huobi_client import Client

    config = load_config()
    _setup_logging(verbose, config.logging.level)

    if signed and not (config.huobi.api_key and config.huobi.secret_key):
        console.print("[red]Error: HUOBI_API_KEY / HUOBI_SECRET_KEY not set (.env)[/red]")
        raise typer.Exit(code=1)

    return Client.from_config(config)


def _run(call: Callable[[], str]):
    from huobiapi.data.errors import HuobiError

    try:
        body = call()
    except HuobiError as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        raise typer.Exit(code=1)
    console.print_json(body)


@app.command()
def get(
    endpoint: str = typer.Argument(..., help="Request path, e.g. /market/detail/merged"),
    param: Optional[List[str]] = typer.Option(None, "--param", "-p", help="key=value (repeatable)"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
):
    """Public (unsigned) GET request"""
    params = _parse_params(param)
    with _make_client(verbose) as client:
        _run(lambda: client.get(endpoint, params))


@app.command("get-signed")
def get_signed(
    endpoint: str = typer.Argument(..., help="Request path, e.g. /v1/account/accounts"),
    param: Optional[List[str]] = typer.Option(None, "--param", "-p", help="key=value (repeatable)"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
):
    """Signed GET request"""
    params = _parse_params(param)
    with _make_client(verbose, signed=True) as client:
        _run(lambda: client.get_signed(endpoint, params))


@app.command("post-signed")
def post_signed(
    endpoint: str = typer.Argument(..., help="Request path, e.g. /v1/order/orders/place"),
    param: Optional[List[str]] = typer.Option(None, "--param", "-p", help="key=value (repeatable)"),
    data: str = typer.Option("{}", "--data", "-d", help="JSON request body"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
):
    """Signed POST request with a JSON body"""
    params = _parse_params(param)
    try:
        payload = json.loads(data)
    except json.JSONDecodeError as exc:
        raise typer.BadParameter(f"invalid JSON: {exc}", param_hint="--data")

    with _make_client(verbose, signed=True) as client:
        _run(lambda: client.post_signed(endpoint, params, payload))


@app.command()
def sign(
    endpoint: str = typer.Argument(..., help="Request path"),
    method: str = typer.Option("GET", "--method", "-m", help="GET or POST"),
    param: Optional[List[str]] = typer.Option(None, "--param", "-p", help="key=value (repeatable)"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
):
    """Show the canonical query, pre-sign string and signed URL (no request sent)"""
    from huobiapi.utils.crypto import build_presign

    method = method.upper()
    if method not in ("GET", "POST"):
        raise typer.BadParameter("method must be GET or POST", param_hint="--method")
    params = _parse_params(param)

    with _make_client(verbose, signed=True) as client:
        url = client.build_signed_url(method, endpoint, params)

    query = url.split("?", 1)[1].rsplit("&Signature=", 1)[0]
    presign = build_presign(method, client.host, endpoint, query)

    table = Table(title="Signed request", show_header=True, header_style="bold cyan")
    table.add_column("Field", style="bold", no_wrap=True)
    table.add_column("Value", overflow="fold")
    table.add_row("Canonical query", escape(query))
    table.add_row("Pre-sign string", escape(presign.replace("\n", "\\n")))
    table.add_row("URL", escape(url))
    console.print(table)


if __name__ == "__main__":
    app()
