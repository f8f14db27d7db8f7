"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import typer

from adapters.http_client import HttpControlTransport
from cli.console import console
from cli.ui_components import build_checks_table
from core.config import AppSettings, load_control_config
from core.errors import BrowserCtlError
from core.interfaces.transport import ControlTransport
from core.services.error_classifier import describe_error
from core.services.request_builder import STATUS_TIMEOUT, HttpExchange, resolve_base_url

app = typer.Typer(help="Environment diagnostics and configuration checks.")


async def _check_server(transport: ControlTransport, base_url: str) -> tuple[bool, str]:
    exchange = HttpExchange("GET", base_url.rstrip("/") + "/", STATUS_TIMEOUT)
    try:
        payload = await transport.execute(exchange)
    except BrowserCtlError as exc:
        return False, describe_error(exc, base_url)
    running = payload.get("running")
    if isinstance(running, bool):
        return True, f"reachable (browser running: {str(running).lower()})"
    return True, "reachable"


def run_doctor(
    settings: AppSettings | None = None,
    *,
    transport: ControlTransport | None = None,
) -> bool:
    """Run baseline diagnostics; return True when the control server answers."""

    settings = settings or AppSettings()
    config_path = settings.resolved_config_path()
    config = load_control_config(settings)

    table = build_checks_table()

    if config_path.is_file():
        table.add_row("Config file", "OK", str(config_path))
    else:
        table.add_row("Config file", "DEFAULTS", f"{config_path} not found")

    table.add_row(
        "Browser control",
        "OK" if config.enabled else "DISABLED",
        "browser.enabled=" + ("true" if config.enabled else "false"),
    )

    try:
        base_url = resolve_base_url(None, config.control_url)
    except BrowserCtlError as exc:
        table.add_row("Control URL", "FAIL", str(exc))
        console.print(table)
        return False
    table.add_row("Control URL", "OK", base_url)

    ok, detail = asyncio.run(_check_server(transport or HttpControlTransport(settings), base_url))
    table.add_row("Control server", "OK" if ok else "FAIL", detail)

    console.print(table)

    if not config.enabled:
        console.print(
            "\n[yellow]Note:[/yellow] set browser.enabled=true in the config file to use `browserctl browser`."
        )
    return ok


@app.command()
def run() -> None:
    """Check config and control-server reachability."""

    if not run_doctor():
        raise typer.Exit(1)
