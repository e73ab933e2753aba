"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from rich.table import Table

from adapters.feature_probe import load_features
from adapters.http_client import build_async_client
from adapters.sinks import MemorySink
from core.config import AppSettings, write_user_env_vars

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_service(settings: AppSettings) -> tuple[bool, str]:
    """Probe the features endpoint; the probe never raises, it reports via the sink."""

    sink = MemorySink()
    async with build_async_client(settings) as client:
        badges = await load_features(client, sink, "doctor", settings=settings)
    if badges is None:
        return False, sink.state("doctor").text
    enabled = sum(1 for badge in badges if badge.enabled)
    return True, f"{enabled}/{len(badges)} features enabled"


@app.command()
def run(ctx: typer.Context) -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings: AppSettings = ctx.obj if isinstance(ctx.obj, AppSettings) else AppSettings()

    table = Table(title="AI Console Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    # Config
    table.add_row("Base URL", "OK", settings.base_url)
    if settings.http_timeout_seconds is None:
        table.add_row("HTTP timeout", "OPTIONAL", "Disabled -> hung requests stay pending")
    else:
        table.add_row("HTTP timeout", "OK", f"{settings.http_timeout_seconds:g}s")
    table.add_row("Upload cap", "OK", f"{settings.max_upload_bytes} bytes")

    # Connectivity (best-effort)
    ok_service, detail_service = asyncio.run(_check_service(settings))
    table.add_row("Service /api/ai/features", "OK" if ok_service else "FAIL", detail_service)

    _console.print(table)

    if not ok_service:
        _console.print(
            "\n[yellow]Note:[/yellow] Set AI_CONSOLE_BASE_URL (or run `doctor setup`) to point at the service."
        )


@app.command(name="setup")
def setup() -> None:
    """Interactive setup (stores config in the user config .env)."""

    base_url = typer.prompt("Service base URL", default="http://localhost:8080", show_default=True).strip()
    timeout = typer.prompt("HTTP timeout seconds (empty = none)", default="", show_default=False).strip()

    if not base_url:
        raise typer.BadParameter("base_url is required")

    values = {"AI_CONSOLE_BASE_URL": base_url}
    if timeout:
        values["AI_CONSOLE_HTTP_TIMEOUT_SECONDS"] = timeout
    env_path = write_user_env_vars(values)

    _console.print(f"[green]Saved config to:[/green] {env_path}")
