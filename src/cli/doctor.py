"""Doctor command for environment diagnostics."""

from __future__ import annotations

import typer
from rich.console import Console
from rich.table import Table

from adapters.http_client import build_http_client
from core.config import AppSettings, write_user_env_vars

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


def _check_http(url: str, settings: AppSettings) -> tuple[bool, str]:
    try:
        with build_http_client(settings) as client:
            response = client.get(url)
        return True, f"HTTP {response.status_code}"
    except Exception as exc:
        return False, str(exc)


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()

    table = Table(title="tweetlib Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    table.add_row("API base_url", "OK", settings.resolved_api_url())
    table.add_row("Upload base_url", "OK", settings.resolved_upload_url())
    if settings.bearer_token:
        table.add_row("Bearer token", "OK", "Authorization header enabled")
    else:
        table.add_row("Bearer token", "OPTIONAL", "No token set -> supply an authenticated transport")

    # Connectivity (best-effort)
    ok_http, detail_http = _check_http(f"{settings.resolved_api_url()}/help/configuration.json", settings)
    table.add_row("HTTP connectivity", "OK" if ok_http else "FAIL", detail_http)

    _console.print(table)


@app.command(name="setup-token")
def setup_token() -> None:
    """Interactive setup (stores config in the user config .env)."""

    settings = AppSettings()
    base_url = typer.prompt("API base URL", default=settings.api_base_url, show_default=True).strip()
    token = typer.prompt("Bearer token", hide_input=True, confirmation_prompt=False).strip()

    if not base_url or not token:
        raise typer.BadParameter("base_url and token are required")

    env_path = write_user_env_vars(
        {
            "TWEETLIB_API_BASE_URL": base_url,
            "TWEETLIB_BEARER_TOKEN": token,
        }
    )

    _console.print(f"[green]Saved config to:[/green] {env_path}")
