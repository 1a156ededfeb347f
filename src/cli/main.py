"""CLI principal (Typer).

Comandos:
- `call`: llamada arbitraria (verbo + endpoint + parámetros `-p k=v`).
- `timeline`: home timeline o timeline de un usuario en una tabla Rich.
- `tweet`: publica un status, opcionalmente con una imagen.
- `doctor`: diagnóstico de configuración/conectividad.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from adapters import endpoints
from cli import doctor
from cli.ui_components import build_error_panel, build_tweets_table
from core.domain.models import TweetMedia
from core.domain.params import Optionals
from core.errors import TweetlibError
from core.services.dispatcher import ApiClient

app = typer.Typer(no_args_is_help=True, help="Typed client for the social-media REST API.")
app.add_typer(doctor.app, name="doctor")

_console = Console()


def get_client() -> ApiClient:
    return ApiClient.from_settings()


def _parse_params(raw: list[str]) -> Optionals:
    opts = Optionals()
    for item in raw:
        if "=" not in item:
            raise typer.BadParameter(f"expected name=value, got {item!r}", param_hint="--param")
        name, value = item.split("=", 1)
        opts.add(name.strip(), value)
    return opts


def _fail(exc: TweetlibError) -> typer.Exit:
    _console.print(build_error_panel(exc))
    return typer.Exit(code=1)


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Log HTTP traffic (DEBUG).")) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@app.command()
def call(
    method: str = typer.Argument(..., help="GET o POST."),
    endpoint: str = typer.Argument(..., help="Ruta sin .json, p.ej. statuses/home_timeline."),
    param: list[str] = typer.Option([], "--param", "-p", help="Parámetro name=value (repetible)."),
    raw: bool = typer.Option(False, "--raw", help="Imprime el cuerpo sin formatear."),
) -> None:
    """Ejecuta una llamada arbitraria e imprime el JSON de respuesta."""

    opts = _parse_params(param)
    with get_client() as client:
        try:
            body = client.call_json(method.upper(), endpoint, opts)
        except TweetlibError as exc:
            raise _fail(exc) from exc

    text = body.decode("utf-8", errors="replace")
    if raw or not text.strip():
        typer.echo(text)
        return
    try:
        _console.print_json(text)
    except ValueError:
        # 2xx con cuerpo que no es JSON (HTML de un proxy, texto plano).
        typer.echo(text)


@app.command()
def timeline(
    screen_name: Optional[str] = typer.Option(None, "--screen-name", "-u", help="Usuario (por defecto: home)."),
    count: int = typer.Option(20, "--count", "-n", min=1, max=200),
) -> None:
    """Muestra los tweets más recientes."""

    opts = Optionals().add("count", count)
    with get_client() as client:
        try:
            if screen_name:
                tweets = endpoints.user_timeline(client, screen_name, opts)
            else:
                tweets = endpoints.home_timeline(client, opts)
        except TweetlibError as exc:
            raise _fail(exc) from exc

    title = f"@{screen_name}" if screen_name else "Home"
    _console.print(build_tweets_table(tweets, title=title))


@app.command()
def tweet(
    text: str = typer.Argument(..., help="Texto del status."),
    media: Optional[Path] = typer.Option(None, "--media", "-m", exists=True, dir_okay=False, help="Imagen adjunta."),
) -> None:
    """Publica un status."""

    with get_client() as client:
        try:
            if media is not None:
                posted = endpoints.update_status_with_media(client, text, TweetMedia.from_path(media))
            else:
                posted = endpoints.update_status(client, text)
        except TweetlibError as exc:
            raise _fail(exc) from exc
        except ValueError as exc:
            raise typer.BadParameter(str(exc)) from exc

    _console.print(f"[green]Posted[/green] {posted.id_str or posted.id}")


def run() -> None:
    app()
