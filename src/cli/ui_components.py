"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en múltiples comandos.
"""

from __future__ import annotations

from typing import Iterable

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import Tweet
from core.errors import RemoteAPIError, TweetlibError


def build_tweets_table(tweets: Iterable[Tweet], *, title: str = "Timeline") -> Table:
    table = Table(title=title)
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("User", style="magenta", no_wrap=True)
    table.add_column("Created", style="dim")
    table.add_column("Text", style="white")
    for tweet in tweets:
        user = f"@{tweet.user.screen_name}" if tweet.user and tweet.user.screen_name else "-"
        table.add_row(tweet.id_str or str(tweet.id), user, tweet.created_at or "-", tweet.text)
    return table


def build_error_panel(exc: TweetlibError) -> Panel:
    """Panel rojo para errores de la librería (remotos o locales)."""

    body = Text()
    if isinstance(exc, RemoteAPIError):
        body.append(f"HTTP {exc.status_code}\n", style="bold")
    body.append(str(exc))
    title = Text(type(exc).__name__, style="bold red")
    return Panel(body, title=title, border_style="red")
