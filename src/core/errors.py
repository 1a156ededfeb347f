"""Jerarquía de errores del cliente.

Por qué un único módulo:
- Todas las capas (builder, decoder, transporte, catálogo) lanzan errores de
  la misma familia, así el llamador puede capturar `TweetlibError` y listo.
- Mantiene separados los fallos remotos (la API dijo que no) de los locales.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from core.domain.models import ApiErrorEntry


class TweetlibError(Exception):
    """Base de todos los errores de la librería."""


class InvalidMethodError(TweetlibError, ValueError):
    """Verbo HTTP fuera de {GET, POST}. Se lanza antes de tocar la red."""

    def __init__(self, method: object) -> None:
        super().__init__(f"Invalid method '{method}'. Must be either GET or POST.")
        self.method = method


class TransportError(TweetlibError):
    """El transporte no pudo ejecutar el request (red, DNS, TLS, timeout)."""


class RemoteAPIError(TweetlibError):
    """La API respondió fuera de 2xx con un sobre de errores válido."""

    def __init__(self, message: str, *, status_code: int, errors: list[ApiErrorEntry]) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.errors = errors

    @property
    def codes(self) -> list[int]:
        return [e.code for e in self.errors]


class MalformedResponseError(TweetlibError):
    """Cuerpo que no es JSON válido (2xx) o no es un sobre de errores (no-2xx)."""

    def __init__(self, message: str, *, status_code: int, body: bytes = b"") -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class MediaIOError(TweetlibError, OSError):
    """No se pudo escribir la parte de archivo del cuerpo multipart."""

    def __init__(self, message: str, *, filename: str | None = None) -> None:
        super().__init__(message)
        self.filename = filename


class StructuralMismatchError(TweetlibError):
    """JSON sintácticamente válido que no encaja con la forma destino.

    Solo el decoder de respuestas la captura; nunca sale del Core.
    """

    def __init__(self, message: str, *, partial: object = None) -> None:
        super().__init__(message)
        self.partial = partial
