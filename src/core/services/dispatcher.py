"""Cliente genérico: builder -> transporte -> decoder.

Por qué vive en el Core:
- Es el contrato que consume todo el catálogo de endpoints; no envía nada por
  sí mismo, solo habla con un `Transport`.
- No guarda estado entre llamadas: cada una crea su propio `Optionals` y su
  propio descriptor. Es seguro usarlo desde varios hilos si el transporte lo es.
"""

from __future__ import annotations

from typing import Any, TypeVar, overload

from core.config import DEFAULT_API_URL, AppSettings
from core.domain.models import TweetMedia
from core.domain.params import Optionals
from core.interfaces.transport import Transport
from core.services.request_builder import (
    MEDIA_UPLOAD_ENDPOINT,
    build_multipart_request,
    build_request,
)
from core.services.response_decoder import decode_response

T = TypeVar("T")


class ApiClient:
    """Punto de entrada para llamadas arbitrarias a la API.

    Ejemplo::

        opts = Optionals().add("status", "Hello, world")
        raw = client.call_json("POST", "statuses/update", opts)

    equivale a `endpoints.update_status(client, "Hello, world")` salvo que
    este último devuelve un `Tweet`.
    """

    def __init__(
        self,
        transport: Transport | None,
        *,
        base_url: str | None = None,
        upload_base_url: str | None = None,
    ) -> None:
        if transport is None:
            raise ValueError("transport is required")
        self._transport = transport
        self.base_url = (base_url or DEFAULT_API_URL).rstrip("/")
        self.upload_base_url = (upload_base_url or self.base_url).rstrip("/")

    @classmethod
    def from_settings(cls, settings: AppSettings | None = None) -> "ApiClient":
        """Crea un cliente con el transporte httpx por defecto."""

        from adapters.http_client import HttpxTransport  # noqa: PLC0415

        settings = settings or AppSettings()
        return cls(
            HttpxTransport(settings=settings),
            base_url=settings.resolved_api_url(),
            upload_base_url=settings.resolved_upload_url(),
        )

    @property
    def transport(self) -> Transport:
        return self._transport

    def call_json(self, method: str, endpoint: str, opts: Optionals | None = None) -> bytes:
        """Ejecuta la llamada y devuelve el cuerpo crudo si fue exitosa."""

        request = build_request(method, endpoint, opts, base_url=self.base_url)
        response = self._transport.execute(request)
        return decode_response(response.status_code, response.body)

    @overload
    def call(self, method: str, endpoint: str, opts: Optionals | None = ..., target: None = ...) -> None: ...

    @overload
    def call(self, method: str, endpoint: str, opts: Optionals | None, target: type[T]) -> T: ...

    def call(self, method: str, endpoint: str, opts: Optionals | None = None, target: Any = None) -> Any:
        """Ejecuta la llamada y decodifica el JSON en `target`.

        Sin `target` solo se verifica el status (la respuesta se descarta).
        """

        request = build_request(method, endpoint, opts, base_url=self.base_url)
        response = self._transport.execute(request)
        decoded = decode_response(response.status_code, response.body, target)
        return decoded if target is not None else None

    def call_multipart(
        self,
        status: str,
        media: TweetMedia,
        opts: Optionals | None = None,
        target: Any = None,
        *,
        endpoint: str = MEDIA_UPLOAD_ENDPOINT,
    ) -> Any:
        request = build_multipart_request(status, media, opts, base_url=self.upload_base_url, endpoint=endpoint)
        response = self._transport.execute(request)
        decoded = decode_response(response.status_code, response.body, target)
        return decoded if target is not None else None

    def close(self) -> None:
        close = getattr(self._transport, "close", None)
        if callable(close):
            close()

    def __enter__(self) -> "ApiClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
