"""Wrapper de httpx.

Por qué un wrapper:
- Estandariza timeouts, headers y el token Bearer opcional.
- Implementa `core.interfaces.transport.Transport`, así el Core nunca abre conexiones.
- Facilita testeo: se le puede pasar un `httpx.Client` con `MockTransport`.
"""

from __future__ import annotations

import logging

import httpx

from core.config import AppSettings
from core.domain.models import HttpRequestDescriptor, TransportResponse
from core.errors import TransportError

logger = logging.getLogger(__name__)


def build_http_client(
    settings: AppSettings | None = None,
    *,
    extra_headers: dict[str, str] | None = None,
    auth: httpx.Auth | None = None,
    transport: httpx.BaseTransport | None = None,
) -> httpx.Client:
    """Crea un `httpx.Client` con defaults seguros.

    Por qué un builder:
    - Centraliza timeouts/headers para que todas las llamadas se comporten igual.
    - `auth` permite enchufar un firmador OAuth externo sin tocar el Core.
    """

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "application/json",
    }
    if settings.bearer_token:
        headers["Authorization"] = f"Bearer {settings.bearer_token}"
    if extra_headers:
        headers.update(extra_headers)
    return httpx.Client(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=True,
        headers=headers,
        auth=auth,
        transport=transport,
    )


class HttpxTransport:
    """Transporte por defecto sobre `httpx.Client` (síncrono)."""

    def __init__(self, client: httpx.Client | None = None, settings: AppSettings | None = None) -> None:
        self._owns_client = client is None
        self._client = client or build_http_client(settings)

    def execute(self, request: HttpRequestDescriptor) -> TransportResponse:
        logger.debug("%s %s", request.method, request.url)
        try:
            response = self._client.request(
                request.method,
                request.url,
                headers=request.headers,
                content=request.body or None,
            )
        except httpx.HTTPError as exc:
            raise TransportError(f"{request.method} {request.url} failed: {exc}") from exc

        logger.debug("%s %s -> HTTP %s (%d bytes)", request.method, request.url, response.status_code, len(response.content))
        return TransportResponse(
            status_code=response.status_code,
            headers=dict(response.headers),
            body=response.content,
        )

    def close(self) -> None:
        if self._owns_client:
            self._client.close()
