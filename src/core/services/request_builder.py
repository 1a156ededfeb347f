"""Construcción de requests HTTP para los endpoints de la API.

Responsabilidad:
- Validar el verbo (la única validación de entrada de esta capa).
- Componer `{base}/{endpoint}.json` y ubicar los parámetros: query string en
  GET, cuerpo urlencoded en POST.
- Elegir los campos del multipart de subida de media (el cuerpo lo arma httpx).

No agrega headers de autenticación: eso lo hace el transporte.
"""

from __future__ import annotations

import httpx

from core.config import DEFAULT_API_URL
from core.domain.models import HttpRequestDescriptor, TweetMedia
from core.domain.params import Optionals
from core.errors import InvalidMethodError

ALLOWED_METHODS = ("GET", "POST")
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"
MEDIA_UPLOAD_ENDPOINT = "statuses/update_with_media"
MEDIA_FIELD_NAME = "media[]"


def endpoint_url(endpoint: str, *, base_url: str = DEFAULT_API_URL, query: str = "") -> str:
    url = f"{base_url.rstrip('/')}/{endpoint.strip('/')}.json"
    if query:
        url = f"{url}?{query}"
    return url


def build_request(
    method: str,
    endpoint: str,
    opts: Optionals | None = None,
    *,
    base_url: str = DEFAULT_API_URL,
) -> HttpRequestDescriptor:
    """Crea el descriptor para un GET o POST.

    En POST los parámetros van solo en el cuerpo; la URL no lleva query.
    """

    if method not in ALLOWED_METHODS:
        raise InvalidMethodError(method)
    if opts is None:
        opts = Optionals()

    encoded = opts.encode()
    if method == "GET":
        return HttpRequestDescriptor(
            method=method,
            url=endpoint_url(endpoint, base_url=base_url, query=encoded),
        )

    return HttpRequestDescriptor(
        method=method,
        url=endpoint_url(endpoint, base_url=base_url),
        headers={"Content-Type": FORM_CONTENT_TYPE},
        body=encoded.encode("utf-8"),
    )


def _multipart_fields(status: str, opts: Optionals) -> dict[str, str | list[str]]:
    """Campos de texto del multipart: `status` primero y sin duplicar."""

    fields: dict[str, str | list[str]] = {"status": status}
    for name in opts:
        if name != "status":
            fields[name] = opts.get_all(name)
    return fields


def build_multipart_request(
    status: str,
    media: TweetMedia,
    opts: Optionals | None = None,
    *,
    base_url: str = DEFAULT_API_URL,
    endpoint: str = MEDIA_UPLOAD_ENDPOINT,
    boundary: str | None = None,
) -> HttpRequestDescriptor:
    """Crea el POST multipart: campo `status`, un campo por parámetro y `media[]`.

    El cuerpo lo codifica httpx; aquí solo se decide qué campos van y en qué
    orden. La URL repite `status` y los parámetros como query string; el
    endpoint de subida los acepta en ambos lugares.

    Lanza `MediaIOError` si el adjunto no tiene bytes legibles.
    """

    if opts is None:
        opts = Optionals()
    data = media.read_bytes()

    query = opts.copy().set("status", status).encode()
    url = endpoint_url(endpoint, base_url=base_url, query=query)
    headers = {"Content-Type": f"multipart/form-data; boundary={boundary}"} if boundary else None

    request = httpx.Request(
        "POST",
        url,
        headers=headers,
        data=_multipart_fields(status, opts),
        files={MEDIA_FIELD_NAME: (media.filename, data, "application/octet-stream")},
    )
    return HttpRequestDescriptor(
        method="POST",
        url=url,
        headers={"Content-Type": request.headers["Content-Type"]},
        body=request.read(),
    )
