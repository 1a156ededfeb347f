"""Interpretación de respuestas HTTP de la API.

Máquina de estados por respuesta:
- 2xx sin destino: se devuelven los bytes tal cual.
- 2xx con destino: JSON -> forma tipada. Un JSON roto es un error; un JSON
  válido que no encaja con la forma se tolera y se rellena lo que sí encaja.
- Fuera de 2xx: el cuerpo se interpreta como sobre `{errors: [...]}` y se
  pliega en un único `RemoteAPIError`.
"""

from __future__ import annotations

import copy
import json
from functools import lru_cache
from typing import Any, get_origin

from pydantic import BaseModel, TypeAdapter, ValidationError

from core.domain.models import ApiErrorEnvelope
from core.errors import MalformedResponseError, RemoteAPIError, StructuralMismatchError

_MAX_SALVAGE_PASSES = 8


def is_success(status_code: int) -> bool:
    return 200 <= status_code <= 299


@lru_cache(maxsize=128)
def _adapter(target: Any) -> TypeAdapter[Any]:
    return TypeAdapter(target)


def _empty_shape(target: Any) -> Any:
    origin = get_origin(target)
    if origin is None and isinstance(target, type) and issubclass(target, BaseModel):
        return target.model_construct()
    container = origin or target
    if container in (list, tuple, set, dict):
        return container()
    return None


def _loc_sort_key(loc: tuple[Any, ...]) -> tuple[tuple[int, str], ...]:
    return tuple((0, f"{p:012d}") if isinstance(p, int) else (1, str(p)) for p in loc)


def _prune(data: Any, loc: tuple[Any, ...]) -> bool:
    """Borra el valor en `loc`. Devuelve False si la ruta no existe en `data`."""

    parent = data
    for part in loc[:-1]:
        try:
            parent = parent[part]
        except (KeyError, IndexError, TypeError):
            return False

    last = loc[-1]
    if isinstance(parent, dict) and last in parent:
        del parent[last]
        return True
    if isinstance(parent, list) and isinstance(last, int) and 0 <= last < len(parent):
        del parent[last]
        return True
    return False


def _validate_strict(target: Any, data: Any) -> Any:
    # Modo JSON estricto: "42" no es un int ni "true" un bool.
    return _adapter(target).validate_json(json.dumps(data), strict=True)


def _salvage(target: Any, data: Any) -> Any:
    data = copy.deepcopy(data)
    for _ in range(_MAX_SALVAGE_PASSES):
        try:
            return _validate_strict(target, data)
        except ValidationError as exc:
            locs = {tuple(err["loc"]) for err in exc.errors() if err["loc"] and err["type"] != "missing"}
            # Orden inverso: índices altos primero para no correr posiciones en la misma lista.
            pruned = [_prune(data, loc) for loc in sorted(locs, key=_loc_sort_key, reverse=True)]
            if not any(pruned):
                break
    return _empty_shape(target)


def validate_into(target: Any, data: Any) -> Any:
    """Valida `data` contra `target`.

    La validación es estricta: un valor del tipo JSON equivocado no se
    convierte, se descarta.

    Si la estructura no encaja lanza `StructuralMismatchError` con lo que se
    pudo rescatar en `partial` (campos que no encajan quedan en su default).
    """

    try:
        return _validate_strict(target, data)
    except ValidationError as exc:
        raise StructuralMismatchError(str(exc), partial=_salvage(target, data)) from exc


def parse_error_envelope(status_code: int, body: bytes) -> ApiErrorEnvelope:
    try:
        envelope = ApiErrorEnvelope.model_validate_json(body)
    except ValidationError as exc:
        raise MalformedResponseError(
            f"HTTP {status_code}: invalid error payload: {exc.errors()[0]['msg']}",
            status_code=status_code,
            body=body,
        ) from exc
    if envelope.is_empty():
        raise MalformedResponseError(
            f"HTTP {status_code}: error payload without entries",
            status_code=status_code,
            body=body,
        )
    return envelope


def error_from_response(status_code: int, body: bytes) -> RemoteAPIError:
    envelope = parse_error_envelope(status_code, body)
    return RemoteAPIError(envelope.fold(), status_code=status_code, errors=list(envelope.errors))


def decode_response(status_code: int, body: bytes, target: Any = None) -> Any:
    """Decodifica una respuesta ya drenada.

    Devuelve la instancia tipada (o los bytes crudos si no hay `target`).
    Lanza `RemoteAPIError` o `MalformedResponseError`.
    """

    if not is_success(status_code):
        raise error_from_response(status_code, body)

    if target is None:
        return body

    try:
        data = json.loads(body)
    except (ValueError, UnicodeDecodeError) as exc:
        raise MalformedResponseError(
            f"HTTP {status_code}: response is not valid JSON: {exc}",
            status_code=status_code,
            body=body,
        ) from exc

    try:
        return validate_into(target, data)
    except StructuralMismatchError as exc:
        return exc.partial
