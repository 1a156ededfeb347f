"""Contrato del transporte HTTP.

Por qué Protocol:
- El Core no abre conexiones ni firma OAuth: solo necesita "algo" que ejecute un
  `HttpRequestDescriptor` y devuelva status, headers y cuerpo.
- Permite inyectar un transporte firmado (OAuth) o uno falso en tests sin
  herencia rígida.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.domain.models import HttpRequestDescriptor, TransportResponse


@runtime_checkable
class Transport(Protocol):
    """Capacidad opaca de ejecutar requests HTTP ya autenticados.

    Reglas de diseño:
    - La autenticación/firma es responsabilidad del transporte.
    - Fallos de red se reportan como `core.errors.TransportError`.
    - El cuerpo de la respuesta se devuelve completo (drenado).
    """

    def execute(self, request: HttpRequestDescriptor) -> TransportResponse:
        """Ejecuta el request y devuelve la respuesta cruda."""

        ...
