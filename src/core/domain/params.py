"""Contenedor de parámetros opcionales de un request.

Por qué una clase propia y no un `dict`:
- La API acepta parámetros repetidos (forma de formulario), así que cada
  nombre guarda una lista de valores.
- La coerción a string es estricta: un tipo no soportado es un error del
  programador y debe fallar en el momento, no llegar serializado al servidor.

Ciclo de vida: se crea vacío por llamada, lo llena el catálogo de endpoints,
lo consume una sola vez el builder de requests y se descarta.
"""

from __future__ import annotations

from typing import Iterator, Mapping
from urllib.parse import quote, urlencode

Scalar = str | int | float | bool


def coerce_value(value: object) -> str:
    """Forma canónica en string de un valor escalar.

    `bool` va antes que `int` porque `True` es instancia de `int`.
    """

    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return repr(value)
    raise TypeError(f"Unsupported parameter type {type(value).__name__!r}; expected str, int, float or bool")


class Optionals:
    """Bolsa ordenada y mutable de parámetros con nombre."""

    def __init__(self) -> None:
        self._values: dict[str, list[str]] = {}

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Scalar]) -> "Optionals":
        opts = cls()
        for name, value in mapping.items():
            opts.add(name, value)
        return opts

    def add(self, name: str, value: Scalar) -> "Optionals":
        """Agrega `value` a `name` (no reemplaza valores previos)."""

        coerced = coerce_value(value)
        self._values.setdefault(name, []).append(coerced)
        return self

    def set(self, name: str, value: Scalar) -> "Optionals":
        """Reemplaza todos los valores de `name` por uno solo."""

        self._values[name] = [coerce_value(value)]
        return self

    def get(self, name: str) -> str | None:
        values = self._values.get(name)
        return values[0] if values else None

    def get_all(self, name: str) -> list[str]:
        return list(self._values.get(name, []))

    def remove(self, name: str) -> None:
        self._values.pop(name, None)

    def items(self) -> list[tuple[str, str]]:
        """Pares `(nombre, valor)` con los multi-valores expandidos, en orden de inserción."""

        return [(name, v) for name, values in self._values.items() for v in values]

    def copy(self) -> "Optionals":
        clone = Optionals()
        clone._values = {name: list(values) for name, values in self._values.items()}
        return clone

    def is_empty(self) -> bool:
        return not self._values

    def encode(self) -> str:
        """Serializa como query string `k=v&k2=v2`.

        Claves ordenadas (los valores de una misma clave conservan su orden),
        espacios como `%20` y unicode en UTF-8 percent-escapado.
        """

        pairs = [(name, v) for name in sorted(self._values) for v in self._values[name]]
        return urlencode(pairs, quote_via=quote)

    def __contains__(self, name: object) -> bool:
        return name in self._values

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Optionals):
            return NotImplemented
        return self._values == other._values

    def __repr__(self) -> str:
        return f"Optionals({self._values!r})"
