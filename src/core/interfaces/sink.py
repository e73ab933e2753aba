"""Contrato del sink de visualización.

Por qué Protocol:
- Define un contrato estructural (duck typing) sin herencia rígida.
- Permite que la consola Rich, un sink en memoria (tests) o cualquier UI futura
  sean intercambiables sin acoplar el binder a una implementación concreta.
"""

from __future__ import annotations

from typing import Any, Protocol, Sequence, runtime_checkable

from core.domain.models import Badge


@runtime_checkable
class DisplaySink(Protocol):
    """Región de salida identificada por un id opaco (`target`).

    Reglas de diseño:
    - `show` es síncrono: el binder escribe el placeholder antes de suspender.
    - `is_error` marca/desmarca el estado de error del target (idempotente).
    """

    def show(self, target: str, value: Any, is_error: bool = False) -> None:
        """Muestra `value` (texto tal cual, o estructura indentada) en `target`."""

        ...

    def show_badges(self, target: str, badges: Sequence[Badge]) -> None:
        """Reemplaza el contenido de `target` por una lista de badges."""

        ...
