"""Sink en memoria.

Por qué existe:
- Sirve de región de salida para usos programáticos (scripts, notebooks) y tests:
  guarda el estado actual de cada target y el historial completo de escrituras.
- La versión de terminal (Rich) vive en `cli.ui_components`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Sequence

from core.domain.models import Badge
from core.services.rendering import render_value


@dataclass
class TargetState:
    text: str = ""
    value: Any = None
    is_error: bool = False
    badges: list[Badge] = field(default_factory=list)


@dataclass(frozen=True)
class SinkWrite:
    target: str
    text: str
    is_error: bool


class MemorySink:
    """`DisplaySink` que acumula estado por target."""

    def __init__(self) -> None:
        self.targets: dict[str, TargetState] = {}
        self.history: list[SinkWrite] = []

    def state(self, target: str) -> TargetState:
        return self.targets.setdefault(target, TargetState())

    def show(self, target: str, value: Any, is_error: bool = False) -> None:
        state = self.state(target)
        state.value = value
        state.text = render_value(value)
        state.is_error = bool(is_error)
        state.badges = []
        self.history.append(SinkWrite(target, state.text, state.is_error))

    def show_badges(self, target: str, badges: Sequence[Badge]) -> None:
        state = self.state(target)
        state.badges = list(badges)
        state.value = None
        state.text = ""
        state.is_error = False
        self.history.append(SinkWrite(target, " ".join(b.label for b in badges), False))

    def writes(self, target: str) -> list[SinkWrite]:
        return [w for w in self.history if w.target == target]
