"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- `RichSink` implementa `DisplaySink` para la terminal: cada escritura es un
  panel, con borde rojo si el target está en estado de error.
"""

from __future__ import annotations

import logging
from typing import Any, Sequence

from rich.console import Console
from rich.live import Live
from rich.logging import RichHandler
from rich.panel import Panel
from rich.text import Text

from core.domain.models import Badge
from core.services.rendering import render_value


def configure_logging(level: str = "WARNING", *, console: Console | None = None) -> None:
    """Instala `RichHandler` en el root logger (stderr por defecto)."""

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[handler],
        force=True,
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)


def build_output_panel(target: str, value: Any, is_error: bool) -> Panel:
    """Panel para un valor de salida (texto o estructura indentada)."""

    body = Text(render_value(value), style="red" if is_error else "")
    return Panel(body, title=Text(target, style="bold"), border_style="red" if is_error else "green")


def build_badges(badges: Sequence[Badge]) -> Text:
    out = Text()
    for i, badge in enumerate(badges):
        if i:
            out.append(" ")
        out.append(f" {badge.label} ", style="bold black on green" if badge.enabled else "bold white on red")
    return out


class RichSink:
    """`DisplaySink` de terminal.

    Escrituras intermedias (placeholder, chunks de stream) se pintan en un
    `Live` si hay uno activo; si no, cada escritura imprime un panel.
    """

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()
        self.errors: dict[str, bool] = {}
        self._live: Live | None = None

    def start_live(self) -> Live:
        self._live = Live(console=self.console, auto_refresh=False, transient=False)
        self._live.start()
        return self._live

    def stop_live(self) -> None:
        if self._live is not None:
            self._live.stop()
            self._live = None

    def show(self, target: str, value: Any, is_error: bool = False) -> None:
        self.errors[target] = bool(is_error)
        panel = build_output_panel(target, value, is_error)
        if self._live is not None:
            self._live.update(panel, refresh=True)
            return
        self.console.print(panel)

    def show_badges(self, target: str, badges: Sequence[Badge]) -> None:
        self.errors[target] = False
        self.console.print(Panel(build_badges(badges), title=Text(target, style="bold"), border_style="cyan"))
