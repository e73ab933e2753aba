"""Render de valores para sinks de texto."""

from __future__ import annotations

import json
from typing import Any


def render_value(value: Any) -> str:
    """Texto tal cual; cualquier otro valor como JSON indentado (orden de claves preservado)."""

    if isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False, indent=2, default=str)
