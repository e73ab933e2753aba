"""Feature probe: `GET /api/ai/features` -> badges.

Reglas:
- Muestra un indicador de carga inmediatamente.
- Un badge por entrada del mapa, en el orden recibido (`"<name>: on|off"`).
- Nunca lanza: cualquier fallo se muestra con un prefijo fijo.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from adapters.transport.dispatcher import dispatch
from core.config import AppSettings
from core.domain.models import Badge
from core.domain.outcome import failure_from_exception
from core.interfaces.sink import DisplaySink
from core.services import operations

logger = logging.getLogger(__name__)


def badges_from_features(features: Any) -> list[Badge]:
    if not isinstance(features, dict):
        raise ValueError("features payload is not a mapping")
    return [Badge(name=str(name), enabled=bool(enabled)) for name, enabled in features.items()]


async def load_features(
    client: httpx.AsyncClient,
    sink: DisplaySink,
    target: str = "features",
    *,
    settings: AppSettings | None = None,
) -> list[Badge] | None:
    """Carga el mapa de features y lo pinta como badges. Devuelve los badges o None."""

    settings = settings or AppSettings()
    sink.show(target, settings.features_loading_text, False)
    try:
        features = (await dispatch(client, operations.features(), settings=settings)).unwrap()
        badges = badges_from_features(features)
    except Exception as exc:
        message = failure_from_exception(exc).message
        logger.warning("feature probe failed: %s", message)
        sink.show(target, f"{settings.features_failed_prefix}: {message}", True)
        return None

    sink.show_badges(target, badges)
    return badges
