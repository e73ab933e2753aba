"""Normalización de respuestas HTTP a `Outcome`.

Reglas:
- El body se lee como texto exactamente una vez.
- JSON malformado o ausente no es un error: el payload pasa a ser el texto crudo.
- Éxito/fallo lo decide el status (2xx), nunca el payload. El payload solo aporta
  el mensaje de error si trae un string no vacío (ni solo espacios) en `message_field`.
"""

from __future__ import annotations

import json
import logging
from typing import Any

import httpx

from core.domain.outcome import ErrorKind, Failure, Outcome, Success, status_failure

logger = logging.getLogger(__name__)


def decode_payload(text: str) -> Any:
    """JSON si el texto lo es; si no, el texto tal cual (incluido `""`)."""

    try:
        return json.loads(text)
    except ValueError:
        return text


def error_message(payload: Any, message_field: str) -> str | None:
    if isinstance(payload, dict):
        message = payload.get(message_field)
        if isinstance(message, str) and message.strip():
            return message
    return None


async def normalize(response: httpx.Response, *, message_field: str = "message") -> Outcome:
    """Clasifica `response` en `Success(payload)` o `Failure(message)`."""

    await response.aread()
    payload = decode_payload(response.text)

    if response.is_success:
        return Success(payload)

    message = error_message(payload, message_field)
    logger.warning("response failed with status %s", response.status_code)
    if message is not None:
        return Failure(message, ErrorKind.STRUCTURED)
    return status_failure(response.status_code, response.reason_phrase)
