"""Consumo incremental de respuestas en streaming (texto UTF-8).

Por qué un decoder explícito:
- Los chunks pueden partir una secuencia multibyte; el estado parcial debe
  sobrevivir entre llamadas y vaciarse al cerrar el stream.
- Se expone como recurso con `with`: se crea al empezar el stream y se libera
  (flush) al terminar.
"""

from __future__ import annotations

import codecs
import logging
from typing import Callable

import httpx

from core.domain.outcome import ErrorKind, Failure, Outcome, Success, status_failure

logger = logging.getLogger(__name__)

UpdateCallback = Callable[[str], None]


class Utf8StreamDecoder:
    """Decoder UTF-8 con estado (bytes parciales entre chunks)."""

    def __init__(self, errors: str = "replace") -> None:
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors=errors)
        self._closed = False

    def decode(self, chunk: bytes) -> str:
        if self._closed:
            raise ValueError("decoder already finished")
        return self._decoder.decode(chunk, final=False)

    def finish(self) -> str:
        """Vacía el estado parcial pendiente. Idempotente."""

        if self._closed:
            return ""
        self._closed = True
        return self._decoder.decode(b"", final=True)

    @property
    def closed(self) -> bool:
        return self._closed

    def __enter__(self) -> "Utf8StreamDecoder":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.finish()


async def consume_stream(response: httpx.Response, on_update: UpdateCallback | None = None) -> Outcome:
    """Lee `response` chunk a chunk y emite el texto acumulado tras cada chunk.

    Estados: Open -> Closed. El acumulador solo crece; tras `Closed` no hay más
    updates. El status se comprueba antes de leer ningún chunk.
    """

    if not response.is_success:
        return status_failure(response.status_code, response.reason_phrase)

    accumulated = ""
    try:
        with Utf8StreamDecoder() as decoder:
            async for chunk in response.aiter_bytes():
                text = decoder.decode(chunk)
                if not text:
                    continue
                accumulated += text
                if on_update:
                    on_update(accumulated)
            tail = decoder.finish()
    except (httpx.HTTPError, httpx.StreamError) as exc:
        logger.warning("stream read failed after %d chars: %s", len(accumulated), exc)
        return Failure(str(exc) or exc.__class__.__name__, ErrorKind.STREAM)

    if tail:
        accumulated += tail
        if on_update:
            on_update(accumulated)
    return Success(accumulated)
