"""Descarga de contenido binario (p.ej. audio TTS).

Reglas:
- Un status no-2xx falla con `"<status> <reason>"`; el body de error no se
  inspecciona (los fallos binarios no traen mensaje estructurado).
- El body se materializa completo antes de devolverlo.
- `BlobReference` es una referencia local transitoria (fichero temporal) que se
  revoca al terminar la operación.
"""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
from pathlib import Path

import httpx

from core.domain.models import BinaryObject, OperationRequest
from core.domain.outcome import Outcome, Success, status_failure

logger = logging.getLogger(__name__)


async def fetch_blob(client: httpx.AsyncClient, request: OperationRequest) -> Outcome:
    """Ejecuta `request` y devuelve `Success(BinaryObject)` o un `Failure` de transporte."""

    response = await client.request(
        request.method,
        request.address,
        params=request.params,
        json=request.json_body,
    )
    if not response.is_success:
        return status_failure(response.status_code, response.reason_phrase)

    content_type = response.headers.get("content-type", "application/octet-stream")
    binary = BinaryObject(data=response.content, content_type=content_type)
    logger.debug("blob received: %d bytes (%s)", binary.byte_length, content_type)
    return Success(binary)


class BlobReference:
    """Referencia local y revocable a un `BinaryObject` (playback/descarga)."""

    def __init__(self, path: Path, byte_length: int, content_type: str) -> None:
        self.path = path
        self.byte_length = byte_length
        self.content_type = content_type
        self._revoked = False

    @property
    def revoked(self) -> bool:
        return self._revoked

    def save_as(self, destination: Path) -> Path:
        """Copia el contenido a `destination` (la copia sobrevive a `revoke`)."""

        if self._revoked:
            raise ValueError("blob reference already revoked")
        destination.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(self.path, destination)
        return destination

    def revoke(self) -> None:
        if self._revoked:
            return
        self._revoked = True
        self.path.unlink(missing_ok=True)

    def __enter__(self) -> "BlobReference":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.revoke()


def publish_blob(binary: BinaryObject, *, suffix: str = "", directory: Path | None = None) -> BlobReference:
    """Escribe `binary` en un fichero temporal y devuelve su referencia."""

    fd, name = tempfile.mkstemp(prefix="ai-console-", suffix=suffix, dir=directory)
    with os.fdopen(fd, "wb") as handle:
        handle.write(binary.data)
    return BlobReference(Path(name), binary.byte_length, binary.content_type)
