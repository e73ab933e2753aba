"""Uploads multipart/form-data.

Orden de las partes:
- Primero el fichero, luego cada campo auxiliar en el orden recibido. Por eso
  todo va en una sola lista `files=` de httpx (los campos sin filename son campos
  de formulario normales); httpx escapa nombres y filenames.
- Los campos auxiliares vacíos o `None` se omiten.

Notas:
- Sin fichero no hay red: se devuelve un `Failure` de precondición.
- La lectura desde disco aplica un tope de tamaño para no cargar ficheros enormes.
"""

from __future__ import annotations

import logging
import mimetypes
from pathlib import Path
from typing import Mapping

import httpx

from adapters.transport.normalizer import normalize
from core.domain.models import FilePart
from core.domain.outcome import ErrorKind, Failure, OperationFailed, Outcome

logger = logging.getLogger(__name__)


def read_file_part(
    path: Path,
    *,
    field_name: str = "file",
    max_bytes: int,
    content_type: str | None = None,
) -> FilePart:
    """Lee `path` como `FilePart` con tope de tamaño.

    Lanza `OperationFailed(precondition)` si el fichero no existe o supera el tope.
    """

    if not path.is_file():
        raise OperationFailed(f"file not found: {path}", ErrorKind.PRECONDITION)
    size = path.stat().st_size
    if size > max_bytes:
        raise OperationFailed(
            f"file too large for client upload cap: {size} > {max_bytes}",
            ErrorKind.PRECONDITION,
        )
    data = path.read_bytes()
    ct = content_type or mimetypes.guess_type(path.name)[0] or "application/octet-stream"
    return FilePart(field_name=field_name, filename=path.name, data=data, content_type=ct)


def multipart_files(file_part: FilePart, fields: Mapping[str, str | None]) -> list[tuple[str, tuple]]:
    """Partes para `files=`: fichero primero, luego campos no vacíos."""

    parts: list[tuple[str, tuple]] = [
        (file_part.field_name, (file_part.filename, file_part.data, file_part.content_type)),
    ]
    for name, value in fields.items():
        if value is None or value == "":
            continue
        parts.append((name, (None, str(value))))
    return parts


async def send_multipart(
    client: httpx.AsyncClient,
    file_part: FilePart | None,
    fields: Mapping[str, str | None],
    address: str,
    *,
    missing_file_message: str,
    message_field: str = "message",
) -> Outcome:
    """Envía un upload y normaliza la respuesta (ver `normalize`)."""

    if file_part is None:
        return Failure(missing_file_message, ErrorKind.PRECONDITION)

    logger.debug("uploading %s (%d bytes) to %s", file_part.filename, len(file_part.data), address)
    response = await client.post(address, files=multipart_files(file_part, fields))
    return await normalize(response, message_field=message_field)
