"""Dispatch único sobre `TransportKind`.

Por qué una sola función:
- Las cuatro formas de transporte terminan en `Outcome`; los tests (y el binder)
  las ejercitan igual, sin cuatro caminos de código sueltos.
"""

from __future__ import annotations

import logging

import httpx

from adapters.transport.blob import fetch_blob
from adapters.transport.multipart import send_multipart
from adapters.transport.normalizer import normalize
from adapters.transport.stream import UpdateCallback, consume_stream
from core.config import AppSettings
from core.domain.models import MultipartPayload, OperationRequest, TransportKind
from core.domain.outcome import Outcome

logger = logging.getLogger(__name__)


async def dispatch(
    client: httpx.AsyncClient,
    request: OperationRequest,
    *,
    on_update: UpdateCallback | None = None,
    settings: AppSettings | None = None,
) -> Outcome:
    """Ejecuta `request` según su `kind` y devuelve el `Outcome` normalizado."""

    settings = settings or AppSettings()
    logger.debug("dispatch %s %s (%s)", request.method, request.address, request.kind.value)

    if request.kind is TransportKind.STREAM:
        async with client.stream(
            request.method,
            request.address,
            params=request.params,
            json=request.json_body,
        ) as response:
            return await consume_stream(response, on_update)

    if request.kind is TransportKind.BLOB:
        return await fetch_blob(client, request)

    if request.kind is TransportKind.MULTIPART:
        payload = request.multipart or MultipartPayload()
        return await send_multipart(
            client,
            payload.file,
            payload.fields,
            request.address,
            missing_file_message=settings.missing_file_message,
            message_field=settings.error_message_field,
        )

    response = await client.request(
        request.method,
        request.address,
        params=request.params,
        json=request.json_body,
    )
    return await normalize(response, message_field=settings.error_message_field)
