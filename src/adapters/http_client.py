"""Wrapper de httpx.

Por qué un wrapper:
- Estandariza base_url, timeouts y headers para todas las operaciones.
- Facilita testeo: se puede inyectar un `transport` (p.ej. `httpx.MockTransport`).

Nota: sin retries ni autenticación; cada activación es un único intento.
"""

from __future__ import annotations

import httpx

from core.config import AppSettings


def build_async_client(
    settings: AppSettings | None = None,
    *,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Crea un `httpx.AsyncClient` apuntando al servicio remoto.

    Por qué un builder:
    - Centraliza base_url/headers para que todas las operaciones se comporten igual.
    - `http_timeout_seconds=None` desactiva el timeout: una petición colgada deja
      el sink en estado pendiente.
    """

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "application/json, text/plain;q=0.9, */*;q=0.8",
    }
    if extra_headers:
        headers.update(extra_headers)
    return httpx.AsyncClient(
        base_url=settings.base_url,
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=True,
        headers=headers,
        transport=transport,
    )
