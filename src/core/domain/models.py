"""Modelos del dominio (Pydantic v2 + dataclasses).

Por qué Pydantic en los cuerpos de petición:
- Validación estricta y documentación autocontenida (Field) del contrato del
  servicio remoto, sin acoplar el Core a httpx.
- Los alias camelCase (`topK`, `similarityThreshold`) quedan en un solo sitio.

Por qué dataclasses en `OperationRequest`:
- Son descripciones efímeras (una por activación), sin validación de borde.

Nota:
- Estos modelos describen *qué* se pide, no *cómo* se envía.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class TransportKind(str, Enum):
    """Forma de transporte de una operación."""

    PLAIN_JSON = "plain"
    STREAM = "stream"
    BLOB = "blob"
    MULTIPART = "multipart"


@dataclass(frozen=True)
class FilePart:
    """Fichero a subir en un cuerpo multipart."""

    field_name: str
    filename: str
    data: bytes
    content_type: str = "application/octet-stream"


@dataclass(frozen=True)
class MultipartPayload:
    """Partes de un upload: el fichero (obligatorio al enviar) y campos auxiliares."""

    file: FilePart | None = None
    fields: Mapping[str, str | None] = field(default_factory=dict)


@dataclass(frozen=True)
class OperationRequest:
    """Una llamada disparada por el usuario. Se construye nueva en cada activación."""

    address: str
    method: str = "GET"
    kind: TransportKind = TransportKind.PLAIN_JSON
    json_body: Any = None
    params: Mapping[str, str] | None = None
    multipart: MultipartPayload | None = None


@dataclass(frozen=True)
class BinaryObject:
    """Cuerpo binario materializado (p.ej. audio de `/api/ai/audio/speech`)."""

    data: bytes
    content_type: str = "application/octet-stream"

    @property
    def byte_length(self) -> int:
        return len(self.data)


@dataclass(frozen=True)
class Badge:
    name: str
    enabled: bool

    @property
    def label(self) -> str:
        return f"{self.name}: {'on' if self.enabled else 'off'}"


FeatureMap = dict[str, bool]


class _ApiModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    def to_body(self) -> dict[str, Any]:
        """Serializa con alias del servicio y sin campos `None`."""

        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class ChatRequest(_ApiModel):
    message: str = Field(default="", description="Mensaje del usuario.")


class StructuredRequest(_ApiModel):
    topic: str = Field(default="", description="Tema para el study-plan estructurado.")


class TextRequest(_ApiModel):
    text: str = Field(default="", description="Texto a embeber o moderar.")


class VectorDocumentInput(BaseModel):
    model_config = ConfigDict(extra="forbid")

    id: str | None = Field(
        default=None,
        description="Id del documento; None deja que el servicio lo genere.",
    )
    text: str = Field(default="", description="Contenido a indexar.")
    metadata: dict[str, Any] = Field(
        default_factory=dict,
        description="Metadatos arbitrarios (p.ej. topic).",
    )


class VectorIndexRequest(_ApiModel):
    documents: list[VectorDocumentInput] = Field(default_factory=list)

    def to_body(self) -> dict[str, Any]:
        # `id: null` es parte del contrato: no se omite.
        return {"documents": [doc.model_dump(mode="json") for doc in self.documents]}


class VectorSearchRequest(_ApiModel):
    query: str = Field(default="")
    top_k: int = Field(default=3, ge=1, alias="topK")
    similarity_threshold: float | None = Field(
        default=None,
        ge=0.0,
        le=1.0,
        alias="similarityThreshold",
    )


class RagRequest(_ApiModel):
    question: str = Field(default="")
    top_k: int = Field(default=3, ge=1, alias="topK")


class ImageRequest(_ApiModel):
    prompt: str = Field(default="")
    model: str | None = None
    quality: str | None = None
    style: str | None = None


class SpeechRequest(_ApiModel):
    text: str = Field(default="")
    model: str | None = None
    voice: str = Field(default="alloy", min_length=1)
    format: str = Field(default="mp3", min_length=1)
    speed: float | None = Field(default=None, gt=0.0, le=4.0)
