"""Catalogue of the remote service's operations.

Each builder turns caller-supplied input into a fresh `OperationRequest`. No
I/O happens here; the dispatcher in `adapters.transport` performs the call.
Path parameters are percent-escaped here; query parameters travel in
`params` and are escaped by the HTTP client.
"""

from __future__ import annotations

from urllib.parse import quote

from core.config import AppSettings
from core.domain.models import (
    ChatRequest,
    FilePart,
    ImageRequest,
    MultipartPayload,
    OperationRequest,
    RagRequest,
    SpeechRequest,
    StructuredRequest,
    TextRequest,
    TransportKind,
    VectorDocumentInput,
    VectorIndexRequest,
    VectorSearchRequest,
)

CHAT_PATH = "/api/chat"
STREAM_PATH = "/api/chat/stream"
STRUCTURED_PATH = "/api/chat/structured"
MEMORY_PATH = "/api/chat/memory/{conversation_id}"
TOOL_PATH = "/api/chat/tool"
FEATURES_PATH = "/api/ai/features"
EMBEDDING_PATH = "/api/ai/embedding"
VECTOR_INDEX_PATH = "/api/ai/vector/index"
VECTOR_SEARCH_PATH = "/api/ai/vector/search"
RAG_PATH = "/api/ai/rag/ask"
IMAGE_PATH = "/api/ai/image"
MODERATION_PATH = "/api/ai/moderation"
SPEECH_PATH = "/api/ai/audio/speech"
TRANSCRIPTION_PATH = "/api/ai/audio/transcription"


def escape_path_param(value: str) -> str:
    """Percent-escape a value placed inside a URL path segment."""

    return quote(value, safe="")


def _or_default(value: str | None, default: str) -> str:
    return value if value else default


def _post_json(address: str, body: dict) -> OperationRequest:
    return OperationRequest(address=address, method="POST", json_body=body)


def chat(message: str) -> OperationRequest:
    return _post_json(CHAT_PATH, ChatRequest(message=message).to_body())


def chat_query(message: str) -> OperationRequest:
    return OperationRequest(address=CHAT_PATH, method="GET", params={"message": message or ""})


def stream_chat(message: str) -> OperationRequest:
    return OperationRequest(
        address=STREAM_PATH,
        method="GET",
        kind=TransportKind.STREAM,
        params={"message": message or ""},
    )


def structured(topic: str) -> OperationRequest:
    return _post_json(STRUCTURED_PATH, StructuredRequest(topic=topic).to_body())


def _memory_address(conversation_id: str | None, settings: AppSettings) -> str:
    conversation = _or_default(conversation_id, settings.default_conversation_id)
    return MEMORY_PATH.format(conversation_id=escape_path_param(conversation))


def memory_chat(
    conversation_id: str | None,
    message: str,
    *,
    settings: AppSettings | None = None,
) -> OperationRequest:
    settings = settings or AppSettings()
    return _post_json(
        _memory_address(conversation_id, settings),
        ChatRequest(message=message).to_body(),
    )


def memory_clear(conversation_id: str | None, *, settings: AppSettings | None = None) -> OperationRequest:
    settings = settings or AppSettings()
    return OperationRequest(address=_memory_address(conversation_id, settings), method="DELETE")


def tool_chat(message: str) -> OperationRequest:
    return _post_json(TOOL_PATH, ChatRequest(message=message).to_body())


def features() -> OperationRequest:
    return OperationRequest(address=FEATURES_PATH, method="GET")


def embedding(text: str) -> OperationRequest:
    return _post_json(EMBEDDING_PATH, TextRequest(text=text).to_body())


def vector_index(
    text: str,
    *,
    doc_id: str | None = None,
    topic: str | None = None,
    settings: AppSettings | None = None,
) -> OperationRequest:
    settings = settings or AppSettings()
    document = VectorDocumentInput(
        id=doc_id or None,
        text=text,
        metadata={"topic": _or_default(topic, settings.default_vector_topic)},
    )
    return _post_json(VECTOR_INDEX_PATH, VectorIndexRequest(documents=[document]).to_body())


def vector_search(
    query: str,
    *,
    top_k: int | None = None,
    similarity_threshold: float | None = None,
    settings: AppSettings | None = None,
) -> OperationRequest:
    settings = settings or AppSettings()
    body = VectorSearchRequest(
        query=query,
        top_k=top_k or settings.default_top_k,
        similarity_threshold=similarity_threshold,
    )
    return _post_json(VECTOR_SEARCH_PATH, body.to_body())


def rag_ask(
    question: str,
    *,
    top_k: int | None = None,
    settings: AppSettings | None = None,
) -> OperationRequest:
    settings = settings or AppSettings()
    body = RagRequest(question=question, top_k=top_k or settings.default_top_k)
    return _post_json(RAG_PATH, body.to_body())


def image(
    prompt: str,
    *,
    model: str | None = None,
    quality: str | None = None,
    style: str | None = None,
) -> OperationRequest:
    body = ImageRequest(prompt=prompt, model=model or None, quality=quality or None, style=style or None)
    return _post_json(IMAGE_PATH, body.to_body())


def moderation(text: str) -> OperationRequest:
    return _post_json(MODERATION_PATH, TextRequest(text=text).to_body())


def speech(
    text: str,
    *,
    voice: str | None = None,
    audio_format: str | None = None,
    model: str | None = None,
    speed: float | None = None,
    settings: AppSettings | None = None,
) -> OperationRequest:
    settings = settings or AppSettings()
    body = SpeechRequest(
        text=text,
        voice=_or_default(voice, settings.default_voice),
        format=_or_default(audio_format, settings.speech_format),
        model=model or None,
        speed=speed,
    )
    return OperationRequest(
        address=SPEECH_PATH,
        method="POST",
        kind=TransportKind.BLOB,
        json_body=body.to_body(),
    )


def transcription(
    file: FilePart | None,
    *,
    language: str | None = None,
    prompt: str | None = None,
) -> OperationRequest:
    return OperationRequest(
        address=TRANSCRIPTION_PATH,
        method="POST",
        kind=TransportKind.MULTIPART,
        multipart=MultipartPayload(file=file, fields={"language": language, "prompt": prompt}),
    )
