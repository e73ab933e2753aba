"""Playground console: wiring of every form/button to its endpoint.

Each trigger is bound once to a display target and a producer. Producers read
their input values and build a fresh `OperationRequest` when the trigger fires
(not when it is bound, nor when the task starts). Dispatch and the post-processing
that the UI needs (image link, audio reference) run in the activation task,
before the binder writes the final value.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Awaitable, Callable, Mapping

import httpx

from adapters.feature_probe import load_features
from adapters.transport.blob import BlobReference, publish_blob
from adapters.transport.dispatcher import dispatch
from adapters.transport.multipart import read_file_part
from core.config import AppSettings
from core.domain.models import Badge, BinaryObject, FilePart, OperationRequest, TransportKind
from core.domain.outcome import Outcome, Success
from core.interfaces.sink import DisplaySink
from core.services import operations
from core.services.binder import Producer, TriggerBoard, bind

logger = logging.getLogger(__name__)

Values = Mapping[str, Any]
Builder = Callable[[Values, AppSettings], OperationRequest]


def _text(values: Values, key: str) -> str:
    value = values.get(key)
    return "" if value is None else str(value)


def _optional_text(values: Values, key: str) -> str | None:
    return _text(values, key) or None


def _optional_int(values: Values, key: str) -> int | None:
    value = values.get(key)
    if value is None or value == "":
        return None
    return int(value)


def _optional_float(values: Values, key: str) -> float | None:
    value = values.get(key)
    if value is None or value == "":
        return None
    return float(value)


def _file_part(values: Values, settings: AppSettings) -> FilePart | None:
    value = values.get("file")
    if value is None or value == "":
        return None
    if isinstance(value, FilePart):
        return value
    return read_file_part(Path(value), field_name="file", max_bytes=settings.max_upload_bytes)


@dataclass(frozen=True)
class FormBinding:
    trigger: str
    target: str
    placeholder: str
    build: Builder


FORMS: tuple[FormBinding, ...] = (
    FormBinding("chat", "chat_output", "pending_text", lambda v, s: operations.chat(_text(v, "message"))),
    FormBinding(
        "chat_query",
        "chat_output",
        "pending_text",
        lambda v, s: operations.chat_query(_text(v, "message")),
    ),
    FormBinding(
        "stream",
        "stream_output",
        "streaming_text",
        lambda v, s: operations.stream_chat(_text(v, "message")),
    ),
    FormBinding(
        "structured",
        "structured_output",
        "pending_text",
        lambda v, s: operations.structured(_text(v, "topic")),
    ),
    FormBinding(
        "memory",
        "memory_output",
        "pending_text",
        lambda v, s: operations.memory_chat(
            _optional_text(v, "conversation_id"), _text(v, "message"), settings=s
        ),
    ),
    FormBinding(
        "memory_clear",
        "memory_output",
        "clearing_text",
        lambda v, s: operations.memory_clear(_optional_text(v, "conversation_id"), settings=s),
    ),
    FormBinding("tool", "tool_output", "pending_text", lambda v, s: operations.tool_chat(_text(v, "message"))),
    FormBinding(
        "embedding",
        "embedding_output",
        "pending_text",
        lambda v, s: operations.embedding(_text(v, "text")),
    ),
    FormBinding(
        "vector_index",
        "vector_index_output",
        "pending_text",
        lambda v, s: operations.vector_index(
            _text(v, "text"),
            doc_id=_optional_text(v, "doc_id"),
            topic=_optional_text(v, "topic"),
            settings=s,
        ),
    ),
    FormBinding(
        "vector_search",
        "vector_search_output",
        "pending_text",
        lambda v, s: operations.vector_search(
            _text(v, "query"),
            top_k=_optional_int(v, "top_k"),
            similarity_threshold=_optional_float(v, "similarity_threshold"),
            settings=s,
        ),
    ),
    FormBinding(
        "rag",
        "rag_output",
        "pending_text",
        lambda v, s: operations.rag_ask(_text(v, "question"), top_k=_optional_int(v, "top_k"), settings=s),
    ),
    FormBinding(
        "image",
        "image_output",
        "pending_text",
        lambda v, s: operations.image(
            _text(v, "prompt"),
            model=_optional_text(v, "model"),
            quality=_optional_text(v, "quality"),
            style=_optional_text(v, "style"),
        ),
    ),
    FormBinding(
        "moderation",
        "moderation_output",
        "pending_text",
        lambda v, s: operations.moderation(_text(v, "text")),
    ),
    FormBinding(
        "speech",
        "speech_output",
        "pending_text",
        lambda v, s: operations.speech(
            _text(v, "text"),
            voice=_optional_text(v, "voice"),
            audio_format=_optional_text(v, "format"),
            model=_optional_text(v, "model"),
            speed=_optional_float(v, "speed"),
            settings=s,
        ),
    ),
    FormBinding(
        "transcription",
        "transcription_output",
        "uploading_text",
        lambda v, s: operations.transcription(
            _file_part(v, s),
            language=_optional_text(v, "language"),
            prompt=_optional_text(v, "prompt"),
        ),
    ),
)

IMAGE_LINK_TARGET = "image_link"
FEATURES_TARGET = "features"


@dataclass
class ConsoleHooks:
    """Optional callbacks for UI layers."""

    # Called while the audio reference is alive; it is revoked right after.
    on_blob: Callable[[BlobReference], None] | None = None


class PlaygroundConsole:
    """Binds every `FormBinding` to a sink and fires triggers on demand."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        sink: DisplaySink,
        settings: AppSettings | None = None,
        hooks: ConsoleHooks | None = None,
    ) -> None:
        self.client = client
        self.sink = sink
        self.settings = settings or AppSettings()
        self.hooks = hooks or ConsoleHooks()
        self.board = TriggerBoard()
        self._values: dict[str, dict[str, Any]] = {}
        self._forms = {form.trigger: form for form in FORMS}
        for form in FORMS:
            bind(
                self.board,
                form.trigger,
                sink,
                form.target,
                self._producer(form),
                placeholder=getattr(self.settings, form.placeholder),
            )

    def set_values(self, trigger: str, **values: Any) -> None:
        self._values[trigger] = dict(values)

    def values(self, trigger: str) -> dict[str, Any]:
        return dict(self._values.get(trigger, {}))

    def fire(self, trigger: str) -> "asyncio.Task[Outcome]":
        return self.board.fire(trigger)

    async def submit(self, trigger: str, **values: Any) -> Outcome:
        """Set the form values, fire the trigger and wait for its outcome."""

        self.set_values(trigger, **values)
        return await self.fire(trigger)

    def target_for(self, trigger: str) -> str:
        return self._forms[trigger].target

    async def load_features(self) -> list[Badge] | None:
        return await load_features(self.client, self.sink, FEATURES_TARGET, settings=self.settings)

    def _producer(self, form: FormBinding) -> Producer:
        def produce() -> Awaitable[Outcome]:
            request = form.build(self.values(form.trigger), self.settings)
            return self._execute(form, request)

        return produce

    async def _execute(self, form: FormBinding, request: OperationRequest) -> Outcome:
        on_update = self._stream_updater(form.target) if request.kind is TransportKind.STREAM else None
        outcome = await dispatch(self.client, request, on_update=on_update, settings=self.settings)
        if form.trigger == "image":
            self._update_image_link(outcome)
        if form.trigger == "speech":
            return self._publish_speech(outcome, request)
        return outcome

    def _stream_updater(self, target: str) -> Callable[[str], None]:
        def on_update(text: str) -> None:
            self.sink.show(target, text, False)

        return on_update

    def _update_image_link(self, outcome: Outcome) -> None:
        if not isinstance(outcome, Success):
            return
        payload = outcome.payload
        url = payload.get("url") if isinstance(payload, dict) else None
        self.sink.show(IMAGE_LINK_TARGET, url if isinstance(url, str) and url else "", False)

    def _publish_speech(self, outcome: Outcome, request: OperationRequest) -> Outcome:
        if not isinstance(outcome, Success):
            return outcome
        binary: BinaryObject = outcome.payload
        audio_format = (request.json_body or {}).get("format") or self.settings.speech_format
        with publish_blob(binary, suffix=f".{audio_format}") as reference:
            if self.hooks.on_blob:
                self.hooks.on_blob(reference)
        logger.debug("speech reference revoked (%d bytes)", binary.byte_length)
        return Success({"status": "ok", "bytes": binary.byte_length})
