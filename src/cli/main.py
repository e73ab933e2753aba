"""CLI (Typer) del AI Console.

Por qué una CLI:
- Cada comando equivale a un formulario/botón de la consola: fija los valores
  de entrada, dispara el trigger y muestra placeholder -> resultado en la terminal.
- El código de exit es 2 si la operación termina en `Failure`.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, Optional

import typer
from rich.console import Console

from adapters.console import ConsoleHooks, PlaygroundConsole
from adapters.http_client import build_async_client
from adapters.transport.blob import BlobReference
from cli import doctor
from cli.ui_components import RichSink, configure_logging
from core.config import AppSettings
from core.domain.outcome import Outcome

app = typer.Typer(no_args_is_help=True, help="Console for the AI demo service (chat, stream, RAG, audio).")
app.add_typer(doctor.app, name="doctor")

_console = Console()


@app.callback()
def main(
    ctx: typer.Context,
    base_url: Optional[str] = typer.Option(None, "--base-url", help="Override AI_CONSOLE_BASE_URL."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging."),
) -> None:
    settings = AppSettings()
    if base_url:
        settings = settings.model_copy(update={"base_url": base_url})
    configure_logging("DEBUG" if verbose else settings.log_level)
    ctx.obj = settings


async def _submit(
    settings: AppSettings,
    trigger: str,
    values: dict[str, Any],
    hooks: ConsoleHooks | None = None,
) -> Outcome:
    sink = RichSink(_console)
    async with build_async_client(settings) as client:
        console = PlaygroundConsole(client, sink, settings, hooks)
        sink.start_live()
        try:
            return await console.submit(trigger, **values)
        finally:
            sink.stop_live()


def _run(ctx: typer.Context, trigger: str, hooks: ConsoleHooks | None = None, **values: Any) -> None:
    outcome = asyncio.run(_submit(ctx.obj, trigger, values, hooks))
    if not outcome.ok:
        raise typer.Exit(code=2)


@app.command()
def chat(
    ctx: typer.Context,
    message: str = typer.Argument(..., help="Message to send."),
    get: bool = typer.Option(False, "--get", help="Use GET /api/chat?message= instead of POST."),
) -> None:
    """Single chat turn."""

    _run(ctx, "chat_query" if get else "chat", message=message)


@app.command()
def stream(ctx: typer.Context, message: str = typer.Argument("", help="Message to stream.")) -> None:
    """Streamed chat reply (text grows while the stream is open)."""

    _run(ctx, "stream", message=message)


@app.command()
def structured(ctx: typer.Context, topic: str = typer.Argument(..., help="Study-plan topic.")) -> None:
    """Structured (JSON schema) study plan."""

    _run(ctx, "structured", topic=topic)


@app.command()
def memory(
    ctx: typer.Context,
    message: str = typer.Argument(...),
    conversation_id: Optional[str] = typer.Option(None, "--conversation", "-c"),
) -> None:
    """Chat with conversation memory."""

    _run(ctx, "memory", conversation_id=conversation_id, message=message)


@app.command(name="memory-clear")
def memory_clear(
    ctx: typer.Context,
    conversation_id: Optional[str] = typer.Option(None, "--conversation", "-c"),
) -> None:
    """Clear a conversation's memory."""

    _run(ctx, "memory_clear", conversation_id=conversation_id)


@app.command()
def tool(ctx: typer.Context, message: str = typer.Argument(...)) -> None:
    """Chat with tool calling enabled."""

    _run(ctx, "tool", message=message)


@app.command()
def embedding(ctx: typer.Context, text: str = typer.Argument(...)) -> None:
    _run(ctx, "embedding", text=text)


@app.command(name="vector-index")
def vector_index(
    ctx: typer.Context,
    text: str = typer.Argument(...),
    doc_id: Optional[str] = typer.Option(None, "--id"),
    topic: Optional[str] = typer.Option(None, "--topic"),
) -> None:
    """Index one document in the vector store."""

    _run(ctx, "vector_index", text=text, doc_id=doc_id, topic=topic)


@app.command(name="vector-search")
def vector_search(
    ctx: typer.Context,
    query: str = typer.Argument(...),
    top_k: Optional[int] = typer.Option(None, "--top-k", min=1),
    threshold: Optional[float] = typer.Option(None, "--threshold", min=0.0, max=1.0),
) -> None:
    _run(ctx, "vector_search", query=query, top_k=top_k, similarity_threshold=threshold)


@app.command()
def rag(
    ctx: typer.Context,
    question: str = typer.Argument(...),
    top_k: Optional[int] = typer.Option(None, "--top-k", min=1),
) -> None:
    """Retrieval-augmented answer."""

    _run(ctx, "rag", question=question, top_k=top_k)


@app.command()
def image(
    ctx: typer.Context,
    prompt: str = typer.Argument(...),
    model: Optional[str] = typer.Option(None, "--model"),
    quality: Optional[str] = typer.Option(None, "--quality"),
    style: Optional[str] = typer.Option(None, "--style"),
) -> None:
    _run(ctx, "image", prompt=prompt, model=model, quality=quality, style=style)


@app.command()
def moderation(ctx: typer.Context, text: str = typer.Argument(...)) -> None:
    _run(ctx, "moderation", text=text)


@app.command()
def speech(
    ctx: typer.Context,
    text: str = typer.Argument(...),
    voice: Optional[str] = typer.Option(None, "--voice"),
    audio_format: Optional[str] = typer.Option(None, "--format"),
    model: Optional[str] = typer.Option(None, "--model"),
    speed: Optional[float] = typer.Option(None, "--speed"),
    out: Optional[Path] = typer.Option(None, "--out", "-o", help="Where to save the audio."),
) -> None:
    """Text-to-speech; saves the returned audio."""

    settings: AppSettings = ctx.obj
    destination = out or Path(f"speech.{audio_format or settings.speech_format}")

    def save(reference: BlobReference) -> None:
        reference.save_as(destination)
        _console.print(f"[green]Saved audio to:[/green] {destination} ({reference.byte_length} bytes)")

    _run(
        ctx,
        "speech",
        ConsoleHooks(on_blob=save),
        text=text,
        voice=voice,
        format=audio_format,
        model=model,
        speed=speed,
    )


@app.command()
def transcribe(
    ctx: typer.Context,
    file: Optional[Path] = typer.Argument(None, help="Audio file to upload."),
    language: Optional[str] = typer.Option(None, "--language", "-l"),
    prompt: Optional[str] = typer.Option(None, "--prompt", help="Hint text for the transcription model."),
) -> None:
    """Upload an audio file for transcription."""

    _run(ctx, "transcription", file=file, language=language, prompt=prompt)


@app.command()
def features(ctx: typer.Context) -> None:
    """Show which AI features the service has enabled."""

    async def _load() -> bool:
        async with build_async_client(ctx.obj) as client:
            console = PlaygroundConsole(client, RichSink(_console), ctx.obj)
            return await console.load_features() is not None

    if not asyncio.run(_load()):
        raise typer.Exit(code=2)


def run() -> None:
    app()


if __name__ == "__main__":
    run()
