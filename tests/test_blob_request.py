import httpx
import pytest

from adapters.transport.blob import fetch_blob, publish_blob
from core.domain.models import BinaryObject
from core.domain.outcome import ErrorKind, Failure, Success
from core.services import operations


@pytest.mark.asyncio
async def test_blob_success_materializes_body(make_client):
    audio = b"ID3\x00\x01\x02" * 100

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=audio, headers={"content-type": "audio/mpeg"})

    async with make_client(handler) as client:
        outcome = await fetch_blob(client, operations.speech("hello"))

    assert isinstance(outcome, Success)
    assert outcome.payload == BinaryObject(data=audio, content_type="audio/mpeg")
    assert outcome.payload.byte_length == len(audio)


@pytest.mark.asyncio
async def test_blob_failure_ignores_structured_body(make_client):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(502, json={"message": "AI provider error"})

    async with make_client(handler) as client:
        outcome = await fetch_blob(client, operations.speech("hello"))

    assert outcome == Failure("502 Bad Gateway", ErrorKind.TRANSPORT)


def test_blob_reference_is_revocable(tmp_path):
    binary = BinaryObject(data=b"RIFF....WAVE", content_type="audio/wav")

    with publish_blob(binary, suffix=".wav", directory=tmp_path) as reference:
        assert reference.path.read_bytes() == b"RIFF....WAVE"
        assert reference.path.suffix == ".wav"
        copy = reference.save_as(tmp_path / "out" / "speech.wav")

    assert reference.revoked
    assert not reference.path.exists()
    assert copy.read_bytes() == b"RIFF....WAVE"
    with pytest.raises(ValueError):
        reference.save_as(tmp_path / "again.wav")
