import httpx
import pytest

from adapters.transport.stream import Utf8StreamDecoder, consume_stream
from core.domain.outcome import ErrorKind, Failure, Success


async def _chunks(*parts: bytes):
    for part in parts:
        yield part


def test_decoder_carries_partial_sequence_between_chunks():
    encoded = "é".encode("utf-8")

    with Utf8StreamDecoder() as decoder:
        first = decoder.decode(encoded[:1])
        second = decoder.decode(encoded[1:])

    assert first == ""
    assert second == "é"
    assert decoder.closed


def test_decoder_flushes_incomplete_tail_on_finish():
    decoder = Utf8StreamDecoder()
    decoder.decode(b"ok\xe2\x82")

    assert decoder.finish() == "\ufffd"
    assert decoder.finish() == ""
    with pytest.raises(ValueError):
        decoder.decode(b"more")


@pytest.mark.asyncio
async def test_updates_grow_with_each_chunk():
    updates: list[str] = []
    response = httpx.Response(200, content=_chunks(b"He", b"llo"))

    outcome = await consume_stream(response, updates.append)

    assert updates == ["He", "Hello"]
    assert outcome == Success("Hello")


@pytest.mark.asyncio
async def test_multibyte_character_split_across_chunks():
    updates: list[str] = []
    snowman = "☃".encode("utf-8")
    response = httpx.Response(200, content=_chunks(b"a" + snowman[:2], snowman[2:] + b"b"))

    outcome = await consume_stream(response, updates.append)

    assert outcome == Success("a☃b")
    assert updates == ["a", "a☃b"]
    assert all("\ufffd" not in update for update in updates)


@pytest.mark.asyncio
async def test_chunk_with_only_a_lead_byte_emits_no_update():
    updates: list[str] = []
    snowman = "☃".encode("utf-8")
    response = httpx.Response(200, content=_chunks(b"a", snowman[:1], snowman[1:]))

    outcome = await consume_stream(response, updates.append)

    assert updates == ["a", "a☃"]
    assert outcome == Success("a☃")


@pytest.mark.asyncio
async def test_truncated_sequence_is_flushed_at_close():
    updates: list[str] = []
    response = httpx.Response(200, content=_chunks(b"x\xc3"))

    outcome = await consume_stream(response, updates.append)

    assert updates == ["x", "x\ufffd"]
    assert outcome == Success("x\ufffd")


@pytest.mark.asyncio
async def test_error_status_fails_before_reading_any_chunk():
    read = []

    async def body():
        read.append(True)
        yield b"never"

    response = httpx.Response(503, content=body())
    updates: list[str] = []

    outcome = await consume_stream(response, updates.append)

    assert outcome == Failure("503 Service Unavailable", ErrorKind.TRANSPORT)
    assert read == []
    assert updates == []


@pytest.mark.asyncio
async def test_chunk_read_failure_surfaces_reader_message():
    async def body():
        yield b"partial "
        raise httpx.ReadError("connection reset by peer")

    updates: list[str] = []
    outcome = await consume_stream(httpx.Response(200, content=body()), updates.append)

    assert outcome == Failure("connection reset by peer", ErrorKind.STREAM)
    assert updates == ["partial "]


@pytest.mark.asyncio
async def test_update_callback_is_optional():
    outcome = await consume_stream(httpx.Response(200, content=_chunks(b"quiet")))

    assert outcome == Success("quiet")
