from core.domain.models import FilePart, TransportKind
from core.services import operations


def test_chat_family_builders():
    assert operations.chat("hi").json_body == {"message": "hi"}
    assert operations.tool_chat("time?").address == "/api/chat/tool"

    query = operations.chat_query("salom")
    assert (query.method, query.address, query.params) == ("GET", "/api/chat", {"message": "salom"})

    stream = operations.stream_chat("")
    assert stream.kind is TransportKind.STREAM
    assert stream.params == {"message": ""}


def test_memory_defaults_and_escaping(settings):
    assert operations.memory_chat("", "hi", settings=settings).address == "/api/chat/memory/default"
    assert operations.memory_clear(None, settings=settings).method == "DELETE"
    assert operations.memory_clear("ä/?#", settings=settings).address == "/api/chat/memory/%C3%A4%2F%3F%23"


def test_vector_index_document_shape(settings):
    request = operations.vector_index("Spring AI notes", doc_id="", topic=None, settings=settings)

    assert request.json_body == {
        "documents": [{"id": None, "text": "Spring AI notes", "metadata": {"topic": "general"}}]
    }

    named = operations.vector_index("x", doc_id="doc-1", topic="java", settings=settings)
    assert named.json_body["documents"][0]["id"] == "doc-1"
    assert named.json_body["documents"][0]["metadata"] == {"topic": "java"}


def test_search_and_rag_use_camel_case_and_default_top_k(settings):
    search = operations.vector_search("vectors", settings=settings)
    assert search.json_body == {"query": "vectors", "topK": 3}

    tuned = operations.vector_search("vectors", top_k=5, similarity_threshold=0.4, settings=settings)
    assert tuned.json_body == {"query": "vectors", "topK": 5, "similarityThreshold": 0.4}

    assert operations.rag_ask("why?", settings=settings).json_body == {"question": "why?", "topK": 3}


def test_image_drops_empty_options():
    assert operations.image("a cat", model="", quality=None).json_body == {"prompt": "a cat"}
    assert operations.image("a cat", style="vivid").json_body == {"prompt": "a cat", "style": "vivid"}


def test_speech_is_blob_with_defaults(settings):
    request = operations.speech("hello", voice="", settings=settings)

    assert request.kind is TransportKind.BLOB
    assert request.json_body == {"text": "hello", "voice": "alloy", "format": "mp3"}


def test_transcription_is_multipart():
    part = FilePart("file", "a.mp3", b"x")
    request = operations.transcription(part, language="uz")

    assert request.kind is TransportKind.MULTIPART
    assert request.multipart.file is part
    assert dict(request.multipart.fields) == {"language": "uz", "prompt": None}
    assert list(operations.transcription(part, language="en", prompt="names: Aziz").multipart.fields.items()) == [
        ("language", "en"),
        ("prompt", "names: Aziz"),
    ]
    assert operations.transcription(None).multipart.file is None


def test_text_operations():
    assert operations.embedding("abc").json_body == {"text": "abc"}
    assert operations.moderation("abc").address == "/api/ai/moderation"
    assert operations.structured("Kotlin").json_body == {"topic": "Kotlin"}
    assert operations.features().address == "/api/ai/features"
