from io import StringIO

from rich.console import Console

from adapters.sinks import MemorySink
from cli.ui_components import RichSink, build_badges
from core.domain.models import Badge
from core.interfaces.sink import DisplaySink
from core.services.rendering import render_value


def test_render_value_text_is_verbatim():
    assert render_value("  line 1\nline 2 ") == "  line 1\nline 2 "


def test_render_value_keeps_key_order_and_expands_nesting():
    value = {"z": 1, "a": {"nested": [1, {"deep": None}]}, "ok": True, "name": "Ünïcode"}

    assert render_value(value) == (
        "{\n"
        '  "z": 1,\n'
        '  "a": {\n'
        '    "nested": [\n'
        "      1,\n"
        "      {\n"
        '        "deep": null\n'
        "      }\n"
        "    ]\n"
        "  },\n"
        '  "ok": true,\n'
        '  "name": "Ünïcode"\n'
        "}"
    )


def test_memory_sink_error_flag_is_idempotent():
    sink = MemorySink()

    sink.show("out", "bad", True)
    sink.show("out", "bad", True)
    assert sink.state("out").is_error

    sink.show("out", {"fine": 1}, False)
    assert not sink.state("out").is_error
    assert sink.state("out").value == {"fine": 1}
    assert len(sink.writes("out")) == 3


def test_memory_sink_badges_replace_text():
    sink = MemorySink()
    sink.show("features", "Loading features...")

    sink.show_badges("features", [Badge("chat", True), Badge("rag", False)])

    state = sink.state("features")
    assert state.text == ""
    assert [b.label for b in state.badges] == ["chat: on", "rag: off"]


def test_sinks_satisfy_protocol():
    assert isinstance(MemorySink(), DisplaySink)
    assert isinstance(RichSink(Console(file=StringIO())), DisplaySink)


def test_rich_sink_prints_panels_and_tracks_errors():
    buffer = StringIO()
    sink = RichSink(Console(file=buffer, width=80, color_system=None))

    sink.show("chat_output", {"reply": "hello"})
    sink.show("speech_output", "500 Internal Server Error", True)

    output = buffer.getvalue()
    assert '"reply": "hello"' in output
    assert "500 Internal Server Error" in output
    assert sink.errors == {"chat_output": False, "speech_output": True}


def test_build_badges_labels():
    text = build_badges([Badge("chat", True), Badge("image", False)])

    assert text.plain == " chat: on   image: off "
