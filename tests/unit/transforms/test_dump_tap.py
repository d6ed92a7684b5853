"""Unit tests for the diagnostic dump tap."""

from __future__ import annotations

import io

from transforms.composition import compose_all
from transforms.dump_tap import LoggerSink, StreamSink, dump_tap
from transforms.escaping import escape_line


class _RecordingSink:
    def __init__(self) -> None:
        self.calls: list[tuple[str, str]] = []

    def emit(self, label: str, text: str) -> None:
        self.calls.append((label, text))


class _BrokenSink:
    def emit(self, label: str, text: str) -> None:
        raise OSError("diagnostic stream gone")


class _FakeLogger:
    def __init__(self) -> None:
        self.events: list[tuple[str, dict[str, object]]] = []

    def info(self, event: str, **fields: object) -> None:
        self.events.append((event, fields))

    def warning(self, event: str, **fields: object) -> None:
        self.events.append((event, fields))


def test_dump_tap_returns_line_unchanged_and_reports_it() -> None:
    """The tap should forward the labelled line without altering it."""
    sink = _RecordingSink()
    tap = dump_tap(sink, label="[SEEN]")

    assert tap(1, "hello") == "hello"
    assert sink.calls == [("[SEEN]", "hello")]


def test_dump_tap_observes_output_of_previous_transform() -> None:
    """A tap placed after escape should see the escaped text."""
    sink = _RecordingSink()
    chain = compose_all([escape_line, dump_tap(sink)])

    assert chain(1, "語") == "\\u8A9E"
    assert sink.calls == [("[DUMP]", "\\u8A9E")]


def test_dump_tap_survives_failing_sink(monkeypatch) -> None:
    """Sink failures should be logged and never change the line."""
    fake_logger = _FakeLogger()
    monkeypatch.setattr("transforms.dump_tap._LOGGER", fake_logger)
    tap = dump_tap(_BrokenSink())

    assert tap(4, "payload") == "payload"
    assert [event for event, _ in fake_logger.events] == ["dump_tap_failed"]
    assert fake_logger.events[0][1]["line_number"] == 4


def test_stream_sink_writes_label_prefixed_lines() -> None:
    """Stream sink should write one labelled line per call."""
    buffer = io.StringIO()
    tap = dump_tap(StreamSink(buffer))

    tap(1, "first")
    tap(2, "second")

    assert buffer.getvalue() == "[DUMP]first\n[DUMP]second\n"


def test_stream_sink_defaults_to_stdout(capsys) -> None:
    """Without an explicit stream the tap should print to stdout."""
    dump_tap()(1, "visible")

    assert capsys.readouterr().out == "[DUMP]visible\n"


def test_logger_sink_emits_structured_event(monkeypatch) -> None:
    """Logger sink should emit a line_dumped event with label and text."""
    fake_logger = _FakeLogger()
    monkeypatch.setattr("transforms.dump_tap._LOGGER", fake_logger)

    LoggerSink().emit("[DUMP]", "text")

    assert fake_logger.events == [("line_dumped", {"label": "[DUMP]", "text": "text"})]
