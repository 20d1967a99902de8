"""Tests for side-effect results and sinks."""

from blogku.monitoring.side_effects import (
    LoggingSideEffectSink,
    RecordingSideEffectSink,
    SideEffectResult,
    SideEffectSink,
)


def test_result_constructors() -> None:
    ok = SideEffectResult.success("cache_set", "slug:a")
    failed = SideEffectResult.failure("image_delete", "a_image.png", OSError("busy"))

    assert ok.ok is True
    assert ok.error is None
    assert failed.ok is False
    assert failed.error == "busy"


def test_sinks_conform_to_protocol() -> None:
    assert isinstance(LoggingSideEffectSink(), SideEffectSink)
    assert isinstance(RecordingSideEffectSink(), SideEffectSink)


def test_recording_sink_filters() -> None:
    sink = RecordingSideEffectSink()
    sink.record(SideEffectResult.success("cache_sweep", "list:*"))
    sink.record(SideEffectResult.failure("cache_delete", "slug:a", "down"))

    assert [r.operation for r in sink.failures] == ["cache_delete"]
    assert len(sink.for_operation("cache_sweep")) == 1

    sink.clear()
    assert sink.results == []


def test_logging_sink_accepts_both_outcomes() -> None:
    sink = LoggingSideEffectSink()

    sink.record(SideEffectResult.success("cache_set", "k"))
    sink.record(SideEffectResult.failure("cache_set", "k", "down"))
