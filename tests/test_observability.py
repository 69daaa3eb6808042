import logging

from cadentis.utils.observability import (
    add_span_attributes,
    create_counter,
    get_logger,
)
from cadentis.utils.telemetry import StructuredTelemetry, TelemetryLogger


def test_structured_telemetry_emits_logging_events(caplog):
    telemetry = StructuredTelemetry()
    telemetry.add_listener(TelemetryLogger())

    caplog.set_level(logging.DEBUG, logger="cadentis.utils.telemetry")

    telemetry.start_trace("document")
    with telemetry.timer("pool.request"):
        pass
    telemetry.increment("pool.completed")
    telemetry.annotate("document.chunks", 3)

    messages = [record.message for record in caplog.records]
    assert any("Telemetry trace_started: document" in message for message in messages)
    assert any("Telemetry timer_started: pool.request" in message for message in messages)
    assert any("Telemetry timing: pool.request" in message for message in messages)
    assert any("Telemetry counter: pool.completed" in message for message in messages)
    assert any("Telemetry metadata: document.chunks" in message for message in messages)


def test_broken_listener_does_not_break_recording():
    def _broken(event_type, payload):
        raise RuntimeError("listener down")

    telemetry = StructuredTelemetry(listeners=[_broken])
    telemetry.increment("pool.submitted", 2)

    assert telemetry.snapshot()["counters"] == {"pool.submitted": 2.0}


def test_timings_aggregate_with_injected_clock():
    ticks = iter([0.0, 0.5, 1.0, 1.25])
    telemetry = StructuredTelemetry(time_fn=lambda: next(ticks))

    with telemetry.timer("pool.request"):
        pass
    with telemetry.timer("pool.request"):
        pass

    bucket = telemetry.snapshot()["timings"]["pool.request"]
    assert bucket["count"] == 2
    assert bucket["min"] == 0.25
    assert bucket["max"] == 0.5
    assert bucket["avg"] == 0.375


def test_bound_logger_renders_context(caplog):
    logger = get_logger("cadentis.tests").bind(component="scanner")
    caplog.set_level(logging.INFO, logger="cadentis.tests")

    logger.info("Scan finished", context={"line": 2})

    assert caplog.records[-1].message == 'Scan finished | {"component": "scanner", "line": 2}'


def test_counter_is_reused_on_reregistration():
    first = create_counter("cadentis_test_scans_total", "Scan counter.", ("kind",))
    second = create_counter("cadentis_test_scans_total", "Scan counter.", ("kind",))

    first.labels(kind="a").inc()
    second.labels(kind="a").inc()


class _RecordingSpan:
    def __init__(self):
        self.attributes = {}

    def set_attribute(self, key, value):
        self.attributes[key] = value


def test_span_attributes_skip_none_and_stringify_objects():
    span = _RecordingSpan()

    add_span_attributes(span, {"id": "x", "chunk": None, "lines": [1, 2], "ok": True})

    assert span.attributes == {"id": "x", "lines": "[1, 2]", "ok": True}
