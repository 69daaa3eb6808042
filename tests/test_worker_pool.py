import threading

import pytest

from cadentis.app import (
    AnalysisRequest,
    AnalysisResponse,
    AnalysisWorkerPool,
    CapacityExhaustedError,
    WorkerPoolSettings,
    build_requests,
    create_chunks,
)
from cadentis.app.worker_pool import new_request_id
from cadentis.utils.telemetry import StructuredTelemetry


class _BlockingDispatcher:
    """Holds every request until ``release`` is set."""

    def __init__(self):
        self.started = threading.Event()
        self.release = threading.Event()

    def handle(self, request):
        self.started.set()
        self.release.wait(timeout=5)
        return AnalysisResponse(
            id=request.id,
            result=None,
            chunk_index=request.chunk_index,
            total_chunks=request.total_chunks,
            processing_time_ms=0.0,
        )


def test_short_text_is_a_single_chunk():
    assert create_chunks("aurum\nmons", 100) == ["aurum\nmons"]
    assert create_chunks(None) == [""]


def test_blank_document_still_yields_one_chunk():
    assert create_chunks("\n" * 30, 10) == [""]
    assert create_chunks("   \n\t\n" * 5, 4) == [""]


def test_long_text_is_split_on_line_boundaries():
    text = "\n".join(["a" * 10, "b" * 10, "c" * 10])

    chunks = create_chunks(text, 25)

    assert chunks == ["a" * 10 + "\n" + "b" * 10, "c" * 10]


def test_oversized_line_becomes_its_own_chunk():
    text = "short\n" + "x" * 40 + "\nend"

    assert create_chunks(text, 20) == ["short", "x" * 40, "end"]


def test_build_requests_share_one_id():
    requests = build_requests(
        "\n".join(["a" * 10, "b" * 10, "c" * 10]),
        "syllable-count",
        request_id="doc-1",
        chunk_size=25,
    )

    assert [request.id for request in requests] == ["doc-1", "doc-1"]
    assert [request.chunk_index for request in requests] == [0, 1]
    assert {request.total_chunks for request in requests} == {2}


def test_generated_request_ids_are_unique():
    first, second = new_request_id(), new_request_id()

    assert first.startswith("task_")
    assert first != second


def test_analyze_document_answers_every_chunk():
    settings = WorkerPoolSettings(max_workers=2, max_concurrent_tasks=2, chunk_size=20)
    text = "aurum mons\nkasza tollat\naurum\nmons"

    with AnalysisWorkerPool(settings) as pool:
        responses = pool.analyze_document(text, "syllable-count", request_id="doc")

    assert len(responses) == 3
    assert {response.id for response in responses} == {"doc"}
    assert sorted(response.chunk_index for response in responses) == [0, 1, 2]
    assert sum(response.result["totalSyllables"] for response in responses) == 10


@pytest.mark.parametrize("text", [None, "", "\n" * 30, "  \n\t\n" * 8])
def test_blank_document_is_analysed_as_empty_text(text):
    settings = WorkerPoolSettings(max_workers=1, chunk_size=10)

    with AnalysisWorkerPool(settings) as pool:
        responses = pool.analyze_document(text, "syllable-count", request_id="blank")

    assert len(responses) == 1
    assert responses[0].id == "blank"
    assert responses[0].error is None
    assert responses[0].result["totalSyllables"] == 0
    assert responses[0].result["totalMoras"] == 0


def test_capacity_timeout_only_fails_the_waiting_chunk():
    dispatcher = _BlockingDispatcher()
    telemetry = StructuredTelemetry()

    def _free_slot_after_rejection(event_type, payload):
        if event_type == "counter" and payload["name"] == "pool.capacity_exhausted":
            dispatcher.release.set()

    telemetry.add_listener(_free_slot_after_rejection)
    settings = WorkerPoolSettings(
        max_workers=2, max_concurrent_tasks=1, chunk_size=10, task_timeout=0.5
    )
    text = "\n".join(["a" * 8, "b" * 8, "c" * 8])

    with AnalysisWorkerPool(settings, dispatcher=dispatcher, telemetry=telemetry) as pool:
        responses = pool.analyze_document(text, "syllable-count", request_id="doc")

    assert len(responses) == 3
    failed = [response for response in responses if not response.ok]
    assert len(failed) == 1
    assert failed[0].chunk_index == 1
    assert failed[0].total_chunks == 3
    assert failed[0].error == "Too many concurrent tasks. Please wait and try again."
    assert sorted(response.chunk_index for response in responses if response.ok) == [0, 2]


def test_failed_request_does_not_affect_others():
    requests = [
        AnalysisRequest(id="ok-1", text="aurum", analysis_type="syllable-count"),
        AnalysisRequest(id="bad", text="aurum", analysis_type="scansion"),
        {"id": "ok-2", "text": "cat\nhat", "analysisType": "rhyme-analysis"},
    ]

    with AnalysisWorkerPool(WorkerPoolSettings(max_workers=3)) as pool:
        responses = {response.id: response for response in pool.run_all(requests)}

    assert responses["ok-1"].result["totalSyllables"] == 2
    assert responses["bad"].error == "Unknown analysis type: scansion"
    assert responses["ok-2"].result["pattern"] == ["a", "a"]


def test_submission_fails_when_capacity_is_exhausted():
    dispatcher = _BlockingDispatcher()
    settings = WorkerPoolSettings(max_workers=2, max_concurrent_tasks=1, task_timeout=0.05)
    telemetry = StructuredTelemetry()
    pool = AnalysisWorkerPool(settings, dispatcher=dispatcher, telemetry=telemetry)

    try:
        first = pool.submit(AnalysisRequest(id="1", text="a", analysis_type="syllable-count"))
        assert dispatcher.started.wait(timeout=5)

        with pytest.raises(CapacityExhaustedError) as excinfo:
            pool.submit(AnalysisRequest(id="2", text="a", analysis_type="syllable-count"))

        assert str(excinfo.value) == "Too many concurrent tasks. Please wait and try again."
        assert isinstance(excinfo.value, TimeoutError)
    finally:
        dispatcher.release.set()
        pool.close()

    assert first.result().id == "1"
    assert telemetry.snapshot()["counters"]["pool.capacity_exhausted"] == 1


def test_pool_records_telemetry_counters():
    telemetry = StructuredTelemetry()
    settings = WorkerPoolSettings(max_workers=2, chunk_size=10)

    with AnalysisWorkerPool(settings, telemetry=telemetry) as pool:
        pool.analyze_document("aurum mons\nkasza", "bogus-type")

    snapshot = telemetry.snapshot()
    assert snapshot["name"] == "analyze_document"
    assert snapshot["metadata"]["document.chunks"] == 2
    assert snapshot["counters"]["pool.submitted"] == 2
    assert snapshot["counters"]["pool.failed"] == 2
    assert "pool.completed" not in snapshot["counters"]
    assert snapshot["timings"]["pool.request"]["count"] == 2
