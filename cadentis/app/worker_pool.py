"""Run independent analysis requests concurrently.

The pool only bounds and executes work. It never orders, merges or retries
chunk responses; callers match responses by ``id`` and ``chunkIndex``.
"""

from __future__ import annotations

import threading
import uuid
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from typing import Any, Iterable, Iterator, List, Optional

from ..utils.observability import get_logger
from ..utils.telemetry import StructuredTelemetry
from .config import DEFAULT_CHUNK_SIZE, WorkerPoolSettings
from .dispatch import DEFAULT_DISPATCHER, AnalysisDispatcher, RequestLike
from .errors import CapacityExhaustedError
from .protocol import AnalysisRequest, AnalysisResponse


def create_chunks(text: Optional[str], chunk_size: int = DEFAULT_CHUNK_SIZE) -> List[str]:
    """Split ``text`` on line boundaries into pieces of at most ``chunk_size``.

    Text that already fits is returned untouched as a single chunk. A single
    line longer than ``chunk_size`` becomes its own oversized chunk. Chunks
    holding only whitespace are dropped; a document with nothing else still
    yields one empty chunk.
    """

    source = text or ""
    if len(source) <= chunk_size:
        return [source]

    chunks: List[str] = []
    current = ""
    for line in source.split("\n"):
        if current and len(current) + len(line) + 1 > chunk_size:
            if current.strip():
                chunks.append(current.strip())
            current = line
        else:
            current = f"{current}\n{line}" if current else line

    if current.strip():
        chunks.append(current.strip())
    return chunks or [""]


def new_request_id() -> str:
    return f"task_{uuid.uuid4().hex[:12]}"


def build_requests(
    text: Optional[str],
    analysis_type: Any,
    *,
    request_id: Optional[str] = None,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> List[AnalysisRequest]:
    """Build one request per chunk, all sharing ``request_id``."""

    identifier = request_id or new_request_id()
    chunks = create_chunks(text, chunk_size)
    return [
        AnalysisRequest(
            id=identifier,
            text=chunk,
            analysis_type=analysis_type,
            chunk_index=index,
            total_chunks=len(chunks),
        )
        for index, chunk in enumerate(chunks)
    ]


class AnalysisWorkerPool:
    """Thread pool that answers requests through an :class:`AnalysisDispatcher`."""

    def __init__(
        self,
        settings: Optional[WorkerPoolSettings] = None,
        *,
        dispatcher: Optional[AnalysisDispatcher] = None,
        telemetry: Optional[StructuredTelemetry] = None,
    ) -> None:
        self.settings = settings or WorkerPoolSettings.from_env()
        self.dispatcher = dispatcher or DEFAULT_DISPATCHER
        self.telemetry = telemetry or StructuredTelemetry()
        self._executor = ThreadPoolExecutor(
            max_workers=self.settings.max_workers,
            thread_name_prefix="cadentis-analysis",
        )
        self._slots = threading.BoundedSemaphore(self.settings.max_concurrent_tasks)
        self._logger = get_logger(__name__).bind(component="analysis_worker_pool")
        self._logger.info(
            "Analysis worker pool initialised",
            context={
                "max_workers": self.settings.max_workers,
                "max_concurrent_tasks": self.settings.max_concurrent_tasks,
                "task_timeout": self.settings.task_timeout,
            },
        )

    def __enter__(self) -> "AnalysisWorkerPool":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)

    def _acquire_slot(self) -> None:
        timeout = self.settings.task_timeout
        with self.telemetry.timer("pool.slot.wait"):
            if timeout is None:
                acquired = self._slots.acquire()
            else:
                acquired = self._slots.acquire(timeout=timeout)
        if not acquired:
            self.telemetry.increment("pool.capacity_exhausted")
            self._logger.warning(
                "Worker pool capacity exhausted",
                context={"max_concurrent_tasks": self.settings.max_concurrent_tasks},
            )
            raise CapacityExhaustedError(self.settings.max_concurrent_tasks)

    def _release_slot(self, _future: Future) -> None:
        self._slots.release()

    def _execute(self, request: RequestLike) -> AnalysisResponse:
        with self.telemetry.timer("pool.request") as metadata:
            response = self.dispatcher.handle(request)
            metadata["id"] = response.id
            metadata["chunk_index"] = response.chunk_index
        self.telemetry.increment("pool.completed" if response.ok else "pool.failed")
        return response

    def submit(self, request: RequestLike) -> "Future[AnalysisResponse]":
        """Schedule ``request``; blocks while all concurrency slots are busy.

        Raises :class:`CapacityExhaustedError` when ``task_timeout`` elapses
        before a slot frees up.
        """

        self._acquire_slot()
        try:
            future = self._executor.submit(self._execute, request)
        except Exception:
            self._slots.release()
            raise
        future.add_done_callback(self._release_slot)
        self.telemetry.increment("pool.submitted")
        return future

    def run_all(self, requests: Iterable[RequestLike]) -> Iterator[AnalysisResponse]:
        """Submit every request now and yield responses in completion order.

        A request that cannot get a slot before ``task_timeout`` is answered
        in-band with the capacity error; requests already submitted still
        run and are yielded.
        """

        futures: List["Future[AnalysisResponse]"] = []
        rejected: List[AnalysisResponse] = []
        for request in requests:
            try:
                futures.append(self.submit(request))
            except CapacityExhaustedError as exc:
                rejected.append(_rejected_response(request, str(exc)))
        return self._iter_completed(futures, rejected)

    @staticmethod
    def _iter_completed(
        futures: List["Future[AnalysisResponse]"],
        rejected: List[AnalysisResponse],
    ) -> Iterator[AnalysisResponse]:
        yield from rejected
        for future in as_completed(futures):
            yield future.result()

    def analyze_document(
        self,
        text: Optional[str],
        analysis_type: Any,
        *,
        request_id: Optional[str] = None,
    ) -> List[AnalysisResponse]:
        """Chunk ``text``, analyse every chunk and return responses as they finished."""

        identifier = request_id or new_request_id()
        requests = build_requests(
            text,
            analysis_type,
            request_id=identifier,
            chunk_size=self.settings.chunk_size,
        )
        self.telemetry.start_trace("analyze_document")
        self.telemetry.annotate("document.chunks", len(requests))
        responses = list(self.run_all(requests))
        self._logger.info(
            "Document analysed",
            context={
                "id": identifier,
                "chunks": len(requests),
                "failed_chunks": sum(1 for response in responses if not response.ok),
            },
        )
        return responses


def _rejected_response(request: RequestLike, message: str) -> AnalysisResponse:
    if isinstance(request, AnalysisRequest):
        request_id = request.id
        chunk_index, total_chunks = request.chunk_index, request.total_chunks
    else:
        raw_id = request.get("id")
        request_id = "" if raw_id is None else str(raw_id)
        chunk_index, total_chunks = request.get("chunkIndex"), request.get("totalChunks")
    return AnalysisResponse(
        id=request_id,
        result=None,
        error=message,
        chunk_index=chunk_index,
        total_chunks=total_chunks,
        processing_time_ms=0.0,
    )


__all__ = [
    "AnalysisWorkerPool",
    "build_requests",
    "create_chunks",
    "new_request_id",
]
