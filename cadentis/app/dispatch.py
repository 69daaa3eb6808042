"""Map one analysis request to one response without ever raising."""

from __future__ import annotations

import time
from typing import Any, Dict, Mapping, Optional, Union

from ..core import DEFAULT_TABLES, PhonologyTables
from ..utils.observability import (
    add_span_attributes,
    create_counter,
    create_histogram,
    get_logger,
    record_exception,
    start_span,
)
from .errors import UnknownAnalysisTypeError
from .protocol import AnalysisRequest, AnalysisResponse, AnalysisType
from .services.analysis_service import ANALYZERS

RequestLike = Union[AnalysisRequest, Mapping[str, Any]]

_REQUESTS_TOTAL = create_counter(
    "cadentis_analysis_requests_total",
    "Analysis requests received by the dispatcher.",
    label_names=("analysis_type",),
)
_REQUEST_FAILURES = create_counter(
    "cadentis_analysis_request_failures_total",
    "Analysis requests answered with an in-band error.",
    label_names=("analysis_type", "reason"),
)
_REQUEST_SECONDS = create_histogram(
    "cadentis_analysis_request_seconds",
    "Latency of analysis requests.",
    label_names=("analysis_type",),
)


def _elapsed_ms(start: float) -> float:
    return (time.perf_counter() - start) * 1000.0


def _type_label(analysis_type: Any) -> str:
    parsed = AnalysisType.parse(analysis_type)
    return parsed.value if parsed is not None else "unknown"


class AnalysisDispatcher:
    """Stateless request handler bound to one set of phonology tables.

    Every failure is converted into an ``error`` string on the response so a
    caller can match it by ``id``; a failing request never affects another.
    """

    def __init__(self, tables: Optional[PhonologyTables] = None) -> None:
        self.tables = tables or DEFAULT_TABLES
        self._logger = get_logger(__name__).bind(component="analysis_dispatcher")

    def _coerce(self, request: RequestLike) -> AnalysisRequest:
        if isinstance(request, AnalysisRequest):
            return request
        return AnalysisRequest.from_dict(request)

    def _run(self, request: AnalysisRequest) -> Any:
        analysis_type = AnalysisType.parse(request.analysis_type)
        if analysis_type is None:
            raise UnknownAnalysisTypeError(request.analysis_type)
        return ANALYZERS[analysis_type](request.text, self.tables)

    def handle(self, request: RequestLike) -> AnalysisResponse:
        start = time.perf_counter()
        try:
            parsed = self._coerce(request)
        except Exception as exc:
            request_id = ""
            if isinstance(request, Mapping) and request.get("id") is not None:
                request_id = str(request["id"])
            self._logger.warning(
                "Rejected malformed analysis request",
                context={"id": request_id, "error": str(exc)},
            )
            _REQUEST_FAILURES.labels(analysis_type="unknown", reason="invalid_request").inc()
            return AnalysisResponse(
                id=request_id,
                result=None,
                error=str(exc) or "Unknown error",
                processing_time_ms=_elapsed_ms(start),
            )

        type_label = _type_label(parsed.analysis_type)
        request_context: Dict[str, Any] = {
            "id": parsed.id,
            "analysis_type": type_label,
            "text_length": len(parsed.text or ""),
            "chunk_index": parsed.chunk_index,
            "total_chunks": parsed.total_chunks,
        }
        _REQUESTS_TOTAL.labels(analysis_type=type_label).inc()
        self._logger.debug("Analysis request received", context=request_context)

        with start_span("analysis.request", request_context) as span:
            try:
                with _REQUEST_SECONDS.labels(analysis_type=type_label).time():
                    result = self._run(parsed)
            except UnknownAnalysisTypeError as exc:
                _REQUEST_FAILURES.labels(analysis_type=type_label, reason="unknown_type").inc()
                self._logger.warning(
                    "Unknown analysis type requested",
                    context={**request_context, "requested": str(parsed.analysis_type)},
                )
                record_exception(span, exc)
                return self._failure(parsed, str(exc), start)
            except Exception as exc:
                _REQUEST_FAILURES.labels(analysis_type=type_label, reason="internal").inc()
                self._logger.error(
                    "Analysis request failed",
                    context={**request_context, "error": str(exc)},
                )
                record_exception(span, exc)
                return self._failure(parsed, str(exc) or "Unknown error", start)

            response = AnalysisResponse(
                id=parsed.id,
                result=result,
                chunk_index=parsed.chunk_index,
                total_chunks=parsed.total_chunks,
                processing_time_ms=_elapsed_ms(start),
            )
            add_span_attributes(
                span,
                {"analysis.success": True, "analysis.elapsed_ms": response.processing_time_ms},
            )
            self._logger.debug(
                "Analysis request completed",
                context={"id": parsed.id, "elapsed_ms": round(response.processing_time_ms, 3)},
            )
            return response

    def _failure(self, request: AnalysisRequest, message: str, start: float) -> AnalysisResponse:
        return AnalysisResponse(
            id=request.id,
            result=None,
            error=message,
            chunk_index=request.chunk_index,
            total_chunks=request.total_chunks,
            processing_time_ms=_elapsed_ms(start),
        )


DEFAULT_DISPATCHER = AnalysisDispatcher()


def handle_request(
    request: RequestLike,
    tables: Optional[PhonologyTables] = None,
) -> AnalysisResponse:
    """Answer ``request`` with the default or a table-specific dispatcher."""

    dispatcher = DEFAULT_DISPATCHER if tables is None else AnalysisDispatcher(tables)
    return dispatcher.handle(request)


__all__ = ["AnalysisDispatcher", "DEFAULT_DISPATCHER", "handle_request"]
