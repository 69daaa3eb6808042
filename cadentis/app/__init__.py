"""Request handling around the prosody core: protocol, dispatch and execution."""

from .config import WorkerPoolSettings
from .dispatch import AnalysisDispatcher, handle_request
from .errors import (
    CapacityExhaustedError,
    InvalidRequestError,
    ProsodyError,
    UnknownAnalysisTypeError,
)
from .protocol import AnalysisRequest, AnalysisResponse, AnalysisType
from .worker_pool import AnalysisWorkerPool, build_requests, create_chunks

__all__ = [
    "AnalysisDispatcher",
    "AnalysisRequest",
    "AnalysisResponse",
    "AnalysisType",
    "AnalysisWorkerPool",
    "CapacityExhaustedError",
    "InvalidRequestError",
    "ProsodyError",
    "UnknownAnalysisTypeError",
    "WorkerPoolSettings",
    "build_requests",
    "create_chunks",
    "handle_request",
]
