"""Exceptions raised at the analysis request boundary."""

from __future__ import annotations


class ProsodyError(Exception):
    """Base class for errors reported by the Cadentis engine."""


class UnknownAnalysisTypeError(ProsodyError, ValueError):
    def __init__(self, analysis_type: object) -> None:
        super().__init__(f"Unknown analysis type: {analysis_type}")
        self.analysis_type = analysis_type


class InvalidRequestError(ProsodyError, ValueError):
    """A request payload could not be turned into an analysis request."""


class CapacityExhaustedError(ProsodyError, TimeoutError):
    def __init__(self, limit: int) -> None:
        super().__init__("Too many concurrent tasks. Please wait and try again.")
        self.limit = limit


__all__ = [
    "ProsodyError",
    "UnknownAnalysisTypeError",
    "InvalidRequestError",
    "CapacityExhaustedError",
]
