"""Cadentis: rule-based quantitative prosody analysis."""

from .app import AnalysisRequest, AnalysisResponse, AnalysisType, handle_request

__version__ = "0.1.0"

__all__ = [
    "AnalysisRequest",
    "AnalysisResponse",
    "AnalysisType",
    "handle_request",
    "__version__",
]
