"""Typed request/response envelopes exchanged with analysis callers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Mapping, Optional

from .errors import InvalidRequestError


class AnalysisType(str, Enum):
    SYLLABLE_COUNT = "syllable-count"
    VERSE_ANALYSIS = "verse-analysis"
    RHYME_ANALYSIS = "rhyme-analysis"
    VERSE_FORM = "verse-form"
    STANZA_RHYME = "stanza-rhyme"

    @classmethod
    def parse(cls, value: Any) -> Optional["AnalysisType"]:
        """Return the matching member, or ``None`` for unknown values."""

        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return None


def _optional_int(payload: Mapping[str, Any], key: str) -> Optional[int]:
    value = payload.get(key)
    if value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise InvalidRequestError(f"{key} must be an integer, got {value!r}") from exc


@dataclass(frozen=True)
class AnalysisRequest:
    """One unit of work: a text and the analysis to run on it.

    ``analysis_type`` is kept as supplied so that unknown values can be
    reported back to the caller rather than rejected on construction.
    """

    id: str
    text: Optional[str]
    analysis_type: Any
    chunk_index: Optional[int] = None
    total_chunks: Optional[int] = None

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "AnalysisRequest":
        if not isinstance(payload, Mapping):
            raise InvalidRequestError("Request payload must be a mapping")
        raw_id = payload.get("id")
        analysis_type = payload.get("analysisType", payload.get("type"))
        text = payload.get("text")
        return cls(
            id="" if raw_id is None else str(raw_id),
            text=None if text is None else str(text),
            analysis_type=analysis_type,
            chunk_index=_optional_int(payload, "chunkIndex"),
            total_chunks=_optional_int(payload, "totalChunks"),
        )

    def as_dict(self) -> Dict[str, Any]:
        analysis_type = self.analysis_type
        if isinstance(analysis_type, AnalysisType):
            analysis_type = analysis_type.value
        payload: Dict[str, Any] = {
            "id": self.id,
            "text": self.text,
            "analysisType": analysis_type,
        }
        if self.chunk_index is not None:
            payload["chunkIndex"] = self.chunk_index
        if self.total_chunks is not None:
            payload["totalChunks"] = self.total_chunks
        return payload


@dataclass(frozen=True)
class AnalysisResponse:
    """Result or in-band error for one request, matched by ``id``."""

    id: str
    result: Any
    processing_time_ms: float
    error: Optional[str] = None
    chunk_index: Optional[int] = None
    total_chunks: Optional[int] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def as_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"id": self.id, "result": self.result}
        if self.error is not None:
            payload["error"] = self.error
        if self.chunk_index is not None:
            payload["chunkIndex"] = self.chunk_index
        if self.total_chunks is not None:
            payload["totalChunks"] = self.total_chunks
        payload["processingTimeMs"] = self.processing_time_ms
        return payload


__all__ = ["AnalysisType", "AnalysisRequest", "AnalysisResponse"]
