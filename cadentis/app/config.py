"""Runtime settings for concurrent request execution."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

DEFAULT_MAX_WORKERS = 4
DEFAULT_MAX_CONCURRENT_TASKS = 3
DEFAULT_CHUNK_SIZE = 10_000


def _positive_int(value: Optional[str], default: int) -> int:
    if value is None:
        return default
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        return default
    return parsed if parsed > 0 else default


def _optional_seconds(value: Optional[str]) -> Optional[float]:
    if value is None or not str(value).strip():
        return None
    try:
        parsed = float(value)
    except (TypeError, ValueError):
        return None
    return parsed if parsed >= 0 else None


@dataclass(frozen=True)
class WorkerPoolSettings:
    """Sizing for :class:`~cadentis.app.worker_pool.AnalysisWorkerPool`.

    ``task_timeout`` bounds how long a submission waits for a free slot;
    ``None`` waits indefinitely.
    """

    max_workers: int = DEFAULT_MAX_WORKERS
    max_concurrent_tasks: int = DEFAULT_MAX_CONCURRENT_TASKS
    chunk_size: int = DEFAULT_CHUNK_SIZE
    task_timeout: Optional[float] = None

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "WorkerPoolSettings":
        env = os.environ if environ is None else environ
        return cls(
            max_workers=_positive_int(env.get("CADENTIS_MAX_WORKERS"), DEFAULT_MAX_WORKERS),
            max_concurrent_tasks=_positive_int(
                env.get("CADENTIS_MAX_CONCURRENT_TASKS"), DEFAULT_MAX_CONCURRENT_TASKS
            ),
            chunk_size=_positive_int(env.get("CADENTIS_CHUNK_SIZE"), DEFAULT_CHUNK_SIZE),
            task_timeout=_optional_seconds(env.get("CADENTIS_TASK_TIMEOUT")),
        )


__all__ = [
    "DEFAULT_CHUNK_SIZE",
    "DEFAULT_MAX_CONCURRENT_TASKS",
    "DEFAULT_MAX_WORKERS",
    "WorkerPoolSettings",
]
