"""Data models used throughout the audit pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Dict, Optional, Union


class CheckMode(str, Enum):
    """Which file variants of each catalog entry get probed."""

    WEBP = "webp"
    JPG = "jpg"
    FILE = "file"
    ALL = "all"


@dataclass(frozen=True)
class CatalogEntry:
    """One known asset as listed by the catalog."""

    id: str
    filetype: str


@dataclass(frozen=True)
class ProbeResponse:
    """Header view of a successful exchange with the delivery endpoint."""

    status: int
    content_type: Optional[str] = None
    cache_status: Optional[str] = None
    age: Optional[str] = None
    wall_path: Optional[Path] = None


@dataclass(frozen=True)
class ProbeFailure:
    """Transport-level failure (DNS, connect, timeout, ...)."""

    detail: str


ProbeOutcome = Union[ProbeResponse, ProbeFailure]


@dataclass(frozen=True)
class Hit:
    age_seconds: int = 0
    age_valid: bool = False


@dataclass(frozen=True)
class Miss:
    pass


@dataclass(frozen=True)
class Unknown:
    detail: str


@dataclass(frozen=True)
class AnomalyHtmlWall:
    """An HTML page served where a binary asset was expected."""

    saved_path: Optional[Path]


@dataclass(frozen=True)
class Error:
    detail: str


Verdict = Union[Hit, Miss, Unknown, AnomalyHtmlWall, Error]
ResultSet = Dict[str, Verdict]


@dataclass
class RunStats:
    """Fleet-wide counters folded from the verdicts of one run."""

    total: int = 0
    hit: int = 0
    miss: int = 0
    unknown: int = 0
    anomaly: int = 0
    total_age_seconds: int = 0


@dataclass(frozen=True)
class DerivedStats:
    cache_ratio_pct: Optional[int]
    mean_hit_age_seconds: Optional[int]


@dataclass
class AuditReport:
    """Everything produced by a finished run."""

    mode: CheckMode
    results: ResultSet
    stats: RunStats
    elapsed_seconds: float
