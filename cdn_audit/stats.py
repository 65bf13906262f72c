"""Fold verdicts into fleet-level statistics."""

from __future__ import annotations

from typing import Iterable

from .models import (
    AnomalyHtmlWall,
    DerivedStats,
    Error,
    Hit,
    Miss,
    RunStats,
    Unknown,
    Verdict,
)

_UNITS = (
    ("d", 24 * 3600),
    ("h", 3600),
    ("m", 60),
    ("s", 1),
)


def fold(verdicts: Iterable[Verdict]) -> RunStats:
    """Count verdicts.

    HTML walls only count toward ``total`` (and ``anomaly``), so
    ``hit + miss + unknown`` falls short of ``total`` when walls occur.
    """
    stats = RunStats()
    for verdict in verdicts:
        stats.total += 1
        if isinstance(verdict, Hit):
            stats.hit += 1
            if verdict.age_valid:
                stats.total_age_seconds += verdict.age_seconds
        elif isinstance(verdict, Miss):
            stats.miss += 1
        elif isinstance(verdict, (Unknown, Error)):
            stats.unknown += 1
        elif isinstance(verdict, AnomalyHtmlWall):
            stats.anomaly += 1
    return stats


def derive(stats: RunStats) -> DerivedStats:
    ratio = None
    if stats.total > 0:
        ratio = round(stats.hit / stats.total * 100)
    mean_age = None
    if stats.hit > 0:
        mean_age = stats.total_age_seconds // stats.hit
    return DerivedStats(cache_ratio_pct=ratio, mean_hit_age_seconds=mean_age)


def format_duration(seconds: int) -> str:
    """Render ``seconds`` with its two most significant non-zero units."""
    if seconds <= 0:
        return "0s"
    parts = []
    remaining = seconds
    for suffix, size in _UNITS:
        amount, remaining = divmod(remaining, size)
        if amount:
            parts.append(f"{amount}{suffix}")
    return "".join(parts[:2])
