"""Markdown rendering of audit results."""

from __future__ import annotations

from typing import List

from .models import (
    AnomalyHtmlWall,
    AuditReport,
    Error,
    Hit,
    Miss,
    Unknown,
    Verdict,
)
from .stats import derive, format_duration


def describe_verdict(verdict: Verdict) -> str:
    if isinstance(verdict, Hit):
        if verdict.age_valid:
            return f"HIT (age: {format_duration(verdict.age_seconds)})"
        return "HIT"
    if isinstance(verdict, Miss):
        return "MISS"
    if isinstance(verdict, Unknown):
        if verdict.detail == "none":
            return "None"
        return f"UNKNOWN: {verdict.detail}"
    if isinstance(verdict, AnomalyHtmlWall):
        return f"HTML WALL: {verdict.saved_path}"
    if isinstance(verdict, Error):
        return f"ERROR: {verdict.detail}"
    raise TypeError(f"Unsupported verdict: {verdict!r}")


def render_report(report: AuditReport) -> str:
    """Compose the per-file listing followed by the statistics block."""
    stats = report.stats
    derived = derive(stats)
    lines: List[str] = ["## Detailed results", ""]
    for target in sorted(report.results):
        lines.append(f"- `{target}`: {describe_verdict(report.results[target])}")
    if not report.results:
        lines.append("_No files checked._")

    lines.extend(
        [
            "",
            "## Statistics",
            "",
            f"- Check type: {report.mode.value}",
            f"- Total files: {stats.total}",
            f"- Cached: {stats.hit}",
            f"- Not cached: {stats.miss}",
            f"- Unknown: {stats.unknown}",
            f"- HTML walls: {stats.anomaly}",
        ]
    )
    if derived.cache_ratio_pct is not None:
        lines.append(f"- Cache ratio: {derived.cache_ratio_pct}%")
    if derived.mean_hit_age_seconds is not None:
        lines.append(
            f"- Mean cache age: {format_duration(derived.mean_hit_age_seconds)}"
        )
    lines.append(f"- Elapsed: {report.elapsed_seconds:.2f}s")
    return "\n".join(lines) + "\n"
