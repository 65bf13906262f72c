"""Turn raw probe outcomes into cache verdicts.

Classification is a pure function of the outcome. Anything that needs I/O
(fetching an HTML wall body, saving it to disk) already happened in the
prober, which records the saved path on the outcome.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Tuple

from .models import (
    AnomalyHtmlWall,
    Error,
    Hit,
    Miss,
    ProbeFailure,
    ProbeOutcome,
    ProbeResponse,
    ResultSet,
    Unknown,
    Verdict,
)

logger = logging.getLogger("cdn_audit")

HTML_CONTENT_TYPE = "text/html"
NO_CONTENT_TYPE = Unknown("no content-type")


def is_html(content_type: str | None) -> bool:
    return bool(content_type) and content_type.startswith(HTML_CONTENT_TYPE)


def parse_age(value: str | None) -> int | None:
    """Parse an ``Age`` header; ``None`` when absent or not a plain integer."""
    if value is None:
        return None
    if not (value.isascii() and value.isdigit()):
        return None
    return int(value)


def classify(outcome: ProbeOutcome) -> Verdict:
    if isinstance(outcome, ProbeFailure):
        return Error(outcome.detail)

    if not outcome.content_type:
        return NO_CONTENT_TYPE
    if is_html(outcome.content_type):
        return AnomalyHtmlWall(outcome.wall_path)

    cache_status = outcome.cache_status
    if cache_status == "HIT":
        age = parse_age(outcome.age)
        if age is None:
            return Hit(0, age_valid=False)
        return Hit(age, age_valid=True)
    if cache_status == "MISS":
        return Miss()
    if cache_status:
        return Unknown(cache_status)
    return Unknown("none")


def classify_all(
    outcomes: Iterable[Tuple[str, ProbeOutcome]],
) -> List[Tuple[str, Verdict]]:
    verdicts: List[Tuple[str, Verdict]] = []
    for target, outcome in outcomes:
        verdict = classify(outcome)
        if isinstance(outcome, ProbeResponse) and not outcome.content_type:
            logger.warning("No content-type returned for %s", target)
        verdicts.append((target, verdict))
    return verdicts


def collect_results(verdicts: Iterable[Tuple[str, Verdict]]) -> ResultSet:
    """Index verdicts by target; a repeated target keeps its last verdict."""
    results: ResultSet = {}
    for target, verdict in verdicts:
        results[target] = verdict
    return results
