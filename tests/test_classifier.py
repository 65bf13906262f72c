import logging
from pathlib import Path

import pytest

from cdn_audit.classifier import classify, classify_all, collect_results, parse_age
from cdn_audit.models import (
    AnomalyHtmlWall,
    Error,
    Hit,
    Miss,
    ProbeFailure,
    ProbeResponse,
    Unknown,
)


def _response(**kwargs):
    kwargs.setdefault("status", 200)
    kwargs.setdefault("content_type", "application/pdf")
    return ProbeResponse(**kwargs)


def test_transport_failure_is_error():
    assert classify(ProbeFailure("connection refused")) == Error("connection refused")


def test_missing_content_type():
    assert classify(_response(content_type=None, cache_status="HIT")) == Unknown(
        "no content-type"
    )


def test_html_is_wall():
    path = Path("a.pdf.html")
    outcome = _response(content_type="text/html; charset=utf-8", wall_path=path)
    assert classify(outcome) == AnomalyHtmlWall(path)


def test_hit_with_age():
    assert classify(_response(cache_status="HIT", age="120")) == Hit(120, age_valid=True)


def test_hit_with_bad_or_missing_age():
    assert classify(_response(cache_status="HIT", age="soon")) == Hit(0, age_valid=False)
    assert classify(_response(cache_status="HIT")) == Hit(0, age_valid=False)


def test_miss_and_other_statuses():
    assert classify(_response(cache_status="MISS")) == Miss()
    assert classify(_response(cache_status="DYNAMIC")) == Unknown("DYNAMIC")
    assert classify(_response()) == Unknown("none")


def test_classify_is_deterministic():
    outcome = _response(cache_status="HIT", age="7")
    assert classify(outcome) == classify(outcome)


def test_parse_age():
    assert parse_age("0") == 0
    assert parse_age("-3") is None
    assert parse_age("") is None
    assert parse_age(None) is None


def test_collect_results_last_write_wins():
    verdicts = classify_all(
        [
            ("a.pdf", _response(cache_status="MISS")),
            ("a.pdf", _response(cache_status="HIT", age="1")),
            ("b.pdf", ProbeFailure("timeout")),
        ]
    )
    assert len(verdicts) == 3
    results = collect_results(verdicts)
    assert results == {"a.pdf": Hit(1, age_valid=True), "b.pdf": Error("timeout")}


@pytest.mark.parametrize("value", ["1_0", "+5", "٣", " 42 ", "4.2"])
def test_parse_age_rejects_non_ascii_digit_strings(value):
    assert parse_age(value) is None


def test_no_content_type_warning_only_for_missing_header(caplog):
    outcomes = [
        ("odd.pdf", _response(cache_status="no content-type")),
        ("bare.pdf", _response(content_type=None)),
    ]
    with caplog.at_level(logging.WARNING, logger="cdn_audit"):
        verdicts = classify_all(outcomes)
    assert verdicts[0][1] == verdicts[1][1] == Unknown("no content-type")
    warned = [record.getMessage() for record in caplog.records]
    assert warned == ["No content-type returned for bare.pdf"]
