import math

import pytest

from numstat.engine import (
    EmptyInput,
    IngestResult,
    StatsSession,
    Success,
    ValidationAborted,
    run_stats,
)
from numstat.ingest import InvalidToken, OnInvalid, parse_token, policy_from_flags
from numstat.selection import resolve_request


@pytest.mark.parametrize("token,expected", [
    ("1", 1.0),
    ("-2.5", -2.5),
    ("+.5", 0.5),
    ("3.", 3.0),
    ("1e3", 1000.0),
    ("1.5E-2", 0.015),
    ("-.25e+1", -2.5),
    ("  42  ", 42.0),
])
def test_parse_valid_tokens(token, expected):
    assert parse_token(token) == expected


@pytest.mark.parametrize("token", ["", "x", "1,5", "1.e5", "nan", "inf", "1 2", "--1", "0x10", "e5"])
def test_parse_invalid_tokens(token):
    assert parse_token(token) is None


def test_policy_from_flags():
    assert policy_from_flags() is OnInvalid.WARN
    assert policy_from_flags(quiet=True) is OnInvalid.SILENT
    assert policy_from_flags(strict=True) is OnInvalid.ABORT
    assert policy_from_flags(quiet=True, strict=True) is OnInvalid.ABORT


def test_invalid_token_warns_and_is_skipped():
    warnings = []
    outcome = run_stats(["1", "x", "3"], resolve_request(["N", "sum"]), warn=warnings.append)
    assert isinstance(outcome, Success)
    assert outcome.record.to_dict() == {"N": 2, "sum": 4.0}
    assert warnings == ["invalid value 'x' on input line 2"]


def test_invalid_token_quiet_is_silent():
    warnings = []
    outcome = run_stats(
        ["1", "x", "3"], resolve_request(["N", "sum"]), on_invalid=OnInvalid.SILENT, warn=warnings.append
    )
    assert outcome.record.to_dict() == {"N": 2, "sum": 4.0}
    assert warnings == []


def test_invalid_token_strict_aborts():
    outcome = run_stats(["1", "x", "3"], resolve_request(), on_invalid=OnInvalid.ABORT)
    assert outcome == ValidationAborted(line_number=2, token="x")
    assert outcome.message == "invalid value 'x' on input line 2"


def test_ingest_policy_can_be_overridden_per_call():
    session = StatsSession(resolve_request(), on_invalid=OnInvalid.SILENT)
    assert session.ingest("5") is IngestResult.ACCEPTED
    assert session.ingest("bad") is IngestResult.REJECTED
    with pytest.raises(InvalidToken) as excinfo:
        session.ingest("bad", on_invalid=OnInvalid.ABORT)
    assert excinfo.value.line_number == 3


def test_empty_input():
    assert isinstance(run_stats([], resolve_request()), EmptyInput)
    outcome = run_stats(["a", "b"], resolve_request(), on_invalid=OnInvalid.SILENT)
    assert outcome == EmptyInput(lines_read=2)


def test_moment_only_session_keeps_no_values():
    session = StatsSession(resolve_request(["N", "mean", "sd"]))
    for v in ["1", "2", "3"]:
        session.ingest(v)
    assert session.buffer is None
    assert session.frequencies is None


def test_buffering_session_keeps_input_order():
    session = StatsSession(resolve_request(["median"]))
    for v in ["3", "1", "2"]:
        session.ingest(v)
    assert session.buffer == [3.0, 1.0, 2.0]


def test_n_mean_sd_end_to_end():
    lines = ["2", "4", "4", "4", "5", "5", "7", "9"]
    outcome = run_stats(lines, resolve_request(["N", "mean", "sd"]))
    record = outcome.record
    assert list(record) == ["N", "mean", "sd"]
    assert record["N"] == 8
    assert record["mean"] == 5.0
    assert math.isclose(record["sd"], 2.1381, rel_tol=1e-4)


def test_summary_end_to_end():
    outcome = run_stats(["1", "2", "3", "4", "5"], resolve_request(["summary"]))
    assert outcome.record.to_dict() == {"min": 1.0, "q1": 2.0, "median": 3.0, "q3": 4.0, "max": 5.0}


def test_unrequested_statistics_are_absent():
    record = run_stats(["1", "2"], resolve_request(["mean"])).record
    assert "sd" not in record
    assert "median" not in record
    assert len(record) == 1


def test_undefined_statistics_are_present_as_none():
    record = run_stats(["1"], resolve_request(["N", "variance", "sd", "mode"])).record
    assert record["N"] == 1
    assert record["variance"] is None
    assert record["sd"] is None
    assert record["mode"] == 1.0
    assert not record.is_defined("variance")


def test_zero_is_a_value():
    record = run_stats(["-1", "1"], resolve_request(["sum", "mean"])).record
    assert record["sum"] == 0.0
    assert record.is_defined("sum")


def test_mode_tie_and_unique():
    assert run_stats(["1", "1", "2", "2", "3"], resolve_request(["mode"])).record["mode"] is None
    assert run_stats(["1", "1", "1", "2", "3"], resolve_request(["mode"])).record["mode"] == 1.0


def test_percentiles_and_quartiles():
    request = resolve_request(percentiles=[10, 90], quartiles=[0, 4])
    record = run_stats(["10", "20", "30", "40", "50"], request).record
    assert record.to_dict() == {"p10": 15.0, "p90": 45.0, "q0": 10.0, "q4": 50.0}


def test_record_is_immutable():
    record = run_stats(["1"], resolve_request(["N"])).record
    with pytest.raises(TypeError):
        record["N"] = 5


def test_session_finalizes_once():
    session = StatsSession(resolve_request())
    session.ingest("1")
    session.finalize()
    with pytest.raises(RuntimeError):
        session.finalize()
    with pytest.raises(RuntimeError):
        session.ingest("2")
