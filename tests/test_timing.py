import subprocess
from datetime import datetime, timezone

import pytest

import config
from core import timing
from core.timing import evaluate_submission, get_last_commit_time, parse_timestamp
from utils.error_handler import TimestampError

DUE = "2025-10-01T23:59:59+03:00"


def test_no_due_date_gives_full_credit():
    credit = evaluate_submission("", "2030-01-01T00:00:00Z")
    assert credit.points == config.SUBMISSION_MAX
    assert credit.feedback == "Full credit (no due date set)."
    assert credit.on_time is None


def test_on_time_commit():
    credit = evaluate_submission(DUE, "2025-10-01T20:00:00Z")
    assert credit.points == 20
    assert credit.feedback == "On time."
    assert credit.on_time is True


def test_commit_exactly_at_deadline_is_on_time():
    assert evaluate_submission(DUE, DUE).points == 20


def test_late_commit_loses_half_the_submission_points():
    credit = evaluate_submission(DUE, "2025-10-02T00:00:00+03:00")
    assert credit.points == config.SUBMISSION_MAX // 2
    assert credit.max_points == config.SUBMISSION_MAX
    assert credit.on_time is False
    assert "Late submission" in credit.feedback


def test_missing_commit_time_gives_full_credit():
    credit = evaluate_submission(DUE, None)
    assert credit.points == 20
    assert "not available" in credit.feedback


@pytest.mark.parametrize("due, commit", [
    ("next tuesday", "2025-10-01T20:00:00Z"),
    (DUE, "garbage"),
])
def test_invalid_timestamps_fall_back_to_full_credit(due, commit):
    credit = evaluate_submission(due, commit)
    assert credit.points == 20
    assert credit.feedback.startswith("Invalid DUE_DATE or commit time")


def test_parse_timestamp_variants():
    assert parse_timestamp("2025-10-01T12:00:00Z") == datetime(2025, 10, 1, 12, tzinfo=timezone.utc)
    assert parse_timestamp("2025-10-01") == datetime(2025, 10, 1, tzinfo=timezone.utc)
    assert parse_timestamp("2025-10-01T15:00:00+03:00") == datetime(2025, 10, 1, 12, tzinfo=timezone.utc)


def test_parse_timestamp_rejects_garbage():
    with pytest.raises(TimestampError) as excinfo:
        parse_timestamp("yesterday")
    assert excinfo.value.value == "yesterday"


def test_last_commit_time_from_git_output(monkeypatch, tmp_path):
    def fake_run(cmd, **kwargs):
        assert cmd == ["git", "log", "-1", "--format=%cI"]
        assert kwargs["cwd"] == str(tmp_path)
        return subprocess.CompletedProcess(cmd, 0, stdout="2025-10-01T20:00:00+03:00\n", stderr="")

    monkeypatch.setattr(timing.subprocess, "run", fake_run)
    assert get_last_commit_time(str(tmp_path)) == "2025-10-01T20:00:00+03:00"


def test_last_commit_time_without_git(monkeypatch, tmp_path):
    def missing_git(cmd, **kwargs):
        raise FileNotFoundError("git")

    monkeypatch.setattr(timing.subprocess, "run", missing_git)
    assert get_last_commit_time(str(tmp_path)) is None


@pytest.mark.parametrize("returncode, stdout", [(128, ""), (0, "   \n")])
def test_last_commit_time_unavailable(monkeypatch, tmp_path, returncode, stdout):
    monkeypatch.setattr(
        timing.subprocess, "run",
        lambda cmd, **kwargs: subprocess.CompletedProcess(cmd, returncode, stdout=stdout, stderr="fatal: not a git repository"),
    )
    assert get_last_commit_time(str(tmp_path)) is None
