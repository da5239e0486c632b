"""Submission credit based on the last commit time versus the due date."""

import subprocess
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

import config
from utils.logger import get_logger
from utils.error_handler import TimestampError

logger = get_logger()


@dataclass(frozen=True)
class SubmissionCredit:
    points: int
    max_points: int
    feedback: str
    on_time: Optional[bool] = None  # None when timeliness was not determined


def get_last_commit_time(root: str = ".") -> Optional[str]:
    """Returns the ISO 8601 committer date of HEAD, or None if unavailable."""
    try:
        result = subprocess.run(
            ["git", "log", "-1", "--format=%cI"],
            cwd=root, text=True, capture_output=True, timeout=30, check=False
        )
    except FileNotFoundError:
        logger.warning("git executable not found; commit time unavailable.")
        return None
    except (subprocess.TimeoutExpired, OSError) as e:
        logger.warning(f"Could not run git log: {e}")
        return None

    if result.returncode != 0:
        logger.warning(f"git log failed ({result.returncode}): {result.stderr.strip()}")
        return None
    commit_iso = result.stdout.strip()
    if not commit_iso:
        logger.warning("git log returned no commits.")
        return None
    logger.debug(f"Last commit time: {commit_iso}")
    return commit_iso


def parse_timestamp(value: str) -> datetime:
    """Parses an ISO 8601 date or date-time. Naive values are taken as UTC.

    Raises:
        TimestampError: If `value` is not a valid timestamp.
    """
    text = (value or "").strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError as e:
        raise TimestampError(f"Invalid timestamp: {value!r}", value=value) from e
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def evaluate_submission(due_date: Optional[str], commit_iso: Optional[str]) -> SubmissionCredit:
    """Awards submission points. A late commit loses LATE_PENALTY of them.

    Missing or invalid inputs never block grading: they fall back to full
    credit with a note explaining why.
    """
    full = config.SUBMISSION_MAX
    if not due_date:
        return SubmissionCredit(full, full, "Full credit (no due date set).")
    if not commit_iso:
        logger.warning("Due date set but commit time unavailable; awarding full submission points.")
        return SubmissionCredit(full, full, "Commit time not available; defaulting to full submission points.")

    try:
        due = parse_timestamp(due_date)
        committed = parse_timestamp(commit_iso)
    except TimestampError as e:
        logger.warning(f"{e}; defaulting to full submission points.")
        return SubmissionCredit(full, full, "Invalid DUE_DATE or commit time; defaulting to full submission points.")

    if committed <= due:
        logger.info(f"Commit {commit_iso} is on time (due {due_date}).")
        return SubmissionCredit(full, full, "On time.", on_time=True)

    late_points = int(round(full * (1 - config.LATE_PENALTY)))
    logger.info(f"Commit {commit_iso} is after due date {due_date}; awarding {late_points}/{full}.")
    percent = int(round(config.LATE_PENALTY * 100))
    return SubmissionCredit(
        late_points, full,
        f"Late submission ({percent}% penalty on submission points only).",
        on_time=False,
    )
