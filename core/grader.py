"""Core grading logic: evaluate the rubric and aggregate the scores."""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

import config
from core import patterns
from core.rubric import CHECKS, Check, CheckResult, evaluate_checks
from core.sources import Submission
from core.timing import SubmissionCredit, evaluate_submission
from utils.logger import get_logger

logger = get_logger()


def clamp_points(value: int, maximum: int) -> int:
    """Saturates `value` into [0, maximum]."""
    return max(0, min(maximum, value))


@dataclass(frozen=True)
class CategoryScore:
    task: int
    category: str
    points: int
    max_points: int


@dataclass(frozen=True)
class TaskScore:
    task: int
    categories: Dict[str, CategoryScore]

    @property
    def total(self) -> int:
        return sum(score.points for score in self.categories.values())

    @property
    def max_points(self) -> int:
        return sum(score.max_points for score in self.categories.values())


@dataclass
class GradeReport:
    """Everything the report renderer needs from one grading run."""
    submission: Submission
    due_date: Optional[str]
    commit_iso: Optional[str]
    credit: SubmissionCredit
    tasks: List[TaskScore]
    results: List[CheckResult]
    notes: Dict[int, Dict[str, bool]] = field(default_factory=dict)

    @property
    def grand_total(self) -> int:
        return self.credit.points + sum(task.total for task in self.tasks)

    @property
    def grand_max(self) -> int:
        return self.credit.max_points + sum(task.max_points for task in self.tasks)

    def results_for(self, task: int, category: str) -> List[CheckResult]:
        return [r for r in self.results if r.check.task == task and r.check.category == category]

    @property
    def deductions(self) -> List[CheckResult]:
        return [r for r in self.results if not r.passed]


def summarize_category(results: Sequence[CheckResult], limit: int = 3) -> str:
    """Short feedback for one category: the first few reasons, joined."""
    reasons = [r.check.passed_message if r.passed else r.check.failed_message for r in results]
    picks = [reason for reason in reasons if reason][:limit]
    return " • ".join(picks) if picks else "No checks matched."


class Grader:
    """Grades one submission against the rubric and the due date."""

    def __init__(
        self,
        submission: Submission,
        due_date: Optional[str] = None,
        commit_iso: Optional[str] = None,
        checks: Sequence[Check] = CHECKS,
    ):
        self.submission = submission
        self.due_date = due_date
        self.commit_iso = commit_iso
        self.checks = checks
        logger.debug(
            f"Grader initialized: app={submission.app.path}, card={submission.card.path}, "
            f"due={due_date or '-'}, commit={commit_iso or '-'}, checks={len(checks)}"
        )

    def _aggregate(self, results: Sequence[CheckResult]) -> List[TaskScore]:
        tasks: List[TaskScore] = []
        for task in config.TASKS:
            categories: Dict[str, CategoryScore] = {}
            for category, maximum in config.CATEGORY_MAX.items():
                raw = sum(r.earned for r in results if r.check.task == task and r.check.category == category)
                points = clamp_points(raw, maximum)
                if points != raw:
                    logger.debug(f"Task {task} {category}: clamped {raw} to {points}/{maximum}")
                categories[category] = CategoryScore(task, category, points, maximum)
            tasks.append(TaskScore(task, categories))
        return tasks

    def grade(self) -> GradeReport:
        """Runs the timing evaluation and every rubric check, then sums the scores.

        Returns:
            A GradeReport whose grand total is submission credit plus both
            clamped task totals.
        """
        if not self.submission.app.found:
            logger.warning("App entry file not found; App-dependent checks will fail.")
        if not self.submission.card.found:
            logger.warning("StudentCard file not found; component checks will fail.")

        credit = evaluate_submission(self.due_date, self.commit_iso)
        results = evaluate_checks(self.submission, self.checks)
        tasks = self._aggregate(results)
        notes = patterns.detect_signals(self.submission.app.content, self.submission.card.content)

        report = GradeReport(
            submission=self.submission,
            due_date=self.due_date,
            commit_iso=self.commit_iso,
            credit=credit,
            tasks=tasks,
            results=results,
            notes=notes,
        )
        logger.info(
            f"Graded: submission {credit.points}/{credit.max_points}, "
            + ", ".join(f"task {t.task} {t.total}/{t.max_points}" for t in tasks)
            + f", total {report.grand_total}/{report.grand_max}"
        )
        return report
