"""The React Starter Lab rubric as a declarative list of weighted checks.

Each `Check` is evaluated independently against the located source files.
Task 1 covers creating and rendering the StudentCard component, task 2
covers passing data through props. Each task has three categories whose
point budgets are `config.CATEGORY_MAX`; the quality checks are generous on
purpose so a basic, working card lands mid-range.

Task 1 completeness is earned by the three labels alone (name 5, ID 4,
department 5). Having a StudentCard file earns quality points only, so a card
with no labels scores 0 completeness; the older rubric gave it 3 there.
"""

from dataclasses import dataclass
from typing import Callable, List, Sequence

from core import patterns
from core.sources import Submission
from utils.logger import get_logger

logger = get_logger()

Predicate = Callable[[Submission], bool]


@dataclass(frozen=True)
class Check:
    key: str
    task: int
    category: str  # correctness | completeness | quality
    points: int
    predicate: Predicate
    passed_message: str
    failed_message: str


@dataclass(frozen=True)
class CheckResult:
    check: Check
    passed: bool

    @property
    def earned(self) -> int:
        return self.check.points if self.passed else 0

    @property
    def lost(self) -> int:
        return self.check.points - self.earned

    @property
    def message(self) -> str:
        if self.passed:
            return self.check.passed_message
        return f"{self.check.failed_message} (-{self.check.points})"


# --- Predicates over a submission ---

def _card_file_present(sub: Submission) -> bool:
    return sub.card.found

def _component_with_jsx(sub: Submission) -> bool:
    return patterns.declares_component(sub.card.content) and patterns.returns_jsx(sub.card.content)

def _rendered_in_app(sub: Submission) -> bool:
    return patterns.count_renders(sub.app.content) >= 1

def _imported_or_rendered(sub: Submission) -> bool:
    return patterns.imports_component(sub.app.content) or _rendered_in_app(sub)

def _label(field: str) -> Predicate:
    return lambda sub: patterns.has_label(sub.card.content, field)

def _props_in_jsx(sub: Submission) -> bool:
    return patterns.uses_props_in_jsx(sub.card.content)

def _props_accepted(sub: Submission) -> bool:
    return patterns.accepts_props(sub.card.content) or _props_in_jsx(sub)

def _two_instances(sub: Submission) -> bool:
    return patterns.count_renders(sub.app.content) >= 2

def _has_export(sub: Submission) -> bool:
    return patterns.has_export(sub.card.content)

def _has_comment(sub: Submission) -> bool:
    return patterns.has_comment(sub.card.content)


CHECKS: List[Check] = [
    # Task 1: create and render the component
    Check("component_with_jsx", 1, "correctness", 6, _component_with_jsx,
          "Component with JSX found.", "Component/JSX not clearly detected."),
    Check("wired_into_app", 1, "correctness", 6, _imported_or_rendered,
          "Component is imported or rendered in App.", "Not imported or rendered in App."),
    Check("rendered_in_app", 1, "correctness", 6, _rendered_in_app,
          "Component is rendered in App.", "No rendering detected in App."),
    Check("name_label", 1, "completeness", 5, _label("name"),
          "Name is shown.", "Name label not detected."),
    Check("id_label", 1, "completeness", 4, _label("id"),
          "ID is shown.", "ID label not detected."),
    Check("department_label", 1, "completeness", 5, _label("department"),
          "Department is shown.", "Department/Dept label not detected."),
    Check("card_file_present", 1, "quality", 2, _card_file_present,
          "File present.", "StudentCard file missing."),
    Check("component_structure", 1, "quality", 2,
          lambda sub: patterns.declares_component(sub.card.content),
          "Reasonable component structure.", "No component declaration found."),
    Check("jsx_used", 1, "quality", 1, lambda sub: patterns.returns_jsx(sub.card.content),
          "JSX used.", "No JSX returned."),
    Check("exports_component", 1, "quality", 1, _has_export,
          "Exports detected.", "No export found."),
    Check("has_comment", 1, "quality", 1, _has_comment,
          "Comment present.", "No comments."),
    Check("wired_bonus", 1, "quality", 1, _rendered_in_app,
          "Wired into App.", "Not wired into App."),

    # Task 2: props and multiple instances
    Check("props_accepted", 2, "correctness", 6, _props_accepted,
          "Props accepted/used.", "Props not clearly accepted/used."),
    Check("props_in_jsx", 2, "correctness", 6, _props_in_jsx,
          "Props displayed in JSX.", "Props not shown in JSX."),
    Check("two_instances", 2, "correctness", 6, _two_instances,
          "Two <StudentCard> instances rendered.", "Less than two instances rendered."),
    Check("all_three_props", 2, "completeness", 9,
          lambda sub: patterns.uses_all_props(sub.card.content),
          "All three props used (name, id/studentId, department/dept).",
          "Missing one or more props (name, id/studentId, department/dept)."),
    Check("distinct_values", 2, "completeness", 5,
          lambda sub: patterns.instances_differ(sub.app.content),
          "Instances show different data.", "Instances appear to have identical data."),
    Check("card_file_present", 2, "quality", 2, _card_file_present,
          "File present.", "StudentCard file missing."),
    Check("props_wired", 2, "quality", 2, _props_in_jsx,
          "Props wired to UI.", "Props not wired to UI."),
    Check("reasonable_prop_names", 2, "quality", 2,
          lambda sub: patterns.has_reasonable_prop_names(sub.card.content),
          "Reasonable prop naming.", "Prop names not recognized (name, id, department)."),
    Check("has_comment", 2, "quality", 1, _has_comment,
          "Comment present.", "No comments."),
    Check("exports_component", 2, "quality", 1, _has_export,
          "Exports detected.", "No export found."),
]


def evaluate_checks(submission: Submission, checks: Sequence[Check] = CHECKS) -> List[CheckResult]:
    """Evaluates every check in order. A predicate that raises counts as failed."""
    results: List[CheckResult] = []
    for check in checks:
        try:
            passed = bool(check.predicate(submission))
        except Exception as e:
            logger.error(f"Check task{check.task}.{check.key} raised {type(e).__name__}: {e}", exc_info=True)
            passed = False
        logger.debug(f"task{check.task}.{check.category}.{check.key}: {'pass' if passed else 'fail'} ({check.points} pts)")
        results.append(CheckResult(check, passed))
    return results
