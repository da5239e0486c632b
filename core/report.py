"""Rendering and saving the grade report (grade.json and grade.md)."""

import json
import os
from typing import Any, Dict, List

import config
from core.grader import GradeReport, summarize_category
from utils.logger import get_logger
from utils.error_handler import ReportWriteError

logger = get_logger()


def _category_title(task: int, category: str) -> str:
    return f"Task {task} – {config.CATEGORY_TITLES.get(category, category.title())}"


def feedback_lines(report: GradeReport) -> List[str]:
    """One line for the submission credit, then one per task category."""
    credit = report.credit
    lines = [f"**Submission ({credit.points}/{credit.max_points})** — {credit.feedback}"]
    for task in report.tasks:
        for category, score in task.categories.items():
            summary = summarize_category(report.results_for(task.task, category))
            lines.append(f"**{_category_title(task.task, category)}: {score.points}/{score.max_points}** — {summary}")
    return lines


def build_record(report: GradeReport) -> Dict[str, Any]:
    """The machine-readable report. Identical inputs give an identical record."""
    sub = report.submission
    record: Dict[str, Any] = {
        'meta': {
            'appPath': sub.app.path or '(not found)',
            'studentCardPath': sub.card.path or '(not found)',
            'dueDate': report.due_date or '(not set; assuming on-time)',
            'commitISO': report.commit_iso or '(not available)',
        },
        'submission': {
            'points': report.credit.points,
            'max': report.credit.max_points,
            'feedback': report.credit.feedback,
        },
    }
    for task in report.tasks:
        block: Dict[str, Any] = {
            category: score.points for category, score in task.categories.items()
        }
        block['total'] = task.total
        block['max'] = task.max_points
        block['category_max'] = {category: score.max_points for category, score in task.categories.items()}
        block['notes'] = dict(report.notes.get(task.task, {}))
        record[f'task{task.task}'] = block
    record['grandTotal'] = {'points': report.grand_total, 'max': report.grand_max}
    record['feedback'] = feedback_lines(report)
    record['checks'] = [
        {
            'task': r.check.task,
            'category': r.check.category,
            'check': r.check.key,
            'passed': r.passed,
            'points': r.earned,
            'max': r.check.points,
            'message': r.message,
        }
        for r in report.results
    ]
    return record


def render_markdown(report: GradeReport) -> str:
    """The human-readable report: scores per category, feedback and deductions."""
    meta = build_record(report)['meta']
    credit = report.credit
    lines = [
        "# Auto Grade Report",
        "",
        f"**Due Date:** {meta['dueDate']}  ",
        f"**Commit Time:** {meta['commitISO']}",
        "",
        "**Detected files:**  ",
        f"- App: {meta['appPath']}  ",
        f"- StudentCard: {meta['studentCardPath']}",
        "",
        f"## Submission ({credit.max_points})",
        f"- Points: **{credit.points}/{credit.max_points}**",
        "",
    ]
    for task in report.tasks:
        lines.append(f"## Task {task.task} ({task.max_points})")
        for category, score in task.categories.items():
            title = config.CATEGORY_TITLES.get(category, category.title())
            lines.append(f"- {title}: **{score.points}/{score.max_points}**")
        lines.append(f"- Total: **{task.total}/{task.max_points}**")
        lines.append("")
    lines += [
        "## Grand Total",
        f"- **{report.grand_total}/{report.grand_max}**",
        "",
        "---",
        "",
        "## Feedback (why you got these marks)",
        "",
    ]
    lines += [f"- {line}" for line in feedback_lines(report)]
    lines += ["", "## Deductions", ""]
    deductions = report.deductions
    if deductions:
        for r in deductions:
            lines.append(f"- {_category_title(r.check.task, r.check.category)}: {r.check.failed_message} (-{r.lost})")
        lines.append(f"- Total deducted from checks: **-{sum(r.lost for r in deductions)}**")
    else:
        lines.append("- None. Every check passed.")
    return "\n".join(lines).strip()


def write_report(report: GradeReport, root: str = ".") -> str:
    """Writes grade.json and grade.md into the output directory.

    Returns:
        The output directory path.

    Raises:
        ReportWriteError: If the directory or either file cannot be written.
    """
    out_dir = os.path.join(root, config.OUTPUT_DIR)
    json_path = os.path.join(out_dir, config.REPORT_JSON_FILE)
    md_path = os.path.join(out_dir, config.REPORT_MD_FILE)
    try:
        os.makedirs(out_dir, exist_ok=True)
        with open(json_path, 'w', encoding='utf-8') as f:
            json.dump(build_record(report), f, indent=2, ensure_ascii=False)
        with open(md_path, 'w', encoding='utf-8') as f:
            f.write(render_markdown(report))
    except OSError as e:
        raise ReportWriteError(f"Failed to write grade report: {e}", path=out_dir) from e
    logger.info(f"Report written to {json_path} and {md_path}.")
    return out_dir


def save_report(report: GradeReport, root: str = ".") -> bool:
    """Best-effort `write_report`: logs a failure and returns False instead of raising."""
    try:
        write_report(report, root)
        return True
    except ReportWriteError as e:
        logger.warning(f"{e}. The report is still printed to stdout.")
        return False
