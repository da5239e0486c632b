import json
import os

import pytest

import config
from core.grader import Grader
from core.report import build_record, render_markdown, save_report, write_report
from utils.error_handler import ReportWriteError
from conftest import FULL_APP, FULL_CARD, NAME_ONLY_CARD, SINGLE_RENDER_APP


@pytest.fixture()
def partial_report(make_submission):
    return Grader(make_submission(app=SINGLE_RENDER_APP, card=NAME_ONLY_CARD)).grade()


def test_record_contents(partial_report):
    record = build_record(partial_report)

    assert record['meta'] == {
        'appPath': 'src/App.jsx',
        'studentCardPath': 'src/components/StudentCard.jsx',
        'dueDate': '(not set; assuming on-time)',
        'commitISO': '(not available)',
    }
    assert record['submission'] == {'points': 20, 'max': 20, 'feedback': 'Full credit (no due date set).'}
    assert record['task1']['correctness'] == 18
    assert record['task1']['total'] == 30
    assert record['task1']['max'] == 40
    assert record['grandTotal'] == {'points': 53, 'max': 100}
    assert 'grand_total' not in record and 'notes' not in record


def test_record_keeps_notes_inside_each_task(partial_report):
    record = build_record(partial_report)

    assert list(record) == ['meta', 'submission', 'task1', 'task2', 'grandTotal', 'feedback', 'checks']
    assert record['task1']['notes'] == {
        'importStudentCard': True,
        'rendersStudentCard': True,
        'hasNameLabel': True,
        'hasIdLabel': False,
        'hasDeptLabel': False,
    }
    assert record['task2']['notes'] == {
        'acceptsProps': False,
        'usesPropsInJSX': False,
        'hasTwoInstances': False,
        'twoDifferentNames': False,
        'twoDifferentIds': False,
    }
    assert record['task1']['category_max'] == config.CATEGORY_MAX


def test_record_has_one_entry_per_check_in_order(partial_report):
    checks = build_record(partial_report)['checks']

    assert [c['check'] for c in checks] == [r.check.key for r in partial_report.results]
    id_label = next(c for c in checks if c['task'] == 1 and c['check'] == 'id_label')
    assert id_label == {
        'task': 1, 'category': 'completeness', 'check': 'id_label',
        'passed': False, 'points': 0, 'max': 4,
        'message': 'ID label not detected. (-4)',
    }


def test_feedback_lines(partial_report):
    feedback = build_record(partial_report)['feedback']
    assert len(feedback) == 1 + 2 * len(config.CATEGORY_MAX)
    assert feedback[0] == "**Submission (20/20)** — Full credit (no due date set)."
    assert feedback[1].startswith("**Task 1 – Correctness: 18/18** — Component with JSX found.")


def test_record_is_deterministic(make_submission):
    submission = make_submission(app=FULL_APP, card=FULL_CARD)
    first = json.dumps(build_record(Grader(submission, "2025-10-01", "2025-09-30T12:00:00Z").grade()), indent=2)
    second = json.dumps(build_record(Grader(submission, "2025-10-01", "2025-09-30T12:00:00Z").grade()), indent=2)
    assert first == second


def test_markdown_has_subtotals_and_deductions(partial_report):
    md = render_markdown(partial_report)

    assert md.startswith("# Auto Grade Report")
    assert "- App: src/App.jsx" in md
    assert "- Completeness: **5/14**" in md
    assert "- Total: **30/40**" in md
    assert "- **53/100**" in md
    assert "## Deductions" in md
    assert "- Task 1 – Completeness: ID label not detected. (-4)" in md
    assert "- Total deducted from checks: **-47**" in md


def test_markdown_without_deductions(make_submission):
    md = render_markdown(Grader(make_submission(app=FULL_APP, card=FULL_CARD)).grade())
    assert "- None. Every check passed." in md
    assert "- **100/100**" in md


def test_markdown_for_missing_files(make_submission):
    md = render_markdown(Grader(make_submission()).grade())
    assert "- App: (not found)" in md
    assert "- StudentCard: (not found)" in md


def test_write_report_creates_both_files(tmp_path, partial_report):
    out_dir = write_report(partial_report, str(tmp_path))

    assert out_dir == os.path.join(str(tmp_path), config.OUTPUT_DIR)
    with open(os.path.join(out_dir, config.REPORT_JSON_FILE), encoding='utf-8') as f:
        assert json.load(f) == build_record(partial_report)
    with open(os.path.join(out_dir, config.REPORT_MD_FILE), encoding='utf-8') as f:
        assert f.read() == render_markdown(partial_report)


def test_write_report_raises_when_output_is_blocked(tmp_path, partial_report):
    (tmp_path / config.OUTPUT_DIR).write_text("not a directory", encoding='utf-8')
    with pytest.raises(ReportWriteError):
        write_report(partial_report, str(tmp_path))


def test_save_report_swallows_write_failures(tmp_path, partial_report):
    (tmp_path / config.OUTPUT_DIR).write_text("not a directory", encoding='utf-8')
    assert save_report(partial_report, str(tmp_path)) is False
    assert save_report(partial_report, str(tmp_path / "elsewhere")) is True
