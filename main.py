"""Main execution script for the React Starter Lab auto-grader.

Run from the root of a student's repository (CI or locally):

    DUE_DATE="2025-10-01T23:59:59+03:00" python main.py

Writes grading/grade.json and grading/grade.md and prints the Markdown
report. The exit code is always 0; a low grade is a normal result.
"""

import sys
import os
from typing import Optional

from dotenv import find_dotenv, load_dotenv

# Load DUE_DATE and GRADER_* settings from a .env file before config is read.
# DUE_DATE itself is read by main() on each call.
load_dotenv(find_dotenv(usecwd=True))

# Ensure the project root directory is in the Python path
PROJECT_ROOT = os.path.dirname(os.path.abspath(__file__))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from utils.logger import setup_logger
from core.sources import load_submission
from core.timing import get_last_commit_time
from core.grader import Grader, GradeReport
from core.report import render_markdown, save_report
import ui.cli as cli

logger = setup_logger()

def main(root: Optional[str] = None, due_date: Optional[str] = None) -> Optional[GradeReport]:
    """Grades the repository at `root` (default: the working directory).

    Args:
        root: Repository root containing src/.
        due_date: ISO 8601 deadline. Defaults to DUE_DATE from the environment.

    Returns:
        The GradeReport, or None if grading hit an unexpected error.
    """
    root = root or os.getcwd()
    if due_date is None:
        # Read at call time so a DUE_DATE exported after import still applies.
        due_date = os.environ.get("DUE_DATE", "").strip()
    logger.info(f"Starting grading in {root} (due date: {due_date or 'not set'}).")

    try:
        submission = load_submission(root)
        commit_iso = get_last_commit_time(root)
        report = Grader(submission, due_date=due_date, commit_iso=commit_iso).grade()

        if not save_report(report, root):
            cli.display_warning("Could not save the report files; printing only.")
        cli.display_report(render_markdown(report))
        cli.display_score_table(report)
        return report
    except KeyboardInterrupt:
        logger.info("Grading interrupted by user (Ctrl+C).")
        cli.display_warning("Grading interrupted.")
    except Exception as e:
        # Catch-all so CI never fails on a grading bug
        logger.critical(f"An unexpected error occurred: {e}", exc_info=True)
        cli.display_error(f"An unexpected error occurred: {e}. Check logs for details.")
    return None

def run():
    """Console script entry point."""
    main()
    sys.exit(0)

if __name__ == "__main__":
    run()
