"""Configuration settings for the React Starter Lab auto-grader."""

import os
import logging
from typing import Dict, Final, List

# Debug flag: 1 = debug mode (verbose logging), 0 = production mode
DEBUG: Final[int] = int(os.environ.get("GRADER_DEBUG", "0"))

# --- Student source files ---
# First existing candidate wins, relative to the repository root.
APP_CANDIDATES: Final[List[str]] = [
    os.path.join("src", "App.jsx"),
    os.path.join("src", "App.js"),
]
CARD_CANDIDATES: Final[List[str]] = [
    os.path.join("src", "components", "StudentCard.jsx"),
    os.path.join("src", "components", "StudentCard.js"),
]

# --- Report output ---
OUTPUT_DIR: Final[str] = "grading"
REPORT_JSON_FILE: Final[str] = "grade.json"
REPORT_MD_FILE: Final[str] = "grade.md"

# --- Rubric budget ---
SUBMISSION_MAX: Final[int] = 20
# Fraction of submission points kept for a late commit
LATE_PENALTY: Final[float] = 0.5
CATEGORY_MAX: Final[Dict[str, int]] = {
    "correctness": 18,
    "completeness": 14,
    "quality": 8,
}
CATEGORY_TITLES: Final[Dict[str, str]] = {
    "correctness": "Correctness",
    "completeness": "Completeness",
    "quality": "Code Quality",
}
TASKS: Final[List[int]] = [1, 2]
TASK_MAX: Final[int] = sum(CATEGORY_MAX.values())
GRAND_MAX: Final[int] = SUBMISSION_MAX + TASK_MAX * len(TASKS)

# --- Logging Configuration ---
# Console logging is only enabled in DEBUG mode (stderr), stdout carries the report.
LOG_LEVEL = logging.DEBUG if DEBUG else logging.INFO
LOG_FORMAT = '%(asctime)s | %(levelname)s | %(name)s | %(module)s.%(funcName)s:%(lineno)d | %(message)s'
LOG_DIR: Final[str] = os.environ.get("GRADER_LOG_DIR", "logs")
LOG_FILE: Final[str] = os.path.join(LOG_DIR, "grader.log")

# Basic check
if __name__ == "__main__":
    print(f"Debug Mode: {'On' if DEBUG else 'Off'}")
    print(f"Log Level: {logging.getLevelName(LOG_LEVEL)}")
    print(f"Log File: {LOG_FILE}")
    print(f"Output Directory: {OUTPUT_DIR}")
    print(f"Maximum Grade: {GRAND_MAX}")
    print("Category budget per task:")
    for category, maximum in CATEGORY_MAX.items():
        print(f"- {category}: {maximum}")
