"""Locating and reading the student's source files."""

import os
from dataclasses import dataclass
from typing import List, Optional

import config
from utils.logger import get_logger
from utils.error_handler import SourceReadError

logger = get_logger()


@dataclass(frozen=True)
class LocatedFile:
    """A resolved candidate path and its text. `path` is None when no candidate exists."""
    path: Optional[str]
    content: str = ""

    @property
    def found(self) -> bool:
        return self.path is not None


@dataclass(frozen=True)
class Submission:
    """The two files a lab submission is graded on."""
    app: LocatedFile
    card: LocatedFile


def read_text(path: str) -> str:
    """Reads a file as UTF-8 text, replacing undecodable bytes.

    Raises:
        SourceReadError: If the file cannot be opened or read.
    """
    try:
        with open(path, 'r', encoding='utf-8', errors='replace') as f:
            return f.read()
    except OSError as e:
        raise SourceReadError(f"Could not read '{path}': {e}", path=path) from e


def read_first(candidates: List[str], root: str = ".") -> LocatedFile:
    """Returns the first candidate that exists under `root`, with its text.

    A missing file resolves to `LocatedFile(None, "")`. An existing file that
    cannot be read keeps its path but has empty content. Never raises.

    Args:
        candidates: Relative paths in order of preference.
        root: Directory the candidates are relative to.
    """
    for candidate in candidates:
        full_path = os.path.join(root, candidate)
        if not os.path.isfile(full_path):
            logger.debug(f"Candidate not found: {candidate}")
            continue
        try:
            content = read_text(full_path)
        except SourceReadError as e:
            logger.warning(f"{e}. Treating it as empty.")
            content = ""
        logger.info(f"Using {candidate} ({len(content)} chars).")
        return LocatedFile(path=candidate, content=content)

    logger.warning(f"None of the candidate files exist: {', '.join(candidates)}")
    return LocatedFile(path=None, content="")


def load_submission(root: str = ".") -> Submission:
    """Locates the App entry file and the StudentCard component under `root`."""
    return Submission(
        app=read_first(config.APP_CANDIDATES, root),
        card=read_first(config.CARD_CANDIDATES, root),
    )
