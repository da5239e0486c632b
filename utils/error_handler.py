"""Custom exception classes for the grader."""

from typing import Optional

class BaseGraderException(Exception):
    """Base exception for all grader-specific errors."""
    pass

class SourceReadError(BaseGraderException):
    """A located student source file exists but could not be read."""
    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path

class TimestampError(BaseGraderException):
    """A deadline or commit timestamp is not valid ISO 8601."""
    def __init__(self, message: str, value: Optional[str] = None):
        super().__init__(message)
        self.value = value

class ReportWriteError(BaseGraderException):
    """Writing the JSON or Markdown report to disk failed."""
    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path

    def __str__(self) -> str:
        base = super().__str__()
        if self.path:
            return f"{base} (Path: {self.path})"
        return base
