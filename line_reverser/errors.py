from __future__ import annotations

from typing import Optional

from .rules import EXIT_FAILURE, USAGE_TEMPLATE


class LineReverserError(Exception):
    """Base for every error that terminates a run."""

    exit_status = EXIT_FAILURE


class UsageError(LineReverserError):
    def __init__(self, program: str):
        self.program = program
        super().__init__(USAGE_TEMPLATE.format(program=program))


class FileOpenError(LineReverserError):
    def __init__(self, path: str, mode: str, reason: Optional[str] = None):
        self.path = path
        self.mode = mode
        self.reason = reason
        super().__init__(f"Error opening file: {path}")


class IOFault(LineReverserError):
    """A read or write failed after the loop started."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"I/O error: {reason}")
