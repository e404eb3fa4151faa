# tsplib_bench/errors.py
from __future__ import annotations
from typing import Optional


class MalformedInstance(ValueError):
    """Raised when a TSPLIB file cannot be turned into a complete problem."""

    def __init__(self, message: str, line_no: Optional[int] = None):
        self.line_no = line_no
        if line_no is not None:
            message = f"line {line_no}: {message}"
        super().__init__(message)
