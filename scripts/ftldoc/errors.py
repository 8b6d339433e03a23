"""Exceptions raised by ftldoc."""

from __future__ import annotations


class FtlDocError(Exception):
    """Base exception for ftldoc operations."""

    pass


class TemplateSyntaxError(FtlDocError):
    """Raised when a template cannot be parsed into a tree."""

    def __init__(
        self,
        message: str,
        line: int,
        column: int,
        filename: str | None = None,
    ):
        where = f"{filename}:" if filename else ""
        super().__init__(f"{where}{line}:{column}: {message}")
        self.filename = filename
        self.line = line
        self.column = column
