"""Sinks for non-fatal diagnostics such as malformed region markers."""

from __future__ import annotations

import logging
from typing import Protocol

log = logging.getLogger(__name__)


class DiagnosticSink(Protocol):
    def report(self, message: str) -> None: ...


class LoggingSink:
    """Forward diagnostics to the logging system as warnings."""

    def __init__(self, logger: logging.Logger | None = None, prefix: str = ""):
        self.logger = logger or log
        self.prefix = prefix

    def report(self, message: str) -> None:
        self.logger.warning("%s%s", self.prefix, message)


class CollectingSink:
    """Keep diagnostics in memory, optionally passing them on."""

    def __init__(self, forward: DiagnosticSink | None = None):
        self.messages: list[str] = []
        self.forward = forward

    def report(self, message: str) -> None:
        self.messages.append(message)
        if self.forward is not None:
            self.forward.report(message)

    def __len__(self) -> int:
        return len(self.messages)
