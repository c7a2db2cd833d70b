"""
Console report sink.
"""
from __future__ import annotations

import sys
from typing import Any, TextIO

from bond_trading.core.events.events import ReportEvent


class ConsoleReportSink:
    """Prints report events to a text stream (stdout by default)."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream

    def on_event(self, event: Any) -> None:
        if not isinstance(event, ReportEvent):
            return
        stream = self._stream if self._stream is not None else sys.stdout
        stream.write(event.text)
        if not event.text.endswith("\n"):
            stream.write("\n")
        stream.flush()
