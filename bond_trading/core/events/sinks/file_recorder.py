"""
Append-only CSV recorder sink.
"""
from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import Any

from bond_trading.core.events.events import RecordEvent


class FileRecorderSink:
    """Appends each record as one CSV row: timestamp, then the record fields.

    Events that are not records are written as a JSON object in a single
    column so nothing routed here is silently dropped.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._fh = self._path.open("a", encoding="utf-8", newline="")
        self._writer = csv.writer(self._fh, lineterminator="\n")
        self._closed = False

    @property
    def path(self) -> Path:
        return self._path

    def on_event(self, event: Any) -> None:
        if isinstance(event, RecordEvent):
            row = [event.timestamp, *event.fields]
        else:
            record = event.__dict__ if hasattr(event, "__dict__") else {"event": str(event)}
            row = [json.dumps(record, default=str)]
        self._writer.writerow(row)
        self._fh.flush()

    def close(self) -> None:
        if self._closed:
            return
        self._fh.flush()
        self._fh.close()
        self._closed = True
