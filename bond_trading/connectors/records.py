"""Shared parsing of comma-separated feed records."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Iterator

from bond_trading.core.domain.types import PricingSide, TradeSide

LOGGER = logging.getLogger(__name__)


class MalformedRecordError(ValueError):
    """A feed line that cannot be turned into a record."""


def iter_fields(lines: Iterable[str], *, feed: str, min_fields: int) -> Iterator[tuple[int, list[str]]]:
    """Yield ``(line_no, fields)`` for every non-blank line.

    Lines with fewer than ``min_fields`` fields are skipped with a warning.
    """
    for line_no, line in enumerate(lines, start=1):
        text = line.strip()
        if not text:
            continue
        fields = [field.strip() for field in text.split(",")]
        # A trailing comma leaves an empty last field.
        if fields and fields[-1] == "":
            fields.pop()
        if len(fields) < min_fields:
            LOGGER.warning(
                "malformed record skipped",
                extra={"feed": feed, "line_no": line_no, "reason": "too few fields"},
            )
            continue
        yield line_no, fields


def skip_record(feed: str, line_no: int, exc: ValueError) -> None:
    LOGGER.warning(
        "malformed record skipped",
        extra={"feed": feed, "line_no": line_no, "reason": str(exc)},
    )


def parse_quantity(text: str) -> int:
    try:
        quantity = int(text)
    except ValueError:
        raise MalformedRecordError(f"Invalid quantity: {text!r}") from None
    if quantity < 0:
        raise MalformedRecordError(f"Negative quantity: {text!r}")
    return quantity


def parse_pricing_side(text: str) -> PricingSide:
    if text == "BID":
        return "BID"
    if text != "OFFER":
        LOGGER.warning("unrecognized pricing side, using OFFER", extra={"side": text})
    return "OFFER"


def parse_trade_side(text: str) -> TradeSide:
    if text == "BUY":
        return "BUY"
    if text != "SELL":
        LOGGER.warning("unrecognized trade side, using SELL", extra={"side": text})
    return "SELL"


def read_lines(path: str | Path) -> Iterator[str]:
    with Path(path).open("r", encoding="utf-8") as fh:
        yield from fh
