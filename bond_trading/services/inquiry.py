"""Customer inquiry handling.

An inquiry arrives RECEIVED. The service answers it with a quote at the
configured price (QUOTED) and the customer is taken to accept immediately
(DONE). Every accepted state change is stored and fanned out, so listeners
see RECEIVED, QUOTED and DONE in that order.
"""

from __future__ import annotations

import logging

from bond_trading.core.domain.inquiry_state_machine import is_terminal_state, is_valid_transition
from bond_trading.core.domain.types import Inquiry
from bond_trading.core.events.node import DataflowNode

LOGGER = logging.getLogger(__name__)

DEFAULT_QUOTE_PRICE: float = 100.0


class InquiryService(DataflowNode[str, Inquiry]):
    """Keyed on inquiry id."""

    def __init__(self, quote_price: float = DEFAULT_QUOTE_PRICE) -> None:
        if quote_price < 0:
            raise ValueError("quote_price must be >= 0")
        super().__init__(
            "inquiry",
            key_fn=lambda inquiry: inquiry.inquiry_id,
            default_factory=Inquiry.empty,
        )
        self.quote_price = quote_price

    def on_message(self, data: Inquiry) -> None:
        if not self._transition(data):
            return
        if data.state == "RECEIVED":
            self.send_quote(data.inquiry_id, self.quote_price)

    def _transition(self, data: Inquiry) -> bool:
        prev = self.peek(data.inquiry_id)
        prev_state = None if prev is None else prev.state
        if not is_valid_transition(prev_state, data.state):
            LOGGER.warning(
                "invalid inquiry transition ignored",
                extra={
                    "inquiry_id": data.inquiry_id,
                    "prev_state": prev_state,
                    "next_state": data.state,
                },
            )
            return False
        super().on_message(data)
        return True

    def send_quote(self, inquiry_id: str, price: float) -> None:
        """Quote a RECEIVED inquiry; the customer accepts it at once."""
        inquiry = self.peek(inquiry_id)
        if inquiry is None or inquiry.state != "RECEIVED":
            LOGGER.warning(
                "quote for inquiry not in RECEIVED state ignored",
                extra={"inquiry_id": inquiry_id},
            )
            return
        quoted = inquiry.model_copy(update={"price": price, "state": "QUOTED"})
        if self._transition(quoted):
            self._transition(quoted.model_copy(update={"state": "DONE"}))

    def reject_inquiry(self, inquiry_id: str) -> bool:
        """Move a live inquiry to REJECTED. Returns False if not allowed."""
        inquiry = self.peek(inquiry_id)
        if inquiry is None:
            LOGGER.warning("reject for unknown inquiry ignored", extra={"inquiry_id": inquiry_id})
            return False
        if is_terminal_state(inquiry.state):
            LOGGER.warning(
                "reject for completed inquiry ignored",
                extra={"inquiry_id": inquiry_id, "state": inquiry.state},
            )
            return False
        return self._transition(inquiry.model_copy(update={"state": "REJECTED"}))
