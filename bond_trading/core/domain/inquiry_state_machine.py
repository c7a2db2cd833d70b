"""
Customer inquiry lifecycle state machine definitions.

This module defines the canonical inquiry states and the allowed transitions
between them. It is intentionally passive and validation-only: callers decide
what to do with a transition that is not allowed.
"""

from __future__ import annotations

# Terminal inquiry states: once reached, the inquiry is considered complete.
INQUIRY_TERMINAL_STATES: frozenset[str] = frozenset(
    {
        "DONE",
        "REJECTED",
        "CUSTOMER_REJECTED",
    }
)


# Allowed inquiry state transitions.
#
# Key   : previous state (or None if the inquiry was not previously observed)
# Value : set of allowed next states
#
# Notes:
# - A quote is sent while the inquiry is RECEIVED; the state then moves to QUOTED.
# - Either side may walk away before the inquiry is DONE.
INQUIRY_ALLOWED_TRANSITIONS: dict[str | None, frozenset[str]] = {
    None: frozenset({"RECEIVED"}),

    "RECEIVED": frozenset(
        {
            "QUOTED",
            "REJECTED",
        }
    ),

    "QUOTED": frozenset(
        {
            "DONE",
            "REJECTED",
            "CUSTOMER_REJECTED",
        }
    ),
}


def is_terminal_state(state: str) -> bool:
    """Return True if the given state is terminal."""
    return state in INQUIRY_TERMINAL_STATES


def is_valid_transition(prev_state: str | None, next_state: str) -> bool:
    """Return True if the transition prev_state -> next_state is allowed."""
    allowed = INQUIRY_ALLOWED_TRANSITIONS.get(prev_state)
    if allowed is None:
        return False
    return next_state in allowed
