"""Utilities for deterministic order identifiers."""

from __future__ import annotations

import hashlib
from dataclasses import dataclass

_ID_ALPHABET: str = "1234567890QWERTYUIOPASDFGHJKLZXCVBNM"
ORDER_ID_LENGTH: int = 12


@dataclass(frozen=True, slots=True)
class OrderSlot:
    """Deterministic identity of one algo decision.

    The slot is defined by (product_id, side, sequence).
    """

    product_id: str
    side: str
    sequence: int


def stable_order_id(slot: OrderSlot, namespace: str) -> str:
    """Return a stable 12-character alphanumeric id for a slot.

    The namespace makes the mapping explicit and versionable: two runs over
    the same feeds produce the same order ids.
    """
    if not namespace:
        raise ValueError("namespace must be non-empty")

    payload = (
        f"{slot.product_id}:{slot.side}:{slot.sequence}:{namespace}"
    ).encode("utf-8")
    digest = hashlib.blake2b(payload, digest_size=16).digest()
    value = int.from_bytes(digest, "big")

    base = len(_ID_ALPHABET)
    chars: list[str] = []
    for _ in range(ORDER_ID_LENGTH):
        value, idx = divmod(value, base)
        chars.append(_ID_ALPHABET[idx])
    return "".join(chars)
