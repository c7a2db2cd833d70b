"""
Service listener interface.

Listeners are registered on a DataflowNode and are called synchronously,
in registration order, every time the node publishes a value.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, TypeVar

if TYPE_CHECKING:
    from bond_trading.core.events.node import DataflowNode

V_contra = TypeVar("V_contra", contravariant=True)


class ServiceListener(Protocol[V_contra]):
    """Capability set of a subscriber.

    ``downstream`` is the node the listener feeds, or None for a terminal
    consumer. It is what makes the wiring graph checkable for cycles.
    """

    downstream: DataflowNode[Any, Any] | None

    def process_add(self, data: V_contra) -> None:
        """Consume a newly published value."""

    def process_remove(self, data: V_contra) -> None:
        """Reserved. Never called by the current nodes."""

    def process_update(self, data: V_contra) -> None:
        """Consume an updated value."""
