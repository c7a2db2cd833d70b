"""Generic keyed store with synchronous listener fan-out.

Every service of the system is a DataflowNode: it owns a mapping from key to
the latest value (last write wins, no history, no eviction) and a list of
listeners. Publishing a value stores it and then calls every listener before
returning, so a listener that publishes in turn recurses through the graph on
the same call stack. The wiring graph must therefore be acyclic; this is
checked each time a listener is registered.
"""

from __future__ import annotations

import logging
from typing import Callable, Generic, Iterator, Literal, TypeVar

from bond_trading.core.events.listener import ServiceListener

LOGGER = logging.getLogger(__name__)

K = TypeVar("K")
V = TypeVar("V")

NotifyMode = Literal["add", "update"]


class CyclicWiringError(ValueError):
    """Raised when registering a listener would close a cycle."""


class DataflowNode(Generic[K, V]):
    """Keyed store of the latest value per key plus listener fan-out."""

    def __init__(
        self,
        name: str,
        *,
        key_fn: Callable[[V], K],
        default_factory: Callable[[K], V],
        notify: NotifyMode = "add",
    ) -> None:
        if notify not in ("add", "update"):
            raise ValueError(f"Invalid notify mode: {notify}")

        self._name = name
        self._key_fn = key_fn
        self._default_factory = default_factory
        self._notify_mode: NotifyMode = notify

        self._store: dict[K, V] = {}
        self._listeners: list[ServiceListener[V]] = []

    @property
    def name(self) -> str:
        return self._name

    # ---- Store ----
    def get_data(self, key: K) -> V:
        """Return the value for ``key``, creating a default entry if absent.

        The default entry is built by the node's ``default_factory`` and is
        kept in the store. Callers that must distinguish "not yet present"
        should use ``peek`` or ``has_data`` instead.
        """
        try:
            return self._store[key]
        except KeyError:
            value = self._default_factory(key)
            self._store[key] = value
            return value

    def peek(self, key: K) -> V | None:
        """Return the value for ``key`` without creating an entry."""
        return self._store.get(key)

    def has_data(self, key: K) -> bool:
        return key in self._store

    def keys(self) -> list[K]:
        return list(self._store)

    def __len__(self) -> int:
        return len(self._store)

    def __iter__(self) -> Iterator[K]:
        return iter(list(self._store))

    # ---- Publish ----
    def on_message(self, data: V) -> None:
        """Store ``data`` under its key, then notify every listener.

        Returns only after every listener, and everything it triggers
        downstream, has finished.
        """
        self._store[self._key_fn(data)] = data
        self._fan_out(data)

    def _fan_out(self, data: V) -> None:
        for listener in tuple(self._listeners):
            if self._notify_mode == "update":
                listener.process_update(data)
            else:
                listener.process_add(data)

    # ---- Wiring ----
    def add_listener(self, listener: ServiceListener[V]) -> None:
        """Register a listener.

        Raises CyclicWiringError if the listener's downstream node can
        already reach this node.
        """
        downstream = getattr(listener, "downstream", None)
        if downstream is not None and downstream.reaches(self):
            raise CyclicWiringError(
                f"Listener {type(listener).__name__} would wire "
                f"{self._name} -> {downstream.name} into a cycle"
            )

        self._listeners.append(listener)
        LOGGER.debug(
            "listener registered",
            extra={
                "node": self._name,
                "listener": type(listener).__name__,
                "downstream": None if downstream is None else downstream.name,
            },
        )

    @property
    def listeners(self) -> tuple[ServiceListener[V], ...]:
        return tuple(self._listeners)

    def downstream_nodes(self) -> list[DataflowNode]:
        out: list[DataflowNode] = []
        for listener in self._listeners:
            node = getattr(listener, "downstream", None)
            if node is not None:
                out.append(node)
        return out

    def reaches(self, target: DataflowNode) -> bool:
        """Return True if ``target`` is this node or reachable from it."""
        seen: set[int] = set()
        stack: list[DataflowNode] = [self]
        while stack:
            node = stack.pop()
            if node is target:
                return True
            if id(node) in seen:
                continue
            seen.add(id(node))
            stack.extend(node.downstream_nodes())
        return False
