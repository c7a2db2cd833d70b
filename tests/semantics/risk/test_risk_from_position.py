"""
Semantic test: position to PV01 risk.

Invariant:
add_position stores PV01Risk(pv01 per unit from the table, aggregate
quantity across books) keyed by product, and publishes it on the update
channel.
"""

from __future__ import annotations

from bond_trading.core.domain.reference_data import DEFAULT_PV01_TABLE, get_bond
from bond_trading.core.domain.types import Position
from bond_trading.core.risk.risk_config import RiskConfig
from bond_trading.core.risk.risk_engine import RiskService


class _Updates:
    downstream = None

    def __init__(self) -> None:
        self.added = []
        self.updated = []

    def process_add(self, data) -> None:
        self.added.append(data)

    def process_remove(self, data) -> None:
        return

    def process_update(self, data) -> None:
        self.updated.append(data)


def test_risk_uses_aggregate_position() -> None:
    service = RiskService()
    updates = _Updates()
    service.add_listener(updates)

    position = Position(product=get_bond("9128283F5"), positions={"TRSY1": 3_000_000, "TRSY2": -1_000_000})
    risk = service.add_position(position)

    assert risk.pv01 == DEFAULT_PV01_TABLE["9128283F5"]
    assert risk.quantity == 2_000_000
    assert service.peek("9128283F5") == risk
    assert updates.added == []
    assert updates.updated == [risk]


def test_position_listener_feeds_risk() -> None:
    service = RiskService()

    service.listener.process_add(Position(product=get_bond("9128283H1"), positions={"TRSY1": 5}))

    assert service.peek("9128283H1").quantity == 5


def test_product_without_table_entry_has_zero_pv01() -> None:
    service = RiskService(RiskConfig(pv01_table={}))

    risk = service.add_position(Position(product=get_bond("912810TW8"), positions={"TRSY1": 10}))

    assert risk.pv01 == 0.0
    assert risk.exposure == 0.0
