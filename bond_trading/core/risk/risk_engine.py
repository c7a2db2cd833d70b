"""PV01 risk service.

Turns positions into per-product PV01 risk and aggregates it over bucketed
sectors. Risk is keyed by product id; publication uses the "update" channel
of the listeners.
"""

from __future__ import annotations

import logging

from bond_trading.core.domain.reference_data import get_bond, get_pv01
from bond_trading.core.domain.types import BucketedSector, Position, PV01Risk
from bond_trading.core.events.node import DataflowNode
from bond_trading.core.risk.risk_config import RiskConfig

LOGGER = logging.getLogger(__name__)


class RiskService(DataflowNode[str, PV01Risk]):
    """Vends risk for a single security and across a bucketed sector."""

    def __init__(self, risk_cfg: RiskConfig | None = None) -> None:
        super().__init__(
            "risk",
            key_fn=lambda risk: risk.product_id,
            default_factory=PV01Risk.empty,
            notify="update",
        )
        self.risk_cfg = risk_cfg or RiskConfig()
        self.listener = RiskListenerFromPosition(self)

    def add_position(self, position: Position) -> PV01Risk:
        """Compute and publish the risk of ``position``.

        The risk carries the product's PV01 per unit and the aggregate
        quantity across all books.
        """
        risk = PV01Risk(
            product=position.product,
            pv01=get_pv01(position.product_id, self.risk_cfg.pv01_table),
            quantity=position.get_aggregate_position(),
        )
        self.on_message(risk)
        return risk

    def sector(self, name: str) -> BucketedSector:
        """Build the configured bucket ``name`` from reference data."""
        try:
            members = self.risk_cfg.buckets[name]
        except KeyError:
            raise KeyError(f"Unknown risk bucket: {name}") from None
        return BucketedSector(name=name, products=tuple(get_bond(pid) for pid in members))

    def get_bucketed_risk(self, sector: BucketedSector | str) -> PV01Risk:
        """Aggregate risk over a sector.

        The result carries the sum of ``pv01 * quantity`` over the members in
        ``pv01`` and a quantity of 1. A member with no recorded risk
        contributes zero unless ``strict_buckets`` is set. The store is not
        modified.
        """
        if isinstance(sector, str):
            sector = self.sector(sector)

        total = 0.0
        for bond in sector.products:
            risk = self.peek(bond.product_id)
            if risk is None:
                if self.risk_cfg.strict_buckets:
                    raise KeyError(
                        f"No risk recorded for {bond.product_id} in bucket {sector.name}"
                    )
                continue
            total += risk.exposure

        return PV01Risk(product=sector, pv01=total, quantity=1)

    def bucketed_risks(self) -> dict[str, PV01Risk]:
        """Return the aggregated risk of every configured bucket."""
        return {name: self.get_bucketed_risk(name) for name in self.risk_cfg.buckets}

    def log_bucketed_risk(self) -> None:
        for name, risk in self.bucketed_risks().items():
            LOGGER.info("bucketed_risk", extra={"bucket": name, "pv01": risk.pv01})


class RiskListenerFromPosition:
    """Feeds positions into the risk service."""

    def __init__(self, service: RiskService) -> None:
        self.downstream = service

    def process_add(self, data: Position) -> None:
        self.downstream.add_position(data)

    def process_remove(self, data: Position) -> None:
        return

    def process_update(self, data: Position) -> None:
        return

