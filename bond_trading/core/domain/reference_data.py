"""Static bond reference data.

The simulated universe is the on-the-run US Treasury curve. Identifiers are
CUSIPs; each one determines the bond's static terms.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Mapping

from bond_trading.core.domain.types import Bond

LOGGER = logging.getLogger(__name__)


class UnknownInstrumentError(ValueError):
    """Raised when a product identifier is not in the reference data."""


_BONDS: dict[str, Bond] = {
    bond.product_id: bond
    for bond in (
        Bond(product_id="9128283H1", ticker="US2Y", coupon=0.01750, maturity=date(2019, 11, 30)),
        Bond(product_id="9128283L2", ticker="US3Y", coupon=0.01875, maturity=date(2020, 12, 15)),
        Bond(product_id="912828M80", ticker="US5Y", coupon=0.02000, maturity=date(2022, 11, 30)),
        Bond(product_id="9128283J7", ticker="US7Y", coupon=0.02125, maturity=date(2024, 11, 30)),
        Bond(product_id="9128283F5", ticker="US10Y", coupon=0.02250, maturity=date(2027, 12, 15)),
        Bond(product_id="912810TW8", ticker="US20Y", coupon=0.02500, maturity=date(2037, 12, 15)),
        Bond(product_id="912810RZ3", ticker="US30Y", coupon=0.02750, maturity=date(2047, 12, 15)),
    )
}

# PV01 per unit of face. The 20Y has no published figure.
DEFAULT_PV01_TABLE: Mapping[str, float] = {
    "9128283H1": 0.01948992,
    "9128283L2": 0.02865304,
    "912828M80": 0.04581119,
    "9128283J7": 0.06127718,
    "9128283F5": 0.08161449,
    "912810RZ3": 0.15013155,
}


def get_bond(product_id: str) -> Bond:
    """Return the bond for a CUSIP.

    Raises UnknownInstrumentError if the identifier is not known.
    """
    try:
        return _BONDS[product_id]
    except KeyError:
        raise UnknownInstrumentError(f"Invalid CUSIP: {product_id!r}") from None


def get_pv01(product_id: str, table: Mapping[str, float] | None = None) -> float:
    """Return the PV01-per-unit figure for a product.

    A product with no entry contributes 0.0.
    """
    pv01_table = DEFAULT_PV01_TABLE if table is None else table
    value = pv01_table.get(product_id)
    if value is None:
        LOGGER.warning("No PV01 figure for product", extra={"product_id": product_id})
        return 0.0
    return float(value)
