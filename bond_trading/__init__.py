"""Public API for the bond_trading package.

Only symbols imported here are considered part of the stable,
supported external interface.
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

# ----------------------------------------------------------------------
# Domain Types and price notation
# ----------------------------------------------------------------------
from bond_trading.core.domain.price_codec import decode_price, encode_price
from bond_trading.core.domain.reference_data import (
    UnknownInstrumentError,
    get_bond,
    get_pv01,
)
from bond_trading.core.domain.types import (
    AlgoExecution,
    AlgoStream,
    BidOffer,
    Bond,
    BucketedSector,
    ExecutionOrder,
    Inquiry,
    Order,
    OrderBook,
    Position,
    PriceQuote,
    PriceStream,
    PriceStreamOrder,
    PV01Risk,
    Trade,
)

# ----------------------------------------------------------------------
# Dataflow fabric
# ----------------------------------------------------------------------
from bond_trading.core.events.listener import ServiceListener
from bond_trading.core.events.node import CyclicWiringError, DataflowNode

# ----------------------------------------------------------------------
# Config API (used by consumers)
# ----------------------------------------------------------------------
from bond_trading.core.risk.risk_config import RiskConfig
from bond_trading.core.risk.risk_engine import RiskService
from bond_trading.runtime.config import SystemConfig

# ----------------------------------------------------------------------
# System
# ----------------------------------------------------------------------
from bond_trading.runtime.system import TradingSystem, build_event_bus
from bond_trading.services.market_data import MarketDataService
from bond_trading.strategies.algo_execution import AlgoExecutionService
from bond_trading.strategies.algo_streaming import AlgoStreamingService
from bond_trading.strategies.strategy_config import AlgoExecutionConfig, AlgoStreamingConfig

# ----------------------------------------------------------------------
# Public API definition
# ----------------------------------------------------------------------

__all__ = [
    # Price notation
    "decode_price",
    "encode_price",

    # Reference data
    "UnknownInstrumentError",
    "get_bond",
    "get_pv01",

    # Domain types
    "Bond",
    "Order",
    "BidOffer",
    "OrderBook",
    "ExecutionOrder",
    "AlgoExecution",
    "PriceQuote",
    "PriceStreamOrder",
    "PriceStream",
    "AlgoStream",
    "Trade",
    "Position",
    "BucketedSector",
    "PV01Risk",
    "Inquiry",

    # Dataflow
    "DataflowNode",
    "ServiceListener",
    "CyclicWiringError",

    # Engines
    "MarketDataService",
    "AlgoExecutionService",
    "AlgoStreamingService",
    "RiskService",

    # Config
    "AlgoExecutionConfig",
    "AlgoStreamingConfig",
    "RiskConfig",
    "SystemConfig",

    # System
    "TradingSystem",
    "build_event_bus",

    # Version
    "__version__",
]

# ----------------------------------------------------------------------
# Package version
# ----------------------------------------------------------------------

try:
    __version__ = version("bond-trading")
except PackageNotFoundError:
    __version__ = "0.0.0"
