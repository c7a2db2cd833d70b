"""Algo configuration models.

This module defines the configuration schemas of the two algos: the
liquidity-taking execution algo and the two-way streaming algo. Both parse
from JSON into validated, immutable parameter sets.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from bond_trading.core.domain.types import OrderType


class AlgoExecutionConfig(BaseModel):
    """Execution algo parameters.

    JSON example:
        "algo_execution": {
          "spread_threshold": 0.0078125,
          "order_type": "MARKET",
          "id_namespace": "bond-trading-v1"
        }
    """

    # Act only when offer - bid is at most this many points (1/128 by default).
    spread_threshold: float = Field(1.0 / 128.0, ge=0)

    order_type: OrderType = "MARKET"

    # Namespace hashed into every order id; changing it changes all ids.
    id_namespace: str = Field("bond-trading-v1", min_length=1)

    model_config = ConfigDict(extra="forbid", frozen=True)

    @classmethod
    def from_json_obj(cls, obj: dict[str, Any]) -> AlgoExecutionConfig:
        """Create an AlgoExecutionConfig instance from a JSON-compatible object."""
        return cls.model_validate(obj)


class AlgoStreamingConfig(BaseModel):
    """Streaming algo parameters.

    Visible size alternates between ``1x`` and ``2x`` the base quantity on
    successive updates; hidden size is ``hidden_ratio`` times visible.
    """

    base_visible_quantity: int = Field(10_000_000, gt=0)
    hidden_ratio: int = Field(2, ge=0)

    model_config = ConfigDict(extra="forbid", frozen=True)

    @classmethod
    def from_json_obj(cls, obj: dict[str, Any]) -> AlgoStreamingConfig:
        """Create an AlgoStreamingConfig instance from a JSON-compatible object."""
        return cls.model_validate(obj)
