"""Risk configuration model for the PV01 risk service."""

from __future__ import annotations

import math
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from bond_trading.core.domain.reference_data import DEFAULT_PV01_TABLE

DEFAULT_BUCKETS: dict[str, list[str]] = {
    "FrontEnd": ["9128283H1", "9128283L2"],
    "Belly": ["912828M80", "9128283J7", "9128283F5"],
    "LongEnd": ["912810TW8", "912810RZ3"],
}


class RiskConfig(BaseModel):
    """Structured PV01 risk configuration.

    JSON example:
        "risk": {
          "pv01_table": {"9128283H1": 0.0195},
          "buckets": {"FrontEnd": ["9128283H1", "9128283L2"]},
          "strict_buckets": false
        }
    """

    # PV01 per unit of face, keyed by product id.
    pv01_table: dict[str, float] = Field(default_factory=lambda: dict(DEFAULT_PV01_TABLE))

    # Named risk buckets, each a list of product ids.
    buckets: dict[str, list[str]] = Field(
        default_factory=lambda: {k: list(v) for k, v in DEFAULT_BUCKETS.items()}
    )

    # When True a bucket member with no recorded risk raises KeyError
    # instead of contributing zero.
    strict_buckets: bool = False

    model_config = ConfigDict(extra="forbid")

    @classmethod
    def from_json_obj(cls, risk_obj: dict[str, Any]) -> RiskConfig:
        """Create a RiskConfig instance from a JSON-compatible object."""
        return cls.model_validate(risk_obj)

    @model_validator(mode="after")
    def validate_consistency(self) -> RiskConfig:
        """Validate internal consistency of the risk configuration."""
        for product_id, pv01 in self.pv01_table.items():
            if not math.isfinite(pv01):
                raise ValueError(f"pv01 for {product_id} must be finite")
        for name, members in self.buckets.items():
            if not name:
                raise ValueError("bucket names must be non-empty")
            if len(set(members)) != len(members):
                raise ValueError(f"bucket {name} lists a product more than once")
        return self
