"""System configuration model.

Aggregates the per-component configuration blocks of one run. Every block
is optional in JSON; omitted blocks take their defaults.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from bond_trading.core.risk.risk_config import RiskConfig
from bond_trading.strategies.strategy_config import AlgoExecutionConfig, AlgoStreamingConfig


class SystemConfig(BaseModel):
    """Structured run configuration.

    JSON example:
        {
          "book_depth": 5,
          "gui_throttle_ms": 300,
          "books": ["TRSY1", "TRSY2", "TRSY3"],
          "inquiry_quote_price": 100.0,
          "algo_execution": {"spread_threshold": 0.0078125},
          "algo_streaming": {"base_visible_quantity": 10000000},
          "risk": {"strict_buckets": false}
        }
    """

    book_depth: int = Field(5, ge=1)
    gui_throttle_ms: int = Field(300, ge=0)
    books: tuple[str, ...] = ("TRSY1", "TRSY2", "TRSY3")
    inquiry_quote_price: float = Field(100.0, ge=0)

    algo_execution: AlgoExecutionConfig = Field(default_factory=AlgoExecutionConfig)
    algo_streaming: AlgoStreamingConfig = Field(default_factory=AlgoStreamingConfig)
    risk: RiskConfig = Field(default_factory=RiskConfig)

    model_config = ConfigDict(extra="forbid")

    @classmethod
    def from_json_obj(cls, obj: dict[str, Any]) -> SystemConfig:
        """Create a SystemConfig instance from a JSON-compatible object."""
        return cls.model_validate(obj)

    @classmethod
    def from_path(cls, path: str | Path) -> SystemConfig:
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(path)
        return cls.from_json_obj(json.loads(path.read_text(encoding="utf-8")))

    @model_validator(mode="after")
    def validate_books(self) -> SystemConfig:
        if not self.books:
            raise ValueError("books must not be empty")
        if any(not book for book in self.books):
            raise ValueError("book names must be non-empty")
        if len(set(self.books)) != len(self.books):
            raise ValueError("book names must be unique")
        return self
