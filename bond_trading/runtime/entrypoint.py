from __future__ import annotations

import argparse
import logging
from pathlib import Path

from bond_trading.runtime.config import SystemConfig
from bond_trading.runtime.system import TradingSystem, build_event_bus

LOGGER = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Run the bond trading system over feed files"
    )

    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to system JSON config (defaults apply when omitted).",
    )

    parser.add_argument(
        "--data-dir",
        type=Path,
        default=Path("data"),
        help="Directory holding prices.txt, trades.txt, marketdata.txt, inquiries.txt.",
    )

    parser.add_argument(
        "--out-dir",
        type=Path,
        default=Path("output"),
        help="Directory where historical and GUI files are appended.",
    )

    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level.",
    )

    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Do not print execution and stream reports.",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    cfg = SystemConfig.from_path(args.config) if args.config is not None else SystemConfig()

    system = TradingSystem(cfg, build_event_bus(args.out_dir, console=not args.quiet))
    try:
        published = system.run_feeds(args.data_dir)
        system.risk.log_bucketed_risk()
    finally:
        system.close()

    LOGGER.info("run finished", extra={"published": published})
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
