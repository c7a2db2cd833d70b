"""
Semantic test: command line entrypoint.

Invariant:
The CLI runs every available feed from the data directory, writes the
output files and exits with status 0.
"""

from __future__ import annotations

import json
from pathlib import Path

from bond_trading.runtime.entrypoint import main


def test_cli_runs_feeds(tmp_path: Path) -> None:
    data_dir = tmp_path / "data"
    out_dir = tmp_path / "out"
    data_dir.mkdir()
    (data_dir / "prices.txt").write_text("9128283L2,99-160,99-162\n", encoding="utf-8")
    config = tmp_path / "system.json"
    config.write_text(json.dumps({"gui_throttle_ms": 0}), encoding="utf-8")

    status = main(
        [
            "--config", str(config),
            "--data-dir", str(data_dir),
            "--out-dir", str(out_dir),
            "--log-level", "WARNING",
            "--quiet",
        ]
    )

    assert status == 0
    assert (out_dir / "gui.txt").exists()
    assert (out_dir / "streaming.txt").read_text(encoding="utf-8").count("\n") == 1
