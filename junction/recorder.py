"""
junction/recorder.py
====================
Collects one flat row per tick from :meth:`World.snapshot` and exposes
the run as a :class:`pandas.DataFrame` for analysis.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List

import pandas as pd

from junction.geometry import Heading

log = logging.getLogger("recorder")

COLUMNS: List[str] = [
    "tick",
    "clock_ms",
    "ns_state",
    "ns_elapsed_ms",
    "ew_state",
    "ew_elapsed_ms",
    "total",
    "waiting",
    "in_intersection",
] + [h.value.lower() for h in Heading]


class TraceRecorder:
    """Accumulates per-tick snapshot rows."""

    def __init__(self) -> None:
        self._rows: List[Dict[str, Any]] = []

    def __len__(self) -> int:
        return len(self._rows)

    def clear(self) -> None:
        self._rows = []

    def record(self, snapshot: Dict[str, Any]) -> None:
        phases = snapshot["phases"]
        counts = snapshot["counts"]
        row = {
            "tick": snapshot["tick"],
            "clock_ms": snapshot["clock_ms"],
            "ns_state": phases["NS"]["state"],
            "ns_elapsed_ms": phases["NS"]["elapsed_ms"],
            "ew_state": phases["EW"]["state"],
            "ew_elapsed_ms": phases["EW"]["elapsed_ms"],
            "total": counts["total"],
            "waiting": counts["waiting"],
            "in_intersection": counts["in_intersection"],
        }
        for heading, n in counts["by_heading"].items():
            row[heading.lower()] = n
        self._rows.append(row)

    def run(self, world: Any, ticks: int, dt: float) -> pd.DataFrame:
        """Tick *world* *ticks* times, recording after each step."""
        for _ in range(ticks):
            world.tick(dt)
            self.record(world.snapshot())
        log.info("recorded %d ticks (total rows=%d)", ticks, len(self._rows))
        return self.to_frame()

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame(self._rows, columns=COLUMNS)

    def summary(self) -> Dict[str, Any]:
        """Aggregate statistics over every recorded tick."""
        df = self.to_frame()
        if df.empty:
            return {
                "ticks": 0,
                "peak_agents": 0,
                "mean_agents": 0.0,
                "mean_waiting": 0.0,
                "ns_green_share": 0.0,
                "ew_green_share": 0.0,
                "phase_flips": 0,
            }
        green_axis = df["ns_state"].map(lambda s: "EW" if s == "RED" else "NS")
        flips = int((green_axis != green_axis.shift()).sum()) - 1
        return {
            "ticks": int(len(df)),
            "peak_agents": int(df["total"].max()),
            "mean_agents": float(df["total"].mean()),
            "mean_waiting": float(df["waiting"].mean()),
            "ns_green_share": float((df["ns_state"] == "GREEN").mean()),
            "ew_green_share": float((df["ew_state"] == "GREEN").mean()),
            "phase_flips": flips,
        }
