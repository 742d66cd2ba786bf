#!/usr/bin/env python3
"""
junction/phases.py
==================
Fixed-cycle traffic-light controller for the two coupled axes.

Each axis runs ``GREEN -> YELLOW -> RED``.  RED is passive: its length is
implied by the other axis's green + yellow.  The only way out of RED is
the other axis completing its YELLOW -> RED transition, which flips this
axis to GREEN inside the same :meth:`PhaseController.advance` call, so no
caller can ever observe both axes RED or both axes non-RED.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from junction.geometry import Axis
from junction.policy import RuntimeConfig

log = logging.getLogger("phases")


class LightState(Enum):
    GREEN = "GREEN"
    YELLOW = "YELLOW"
    RED = "RED"


@dataclass
class Phase:
    """Light state of one axis plus the time spent in that state."""
    axis: Axis
    state: LightState = LightState.RED
    elapsed_ms: float = 0.0

    def as_dict(self) -> Dict[str, Any]:
        return {"state": self.state.value, "elapsed_ms": self.elapsed_ms}


class PhaseController:
    """Owns both axis phases and performs the coupled update.

    Parameters
    ----------
    initial_green : Axis
        Axis that starts in GREEN; the other starts in RED.
    """

    def __init__(self, initial_green: Axis = Axis.NS) -> None:
        self._phases: Dict[Axis, Phase] = {axis: Phase(axis) for axis in Axis}
        self._phases[initial_green].state = LightState.GREEN
        self.cycles_completed: int = 0

    # ── queries ───────────────────────────────────────────────────────────

    def phase(self, axis: Axis) -> Phase:
        return self._phases[axis]

    def state_of(self, axis: Axis) -> LightState:
        return self._phases[axis].state

    @property
    def active_axis(self) -> Axis:
        """The axis currently in GREEN or YELLOW."""
        for axis in Axis:
            if self._phases[axis].state is not LightState.RED:
                return axis
        raise AssertionError("both axes are RED")

    def snapshot(self) -> Dict[str, Dict[str, Any]]:
        return {axis.value: self._phases[axis].as_dict() for axis in Axis}

    # ── transitions ───────────────────────────────────────────────────────

    def advance(self, dt_ms: float, config: RuntimeConfig) -> Optional[Axis]:
        """Advance the active axis by *dt_ms*.

        Returns the axis that just completed YELLOW -> RED, else ``None``.
        At most one transition happens per call, so a long step never
        skips YELLOW.
        """
        if not math.isfinite(dt_ms) or dt_ms < 0.0:
            raise ValueError(f"dt_ms must be finite and >= 0, got {dt_ms!r}")

        axis = self.active_axis
        phase = self._phases[axis]
        phase.elapsed_ms += dt_ms
        completed: Optional[Axis] = None

        if phase.state is LightState.GREEN:
            if phase.elapsed_ms >= config.green_duration_ms:
                log.debug("%s GREEN -> YELLOW after %.0f ms", axis.value, phase.elapsed_ms)
                phase.state = LightState.YELLOW
                phase.elapsed_ms = 0.0
        elif phase.state is LightState.YELLOW:
            if phase.elapsed_ms >= config.yellow_duration_ms:
                log.debug("%s YELLOW -> RED after %.0f ms", axis.value, phase.elapsed_ms)
                phase.state = LightState.RED
                phase.elapsed_ms = 0.0
                other = self._phases[axis.other]
                other.state = LightState.GREEN
                other.elapsed_ms = 0.0
                self.cycles_completed += 1
                completed = axis

        self._assert_exclusive()
        return completed

    def _assert_exclusive(self) -> None:
        live = [a for a in Axis if self._phases[a].state is not LightState.RED]
        assert len(live) == 1, f"phase exclusion violated: {self.snapshot()}"
