#!/usr/bin/env python3
"""
junction/policy.py
==================
Tunable parameters for the intersection simulation.

Two bags of values live here:

* :class:`SafetyPolicy`: frozen vehicle dimensions and spacing rules.
  Experiments can swap policies without touching code.
* :class:`RuntimeConfig`: the values a host may change while the
  simulation runs (light durations, speed, spawn cadence, capacity).
  The engine reads it once per tick and never writes it.
"""

from __future__ import annotations

import dataclasses
import math
from dataclasses import dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class SafetyPolicy:
    """Immutable vehicle and spacing constants."""

    vehicle_length: float = 30.0
    """Bumper-to-bumper length of every vehicle."""

    vehicle_width: float = 20.0

    safe_distance: float = 90.0
    """Minimum bumper gap to the vehicle ahead before a follower stops."""

    commit_factor: float = 1.5
    """On yellow, a vehicle closer than ``commit_factor * vehicle_length``
    to the stop line commits to crossing."""

    spawn_spacing_factor: float = 2.0
    """Spawn is rejected when a same-lane vehicle is within
    ``spawn_spacing_factor * safe_distance`` of the spawn point."""

    debug_dump_every: int = 10
    """Emit a per-agent DEBUG dump every N ticks."""

    @property
    def commit_threshold(self) -> float:
        return self.commit_factor * self.vehicle_length

    @property
    def spawn_clearance(self) -> float:
        return self.spawn_spacing_factor * self.safe_distance

    @property
    def reap_margin(self) -> float:
        return self.vehicle_length


@dataclass
class RuntimeConfig:
    """Host-tunable values, validated whenever they are injected."""

    green_duration_ms: float = 5000.0
    yellow_duration_ms: float = 3000.0
    vehicle_speed: float = 120.0
    """World units per second of simulated time."""
    spawn_rate: float = 1.0 / 60.0
    """Probability that a spawn is attempted on a given tick."""
    max_agents: int = 40

    def validate(self) -> "RuntimeConfig":
        """Raise :class:`ValueError` on any out-of-range field; return *self*."""
        for name in ("green_duration_ms", "yellow_duration_ms"):
            value = float(getattr(self, name))
            if not math.isfinite(value) or value <= 0.0:
                raise ValueError(f"{name} must be a positive finite number, got {value!r}")
        speed = float(self.vehicle_speed)
        if not math.isfinite(speed) or speed < 0.0:
            raise ValueError(f"vehicle_speed must be >= 0, got {self.vehicle_speed!r}")
        rate = float(self.spawn_rate)
        if not 0.0 <= rate <= 1.0:
            raise ValueError(f"spawn_rate must be within [0, 1], got {self.spawn_rate!r}")
        if int(self.max_agents) != self.max_agents or self.max_agents < 0:
            raise ValueError(f"max_agents must be a non-negative integer, got {self.max_agents!r}")
        return self

    def replace(self, **changes: Any) -> "RuntimeConfig":
        """Return a validated copy with *changes* applied."""
        return dataclasses.replace(self, **changes).validate()

    @property
    def red_duration_ms(self) -> float:
        """Implied red time of one axis: the other axis's green + yellow."""
        return self.green_duration_ms + self.yellow_duration_ms

    def as_dict(self) -> Dict[str, Any]:
        return dataclasses.asdict(self)
