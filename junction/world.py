#!/usr/bin/env python3
"""
junction/world.py
=================
Entity-based single-intersection world.

This module manages a flat list of :class:`~junction.agent.Agent`
entities.  The :class:`World` class owns the phase controller, the
per-tick orchestration (decide, move, reap, spawn), the simulated clock
and the read-only snapshot consumed by renderers and hosts.
"""

from __future__ import annotations

import logging
import math
import random
from typing import Any, Dict, List, Optional

from junction.agent import Agent
from junction.geometry import Axis, Heading, IntersectionGeometry
from junction.phases import PhaseController
from junction.policy import RuntimeConfig, SafetyPolicy

log = logging.getLogger("world")

_HEADINGS = tuple(Heading)


class World:
    """Single signalized intersection with a live population of agents.

    Parameters
    ----------
    config : RuntimeConfig or None
        Host-tunable values; uses defaults when *None*.
    seed : int or None
        Random seed for heading/lane choice and the spawn gate.
    policy : SafetyPolicy or None
        Vehicle and spacing constants; uses defaults when *None*.
    geometry : IntersectionGeometry or None
        Road layout; uses defaults when *None*.
    initial_green : Axis
        Axis that starts the first cycle in GREEN.
    """

    def __init__(
        self,
        config: Optional[RuntimeConfig] = None,
        seed: Optional[int] = None,
        policy: Optional[SafetyPolicy] = None,
        geometry: Optional[IntersectionGeometry] = None,
        initial_green: Axis = Axis.NS,
    ) -> None:
        self.config = (config or RuntimeConfig()).validate()
        self.policy = policy or SafetyPolicy()
        self.geometry = geometry or IntersectionGeometry()
        self._seed = seed
        self._initial_green = initial_green
        self._init_state()

    # ── initialisation / reset ────────────────────────────────────────────

    def _init_state(self) -> None:
        self._rng = random.Random(self._seed)
        self.phases = PhaseController(self._initial_green)
        self.agents: List[Agent] = []
        self.clock_ms: float = 0.0
        self.tick_count: int = 0
        self.spawned: int = 0
        self.reaped: int = 0
        self.rejected_spawns: int = 0
        self._next_id: int = 0

    def reset(self, seed: Optional[int] = None) -> None:
        """Clear every agent and restart the clock so the run can be replayed."""
        if seed is not None:
            self._seed = seed
        self._init_state()
        log.info("world reset (seed=%s)", self._seed)

    def update_config(self, **changes: Any) -> RuntimeConfig:
        """Swap in a validated copy of the config; takes effect next tick."""
        self.config = self.config.replace(**changes)
        log.info("config updated: %s", changes)
        return self.config

    # ── physics tick ──────────────────────────────────────────────────────

    def tick(self, dt: float) -> None:
        """Advance the whole simulation by *dt* seconds of simulated time."""
        if (isinstance(dt, bool) or not isinstance(dt, (int, float))
                or not math.isfinite(dt) or dt < 0.0):
            raise ValueError(f"dt must be a finite number >= 0, got {dt!r}")

        config = self.config
        self.tick_count += 1
        self.clock_ms += dt * 1000.0

        completed = self.phases.advance(dt * 1000.0, config)
        if completed is not None:
            log.info(
                "tick %d: %s -> RED, %s -> GREEN (t=%.0f ms)",
                self.tick_count, completed.value, completed.other.value, self.clock_ms,
            )

        for agent in self.agents:
            agent.speed = config.vehicle_speed
            light = self.phases.state_of(agent.axis)
            agent.decide(light, self.agents, self.geometry, self.policy)
            agent.move(dt)
            agent.update_box_status(self.geometry)

        if self.policy.debug_dump_every and self.tick_count % self.policy.debug_dump_every == 1:
            self._debug_dump()

        self.reap()

        if len(self.agents) < config.max_agents and self._rng.random() < config.spawn_rate:
            heading = self._rng.choice(_HEADINGS)
            lane = self._rng.randrange(self.geometry.lanes_per_heading)
            self.spawn(heading, lane)

    def _debug_dump(self) -> None:
        log.debug(
            "=== TICK %d  t=%.0f ms  NS=%s EW=%s  agents=%d ===",
            self.tick_count, self.clock_ms,
            self.phases.state_of(Axis.NS).value,
            self.phases.state_of(Axis.EW).value,
            len(self.agents),
        )
        for agent in self.agents:
            log.debug(
                "  %s %s lane=%d pos=(%.1f,%.1f) d_line=%.1f waiting=%s "
                "wait_ticks=%d committed=%s in_box=%s",
                agent.id, agent.heading.value, agent.lane, agent.x, agent.y,
                agent.distance_to_stop_line(self.geometry), agent.waiting,
                agent.wait_ticks, agent.committed_to_cross, agent.has_entered_box,
            )

    # ── spawning / reaping ────────────────────────────────────────────────

    def spawn(self, heading: Heading, lane: int) -> Optional[Agent]:
        """Admit a new agent at the entry edge of *heading*/*lane*.

        Returns ``None`` (a normal outcome) when the world is at capacity
        or a same-lane agent is too close to the spawn point.
        """
        if not 0 <= lane < self.geometry.lanes_per_heading:
            raise ValueError(f"lane must be in [0, {self.geometry.lanes_per_heading}), got {lane!r}")

        if len(self.agents) >= self.config.max_agents:
            self.rejected_spawns += 1
            log.debug("spawn %s/%d rejected: at capacity", heading.value, lane)
            return None

        progress = self.geometry.spawn_progress(heading, self.policy.vehicle_length)
        if not self._spawn_is_clear(heading, lane, progress):
            self.rejected_spawns += 1
            log.debug("spawn %s/%d rejected: lane occupied", heading.value, lane)
            return None

        agent = self._make_agent(heading, lane, progress)
        self.agents.append(agent)
        self.spawned += 1
        log.debug("spawned %s %s lane=%d at (%.1f, %.1f)",
                  agent.id, heading.value, lane, agent.x, agent.y)
        return agent

    def place_agent(self, heading: Heading, lane: int, progress: float) -> Agent:
        """Put an agent directly at *progress* in *lane*, bypassing spawn checks."""
        agent = self._make_agent(heading, lane, progress)
        self.agents.append(agent)
        return agent

    def add_agent(self, agent: Agent) -> Agent:
        self.agents.append(agent)
        return agent

    def _make_agent(self, heading: Heading, lane: int, progress: float) -> Agent:
        x, y = self.geometry.position(heading, lane, progress)
        agent = Agent(
            agent_id=f"CAR_{self._next_id:04d}",
            heading=heading,
            lane=lane,
            x=x,
            y=y,
            speed=self.config.vehicle_speed,
            length=self.policy.vehicle_length,
            width=self.policy.vehicle_width,
        )
        self._next_id += 1
        return agent

    def _spawn_is_clear(self, heading: Heading, lane: int, progress: float) -> bool:
        clearance = self.policy.spawn_clearance
        for agent in self.agents:
            if agent.heading is not heading or agent.lane != lane:
                continue
            if abs(agent.progress - progress) < clearance:
                return False
        return True

    def reap(self) -> List[Agent]:
        """Remove every agent beyond the simulated bounds; return the removed ones."""
        margin = self.policy.reap_margin
        removed = [a for a in self.agents if self.geometry.out_of_bounds(a.x, a.y, margin)]
        if removed:
            self.agents = [a for a in self.agents if a not in removed]
            self.reaped += len(removed)
            for agent in removed:
                log.debug("reaped %s at (%.1f, %.1f)", agent.id, agent.x, agent.y)
        return removed

    # ── queries ───────────────────────────────────────────────────────────

    def counts(self) -> Dict[str, Any]:
        by_heading = {h.value: 0 for h in _HEADINGS}
        waiting = 0
        in_box = 0
        for agent in self.agents:
            by_heading[agent.heading.value] += 1
            if agent.waiting:
                waiting += 1
            if agent.is_in_intersection(self.geometry):
                in_box += 1
        return {
            "total": len(self.agents),
            "by_heading": by_heading,
            "waiting": waiting,
            "in_intersection": in_box,
        }

    def snapshot(self) -> Dict[str, Any]:
        """Read-only state for renderers and hosts."""
        return {
            "tick": self.tick_count,
            "clock_ms": self.clock_ms,
            "phases": self.phases.snapshot(),
            "agents": [a.as_dict() for a in self.agents],
            "counts": self.counts(),
            "spawned": self.spawned,
            "reaped": self.reaped,
            "rejected_spawns": self.rejected_spawns,
            "config": dict(self.config.as_dict(),
                           red_duration_ms=self.config.red_duration_ms),
        }
