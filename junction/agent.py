"""
junction/agent.py
=================
A single vehicle agent. Each agent:
  - owns its position / speed / heading / lane
  - decides every tick whether to stop or proceed
  - tracks whether it is committed to crossing and whether it is in the box
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, Optional, Tuple

from junction.geometry import Axis, Heading, IntersectionGeometry
from junction.phases import LightState
from junction.policy import SafetyPolicy

log = logging.getLogger("agent")


class Agent:
    """
    One vehicle travelling straight through the intersection.

    Parameters
    ----------
    agent_id : str
        Unique identifier, e.g. "CAR_0001".
    heading : Heading
        Direction of travel.
    lane : int
        Lane index on the heading's side of the road (0 = kerb side).
    x, y : float
        World-space position of the vehicle's geometric centre.
    speed : float
        World units per second of simulated time.
    length, width : float
        Vehicle footprint.
    """

    def __init__(
        self,
        agent_id: str,
        heading: Heading,
        lane: int,
        x: float,
        y: float,
        speed: float,
        length: float = 30.0,
        width: float = 20.0,
    ) -> None:
        self.id      = agent_id.upper()
        self.heading = heading
        self.lane    = lane
        self.x       = x
        self.y       = y
        self.speed   = speed
        self.length  = length
        self.width   = width

        self.waiting:            bool = False
        self.wait_ticks:         int  = 0
        self.committed_to_cross: bool = False
        self.has_entered_box:    bool = False
        self.has_exited_box:     bool = False

    def __repr__(self) -> str:
        return (f"Agent({self.id}, {self.heading.value}, lane={self.lane}, "
                f"x={self.x:.1f}, y={self.y:.1f}, waiting={self.waiting})")

    # ── Geometry ──────────────────────────────────────────────────────────────

    @property
    def axis(self) -> Axis:
        return self.heading.axis

    @property
    def progress(self) -> float:
        """Signed coordinate of the centre along the heading."""
        return self.heading.progress(self.x, self.y)

    @property
    def front(self) -> float:
        return self.progress + self.length / 2.0

    @property
    def rear(self) -> float:
        return self.progress - self.length / 2.0

    def distance_to_stop_line(self, geometry: IntersectionGeometry) -> float:
        """Positive while the front edge has not reached the stop line."""
        return geometry.stop_line_progress - self.front

    def has_passed_stop_line(self, geometry: IntersectionGeometry) -> bool:
        return self.distance_to_stop_line(geometry) < 0.0

    def is_approaching(self, geometry: IntersectionGeometry) -> bool:
        """True while the front is within the approach zone before the stop line."""
        dist = self.distance_to_stop_line(geometry)
        return 0.0 <= dist <= geometry.approach_distance

    def is_in_intersection(self, geometry: IntersectionGeometry) -> bool:
        return geometry.in_box(self.x, self.y)

    def shares_lane(self, other: "Agent") -> bool:
        return other is not self and other.heading is self.heading and other.lane == self.lane

    def gap_to(self, other: "Agent") -> float:
        """Signed bumper gap from this front to *other*'s rear along the heading.

        Only meaningful for agents sharing this heading.
        """
        other_rear = self.heading.progress(other.x, other.y) - other.length / 2.0
        return other_rear - self.front

    def leader_gap(self, neighbors: Iterable["Agent"]) -> Optional[float]:
        """Gap to the nearest same-lane agent ahead, or ``None``.

        Agents whose gap is at or below ``-length`` are behind this one.
        """
        best: Optional[float] = None
        for other in neighbors:
            if not self.shares_lane(other):
                continue
            gap = self.gap_to(other)
            if gap <= -self.length:
                continue
            if best is None or gap < best:
                best = gap
        return best

    # ── Decision ──────────────────────────────────────────────────────────────

    def decide(
        self,
        light: LightState,
        neighbors: Iterable["Agent"],
        geometry: IntersectionGeometry,
        policy: SafetyPolicy,
    ) -> bool:
        """Return True when the agent must stop this tick.

        Rules, first match wins: past the stop line, car-following,
        light rule while approaching, otherwise proceed.
        """
        if self.has_passed_stop_line(geometry) and not self.has_exited_box:
            self.has_entered_box = True
            return self._hold(False)

        gap = self.leader_gap(neighbors)
        if gap is not None and gap < policy.safe_distance:
            return self._hold(True)

        if self.is_approaching(geometry):
            if light is LightState.RED:
                # A vehicle that committed on yellow still clears.
                return self._hold(not self.committed_to_cross)
            if light is LightState.YELLOW:
                dist = self.distance_to_stop_line(geometry)
                if self.committed_to_cross or dist < policy.commit_threshold:
                    if not self.committed_to_cross:
                        log.debug("%s commits on yellow at %.1f from stop line", self.id, dist)
                    self.committed_to_cross = True
                    return self._hold(False)
                return self._hold(True)

        return self._hold(False)

    def _hold(self, stop: bool) -> bool:
        self.waiting = stop
        return stop

    # ── Physics ───────────────────────────────────────────────────────────────

    def move(self, dt: float) -> None:
        """Advance ``speed * dt`` along the heading unless waiting."""
        if self.waiting:
            self.wait_ticks += 1
            return
        self.wait_ticks = 0
        dx, dy = self.heading.unit
        self.x += dx * self.speed * dt
        self.y += dy * self.speed * dt

    def update_box_status(self, geometry: IntersectionGeometry) -> None:
        """Clear the crossing flags once the centre has left the box on the far side."""
        if self.has_entered_box and self.progress >= geometry.box_half:
            self.has_entered_box = False
            self.committed_to_cross = False
            self.has_exited_box = True
            log.debug("%s cleared the intersection", self.id)

    # ── Serialisation ─────────────────────────────────────────────────────────

    def position(self) -> Tuple[float, float]:
        return (self.x, self.y)

    def as_dict(self) -> Dict[str, Any]:
        """Render/UI payload for one agent."""
        return {
            "id":      self.id,
            "heading": self.heading.value,
            "lane":    self.lane,
            "x":       self.x,
            "y":       self.y,
            "waiting": self.waiting,
        }
