#!/usr/bin/env python3
"""
junction/geometry.py
====================
Closed enumerations and low-level geometry helpers used by
:mod:`junction.agent` and :mod:`junction.world`.

World coordinates put the origin at the intersection centre, with +x
pointing east and +y pointing north.  Every agent travels along one
cardinal axis, so most distances are expressed as *progress*: the signed
coordinate along the agent's heading (negative before the centre).

Keeping these in a separate module avoids circular imports and makes unit
testing straightforward.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class Axis(Enum):
    """One of the two perpendicular traffic streams."""
    NS = "NS"
    EW = "EW"

    @property
    def other(self) -> "Axis":
        return Axis.EW if self is Axis.NS else Axis.NS


class Heading(Enum):
    """Direction of travel."""
    NORTH = "NORTH"
    SOUTH = "SOUTH"
    EAST = "EAST"
    WEST = "WEST"

    @property
    def axis(self) -> Axis:
        if self in (Heading.NORTH, Heading.SOUTH):
            return Axis.NS
        return Axis.EW

    @property
    def unit(self) -> Tuple[float, float]:
        """Unit vector ``(dx, dy)`` of travel."""
        return _UNIT_VECTORS[self]

    @property
    def right_normal(self) -> Tuple[float, float]:
        """Unit vector pointing to the driver's right-hand side."""
        dx, dy = _UNIT_VECTORS[self]
        return (dy, -dx)

    def progress(self, x: float, y: float) -> float:
        """Signed coordinate of *(x, y)* along this heading."""
        dx, dy = _UNIT_VECTORS[self]
        return x * dx + y * dy


_UNIT_VECTORS = {
    Heading.NORTH: (0.0, 1.0),
    Heading.SOUTH: (0.0, -1.0),
    Heading.EAST: (1.0, 0.0),
    Heading.WEST: (-1.0, 0.0),
}


@dataclass(frozen=True)
class IntersectionGeometry:
    """Static layout of the intersection and the simulated area.

    Parameters
    ----------
    road_width : float
        Full width of each road; the intersection box is a square of
        this side length centred on the origin.
    lane_width : float
        Width of one lane.  Each heading owns ``road_width / 2 / lane_width``
        lanes on its right-hand side of the road axis.
    stop_line_offset : float
        Gap between the box edge and the stop line.
    half_width, half_height : float
        Half extents of the simulated area along x and y.
    approach_factor : float
        Light rule applies while the front is within
        ``approach_factor * road_width`` before the stop line.
    """

    road_width: float = 200.0
    lane_width: float = 50.0
    stop_line_offset: float = 20.0
    half_width: float = 400.0
    half_height: float = 300.0
    approach_factor: float = 1.5

    @property
    def box_half(self) -> float:
        return self.road_width / 2.0

    @property
    def stop_line_progress(self) -> float:
        """Progress value of the stop line (same for every heading)."""
        return -(self.box_half + self.stop_line_offset)

    @property
    def approach_distance(self) -> float:
        return self.approach_factor * self.road_width

    @property
    def lanes_per_heading(self) -> int:
        return max(1, int(self.box_half // self.lane_width))

    def extent_along(self, heading: Heading) -> float:
        """Distance from the centre to the area edge along *heading*."""
        return self.half_height if heading.axis is Axis.NS else self.half_width

    def lane_offset(self, lane: int) -> float:
        """Lateral distance of lane *lane* from the road axis.

        Lane 0 is the outermost (kerb-side) lane.
        """
        return (self.lanes_per_heading - lane - 0.5) * self.lane_width

    def position(self, heading: Heading, lane: int, progress: float) -> Tuple[float, float]:
        """World *(x, y)* of a point in *lane* at *progress* along *heading*."""
        dx, dy = heading.unit
        nx, ny = heading.right_normal
        lateral = self.lane_offset(lane)
        return (dx * progress + nx * lateral, dy * progress + ny * lateral)

    def spawn_progress(self, heading: Heading, vehicle_length: float) -> float:
        """Progress at which a new vehicle's centre is placed, just outside the area."""
        return -self.extent_along(heading) - vehicle_length / 2.0

    def in_box(self, x: float, y: float) -> bool:
        half = self.box_half
        return abs(x) < half and abs(y) < half

    def out_of_bounds(self, x: float, y: float, margin: float) -> bool:
        """True once *(x, y)* lies beyond the simulated area by more than *margin*."""
        return abs(x) > self.half_width + margin or abs(y) > self.half_height + margin
