"""
junction: single signalized intersection simulation core
========================================================

Modules
-------
world
    :class:`World` entity manager and per-tick orchestration.
agent
    :class:`Agent` vehicle with the stop / proceed decision rule.
phases
    :class:`PhaseController` coupled NS / EW light state machines.
policy
    :class:`SafetyPolicy` constants and :class:`RuntimeConfig` tunables.
geometry
    :class:`Axis`, :class:`Heading` and :class:`IntersectionGeometry`.
recorder
    :class:`TraceRecorder` per-tick pandas trace.
sim_bridge
    :class:`SimBridge` lock-guarded, optionally threaded host adapter.
"""

from .geometry import Axis, Heading, IntersectionGeometry
from .policy import RuntimeConfig, SafetyPolicy
from .phases import LightState, Phase, PhaseController
from .agent import Agent
from .world import World

__all__ = [
    "Axis",
    "Heading",
    "IntersectionGeometry",
    "RuntimeConfig",
    "SafetyPolicy",
    "LightState",
    "Phase",
    "PhaseController",
    "Agent",
    "World",
]
