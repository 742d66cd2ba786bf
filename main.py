#!/usr/bin/env python3
"""
main.py
=======
Headless host for the intersection engine.

Builds a :class:`~junction.sim_bridge.SimBridge` from :mod:`config`
defaults (overridable through ``JUNCTION_*`` environment variables),
steps it in the background and logs a one-line summary periodically.

When ``JUNCTION_TICKS`` is set, the run is bounded and fully
deterministic instead: the world is ticked that many times with the
fixed ``dt`` and the trace summary is logged before exiting.
"""

import logging
import os
import time
from typing import Any, Callable, Dict, Optional

import config
from logging_setup import setup_logging
from junction.policy import RuntimeConfig
from junction.sim_bridge import SimBridge


def _env(name: str, cast: Callable[[str], Any], default: Any) -> Any:
    raw = os.environ.get(name)
    if raw is None or raw == "":
        return default
    try:
        return cast(raw)
    except ValueError as exc:
        raise ValueError(f"invalid value for {name}: {raw!r}") from exc


def load_runtime_config() -> RuntimeConfig:
    """Build a validated :class:`RuntimeConfig` from env overrides."""
    return RuntimeConfig(
        green_duration_ms=_env("JUNCTION_GREEN_MS", float, config.DEFAULT_GREEN_MS),
        yellow_duration_ms=_env("JUNCTION_YELLOW_MS", float, config.DEFAULT_YELLOW_MS),
        vehicle_speed=_env("JUNCTION_VEHICLE_SPEED", float, config.DEFAULT_VEHICLE_SPEED),
        spawn_rate=_env("JUNCTION_SPAWN_RATE", float, config.DEFAULT_SPAWN_RATE),
        max_agents=_env("JUNCTION_MAX_AGENTS", int, config.DEFAULT_MAX_AGENTS),
    ).validate()


def _summary_line(snap: Dict[str, Any]) -> str:
    phases = snap["phases"]
    counts = snap["counts"]
    return (
        f"tick={snap['tick']} t={snap['clock_ms'] / 1000.0:.1f}s "
        f"NS={phases['NS']['state']} EW={phases['EW']['state']} "
        f"agents={counts['total']} waiting={counts['waiting']} "
        f"in_box={counts['in_intersection']} spawned={snap['spawned']} reaped={snap['reaped']}"
    )


def run_bounded(bridge: SimBridge, ticks: int) -> Dict[str, Any]:
    from junction.recorder import TraceRecorder

    recorder = TraceRecorder()
    for _ in range(ticks):
        recorder.record(bridge.step())
    return recorder.summary()


def main(ticks: Optional[int] = None) -> None:
    level_name = _env("JUNCTION_LOG_LEVEL", str, config.DEFAULT_LOG_LEVEL).upper()
    setup_logging(getattr(logging, level_name, logging.INFO))
    log = logging.getLogger("main")

    runtime = load_runtime_config()
    bridge = SimBridge(
        tick_rate_hz=_env("JUNCTION_TICK_RATE_HZ", float, config.DEFAULT_TICK_RATE_HZ),
        config=runtime,
        random_seed=_env("JUNCTION_SEED", int, config.DEFAULT_SEED),
    )
    log.info("Starting junction host with %s", runtime.as_dict())

    if ticks is None:
        ticks = _env("JUNCTION_TICKS", int, None)
    if ticks is not None:
        summary = run_bounded(bridge, ticks)
        log.info("Bounded run finished: %s", summary)
        log.info(_summary_line(bridge.get_snapshot()))
        return

    bridge.start()
    try:
        while bridge.running:
            time.sleep(config.SUMMARY_INTERVAL_S)
            log.info(_summary_line(bridge.get_snapshot()))
    except KeyboardInterrupt:
        log.info("Shutting down...")
    finally:
        bridge.stop()


if __name__ == "__main__":
    main()
