"""
junction/sim_bridge.py
======================
Thread-safe owner of one :class:`~junction.world.World`.  Every tick and
every snapshot read happens under the same lock, so a multi-threaded host
never observes a half-applied tick.  An optional background thread steps
the world at a fixed rate.

Public API consumed by hosts
----------------------------
* ``step(dt)``                → ``dict`` snapshot after the tick
* ``get_snapshot()``          → ``dict``
* ``update_config(**changes)``→ ``RuntimeConfig``
* ``reset(seed)``             → ``None``
* ``set_paused(bool)``        → ``None``
* ``start()`` / ``stop()``    → background stepping
"""

from __future__ import annotations

import copy
import logging
import threading
import time
from typing import Any, Dict, Optional

from junction.policy import RuntimeConfig, SafetyPolicy
from junction.world import World

log = logging.getLogger("sim_bridge")


class SimBridge:
    """Simulation orchestrator, optionally running in a background thread.

    The thread calls :meth:`step` with a fixed ``dt = 1 / tick_rate_hz``.
    Wall-clock time only paces the loop; the world itself only ever sees
    the fixed simulated ``dt``.

    Parameters
    ----------
    tick_rate_hz : float
        Simulation ticks per second.
    config : RuntimeConfig or None
        Initial host-tunable values.
    random_seed : int or None
        Seed for reproducibility.
    policy : SafetyPolicy or None
        Vehicle and spacing constants.
    """

    def __init__(
        self,
        tick_rate_hz: float = 60.0,
        config: Optional[RuntimeConfig] = None,
        random_seed: Optional[int] = None,
        policy: Optional[SafetyPolicy] = None,
    ) -> None:
        if tick_rate_hz <= 0.0:
            raise ValueError(f"tick_rate_hz must be > 0, got {tick_rate_hz!r}")
        self._tick_rate_hz = tick_rate_hz
        self._world = World(config=config, seed=random_seed, policy=policy)
        self._lock = threading.Lock()
        self._snapshot: Dict[str, Any] = self._world.snapshot()

        self._thread: Optional[threading.Thread] = None
        self._running = False
        self._paused = False

    @property
    def dt(self) -> float:
        return 1.0 / self._tick_rate_hz

    @property
    def running(self) -> bool:
        return self._running

    # ── Lifecycle ─────────────────────────────────────────────────────────────

    def start(self) -> None:
        """Spawn the background simulation thread."""
        if self._running:
            return
        self._running = True
        self._thread = threading.Thread(
            target=self._loop, daemon=True, name="SimBridge"
        )
        self._thread.start()
        log.info("SimBridge started at %.1f Hz", self._tick_rate_hz)

    def stop(self) -> None:
        """Signal the thread to stop and wait for it to join."""
        self._running = False
        if self._thread:
            self._thread.join(timeout=2.0)
            self._thread = None
        log.info("SimBridge stopped")

    # ── Host API ──────────────────────────────────────────────────────────────

    def step(self, dt: Optional[float] = None) -> Dict[str, Any]:
        """Run one tick under the lock and return the fresh snapshot."""
        with self._lock:
            self._world.tick(self.dt if dt is None else dt)
            self._snapshot = self._world.snapshot()
            return copy.deepcopy(self._snapshot)

    def get_snapshot(self) -> Dict[str, Any]:
        """Return a private copy of the latest snapshot."""
        with self._lock:
            return copy.deepcopy(self._snapshot)

    def get_config(self) -> RuntimeConfig:
        with self._lock:
            return self._world.config

    def update_config(self, **changes: Any) -> RuntimeConfig:
        """Apply validated config changes between ticks."""
        with self._lock:
            return self._world.update_config(**changes)

    def reset(self, seed: Optional[int] = None) -> None:
        """Re-initialise the world so the scenario replays."""
        with self._lock:
            self._world.reset(seed)
            self._snapshot = self._world.snapshot()
        log.info("SimBridge reset")

    def set_paused(self, paused: bool) -> None:
        """Pause / unpause the background tick."""
        self._paused = paused

    # ── Background loop ───────────────────────────────────────────────────────

    def _loop(self) -> None:
        dt = self.dt
        while self._running:
            t0 = time.perf_counter()
            if not self._paused:
                try:
                    self.step(dt)
                except Exception:
                    log.exception("SimBridge tick error")
                    self._running = False
                    break
            time.sleep(max(0.0, dt - (time.perf_counter() - t0)))
