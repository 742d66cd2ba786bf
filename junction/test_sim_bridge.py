#!/usr/bin/env python3
"""
Tests for the thread-safe host wrapper.
"""

from __future__ import annotations

import time
import unittest
from unittest import mock

from junction.policy import RuntimeConfig
from junction.sim_bridge import SimBridge
from junction.world import World


class SimBridgeTests(unittest.TestCase):
    def setUp(self) -> None:
        self.bridge = SimBridge(tick_rate_hz=200.0,
                                config=RuntimeConfig(spawn_rate=0.5), random_seed=3)

    def tearDown(self) -> None:
        self.bridge.stop()

    def test_rejects_non_positive_rate(self) -> None:
        with self.assertRaises(ValueError):
            SimBridge(tick_rate_hz=0.0)

    def test_step_returns_fresh_snapshot(self) -> None:
        snap = self.bridge.step()
        self.assertEqual(snap["tick"], 1)
        self.assertAlmostEqual(snap["clock_ms"], 5.0)
        self.assertEqual(self.bridge.get_snapshot(), snap)

    def test_returned_snapshots_are_private_copies(self) -> None:
        snap = self.bridge.step()
        snap["phases"]["NS"]["state"] = "PURPLE"
        snap["agents"].append({"id": "FAKE"})
        fresh = self.bridge.get_snapshot()
        self.assertEqual(fresh["phases"]["NS"]["state"], "GREEN")
        self.assertNotIn({"id": "FAKE"}, fresh["agents"])
        fresh["counts"]["total"] = -1
        self.assertGreaterEqual(self.bridge.get_snapshot()["counts"]["total"], 0)

    def test_update_config(self) -> None:
        cfg = self.bridge.update_config(vehicle_speed=90.0)
        self.assertEqual(cfg.vehicle_speed, 90.0)
        self.assertEqual(self.bridge.get_config().vehicle_speed, 90.0)
        with self.assertRaises(ValueError):
            self.bridge.update_config(max_agents=-1)
        self.assertEqual(self.bridge.get_config().max_agents, 40)

    def test_reset_replays(self) -> None:
        first = [self.bridge.step() for _ in range(100)][-1]
        self.bridge.reset()
        self.assertEqual(self.bridge.get_snapshot()["tick"], 0)
        second = [self.bridge.step() for _ in range(100)][-1]
        self.assertEqual(first, second)

    def test_background_thread_ticks_and_pauses(self) -> None:
        self.bridge.start()
        self.assertTrue(self.bridge.running)
        deadline = time.monotonic() + 2.0
        while self.bridge.get_snapshot()["tick"] < 5 and time.monotonic() < deadline:
            time.sleep(0.01)
        self.assertGreaterEqual(self.bridge.get_snapshot()["tick"], 5)

        self.bridge.set_paused(True)
        time.sleep(0.05)
        paused_at = self.bridge.get_snapshot()["tick"]
        time.sleep(0.1)
        self.assertEqual(self.bridge.get_snapshot()["tick"], paused_at)

        self.bridge.stop()
        self.assertFalse(self.bridge.running)

    def test_tick_error_is_logged_and_stops_thread(self) -> None:
        with mock.patch.object(World, "tick", side_effect=RuntimeError("boom")):
            with self.assertLogs("sim_bridge", level="ERROR") as logs:
                self.bridge.start()
                thread = self.bridge._thread
                deadline = time.monotonic() + 2.0
                while self.bridge.running and time.monotonic() < deadline:
                    time.sleep(0.01)
                thread.join(timeout=2.0)

        self.assertFalse(self.bridge.running)
        self.assertFalse(thread.is_alive())
        self.assertTrue(any("tick error" in line for line in logs.output))
        self.assertEqual(self.bridge.get_snapshot()["tick"], 0)


if __name__ == "__main__":
    unittest.main()
