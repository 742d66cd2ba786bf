#!/usr/bin/env python3
"""
Tests for the coupled NS / EW light state machines.
"""

from __future__ import annotations

import random
import unittest

from junction.geometry import Axis
from junction.phases import LightState, PhaseController
from junction.policy import RuntimeConfig


class PhaseControllerTests(unittest.TestCase):
    def setUp(self) -> None:
        self.config = RuntimeConfig(green_duration_ms=5000.0, yellow_duration_ms=3000.0)
        self.ctrl = PhaseController()

    def _live_axes(self, ctrl: PhaseController) -> list:
        return [a for a in Axis if ctrl.state_of(a) is not LightState.RED]

    def test_initial_state_ns_green(self) -> None:
        self.assertIs(self.ctrl.state_of(Axis.NS), LightState.GREEN)
        self.assertIs(self.ctrl.state_of(Axis.EW), LightState.RED)
        self.assertIs(self.ctrl.active_axis, Axis.NS)

    def test_initial_green_can_be_ew(self) -> None:
        ctrl = PhaseController(initial_green=Axis.EW)
        self.assertIs(ctrl.state_of(Axis.EW), LightState.GREEN)
        self.assertIs(ctrl.state_of(Axis.NS), LightState.RED)

    def test_green_to_yellow_at_threshold(self) -> None:
        self.ctrl.phase(Axis.NS).elapsed_ms = self.config.green_duration_ms
        result = self.ctrl.advance(16.0, self.config)

        self.assertIsNone(result)
        self.assertIs(self.ctrl.state_of(Axis.NS), LightState.YELLOW)
        self.assertEqual(self.ctrl.phase(Axis.NS).elapsed_ms, 0.0)
        self.assertIs(self.ctrl.state_of(Axis.EW), LightState.RED)

    def test_yellow_to_red_flips_other_axis_in_same_call(self) -> None:
        ns = self.ctrl.phase(Axis.NS)
        ns.state = LightState.YELLOW
        ns.elapsed_ms = self.config.yellow_duration_ms
        self.ctrl.phase(Axis.EW).elapsed_ms = 1234.0

        result = self.ctrl.advance(16.0, self.config)

        self.assertIs(result, Axis.NS)
        snap = self.ctrl.snapshot()
        self.assertEqual(snap["NS"], {"state": "RED", "elapsed_ms": 0.0})
        self.assertEqual(snap["EW"], {"state": "GREEN", "elapsed_ms": 0.0})
        self.assertEqual(self.ctrl.cycles_completed, 1)

    def test_red_axis_timer_is_passive(self) -> None:
        for _ in range(10):
            self.ctrl.advance(100.0, self.config)
        self.assertEqual(self.ctrl.phase(Axis.EW).elapsed_ms, 0.0)
        self.assertAlmostEqual(self.ctrl.phase(Axis.NS).elapsed_ms, 1000.0)

    def test_long_step_never_skips_yellow(self) -> None:
        self.ctrl.advance(1e9, self.config)
        self.assertIs(self.ctrl.state_of(Axis.NS), LightState.YELLOW)
        self.ctrl.advance(1e9, self.config)
        self.assertIs(self.ctrl.state_of(Axis.NS), LightState.RED)
        self.assertIs(self.ctrl.state_of(Axis.EW), LightState.GREEN)

    def test_full_cycle_returns_to_ns(self) -> None:
        flips = []
        for _ in range(200):
            done = self.ctrl.advance(100.0, self.config)
            if done is not None:
                flips.append(done)
        # 8 s per half cycle at 100 ms steps: NS, EW
        self.assertEqual(flips[:2], [Axis.NS, Axis.EW])
        self.assertIs(self.ctrl.active_axis, Axis.EW if len(flips) % 2 else Axis.NS)

    def test_mutual_exclusion_over_random_steps(self) -> None:
        rng = random.Random(3)
        config = RuntimeConfig(green_duration_ms=700.0, yellow_duration_ms=300.0)
        for _ in range(5000):
            self.ctrl.advance(rng.uniform(0.0, 120.0), config)
            self.assertEqual(len(self._live_axes(self.ctrl)), 1)

    def test_cycle_conservation(self) -> None:
        rng = random.Random(11)
        config = RuntimeConfig(green_duration_ms=900.0, yellow_duration_ms=400.0)
        for _ in range(4000):
            dt = rng.uniform(1.0, 50.0)
            axis = self.ctrl.active_axis
            before = self.ctrl.phase(axis)
            prev_state, prev_elapsed = before.state, before.elapsed_ms
            self.ctrl.advance(dt, config)
            if self.ctrl.phase(axis).state is not prev_state:
                limit = (config.green_duration_ms if prev_state is LightState.GREEN
                         else config.yellow_duration_ms)
                self.assertLess(prev_elapsed, limit)
                self.assertLessEqual(prev_elapsed + dt, limit + dt)
                self.assertGreaterEqual(prev_elapsed + dt, limit)
            else:
                limit = (config.green_duration_ms if prev_state is LightState.GREEN
                         else config.yellow_duration_ms)
                self.assertLess(self.ctrl.phase(axis).elapsed_ms, limit)

    def test_config_change_only_affects_future_thresholds(self) -> None:
        self.ctrl.advance(2000.0, self.config)
        shorter = self.config.replace(green_duration_ms=1000.0)
        self.ctrl.advance(0.0, shorter)
        self.assertIs(self.ctrl.state_of(Axis.NS), LightState.YELLOW)
        self.assertEqual(len(self._live_axes(self.ctrl)), 1)

    def test_rejects_bad_dt(self) -> None:
        with self.assertRaises(ValueError):
            self.ctrl.advance(-1.0, self.config)
        with self.assertRaises(ValueError):
            self.ctrl.advance(float("nan"), self.config)
        self.assertEqual(self.ctrl.phase(Axis.NS).elapsed_ms, 0.0)


if __name__ == "__main__":
    unittest.main()
