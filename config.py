#!/usr/bin/env python3
"""
config.py
=========
Application-wide configuration constants.

Values can be overridden via environment variables (see :mod:`main`).
This module is a thin, import-safe leaf and never imports from
other project packages.
"""

# ── Light timing defaults (milliseconds) ─────────────────────────────────────
DEFAULT_GREEN_MS: float = 5000.0
DEFAULT_YELLOW_MS: float = 3000.0

# ── Traffic defaults ─────────────────────────────────────────────────────────
DEFAULT_VEHICLE_SPEED: float = 120.0      # world units per simulated second
DEFAULT_SPAWN_RATE: float = 1.0 / 60.0    # spawn attempts per tick
DEFAULT_MAX_AGENTS: int = 40

# ── Host loop defaults ───────────────────────────────────────────────────────
DEFAULT_TICK_RATE_HZ: float = 60.0
DEFAULT_SEED: int = 0
DEFAULT_LOG_LEVEL: str = "INFO"
SUMMARY_INTERVAL_S: float = 5.0

# ── Log files (relative to the working directory) ────────────────────────────
LOG_FILE: str = "junction.log"
WORLD_DEBUG_LOG_FILE: str = "world_debug.log"
