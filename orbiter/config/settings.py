"""
Project settings (constants + small helpers).
Units: astronomical units (AU), seconds (s), AU^3/s^2 for gravitational parameters.
"""
from __future__ import annotations

import math
import os
from typing import Optional

# Paths
BASE_DIR = os.path.dirname(os.path.dirname(os.path.dirname(__file__)))
OUTPUT_DIR = os.path.join(BASE_DIR, "outputs")

# Run
DEFAULT_RANDOM_SEED: Optional[int] = None
DEFAULT_TICKS = 100
VALIDATE_ON_IMPORT = False

# Units
AU = 149597871.0  # km
RAD_PER_DEG = math.pi / 180.0

# Sun
GM_SUN = 1.327124400e11 / AU / AU / AU
R_SUN = 695800.0  # km

# Numerics
# Squared, normalised vectors at or below EPSILON are treated as zero.
EPSILON = 1e-20
SOFTENING = 1e-9  # AU (~150 m)

# Integration
SUBSTEPS = 100
DEFAULT_TIME_SCALE = 1.0
TIME_SCALE_MIN = 0.0
TIME_SCALE_MAX = 1e7

# Engine thrust at full throttle (AU/s^2), along the body's +x axis
THRUST_ACCELERATION = 5e-10

# Ids start at 1 so that 0 stays free as the "no parent" wire sentinel
FIRST_BODY_ID = 1

# Sources at or below MASSLESS_GM are pulled but attract nothing (spacecraft)
MASSLESS_GM = 1000.0 / AU / AU / AU

# Spacecraft
ROCKET_GM = 100.0 / AU / AU / AU
ROCKET_RADIUS = 0.1  # km
ROCKET_ORBIT_COLOR = "#ff7f7f"

# Random spacecraft spawn ranges
SPAWN_SEMIMAJOR_AXIS_KM = (10000.0, 20000.0)
SPAWN_ECCENTRICITY = (0.0, 0.5)
SPAWN_INCLINATION_DEG = (0.0, 30.0)
SPAWN_ASCENDING_NODE_DEG = (0.0, 360.0)
SPAWN_ARGUMENT_OF_PERIHELION_DEG = (0.0, 360.0)
SPAWN_PARENT = "earth"

# Preset spacecraft orbits: parent body name, semimajor axis (km), optional node (rad)
SCENARIOS = {
    "earth": {"title": "Earth orbit", "parent": "earth", "semimajor_axis_km": 10000.0},
    "moon": {"title": "Moon orbit", "parent": "moon", "semimajor_axis_km": 3000.0},
    "mars": {"title": "Mars orbit", "parent": "mars", "semimajor_axis_km": 5000.0},
    "venus": {"title": "Venus orbit", "parent": "venus", "semimajor_axis_km": 10000.0,
              "ascending_node": math.pi},
    "jupiter": {"title": "Jupiter orbit", "parent": "jupiter", "semimajor_axis_km": 100000.0},
}


def clamp_time_scale(val: Optional[float]) -> float:
    out = float(DEFAULT_TIME_SCALE if val is None else val)
    return max(float(TIME_SCALE_MIN), min(float(TIME_SCALE_MAX), out))


def clamp_throttle(val: Optional[float]) -> float:
    out = float(0.0 if val is None else val)
    return max(0.0, min(1.0, out))


def validate_settings() -> None:
    if SUBSTEPS <= 0:
        raise ValueError("SUBSTEPS must be > 0")
    if DEFAULT_TIME_SCALE < 0:
        raise ValueError("DEFAULT_TIME_SCALE must be >= 0")
    if TIME_SCALE_MAX < TIME_SCALE_MIN:
        raise ValueError("TIME_SCALE_MAX must be >= TIME_SCALE_MIN")
    if EPSILON <= 0:
        raise ValueError("EPSILON must be > 0")
    if SOFTENING < 0:
        raise ValueError("SOFTENING must be >= 0")
    if THRUST_ACCELERATION < 0:
        raise ValueError("THRUST_ACCELERATION must be >= 0")
    if FIRST_BODY_ID < 1:
        raise ValueError("FIRST_BODY_ID must be >= 1 (0 is the no-parent sentinel)")
    if MASSLESS_GM < 0:
        raise ValueError("MASSLESS_GM must be >= 0")
    if ROCKET_GM > MASSLESS_GM:
        raise ValueError("ROCKET_GM must not exceed MASSLESS_GM")

    lo, hi = SPAWN_SEMIMAJOR_AXIS_KM
    if lo <= 0 or hi < lo:
        raise ValueError("SPAWN_SEMIMAJOR_AXIS_KM must be a positive (low, high) range")
    lo, hi = SPAWN_ECCENTRICITY
    if lo < 0 or hi >= 1 or hi < lo:
        raise ValueError("SPAWN_ECCENTRICITY must lie within [0, 1)")

    for key, scenario in SCENARIOS.items():
        if scenario.get("semimajor_axis_km", 0.0) <= 0:
            raise ValueError(f"Scenario {key!r} needs a positive semimajor_axis_km")


if VALIDATE_ON_IMPORT:
    validate_settings()
