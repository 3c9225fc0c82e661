# orbiter/physics/elements.py
"""
Classical orbital elements and the conversions between them and a
parent-relative Cartesian state.

The derivation follows chapter 4.4 of Curtis, "Orbital Mechanics for
Engineering Students", with two conventions of this engine:

- angular momentum is taken as ``h = v x r`` (not ``r x v``), so a prograde
  orbit in the reference plane has ``h.z < 0`` and inclination is
  ``acos(-h.z / |h|)``;
- the perifocal frame has periapsis on +y and the periapsis velocity on +x,
  and is mapped to the parent frame by ``Rz(node - pi/2) * Ry(pi - i) * Rz(argp)``.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import Optional

import numpy as np

from orbiter.config import settings
from orbiter.physics import quaternion
from orbiter.physics.state import State

_Z_AXIS = np.array([0.0, 0.0, 1.0])
_Y_AXIS = np.array([0.0, 1.0, 0.0])
_TWO_PI = 2.0 * math.pi


@dataclass
class OrbitalElements:
    semimajor_axis: float = 0.0
    eccentricity: float = 0.0
    inclination: float = 0.0
    ascending_node: float = 0.0
    argument_of_perihelion: float = 0.0
    mean_anomaly: float = 0.0
    epoch: float = 0.0
    soi: float = 0.0

    def copy(self) -> "OrbitalElements":
        return replace(self)

    def to_dict(self) -> dict:
        return {
            "semimajor_axis": self.semimajor_axis,
            "ascending_node": self.ascending_node,
            "inclination": self.inclination,
            "eccentricity": self.eccentricity,
            "epoch": self.epoch,
            "mean_anomaly": self.mean_anomaly,
            "argument_of_perihelion": self.argument_of_perihelion,
            "soi": self.soi,
        }


def perifocal_rotation(ascending_node: float, inclination: float,
                       argument_of_perihelion: float = 0.0) -> np.ndarray:
    """
    Quaternion taking perifocal coordinates into the parent frame.
    Applied right to left: argument of perihelion, inclination, ascending node.
    """
    node_rot = quaternion.from_axis_angle(_Z_AXIS, ascending_node - math.pi / 2.0)
    incl_rot = quaternion.from_axis_angle(_Y_AXIS, math.pi - inclination)
    argp_rot = quaternion.from_axis_angle(_Z_AXIS, argument_of_perihelion)
    return quaternion.multiply(quaternion.multiply(node_rot, incl_rot), argp_rot)


def _acos(x: float) -> float:
    return math.acos(max(-1.0, min(1.0, float(x))))


def state_to_elements(position, velocity, gm: float,
                      previous: Optional[OrbitalElements] = None) -> OrbitalElements:
    """
    Derive orbital elements from a parent-relative state.

    Args:
        position, velocity: 3-vectors relative to the parent body.
        gm: the parent's gravitational parameter.
        previous: elements whose epoch, soi and mean anomaly are carried over.
            They are also returned untouched when the state is unusable
            (zero radius or non-positive gm).

    Returns:
        OrbitalElements. Degenerate geometry (equatorial or circular orbits)
        takes the fallback branches below, never NaN.
    """
    out = previous.copy() if previous is not None else OrbitalElements()

    r_vec = np.asarray(position, dtype=float)
    v_vec = np.asarray(velocity, dtype=float)
    r = float(np.linalg.norm(r_vec))
    if r == 0.0 or gm <= 0.0:
        return out
    v = float(np.linalg.norm(v_vec))

    # Angular momentum, v x r by convention
    ang = np.cross(v_vec, r_vec)
    ang2 = float(np.dot(ang, ang))
    # Node vector
    n = np.cross(_Z_AXIS, ang)
    n2 = float(np.dot(n, n))
    # Eccentricity vector
    e = r_vec * (1.0 / gm * (v * v - gm / r)) - v_vec * (float(np.dot(r_vec, v_vec)) / gm)
    e2 = float(np.dot(e, e))

    out.eccentricity = math.sqrt(e2)

    if ang2 == 0.0:
        # Radial trajectory has no orbital plane
        out.inclination = 0.0
    else:
        # acos(-h.z / |h|), in the atan2 form that keeps precision near 0 and pi
        out.inclination = math.atan2(math.hypot(ang[0], ang[1]), -ang[2])

    node_degenerate = n2 <= settings.EPSILON * ang2
    if node_degenerate:
        out.ascending_node = 0.0
    else:
        out.ascending_node = _acos(n[0] / math.sqrt(n2))
        if n[1] < 0.0:
            out.ascending_node = _TWO_PI - out.ascending_node

    out.semimajor_axis = 1.0 / (2.0 / r - v * v / gm)

    # Measure in the orbital plane's own sense when N or e vanishes
    if node_degenerate or e2 <= settings.EPSILON:
        ey = -e[1] if ang[2] < 0.0 else e[1]
        out.argument_of_perihelion = math.atan2(ey, e[0])
    else:
        out.argument_of_perihelion = _acos(float(np.dot(n, e)) / math.sqrt(n2) / math.sqrt(e2))
        if e[2] < 0.0:
            out.argument_of_perihelion = _TWO_PI - out.argument_of_perihelion

    return out


def elements_to_state(elements: OrbitalElements, gm: float) -> State:
    """
    Cartesian state at periapsis (zero true anomaly) for the given elements,
    relative to a parent with gravitational parameter gm.
    """
    a = float(elements.semimajor_axis)
    e = float(elements.eccentricity)
    rot = perifocal_rotation(elements.ascending_node, elements.inclination,
                             elements.argument_of_perihelion)

    periapsis = a * (1.0 - e)
    position = quaternion.rotate(rot, np.array([0.0, periapsis, 0.0]))
    if gm > 0.0 and periapsis != 0.0 and a != 0.0:
        speed = math.sqrt(max(0.0, gm * (2.0 / abs(periapsis) - 1.0 / a)))
    else:
        speed = 0.0
    velocity = quaternion.rotate(rot, np.array([speed, 0.0, 0.0]))
    return State(position, velocity)
