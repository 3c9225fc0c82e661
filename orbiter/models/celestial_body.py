# orbiter/models/celestial_body.py
import math
from dataclasses import dataclass, field
from typing import Optional

import numpy as np

from orbiter.physics import quaternion
from orbiter.physics.elements import OrbitalElements, elements_to_state, state_to_elements
from orbiter.physics.solver import SymplecticEulerSolver, integrate_attitude
from orbiter.physics.state import State
from orbiter.physics.utils import InvariantError

_DEFAULT_SOLVER = SymplecticEulerSolver()
_X_AXIS = np.array([1.0, 0.0, 0.0])


@dataclass
class BodyParams:
    """
    Attitude parameters for a body built from orbital elements.

    Attributes:
        axial_tilt: rotation about the body's x axis (rad), applied after `orientation`.
        rotation_period: sidereal rotation period (s); 0 keeps `angular_velocity`.
        orientation: base orientation quaternion [x, y, z, w].
        angular_velocity: body-frame spin (rad/s), used when rotation_period is 0.
    """
    axial_tilt: float = 0.0
    rotation_period: float = 0.0
    orientation: np.ndarray = field(default_factory=quaternion.identity)
    angular_velocity: np.ndarray = field(default_factory=lambda: np.zeros(3, dtype=float))


class CelestialBody:
    """
    A node of the body hierarchy. Position and velocity are relative to the
    parent body; `parent` and `children` hold ids, resolved through the owning
    Universe (or through the sibling traversal during a tick).
    """
    def __init__(self, name, position, velocity, gm, radius, orbit_color="#ffffff",
                 orientation=None, angular_velocity=None, parent=None, orbital_elements=None):
        self.id: Optional[int] = None
        self.name = name
        self.position = np.array(position, dtype=float)
        self.velocity = np.array(velocity, dtype=float)
        if self.position.shape != (3,) or self.velocity.shape != (3,):
            raise ValueError("Position and velocity must be 3D vectors.")
        self.orientation = quaternion.normalize(
            orientation if orientation is not None else quaternion.identity())
        self.angular_velocity = (
            np.array(angular_velocity, dtype=float)
            if angular_velocity is not None
            else np.zeros(3, dtype=float)
        )
        self.gm = float(gm)
        self.radius = float(radius)
        self.orbit_color = orbit_color
        self.orbital_elements = orbital_elements if orbital_elements is not None else OrbitalElements()
        self.parent: Optional[int] = parent
        self.children = []
        self.throttle = 0.0

        # per-substep scratch, owned by the Universe tick
        self.world_position = np.zeros(3, dtype=float)
        self.world_acceleration = np.zeros(3, dtype=float)

    @classmethod
    def from_orbital_elements(cls, parent, elements, gm, radius, name,
                              params=None, orbit_color="#7f7fff"):
        """
        Build a body at periapsis of the given orbit around `parent`.
        The given elements (including epoch and soi) become the cached elements.
        """
        if parent.id is None:
            raise InvariantError(f"parent {parent.name!r} has not been added to a universe")
        params = params if params is not None else BodyParams()
        state = elements_to_state(elements, parent.gm)

        orientation = quaternion.multiply(
            params.orientation, quaternion.from_axis_angle(_X_AXIS, params.axial_tilt))
        if params.rotation_period:
            angular_velocity = np.array([0.0, 0.0, 2.0 * math.pi / params.rotation_period])
        else:
            angular_velocity = params.angular_velocity

        return cls(
            name,
            state.r,
            state.v,
            gm,
            radius,
            orbit_color=orbit_color,
            orientation=orientation,
            angular_velocity=angular_velocity,
            parent=parent.id,
            orbital_elements=elements.copy(),
        )

    @property
    def state(self):
        return State(self.position, self.velocity)

    def find_parent(self, siblings):
        if self.parent is None:
            return None
        parent_id = self.parent
        parent = siblings.find(lambda b: b.id == parent_id)
        if parent is None:
            raise InvariantError(f"{self.name!r} (id {self.id}) has no resolvable parent {parent_id}")
        return parent

    def accumulate(self, siblings, gravity):
        """Store the world-frame gravitational acceleration from every sibling."""
        self.world_acceleration = gravity.acceleration(self, siblings)

    def advance(self, siblings, dt, thrust=None, solver=None):
        """
        Integrate one substep. The parent frame accelerates too, so the
        relative acceleration is ours minus the parent's. The root is the
        reference origin and feels no gravity.
        """
        parent = self.find_parent(siblings)
        if parent is not None:
            accel = self.world_acceleration - parent.world_acceleration
        else:
            accel = np.zeros(3, dtype=float)
        if thrust is not None:
            accel = accel + thrust.acceleration(self)

        state = (solver or _DEFAULT_SOLVER).step(self.state, accel, dt)
        self.position = state.r
        self.velocity = state.v
        self.orientation = integrate_attitude(self.orientation, self.angular_velocity, dt)

    def update_elements(self, siblings):
        """Recompute orbital elements against the parent's GM. No-op for the root."""
        parent = self.find_parent(siblings)
        if parent is None:
            return
        self.orbital_elements = state_to_elements(
            self.position, self.velocity, parent.gm, previous=self.orbital_elements)

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "position": self.position.tolist(),
            "velocity": self.velocity.tolist(),
            "quaternion": self.orientation.tolist(),
            "angular_velocity": self.angular_velocity.tolist(),
            "orbit_color": self.orbit_color,
            "children": list(self.children),
            "parent": self.parent if self.parent is not None else 0,
            "radius": self.radius,
            "GM": self.gm,
            "orbital_elements": self.orbital_elements.to_dict(),
        }

    def __repr__(self):
        return f"{self.name} (id {self.id}) at pos {self.position}, vel {self.velocity}"
