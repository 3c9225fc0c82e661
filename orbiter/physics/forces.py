# orbiter/physics/forces.py
import numpy as np
from orbiter.config.settings import MASSLESS_GM, SOFTENING, THRUST_ACCELERATION
from orbiter.physics import quaternion

_BODY_X = np.array([1.0, 0.0, 0.0])


class ForceModel:
    """
    Base force model. Acceleration on `body` given every other body in the
    universe. World-frame models read `world_position` snapshots.
    """
    def acceleration(self, body, others=()) -> np.ndarray:
        raise NotImplementedError


class NewtonianGravity(ForceModel):
    """
    Softened inverse-square attraction from every other body with GM above
    `massless_gm`. Bodies at or below it (spacecraft) are pulled but pull nothing.
    """
    def __init__(self, softening: float = SOFTENING, massless_gm: float = MASSLESS_GM):
        self.softening2 = float(softening) ** 2
        self.massless_gm = max(0.0, float(massless_gm))

    def acceleration(self, body, others=()) -> np.ndarray:
        total = np.zeros(3, dtype=float)
        here = body.world_position
        for other in others:
            if other.gm <= self.massless_gm:
                continue
            d = other.world_position - here
            d2 = float(np.dot(d, d)) + self.softening2
            if d2 == 0.0:
                continue
            total += (other.gm / (d2 * np.sqrt(d2))) * d
        return total


class EngineThrust(ForceModel):
    """
    Constant engine acceleration along the body's own +x axis, scaled by its
    throttle. Independent of every body's mass.
    """
    def __init__(self, magnitude: float = THRUST_ACCELERATION):
        self.magnitude = float(magnitude)

    def acceleration(self, body, others=()) -> np.ndarray:
        if body.throttle <= 0.0 or self.magnitude == 0.0:
            return np.zeros(3, dtype=float)
        return (body.throttle * self.magnitude) * quaternion.rotate(body.orientation, _BODY_X)

