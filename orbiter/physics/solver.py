# orbiter/physics/solver.py
import numpy as np
from orbiter.physics.state import State
from orbiter.physics import quaternion

class SymplecticEulerSolver:
    """
    Semi-implicit Euler: kick the velocity with the supplied acceleration,
    then drift the position with the new velocity.
    """
    def step(self, state, acceleration, dt):
        """
        Perform a single substep. The acceleration is evaluated by the caller
        from the substep-start snapshot of every body.
        """
        v_next = state.v + np.asarray(acceleration, dtype=float) * dt
        r_next = state.r + v_next * dt
        return State(r_next, v_next)


def integrate_attitude(orientation, angular_velocity, dt):
    """
    Rotate the orientation by the body-frame angular velocity over dt.
    Unaffected by gravity.
    """
    omega = np.asarray(angular_velocity, dtype=float)
    rate = np.linalg.norm(omega)
    if rate == 0.0:
        return np.asarray(orientation, dtype=float)
    delta = quaternion.from_axis_angle(omega / rate, rate * dt)
    return quaternion.normalize(quaternion.multiply(orientation, delta))
