# orbiter/physics/state.py
import numpy as np


class State:
    """
    The 6-vector a body carries between ticks: position (AU) and velocity
    (AU/s), both measured from its parent body, not from the root.
    Orbital elements are derived from it against the parent's GM and the
    solver returns a fresh one each substep.
    """
    __slots__ = ("r", "v")

    def __init__(self, position, velocity):
        r = np.array(position, dtype=float)
        v = np.array(velocity, dtype=float)
        if r.shape != (3,) or v.shape != (3,):
            raise ValueError(f"State needs two 3-vectors, got shapes {r.shape} and {v.shape}")
        self.r = r
        self.v = v

    def copy(self):
        return State(self.r, self.v)

    def __repr__(self):
        return f"State(r={self.r}, v={self.v})"
