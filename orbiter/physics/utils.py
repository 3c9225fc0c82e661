# orbiter/physics/utils.py
import numpy as np


class InvariantError(RuntimeError):
    """Internal bookkeeping is corrupt (unresolvable parent, children out of sync)."""
    pass


def specific_energy(position, velocity, gm):
    """
    Two-body specific mechanical energy of a parent-relative state.
    Used as a numerical stability diagnostic, not a physical conservation proof.
    """
    r = np.linalg.norm(position)
    if r == 0.0:
        return float("nan")
    kinetic = 0.5 * float(np.dot(velocity, velocity))
    return kinetic - gm / r
