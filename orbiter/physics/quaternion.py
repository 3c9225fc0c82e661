# orbiter/physics/quaternion.py
"""
Unit quaternions as numpy arrays in [x, y, z, w] order (the wire order).
"""
import numpy as np


def identity() -> np.ndarray:
    return np.array([0.0, 0.0, 0.0, 1.0], dtype=float)


def from_axis_angle(axis, angle: float) -> np.ndarray:
    axis = np.asarray(axis, dtype=float)
    norm = np.linalg.norm(axis)
    if norm == 0.0:
        return identity()
    half = 0.5 * float(angle)
    xyz = (axis / norm) * np.sin(half)
    return np.array([xyz[0], xyz[1], xyz[2], np.cos(half)], dtype=float)


def multiply(a, b) -> np.ndarray:
    """Hamilton product a * b (apply b first, then a)."""
    ax, ay, az, aw = a
    bx, by, bz, bw = b
    return np.array([
        aw * bx + ax * bw + ay * bz - az * by,
        aw * by - ax * bz + ay * bw + az * bx,
        aw * bz + ax * by - ay * bx + az * bw,
        aw * bw - ax * bx - ay * by - az * bz,
    ], dtype=float)


def rotate(q, v) -> np.ndarray:
    q = np.asarray(q, dtype=float)
    v = np.asarray(v, dtype=float)
    u = q[:3]
    t = 2.0 * np.cross(u, v)
    return v + q[3] * t + np.cross(u, t)


def normalize(q) -> np.ndarray:
    q = np.asarray(q, dtype=float)
    norm = np.linalg.norm(q)
    if norm == 0.0:
        return identity()
    return q / norm
