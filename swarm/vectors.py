"""Small 3D vector and quaternion helpers.

Every operation is safe on zero-length input: a vector that cannot be
normalized comes back as zeros instead of NaN. Quaternions are stored as
``[x, y, z, w]``.
"""

import math
import numpy as np

EPS = 1e-12

IDENTITY_QUATERNION = np.array([0.0, 0.0, 0.0, 1.0])
WORLD_UP = np.array([0.0, 1.0, 0.0])


def vec3(values=None) -> np.ndarray:
    """Return a fresh float64 3-vector (zeros when ``values`` is None)."""
    if values is None:
        return np.zeros(3)
    arr = np.array(values, dtype=np.float64).reshape(-1)
    if arr.shape != (3,):
        raise ValueError(f"Expected a 3D point, got shape {np.shape(values)}")
    return arr


def length(v: np.ndarray) -> float:
    return math.sqrt(float(np.dot(v, v)))


def normalize(v: np.ndarray) -> np.ndarray:
    """Unit vector along ``v``, or zeros for a zero-length vector."""
    mag = length(v)
    if mag <= EPS:
        return np.zeros(3)
    return v / mag


def clamp_length(v: np.ndarray, max_length: float) -> np.ndarray:
    """Scale ``v`` down so its magnitude lies in ``[0, max_length]``."""
    mag = length(v)
    if mag > max_length and mag > EPS:
        return v * (max_length / mag)
    return v


def lerp(a: np.ndarray, b: np.ndarray, t: float) -> np.ndarray:
    return a + (b - a) * t


def quat_from_matrix(m: np.ndarray) -> np.ndarray:
    """Unit quaternion for a pure rotation matrix (columns are the basis axes)."""
    m11, m12, m13 = m[0]
    m21, m22, m23 = m[1]
    m31, m32, m33 = m[2]
    trace = m11 + m22 + m33

    if trace > 0:
        s = 0.5 / math.sqrt(trace + 1.0)
        q = (
            (m32 - m23) * s,
            (m13 - m31) * s,
            (m21 - m12) * s,
            0.25 / s,
        )
    elif m11 > m22 and m11 > m33:
        s = 2.0 * math.sqrt(1.0 + m11 - m22 - m33)
        q = (
            0.25 * s,
            (m12 + m21) / s,
            (m13 + m31) / s,
            (m32 - m23) / s,
        )
    elif m22 > m33:
        s = 2.0 * math.sqrt(1.0 + m22 - m11 - m33)
        q = (
            (m12 + m21) / s,
            0.25 * s,
            (m23 + m32) / s,
            (m13 - m31) / s,
        )
    else:
        s = 2.0 * math.sqrt(1.0 + m33 - m11 - m22)
        q = (
            (m13 + m31) / s,
            (m23 + m32) / s,
            0.25 * s,
            (m21 - m12) / s,
        )
    return np.array(q, dtype=np.float64)


def look_rotation(forward: np.ndarray, up: np.ndarray = WORLD_UP) -> np.ndarray:
    """
    Orientation whose local +Z axis points along ``forward``.

    Args:
        forward: Facing direction (need not be normalized)
        up: World up used to fix the roll

    Returns:
        Quaternion ``[x, y, z, w]``; identity when ``forward`` is zero
    """
    z = normalize(forward)
    if not z.any():
        return IDENTITY_QUATERNION.copy()

    x = np.cross(up, z)
    if length(x) <= EPS:
        # Forward parallel to up: nudge it so the basis stays defined
        z = z.copy()
        if abs(up[2]) == 1.0:
            z[0] += 0.0001
        else:
            z[2] += 0.0001
        z = normalize(z)
        x = np.cross(up, z)
    x = normalize(x)
    y = np.cross(z, x)

    basis = np.column_stack((x, y, z))
    return quat_from_matrix(basis)


def slerp(a: np.ndarray, b: np.ndarray, t: float) -> np.ndarray:
    """Spherical interpolation from ``a`` toward ``b`` along the shortest arc."""
    if t <= 0.0:
        return a.copy()
    if t >= 1.0:
        return b.copy()

    cos_half = float(np.dot(a, b))
    if cos_half < 0.0:
        b = -b
        cos_half = -cos_half

    if cos_half >= 1.0:
        return a.copy()

    sqr_sin_half = 1.0 - cos_half * cos_half
    if sqr_sin_half <= np.finfo(np.float64).eps:
        q = a * (1.0 - t) + b * t
        return q / np.linalg.norm(q)

    sin_half = math.sqrt(sqr_sin_half)
    half = math.atan2(sin_half, cos_half)
    ratio_a = math.sin((1.0 - t) * half) / sin_half
    ratio_b = math.sin(t * half) / sin_half
    return a * ratio_a + b * ratio_b


def rotate(q: np.ndarray, v: np.ndarray) -> np.ndarray:
    """Rotate vector ``v`` by quaternion ``q``."""
    u = q[:3]
    w = q[3]
    t = 2.0 * np.cross(u, v)
    return v + w * t + np.cross(u, t)
