"""Math utilities for rigid-transform operations."""

from __future__ import annotations

import numpy as np

IDENTITY_QUATERNION: tuple[float, float, float, float] = (0.0, 0.0, 0.0, 1.0)


def quat_multiply(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    """Hamilton product a * b for quaternions in (x, y, z, w) order.

    Works on single quaternions of shape (4,) and on stacks of shape (N, 4);
    either operand may be broadcast.

    Args:
        a: Left operand
        b: Right operand

    Returns:
        Product quaternion(s)
    """
    a = np.asarray(a, dtype=float)
    b = np.asarray(b, dtype=float)
    ax, ay, az, aw = a[..., 0], a[..., 1], a[..., 2], a[..., 3]
    bx, by, bz, bw = b[..., 0], b[..., 1], b[..., 2], b[..., 3]
    return np.stack(
        [
            aw * bx + ax * bw + ay * bz - az * by,
            aw * by - ax * bz + ay * bw + az * bx,
            aw * bz + ax * by - ay * bx + az * bw,
            aw * bw - ax * bx - ay * by - az * bz,
        ],
        axis=-1,
    )


def quat_normalize(q: np.ndarray) -> np.ndarray:
    """Return q scaled to unit length.

    Raises:
        ValueError: If q has (near) zero length.
    """
    q = np.asarray(q, dtype=float).reshape(4)
    n = float(np.linalg.norm(q))
    if n < 1e-8:
        raise ValueError("quaternion must have non-zero length")
    return q / n


def is_identity_quaternion(q: tuple[float, float, float, float]) -> bool:
    """True if q is exactly the identity rotation (0, 0, 0, 1)."""
    return tuple(float(c) for c in q) == IDENTITY_QUATERNION
