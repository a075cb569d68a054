"""Scalar and vector primitives for astrometry.

Angle wrapping, degree-based trigonometry, polar/cartesian conversion,
2D rotation and axis-angle rotation matrices.  Every angle is in degrees.

All functions are pure and JAX-traceable except
:func:`compute_rotation_matrix`, which validates its axis eagerly.
"""

from __future__ import annotations

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from coordconv.config import get_dtype
from coordconv.constants import DOUBLE_EPSILON

# Vectors with a polar radius below this are treated as directionless
POLAR_TOLERANCE = 10.0 * DOUBLE_EPSILON


def sind(ang: ArrayLike) -> Array:
    """Sine of an angle in degrees."""
    return jnp.sin(jnp.deg2rad(ang))


def cosd(ang: ArrayLike) -> Array:
    """Cosine of an angle in degrees."""
    return jnp.cos(jnp.deg2rad(ang))


def tand(ang: ArrayLike) -> Array:
    """Tangent of an angle in degrees."""
    return jnp.tan(jnp.deg2rad(ang))


def asind(x: ArrayLike) -> Array:
    """Arcsine in degrees."""
    return jnp.rad2deg(jnp.arcsin(x))


def acosd(x: ArrayLike) -> Array:
    """Arccosine in degrees."""
    return jnp.rad2deg(jnp.arccos(x))


def atand(x: ArrayLike) -> Array:
    """Arctangent in degrees."""
    return jnp.rad2deg(jnp.arctan(x))


def atan2d(y: ArrayLike, x: ArrayLike) -> Array:
    """Two-argument arctangent in degrees, ``atan2(y, x)``."""
    return jnp.rad2deg(jnp.arctan2(y, x))


def hypot(x: ArrayLike, y: ArrayLike) -> Array:
    """Hypotenuse of a right triangle with sides ``x`` and ``y``."""
    return jnp.hypot(x, y)


def wrap_pos(ang: ArrayLike) -> Array:
    """Wrap an angle into the range ``0 <= wrapped < 360``.

    ``jnp.mod`` of a tiny negative angle rounds to exactly 360, which is
    folded back to 0 so the interval stays half-open.

    Args:
        ang: Angle to wrap (deg).

    Returns:
        Wrapped angle (deg).
    """
    ang = jnp.asarray(ang, dtype=get_dtype())
    wrapped = jnp.mod(ang, 360.0)
    return jnp.where(wrapped >= 360.0, wrapped - 360.0, wrapped)


def wrap_ctr(ang: ArrayLike) -> Array:
    """Wrap an angle into the range ``-180 <= wrapped < 180``.

    Args:
        ang: Angle to wrap (deg).

    Returns:
        Wrapped angle (deg).
    """
    wrapped = wrap_pos(ang)
    return jnp.where(wrapped >= 180.0, wrapped - 360.0, wrapped)


def wrap_near(ang: ArrayLike, ref_ang: ArrayLike) -> Array:
    """Wrap an angle to be within 180 degrees of a reference angle.

    The result satisfies ``-180 <= wrapped - ref_ang < 180``.  Ties go to the
    representative below ``ref_ang + 180``.

    Args:
        ang: Angle to wrap (deg).
        ref_ang: Result is wrapped to be near this reference angle (deg).

    Returns:
        Wrapped angle (deg).

    Examples:
        ```python
        from coordconv.math_utils import wrap_near
        float(wrap_near(350.0, 0.0))  # -10.0
        ```
    """
    ref_ang = jnp.asarray(ref_ang, dtype=get_dtype())
    wrapped = ref_ang + wrap_ctr(jnp.asarray(ang, dtype=get_dtype()) - ref_ang)
    # ref_ang + delta can round onto the open end of the interval
    wrapped = jnp.where(wrapped - ref_ang >= 180.0, wrapped - 360.0, wrapped)
    return jnp.where(wrapped - ref_ang < -180.0, wrapped + 360.0, wrapped)


def polar_from_xy(x: ArrayLike, y: ArrayLike) -> tuple[Array, Array, Array]:
    """Convert cartesian coordinates to polar coordinates.

    Near the origin the angle is meaningless; in that case ``theta`` is set
    to 0 and ``at_origin`` is ``True``.  Callers must branch on the flag
    rather than trust the angle.

    Args:
        x: x component of vector (arbitrary units).
        y: y component of vector (same units as ``x``).

    Returns:
        ``(r, theta, at_origin)``: magnitude (units of ``x``), angle in
        degrees (0 along x, 90 along y, in ``[-180, 180]``), and a boolean
        array that is ``True`` when ``r < POLAR_TOLERANCE``.
    """
    x = jnp.asarray(x, dtype=get_dtype())
    y = jnp.asarray(y, dtype=get_dtype())

    r = jnp.hypot(x, y)
    at_origin = r < POLAR_TOLERANCE
    theta = jnp.where(at_origin, 0.0, atan2d(y, x))
    return r, theta, at_origin


def xy_from_polar(r: ArrayLike, theta: ArrayLike) -> tuple[Array, Array]:
    """Convert polar coordinates to cartesian coordinates.

    Args:
        r: Magnitude of vector (arbitrary units).
        theta: Angle of vector from the x axis (deg).

    Returns:
        ``(x, y)`` in the units of ``r``.
    """
    r = jnp.asarray(r, dtype=get_dtype())
    return r * cosd(theta), r * sind(theta)


def rot_2d(x: ArrayLike, y: ArrayLike, ang: ArrayLike) -> tuple[Array, Array]:
    """Rotate a 2-dimensional vector by a given angle.

    Using ``rot_2d`` to change coordinate systems: given frames A and B such
    that B's origin is at ``B_A_xy`` in A and B's orientation is
    ``B_A_ang`` in A, a point P transforms as::

        P_B_xy = rot_2d(P_A_xy - B_A_xy, -B_A_ang)
        P_A_xy = B_A_xy + rot_2d(P_B_xy, +B_A_ang)

    Args:
        x: Unrotated x value.
        y: Unrotated y value.
        ang: Angle by which to rotate, counter-clockwise positive (deg).

    Returns:
        ``(rot_x, rot_y)``.
    """
    x = jnp.asarray(x, dtype=get_dtype())
    y = jnp.asarray(y, dtype=get_dtype())
    c = cosd(ang)
    s = sind(ang)
    return x * c - y * s, x * s + y * c


def compute_rotation_matrix(axis: ArrayLike, rot_angle: ArrayLike) -> Array:
    """Compute a rotation matrix given an axis and rotation angle.

    Uses Rodrigues' formula ``R = I + sin(a) K + (1 - cos(a)) K^2`` where
    ``K`` is the cross-product matrix of the unit axis.  The result rotates
    vectors right-handedly about ``axis`` (an active rotation).

    Args:
        axis: Axis of rotation, shape ``(3,)``.  Magnitude is ignored, but
            it must be finite and nonzero.
        rot_angle: Rotation angle (deg).

    Returns:
        3x3 rotation matrix.

    Raises:
        ValueError: If ``axis`` has a non-finite component or zero magnitude.

    Examples:
        ```python
        from coordconv.math_utils import compute_rotation_matrix
        R = compute_rotation_matrix([0.0, 0.0, 1.0], 90.0)
        R @ jnp.array([1.0, 0.0, 0.0])  # ~[0, 1, 0]
        ```
    """
    axis = jnp.asarray(axis, dtype=get_dtype())
    if axis.shape != (3,):
        raise ValueError(f"Rotation axis must have shape (3,), got {axis.shape}")
    if not bool(jnp.all(jnp.isfinite(axis))):
        raise ValueError(f"Rotation axis must be finite, got {axis}")
    norm = jnp.linalg.norm(axis)
    if not bool(norm > 0.0):
        raise ValueError("Rotation axis must have nonzero magnitude")

    kx, ky, kz = axis / norm
    K = jnp.array([[0.0, -kz, ky],
                   [kz, 0.0, -kx],
                   [-ky, kx, 0.0]])

    s = sind(rot_angle)
    c = cosd(rot_angle)
    return jnp.eye(3, dtype=get_dtype()) + s * K + (1.0 - c) * (K @ K)
