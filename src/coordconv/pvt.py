"""Position-velocity-time (PVT) values.

A :class:`PVT` is a scalar (an angle or a coordinate component) together
with its time derivative, referenced to a TAI date.  It is evaluated at
other dates by linear extrapolation::

    value_at(t) = value + velocity * (t - tai)

The linear model is only valid near the reference date; callers tracking
an object over a long interval should :meth:`~PVT.rebase` periodically
(typically by re-running the conversion that produced the PVT).

Also provides PVT versions of the polar and 2D rotation primitives of
:mod:`coordconv.math_utils`.
"""

from __future__ import annotations

import math
from collections.abc import Callable
from dataclasses import dataclass

import jax
import jax.numpy as jnp
from jax.typing import ArrayLike

from coordconv.math_utils import polar_from_xy, rot_2d, wrap_near


@dataclass(frozen=True)
class PVT:
    """A scalar value and its rate of change at a reference date.

    Args:
        value: Value at ``tai`` (e.g. deg).
        velocity: Rate of change (value units per second).
        tai: Reference date, TAI as Modified Julian Date in seconds.
    """

    value: float
    velocity: float
    tai: float

    @classmethod
    def invalid(cls, tai: float) -> PVT:
        """Return a PVT whose value and velocity are NaN."""
        return cls(math.nan, math.nan, tai)

    @classmethod
    def from_func(cls, func: Callable[[float], float], tai: float, delta_t: float = 0.01) -> PVT:
        """Create a PVT from a scalar function of date by finite difference.

        Args:
            func: Function of TAI (MJD seconds) returning a scalar.
            tai: Reference date.
            delta_t: Time step for the difference (sec).

        Returns:
            PVT: ``func(tai)`` and its forward-difference rate.
        """
        value = float(func(tai))
        velocity = (float(func(tai + delta_t)) - value) / delta_t
        return cls(value, velocity, tai)

    def value_at(self, tai: ArrayLike) -> jax.Array:
        """Evaluate the value at another date.

        Args:
            tai: Date at which to evaluate, TAI MJD seconds.

        Returns:
            Extrapolated value.
        """
        return jnp.asarray(self.value) + self.velocity * (jnp.asarray(tai) - self.tai)

    def rebase(self, tai: float) -> PVT:
        """Return an equivalent PVT referenced to another date.

        Args:
            tai: New reference date, TAI MJD seconds.

        Returns:
            PVT: Same velocity, value evaluated at ``tai``.
        """
        return PVT(float(self.value_at(tai)), self.velocity, tai)

    def is_finite(self) -> bool:
        """Return ``True`` if value, velocity and date are all finite."""
        return all(math.isfinite(float(v)) for v in (self.value, self.velocity, self.tai))

    # Arithmetic. Binary operations between PVTs are evaluated at the
    # reference date of the left operand.

    def __add__(self, other: PVT | float) -> PVT:
        if isinstance(other, PVT):
            return PVT(self.value + float(other.value_at(self.tai)), self.velocity + other.velocity, self.tai)
        return PVT(self.value + other, self.velocity, self.tai)

    def __radd__(self, other: float) -> PVT:
        return self + other

    def __sub__(self, other: PVT | float) -> PVT:
        return self + (-other)

    def __rsub__(self, other: float) -> PVT:
        return (-self) + other

    def __neg__(self) -> PVT:
        return PVT(-self.value, -self.velocity, self.tai)

    def __mul__(self, scale: float) -> PVT:
        return PVT(self.value * scale, self.velocity * scale, self.tai)

    def __rmul__(self, scale: float) -> PVT:
        return self * scale

    def __truediv__(self, scale: float) -> PVT:
        return PVT(self.value / scale, self.velocity / scale, self.tai)

    def __str__(self) -> str:
        return f"PVT(value={float(self.value):.9f}, velocity={float(self.velocity):.6e}, tai={float(self.tai):.3f})"


def polar_from_xy_pvt(x: PVT, y: PVT, tai: float, delta_t: float = 0.01) -> tuple[PVT, PVT, bool]:
    """Convert cartesian PVTs to polar PVTs.

    The angle is evaluated at ``tai`` and ``tai + delta_t`` and the second
    value unwrapped next to the first, so the velocity never picks up a
    spurious 360 degree jump.

    Args:
        x: x component.
        y: y component.
        tai: Date at which to evaluate.
        delta_t: Time step for the difference (sec).

    Returns:
        ``(r, theta, at_origin)``; ``at_origin`` is evaluated at ``tai``.
    """
    r0, theta0, at_origin = polar_from_xy(x.value_at(tai), y.value_at(tai))
    r1, theta1, _ = polar_from_xy(x.value_at(tai + delta_t), y.value_at(tai + delta_t))
    theta1 = wrap_near(theta1, theta0)
    r = PVT(float(r0), float(r1 - r0) / delta_t, tai)
    theta = PVT(float(theta0), float(theta1 - theta0) / delta_t, tai)
    return r, theta, bool(at_origin)


def rot_2d_pvt(x: PVT, y: PVT, ang: float, tai: float) -> tuple[PVT, PVT]:
    """Rotate a 2-dimensional PVT vector by a fixed angle.

    Values and velocities rotate together; see
    :func:`~coordconv.math_utils.rot_2d` for the sign convention.

    Args:
        x: Unrotated x.
        y: Unrotated y.
        ang: Angle by which to rotate (deg).
        tai: Reference date of the result.

    Returns:
        ``(rot_x, rot_y)`` referenced to ``tai``.
    """
    pos_x, pos_y = rot_2d(x.value_at(tai), y.value_at(tai), ang)
    vel_x, vel_y = rot_2d(x.velocity, y.velocity, ang)
    return PVT(float(pos_x), float(vel_x), tai), PVT(float(pos_y), float(vel_y), tai)
