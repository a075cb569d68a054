"""Rotation matrices between the mean (catalog) reference frames.

All matrices act on column vectors: ``v_to = M @ v_from``.  Equinoxes are
given in years: Julian for FK5, Besselian for FK4.

References:
    1. J. H. Lieske et al., "Expressions for the precession quantities
       based upon the IAU (1976) system of astronomical constants",
       *A&A* 58, 1977.
    2. C. A. Murray, "The transformation of coordinates between the
       systems of B1950.0 and J2000.0, and the principal galactic axes
       referred to J2000.0", *A&A* 218, 1989.
    3. ESA, *The Hipparcos and Tycho Catalogues*, SP-1200, 1997, Vol. 1,
       Sec. 1.5.3 (Galactic pole in the ICRS).
"""

from __future__ import annotations

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from coordconv.config import get_dtype
from coordconv.constants import AS2RAD, DAYS_PER_YEAR
from coordconv.rotations import Ry, Rz
from coordconv.sofa import DJ00, bias_matrix, pmat76

# ICRS position of the north Galactic pole and Galactic longitude of the
# north celestial pole [deg]
GALACTIC_POLE_RA = 192.85948
GALACTIC_POLE_DEC = 27.12825
GALACTIC_NODE_LON = 122.93192

# Elliptic terms of annual aberration in the B1950 FK4 system [rad]
_ETERMS = (-1.62557e-6, -0.31919e-6, -0.13843e-6)

# Iterations used by add_eterms
_ETERMS_ITERATIONS = 3

# Murray (1989) B1950 -> J2000 matrix and its rate per Julian century
# from 1950 accounting for the FK4 equinox motion
_MURRAY_B1950_TO_J2000 = (
    (0.9999256794956877, -0.0111814832204662, -0.0048590038153592),
    (0.0111814832391717, 0.9999374848933135, -0.0000271625947142),
    (0.0048590037723143, -0.0000271702937440, 0.9999881946023742),
)
_MURRAY_RATE = (
    (-2.6455262e-9, -1.1539918689e-6, 2.1111346190e-6),
    (1.1540628161e-6, -1.29042997e-8, 2.36021478e-8),
    (-2.1112979048e-6, -5.6024448e-9, 1.02587734e-8),
)


def rotation_fk5_to_icrs(equinox: ArrayLike = 2000.0) -> Array:
    """Rotation from FK5 at a Julian equinox to the ICRS.

    IAU 1976 precession to J2000 followed by the inverse frame bias.

    Args:
        equinox: Julian equinox of the FK5 frame (e.g. 2000.0).

    Returns:
        3x3 rotation matrix (FK5 -> ICRS).

    Examples:
        ```python
        from coordconv.frames import rotation_fk5_to_icrs
        rot = rotation_fk5_to_icrs(1975.0)
        ```
    """
    days = (jnp.asarray(equinox, dtype=get_dtype()) - 2000.0) * DAYS_PER_YEAR
    precession = pmat76(DJ00, days, DJ00, 0.0)
    return bias_matrix().T @ precession


def rotation_icrs_to_fk5(equinox: ArrayLike = 2000.0) -> Array:
    """Rotation from the ICRS to FK5 at a Julian equinox.

    This is the transpose of :func:`rotation_fk5_to_icrs`.
    """
    return rotation_fk5_to_icrs(equinox).T


def precession_matrix_besselian(equinox1: ArrayLike, equinox2: ArrayLike) -> Array:
    """Newcomb precession matrix between two Besselian equinoxes.

    Args:
        equinox1: Starting Besselian equinox.
        equinox2: Ending Besselian equinox.

    Returns:
        3x3 rotation matrix (mean of ``equinox1`` -> mean of ``equinox2``).
    """
    _float = get_dtype()
    # Tropical millennia from 1850
    t1 = (jnp.asarray(equinox1, dtype=_float) - 1850.0) / 1000.0
    t2 = (jnp.asarray(equinox2, dtype=_float) - 1850.0) / 1000.0
    dt = t2 - t1

    w = 23035.545 + 139.720 * t1 + 0.060 * t1 * t1
    zeta = dt * (w + dt * ((30.240 - 0.27 * t1) + 17.995 * dt)) * AS2RAD
    z = dt * (w + dt * ((109.480 + 0.39 * t1) + 18.325 * dt)) * AS2RAD
    theta = dt * (
        (20051.12 - 85.29 * t1 - 0.37 * t1 * t1) + dt * ((-42.65 - 0.37 * t1) - 41.8 * dt)
    ) * AS2RAD

    return Rz(-z) @ Ry(theta) @ Rz(-zeta)


def rotation_fk4_to_fk5_j2000(equinox: ArrayLike = 1950.0, epoch: ArrayLike = 1950.0) -> Array:
    """Transformation from FK4 (E-terms removed) to FK5 J2000.

    Newcomb precession to B1950 followed by the Murray (1989) matrix.  The
    Murray matrix is not orthogonal: it absorbs the rotation of the FK4
    system relative to FK5, which depends on the epoch of observation.
    Use ``jnp.linalg.inv`` for the inverse, not the transpose.

    Args:
        equinox: Besselian equinox of the FK4 frame.
        epoch: Julian epoch of the position.

    Returns:
        3x3 matrix (FK4 at ``equinox`` -> FK5 J2000).
    """
    _float = get_dtype()
    T = (jnp.asarray(epoch, dtype=_float) - 1950.0) / 100.0
    murray = jnp.asarray(_MURRAY_B1950_TO_J2000, dtype=_float) + T * jnp.asarray(_MURRAY_RATE, dtype=_float)
    return murray @ precession_matrix_besselian(equinox, 1950.0)


def rotation_icrs_to_galactic() -> Array:
    """Rotation from the ICRS to Galactic coordinates.

    Returns:
        3x3 rotation matrix (ICRS -> Galactic).
    """
    return (
        Rz(180.0 - GALACTIC_NODE_LON, use_degrees=True)
        @ Ry(90.0 - GALACTIC_POLE_DEC, use_degrees=True)
        @ Rz(GALACTIC_POLE_RA, use_degrees=True)
    )


def rotation_galactic_to_icrs() -> Array:
    """Rotation from Galactic coordinates to the ICRS.

    This is the transpose of :func:`rotation_icrs_to_galactic`.
    """
    return rotation_icrs_to_galactic().T


def _normalize(v):
    return v / jnp.linalg.norm(v)


def remove_eterms(u: ArrayLike) -> Array:
    """Remove the elliptic terms of aberration from an FK4 direction.

    Args:
        u: Unit vector in FK4, shape ``(3,)``.

    Returns:
        Unit vector with the E-terms removed.
    """
    u = jnp.asarray(u, dtype=get_dtype())
    a = jnp.asarray(_ETERMS, dtype=get_dtype())
    return _normalize(u - a + jnp.dot(u, a) * u)


def add_eterms(v: ArrayLike) -> Array:
    """Add the elliptic terms of aberration to an FK4 direction.

    Inverse of :func:`remove_eterms`.  Writing the removal as
    ``s v = u - a + (u . a) u`` gives ``u`` parallel to ``s v + a``, which
    is iterated from ``u = v``.

    Args:
        v: Unit vector without E-terms, shape ``(3,)``.

    Returns:
        Unit vector with the E-terms included.
    """
    v = jnp.asarray(v, dtype=get_dtype())
    a = jnp.asarray(_ETERMS, dtype=get_dtype())
    u = v
    for _ in range(_ETERMS_ITERATIONS):
        s = jnp.linalg.norm(u - a + jnp.dot(u, a) * u)
        u = _normalize(s * v + a)
    return u
