"""JAX translations of IAU SOFA routines for precession, nutation and sidereal time.

Implements the IAU 2006 Fukushima-Williams bias-precession angles, the IAU
1976 equinox-to-equinox precession used by FK5, the ICRS frame bias, and a
truncated IAU 1980 nutation series (the 18 largest terms).

IAU 1980 nutation is not the model the IAU 2006 precession was fitted with.
Combined with it, the bias-precession-nutation matrix from :func:`pnm06t`
differs from the IAU 2006/2000A matrix (SOFA ``pnm06a``) by about 3.6 mas
in the current era.  Most of that comes from the truncation: the omitted
nutation terms are each below 5 mas, and their sum is bounded by about
62 mas in longitude.

Uses routines and computations derived from software provided by SOFA
under license to the user. Does not itself constitute software provided
by and/or endorsed by SOFA.

All functions respect :func:`~coordconv.config.get_dtype` for float precision.
"""

from __future__ import annotations

import jax.numpy as jnp
from jax import Array

from coordconv.config import get_dtype
from coordconv.rotations import Rx, Ry, Rz

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

DJ00: float = 2451545.0
"""Julian Date of J2000.0."""

DJC: float = 36525.0
"""Days per Julian century."""

DAS2R: float = 4.848136811095359935899141e-6
"""Arcseconds to radians."""

D2PI: float = 6.283185307179586476925287
"""2*pi."""

TURNAS: float = 1296000.0
"""Arcseconds in a full circle."""

MJD_ZERO: float = 2400000.5
"""Julian Date of MJD zero-point."""

# Units of 0.1 milliarcsecond to radians
_U2R: float = DAS2R / 1e4

# Obliquity at J2000.0 (IAU 1980), used by the frame bias
_EPS0: float = 84381.448 * DAS2R


# ---------------------------------------------------------------------------
# Fundamental arguments (IERS Conventions 2003)
# ---------------------------------------------------------------------------


def fal03(t: Array) -> Array:
    """Mean anomaly of the Moon (IERS 2003).

    Args:
        t: TDB Julian centuries since J2000.0.

    Returns:
        l in radians.
    """
    return (
        jnp.fmod(
            485868.249036
            + t * (1717915923.2178 + t * (31.8792 + t * (0.051635 + t * (-0.00024470)))),
            TURNAS,
        )
        * DAS2R
    )


def falp03(t: Array) -> Array:
    """Mean anomaly of the Sun (IERS 2003).

    Args:
        t: TDB Julian centuries since J2000.0.

    Returns:
        l' in radians.
    """
    return (
        jnp.fmod(
            1287104.793048
            + t * (129596581.0481 + t * (-0.5532 + t * (0.000136 + t * (-0.00001149)))),
            TURNAS,
        )
        * DAS2R
    )


def faf03(t: Array) -> Array:
    """Mean argument of the latitude of the Moon (IERS 2003).

    Args:
        t: TDB Julian centuries since J2000.0.

    Returns:
        F in radians.
    """
    return (
        jnp.fmod(
            335779.526232
            + t * (1739527262.8478 + t * (-12.7512 + t * (-0.001037 + t * (0.00000417)))),
            TURNAS,
        )
        * DAS2R
    )


def fad03(t: Array) -> Array:
    """Mean elongation of the Moon from the Sun (IERS 2003).

    Args:
        t: TDB Julian centuries since J2000.0.

    Returns:
        D in radians.
    """
    return (
        jnp.fmod(
            1072260.703692
            + t * (1602961601.2090 + t * (-6.3706 + t * (0.006593 + t * (-0.00003169)))),
            TURNAS,
        )
        * DAS2R
    )


def faom03(t: Array) -> Array:
    """Mean longitude of the Moon's ascending node (IERS 2003).

    Args:
        t: TDB Julian centuries since J2000.0.

    Returns:
        Omega in radians.
    """
    return (
        jnp.fmod(
            450160.398036 + t * (-6962890.5431 + t * (7.4722 + t * (0.007702 + t * (-0.00005939)))),
            TURNAS,
        )
        * DAS2R
    )


# ---------------------------------------------------------------------------
# Mean obliquity
# ---------------------------------------------------------------------------


def obl06(date1: Array, date2: Array) -> Array:
    """Mean obliquity of the ecliptic, IAU 2006 precession.

    Args:
        date1: TT as 2-part Julian Date (part 1).
        date2: TT as 2-part Julian Date (part 2).

    Returns:
        Obliquity of the ecliptic in radians.
    """
    t = ((date1 - DJ00) + date2) / DJC
    eps0 = 84381.406 + t * (
        -46.836769 + t * (-0.0001831 + t * (0.00200340 + t * (-0.000000576 + t * (-0.0000000434))))
    )
    return eps0 * DAS2R


# ---------------------------------------------------------------------------
# Precession
# ---------------------------------------------------------------------------


def pfw06(date1: Array, date2: Array) -> tuple[Array, Array, Array, Array]:
    """Precession angles, IAU 2006, Fukushima-Williams 4-angle formulation.

    The angles include the ICRS frame bias.

    Args:
        date1: TT as 2-part Julian Date (part 1).
        date2: TT as 2-part Julian Date (part 2).

    Returns:
        Tuple of (gamb, phib, psib, epsa) in radians.
    """
    t = ((date1 - DJ00) + date2) / DJC

    gamb = (
        -0.052928
        + t
        * (
            10.556378
            + t * (0.4932044 + t * (-0.00031238 + t * (-0.000002788 + t * (0.0000000260))))
        )
    ) * DAS2R

    phib = (
        84381.412819
        + t
        * (
            -46.811016
            + t * (0.0511268 + t * (0.00053289 + t * (-0.000000440 + t * (-0.0000000176))))
        )
    ) * DAS2R

    psib = (
        -0.041775
        + t
        * (
            5038.481484
            + t * (1.5584175 + t * (-0.00018522 + t * (-0.000026452 + t * (-0.0000000148))))
        )
    ) * DAS2R

    epsa = obl06(date1, date2)

    return gamb, phib, psib, epsa


def prec76(date01: Array, date02: Array, date11: Array, date12: Array) -> tuple[Array, Array, Array]:
    """IAU 1976 precession angles between two equinoxes (Lieske et al. 1977).

    The precession matrix from the mean equator and equinox of the first
    date to that of the second is ``Rz(-z) @ Ry(theta) @ Rz(-zeta)``.

    Args:
        date01: TDB starting date as 2-part Julian Date (part 1).
        date02: TDB starting date as 2-part Julian Date (part 2).
        date11: TDB ending date as 2-part Julian Date (part 1).
        date12: TDB ending date as 2-part Julian Date (part 2).

    Returns:
        Tuple of (zeta, z, theta) in radians.
    """
    t0 = ((date01 - DJ00) + date02) / DJC
    t = ((date11 - date01) + (date12 - date02)) / DJC
    tas2r = t * DAS2R
    w = 2306.2181 + (1.39656 - 0.000139 * t0) * t0

    zeta = (w + ((0.30188 - 0.000344 * t0) + 0.017998 * t) * t) * tas2r
    z = (w + ((1.09468 + 0.000066 * t0) + 0.018203 * t) * t) * tas2r
    theta = (
        (2004.3109 + (-0.85330 - 0.000217 * t0) * t0)
        + ((-0.42665 - 0.000217 * t0) - 0.041833 * t) * t
    ) * tas2r

    return zeta, z, theta


def pmat76(date01: Array, date02: Array, date11: Array, date12: Array) -> Array:
    """IAU 1976 precession matrix between two equinoxes.

    Args:
        date01: Starting date as 2-part Julian Date (part 1).
        date02: Starting date as 2-part Julian Date (part 2).
        date11: Ending date as 2-part Julian Date (part 1).
        date12: Ending date as 2-part Julian Date (part 2).

    Returns:
        3x3 matrix (mean of first date -> mean of second date).
    """
    zeta, z, theta = prec76(date01, date02, date11, date12)
    return Rz(-z) @ Ry(theta) @ Rz(-zeta)


# ---------------------------------------------------------------------------
# Frame bias
# ---------------------------------------------------------------------------


def bi00() -> tuple[float, float, float]:
    """Frame bias components of the IAU 2000 precession-nutation models.

    Returns:
        Tuple of (dpsibi, depsbi, dra) in radians: longitude and obliquity
        corrections and the ICRS RA of the J2000.0 mean equinox.
    """
    dpsibi = -0.041775 * DAS2R
    depsbi = -0.0068192 * DAS2R
    dra = -0.0146 * DAS2R
    return dpsibi, depsbi, dra


def bias_matrix() -> Array:
    """Frame bias matrix (ICRS -> mean equator and equinox of J2000.0).

    Returns:
        3x3 rotation matrix.
    """
    dpsibi, depsbi, dra = bi00()
    return Rx(-depsbi) @ Ry(dpsibi * jnp.sin(_EPS0)) @ Rz(dra)


# ---------------------------------------------------------------------------
# Nutation
# ---------------------------------------------------------------------------

# Largest terms of the IAU 1980 nutation series.
# Columns: multipliers of (l, l', F, D, Omega), then
# longitude sin coefficient and its rate, obliquity cos coefficient and its
# rate, in units of 0.1 mas (and 0.1 mas per century).
_NUT80_TERMS = (
    (0, 0, 0, 0, 1, -171996.0, -174.2, 92025.0, 8.9),
    (0, 0, 2, -2, 2, -13187.0, -1.6, 5736.0, -3.1),
    (0, 0, 2, 0, 2, -2274.0, -0.2, 977.0, -0.5),
    (0, 0, 0, 0, 2, 2062.0, 0.2, -895.0, 0.5),
    (0, 1, 0, 0, 0, 1426.0, -3.4, 54.0, -0.1),
    (1, 0, 0, 0, 0, 712.0, 0.1, -7.0, 0.0),
    (0, 1, 2, -2, 2, -517.0, 1.2, 224.0, -0.6),
    (0, 0, 2, 0, 1, -386.0, -0.4, 200.0, 0.0),
    (1, 0, 2, 0, 2, -301.0, 0.0, 129.0, -0.1),
    (0, -1, 2, -2, 2, 217.0, -0.5, -95.0, 0.3),
    (1, 0, 0, -2, 0, -158.0, 0.0, 0.0, 0.0),
    (0, 0, 2, -2, 1, 129.0, 0.1, -70.0, 0.0),
    (-1, 0, 2, 0, 2, 123.0, 0.0, -53.0, 0.0),
    (0, 0, 0, 2, 0, 63.0, 0.0, 0.0, 0.0),
    (1, 0, 0, 0, 1, 63.0, 0.1, -33.0, 0.0),
    (-1, 0, 2, 2, 2, -59.0, 0.0, 26.0, 0.0),
    (-1, 0, 0, 0, 1, -58.0, -0.1, 32.0, 0.0),
    (1, 0, 2, 0, 1, -51.0, 0.0, 27.0, 0.0),
)


def nut80t(date1: Array, date2: Array) -> tuple[Array, Array]:
    """Nutation, IAU 1980 model truncated to its 18 largest terms.

    Vectorized over the term table with a single matmul, like the full
    series evaluators.

    Args:
        date1: TT as 2-part Julian Date (part 1).
        date2: TT as 2-part Julian Date (part 2).

    Returns:
        Tuple of (dpsi, deps) nutation in longitude and obliquity [radians].

    References:

        1. P. K. Seidelmann, *Explanatory Supplement to the Astronomical
           Almanac*, 1992, Table 3.222.1.
    """
    dtype = get_dtype()
    t = jnp.asarray(((date1 - DJ00) + date2) / DJC, dtype=dtype)

    delaunay = jnp.array([fal03(t), falp03(t), faf03(t), fad03(t), faom03(t)])

    terms = jnp.array(_NUT80_TERMS, dtype=dtype)
    nfa = terms[:, :5]
    sp = terms[:, 5]
    spt = terms[:, 6]
    ce = terms[:, 7]
    cet = terms[:, 8]

    args = nfa @ delaunay
    dpsi = jnp.sum((sp + spt * t) * jnp.sin(args)) * _U2R
    deps = jnp.sum((ce + cet * t) * jnp.cos(args)) * _U2R

    return dpsi, deps


# ---------------------------------------------------------------------------
# Fukushima-Williams angles to rotation matrix
# ---------------------------------------------------------------------------


def fw2m(gamb: Array, phib: Array, psi: Array, eps: Array) -> Array:
    """Fukushima-Williams angles to rotation matrix.

    ``NxPxB = R_1(-eps) . R_3(-psi) . R_1(phib) . R_3(gamb)``

    Args:
        gamb: F-W angle gamma_bar (radians).
        phib: F-W angle phi_bar (radians).
        psi: F-W angle psi (radians).
        eps: F-W angle epsilon (radians).

    Returns:
        3x3 rotation matrix (NPB matrix).
    """
    return Rx(-eps) @ Rz(-psi) @ Rx(phib) @ Rz(gamb)


def pnm06t(date1: Array, date2: Array) -> Array:
    """Form the bias-precession-nutation matrix (ICRS -> true of date).

    IAU 2006 Fukushima-Williams precession with the truncated nutation of
    :func:`nut80t` added to the psi and epsilon angles.

    Args:
        date1: TT as 2-part Julian Date (part 1).
        date2: TT as 2-part Julian Date (part 2).

    Returns:
        3x3 bias-precession-nutation matrix.
    """
    gamb, phib, psib, epsa = pfw06(date1, date2)
    dpsi, deps = nut80t(date1, date2)
    return fw2m(gamb, phib, psib + dpsi, epsa + deps)


# ---------------------------------------------------------------------------
# Earth rotation and sidereal time
# ---------------------------------------------------------------------------


def era00(dj1: Array, dj2: Array) -> Array:
    """Earth Rotation Angle (IAU 2000 model).

    Args:
        dj1: UT1 as 2-part Julian Date (part 1).
        dj2: UT1 as 2-part Julian Date (part 2).

    Returns:
        Earth Rotation Angle in radians (0 to 2*pi).
    """
    t = dj1 + dj2 - DJ00
    f = jnp.fmod(dj1, 1.0) + jnp.fmod(dj2, 1.0)
    return jnp.mod(f + 0.7790572732640 + 0.00273781191135448 * t, 1.0) * D2PI


def gmst06(uta: Array, utb: Array, tta: Array, ttb: Array) -> Array:
    """Greenwich mean sidereal time, consistent with IAU 2006 precession.

    Args:
        uta: UT1 as 2-part Julian Date (part 1).
        utb: UT1 as 2-part Julian Date (part 2).
        tta: TT as 2-part Julian Date (part 1).
        ttb: TT as 2-part Julian Date (part 2).

    Returns:
        GMST in radians (0 to 2*pi).
    """
    t = ((tta - DJ00) + ttb) / DJC
    gmst = era00(uta, utb) + (
        0.014506
        + t * (4612.156534 + t * (1.3915817 + t * (-0.00000044 + t * (-0.000029956 + t * (-0.0000000368)))))
    ) * DAS2R
    return jnp.mod(gmst, D2PI)


def gst06t(uta: Array, utb: Array, tta: Array, ttb: Array) -> Array:
    """Greenwich apparent sidereal time.

    GMST plus the equation of the equinoxes ``dpsi * cos(epsa)`` evaluated
    with the truncated nutation series.

    Args:
        uta: UT1 as 2-part Julian Date (part 1).
        utb: UT1 as 2-part Julian Date (part 2).
        tta: TT as 2-part Julian Date (part 1).
        ttb: TT as 2-part Julian Date (part 2).

    Returns:
        GAST in radians (0 to 2*pi).
    """
    dpsi, _ = nut80t(tta, ttb)
    eqeq = dpsi * jnp.cos(obl06(tta, ttb))
    return jnp.mod(gmst06(uta, utb, tta, ttb) + eqeq, D2PI)
