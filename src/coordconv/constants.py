"""
The `constants` module defines the mathematical, physical and numeric constants used by coordconv.
"""

import jax.numpy as jnp
from jax.numpy import pi as PI

# Numeric Constants
"""
Machine epsilon of an IEEE double. Exposed so callers without direct access
to IEEE limits have a portable sentinel.
"""
DOUBLE_EPSILON = float(jnp.finfo(jnp.float64).eps)

"""
Largest finite IEEE double.
"""
DOUBLE_MAX = float(jnp.finfo(jnp.float64).max)

"""
Smallest positive normalized IEEE double.
"""
DOUBLE_MIN = float(jnp.finfo(jnp.float64).tiny)

"""
Quiet NaN.
"""
DOUBLE_NAN = float("nan")

# Mathematical Constants
"""
Constant to convert degrees to radians. Equal to 2pi/360. Units: *rad/deg*
"""
DEG2RAD = 2.0 * PI / 360.0

"""
Constant to convert radians to degrees. Equal to 360/2pi. Units: *deg/rad*
"""
RAD2DEG = 360.0 / (PI * 2.0)

"""
Constant to convert arcseconds to radians. Equal to 2pi/(360*3600). Units: *rad/as*
"""
AS2RAD = 2.0 * PI / 360.0 / 3600.0

"""
Constant to convert radians to arcseconds. Equal to (360*3600)/(2pi). Units: *as/rad*
"""
RAD2AS = 360.0 * 3600.0 / PI / 2.0

# Time Constants

"""
Offset between Julian Date and Modified Julian Date. Units: *days*
"""
JD_MJD_OFFSET = 2400000.5

"""
Modified Julian Date of the J2000.0 epoch (2000-01-01 12:00:00 TT). Units: *days*
"""
MJD2000 = 51544.5

"""
Seconds per day. Units: *s*
"""
SEC_PER_DAY = 86400.0

"""
Days per Julian year. Units: *days*
"""
DAYS_PER_YEAR = 365.25

"""
Seconds per Julian year. Units: *s*
"""
SEC_PER_YEAR = SEC_PER_DAY * DAYS_PER_YEAR

"""
TT - TAI offset (constant by definition). Units: *s*
"""
TT_TAI = 32.184

"""
The J2000.0 epoch expressed as TAI Modified Julian Date in seconds. Units: *s*
"""
TAI_J2000 = MJD2000 * SEC_PER_DAY - TT_TAI

# Physical Constants
"""
Speed of light in vacuum. Units: *m/s*

References:

1. D. Vallado, *Fundamentals of Astrodynamics and Applications (4th Ed.)*, 2010
"""
C_LIGHT = 299792458.0

"""
Astronomical Unit. TDB-compatible value. Units: *m*

References:

1. P. Gérard and B. Luzum, *IERS Technical Note 36*, 2010
"""
AU = 1.49597870700e11

"""
Kilometres per astronomical unit. Units: *km/AU*
"""
KM_PER_AU = AU / 1000.0

"""
Speed of light. Units: *AU/Julian year*
"""
C_AU_PER_YEAR = C_LIGHT * SEC_PER_YEAR / AU

"""
Gravitational constant of the Sun. Units: *m^3/s^2*

References:

1. O. Montenbruck, and E. Gill, *Satellite Orbits: Models, Methods and
Applications*, 2012.
"""
GM_SUN = 132712440041.939400 * 1e9

"""
Schwarzschild radius of the Sun (2 GM / c^2). Units: *AU*
"""
SUN_SCHWARZSCHILD_AU = 2.0 * GM_SUN / (C_LIGHT * C_LIGHT) / AU

# Earth Constants
"""
Earth's semi-major axis as defined by the WGS84 geodetic system. Units: *m*

References:

1. NIMA Technical Report TR8350.2
"""
WGS84_a = 6378137.0

"""
Earth's ellipsoidal flattening.  WGS84 Value.

References:

1. NIMA Technical Report TR8350.2
"""
WGS84_f = 1.0 / 298.257223563

"""
Earth axial rotation rate. Units: *rad/s*

References:

1. D. Vallado, *Fundamentals of Astrodynamics and Applications (4th Ed.)*, p. 222, 2010
"""
OMEGA_EARTH = 7.292115146706979e-5

# Astrometric Constants
"""
Smallest parallax treated as a defined distance; anything smaller means the
object is at infinity. Units: *arcsec*
"""
MIN_PARALLAX = 1e-7
