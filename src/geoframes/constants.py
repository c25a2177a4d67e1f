"""
The `constants` module defines the mathematical and geodetic constants used by the coordinate transforms.
"""

from jax.numpy import pi as PI

# Mathematical Constants
"""
Constant to convert degrees to radians. Equal to 2pi/360. Units: *rad/deg*
"""
DEG2RAD = 2.0 * PI / 360.0

"""
Constant to convert radians to degrees. Equal to 360/2pi. Units: *deg/rad*
"""
RAD2DEG = 360.0 / (PI * 2.0)

# Earth Constants
"""
Earth's semi-major axis as defined by the WGS84 geodetic system. [m]

References:

1. NIMA Technical Report TR8350.2
"""
WGS84_a = 6378137.0  # WGS-84 semi-major axis

"""
Earth's semi-minor (polar) axis as defined by the WGS84 geodetic system. [m]

References:

1. NIMA Technical Report TR8350.2
"""
WGS84_b = 6356752.314245  # WGS-84 semi-minor axis

"""
Earth's ellipsoidal flattening.  WGS84 Value.

References:

1. NIMA Technical Report TR8350.2
"""
WGS84_f = 1.0 / 298.257223563  # WGS-84 flattening

"""
Earth's mean radius, used for great-circle surface distances. [m]

References:

1. H. Moritz, *Geodetic Reference System 1980*, Journal of Geodesy, 2000
"""
R_EARTH_MEAN = 6371000.0  # [m] Mean Earth radius
