"""
geoframes converts positions and velocities between geodetic, Earth-fixed and local tangent-plane frames, implemented in JAX.
"""

from .constants import (
    DEG2RAD,
    RAD2DEG,
    WGS84_a,
    WGS84_b,
    WGS84_f,
    R_EARTH_MEAN,
)

from .config import set_dtype, get_dtype

from .surfaces import (
    SurfaceType,
    CoordinateType,
    Ellipsoid,
    WGS84,
    ellipsoid_from_surface,
    surface_type_from_string,
)

from .geodetic import (
    position_geodetic_to_ecef,
    position_ecef_to_geodetic,
)

from .rotations import (
    Rz,
    rotation_ecef_to_enu,
    rotation_enu_to_ecef,
)

from .distance import distance

from .spherical_coordinates import SphericalCoordinates

__all__ = [
    # Constants
    "DEG2RAD",
    "RAD2DEG",
    "WGS84_a",
    "WGS84_b",
    "WGS84_f",
    "R_EARTH_MEAN",
    # Config
    "set_dtype",
    "get_dtype",
    # Surfaces
    "SurfaceType",
    "CoordinateType",
    "Ellipsoid",
    "WGS84",
    "ellipsoid_from_surface",
    "surface_type_from_string",
    # Geodetic
    "position_geodetic_to_ecef",
    "position_ecef_to_geodetic",
    # Rotations
    "Rz",
    "rotation_ecef_to_enu",
    "rotation_enu_to_ecef",
    # Distance
    "distance",
    # Reference frame
    "SphericalCoordinates",
]
