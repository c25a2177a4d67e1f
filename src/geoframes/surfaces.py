"""Surface and coordinate-space registry.

Defines the ``SurfaceType`` presets for the reference ellipsoid, the
``CoordinateType`` tags naming the four supported coordinate spaces, and the
``Ellipsoid`` record holding the geometric constants of a preset.

Both enums are ``IntEnum`` so that tags stored or passed around as plain
integers compare equal to their members.  Integers that are not members are
still accepted everywhere a tag is expected; see
:class:`~geoframes.spherical_coordinates.SphericalCoordinates` for how they
are handled.
"""

from __future__ import annotations

import enum
import logging
import math
from typing import NamedTuple

from geoframes.constants import R_EARTH_MEAN, WGS84_a, WGS84_b

logger = logging.getLogger(__name__)


class SurfaceType(enum.IntEnum):
    """Reference ellipsoid presets.

    Attributes:
        EARTH_WGS84: World Geodetic System 1984 ellipsoid.
    """

    EARTH_WGS84 = 1


class CoordinateType(enum.IntEnum):
    """Coordinate spaces understood by the transform engine.

    Attributes:
        SPHERICAL: Geodetic ``[latitude, longitude, elevation]``.  Angles in
            radians, elevation in metres above the ellipsoid.
        ECEF: Earth-Centered Earth-Fixed Cartesian ``[x, y, z]`` in metres.
        GLOBAL: East-North-Up tangent frame centred at the reference origin.
        LOCAL2: ``GLOBAL`` rotated about the vertical by the heading offset.
    """

    SPHERICAL = 1
    ECEF = 2
    GLOBAL = 3
    LOCAL2 = 4


class Ellipsoid(NamedTuple):
    """Geometric constants of a reference ellipsoid.

    Attributes:
        axis_equatorial: Semi-major axis *a*. Units: *m*
        axis_polar: Semi-minor axis *b*. Units: *m*
        radius: Radius of the sphere used for great-circle distances. Units: *m*
    """

    axis_equatorial: float
    axis_polar: float
    radius: float

    @property
    def flattening(self) -> float:
        """Flattening ``(a - b) / a``."""
        return (self.axis_equatorial - self.axis_polar) / self.axis_equatorial

    @property
    def eccentricity_sq(self) -> float:
        """First eccentricity squared ``(a^2 - b^2) / a^2``."""
        a2 = self.axis_equatorial * self.axis_equatorial
        return (a2 - self.axis_polar * self.axis_polar) / a2

    @property
    def eccentricity(self) -> float:
        """First eccentricity."""
        return math.sqrt(self.eccentricity_sq)

    @property
    def second_eccentricity(self) -> float:
        """Second eccentricity ``sqrt((a^2 - b^2) / b^2)``."""
        a2 = self.axis_equatorial * self.axis_equatorial
        b2 = self.axis_polar * self.axis_polar
        return math.sqrt((a2 - b2) / b2)


WGS84 = Ellipsoid(
    axis_equatorial=WGS84_a,
    axis_polar=WGS84_b,
    radius=R_EARTH_MEAN,
)

_ELLIPSOIDS = {
    SurfaceType.EARTH_WGS84: WGS84,
}


def ellipsoid_from_surface(surface: int) -> Ellipsoid | None:
    """Look up the ellipsoid constants for a surface preset.

    Args:
        surface (int): A ``SurfaceType`` member or raw integer tag.

    Returns:
        Ellipsoid | None: The preset's constants, or ``None`` if *surface*
            is not a known preset.
    """
    return _ELLIPSOIDS.get(surface)


def surface_type_from_string(name: str) -> SurfaceType:
    """Convert a preset name to a ``SurfaceType``.

    Matching is exact and case-sensitive against the member names.  Unknown
    names (including the empty string) fall back to ``EARTH_WGS84``.

    Args:
        name (str): Preset name, e.g. ``"EARTH_WGS84"``.

    Returns:
        SurfaceType: The matching preset, or ``EARTH_WGS84``.

    Examples:
        ```python
        from geoframes.surfaces import surface_type_from_string
        surface_type_from_string("EARTH_WGS84")  # SurfaceType.EARTH_WGS84
        ```
    """
    surface = SurfaceType.__members__.get(name)
    if surface is None:
        logger.error(
            "SurfaceType string %r not recognized, EARTH_WGS84 returned by default",
            name,
        )
        return SurfaceType.EARTH_WGS84
    return surface
