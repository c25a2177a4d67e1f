"""Reference frame state and coordinate transform engine.

Provides the ``SphericalCoordinates`` class, which anchors a local tangent
frame at a geodetic origin and converts positions and velocities between
four coordinate spaces (see :class:`~geoframes.surfaces.CoordinateType`):

- ``SPHERICAL``: geodetic ``[lat, lon, elev]`` (rad, rad, m)
- ``ECEF``: Earth-Centered Earth-Fixed ``[x, y, z]`` (m)
- ``GLOBAL``: East-North-Up ``[e, n, u]`` (m) centred at the origin
- ``LOCAL2``: ``GLOBAL`` rotated about Up by the heading offset

The spaces form a chain ``SPHERICAL - ECEF - GLOBAL - LOCAL2``.  A transform
walks the edges between its source and destination, so e.g.
``SPHERICAL -> LOCAL2`` passes through ``ECEF`` and ``GLOBAL``.  Positions
pick up the origin translation on the ``ECEF - GLOBAL`` edge; velocities
only ever rotate.

Transforms never raise for bad tags.  An unknown ``CoordinateType`` (or a
``SPHERICAL`` velocity) is logged and the input comes back unchanged.
"""

from __future__ import annotations

import logging

import jax
import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from geoframes.config import get_dtype, get_elevation_eq_tolerance
from geoframes.distance import distance as _distance
from geoframes.geodetic import position_ecef_to_geodetic, position_geodetic_to_ecef
from geoframes.rotations import Rz, rotation_ecef_to_enu
from geoframes.surfaces import (
    WGS84,
    CoordinateType,
    SurfaceType,
    ellipsoid_from_surface,
    surface_type_from_string,
)

logger = logging.getLogger(__name__)

_SPHERICAL = CoordinateType.SPHERICAL
_ECEF = CoordinateType.ECEF
_GLOBAL = CoordinateType.GLOBAL
_LOCAL2 = CoordinateType.LOCAL2

# Transform graph, ordered so that neighbouring entries share an edge
_CHAIN = (_SPHERICAL, _ECEF, _GLOBAL, _LOCAL2)
_CHAIN_INDEX = {coord: i for i, coord in enumerate(_CHAIN)}


class SphericalCoordinates:
    """Geodetic reference frame anchored at a configurable origin.

    Holds the surface preset, the origin's latitude, longitude and elevation,
    and the heading offset of the ``LOCAL2`` frame.  Every setter recomputes
    the cached origin ECEF position and frame rotations, so transforms only
    read state.

    Angles are stored exactly as given (radians).  The surface tag is stored
    verbatim, even if it is not a ``SurfaceType`` member; in that case the
    previously active ellipsoid stays in use.

    This class is registered as a JAX pytree.  The four reference
    parameters and the cached origin and rotations are leaves; the surface
    tag and ellipsoid are auxiliary data.

    Args:
        surface (int): Surface preset. Default: ``SurfaceType.EARTH_WGS84``.
        latitude_reference (float): Origin latitude in *rad*.
        longitude_reference (float): Origin longitude in *rad*.
        elevation_reference (float): Origin elevation above the ellipsoid in *m*.
        heading_offset (float): Rotation of the ``LOCAL2`` axes relative to
            East-North-Up, counter-clockwise about Up, in *rad*.

    Examples:
        ```python
        import math
        from geoframes import CoordinateType, SphericalCoordinates
        sc = SphericalCoordinates(latitude_reference=0.3,
                                  longitude_reference=-1.2,
                                  elevation_reference=354.1,
                                  heading_offset=math.pi / 2)
        ecef = sc.position_transform([0.0, 0.0, 0.0],
                                     CoordinateType.LOCAL2,
                                     CoordinateType.ECEF)
        ```
    """

    def __init__(
        self,
        surface: int = SurfaceType.EARTH_WGS84,
        latitude_reference: float = 0.0,
        longitude_reference: float = 0.0,
        elevation_reference: float = 0.0,
        heading_offset: float = 0.0,
    ) -> None:
        self._ellipsoid = WGS84
        self._latitude_reference = latitude_reference
        self._longitude_reference = longitude_reference
        self._elevation_reference = elevation_reference
        self._heading_offset = heading_offset
        self.set_surface(surface)

    @classmethod
    def _from_internal(cls, aux, children) -> SphericalCoordinates:
        """Rebuild from pytree parts without recomputing the cache."""
        obj = object.__new__(cls)
        obj._surface, obj._ellipsoid = aux
        (
            obj._latitude_reference,
            obj._longitude_reference,
            obj._elevation_reference,
            obj._heading_offset,
            obj._origin,
            obj._rot_ecef_to_global,
            obj._rot_global_to_local,
        ) = children
        return obj

    # Surface registry

    @staticmethod
    def convert(name: str) -> SurfaceType:
        """Convert a preset name to a ``SurfaceType``.

        See :func:`geoframes.surfaces.surface_type_from_string`.
        """
        return surface_type_from_string(name)

    @staticmethod
    def distance(
        lat_a: ArrayLike,
        lon_a: ArrayLike,
        lat_b: ArrayLike,
        lon_b: ArrayLike,
        use_degrees: bool = False,
    ) -> Array:
        """Great-circle distance in *m* on the mean Earth sphere.

        See :func:`geoframes.distance.distance`.
        """
        return _distance(lat_a, lon_a, lat_b, lon_b, use_degrees=use_degrees)

    def distance_between_points(
        self,
        lat_a: ArrayLike,
        lon_a: ArrayLike,
        lat_b: ArrayLike,
        lon_b: ArrayLike,
        use_degrees: bool = False,
    ) -> Array:
        """Great-circle distance in *m* on a sphere of ``surface_radius``."""
        return _distance(
            lat_a, lon_a, lat_b, lon_b,
            use_degrees=use_degrees,
            radius=self._ellipsoid.radius,
        )

    # Properties

    @property
    def surface(self) -> int:
        """Surface tag, exactly as last set."""
        return self._surface

    @surface.setter
    def surface(self, value: int) -> None:
        self.set_surface(value)

    @property
    def latitude_reference(self) -> float:
        """Origin latitude in *rad*."""
        return self._latitude_reference

    @latitude_reference.setter
    def latitude_reference(self, value: float) -> None:
        self.set_latitude_reference(value)

    @property
    def longitude_reference(self) -> float:
        """Origin longitude in *rad*."""
        return self._longitude_reference

    @longitude_reference.setter
    def longitude_reference(self, value: float) -> None:
        self.set_longitude_reference(value)

    @property
    def elevation_reference(self) -> float:
        """Origin elevation above the ellipsoid in *m*."""
        return self._elevation_reference

    @elevation_reference.setter
    def elevation_reference(self, value: float) -> None:
        self.set_elevation_reference(value)

    @property
    def heading_offset(self) -> float:
        """Heading offset of the ``LOCAL2`` frame in *rad*."""
        return self._heading_offset

    @heading_offset.setter
    def heading_offset(self, value: float) -> None:
        self.set_heading_offset(value)

    @property
    def surface_radius(self) -> float:
        """Radius of the sphere used for surface distances, in *m*."""
        return self._ellipsoid.radius

    @property
    def surface_axis_equatorial(self) -> float:
        """Semi-major axis of the active ellipsoid, in *m*."""
        return self._ellipsoid.axis_equatorial

    @property
    def surface_axis_polar(self) -> float:
        """Semi-minor axis of the active ellipsoid, in *m*."""
        return self._ellipsoid.axis_polar

    @property
    def surface_flattening(self) -> float:
        """Flattening of the active ellipsoid."""
        return self._ellipsoid.flattening

    # Setters

    def set_surface(self, surface: int) -> None:
        """Set the surface preset.

        The value is stored as given.  If it is not a known preset an error
        is logged and the previously active ellipsoid remains in effect.

        Args:
            surface (int): ``SurfaceType`` member or raw integer tag.
        """
        self._surface = surface
        ellipsoid = ellipsoid_from_surface(surface)
        if ellipsoid is None:
            logger.error("Unknown surface type[%s]", surface)
        else:
            self._ellipsoid = ellipsoid
        self._update_transformation_matrix()

    def set_latitude_reference(self, angle: float) -> None:
        """Set the origin latitude in *rad*."""
        self._latitude_reference = angle
        self._update_transformation_matrix()

    def set_longitude_reference(self, angle: float) -> None:
        """Set the origin longitude in *rad*."""
        self._longitude_reference = angle
        self._update_transformation_matrix()

    def set_elevation_reference(self, elevation: float) -> None:
        """Set the origin elevation above the ellipsoid in *m*."""
        self._elevation_reference = elevation
        self._update_transformation_matrix()

    def set_heading_offset(self, angle: float) -> None:
        """Set the heading offset of the ``LOCAL2`` frame in *rad*."""
        self._heading_offset = angle
        self._update_transformation_matrix()

    def _update_transformation_matrix(self) -> None:
        _float = get_dtype()
        lat = self._latitude_reference
        lon = self._longitude_reference

        self._rot_ecef_to_global = rotation_ecef_to_enu(lat, lon).astype(_float)
        self._rot_global_to_local = Rz(self._heading_offset).astype(_float)
        self._origin = position_geodetic_to_ecef(
            jnp.array([lat, lon, self._elevation_reference]),
            self._ellipsoid,
        )

    # Graph edges

    def _position_spherical_to_ecef(self, x: Array) -> Array:
        return position_geodetic_to_ecef(x, self._ellipsoid)

    def _position_ecef_to_spherical(self, x: Array) -> Array:
        return position_ecef_to_geodetic(x, self._ellipsoid)

    def _position_ecef_to_global(self, x: Array) -> Array:
        return self._rot_ecef_to_global @ (x - self._origin)

    def _position_global_to_ecef(self, x: Array) -> Array:
        return self._origin + self._rot_ecef_to_global.T @ x

    def _rotate_ecef_to_global(self, x: Array) -> Array:
        return self._rot_ecef_to_global @ x

    def _rotate_global_to_ecef(self, x: Array) -> Array:
        return self._rot_ecef_to_global.T @ x

    def _rotate_global_to_local(self, x: Array) -> Array:
        return self._rot_global_to_local @ x

    def _rotate_local_to_global(self, x: Array) -> Array:
        return self._rot_global_to_local.T @ x

    _POSITION_EDGES = {
        (_SPHERICAL, _ECEF): _position_spherical_to_ecef,
        (_ECEF, _SPHERICAL): _position_ecef_to_spherical,
        (_ECEF, _GLOBAL): _position_ecef_to_global,
        (_GLOBAL, _ECEF): _position_global_to_ecef,
        (_GLOBAL, _LOCAL2): _rotate_global_to_local,
        (_LOCAL2, _GLOBAL): _rotate_local_to_global,
    }

    _VELOCITY_EDGES = {
        (_ECEF, _GLOBAL): _rotate_ecef_to_global,
        (_GLOBAL, _ECEF): _rotate_global_to_ecef,
        (_GLOBAL, _LOCAL2): _rotate_global_to_local,
        (_LOCAL2, _GLOBAL): _rotate_local_to_global,
    }

    @staticmethod
    def _known_types(in_type: int, out_type: int) -> bool:
        for coord in (in_type, out_type):
            if coord not in _CHAIN_INDEX:
                logger.warning("Unknown coordinate type[%s]", coord)
                return False
        return True

    def _walk(self, x: Array, in_type: int, out_type: int, edges) -> Array:
        """Apply the chain of edges leading from ``in_type`` to ``out_type``."""
        start = _CHAIN_INDEX[in_type]
        stop = _CHAIN_INDEX[out_type]
        step = 1 if stop > start else -1
        for i in range(start, stop, step):
            x = edges[(_CHAIN[i], _CHAIN[i + step])](self, x)
        return x

    # Transforms

    def position_transform(
        self,
        pos: ArrayLike,
        in_type: int,
        out_type: int,
    ) -> Array:
        """Convert a position between coordinate spaces.

        Args:
            pos: Position in the ``in_type`` space.  ``SPHERICAL`` positions
                are ``[lat, lon, elev]`` in *rad*, *rad*, *m*.
            in_type (int): Source ``CoordinateType``.
            out_type (int): Destination ``CoordinateType``.

        Returns:
            jax.Array: Position in the ``out_type`` space, or ``pos``
                unchanged if either tag is not a ``CoordinateType``.
        """
        if not self._known_types(in_type, out_type):
            return pos
        pos = jnp.asarray(pos, dtype=get_dtype())
        return self._walk(pos, in_type, out_type, self._POSITION_EDGES)

    def velocity_transform(
        self,
        vel: ArrayLike,
        in_type: int,
        out_type: int,
    ) -> Array:
        """Convert a velocity between coordinate spaces.

        Velocities are translation invariant, so only the frame rotations
        apply.  ``SPHERICAL`` velocities are not supported.

        Args:
            vel: Velocity in the ``in_type`` space, in *m/s*.
            in_type (int): Source ``CoordinateType``.
            out_type (int): Destination ``CoordinateType``.

        Returns:
            jax.Array: Velocity in the ``out_type`` space, or ``vel``
                unchanged if either tag is ``SPHERICAL`` or not a
                ``CoordinateType``.
        """
        if in_type == _SPHERICAL or out_type == _SPHERICAL:
            logger.error("Spherical velocities are not supported")
            return vel
        if not self._known_types(in_type, out_type):
            return vel
        vel = jnp.asarray(vel, dtype=get_dtype())
        return self._walk(vel, in_type, out_type, self._VELOCITY_EDGES)

    def spherical_from_local_position(self, xyz: ArrayLike) -> Array:
        """Convert a ``LOCAL2`` position to geodetic coordinates.

        Args:
            xyz: Local position in *m*.

        Returns:
            jax.Array: ``[lat, lon, elev]`` in *deg*, *deg*, *m*.
        """
        sph = self.position_transform(xyz, _LOCAL2, _SPHERICAL)
        return sph.at[:2].set(jnp.rad2deg(sph[:2]))

    def local_from_spherical_position(self, sph: ArrayLike) -> Array:
        """Convert geodetic coordinates to a ``LOCAL2`` position.

        Args:
            sph: ``[lat, lon, elev]`` in *deg*, *deg*, *m*.

        Returns:
            jax.Array: Local position in *m*.
        """
        sph = jnp.asarray(sph, dtype=get_dtype())
        sph = sph.at[:2].set(jnp.deg2rad(sph[:2]))
        return self.position_transform(sph, _SPHERICAL, _LOCAL2)

    def global_from_local_velocity(self, xyz: ArrayLike) -> Array:
        """Rotate a ``LOCAL2`` velocity into East-North-Up (``GLOBAL``)."""
        return self.velocity_transform(xyz, _LOCAL2, _GLOBAL)

    def local_from_global_velocity(self, enu: ArrayLike) -> Array:
        """Rotate an East-North-Up (``GLOBAL``) velocity into ``LOCAL2``."""
        return self.velocity_transform(enu, _GLOBAL, _LOCAL2)

    # Comparison

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SphericalCoordinates):
            return NotImplemented
        tol = get_elevation_eq_tolerance()
        return bool(
            self._surface == other._surface
            and self._latitude_reference == other._latitude_reference
            and self._longitude_reference == other._longitude_reference
            and self._heading_offset == other._heading_offset
            and abs(self._elevation_reference - other._elevation_reference) <= tol
        )

    def __ne__(self, other: object) -> bool:
        if not isinstance(other, SphericalCoordinates):
            return NotImplemented
        return not self.__eq__(other)

    def __repr__(self) -> str:
        surface = self._surface
        if ellipsoid_from_surface(surface) is not None:
            surface = SurfaceType(surface).name
        return (
            f"SphericalCoordinates(surface={surface}, "
            f"latitude_reference={float(self._latitude_reference)}, "
            f"longitude_reference={float(self._longitude_reference)}, "
            f"elevation_reference={float(self._elevation_reference)}, "
            f"heading_offset={float(self._heading_offset)})"
        )


jax.tree_util.register_pytree_node(
    SphericalCoordinates,
    lambda sc: (
        (
            sc._latitude_reference,
            sc._longitude_reference,
            sc._elevation_reference,
            sc._heading_offset,
            sc._origin,
            sc._rot_ecef_to_global,
            sc._rot_global_to_local,
        ),
        (sc._surface, sc._ellipsoid),
    ),
    lambda aux, children: SphericalCoordinates._from_internal(aux, children),
)
