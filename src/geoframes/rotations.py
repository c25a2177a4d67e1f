"""Rotation matrices between ECEF axes and local frames.

Provides the elementary rotation :func:`Rz` about the vertical axis, used
for the heading offset, and the rotations between ECEF axes and the local
East-North-Up (ENU) axes at a geodetic origin.

The ENU frame is a right-handed coordinate system:

- **East** (E): tangent to the ellipsoid, pointing geographic east
- **North** (N): tangent to the ellipsoid, pointing geographic north
- **Up** (U): along the ellipsoid normal, pointing outward
"""

from __future__ import annotations

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike


def Rz(angle: ArrayLike, use_degrees: bool = False) -> Array:
    """Rotation matrix, for a rotation about the z-axis.

    Args:
        angle (float): Counter-clockwise angle of rotation as viewed
            looking back along the positive direction of the rotation axis.
        use_degrees (bool): Interpret ``angle`` in degrees. Default: ``False``

    Returns:
        jnp.ndarray: Rotation matrix.

    References:

        1. O. Montenbruck, and E. Gill, *Satellite Orbits: Models, Methods and Applications*, 2012, p.27.
    """
    if use_degrees:
        angle = jnp.deg2rad(angle)

    c = jnp.cos(angle)
    s = jnp.sin(angle)

    return jnp.array([[ +c,   +s,  0.0],
                      [ -s,   +c,  0.0],
                      [0.0,  0.0,  1.0]])


def rotation_ecef_to_enu(
    latitude: ArrayLike,
    longitude: ArrayLike,
    use_degrees: bool = False,
) -> Array:
    """Compute the rotation matrix from ECEF axes to East-North-Up axes.

    Args:
        latitude: Geodetic latitude of the origin in *rad* (or *deg*).
        longitude: Longitude of the origin in *rad* (or *deg*).
        use_degrees: If ``True``, interpret the angles as degrees.

    Returns:
        3x3 rotation matrix (ECEF -> ENU).

    Examples:
        ```python
        from geoframes.rotations import rotation_ecef_to_enu
        rot = rotation_ecef_to_enu(37.0, -122.0, use_degrees=True)
        ```
    """
    if use_degrees:
        latitude = jnp.deg2rad(latitude)
        longitude = jnp.deg2rad(longitude)

    sin_lon = jnp.sin(longitude)
    cos_lon = jnp.cos(longitude)
    sin_lat = jnp.sin(latitude)
    cos_lat = jnp.cos(latitude)

    # Rows are E, N, U basis vectors expressed in ECEF
    return jnp.array([
        [-sin_lon, cos_lon, 0.0],                             # East
        [-sin_lat * cos_lon, -sin_lat * sin_lon, cos_lat],    # North
        [cos_lat * cos_lon, cos_lat * sin_lon, sin_lat],      # Up
    ])


def rotation_enu_to_ecef(
    latitude: ArrayLike,
    longitude: ArrayLike,
    use_degrees: bool = False,
) -> Array:
    """Compute the rotation matrix from East-North-Up axes to ECEF axes.

    This is the transpose of :func:`rotation_ecef_to_enu`.
    """
    return rotation_ecef_to_enu(latitude, longitude, use_degrees).T
