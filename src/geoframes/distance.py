"""Great-circle surface distance.

Haversine distance between two geodetic points on a sphere.  The result
depends only on the two points, not on any reference frame.
"""

from __future__ import annotations

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from geoframes.config import get_dtype
from geoframes.constants import R_EARTH_MEAN


def distance(
    lat_a: ArrayLike,
    lon_a: ArrayLike,
    lat_b: ArrayLike,
    lon_b: ArrayLike,
    use_degrees: bool = False,
    radius: float = R_EARTH_MEAN,
) -> Array:
    """Compute the great-circle distance between two points.

    .. math::

        h = \\sin^2\\frac{\\Delta\\phi}{2}
            + \\cos\\phi_A \\cos\\phi_B \\sin^2\\frac{\\Delta\\lambda}{2},
        \\qquad d = 2 R \\operatorname{atan2}(\\sqrt{h}, \\sqrt{1 - h})

    Args:
        lat_a: Latitude of point A in *rad* (or *deg*).
        lon_a: Longitude of point A in *rad* (or *deg*).
        lat_b: Latitude of point B in *rad* (or *deg*).
        lon_b: Longitude of point B in *rad* (or *deg*).
        use_degrees: If ``True``, interpret the angles as degrees.
        radius: Sphere radius in *m*. Default: mean Earth radius.

    Returns:
        jax.Array: Surface distance in *m*.

    Examples:
        ```python
        from geoframes.distance import distance
        d = distance(46.250944, -122.249972, 46.124953, -122.251683,
                     use_degrees=True)
        # d ~ 14002 m
        ```
    """
    _float = get_dtype()
    lat_a = jnp.asarray(lat_a, dtype=_float)
    lon_a = jnp.asarray(lon_a, dtype=_float)
    lat_b = jnp.asarray(lat_b, dtype=_float)
    lon_b = jnp.asarray(lon_b, dtype=_float)

    if use_degrees:
        lat_a = jnp.deg2rad(lat_a)
        lon_a = jnp.deg2rad(lon_a)
        lat_b = jnp.deg2rad(lat_b)
        lon_b = jnp.deg2rad(lon_b)

    sin_dlat = jnp.sin(0.5 * (lat_b - lat_a))
    sin_dlon = jnp.sin(0.5 * (lon_b - lon_a))

    h = sin_dlat * sin_dlat + jnp.cos(lat_a) * jnp.cos(lat_b) * sin_dlon * sin_dlon
    # Rounding can push h just past 1 for antipodal points
    h = jnp.clip(h, 0.0, 1.0)

    return 2.0 * radius * jnp.arctan2(jnp.sqrt(h), jnp.sqrt(1.0 - h))
