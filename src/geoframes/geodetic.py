"""Geodetic (ellipsoidal) coordinate transformations.

Converts between geodetic coordinates ``[latitude, longitude, elevation]``
and Earth-Centered Earth-Fixed (ECEF) Cartesian coordinates ``[x, y, z]``
on a reference :class:`~geoframes.surfaces.Ellipsoid` (WGS84 by default).

The forward transformation is closed-form; the inverse uses Bowring's
iterative method implemented with ``jax.lax.while_loop`` for JAX
traceability.  The iteration count is bounded, so degenerate inputs
(points on the polar axis, the centre of the Earth) still return a finite
result rather than failing.

All inputs and outputs use SI base units (metres, radians) unless
``use_degrees=True`` is specified.

References:
    1. NIMA Technical Report TR8350.2, *Department of Defense World Geodetic
       System 1984*.
    2. O. Montenbruck and E. Gill, *Satellite Orbits: Models, Methods
       and Applications*, Springer, 2012, Sec. 5.3.
"""

from __future__ import annotations

import jax
import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from geoframes.config import get_dtype
from geoframes.surfaces import WGS84, Ellipsoid

# Upper bound on Bowring iterations in the inverse transform
MAX_ITERATIONS = 10


def position_geodetic_to_ecef(
    x_geod: ArrayLike,
    ellipsoid: Ellipsoid = WGS84,
    use_degrees: bool = False,
) -> Array:
    """Convert geodetic position to ECEF Cartesian coordinates.

    Uses the prime vertical radius of curvature:

    .. math::

        N = \\frac{a}{\\sqrt{1 - e^2 \\sin^2 \\phi}}

    Args:
        x_geod: Geodetic coordinates ``[lat, lon, elev]``.
            Latitude and longitude in *rad* (or *deg* if ``use_degrees=True``),
            elevation in *m* above the ellipsoid.
        ellipsoid: Reference ellipsoid. Default: WGS84.
        use_degrees: If ``True``, interpret latitude and longitude as degrees.

    Returns:
        jax.Array: ECEF position ``[x, y, z]`` in *m*.

    Example:
        >>> import jax.numpy as jnp
        >>> from geoframes.geodetic import position_geodetic_to_ecef
        >>> x_ecef = position_geodetic_to_ecef(jnp.array([0.0, 0.0, 0.0]))
        >>> float(x_ecef[0])  # semi-major axis on the equator
        6378137.0
    """
    x_geod = jnp.asarray(x_geod, dtype=get_dtype())

    lat = x_geod[0]
    lon = x_geod[1]
    elev = x_geod[2]

    if use_degrees:
        lat = jnp.deg2rad(lat)
        lon = jnp.deg2rad(lon)

    a = ellipsoid.axis_equatorial
    b = ellipsoid.axis_polar
    ecc2 = ellipsoid.eccentricity_sq

    sin_lat = jnp.sin(lat)
    cos_lat = jnp.cos(lat)

    N = a / jnp.sqrt(1.0 - ecc2 * sin_lat * sin_lat)

    x = (N + elev) * cos_lat * jnp.cos(lon)
    y = (N + elev) * cos_lat * jnp.sin(lon)
    z = ((b * b) / (a * a) * N + elev) * sin_lat

    return jnp.array([x, y, z])


def position_ecef_to_geodetic(
    x_ecef: ArrayLike,
    ellipsoid: Ellipsoid = WGS84,
    use_degrees: bool = False,
) -> Array:
    """Convert ECEF Cartesian coordinates to geodetic position.

    Iterates on the correction ``dz`` between the ECEF *z* coordinate and the
    point where the ellipsoid normal crosses the polar axis, stopping when
    successive corrections agree to a dtype-scaled threshold or after
    ``MAX_ITERATIONS`` steps.

    Args:
        x_ecef: ECEF position ``[x, y, z]`` in *m*.
        ellipsoid: Reference ellipsoid. Default: WGS84.
        use_degrees: If ``True``, return latitude and longitude in degrees.

    Returns:
        jax.Array: Geodetic coordinates ``[lat, lon, elev]``.
            Latitude and longitude in *rad* (or *deg*), elevation in *m*
            above the ellipsoid.

    Example:
        >>> import jax.numpy as jnp
        >>> from geoframes.constants import WGS84_a
        >>> from geoframes.geodetic import position_ecef_to_geodetic
        >>> geod = position_ecef_to_geodetic(jnp.array([WGS84_a, 0.0, 0.0]))
        >>> float(geod[2])  # elevation ~ 0
        0.0
    """
    dtype = get_dtype()
    x_ecef = jnp.asarray(x_ecef, dtype=dtype)

    x = x_ecef[0]
    y = x_ecef[1]
    z = x_ecef[2]

    a = ellipsoid.axis_equatorial
    ecc2 = ellipsoid.eccentricity_sq

    eps = 1.0e-3 * a * float(jnp.finfo(dtype).eps)
    rho2 = x * x + y * y

    def _sin_phi(zdz):
        Nh = jnp.sqrt(rho2 + zdz * zdz)
        # On the Earth's centre the normal is undefined; treat it as equatorial
        return jnp.where(Nh > 0.0, zdz / jnp.where(Nh > 0.0, Nh, 1.0), 0.0)

    # State: (dz, dz_prev, iteration_count)
    dz0 = ecc2 * z

    def cond(state):
        dz, dz_prev, i = state
        return (jnp.abs(dz - dz_prev) > eps) & (i < MAX_ITERATIONS)

    def body(state):
        dz, _, i = state
        sinphi = _sin_phi(z + dz)
        N = a / jnp.sqrt(1.0 - ecc2 * sinphi * sinphi)
        dz_new = N * ecc2 * sinphi
        return (dz_new, dz, i + 1)

    # Force the first iteration by starting dz_prev far from dz0
    init_state = (dz0, dz0 + 1e10, jnp.int32(0))
    dz_final, _, _ = jax.lax.while_loop(cond, body, init_state)

    zdz = z + dz_final
    lat = jnp.arctan2(zdz, jnp.sqrt(rho2))
    lon = jnp.arctan2(y, x)

    sinphi = _sin_phi(zdz)
    N = a / jnp.sqrt(1.0 - ecc2 * sinphi * sinphi)
    elev = jnp.sqrt(rho2 + zdz * zdz) - N

    if use_degrees:
        lat = jnp.rad2deg(lat)
        lon = jnp.rad2deg(lon)

    return jnp.array([lat, lon, elev])
