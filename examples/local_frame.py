# /// script
# requires-python = ">=3.10"
# dependencies = ["typer>=0.9.0", "geoframes"]
#
# [tool.uv.sources]
# geoframes = { path = ".." }
# ///
"""Convert a ring of geodetic waypoints into a heading-rotated local frame.

Places a reference origin at the given latitude, longitude and elevation,
generates waypoints on a circle around it, converts them in one vmap'd,
JIT-compiled call from geodetic coordinates into the ``LOCAL2`` frame, and
converts them back to check the round trip.

Requires geoframes to be installed (``uv pip install -e .`` from the repo root).

Usage:
    uv run examples/local_frame.py [OPTIONS]

Examples:
    # Default origin (Mountain View, CA), 8 waypoints 1 km out
    uv run examples/local_frame.py

    # Rotate the local frame so +x points North
    uv run examples/local_frame.py --heading 90 --radius 5000 --count 16
"""

import math
import time
from typing import Annotated

import jax
import jax.numpy as jnp
import typer

from geoframes import SphericalCoordinates, SurfaceType, distance


def main(
    latitude: Annotated[float, typer.Option(help="Origin latitude in degrees")] = 37.3877349,
    longitude: Annotated[float, typer.Option(help="Origin longitude in degrees")] = -122.0651166,
    elevation: Annotated[float, typer.Option(help="Origin elevation in metres")] = 32.0,
    heading: Annotated[float, typer.Option(help="Local frame heading offset in degrees")] = 0.0,
    radius: Annotated[float, typer.Option(help="Waypoint ring radius in metres")] = 1000.0,
    count: Annotated[int, typer.Option(help="Number of waypoints")] = 8,
):
    sc = SphericalCoordinates(
        SurfaceType.EARTH_WGS84,
        math.radians(latitude),
        math.radians(longitude),
        elevation,
        math.radians(heading),
    )
    print(f"Reference frame: {sc}")

    # Waypoints on a small circle in geodetic coordinates (flat-Earth spacing)
    bearings = jnp.linspace(0.0, 2.0 * jnp.pi, count, endpoint=False)
    dlat = jnp.rad2deg(radius * jnp.cos(bearings) / sc.surface_radius)
    dlon = jnp.rad2deg(
        radius * jnp.sin(bearings) / (sc.surface_radius * math.cos(math.radians(latitude)))
    )
    waypoints = jnp.stack(
        [latitude + dlat, longitude + dlon, jnp.full(count, elevation)], axis=1
    )

    to_local = jax.jit(jax.vmap(sc.local_from_spherical_position))
    to_spherical = jax.jit(jax.vmap(sc.spherical_from_local_position))

    t0 = time.perf_counter()
    local = to_local(waypoints).block_until_ready()
    print(f"\nConverted {count} waypoints in {time.perf_counter() - t0:.3f}s (incl. compile)")

    print(f"\n{'lat [deg]':>12} {'lon [deg]':>13} {'x [m]':>10} {'y [m]':>10} {'z [m]':>8} {'arc [m]':>9}")
    for wp, xyz in zip(waypoints, local):
        arc = distance(latitude, longitude, wp[0], wp[1], use_degrees=True)
        print(
            f"{float(wp[0]):12.7f} {float(wp[1]):13.7f} "
            f"{float(xyz[0]):10.2f} {float(xyz[1]):10.2f} {float(xyz[2]):8.2f} "
            f"{float(arc):9.2f}"
        )

    back = to_spherical(local)
    err = jnp.max(jnp.abs(back - waypoints))
    print(f"\nMax round-trip error: {float(err):.3e}")

    print("\nDone.")


if __name__ == "__main__":
    typer.run(main)
