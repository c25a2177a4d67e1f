"""Tests for the geoframes.rotations module."""

import math

import jax
import jax.numpy as jnp

from geoframes.rotations import Rz, rotation_ecef_to_enu, rotation_enu_to_ecef

_TOL = 1e-12


class TestRz:
    def test_zero_is_identity(self):
        assert jnp.allclose(Rz(0.0), jnp.eye(3), atol=_TOL)

    def test_quarter_turn(self):
        """Rz rotates the frame, so a vector appears rotated the opposite way."""
        v = Rz(math.pi / 2) @ jnp.array([1.0, 0.0, 0.0])
        assert jnp.allclose(v, jnp.array([0.0, -1.0, 0.0]), atol=_TOL)

    def test_degrees(self):
        assert jnp.allclose(Rz(30.0, use_degrees=True), Rz(math.pi / 6), atol=_TOL)

    def test_z_axis_invariant(self):
        v = jnp.array([0.0, 0.0, 5.0])
        assert jnp.allclose(Rz(1.234) @ v, v, atol=_TOL)

    def test_inverse_is_negative_angle(self):
        assert jnp.allclose(Rz(0.7).T, Rz(-0.7), atol=_TOL)


class TestECEFToENU:
    def test_origin_axes(self):
        """At lat=0, lon=0: East=+Y, North=+Z, Up=+X in ECEF."""
        rot = rotation_ecef_to_enu(0.0, 0.0)
        expected = jnp.array([
            [0.0, 1.0, 0.0],
            [0.0, 0.0, 1.0],
            [1.0, 0.0, 0.0],
        ])
        assert jnp.allclose(rot, expected, atol=_TOL)

    def test_north_pole_up(self):
        rot = rotation_ecef_to_enu(90.0, 0.0, use_degrees=True)
        up = rot @ jnp.array([0.0, 0.0, 1.0])
        assert jnp.allclose(up, jnp.array([0.0, 0.0, 1.0]), atol=_TOL)

    def test_orthonormality(self):
        rot = rotation_ecef_to_enu(0.3, -1.2)
        assert jnp.allclose(rot.T @ rot, jnp.eye(3), atol=_TOL)

    def test_determinant_positive_one(self):
        rot = rotation_ecef_to_enu(-0.8, 2.9)
        assert jnp.abs(jnp.linalg.det(rot) - 1.0) < _TOL

    def test_transpose(self):
        lat, lon = 0.65, -2.13
        assert jnp.allclose(
            rotation_enu_to_ecef(lat, lon), rotation_ecef_to_enu(lat, lon).T, atol=_TOL
        )

    def test_roundtrip(self):
        v = jnp.array([12.0, -3.5, 7.25])
        lat, lon = 0.3, -1.2
        back = rotation_enu_to_ecef(lat, lon) @ (rotation_ecef_to_enu(lat, lon) @ v)
        assert jnp.allclose(back, v, atol=_TOL)

    def test_jit(self):
        eager = rotation_ecef_to_enu(0.3, -1.2)
        jitted = jax.jit(rotation_ecef_to_enu)(0.3, -1.2)
        assert jnp.allclose(eager, jitted, atol=_TOL)
