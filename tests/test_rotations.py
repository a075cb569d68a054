"""Tests for the elementary frame rotations."""

import math

import jax.numpy as jnp
import pytest

from coordconv.rotations import Rx, Ry, Rz


class TestElementaryRotations:
    def test_rx(self):
        a = 0.3
        c, s = math.cos(a), math.sin(a)
        expected = jnp.array([[1.0, 0.0, 0.0], [0.0, c, s], [0.0, -s, c]])
        assert jnp.allclose(Rx(a), expected, atol=1e-15)

    def test_ry(self):
        a = -1.1
        c, s = math.cos(a), math.sin(a)
        expected = jnp.array([[c, 0.0, -s], [0.0, 1.0, 0.0], [s, 0.0, c]])
        assert jnp.allclose(Ry(a), expected, atol=1e-15)

    def test_rz(self):
        a = 2.0
        c, s = math.cos(a), math.sin(a)
        expected = jnp.array([[c, s, 0.0], [-s, c, 0.0], [0.0, 0.0, 1.0]])
        assert jnp.allclose(Rz(a), expected, atol=1e-15)

    def test_degrees(self):
        assert jnp.allclose(Rz(90.0, use_degrees=True), Rz(math.pi / 2.0), atol=1e-15)

    def test_frame_rotation_sense(self):
        # Rotating the axes by +90 deg about z moves the old x-axis to -y
        v = Rz(90.0, use_degrees=True) @ jnp.array([1.0, 0.0, 0.0])
        assert jnp.allclose(v, jnp.array([0.0, -1.0, 0.0]), atol=1e-15)

    @pytest.mark.parametrize("R", [Rx, Ry, Rz])
    def test_inverse_is_negative_angle(self, R):
        assert jnp.allclose(R(0.7) @ R(-0.7), jnp.eye(3), atol=1e-15)
