"""Tests for geometry module."""
import math

import pytest

from trackgen.errors import DegenerateVectorError
from trackgen.tools import geometry as v


class TestVectorOps:

    def test_add_sub(self):
        assert v.add((1, 2, 3), (4, 5, 6)) == (5, 7, 9)
        assert v.sub((4, 5, 6), (1, 2, 3)) == (3, 3, 3)

    def test_scale_and_magnitude(self):
        assert v.scale(2, (1, -2, 3)) == (2, -4, 6)
        assert v.magnitude((3, 4, 0)) == 5
        assert v.distance((1, 1, 1), (1, 1, 4)) == 3

    def test_unit(self):
        assert v.unit((0, 0, 10)) == (0, 0, 1)
        assert v.magnitude(v.unit((1, 2, 3))) == pytest.approx(1)

    def test_unit_of_zero_vector_raises(self):
        with pytest.raises(DegenerateVectorError):
            v.unit((0, 0, 0))

    def test_tidy_float_collapses_noise_and_negative_zero(self):
        assert v.tidy_float(1e-17) == 0
        assert math.copysign(1, v.tidy_float(-0.0)) == 1
        assert v.tidy_float(0.1 + 0.2) == 0.3

    def test_degree_conversion(self):
        assert v.radians_to_degrees(math.pi) == pytest.approx(180)
        assert v.degrees_to_radians(90) == pytest.approx(math.pi / 2)

    def test_rotate_z_quarter_turn(self):
        x, y, z = v.rotate_z(math.pi / 2, (1, 0, 0))
        assert (x, y, z) == pytest.approx((0, 1, 0))

    def test_spherical_to_rect(self):
        assert v.spherical_to_rect(2, 0, 0) == pytest.approx((0, 0, 2))
        assert v.spherical_to_rect(2, math.pi / 2, 0) == pytest.approx((2, 0, 0))
        assert v.spherical_to_rect(2, 0, math.pi / 2) == pytest.approx((0, 2, 0))


class TestDirectionToAngles:

    def test_x_axis(self):
        assert v.direction_to_angles((1, 0, 0)) == pytest.approx((math.pi / 2, math.pi / 2, 0))

    def test_up_is_identity(self):
        assert v.direction_to_angles((0, 5, 0)) == pytest.approx((0, 0, 0))

    def test_roll_is_zero(self):
        assert v.direction_to_angles((0.3, -0.2, 0.9))[2] == 0

    @pytest.mark.parametrize("direction", [
        (1, 0, 0), (0, 0, 1), (0, -1, 0), (1, 1, 0), (-2, 3, 1), (0.1, -0.4, -0.9),
    ])
    def test_angles_rotate_up_axis_onto_direction(self, direction):
        angles = v.direction_to_angles(direction)
        rotated = v.rotate_euler(angles, v.UP)
        assert rotated == pytest.approx(v.unit(direction), abs=1e-12)

    def test_zero_direction_raises(self):
        with pytest.raises(DegenerateVectorError):
            v.direction_to_angles((0, 0, 0))
