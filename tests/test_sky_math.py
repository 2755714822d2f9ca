"""Tests for the interpolation functions in sky_math."""

import pytest

from flight_replay.sky_math import hermite, hermite180, hermite360, lerp, normalise180


def catmull_rom(y0, y1, y2, y3, mu):
    """Reference Catmull-Rom spline (Bourke)."""
    mu2 = mu * mu
    a0 = -0.5 * y0 + 1.5 * y1 - 1.5 * y2 + 0.5 * y3
    a1 = y0 - 2.5 * y1 + 2.0 * y2 - 0.5 * y3
    a2 = -0.5 * y0 + 0.5 * y2
    a3 = y1
    return a0 * mu * mu2 + a1 * mu2 + a2 * mu + a3


class TestLerp:
    """Tests for linear interpolation."""

    def test_float_values(self):
        """Test interpolation of floating point values."""
        assert lerp(0.0, 10.0, 0.0) == 0.0
        assert lerp(0.0, 10.0, 0.25) == 2.5
        assert lerp(0.0, 10.0, 1.0) == 10.0
        assert lerp(10.0, -10.0, 0.5) == 0.0

    def test_integer_values_are_rounded(self):
        """Test that integer values stay integers."""
        result = lerp(0, 10, 0.26)
        assert result == 3
        assert isinstance(result, int)
        assert lerp(0, 100, 0.333) == 33
        assert lerp(-32767, 32767, 0.0) == -32767
        assert lerp(-32767, 32767, 1.0) == 32767

    def test_integer_halves_round_away_from_zero(self):
        """Test that integer midpoints round away from zero, not to even."""
        assert lerp(0, 1, 0.5) == 1
        assert lerp(0, -1, 0.5) == -1
        assert lerp(0, 5, 0.5) == 3
        assert lerp(0, 7, 0.5) == 4
        assert lerp(10, 5, 0.5) == 7


class TestNormalise180:
    """Tests for unwrapping of angles across the +/-180 boundary."""

    @pytest.mark.parametrize("y0,y1,expected", [
        (10.0, 20.0, 20.0),
        (160.0, 170.0, 170.0),
        (170.0, -20.0, 340.0),
        (-20.0, -10.0, -10.0),
        (-170.0, 20.0, -340.0),
        (175.0, -175.0, 185.0),
        (-175.0, 175.0, -185.0),
    ])
    def test_normalise(self, y0, y1, expected):
        """Test the documented unwrap table."""
        assert normalise180(y0, y1) == expected


class TestHermite:
    """Tests for the cubic Hermite spline."""

    def test_passes_through_support_points(self):
        """Test that the curve passes through y1 at mu 0 and y2 at mu 1."""
        assert hermite(3.0, 7.0, -2.0, 11.0, 0.0) == 7.0
        assert hermite(3.0, 7.0, -2.0, 11.0, 1.0) == -2.0

    def test_linear_data(self):
        """Test that equidistant linear data is interpolated linearly."""
        assert hermite(0.0, 1.0, 2.0, 3.0, 0.5) == pytest.approx(1.5)
        assert hermite(0.0, 10.0, 20.0, 30.0, 0.25) == pytest.approx(12.5)

    @pytest.mark.parametrize("values", [
        (0.0, 1.0, 4.0, 9.0),
        (5.0, -3.0, 8.0, 2.0),
        (100.0, 101.0, 99.5, 120.0),
    ])
    def test_zero_tension_is_catmull_rom(self, values):
        """Test that tension 0 and bias 0 yield a Catmull-Rom spline."""
        for mu in (0.1, 0.3, 0.5, 0.9):
            assert hermite(*values, mu) == pytest.approx(catmull_rom(*values, mu))

    def test_full_tension_has_zero_tangents(self):
        """Test that tension 1 ignores the neighbouring support values."""
        assert hermite(0.0, 0.0, 10.0, 0.0, 0.5, tension=1.0) == pytest.approx(5.0)
        assert hermite(-100.0, 0.0, 10.0, 100.0, 0.5, tension=1.0) == pytest.approx(5.0)


class TestHermite180:
    """Tests for Hermite interpolation in [-180, 180)."""

    def test_no_wrap(self):
        """Test values far from the boundary behave like plain hermite."""
        assert hermite180(10.0, 20.0, 30.0, 40.0, 0.5) == pytest.approx(25.0)

    def test_crossing_boundary_takes_short_path(self):
        """Test that 175 -> -175 passes through +/-180, not through 0."""
        result = hermite180(170.0, 178.0, -178.0, -170.0, 0.25)
        assert abs(result) > 170.0

    def test_result_is_wrapped(self):
        """Test that exactly 180 is reported as -180."""
        assert hermite180(170.0, 175.0, -175.0, -170.0, 0.5) == pytest.approx(-180.0)
        assert hermite180(-170.0, -175.0, 175.0, 170.0, 0.5) == pytest.approx(-180.0)


class TestHermite360:
    """Tests for Hermite interpolation in [0, 360)."""

    def test_crossing_zero(self):
        """Test that 350 -> 10 passes through 0/360."""
        result = hermite360(350.0, 10.0, 20.0, 30.0, 0.5)
        assert result == pytest.approx(15.625)

    def test_result_is_wrapped(self):
        """Test that the result stays within [0, 360)."""
        result = hermite360(340.0, 350.0, 10.0, 20.0, 0.5)
        assert result == pytest.approx(0.0)
        assert 0.0 <= result < 360.0

    def test_support_points(self):
        """Test that the curve passes through y1 at mu 0."""
        assert hermite360(80.0, 90.0, 100.0, 110.0, 0.0) == pytest.approx(90.0)
        assert hermite360(80.0, 90.0, 100.0, 110.0, 1.0) == pytest.approx(100.0)
