"""Unit tests for distance_miles."""

import pytest

from trial_finder.services.geo import distance_miles

BOSTON = (42.3601, -71.0589)
NEW_YORK = (40.7128, -74.0060)


class TestDistanceMiles:
    @pytest.mark.parametrize(
        "point", [BOSTON, NEW_YORK, (0.0, 0.0), (-33.87, 151.21), (89.9, 179.9)]
    )
    def test_same_point_is_zero(self, point):
        assert distance_miles(*point, *point) == 0

    def test_symmetric(self):
        assert distance_miles(*BOSTON, *NEW_YORK) == distance_miles(*NEW_YORK, *BOSTON)

    def test_boston_to_new_york(self):
        assert 185 <= distance_miles(*BOSTON, *NEW_YORK) <= 195

    def test_returns_whole_miles(self):
        assert isinstance(distance_miles(*BOSTON, *NEW_YORK), int)

    def test_one_degree_of_latitude(self):
        """One degree along a meridian is about 69 miles."""
        assert distance_miles(0.0, 0.0, 1.0, 0.0) == 69
