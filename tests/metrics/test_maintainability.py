"""Tests for the maintainability index."""

import pytest

from complexity_insight.metrics import maintainability_index


class TestMaintainabilityIndex:
    def test_trivial_function(self):
        # raw = 171 - 0.23, scaled to 99.86
        assert maintainability_index(0.0, 1, 1) == 99

    def test_empty_function_with_signature_volume(self):
        # raw = 171 - 5.2 ln(8) - 0.23 = 159.96, scaled to 93.54
        assert maintainability_index(8.0, 1, 1) == 93

    def test_all_zero_inputs_hit_the_ceiling(self):
        assert maintainability_index(0.0, 0, 0) == 100

    def test_huge_function_floors_at_zero(self):
        assert maintainability_index(1e9, 500, 100000) == 0

    def test_index_is_truncated_not_rounded(self):
        # raw = 171 - 5.2 ln(100) - 0.23*5 - 16.2 ln(20) = 97.37, scaled to 56.94
        assert maintainability_index(100.0, 5, 20) == 56

    @pytest.mark.parametrize(
        "volume,complexity,loc",
        [(0.0, 1, 1), (39.863, 1, 7), (500.0, 12, 80), (1e6, 90, 3000)],
    )
    def test_range(self, volume, complexity, loc):
        assert 0 <= maintainability_index(volume, complexity, loc) <= 100
