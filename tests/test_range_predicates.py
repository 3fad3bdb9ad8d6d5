"""
Range label predicates: band ("to" / "sph" / ADD), CYL-axis pair, compound,
and axis standardisation.
"""

import pytest

from lensmatch.services.range_predicates import (
    matches_band_range,
    matches_compound_range,
    matches_cyl_axis_range,
    standardize_axis,
)


class TestStandardizeAxis:

    @pytest.mark.parametrize("axis, expected", [
        (0, 0),
        (1, 45),
        (45, 45),
        (67, 45),
        (68, 90),
        (112, 90),
        (113, 135),
        (157, 135),
        (158, 180),
        (180, 180),
    ])
    def test_nearest_standard_axis(self, axis, expected):
        assert standardize_axis(axis) == expected

    def test_idempotent_over_full_range(self):
        for axis in range(0, 181):
            once = standardize_axis(axis)
            assert standardize_axis(once) == once

    def test_zero_is_never_reassigned(self):
        assert standardize_axis(0) == 0
        assert standardize_axis(None) == 0


class TestBandRangeTo:

    def test_sph_at_band_boundary_matches(self):
        assert matches_band_range(-6.0, 0, "-6.0 to -2.0")

    def test_sph_beyond_band_boundary_does_not_match(self):
        assert not matches_band_range(-6.25, 0, "-6.0 to -2.0")

    def test_plus_band_runs_from_zero(self):
        assert matches_band_range(0, 0, "+6.0 to +2.0")
        assert matches_band_range(6.0, -1.0, "+6.0 to +2.0")
        assert not matches_band_range(-0.25, 0, "+6.0 to +2.0")

    def test_no_cylinder_only_lands_in_smallest_band(self):
        assert matches_band_range(-3.0, 0, "-6.0 to -2.0")
        assert not matches_band_range(-3.0, 0, "-6.0 to -4.0")
        assert not matches_band_range(-3.0, 0, "-6.0 to -6.0")

    @pytest.mark.parametrize("cyl_abs, band", [
        (2.0, 2.0),
        (2.25, 4.0),
        (4.0, 4.0),
        (4.25, 6.0),
        (6.0, 6.0),
    ])
    def test_cylinder_tier_boundaries(self, cyl_abs, band):
        matching = [b for b in (2.0, 4.0, 6.0) if matches_band_range(-1.0, -cyl_abs, f"-6.0 to -{b}")]
        assert matching == [band]

    def test_cylinder_tiers_have_no_gaps_or_overlaps(self):
        for step in range(1, 25):
            cyl = -step * 0.25
            hits = [b for b in (2.0, 4.0, 6.0) if matches_band_range(-1.0, cyl, f"-6.0 to -{b}")]
            assert len(hits) == 1, f"cyl {cyl} matched {hits}"

    def test_cylinder_sign_is_ignored_by_band(self):
        assert matches_band_range(-2.0, 1.5, "-6.0 to -2.0")

    def test_non_standard_band_uses_half_diopter_window(self):
        assert matches_band_range(-1.0, -2.5, "-6.0 to -3.0")
        assert matches_band_range(-1.0, -3.5, "-6.0 to -3.0")
        assert not matches_band_range(-1.0, -2.25, "-6.0 to -3.0")

    def test_cylinder_beyond_six_is_unmatched(self):
        assert not matches_band_range(-1.0, -6.25, "-6.0 to -6.0")


class TestBandRangeSph:

    def test_within_one_diopter(self):
        assert matches_band_range(-2.75, 0, "-2.0 sph")
        assert matches_band_range(-1.0, 0, "-2.0 sph")

    def test_outside_one_diopter(self):
        assert not matches_band_range(-3.25, 0, "-2.0 sph")

    def test_requires_no_cylinder(self):
        assert not matches_band_range(-2.0, -0.25, "-2.0 sph")


class TestBandRangeAdd:

    @pytest.mark.parametrize("sph, expected", [(0.0, True), (1.5, True), (3.0, True), (3.25, False), (-0.25, False)])
    def test_plus_three_covers_zero_to_three(self, sph, expected):
        assert matches_band_range(sph, 0, "+3/+ ADD") is expected

    @pytest.mark.parametrize("sph, expected", [(3.0, False), (3.25, True), (4.0, True), (4.25, False)])
    def test_plus_four_is_sequential(self, sph, expected):
        assert matches_band_range(sph, 0, "+4/+ ADD") is expected

    @pytest.mark.parametrize("sph, expected", [(0.0, True), (-2.0, True), (-2.25, False), (0.25, False)])
    def test_minus_two_covers_zero_to_minus_two(self, sph, expected):
        assert matches_band_range(sph, 0, "-2/+ ADD") is expected

    @pytest.mark.parametrize("sph, expected", [(-2.0, False), (-2.25, True), (-3.0, True), (-3.25, False)])
    def test_minus_three_is_sequential(self, sph, expected):
        assert matches_band_range(sph, 0, "-3/+ ADD") is expected

    def test_requires_no_cylinder(self):
        assert not matches_band_range(1.0, -0.25, "+3/+ ADD")

    def test_zero_base_never_matches(self):
        assert not matches_band_range(0.0, 0, "0/+ ADD")
        assert not matches_band_range(0.5, 0, "+0/+ ADD")


def test_unrecognised_label_does_not_match():
    assert not matches_band_range(0, 0, "n/a")
    assert not matches_band_range(0, 0, "")


class TestCylAxisRange:

    def test_near_plano_match(self):
        assert matches_cyl_axis_range(0.5, -1.5, 85, "-2, 90°")

    def test_sph_must_be_near_plano(self):
        assert matches_cyl_axis_range(1.0, -2.0, 90, "-2, 90°")
        assert not matches_cyl_axis_range(1.25, -2.0, 90, "-2, 90°")

    def test_cyl_within_one_diopter(self):
        assert matches_cyl_axis_range(0, -1.0, 90, "-2, 90°")
        assert matches_cyl_axis_range(0, -3.0, 90, "-2, 90°")
        assert not matches_cyl_axis_range(0, -0.75, 90, "-2, 90°")

    def test_axis_is_standardised(self):
        assert matches_cyl_axis_range(0, 2.0, 170, "+2, 180°")
        assert not matches_cyl_axis_range(0, -2.0, 130, "-2, 90°")

    def test_label_without_comma(self):
        assert not matches_cyl_axis_range(0, -2.0, 90, "-2 90°")


class TestCompoundRange:

    def test_category_sign_and_axis(self):
        assert matches_compound_range(2.25, -1.75, 175, "+2/-2, 180°")

    def test_axis_mismatch(self):
        assert not matches_compound_range(2.25, -1.75, 90, "+2/-2, 180°")

    def test_label_without_axis_ignores_axis(self):
        assert matches_compound_range(-4.25, -2.0, 33, "-4/-2")
        assert matches_compound_range(-4.25, -2.0, 0, "-4/-2")

    def test_whole_diopter_rounds_half_up(self):
        assert matches_compound_range(-2.5, -2.0, 0, "-3/-2")
        assert not matches_compound_range(-2.25, -2.0, 0, "-3/-2")

    def test_cylinder_sign_must_agree(self):
        assert not matches_compound_range(-4.0, 2.0, 0, "-4/-2")

    def test_small_values_are_sign_agnostic(self):
        assert matches_compound_range(-0.25, -2.0, 0, "+0/-2")

    def test_space_separated_axis(self):
        assert matches_compound_range(2.0, 1.0, 180, "+2/+1 180°")
        assert not matches_compound_range(2.0, 1.0, 45, "+2/+1 180°")

    def test_label_without_slash(self):
        assert not matches_compound_range(2.0, 1.0, 180, "+2, 180°")
