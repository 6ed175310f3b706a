"""Test the AQI formulas shared by validation and fallback generation."""
import pytest
from aqi_advisor import formula
from aqi_advisor.formula import FormulaConstants


class TestTierBands:
    @pytest.mark.parametrize("aqi,expected", [
        (0, (0, 0)),
        (40, (2000, 4000)),
        (50, (2500, 5000)),
        (60, (6000, 9000)),
        (120, (18000, 24000)),
        (180, (36000, 45000)),
        (300, (75000, 90000)),
        (400, (120000, 160000)),
    ])
    def test_expected_range(self, aqi, expected):
        assert formula.expected_tree_range(aqi) == expected

    def test_boundaries_belong_to_lower_tier(self):
        assert formula.tier_for(100).multiplier_low == 100
        assert formula.tier_for(101).multiplier_low == 150

    def test_absent_aqi_is_zero(self):
        assert formula.expected_tree_range(None) == (0, 0)
        assert formula.tree_band_midpoint(None) == 0

    def test_tiers_contiguous_and_increasing(self):
        bands = formula.TIER_BANDS
        for lower, higher in zip(bands, bands[1:]):
            assert lower.upper < higher.upper
            assert lower.multiplier_high == higher.multiplier_low
            assert lower.multiplier_low < higher.multiplier_low

    def test_monotonic_in_aqi(self):
        previous = formula.expected_tree_range(0)
        for aqi in range(1, 600):
            current = formula.expected_tree_range(aqi)
            assert current[0] >= previous[0]
            assert current[1] >= previous[1]
            previous = current

    def test_midpoint(self):
        assert formula.tree_band_midpoint(60) == 7500
        assert formula.tree_band_midpoint(300) == 82500


class TestTolerance:
    def test_tree_band_widened_by_twenty_percent(self):
        # AQI 60: [6000, 9000] → [4800, 10800]
        assert formula.tree_count_within_tolerance(4800, 60)
        assert formula.tree_count_within_tolerance(10800, 60)
        assert not formula.tree_count_within_tolerance(4799, 60)
        assert not formula.tree_count_within_tolerance(10801, 60)

    def test_investment_tolerance(self):
        expected = formula.investment_for(7500)
        assert expected == 30_000_000
        assert formula.investment_within_tolerance(21_000_000, expected)
        assert formula.investment_within_tolerance(39_000_000, expected)
        assert not formula.investment_within_tolerance(20_999_999, expected)


class TestDerivedValues:
    def test_carbon_linear(self):
        assert formula.annual_carbon(7500) == pytest.approx(150.0)
        assert formula.lifetime_carbon(7500) == pytest.approx(3750.0)

    def test_pollution_reduction_clamped(self):
        assert formula.pollution_reduction_pct(0) == 5
        assert formula.pollution_reduction_pct(50000) == 20
        assert formula.pollution_reduction_pct(82500) == 33
        assert formula.pollution_reduction_pct(1_000_000) == 35

    def test_improvement_factor_capped(self):
        assert formula.improvement_factor(50_000) == pytest.approx(0.15)
        assert formula.improvement_factor(500_000) == pytest.approx(0.30)

    def test_projected_aqi(self):
        assert formula.projected_aqi(60, 7500) == 59
        assert formula.projected_aqi(300, 82500) == 226

    def test_projected_aqi_never_below_cap(self):
        assert formula.projected_aqi(500, 175000) == 350
        # 302 x 0.7 = 211.4 must not round down past the cap
        assert formula.projected_aqi(302, 105700) == 212

    def test_strict_improvement_for_all_readings(self):
        for aqi in range(1, 600):
            trees = formula.tree_band_midpoint(aqi)
            after = formula.projected_aqi(aqi, trees)
            assert after < aqi
            if aqi >= 4:
                assert after >= aqi * 0.7 - 1e-6

    def test_no_trees_no_change(self):
        assert formula.projected_aqi(80, 0) == 80

    def test_pm_reduction(self):
        assert formula.pm_reduction_pct(7500) == 5
        assert formula.pm_reduction_pct(82500) == 25

    def test_improvement_pct(self):
        assert formula.improvement_pct(60, 59) == 2
        assert formula.improvement_pct(0, 0) == 0

    def test_maintenance(self):
        assert formula.maintenance_for(30_000_000) == 1_500_000

    @pytest.mark.parametrize("aqi,label", [
        (0, "Good"), (50, "Good"), (51, "Moderate"), (150, "Unhealthy for Sensitive Groups"),
        (200, "Unhealthy"), (300, "Very Unhealthy"), (301, "Hazardous"),
    ])
    def test_aqi_level(self, aqi, label):
        assert formula.aqi_level(aqi) == label


class TestConstants:
    def test_custom_cost_per_tree(self):
        constants = FormulaConstants(cost_per_tree=5000)
        assert formula.investment_for(100, constants) == 500_000

    def test_constants_frozen(self):
        with pytest.raises(Exception):
            formula.DEFAULT_CONSTANTS.cost_per_tree = 1
