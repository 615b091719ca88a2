"""Unit tests for the Completeness (Perfection) Index."""
import pytest

from psys.core.index_config import PerfectionThresholds
from psys.core.indices.completeness import (
    TYPE_GAPS,
    TYPE_GOOD,
    calculate_completeness_index,
)
from psys.core.trait_mapper import STRUCTURAL_DIMENSIONS


class TestCoverage:

    def test_value_at_target_has_zero_coverage(self):
        result = calculate_completeness_index([60] * 8)
        assert result.components["coverage_mean"] == 0
        assert result.components["worst"] == 0
        # 0.1 * spread term only -> 0.5 + (0.1 - 0.5) * 0.75 = 0.2
        assert result.value == 20
        assert result.type == TYPE_GAPS
        assert result.signals == ()

    def test_full_vector_is_good(self):
        result = calculate_completeness_index([100] * 8)
        assert result.components["coverage_mean"] == pytest.approx(1, abs=1e-4)
        assert result.value >= 75
        assert result.type == TYPE_GOOD
        assert result.reliability == "high"

    def test_short_vector_is_mid_reliability(self):
        assert calculate_completeness_index([70, 80, 90]).reliability == "mid"


class TestShortfalls:

    def test_top_four_by_gap(self):
        result = calculate_completeness_index(
            [30, 40, 50, 55, 58, 80, 90, 100], dimension_names=STRUCTURAL_DIMENSIONS,
        )
        shortfalls = result.components["shortfalls"]
        assert [s["dimension"] for s in shortfalls] == ["leadership", "execution", "innovation", "collaboration"]
        assert shortfalls[0] == {"dimension": "leadership", "value": 30, "target": 60, "gap": 30}
        assert result.signals == ("leadership -30", "execution -20", "innovation -10", "collaboration -5")

    def test_generic_labels_without_names(self):
        result = calculate_completeness_index([30, 90, 90, 90, 90, 90, 90, 90])
        assert result.signals == ("dimension #1 -30",)

    def test_per_dimension_targets(self):
        thresholds = PerfectionThresholds(T={"execution": 0.9}, defaultT=0.5)
        result = calculate_completeness_index(
            [60, 60, 60, 60, 60, 60, 60, 60], thresholds=thresholds, dimension_names=STRUCTURAL_DIMENSIONS,
        )
        assert result.components["shortfalls"] == [
            {"dimension": "execution", "value": 60, "target": 90, "gap": 30},
        ]

    def test_explicit_keys_override_names(self):
        thresholds = PerfectionThresholds(keys=("mirror", "shield"))
        result = calculate_completeness_index([10, 20, 90], thresholds=thresholds)
        assert result.signals == ("mirror -50", "shield -40")


class TestBaselineDimensions:

    def test_worst_restricted_to_baseline(self):
        vector = [100, 100, 100, 100, 100, 100, 100, 20]
        everywhere = calculate_completeness_index(vector, dimension_names=STRUCTURAL_DIMENSIONS)
        baseline = calculate_completeness_index(
            vector,
            thresholds=PerfectionThresholds(baseline_dims=("leadership", "execution")),
            dimension_names=STRUCTURAL_DIMENSIONS,
        )
        assert everywhere.components["worst"] == 0
        assert baseline.components["worst"] == pytest.approx(1, abs=1e-4)
        assert baseline.value > everywhere.value
