"""Unit tests for the built-in Big Five trait mapper."""
import logging

import pytest

from psys.core.trait_mapper import (
    apply_curve,
    potential_to_sparse16,
    structural_to_sparse16,
    traits_to_potential,
    traits_to_structural,
)


class TestBaseline:

    def test_neutral_traits_map_to_baseline(self, neutral_traits):
        assert traits_to_structural(neutral_traits) == [50] * 8
        assert traits_to_potential(neutral_traits) == [50] * 8

    @pytest.mark.parametrize("bad", [None, [50, 50, 50, 50], "fifty", [50] * 6])
    def test_malformed_input_returns_baseline(self, bad, caplog):
        with caplog.at_level(logging.WARNING, logger="psys.core.trait_mapper"):
            assert traits_to_structural(bad) == [50] * 8
            assert traits_to_potential(bad) == [50] * 8
        assert "Invalid Big Five input" in caplog.text


class TestMapping:

    def test_dict_input_matches_list(self, genuine_traits):
        as_dict = dict(zip(
            ["openness", "conscientiousness", "extraversion", "agreeableness", "neuroticism"],
            genuine_traits,
        ))
        assert traits_to_structural(as_dict) == traits_to_structural(genuine_traits)

    def test_extraversion_raises_leadership(self):
        assert traits_to_structural([50, 50, 90, 50, 50])[0] > 50

    def test_neuroticism_lowers_resilience(self):
        assert traits_to_structural([50, 50, 50, 50, 90])[5] < 50

    @pytest.mark.parametrize("traits", [[0] * 5, [100] * 5, [100, 100, 100, 100, 0], [0, 0, 0, 0, 100]])
    def test_outputs_are_bounded_integers(self, traits):
        for vector in (traits_to_structural(traits), traits_to_potential(traits)):
            assert len(vector) == 8
            assert all(isinstance(x, int) and 0 <= x <= 100 for x in vector)

    def test_missing_component_treated_as_neutral(self):
        assert traits_to_structural([None, 50, 50, 50, 50]) == [50] * 8


class TestCurve:

    @pytest.mark.parametrize("x", [0, 50, 100])
    def test_fixed_points(self, x):
        assert apply_curve(x, 1.08) == pytest.approx(x)

    def test_pulls_towards_neutral(self):
        assert 50 < apply_curve(80, 1.1) < 80
        assert 20 < apply_curve(20, 1.1) < 50


class TestSparse16:

    def test_even_slots_hold_values(self):
        vector = [10, 20, 30, 40, 50, 60, 70, 80]
        sparse = structural_to_sparse16(vector)
        assert len(sparse) == 16
        assert sparse[0::2] == vector
        assert sparse[1::2] == [0] * 8

    def test_does_not_mutate_input(self):
        vector = [1, 2, 3, 4, 5, 6, 7, 8]
        potential_to_sparse16(vector)
        assert vector == [1, 2, 3, 4, 5, 6, 7, 8]

    def test_invalid_vector_gives_zeros(self):
        assert potential_to_sparse16([1, 2, 3]) == [0] * 16
        assert structural_to_sparse16(None) == [0] * 16
