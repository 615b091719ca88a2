"""Tests for the index aggregator."""
import json
import random

import pytest

from psys.core.indices.circularity import calculate_circularity_index
from psys.core.payload import normalize_payload
from psys.core.results import INDEX_NAMES, RELIABILITY_LEVELS
from psys.core.trait_mapper import to_sparse16, traits_to_structural
from psys.services.index_service import IndexCapabilities, IndexService, compute_all_indices
from psys.utils.exceptions import CapabilityError


class FakeMasking:
    """Masking capability double recording its calls."""

    def __init__(self):
        self.calls = []

    def __call__(self, **kwargs):
        self.calls.append(kwargs)
        return {
            "masking_score": 72,
            "alignment_gap": 0.4,
            "intentionality": 0.6,
            "cost": 0.3,
            "type": "strategic masking",
            "signals": ["gap on collaboration"],
        }


class TestEndToEnd:

    def test_identical_self_and_environment(self, index_service, genuine_traits):
        report = index_service.compute_all_indices({"bf_self": genuine_traits, "bf_env": genuine_traits})

        assert report.difference.value < 25
        assert report.self_integration.value >= 75
        assert report.reliability["difference"] == "high"
        assert report.circularity_struct.is_available
        assert report.circularity_pot.is_available
        assert report.completeness.is_available

    def test_empty_payload(self, index_service):
        report = index_service.compute_all_indices({})

        assert set(report.reliability.values()) == {"low"}
        assert report.circularity_struct.needed == "struct8"
        assert report.circularity_pot.needed == "pot8"
        assert report.completeness.needed == "struct8"

    @pytest.mark.parametrize("payload", [None, "abc", [1, 2, 3], 12])
    def test_garbage_payload_does_not_raise(self, index_service, payload):
        report = index_service.compute_all_indices(payload)
        assert set(report.reliability.values()) == {"low"}

    def test_self_only_is_low_reliability(self, index_service, genuine_traits):
        report = index_service.compute_all_indices({"bf_self": genuine_traits})
        assert report.reliability["difference"] == "low"
        assert report.reliability["self_integration"] == "low"

    def test_partial_self_report_counts_answered_scores(self, index_service, genuine_traits):
        report = index_service.compute_all_indices({"bf_self": genuine_traits[:4], "bf_env": genuine_traits})
        # only neuroticism differs: |0 - (-0.4)| / 5
        assert report.difference.components["l1"] == 8
        assert report.reliability["difference"] == "high"

    def test_module_level_helper(self, genuine_traits):
        report = compute_all_indices({"bf_self": genuine_traits, "bf_env": genuine_traits})
        assert report.reliability["confidence"] == "high"


class TestVectorDerivation:

    def test_environment_is_preferred(self, index_service, genuine_traits, other_traits):
        data = index_service.derive_vectors(normalize_payload({"bf_self": genuine_traits, "bf_env": other_traits}))
        assert list(data.structural_env) == traits_to_structural(other_traits)

    def test_supplied_structural_vector_is_used(self, index_service, genuine_traits, uneven_vector8):
        report = index_service.compute_all_indices({
            "bf_self": genuine_traits,
            "bf_env": genuine_traits,
            "struct8": uneven_vector8,
        })
        assert report.circularity_struct.value == calculate_circularity_index(uneven_vector8).value

    def test_uniform_structural_vector_is_derived(self, index_service, genuine_traits):
        report = index_service.compute_all_indices({"bf_env": genuine_traits, "struct8": [50] * 8})
        derived = traits_to_structural(genuine_traits)
        assert report.circularity_struct.value == calculate_circularity_index(derived).value

    def test_failing_mapper_raises_capability_error(self, genuine_traits):
        def broken(traits):
            raise RuntimeError("mapper offline")

        service = IndexService(IndexCapabilities(traits_to_structural=broken))
        with pytest.raises(CapabilityError) as exc_info:
            service.compute_all_indices({"bf_env": genuine_traits})
        assert exc_info.value.status_code == 502

    def test_unusable_mapper_output_is_neutral(self, genuine_traits):
        service = IndexService(IndexCapabilities(traits_to_potential=lambda traits: [1, 2]))
        report = service.compute_all_indices({"bf_env": genuine_traits})
        assert report.circularity_pot.needed == "pot8"


class TestCapabilities:

    def test_masking_receives_structural_ecology(self, genuine_traits, other_traits):
        masking = FakeMasking()
        service = IndexService(IndexCapabilities(masking=masking))
        report = service.compute_all_indices({"bf_self": genuine_traits, "bf_env": other_traits, "entropy_hint": 40})

        assert report.difference.value == 72
        assert report.difference.type == "strategic masking"
        call = masking.calls[0]
        assert call["ecology16"] == to_sparse16(traits_to_structural(other_traits))
        assert call["entropy"] == 40.0

    def test_masking_receives_supplied_ecology(self, genuine_traits):
        masking = FakeMasking()
        service = IndexService(IndexCapabilities(masking=masking))
        eco16 = list(range(16))
        service.compute_all_indices({"bf_self": genuine_traits, "bf_env": genuine_traits, "eco16": eco16})
        assert masking.calls[0]["ecology16"] == [float(x) for x in eco16]

    def test_confidence_uses_self_integration(self, index_service, sample_payload):
        report = index_service.compute_all_indices(sample_payload)
        assert report.confidence.components["consistency"] == report.self_integration.value


class TestConfiguration:

    def test_kappa_override(self, index_service, genuine_traits, uneven_vector8):
        payload = {"bf_self": genuine_traits, "bf_env": genuine_traits, "struct8": uneven_vector8}
        report = index_service.compute_all_indices(payload, {"circularity": {"kappa": 0.1}})
        assert report.circularity_struct.value == calculate_circularity_index(uneven_vector8, kappa=0.1).value

    def test_invalid_config_uses_defaults(self, index_service, sample_payload):
        baseline = index_service.compute_all_indices(sample_payload)
        report = index_service.compute_all_indices(sample_payload, {"weights": {"masking_alpha": "nope"}})
        assert report.difference.value == baseline.difference.value

    def test_service_level_config(self, genuine_traits, uneven_vector8):
        service = IndexService(config={"weights": {"ci_kappa": 0.1}})
        report = service.compute_all_indices({"bf_env": genuine_traits, "struct8": uneven_vector8})
        assert report.circularity_struct.value == calculate_circularity_index(uneven_vector8, kappa=0.1).value

    def test_only_recent_history_counts(self, index_service, sample_payload):
        recent = [{"bf_env": [40 + i, 60, 40, 60, 50]} for i in range(5)]
        older = [{"bf_env": [90, 10, 90, 10, 90]} for _ in range(5)]

        short = dict(sample_payload, history=recent)
        long = dict(sample_payload, history=older + recent)

        assert (
            index_service.compute_all_indices(long).kernel_stability.to_dict()
            == index_service.compute_all_indices(short).kernel_stability.to_dict()
        )


class TestReportShape:

    def test_to_dict(self, index_service, sample_payload):
        data = index_service.compute_all_indices(sample_payload).to_dict()

        for name in INDEX_NAMES:
            assert name in data
        assert data["confidence_details"] == {"personality_ratio": 50, "evidence_ratio": 30, "consistency_ratio": 20}
        assert data["computed_at"].endswith("+00:00")
        assert set(data["reliability"]) == set(INDEX_NAMES)

    def test_random_payloads_stay_bounded(self, index_service):
        rng = random.Random(7)

        def maybe_vector(n):
            if rng.random() < 0.2:
                return None
            return [rng.choice([rng.uniform(-50, 150), 50, None, "x"]) for _ in range(n)]

        for _ in range(50):
            payload = {
                "bf_self": maybe_vector(5),
                "bf_env": maybe_vector(5),
                "bf_s2": maybe_vector(5),
                "struct8": maybe_vector(8),
                "pot8": maybe_vector(8),
                "entropy_hint": rng.uniform(-20, 200),
                "history": [{"bf_env": maybe_vector(5)} for _ in range(rng.randint(0, 8))],
            }
            report = index_service.compute_all_indices(payload)

            for result in report.indices().values():
                assert isinstance(result.value, int)
                assert 0 <= result.value <= 100
                assert result.reliability in RELIABILITY_LEVELS
            json.dumps(report.to_dict(), allow_nan=False)
