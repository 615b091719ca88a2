"""
Index Service
Computes the seven PSYS indices from an assessment payload

The service owns a capability bundle (masking function, trait mapper,
potential-vector name table). Missing capabilities fall back to the
built-in implementations, so the service runs with no configuration.
"""
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Any, Callable, List, Optional, Sequence

from psys.core.index_config import IndexConfig
from psys.core.indices import (
    calculate_circularity_index,
    calculate_completeness_index,
    calculate_confidence_index,
    calculate_difference_index,
    calculate_kernel_stability_index,
    calculate_self_integration_index,
)
from psys.core.indices.difference import MaskingCapability
from psys.core.payload import IndexPayload, coerce_vector, is_valid_vector8, normalize_payload
from psys.core.results import CompositeReport, IndexResult, RELIABILITY_HIGH, RELIABILITY_LOW
from psys.core.trait_mapper import STRUCTURAL_DIMENSIONS, to_sparse16, traits_to_potential, traits_to_structural
from psys.utils.config import settings
from psys.utils.exceptions import CapabilityError
from psys.utils.logger import get_logger

logger = get_logger(__name__)

TraitMapperFn = Callable[[Sequence[float]], List[float]]


@dataclass(frozen=True)
class IndexCapabilities:
    """Injected collaborators; every slot has a built-in default"""
    masking: Optional[MaskingCapability] = None
    traits_to_structural: TraitMapperFn = traits_to_structural
    traits_to_potential: TraitMapperFn = traits_to_potential
    potential_names: Optional[Sequence[str]] = None
    structural_names: Sequence[str] = STRUCTURAL_DIMENSIONS


class IndexService:
    """
    Aggregator for the PSYS indices

    Pipeline:
      1. Normalize the raw payload (neutral defaults for anything missing)
      2. Derive structural / potential vectors from traits when not supplied
      3. Run the seven calculators, feeding self-integration into confidence
      4. Override reliability from input provenance
    """

    def __init__(
        self,
        capabilities: Optional[IndexCapabilities] = None,
        config: Any = None,
        history_limit: Optional[int] = None,
    ):
        self.capabilities = capabilities or IndexCapabilities()
        self.config = IndexConfig.from_mapping(config)
        self.history_limit = settings.HISTORY_LIMIT if history_limit is None else history_limit
        logger.info("IndexService initialized", extra={
            "masking_capability": self.capabilities.masking is not None,
            "history_limit": self.history_limit,
        })

    def compute_all_indices(self, payload: Any, config: Any = None) -> CompositeReport:
        """
        Compute every index for one payload

        Args:
            payload: raw payload mapping (see psys.core.payload) or IndexPayload
            config: optional per-call configuration overrides

        Returns:
            CompositeReport with seven index results
        """
        cfg = self.config if config is None else IndexConfig.from_mapping(config)
        data = self.derive_vectors(
            normalize_payload(payload, self.history_limit, default_entropy=settings.DEFAULT_ENTROPY_HINT)
        )
        weights = cfg.weights

        difference = calculate_difference_index(
            data.traits_self,
            data.traits_env,
            data.structural_self,
            data.structural_env,
            ecology16=data.ecology16 or to_sparse16(data.structural_env),
            entropy_hint=data.entropy_hint,
            masking=self.capabilities.masking,
            alpha=weights.masking_alpha,
        )
        kernel_stability = calculate_kernel_stability_index(
            data.trait_sources,
            history=data.history,
            entropy_hint=data.entropy_hint,
            sigma0=weights.ksi_sigma0,
            weights=(weights.ksi_source, weights.ksi_time, weights.ksi_context),
            history_limit=self.history_limit,
        )
        self_integration = calculate_self_integration_index(
            data.traits_self,
            data.traits_env,
            data.structural_self,
            data.structural_env,
            weights=(weights.spi_direction, weights.spi_magnitude, weights.spi_structure),
        )

        structural_ok = is_valid_vector8(data.structural_env)
        potential_ok = is_valid_vector8(data.potential)

        if structural_ok:
            circularity_struct = calculate_circularity_index(data.structural_env, kappa=cfg.circularity_kappa)
            completeness = calculate_completeness_index(
                data.structural_env,
                thresholds=cfg.thresholds.perfection,
                dimension_names=self.capabilities.structural_names,
                weights=(weights.pi_gamma, weights.pi_worst, weights.pi_spread),
            )
        else:
            circularity_struct = IndexResult.unavailable("struct8")
            completeness = IndexResult.unavailable("struct8")

        if potential_ok:
            circularity_pot = calculate_circularity_index(data.potential, kappa=cfg.circularity_kappa)
        else:
            circularity_pot = IndexResult.unavailable("pot8")

        confidence = calculate_confidence_index(
            data.traits_self,
            data.potential,
            self_integration=self_integration.value / 100,
            potential_names=self.capabilities.potential_names,
            drive_key=cfg.confidence.drive_key,
            influence_key=cfg.confidence.influence_key,
            weights=(weights.cfi_disposition, weights.cfi_evidence, weights.cfi_consistency),
        )

        # Provenance overrides: only genuine self and environment answers earn "high"
        provenance = RELIABILITY_HIGH if data.self_is_genuine and data.env_is_genuine else RELIABILITY_LOW

        report = CompositeReport(
            difference=difference.with_reliability(provenance),
            kernel_stability=kernel_stability.with_reliability(provenance),
            self_integration=self_integration.with_reliability(provenance),
            circularity_struct=circularity_struct,
            circularity_pot=circularity_pot,
            completeness=completeness,
            confidence=confidence.with_reliability(provenance),
            computed_at=datetime.now(timezone.utc),
        )

        logger.info("Computed indices", extra={
            "values": {name: result.value for name, result in report.indices().items()},
            "reliability": report.reliability,
        })
        return report

    def derive_vectors(self, data: IndexPayload) -> IndexPayload:
        """Fill structural / potential vectors from traits when the supplied ones are not valid"""
        source = data.mapping_source
        if source is None:
            return data

        updates = {}
        if not is_valid_vector8(data.structural_env):
            updates["structural_env"] = self._map(self.capabilities.traits_to_structural, source, "traits_to_structural")
        if not is_valid_vector8(data.potential):
            updates["potential"] = self._map(self.capabilities.traits_to_potential, source, "traits_to_potential")

        if updates:
            logger.debug(f"Derived vectors from traits: {sorted(updates)}")
        return replace(data, **updates) if updates else data

    @staticmethod
    def _map(mapper: TraitMapperFn, traits: Sequence[float], name: str):
        try:
            mapped = mapper(list(traits))
        except Exception as e:
            raise CapabilityError(name, f"Trait mapper '{name}' failed: {e}") from e

        vector = coerce_vector(mapped, 8)
        if vector is None:
            logger.warning(f"Trait mapper '{name}' returned an unusable vector, using neutral baseline")
            return (50.0,) * 8
        return vector


# Singleton instance
_index_service: Optional[IndexService] = None


def get_index_service() -> IndexService:
    """Get or create singleton index service instance"""
    global _index_service
    if _index_service is None:
        _index_service = IndexService()
    return _index_service


def compute_all_indices(
    payload: Any,
    config: Any = None,
    capabilities: Optional[IndexCapabilities] = None,
) -> CompositeReport:
    """Compute every index with a one-off service (or the shared one when no capabilities are given)"""
    service = get_index_service() if capabilities is None else IndexService(capabilities)
    return service.compute_all_indices(payload, config)
