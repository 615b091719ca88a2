"""
Index engine configuration

Immutable pydantic models holding every tuning coefficient used by the
calculators. Partial overrides are deep-merged over the defaults; an
override that fails validation is discarded and the defaults are kept.
"""
from typing import Any, Dict, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from psys.utils.logger import get_logger

logger = get_logger(__name__)


class IndexWeights(BaseModel):
    """Weights and scale constants for the seven calculators"""

    model_config = ConfigDict(frozen=True, extra="ignore")

    # Difference (fallback path): share of the L1 term, cosine term gets the rest
    masking_alpha: float = Field(default=0.5, ge=0.0, le=1.0)

    # Kernel stability
    ksi_sigma0: float = Field(default=0.25, gt=0.0)
    ksi_source: float = Field(default=0.5, ge=0.0)
    ksi_time: float = Field(default=0.3, ge=0.0)
    ksi_context: float = Field(default=0.2, ge=0.0)

    # Self integration
    spi_direction: float = Field(default=0.5, ge=0.0)
    spi_magnitude: float = Field(default=0.3, ge=0.0)
    spi_structure: float = Field(default=0.2, ge=0.0)

    # Circularity
    ci_kappa: float = Field(default=0.30, gt=0.0)

    # Completeness (perfection)
    pi_gamma: float = Field(default=0.6, ge=0.0)
    pi_worst: float = Field(default=0.3, ge=0.0)
    pi_spread: float = Field(default=0.1, ge=0.0)

    # Confidence
    cfi_disposition: float = Field(default=0.5, ge=0.0)
    cfi_evidence: float = Field(default=0.3, ge=0.0)
    cfi_consistency: float = Field(default=0.2, ge=0.0)


class PerfectionThresholds(BaseModel):
    """Per-dimension completeness targets, all in [0, 1]"""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    keys: Optional[Tuple[str, ...]] = None
    baseline_dims: Tuple[str, ...] = ()
    T: Dict[str, float] = Field(default_factory=dict)
    defaultT: float = Field(default=0.6, ge=0.0, le=1.0)

    def target_for(self, dimension: str) -> float:
        target = self.T.get(dimension, self.defaultT)
        return min(1.0, max(0.0, float(target)))


class ThresholdSettings(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    perfection: PerfectionThresholds = Field(default_factory=PerfectionThresholds)


class ConfidenceSettings(BaseModel):
    """Names looked up in the potential vector's name table for evidence"""

    model_config = ConfigDict(frozen=True, extra="ignore")

    drive_key: str = "drive"
    influence_key: str = "influence"


class CircularitySettings(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    kappa: Optional[float] = Field(default=None, gt=0.0)


class IndexConfig(BaseModel):
    """Complete configuration for one index computation"""

    model_config = ConfigDict(frozen=True, extra="ignore")

    weights: IndexWeights = Field(default_factory=IndexWeights)
    thresholds: ThresholdSettings = Field(default_factory=ThresholdSettings)
    confidence: ConfidenceSettings = Field(default_factory=ConfidenceSettings)
    circularity: CircularitySettings = Field(default_factory=CircularitySettings)

    @property
    def circularity_kappa(self) -> float:
        """circularity.kappa when set, otherwise weights.ci_kappa"""
        if self.circularity.kappa is not None:
            return self.circularity.kappa
        return self.weights.ci_kappa

    @classmethod
    def from_mapping(cls, overrides: Any = None) -> "IndexConfig":
        """
        Build a configuration from a partial override mapping

        Args:
            overrides: None, an IndexConfig, or a nested mapping with any
                subset of the weights/thresholds/confidence/circularity keys

        Returns:
            Validated configuration; the defaults when overrides are invalid
        """
        if overrides is None:
            return DEFAULT_CONFIG
        if isinstance(overrides, IndexConfig):
            return overrides
        if not isinstance(overrides, Mapping):
            logger.warning(f"Ignoring non-mapping index configuration: {type(overrides).__name__}")
            return DEFAULT_CONFIG

        merged = _deep_merge(DEFAULT_CONFIG.model_dump(), overrides)
        try:
            return cls.model_validate(merged)
        except ValidationError as e:
            logger.warning(f"Invalid index configuration override, using defaults: {e.errors()}")
            return DEFAULT_CONFIG


def _deep_merge(base: Dict[str, Any], override: Mapping[str, Any]) -> Dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, Mapping) and isinstance(merged.get(key), dict) and key != "T":
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


DEFAULT_CONFIG = IndexConfig()
