"""
Confidence Index

Disposition (traits) + behavioural evidence (potential vector) + consistency
(the self-integration score).
"""
import math
from numbers import Real
from typing import Any, Optional, Sequence, Tuple

from psys.core.results import IndexResult, RELIABILITY_HIGH
from psys.core.statistics import clip01, compress_to_unit, soft_clamp01, to_percent

TYPE_HIGH = "high confidence/stable output"
TYPE_MODERATE = "moderate/context-dependent"
TYPE_LOW = "low confidence/needs structural support"

# Display-only breakdown; not recomputed from the configured weights
CONFIDENCE_DETAILS = {"personality_ratio": 50, "evidence_ratio": 30, "consistency_ratio": 20}


def lookup_dimensions(names: Optional[Sequence[str]], keys: Sequence[str]) -> Tuple[Optional[int], ...]:
    """Resolve dimension names to indices; None for every key without a name table"""
    if not names:
        return tuple(None for _ in keys)
    table = {name: i for i, name in enumerate(names)}
    return tuple(table.get(key) for key in keys)


def _component(vector: Sequence[float], index: Optional[int], fallback: int) -> float:
    i = fallback if index is None else index
    if i >= len(vector):
        return 0.5
    return clip01(vector[i] / 100)


def _consistency(value: Any) -> float:
    if isinstance(value, Real) and not isinstance(value, bool) and math.isfinite(value):
        return float(value)
    return 0.5


def calculate_confidence_index(
    traits: Sequence[float],
    potential: Sequence[float],
    self_integration: Any = 0.5,
    potential_names: Optional[Sequence[str]] = None,
    drive_key: str = "drive",
    influence_key: str = "influence",
    weights: Tuple[float, float, float] = (0.5, 0.3, 0.2),
) -> IndexResult:
    """
    Calculate the Confidence Index

    disposition = 0.45E + 0.35(1-N) + 0.20C
    evidence    = 0.6 * drive + 0.4 * influence

    drive/influence are looked up by name in the potential vector's name
    table, falling back to indices 0 and 1. A missing or non-finite
    self-integration score counts as 0.5.
    """
    extraversion = clip01(traits[2] / 100)
    neuroticism = clip01(traits[4] / 100)
    conscientiousness = clip01(traits[1] / 100)
    disposition = clip01(0.45 * extraversion + 0.35 * (1 - neuroticism) + 0.20 * conscientiousness)

    drive_idx, influence_idx = lookup_dimensions(potential_names, (drive_key, influence_key))
    drive = _component(potential, drive_idx, 0)
    influence = _component(potential, influence_idx, 1)
    evidence = clip01(0.6 * drive + 0.4 * influence)

    consistency = _consistency(self_integration)

    w_disp, w_evid, w_cons = weights
    x = clip01(w_disp * disposition + w_evid * evidence + w_cons * clip01(consistency))
    x = soft_clamp01(compress_to_unit(x, 0.8), 0.06, 0.97)

    if x >= 0.75:
        index_type = TYPE_HIGH
    elif x >= 0.55:
        index_type = TYPE_MODERATE
    else:
        index_type = TYPE_LOW

    return IndexResult(
        value=to_percent(x),
        components={
            "disposition": to_percent(disposition),
            "evidence": to_percent(evidence),
            "consistency": to_percent(consistency),
        },
        type=index_type,
        signals=(),
        reliability=RELIABILITY_HIGH,
        details=dict(CONFIDENCE_DETAILS),
    )
