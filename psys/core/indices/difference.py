"""
Difference Index

Measures the divergence between self-reported and externally perceived
presentation. An injected masking capability is used when available;
otherwise the Big Five geometric difference is the fallback.
"""
from numbers import Real
from typing import Any, Callable, Mapping, Optional, Sequence

import numpy as np

from psys.core.results import IndexResult, RELIABILITY_HIGH, RELIABILITY_LOW, RELIABILITY_MID, UNAVAILABLE_TYPE
from psys.core.statistics import (
    center,
    clip01,
    compress_to_unit,
    cosine_similarity,
    is_default_vector,
    soft_clamp01,
    to_percent,
)
from psys.utils.exceptions import CapabilityError
from psys.utils.logger import get_logger

logger = get_logger(__name__)

MaskingCapability = Callable[..., Mapping[str, Any]]

TYPE_MILD = "mild difference/normal presentation"
TYPE_MODERATE = "moderate/selective presentation"
TYPE_SIGNIFICANT = "significant/strategic presentation"


def classify_difference(x: float) -> str:
    if x < 0.25:
        return TYPE_MILD
    elif x < 0.55:
        return TYPE_MODERATE
    return TYPE_SIGNIFICANT


def calculate_difference_index(
    traits_self: Sequence[float],
    traits_env: Sequence[float],
    structural_self: Sequence[float],
    structural_env: Sequence[float],
    ecology16: Optional[Sequence[float]] = None,
    entropy_hint: float = 0.0,
    masking: Optional[MaskingCapability] = None,
    alpha: float = 0.5,
) -> IndexResult:
    """
    Calculate the Difference Index

    With a masking capability the capability's score (already 0-100), its
    three sub-components, type and signals are adopted as-is. Without one:

        raw = alpha * L1 + (1 - alpha) * (1 - cos01)

    over the centered trait vectors, then compressed (k=0.7) and clamped
    to [0.05, 0.95].
    """
    if masking is not None:
        return _from_masking(masking, structural_self, structural_env, ecology16, entropy_hint)
    return _geometric_difference(traits_self, traits_env, alpha)


def _from_masking(
    masking: MaskingCapability,
    structural_self: Sequence[float],
    structural_env: Sequence[float],
    ecology16: Optional[Sequence[float]],
    entropy_hint: float,
) -> IndexResult:
    try:
        result = masking(
            ecology16=list(ecology16 or []),
            structural_self=list(structural_self),
            structural_env=list(structural_env),
            entropy=entropy_hint,
        )
    except Exception as e:
        raise CapabilityError("masking", f"Masking capability failed: {e}") from e

    if result is None:
        result = {}
    if not isinstance(result, Mapping):
        raise CapabilityError("masking", f"Masking capability returned {type(result).__name__}, expected a mapping")

    score = result.get("masking_score")
    if not isinstance(score, Real) or isinstance(score, bool) or score != score:
        score = 0

    reliability = (
        RELIABILITY_LOW
        if is_default_vector(list(structural_env)) or is_default_vector(list(structural_self))
        else RELIABILITY_HIGH
    )

    return IndexResult(
        value=to_percent(float(score) / 100),
        components={
            "alignment_gap": result.get("alignment_gap"),
            "intentionality": result.get("intentionality"),
            "cost": result.get("cost"),
        },
        type=result.get("type") or UNAVAILABLE_TYPE,
        signals=tuple(str(s) for s in (result.get("signals") or [])),
        reliability=reliability,
    )


def _geometric_difference(traits_self: Sequence[float], traits_env: Sequence[float], alpha: float) -> IndexResult:
    s = center(traits_self)
    e = center(traits_env)

    l1 = float(np.mean(np.abs(s - e))) if len(s) else 0.0
    cos01 = clip01((cosine_similarity(s, e) + 1) / 2)

    raw = alpha * l1 + (1 - alpha) * (1 - cos01)
    x = soft_clamp01(compress_to_unit(raw, 0.7), 0.05, 0.95)

    logger.debug(f"Difference fallback: l1={l1:.3f} cos01={cos01:.3f} raw={raw:.3f}")

    reliability = (
        RELIABILITY_LOW
        if is_default_vector(list(traits_env)) or is_default_vector(list(traits_self))
        else RELIABILITY_MID
    )

    return IndexResult(
        value=to_percent(x),
        components={"l1": to_percent(l1), "one_minus_cos": to_percent(1 - cos01)},
        type=classify_difference(x),
        signals=(),
        reliability=reliability,
    )
