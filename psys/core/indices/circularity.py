"""
Circularity Index

Balance of a derived vector: low coefficient of variation means an even,
round profile on a radar chart.
"""
from typing import Sequence

from psys.core.results import IndexResult, RELIABILITY_HIGH, RELIABILITY_MID
from psys.core.statistics import (
    clip01,
    coefficient_of_variation,
    compress_to_unit,
    mean,
    soft_clamp01,
    to_percent,
    top_k_indices,
)

TYPE_BALANCED_STRONG = "balanced/strong"
TYPE_BALANCED_WEAK = "balanced/weak"
TYPE_SHARP_UNEVEN = "sharp/uneven"
TYPE_WEAK_UNBALANCED = "weak/unbalanced"

DEFAULT_KAPPA = 0.30


def classify_circularity(circ: float, mean01: float) -> str:
    if circ >= 0.5 and mean01 >= 0.5:
        return TYPE_BALANCED_STRONG
    elif circ >= 0.5:
        return TYPE_BALANCED_WEAK
    elif mean01 >= 0.5:
        return TYPE_SHARP_UNEVEN
    return TYPE_WEAK_UNBALANCED


def calculate_circularity_index(vector: Sequence[float], kappa: float = DEFAULT_KAPPA) -> IndexResult:
    """
    Calculate the Circularity Index of an arbitrary-length 0-100 vector

    Formula: circ = 1 - min(1, cv / kappa), compressed (k=0.8) and clamped
    to [0.05, 0.98]. Signals name the two largest spikes above the mean and
    the two deepest dips below it.
    """
    v = list(vector)
    if not kappa or kappa <= 0:
        kappa = DEFAULT_KAPPA

    avg = mean(v)
    cv = coefficient_of_variation(v)
    circ = 1 - min(1.0, cv / kappa)
    circ = soft_clamp01(compress_to_unit(circ, 0.8), 0.05, 0.98)

    mean01 = clip01(avg / 100)

    diffs = [x - avg for x in v]
    spikes = [f"spike #{i + 1}" for i in top_k_indices(diffs, 2)]
    dips = [f"dip #{i + 1}" for i in top_k_indices(diffs, 2, ascending=True)]

    return IndexResult(
        value=to_percent(circ),
        components={"mean_value": mean01, "cv": clip01(cv)},
        type=classify_circularity(circ, mean01),
        signals=tuple(spikes + dips),
        reliability=RELIABILITY_HIGH if len(v) >= 8 else RELIABILITY_MID,
    )
