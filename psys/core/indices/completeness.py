"""
Completeness (Perfection) Index

Baseline coverage + worst dimension + spread penalty over an 8-D vector.
"""
import math
from typing import Dict, List, Optional, Sequence, Tuple

from psys.core.index_config import PerfectionThresholds
from psys.core.results import IndexResult, RELIABILITY_HIGH, RELIABILITY_MID
from psys.core.statistics import (
    clip01,
    coefficient_of_variation,
    compress_to_unit,
    mean,
    soft_clamp01,
    to_percent,
)

TYPE_GOOD = "good completeness/no major gaps"
TYPE_BASIC = "basically complete/isolated gaps"
TYPE_GAPS = "significant gaps/prioritize remediation"

SPREAD_SCALE = 0.35
MAX_SHORTFALLS = 4
EPS = 1e-6


def _dimension_labels(count: int, thresholds: PerfectionThresholds, names: Optional[Sequence[str]]) -> List[str]:
    labels = list(thresholds.keys or names or [])[:count]
    labels += [f"dimension #{i + 1}" for i in range(len(labels), count)]
    return labels


def find_shortfalls(values01: Sequence[float], targets: Sequence[float], labels: Sequence[str]) -> List[Dict]:
    """Dimensions below target, largest gap first, at most four (all as 0-100 integers)"""
    shortfalls = []
    for label, value, target in zip(labels, values01, targets):
        gap = max(0, int(math.floor((target - value) * 100 + 0.5)))
        if gap > 0:
            shortfalls.append({
                "dimension": label,
                "value": to_percent(value),
                "target": to_percent(target),
                "gap": gap,
            })
    shortfalls.sort(key=lambda s: s["gap"], reverse=True)
    return shortfalls[:MAX_SHORTFALLS]


def calculate_completeness_index(
    vector: Sequence[float],
    thresholds: Optional[PerfectionThresholds] = None,
    dimension_names: Optional[Sequence[str]] = None,
    weights: Tuple[float, float, float] = (0.6, 0.3, 0.1),
) -> IndexResult:
    """
    Calculate the Completeness Index

    coverage_i = clip01((x_i - T_i) / (1 - T_i + eps)), so a dimension sitting
    exactly on its target has zero coverage.

    Formula: x = w1 * mean(coverage) + w2 * worst + w3 * (1 - min(1, cv / 0.35))

    `worst` is taken over thresholds.baseline_dims when any of them is present,
    otherwise over every dimension.
    """
    thresholds = thresholds or PerfectionThresholds()
    values01 = [clip01(x / 100) for x in vector]
    labels = _dimension_labels(len(values01), thresholds, dimension_names)
    targets = [thresholds.target_for(label) for label in labels]

    coverage = [clip01((x - t) / (1 - t + EPS)) for x, t in zip(values01, targets)]
    coverage_mean = mean(coverage)

    baseline = [c for label, c in zip(labels, coverage) if label in thresholds.baseline_dims]
    pool = baseline or coverage
    worst = min(pool) if pool else 0.0
    spread = coefficient_of_variation(values01)

    w_cov, w_worst, w_spread = weights
    x = clip01(w_cov * coverage_mean + w_worst * worst + w_spread * (1 - min(1.0, spread / SPREAD_SCALE)))
    x = soft_clamp01(compress_to_unit(x, 0.75), 0.05, 0.97)

    if x >= 0.75:
        index_type = TYPE_GOOD
    elif x >= 0.55:
        index_type = TYPE_BASIC
    else:
        index_type = TYPE_GAPS

    shortfalls = find_shortfalls(values01, targets, labels)

    return IndexResult(
        value=to_percent(x),
        components={
            "coverage_mean": coverage_mean,
            "worst": worst,
            "spread": spread,
            "shortfalls": shortfalls,
        },
        type=index_type,
        signals=tuple(f"{s['dimension']} -{s['gap']}" for s in shortfalls),
        reliability=RELIABILITY_HIGH if len(values01) >= 8 else RELIABILITY_MID,
    )
