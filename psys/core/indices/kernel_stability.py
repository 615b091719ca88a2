"""
Kernel Stability Index

Source consistency + time consistency + context load.
"""
from typing import Sequence, Tuple

from psys.core.results import IndexResult, RELIABILITY_HIGH, RELIABILITY_MID
from psys.core.statistics import (
    clip01,
    compress_to_unit,
    mean,
    median_absolute_deviation,
    soft_clamp01,
    stdev,
    to_percent,
    top_k_indices,
)

TYPE_HIGH = "highly stable"
TYPE_MODERATE = "moderately stable"
TYPE_LOW = "low stability/sensitive"

TIME_CONSISTENCY_DEFAULT = 0.6
TIME_MAD_SCALE = 0.15


def calculate_kernel_stability_index(
    sources: Sequence[Sequence[float]],
    history: Sequence[Sequence[float]] = (),
    entropy_hint: float = 0.0,
    sigma0: float = 0.25,
    weights: Tuple[float, float, float] = (0.5, 0.3, 0.2),
    history_limit: int = 5,
) -> IndexResult:
    """
    Calculate the Kernel Stability Index

    Args:
        sources: up to four valid 5-D trait vectors (self plus alternates)
        history: environment trait vectors of past sessions, oldest first
        entropy_hint: context complexity 0-100
        sigma0: cross-source standard deviation treated as fully inconsistent
        weights: source / time / context weights
    """
    sources = [list(v) for v in sources if len(v) == 5][:4]

    # Source consistency: lower spread across sources is better
    per_dim_std = [stdev([v[j] / 100 for v in sources]) for j in range(5)]
    source_consistency = 1 - min(1.0, mean(per_dim_std) / sigma0)

    # Time consistency: MAD of the mean environment score over recent sessions
    recent = list(history)[-history_limit:] if history_limit > 0 else []
    if len(recent) >= 2:
        env_means = [mean(list(h)) / 100 for h in recent]
        time_consistency = 1 - min(1.0, median_absolute_deviation(env_means) / TIME_MAD_SCALE)
    else:
        time_consistency = TIME_CONSISTENCY_DEFAULT

    # Context load: a complex environment costs stability
    context_load = 1 - min(1.0, (entropy_hint or 0) / 100)

    w_source, w_time, w_context = weights
    x = clip01(w_source * source_consistency + w_time * time_consistency + w_context * context_load)
    x = soft_clamp01(compress_to_unit(x, 0.75), 0.08, 0.98)

    if x >= 0.75:
        index_type = TYPE_HIGH
    elif x >= 0.55:
        index_type = TYPE_MODERATE
    else:
        index_type = TYPE_LOW

    noisiest = top_k_indices(per_dim_std, 1)[0]

    return IndexResult(
        value=to_percent(x),
        components={
            "source_consistency": to_percent(source_consistency),
            "time_consistency": to_percent(time_consistency),
            "context_load": to_percent(context_load),
        },
        type=index_type,
        signals=(f"highest cross-source variance: dimension #{noisiest + 1}",),
        reliability=RELIABILITY_HIGH if len(sources) >= 3 else RELIABILITY_MID,
    )
