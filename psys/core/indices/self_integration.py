"""
Self-Integration Index

How congruent the self-view is with the perceived presentation:
direction alignment, magnitude agreement and structural alignment.
"""
from typing import Sequence, Tuple

import numpy as np

from psys.core.results import IndexResult, RELIABILITY_HIGH, RELIABILITY_LOW
from psys.core.statistics import (
    center,
    clip01,
    compress_to_unit,
    cosine_similarity,
    is_default_vector,
    soft_clamp01,
    to_percent,
)

TYPE_HIGH = "highly congruent/unified presentation"
TYPE_PARTIAL = "partially congruent/mild deviation"
TYPE_LOW = "insufficient congruence/internal split"

RMSE_SCALE = 0.6


def calculate_self_integration_index(
    traits_self: Sequence[float],
    traits_env: Sequence[float],
    structural_self: Sequence[float],
    structural_env: Sequence[float],
    weights: Tuple[float, float, float] = (0.5, 0.3, 0.2),
) -> IndexResult:
    """
    Calculate the Self-Integration Index

    Formula: x = w1 * cos01(traits) + w2 * (1 - min(1, rmse / 0.6)) + w3 * cos01(structure)

    Compressed (k=0.75) and clamped to [0.07, 0.97].
    """
    s = center(traits_self)
    e = center(traits_env)

    direction = clip01((cosine_similarity(s, e) + 1) / 2)
    rmse = float(np.sqrt(np.mean((s - e) ** 2))) if len(s) == len(e) and len(s) else 0.0
    magnitude = 1 - min(1.0, rmse / RMSE_SCALE)
    structure = clip01((cosine_similarity(center(structural_self), center(structural_env)) + 1) / 2)

    w_dir, w_mag, w_struct = weights
    x = clip01(w_dir * direction + w_mag * magnitude + w_struct * structure)
    x = soft_clamp01(compress_to_unit(x, 0.75), 0.07, 0.97)

    if x >= 0.75:
        index_type = TYPE_HIGH
    elif x >= 0.55:
        index_type = TYPE_PARTIAL
    else:
        index_type = TYPE_LOW

    reliability = (
        RELIABILITY_LOW
        if is_default_vector(traits_env) or is_default_vector(structural_env)
        else RELIABILITY_HIGH
    )

    return IndexResult(
        value=to_percent(x),
        components={
            "dir_alignment": to_percent(direction),
            "mag_alignment": to_percent(magnitude),
            "struct_alignment": to_percent(structure),
        },
        type=index_type,
        signals=(),
        reliability=reliability,
    )
