"""
Statistics primitives shared by every index calculator

All functions are pure and defined for every input: empty sequences,
zero variance and near-zero denominators fall back to constants so that
no calculator ever sees NaN or infinity.
"""
import math
from numbers import Real
from typing import Any, List, Sequence

import numpy as np

NEUTRAL_SCORE = 50.0
DEFAULT_TOLERANCE = 1.5


def _as_array(xs: Sequence[float], fill: float = NEUTRAL_SCORE) -> np.ndarray:
    """Convert to a float array, replacing missing or non-numeric entries with `fill`"""
    return np.array([_number_or(x, fill) for x in xs], dtype=float)


def _number_or(x: Any, fill: float) -> float:
    if isinstance(x, Real) and not isinstance(x, bool) and math.isfinite(x):
        return float(x)
    return fill


def mean(xs: Sequence[float]) -> float:
    """Arithmetic mean, 0 for an empty sequence"""
    if len(xs) == 0:
        return 0.0
    return float(np.mean(_as_array(xs)))


def stdev(xs: Sequence[float]) -> float:
    """Population standard deviation (no Bessel correction)"""
    if len(xs) == 0:
        return 0.0
    return float(np.std(_as_array(xs)))


def coefficient_of_variation(xs: Sequence[float], eps: float = 1e-6) -> float:
    """
    stdev / (|mean| + eps)

    Returns 0 when the mean is exactly 0 instead of dividing by eps.
    """
    m = mean(xs)
    if m == 0:
        return 0.0
    return stdev(xs) / (abs(m) + eps)


def median_absolute_deviation(xs: Sequence[float]) -> float:
    """
    Median of |x - mean| with missing entries read as 50

    For an even count the lower of the two middle deviations is returned.
    """
    if len(xs) == 0:
        return 0.0
    values = _as_array(xs)
    deviations = np.sort(np.abs(values - values.mean()))
    return float(deviations[(len(deviations) - 1) // 2])


def clip01(x: float) -> float:
    """Clamp to [0, 1]; NaN maps to 0"""
    if x != x:
        return 0.0
    return max(0.0, min(1.0, float(x)))


def compress_to_unit(x01: float, k: float = 0.7) -> float:
    """Shrink the distance from 0.5 by factor k"""
    return 0.5 + (x01 - 0.5) * k


def soft_clamp01(x01: float, lo: float = 0.05, hi: float = 0.95) -> float:
    """Clamp into [lo, hi] so an index never reports a literal 0 or 100"""
    if x01 != x01:
        return lo
    return max(lo, min(hi, float(x01)))


def to_percent(x01: float) -> int:
    """Round clip01(x01) * 100 half-up to an integer"""
    return int(math.floor(clip01(x01) * 100 + 0.5))


def is_default_vector(v: Any, tolerance: float = DEFAULT_TOLERANCE) -> bool:
    """True when `v` is not a sequence or every entry sits within tolerance of 50"""
    if not isinstance(v, (list, tuple, np.ndarray)):
        return True
    return all(abs(_number_or(x, NEUTRAL_SCORE) - NEUTRAL_SCORE) <= tolerance for x in v)


def top_k_indices(xs: Sequence[float], k: int, ascending: bool = False) -> List[int]:
    """
    Indices of the k largest values (smallest when ascending)

    Ties keep their original order.
    """
    values = [_number_or(x, NEUTRAL_SCORE) for x in xs]
    order = sorted(range(len(values)), key=lambda i: values[i], reverse=not ascending)
    return order[:max(0, k)]


def center(v: Sequence[float]) -> np.ndarray:
    """Map 0-100 scores to [-1, 1] around the neutral midpoint"""
    return (_as_array(v) - NEUTRAL_SCORE) / NEUTRAL_SCORE


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """Cosine of the angle between a and b; 0 when either has zero norm"""
    va = np.asarray(a, dtype=float)
    vb = np.asarray(b, dtype=float)
    n = min(len(va), len(vb))
    if n == 0:
        return 0.0
    va, vb = va[:n], vb[:n]
    norm = float(np.linalg.norm(va) * np.linalg.norm(vb))
    if norm <= 1e-12:
        return 0.0
    return max(-1.0, min(1.0, float(np.dot(va, vb)) / norm))
