"""
Big Five to structural / potential vector mapping

Fixed linear weights map the five traits [O, C, E, A, N] onto two
8-dimensional derived vectors, followed by a mild power curve applied to
the distance from the neutral midpoint so that an all-50 input maps to
the all-50 baseline.
"""
import math
from numbers import Real
from typing import Any, List, Sequence

import numpy as np

from psys.utils.logger import get_logger

logger = get_logger(__name__)

TRAIT_DIMENSIONS = (
    "openness",
    "conscientiousness",
    "extraversion",
    "agreeableness",
    "neuroticism",
)

STRUCTURAL_DIMENSIONS = (
    "leadership",
    "execution",
    "innovation",
    "collaboration",
    "learning",
    "resilience",
    "communication",
    "decision",
)

POTENTIAL_DIMENSIONS = (
    "strategic_thinking",
    "innovation_potential",
    "leadership_potential",
    "learning_potential",
    "adaptability",
    "collaboration_potential",
    "execution_potential",
    "growth_potential",
)

# Rows: derived dimension; columns: O, C, E, A, N
TRAITS_TO_STRUCTURAL = np.array([
    [0.25, 0.15, 0.35, 0.10, -0.15],  # leadership
    [0.10, 0.50, 0.20, 0.05, -0.20],  # execution
    [0.45, 0.10, 0.25, 0.05, -0.10],  # innovation
    [0.05, 0.15, 0.30, 0.45, -0.15],  # collaboration
    [0.40, 0.25, 0.15, 0.10, -0.10],  # learning
    [0.15, 0.30, 0.20, 0.10, -0.40],  # resilience
    [0.10, 0.15, 0.45, 0.25, -0.15],  # communication
    [0.20, 0.35, 0.25, 0.05, -0.20],  # decision
])

TRAITS_TO_POTENTIAL = np.array([
    [0.35, 0.25, 0.20, 0.05, -0.15],  # strategic_thinking
    [0.50, 0.10, 0.20, 0.05, -0.10],  # innovation_potential
    [0.20, 0.20, 0.40, 0.15, -0.20],  # leadership_potential
    [0.45, 0.20, 0.15, 0.15, -0.10],  # learning_potential
    [0.30, 0.15, 0.25, 0.20, -0.25],  # adaptability
    [0.10, 0.15, 0.25, 0.50, -0.15],  # collaboration_potential
    [0.15, 0.45, 0.25, 0.10, -0.20],  # execution_potential
    [0.35, 0.25, 0.25, 0.20, -0.20],  # growth_potential
])

STRUCTURAL_GAMMA = 1.05
POTENTIAL_GAMMA = 1.08

BASELINE_VECTOR8 = (50, 50, 50, 50, 50, 50, 50, 50)


def clamp(value: float, lo: float = 0.0, hi: float = 100.0) -> float:
    """Clamp value into [lo, hi]"""
    return max(lo, min(hi, value))


def apply_curve(x: float, gamma: float = 1.1) -> float:
    """
    Power curve on the distance from 50

    50 + sign(d) * 50 * (|d| / 50) ** gamma, with d = x - 50. Keeps 0, 50
    and 100 fixed and pulls intermediate scores slightly towards neutral.
    """
    d = clamp(x) - 50.0
    return 50.0 + math.copysign(50.0 * (abs(d) / 50.0) ** gamma, d)


def _round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def _trait_array(traits: Any) -> np.ndarray:
    """Parse a 5-trait input or raise ValueError"""
    if isinstance(traits, dict):
        traits = [traits.get(name) for name in TRAIT_DIMENSIONS]
    if not isinstance(traits, (list, tuple, np.ndarray)) or len(traits) != 5:
        raise ValueError("expected five trait scores")
    values = []
    for x in traits:
        if isinstance(x, Real) and not isinstance(x, bool) and math.isfinite(x):
            values.append(float(x))
        else:
            values.append(50.0)
    return np.array(values, dtype=float)


def _map(traits: Any, matrix: np.ndarray, gamma: float, label: str) -> List[int]:
    try:
        bf = _trait_array(traits)
    except ValueError:
        logger.warning(f"Invalid Big Five input for {label} mapping: {traits!r}")
        return list(BASELINE_VECTOR8)

    scores = 50.0 + matrix @ (bf - 50.0)
    return [_round_half_up(apply_curve(score, gamma)) for score in scores]


def traits_to_structural(traits: Sequence[float]) -> List[int]:
    """Map [O, C, E, A, N] (0-100) to the 8 structural dimensions (0-100 integers)"""
    return _map(traits, TRAITS_TO_STRUCTURAL, STRUCTURAL_GAMMA, "structural")


def traits_to_potential(traits: Sequence[float]) -> List[int]:
    """Map [O, C, E, A, N] (0-100) to the 8 potential dimensions (0-100 integers)"""
    return _map(traits, TRAITS_TO_POTENTIAL, POTENTIAL_GAMMA, "potential")


def to_sparse16(vector8: Sequence[float]) -> List[float]:
    """
    Expand an 8-vector into 16 display slots

    Even slots carry the values, odd slots are zero. Anything that is not an
    8-vector yields sixteen zeros.
    """
    sparse = [0] * 16
    if not isinstance(vector8, (list, tuple, np.ndarray)) or len(vector8) != 8:
        return sparse
    for i, x in enumerate(vector8):
        sparse[i * 2] = x if isinstance(x, Real) and not isinstance(x, bool) else 0
    return sparse


def structural_to_sparse16(structural: Sequence[float]) -> List[float]:
    return to_sparse16(structural)


def potential_to_sparse16(potential: Sequence[float]) -> List[float]:
    return to_sparse16(potential)
