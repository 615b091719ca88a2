"""
Assessment payload normalization

Raw payloads arrive as loosely shaped mappings (JSON bodies, browser
session records). `normalize_payload` is the single place where missing or
malformed fields are replaced by neutral defaults; every calculator
downstream receives fully populated vectors plus provenance flags.

Recognized raw keys:
    bf_self, bf_env              5 trait scores (list or {trait: score})
    bf_s2, bf_s3, bf_s4          alternate trait sources
    struct_self8                 structural self vector
    struct_env8 / struct8        structural environment vector
    pot8 / pot_env8              potential vector
    eco16                        ecology display vector
    entropy_hint                 0-100 context complexity
    history                      [{"bf_env": [...]}, ...] (or "traitEnv")
"""
import math
from dataclasses import dataclass
from numbers import Real
from typing import Any, Mapping, Optional, Tuple

from psys.core.statistics import NEUTRAL_SCORE
from psys.core.trait_mapper import TRAIT_DIMENSIONS
from psys.utils.logger import get_logger

logger = get_logger(__name__)

Vector = Tuple[float, ...]

NEUTRAL_TRAITS: Vector = (NEUTRAL_SCORE,) * 5
NEUTRAL_VECTOR8: Vector = (NEUTRAL_SCORE,) * 8

ALTERNATE_SOURCE_KEYS = ("bf_s2", "bf_s3", "bf_s4")


@dataclass(frozen=True)
class IndexPayload:
    """Fully defaulted calculator input"""
    traits_self: Vector = NEUTRAL_TRAITS
    traits_env: Vector = NEUTRAL_TRAITS
    has_traits_self: bool = False
    has_traits_env: bool = False
    alternate_traits: Tuple[Vector, ...] = ()
    structural_self: Vector = NEUTRAL_VECTOR8
    structural_env: Vector = NEUTRAL_VECTOR8
    potential: Vector = NEUTRAL_VECTOR8
    ecology16: Optional[Vector] = None
    entropy_hint: float = 0.0
    history: Tuple[Vector, ...] = ()

    @property
    def trait_sources(self) -> Tuple[Vector, ...]:
        """Supplied 5-D trait vectors: self first, then alternates"""
        head = (self.traits_self,) if self.has_traits_self else ()
        return head + self.alternate_traits

    @property
    def self_is_genuine(self) -> bool:
        return self.has_traits_self and not is_uniform_neutral(self.traits_self)

    @property
    def env_is_genuine(self) -> bool:
        return self.has_traits_env and not is_uniform_neutral(self.traits_env)

    @property
    def mapping_source(self) -> Optional[Vector]:
        """Trait vector used to derive missing 8-D vectors, environment preferred"""
        if self.has_traits_env:
            return self.traits_env
        if self.has_traits_self:
            return self.traits_self
        return None


def is_uniform_neutral(v: Vector) -> bool:
    """True when every entry is exactly the neutral score"""
    return len(v) > 0 and all(x == NEUTRAL_SCORE for x in v)


def is_valid_vector8(v: Optional[Vector]) -> bool:
    """Exactly 8 entries and not the uniform no-signal default"""
    return v is not None and len(v) == 8 and not is_uniform_neutral(v)


def _score(x: Any) -> float:
    if isinstance(x, Real) and not isinstance(x, bool) and math.isfinite(x):
        return float(x)
    return NEUTRAL_SCORE


def coerce_vector(value: Any, length: int) -> Optional[Vector]:
    """
    Read a score vector of `length` entries

    Missing or non-numeric entries become 50. A non-empty trait list shorter
    than five is padded with 50s, like a partial trait mapping. Returns None
    when the value is not a sequence, is empty, or has the wrong length.
    """
    if isinstance(value, Mapping) and length == len(TRAIT_DIMENSIONS):
        if not any(name in value for name in TRAIT_DIMENSIONS):
            return None
        value = [value.get(name) for name in TRAIT_DIMENSIONS]
    if isinstance(value, (str, bytes)) or not hasattr(value, "__len__") or not hasattr(value, "__iter__"):
        return None
    if length == len(TRAIT_DIMENSIONS) and 0 < len(value) < length:
        value = list(value) + [None] * (length - len(value))
    if len(value) != length:
        return None
    return tuple(_score(x) for x in value)


def _first_present(raw: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if raw.get(key) is not None:
            return raw[key]
    return None


def _history_vectors(history: Any, limit: int) -> Tuple[Vector, ...]:
    if not isinstance(history, (list, tuple)) or limit <= 0:
        return ()
    vectors = []
    for entry in list(history)[-limit:]:
        env = None
        if isinstance(entry, Mapping):
            env = coerce_vector(_first_present(entry, "bf_env", "traitEnv", "trait_env"), 5)
        vectors.append(env if env is not None else NEUTRAL_TRAITS)
    return tuple(vectors)


def _entropy(value: Any, default: float = 0.0) -> float:
    if isinstance(value, Real) and not isinstance(value, bool) and math.isfinite(value):
        return min(100.0, max(0.0, float(value)))
    return min(100.0, max(0.0, float(default)))


def normalize_payload(raw: Any, history_limit: int = 5, default_entropy: float = 0.0) -> IndexPayload:
    """
    Produce a fully defaulted IndexPayload from a raw payload

    Never raises: anything unusable is replaced by neutral defaults.
    """
    if isinstance(raw, IndexPayload):
        return raw
    if not isinstance(raw, Mapping):
        if raw is not None:
            logger.warning(f"Payload is not a mapping ({type(raw).__name__}), using defaults")
        raw = {}

    traits_self = coerce_vector(raw.get("bf_self"), 5)
    traits_env = coerce_vector(raw.get("bf_env"), 5)
    alternates = tuple(
        v for v in (coerce_vector(raw.get(key), 5) for key in ALTERNATE_SOURCE_KEYS)
        if v is not None
    )

    structural_self = coerce_vector(raw.get("struct_self8"), 8)
    structural_env = coerce_vector(_first_present(raw, "struct8", "struct_env8"), 8)
    potential = coerce_vector(_first_present(raw, "pot8", "pot_env8"), 8)

    return IndexPayload(
        traits_self=traits_self or NEUTRAL_TRAITS,
        traits_env=traits_env or NEUTRAL_TRAITS,
        has_traits_self=traits_self is not None,
        has_traits_env=traits_env is not None,
        alternate_traits=alternates,
        structural_self=structural_self or NEUTRAL_VECTOR8,
        structural_env=structural_env or NEUTRAL_VECTOR8,
        potential=potential or NEUTRAL_VECTOR8,
        ecology16=coerce_vector(raw.get("eco16"), 16),
        entropy_hint=_entropy(raw.get("entropy_hint"), default_entropy),
        history=_history_vectors(raw.get("history"), history_limit),
    )
