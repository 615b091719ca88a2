"""
Index result and composite report types
"""
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from datetime import datetime, timezone
from typing import Any, Dict, Mapping, Optional, Tuple

RELIABILITY_LOW = "low"
RELIABILITY_MID = "mid"
RELIABILITY_HIGH = "high"
RELIABILITY_LEVELS = (RELIABILITY_LOW, RELIABILITY_MID, RELIABILITY_HIGH)

UNAVAILABLE_TYPE = "—"

INDEX_NAMES = (
    "difference",
    "kernel_stability",
    "self_integration",
    "circularity_struct",
    "circularity_pot",
    "completeness",
    "confidence",
)


@dataclass(frozen=True)
class IndexResult:
    """Uniform result of one index calculator"""
    value: int  # 0-100
    type: str = UNAVAILABLE_TYPE
    components: Mapping[str, Any] = field(default_factory=dict)
    signals: Tuple[str, ...] = ()
    reliability: str = RELIABILITY_LOW
    needed: Optional[str] = None  # set when the required vector was unavailable
    details: Optional[Mapping[str, int]] = None

    def __post_init__(self):
        value = int(self.value) if self.value == self.value else 0
        object.__setattr__(self, "value", max(0, min(100, value)))
        object.__setattr__(self, "signals", tuple(self.signals))
        object.__setattr__(self, "components", MappingProxyType(dict(self.components)))
        if self.details is not None:
            object.__setattr__(self, "details", MappingProxyType(dict(self.details)))
        if self.reliability not in RELIABILITY_LEVELS:
            object.__setattr__(self, "reliability", RELIABILITY_LOW)

    @classmethod
    def unavailable(cls, needed: str) -> "IndexResult":
        """Degraded result substituted when a calculator cannot run"""
        return cls(value=0, reliability=RELIABILITY_LOW, needed=needed)

    @property
    def is_available(self) -> bool:
        return self.needed is None

    def with_reliability(self, reliability: str) -> "IndexResult":
        return replace(self, reliability=reliability)

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "value": self.value,
            "components": dict(self.components),
            "type": self.type,
            "signals": list(self.signals),
            "reliability": self.reliability,
        }
        if self.needed is not None:
            data["needed"] = self.needed
        if self.details is not None:
            data["confidence_details"] = dict(self.details)
        return data


@dataclass(frozen=True)
class CompositeReport:
    """All seven indices from one computation"""
    difference: IndexResult
    kernel_stability: IndexResult
    self_integration: IndexResult
    circularity_struct: IndexResult
    circularity_pot: IndexResult
    completeness: IndexResult
    confidence: IndexResult
    computed_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def perfection(self) -> IndexResult:
        return self.completeness

    @property
    def reliability(self) -> Dict[str, str]:
        return {name: getattr(self, name).reliability for name in INDEX_NAMES}

    def indices(self) -> Dict[str, IndexResult]:
        return {name: getattr(self, name) for name in INDEX_NAMES}

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {name: result.to_dict() for name, result in self.indices().items()}
        data["confidence_details"] = dict(self.confidence.details) if self.confidence.details else None
        data["reliability"] = self.reliability
        data["computed_at"] = self.computed_at.isoformat()
        return data
