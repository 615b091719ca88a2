"""
API response schemas
"""
from typing import Optional, Dict, Any, List, Literal
from pydantic import BaseModel, Field
from datetime import datetime, timezone


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class IndexResultSchema(BaseModel):
    """One index result"""

    value: int = Field(ge=0, le=100, description="Index value as an integer percentage")
    components: Dict[str, Any] = Field(default_factory=dict, description="Named sub-scores")
    type: str = Field(description="Qualitative label")
    signals: List[str] = Field(default_factory=list, description="Short diagnostic strings")
    reliability: Literal["low", "mid", "high"] = Field(description="Confidence in the inputs")
    needed: Optional[str] = Field(None, description="Vector that was required but unavailable")
    confidence_details: Optional[Dict[str, int]] = Field(None, description="Display-only weight breakdown")


class IndexReportResponse(BaseModel):
    """Composite report of all seven indices"""

    success: bool = Field(default=True)
    difference: IndexResultSchema
    kernel_stability: IndexResultSchema
    self_integration: IndexResultSchema
    circularity_struct: IndexResultSchema
    circularity_pot: IndexResultSchema
    completeness: IndexResultSchema
    confidence: IndexResultSchema
    confidence_details: Optional[Dict[str, int]] = None
    reliability: Dict[str, Literal["low", "mid", "high"]]
    computed_at: datetime

    class Config:
        json_schema_extra = {
            "example": {
                "success": True,
                "difference": {
                    "value": 15,
                    "components": {"l1": 0, "one_minus_cos": 0},
                    "type": "mild difference/normal presentation",
                    "signals": [],
                    "reliability": "high"
                },
                "reliability": {"difference": "high"},
                "computed_at": "2025-01-15T10:30:00+00:00"
            }
        }


class TraitMappingResponse(BaseModel):
    """Derived vectors for one Big Five input"""

    structural: List[float]
    potential: List[float]
    structural_sparse16: List[float]
    potential_sparse16: List[float]
    structural_dimensions: List[str]
    potential_dimensions: List[str]


class HealthResponse(BaseModel):
    """Health check response schema"""

    status: str = Field(description="Health status")
    version: str = Field(description="API version")
    timestamp: datetime = Field(default_factory=_utcnow)

    class Config:
        json_schema_extra = {
            "example": {
                "status": "healthy",
                "version": "1.0.0",
                "timestamp": "2025-01-15T10:30:00Z"
            }
        }
