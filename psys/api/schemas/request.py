"""
API request schemas
"""
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field


class ComputeIndicesRequest(BaseModel):
    """Index computation request

    The payload is deliberately loose: malformed vectors are replaced by
    neutral defaults inside the engine instead of being rejected here.
    """

    payload: Dict[str, Any] = Field(
        default_factory=dict,
        description="Assessment payload (bf_self, bf_env, struct8, pot8, entropy_hint, history, ...)"
    )
    config: Optional[Dict[str, Any]] = Field(
        default=None,
        description="Partial index configuration overrides (weights, thresholds, confidence, circularity)"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "payload": {
                    "bf_self": [60, 55, 70, 40, 30],
                    "bf_env": [62, 50, 68, 45, 35],
                    "entropy_hint": 20,
                    "history": [{"bf_env": [58, 52, 66, 44, 36]}]
                },
                "config": {"circularity": {"kappa": 0.25}}
            }
        }


class TraitMappingRequest(BaseModel):
    """Big Five scores to map onto the derived vectors"""

    traits: List[float] = Field(
        min_length=5,
        max_length=5,
        description="Scores in order openness, conscientiousness, extraversion, agreeableness, neuroticism (0-100)"
    )

    class Config:
        json_schema_extra = {
            "example": {"traits": [60, 55, 70, 40, 30]}
        }
