"""
Index computation routes
"""
from fastapi import APIRouter, Depends

from psys.api.dependencies import get_index_service_dependency
from psys.api.schemas.request import ComputeIndicesRequest, TraitMappingRequest
from psys.api.schemas.response import IndexReportResponse, TraitMappingResponse
from psys.core.index_config import DEFAULT_CONFIG
from psys.core.trait_mapper import (
    POTENTIAL_DIMENSIONS,
    STRUCTURAL_DIMENSIONS,
    potential_to_sparse16,
    structural_to_sparse16,
    traits_to_potential,
    traits_to_structural,
)
from psys.services.index_service import IndexService
from psys.utils.logger import get_logger

logger = get_logger(__name__)
router = APIRouter(prefix="/indices", tags=["Indices"])


@router.post("/compute", response_model=IndexReportResponse)
async def compute_indices(
    request: ComputeIndicesRequest,
    service: IndexService = Depends(get_index_service_dependency)
):
    """
    Compute all seven indices for an assessment payload

    Missing or malformed vectors never fail the request; they lower the
    reliability tags of the affected indices instead.
    """
    report = service.compute_all_indices(request.payload, request.config)
    return IndexReportResponse(success=True, **report.to_dict())


@router.get("/config")
async def get_default_config():
    """Get the default index configuration"""
    return DEFAULT_CONFIG.model_dump()


@router.post("/map", response_model=TraitMappingResponse)
async def map_traits(request: TraitMappingRequest):
    """Map Big Five scores onto the structural and potential vectors"""
    structural = traits_to_structural(request.traits)
    potential = traits_to_potential(request.traits)

    return TraitMappingResponse(
        structural=structural,
        potential=potential,
        structural_sparse16=structural_to_sparse16(structural),
        potential_sparse16=potential_to_sparse16(potential),
        structural_dimensions=list(STRUCTURAL_DIMENSIONS),
        potential_dimensions=list(POTENTIAL_DIMENSIONS),
    )
