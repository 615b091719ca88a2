"""
FastAPI dependencies
"""
from psys.services.index_service import IndexService, get_index_service


def get_index_service_dependency() -> IndexService:
    """Get index service instance"""
    return get_index_service()
