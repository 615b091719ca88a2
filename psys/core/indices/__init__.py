from psys.core.indices.circularity import calculate_circularity_index
from psys.core.indices.completeness import calculate_completeness_index
from psys.core.indices.confidence import calculate_confidence_index
from psys.core.indices.difference import calculate_difference_index
from psys.core.indices.kernel_stability import calculate_kernel_stability_index
from psys.core.indices.self_integration import calculate_self_integration_index

__all__ = [
    "calculate_circularity_index",
    "calculate_completeness_index",
    "calculate_confidence_index",
    "calculate_difference_index",
    "calculate_kernel_stability_index",
    "calculate_self_integration_index",
]
