"""
Quality metrics for trained Self-Organizing Maps.
"""
from .mapping import SomMapping


__all__ = [
    "mean_quantization_err",
    "empty_cells_count",
]


def mean_quantization_err(mapping: SomMapping) -> float:
    "Mean Euclidean distance between each record and its BMU."
    return mapping.sq_distances.sqrt().mean().item()


def empty_cells_count(mapping: SomMapping) -> int:
    "Number of cells with no records mapped to them."
    return int((mapping.hit_counts() == 0).sum().item())
