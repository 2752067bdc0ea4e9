import torch

from typing import Callable, Union

from ..core import InvalidArgument


__all__ = [
    "sq_euclidean_dist",
    "manhattan_dist",
    "get_dist_fn",
    "DistFnOrString",
]


DistFnOrString = Union[str, Callable[[torch.Tensor, torch.Tensor], torch.Tensor]]


def sq_euclidean_dist(a: torch.Tensor, b: torch.Tensor) -> torch.Tensor:
    """
    Calculates the squared Euclidean distance between `a` and `b`.
    Ranks candidates exactly like the Euclidean distance, without the square root.

    Parameters
    ----------
    a : torch.Tensor
        The first tensor
    b : torch.Tensor
        The second tensor
    """
    return (a - b).pow(2).sum(-1)


def manhattan_dist(a: torch.Tensor, b: torch.Tensor) -> torch.Tensor:
    """
    Calculates the Manhattan distance (order 1 p-distance) between `a` and `b`.
    Assumes tensor shapes are compatible.

    Parameters
    ----------
    a : torch.Tensor
        The first tensor
    b : torch.Tensor
        The second tensor
    """
    return (a - b).abs().sum(-1)


_DIST_FNS = {
    "euclidean": sq_euclidean_dist,
    "manhattan": manhattan_dist,
}


def get_dist_fn(dist_fn: DistFnOrString) -> Callable:
    """
    Returns the distance function for `dist_fn`.

    Parameters
    ----------
    dist_fn : DistFnOrString
        Either a callable, which is returned as is, or one of `euclidean` and `manhattan`.
    """
    if callable(dist_fn):
        return dist_fn
    if dist_fn not in _DIST_FNS:
        raise InvalidArgument(f"Distance function not found: {dist_fn}")
    return _DIST_FNS[dist_fn]
