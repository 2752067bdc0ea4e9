"""
This module contains core tensor operations.
"""
from typing import Tuple

import torch
from torch import Tensor


__all__ = [
    "index_tensor",
]


def index_tensor(size: Tuple) -> Tensor:
    """
    Returns an index tensor of size `size`,
    where each element contains its own index.

    """
    return torch.ones(*size).nonzero().view(*size, -1)
