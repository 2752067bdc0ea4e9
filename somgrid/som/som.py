"""
This module contains the base SOM module.
"""
import torch
from torch import nn, Tensor
from typing import Optional, Sequence, Tuple

from ..core import DimensionMismatch, InvalidArgument, index_tensor
from ..log import has_logger
from .distance import DistFnOrString, get_dist_fn


__all__ = [
    "Som",
    "SomSize2D",
    "GridCoord",
]


SomSize2D = Tuple[int, int, int]
GridCoord = Tuple[int, int]


@has_logger
class Som(nn.Module):
    """
    Rectangular Self-Organizing Map grid.\n
    Each of the `rows * cols` nodes holds a weight vector of `n_features` values,
    drawn from `U[0, 1)` using `generator` in row, column and feature order.

    Parameters
    ----------
    rows : int
        The number of grid rows.
    cols : int
        The number of grid columns.
    n_features : int
        The size of each node weight vector.
    generator : Optional[torch.Generator] default=None
        The random generator used for initialization. Shared with the trainer by `SomLearner`.
    dist_fn : DistFnOrString default='euclidean'
        Distance used for BMU search. `euclidean` ranks nodes by squared Euclidean distance.
    dtype : torch.dtype default=torch.float64
        The weights type.
    """

    def __init__(
        self,
        rows: int,
        cols: int,
        n_features: int,
        generator: Optional[torch.Generator] = None,
        dist_fn: DistFnOrString = "euclidean",
        dtype: torch.dtype = torch.float64,
    ) -> None:
        super().__init__()
        if n_features <= 0:
            raise DimensionMismatch(f"Node weight vectors need at least one feature, got {n_features}")
        if rows <= 0 or cols <= 0:
            raise InvalidArgument(f"Map size must be positive, got {rows}x{cols}")
        self.size: SomSize2D = (rows, cols, n_features)
        self.dist_fn = get_dist_fn(dist_fn)
        self.register_buffer("weights", torch.rand(self.size, generator=generator, dtype=dtype))
        self.register_buffer("indices", index_tensor(self.size[:-1]))
        self.logger.debug(f"Initialized {self!r}")

    @classmethod
    def from_seed(cls, rows: int, cols: int, n_features: int, seed: int = 0, **kwargs) -> "Som":
        "Creates a new `Som` initialized from its own generator, seeded with `seed`."
        generator = torch.Generator()
        generator.manual_seed(seed)
        return cls(rows, cols, n_features, generator=generator, **kwargs)

    @property
    def rows(self) -> int:
        return self.size[0]

    @property
    def cols(self) -> int:
        return self.size[1]

    @property
    def n_features(self) -> int:
        return self.size[2]

    def get(self, row: int, col: int) -> Tensor:
        "Returns a copy of the weight vector of node (`row`, `col`)."
        if not (0 <= row < self.rows and 0 <= col < self.cols):
            raise IndexError(f"Node ({row}, {col}) is outside of a {self.rows}x{self.cols} map")
        return self.weights[row, col].clone()

    def codebook(self) -> Tensor:
        "Returns a copy of the whole weight grid, `[rows, cols, n_features]`."
        return self.weights.clone()

    def distances(self, x: Tensor) -> Tensor:
        """
        Calculates the distance between each vector in `x` and each node of the map.\n
        \n
        Input\n
        x: [B, n_features]\n
        \n
        Output\n
        d: [B, rows * cols]\n
        """
        if x.shape[-1] != self.n_features:
            raise DimensionMismatch(f"Expected vectors of {self.n_features} features, got {x.shape[-1]}")
        w = self.weights.view(-1, self.n_features)
        return self.dist_fn(x.to(w.dtype).unsqueeze(1), w.unsqueeze(0))

    def find_bmus(self, x: Tensor, bs: int = 1024) -> Tensor:
        """
        Finds the BMU of each vector in `x`, processing `bs` vectors at a time.\n
        Ties go to the first node in row-major order.\n
        \n
        Input\n
        x: [B, n_features]\n
        \n
        Output\n
        bmus: [B, 2]\n
        """
        if x.dim() == 1:
            x = x.unsqueeze(0)
        # `argmin` returns the first minimal value, which preserves scan order
        min_idx = torch.cat([self.distances(xb).argmin(-1) for xb in torch.split(x, bs)])
        return torch.stack([min_idx // self.cols, min_idx % self.cols], dim=1)

    def find_bmu(self, x: Tensor) -> GridCoord:
        "Finds the `(row, col)` of the node closest to feature vector `x`."
        row, col = self.find_bmus(x.view(1, -1))[0].tolist()
        return row, col

    def forward(self, x: Tensor) -> Tensor:
        "Returns the BMU indices `[B, 2]` of the batch `x`."
        return self.find_bmus(x)

    def grid_distance(self, coord: Sequence[int]) -> Tensor:
        "Returns the Manhattan grid distance of each node from `coord`, `[rows, cols]`."
        return (self.indices - torch.tensor(coord, dtype=self.indices.dtype)).abs().sum(-1)

    @torch.no_grad()
    def update(self, x: Tensor, bmu: Sequence[int], radius: int, lr: float) -> None:
        """
        Moves every node within `radius` grid steps of `bmu` towards `x`,
        by a fraction `lr` of their difference.

        Parameters
        ----------
        x : Tensor
            The training feature vector, `[n_features]`.
        bmu : Sequence[int]
            The `(row, col)` of the best matching unit.
        radius : int
            The neighborhood radius, as Manhattan distance on the grid.
        lr : float
            The learning rate.
        """
        mask = self.grid_distance(bmu) <= radius
        w = self.weights[mask]
        self.weights[mask] = w + lr * (x.to(w.dtype) - w)

    def __repr__(self):
        return f"{self.__class__.__name__}(size={self.size[:-1]}, neuron_size={self.size[-1]}, dist_fn={getattr(self.dist_fn, '__name__', self.dist_fn)})"
