"""
This module maps dataset records onto the cells of a trained map
and aggregates their labels.
"""
import torch
from torch import Tensor
from typing import List, Sequence

from ..core import UnknownLabelError
from ..datasets import FeatureDataset
from ..som import Som, sq_euclidean_dist


__all__ = [
    "EMPTY_CELL",
    "SomMapping",
    "most_common_values",
]


EMPTY_CELL = -1


class SomMapping:
    """
    Assignment of each dataset record to the map cell closest to it.

    `indexes[row][col]` lists, in ascending order, the records whose BMU is node
    (`row`, `col`); every record appears in exactly one cell.

    Parameters
    ----------
    indexes : List[List[List[int]]]
        Record indexes for each cell.
    bmus : Tensor
        The BMU of each record, `[n_data, 2]`.
    sq_distances : Tensor
        Squared Euclidean distance of each record from its BMU, `[n_data]`.
    """

    def __init__(self, indexes: List[List[List[int]]], bmus: Tensor, sq_distances: Tensor) -> None:
        self.indexes, self.bmus, self.sq_distances = indexes, bmus, sq_distances

    @classmethod
    def build(cls, som: Som, data: FeatureDataset) -> "SomMapping":
        "Maps each record of `data` to its BMU on `som`."
        bmus = som.find_bmus(data.x)
        nodes = som.weights[bmus[:, 0], bmus[:, 1]]
        sq_distances = sq_euclidean_dist(data.x, nodes)
        indexes = [[[] for _ in range(som.cols)] for _ in range(som.rows)]
        for t, (row, col) in enumerate(bmus.tolist()):
            indexes[row][col].append(t)
        return cls(indexes, bmus, sq_distances)

    @property
    def rows(self) -> int:
        return len(self.indexes)

    @property
    def cols(self) -> int:
        return len(self.indexes[0])

    @property
    def n_data(self) -> int:
        return self.bmus.shape[0]

    def cell(self, row: int, col: int) -> List[int]:
        return list(self.indexes[row][col])

    def to_flat(self) -> List[List[int]]:
        "Returns the index list of each cell, in row-major order."
        return [list(cell) for row in self.indexes for cell in row]

    def hit_counts(self) -> Tensor:
        "Returns the number of records mapped to each cell, `[rows, cols]`."
        return torch.tensor([[len(cell) for cell in row] for row in self.indexes], dtype=torch.long)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SomMapping):
            return NotImplemented
        return self.indexes == other.indexes

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(size=({self.rows}, {self.cols}), n_data={self.n_data})"


def most_common_values(mapping: SomMapping, labels: Tensor, labels_set: Sequence[int]) -> List[int]:
    """
    Returns the majority label of each cell in row-major order, or `EMPTY_CELL`
    for cells with no records. Ties go to the smallest label.

    Parameters
    ----------
    mapping : SomMapping
        The record-to-cell mapping.
    labels : Tensor
        The label of each record.
    labels_set : Sequence[int]
        The sorted distinct labels of the dataset.
    """
    position = {label: i for i, label in enumerate(labels_set)}
    labels = labels.tolist()
    values = []
    for members in mapping.to_flat():
        if not members:
            values.append(EMPTY_CELL)
            continue
        counts = [0] * len(labels_set)
        for idx in members:
            label = labels[idx]
            if label not in position:
                raise UnknownLabelError(f"Label {label} of record #{idx} is not one of {tuple(labels_set)}")
            counts[position[label]] += 1
        # `max` keeps the first maximum, i.e. the smallest label
        values.append(labels_set[max(range(len(counts)), key=counts.__getitem__)])
    return values
