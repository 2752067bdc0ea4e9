"""
This module defines `SomLearner`, the engine used to train Self-Organizing Maps
and to map and label their cells.
"""
import pathlib

import pandas as pd
import torch
from typing import List, Optional, Union

from ..core import DimensionMismatch, MappingNotBuiltError, ifnone, index_tensor
from ..datasets import FeatureDataset, MatrixData
from ..interp import SomMapping, most_common_values
from ..log import has_logger
from ..som import DistFnOrString, Som
from .callbacks import SomTrainer


__all__ = [
    "SomLearner",
    "DEFAULT_ROWS",
    "DEFAULT_LR",
    "DEFAULT_STEPS",
    "DEFAULT_SEED",
]


DEFAULT_ROWS = 5
DEFAULT_LR = 0.5
DEFAULT_STEPS = 100000
DEFAULT_SEED = 0

LearnerData = Union[FeatureDataset, MatrixData, str, pathlib.Path]


def _to_dataset(data: LearnerData, has_labels: bool) -> FeatureDataset:
    "Turns `data` into a `FeatureDataset`."
    if isinstance(data, FeatureDataset):
        return data
    if isinstance(data, (str, pathlib.Path)):
        return FeatureDataset.from_file(data, has_labels=has_labels)
    return FeatureDataset.from_matrix(data, has_labels=has_labels)


@has_logger
class SomLearner:
    """
    Trains a Self-Organizing Map over a dataset, then maps each record to a
    map cell and finds the most common label of each cell.

    The learner owns a single random generator, seeded with `seed`: it is used first
    to initialize the map, then to pick training records. Two learners built with
    the same data, size and seed and trained with the same parameters end up with
    identical weights.

    Parameters
    ----------
    data : LearnerData
        A `FeatureDataset`, an in-memory matrix or the path of a delimited text file.
    has_labels : bool default=True
        Whether the trailing value of each matrix row / file line is an integer label.
        Ignored when `data` is a `FeatureDataset`.
    rows : int default=5
        The number of map rows.
    cols : Optional[int] default=None
        The number of map columns. Defaults to `rows`.
    seed : int default=0
        The random generator seed.
    dist_fn : DistFnOrString default='euclidean'
        The distance used for BMU search.
    model : Optional[Som] default=None
        A pre-built map. Its size overrides `rows`, `cols` and `dist_fn`.
    """

    def __init__(
        self,
        data: LearnerData,
        has_labels: bool = True,
        rows: int = DEFAULT_ROWS,
        cols: Optional[int] = None,
        seed: int = DEFAULT_SEED,
        dist_fn: DistFnOrString = "euclidean",
        model: Optional[Som] = None,
    ) -> None:
        self.data = _to_dataset(data, has_labels)
        self.seed = seed
        self.generator = torch.Generator()
        self.generator.manual_seed(seed)
        if model is None:
            model = Som(rows, ifnone(cols, rows), self.data.n_features, generator=self.generator, dist_fn=dist_fn)
        elif model.n_features != self.data.n_features:
            raise DimensionMismatch(
                f"Map nodes have {model.n_features} features, data has {self.data.n_features}")
        self.model = model
        self.trainer = SomTrainer(self.model, self.data, self.generator)
        self._mapping: Optional[SomMapping] = None
        self._most_common_values: List[int] = []
        self.logger.info(f"Created learner for {self.data!r} with {self.model!r}")

    @property
    def has_labels(self) -> bool:
        return self.data.has_labels

    @property
    def weights(self) -> torch.Tensor:
        "A copy of the map weights, `[rows, cols, n_features]`."
        return self.model.codebook()

    @property
    def has_mapping(self) -> bool:
        return self._mapping is not None

    @property
    def mapping(self) -> SomMapping:
        if self._mapping is None:
            raise MappingNotBuiltError("`build_mapping` must be called before accessing the mapping")
        return self._mapping

    @property
    def mapped_indexes(self) -> List[List[List[int]]]:
        "Record indexes mapped to each cell, as `[rows][cols]` lists."
        return self.mapping.indexes

    @property
    def most_common_values(self) -> List[int]:
        "Most common label of each cell in row-major order, as of the last `find_most_common_values`."
        return list(self._most_common_values)

    def train(self, steps_max: int = DEFAULT_STEPS, lr_max: float = DEFAULT_LR, progress: bool = False) -> None:
        """
        Trains the map in place. Any previously built mapping is discarded.

        Parameters
        ----------
        steps_max : int default=100000
            The number of training steps. Non-positive values leave the map untouched.
        lr_max : float default=0.5
            The initial learning rate, decaying linearly to zero.
        progress : bool default=False
            If True, displays a progress bar over training steps.
        """
        self.trainer.train(steps_max, lr_max, progress=progress)
        if steps_max > 0:
            self._mapping = None
            self._most_common_values = []

    def build_mapping(self) -> List[List[List[int]]]:
        "Assigns each record to its closest cell; returns the `[rows][cols]` index lists."
        self._mapping = SomMapping.build(self.model, self.data)
        self.logger.debug(f"Built {self._mapping!r}")
        return self._mapping.indexes

    def find_most_common_values(self) -> List[int]:
        """
        Finds the most common label of each cell, in row-major order.
        Empty cells get `-1`. Returns an empty list if the dataset has no labels.
        """
        if not self.has_labels:
            self.logger.warning("Dataset has no labels, skipping most common values")
            return []
        self._most_common_values = most_common_values(self.mapping, self.data.y, self.data.labels_set)
        return self.most_common_values

    def fit(self, steps_max: int = DEFAULT_STEPS, lr_max: float = DEFAULT_LR, progress: bool = False) -> "SomLearner":
        "Trains the map, builds the mapping and, if labels are available, finds the most common values."
        self.train(steps_max, lr_max, progress=progress)
        self.build_mapping()
        if self.has_labels:
            self.find_most_common_values()
        return self

    def codebook_to_df(self) -> pd.DataFrame:
        "Exports the map codebook as a Pandas DataFrame, one row per node in row-major order."
        w = self.model.codebook()
        w = w.view(-1, w.shape[-1]).numpy()
        columns = list(map(lambda i: f"Feature #{i+1}", range(w.shape[-1])))
        df = pd.DataFrame(data=w, columns=columns)
        coords = index_tensor(self.model.size[:-1]).view(-1, 2).numpy()
        df["som_row"] = coords[:, 0]
        df["som_col"] = coords[:, 1]
        return df

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(data={self.data!r}, model={self.model!r}, seed={self.seed})"
