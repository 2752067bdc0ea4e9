"""
This module contains the feature dataset consumed by the SOM engine,
together with its in-memory and delimited-file adapters.

"""
import math
import pathlib

import numpy as np
import pandas as pd
import torch
from torch import Tensor
from typing import Optional, Sequence, Tuple, Union

from ..core import DatasetParseError, DimensionMismatch, InvalidArgument
from ..log import get_logger


__all__ = [
    "FeatureDataset",
    "MatrixData",
    "StrOrPath",
]


StrOrPath = Union[str, pathlib.Path]
MatrixData = Union[Sequence[Sequence[float]], np.ndarray, Tensor]


def _rows(data: MatrixData) -> list:
    "Turns a (possibly jagged) matrix into a list of lists."
    if isinstance(data, (np.ndarray, Tensor)):
        data = data.tolist()
    return [row.tolist() if hasattr(row, "tolist") else list(row) for row in data]


def _split_labels(rows: list, has_labels: bool) -> Tuple[list, Optional[list]]:
    "Strips the trailing label column from each row in `rows` if `has_labels` is set."
    if not has_labels:
        return rows, None
    for idx, row in enumerate(rows):
        if len(row) == 0:
            raise DimensionMismatch(f"Record #{idx} is empty and cannot hold a label")
        if not math.isfinite(row[-1]):
            raise InvalidArgument(f"Record #{idx} has a non-finite label `{row[-1]}`")
    # Labels are truncated towards zero, as an integer cast would do
    return [row[:-1] for row in rows], [int(row[-1]) for row in rows]


class FeatureDataset:
    """
    Ordered, immutable collection of fixed-length feature vectors,
    optionally paired with one integer label per vector.

    The position of each vector is its identity for mapping and aggregation.

    Parameters
    ----------
    x : Tensor
        Feature tensor of shape `[n_data, n_features]`.
    labels : Optional[Tensor] default=None
        Label tensor of shape `[n_data]`.
    """

    def __init__(self, x: Tensor, labels: Optional[Tensor] = None) -> None:
        x = torch.as_tensor(x, dtype=torch.float64).clone()
        if x.dim() != 2:
            raise DimensionMismatch(f"Expected a 2D feature tensor, got shape {tuple(x.shape)}")
        if x.shape[0] == 0:
            raise InvalidArgument("Cannot build a dataset with no records")
        if x.shape[1] <= 0:
            raise DimensionMismatch("Feature vectors must contain at least one feature")
        if labels is not None:
            labels = torch.as_tensor(labels, dtype=torch.long).clone()
            if labels.shape != (x.shape[0],):
                raise DimensionMismatch(
                    f"Expected {x.shape[0]} labels, got shape {tuple(labels.shape)}")
        self._x = x
        self._y = labels
        self._labels_set = tuple(sorted(set(labels.tolist()))) if labels is not None else ()
        get_logger(self).debug(
            f"Built dataset with {self.n_data} records of {self.n_features} features, labels: {self.has_labels}")

    @classmethod
    def from_matrix(cls, data: MatrixData, has_labels: bool = False) -> "FeatureDataset":
        """
        Creates a new dataset from an in-memory matrix.

        Parameters
        ----------
        data : MatrixData
            A list of lists, a 2D `np.ndarray` or a 2D `Tensor`. Rows may be jagged,
            as long as they all hold the same number of features.
        has_labels : bool default=False
            If True, the trailing column of each row is an integer label and gets
            stripped from the feature vector.
        """
        rows, labels = _split_labels(_rows(data), has_labels)
        if len(rows) == 0:
            raise InvalidArgument("Cannot build a dataset with no records")
        n_features = len(rows[0])
        for idx, row in enumerate(rows):
            if len(row) != n_features:
                raise DimensionMismatch(
                    f"Record #{idx} has {len(row)} features, expected {n_features}")
        if n_features <= 0:
            raise DimensionMismatch("Feature vectors must contain at least one feature")
        x = torch.tensor(rows, dtype=torch.float64)
        y = torch.tensor(labels, dtype=torch.long) if labels is not None else None
        return cls(x, y)

    @classmethod
    def from_file(cls, path: StrOrPath, has_labels: bool = False, sep: str = ",") -> "FeatureDataset":
        """
        Creates a new dataset from a headerless delimited text file,
        with one record per line.

        Parameters
        ----------
        path : StrOrPath
            The file path.
        has_labels : bool default=False
            If True, the trailing value of each line is an integer label.
        sep : str default=','
            The field separator.
        """
        logger = get_logger(cls)
        try:
            df = pd.read_csv(path, header=None, sep=sep, dtype=np.float64, skip_blank_lines=False)
        except (pd.errors.ParserError, pd.errors.EmptyDataError, ValueError) as e:
            raise DatasetParseError(f"Unable to parse `{path}`: {e}") from e

        missing = df.isnull().any(axis=1)
        if missing.any():
            line = int(np.argmax(missing.values)) + 1
            raise DatasetParseError(f"Missing values on line {line} of `{path}`")

        values = df.values
        if has_labels:
            labels = values[:, -1]
            not_integral = labels != np.trunc(labels)
            if not_integral.any():
                line = int(np.argmax(not_integral)) + 1
                raise DatasetParseError(f"Non-integer label `{labels[line - 1]}` on line {line} of `{path}`")
        logger.info(f"Read {len(values)} records from `{path}`")
        return cls.from_matrix(values, has_labels=has_labels)

    @property
    def x(self) -> Tensor:
        "The feature tensor `[n_data, n_features]`. Must not be modified."
        return self._x

    @property
    def y(self) -> Optional[Tensor]:
        "The label tensor `[n_data]`, or `None`."
        return self._y

    @property
    def n_data(self) -> int:
        return self._x.shape[0]

    @property
    def n_features(self) -> int:
        return self._x.shape[1]

    @property
    def has_labels(self) -> bool:
        return self._y is not None

    @property
    def labels_set(self) -> Tuple[int, ...]:
        "Sorted distinct labels observed at construction time."
        return self._labels_set

    def to_df(self) -> pd.DataFrame:
        "Exports the dataset as a Pandas DataFrame, with an optional `label` column."
        columns = [f"Feature #{i+1}" for i in range(self.n_features)]
        df = pd.DataFrame(data=self._x.numpy(), columns=columns)
        if self.has_labels:
            df["label"] = self._y.numpy()
        return df

    def __len__(self) -> int:
        return self.n_data

    def __getitem__(self, idx: int) -> Tensor:
        return self._x[idx]

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(n_data={self.n_data}, n_features={self.n_features}, has_labels={self.has_labels})"
