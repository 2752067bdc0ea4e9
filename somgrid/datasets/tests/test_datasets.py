import os
import tempfile
import unittest

import numpy as np
import torch
from nose2.tools import params

from somgrid.core import DatasetParseError, DimensionMismatch, InvalidArgument
from somgrid.datasets import FeatureDataset


class FromMatrixTest(unittest.TestCase):

    def test_unlabeled(self):
        ds = FeatureDataset.from_matrix([[0.0, 1.0], [2.0, 3.0], [4.0, 5.0]])
        assert ds.n_data == 3
        assert ds.n_features == 2
        assert not ds.has_labels
        assert ds.y is None
        assert ds.labels_set == ()
        assert ds.x.dtype == torch.float64

    def test_trailing_label_is_stripped(self):
        ds = FeatureDataset.from_matrix([[0.0, 1.0, 2], [2.0, 3.0, 0], [4.0, 5.0, 2]], has_labels=True)
        assert ds.n_features == 2
        assert ds.y.tolist() == [2, 0, 2]
        assert ds.labels_set == (0, 2)
        assert ds.x.tolist() == [[0.0, 1.0], [2.0, 3.0], [4.0, 5.0]]

    @params(list, np.array, torch.tensor)
    def test_input_types(self, wrap):
        ds = FeatureDataset.from_matrix(wrap([[0.5, 1.5, 1.0], [2.5, 3.5, 3.0]]), has_labels=True)
        assert ds.x.tolist() == [[0.5, 1.5], [2.5, 3.5]]
        assert ds.y.tolist() == [1, 3]

    def test_jagged_rows_with_same_feature_count(self):
        ds = FeatureDataset.from_matrix([[0.0, 1.0], [2.0, 3.0]])
        assert ds.n_features == 2

    def test_jagged_rows_mismatch(self):
        with self.assertRaises(DimensionMismatch):
            FeatureDataset.from_matrix([[0.0, 1.0], [2.0, 3.0, 4.0]])

    def test_no_features_left(self):
        with self.assertRaises(DimensionMismatch):
            FeatureDataset.from_matrix([[1], [2]], has_labels=True)

    def test_empty(self):
        with self.assertRaises(InvalidArgument):
            FeatureDataset.from_matrix([])

    @params(float("nan"), float("inf"), float("-inf"))
    def test_non_finite_label(self, label):
        with self.assertRaises(InvalidArgument):
            FeatureDataset.from_matrix([[0.0, 1.0, 2], [2.0, 3.0, label]], has_labels=True)

    def test_owns_its_features(self):
        x = torch.tensor([[0.0, 1.0], [2.0, 3.0]], dtype=torch.float64)
        ds = FeatureDataset(x)
        x[0, 0] = 100.0
        assert ds.x.tolist() == [[0.0, 1.0], [2.0, 3.0]]

    def test_owns_its_labels(self):
        labels = torch.tensor([4, 5])
        ds = FeatureDataset(torch.zeros(2, 2, dtype=torch.float64), labels)
        labels[0] = 7
        assert ds.y.tolist() == [4, 5]
        assert ds.labels_set == (4, 5)

    def test_to_df(self):
        df = FeatureDataset.from_matrix([[0.0, 1.0, 4], [2.0, 3.0, 5]], has_labels=True).to_df()
        assert list(df.columns) == ["Feature #1", "Feature #2", "label"]
        assert df["label"].tolist() == [4, 5]


class FromFileTest(unittest.TestCase):

    def setUp(self):
        self.dir = tempfile.TemporaryDirectory()

    def tearDown(self):
        self.dir.cleanup()

    def _write(self, content: str) -> str:
        path = os.path.join(self.dir.name, "data.csv")
        with open(path, "w") as f:
            f.write(content)
        return path

    def test_labeled_file(self):
        path = self._write("0.1,0.2,1\n0.3,0.4,0\n0.5,0.6,1\n")
        ds = FeatureDataset.from_file(path, has_labels=True)
        assert ds.n_data == 3
        assert ds.n_features == 2
        assert ds.y.tolist() == [1, 0, 1]
        assert ds.labels_set == (0, 1)

    def test_unlabeled_file(self):
        path = self._write("1,2,3\n4,5,6\n")
        ds = FeatureDataset.from_file(path)
        assert ds.x.tolist() == [[1.0, 2.0, 3.0], [4.0, 5.0, 6.0]]

    def test_non_numeric_token(self):
        path = self._write("1,2,3\n4,abc,6\n")
        with self.assertRaises(DatasetParseError):
            FeatureDataset.from_file(path)

    def test_short_line(self):
        path = self._write("1,2,3\n4,5\n")
        with self.assertRaises(DatasetParseError):
            FeatureDataset.from_file(path)

    def test_non_integer_label(self):
        path = self._write("1,2,3\n4,5,6.5\n")
        with self.assertRaises(DatasetParseError):
            FeatureDataset.from_file(path, has_labels=True)

    def test_blank_line(self):
        path = self._write("1,2,0\n\n3,4,1\n")
        with self.assertRaises(DatasetParseError):
            FeatureDataset.from_file(path, has_labels=True)

    def test_empty_file(self):
        path = self._write("")
        with self.assertRaises(DatasetParseError):
            FeatureDataset.from_file(path)

    def test_missing_file(self):
        with self.assertRaises(FileNotFoundError):
            FeatureDataset.from_file(os.path.join(self.dir.name, "missing.csv"))
