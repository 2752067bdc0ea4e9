import torch
import unittest

from typing import Tuple
from nose2.tools import params
from somgrid.core import index_tensor


class IndexTensorTest(unittest.TestCase):

    @params(
        ((2, 2), torch.tensor([[[0, 0], [0, 1]], [[1, 0], [1, 1]]])),
        ((2, 3), torch.tensor([[[0, 0], [0, 1], [0, 2]], [[1, 0], [1, 1], [1, 2]]])),
    )
    def test_is_index_tensor(self, size: Tuple, expected: torch.Tensor):
        assert (expected == index_tensor(size)).all()

    def test_single_node(self):
        assert index_tensor((1, 1)).tolist() == [[[0, 0]]]
