"""
This file contains interpretation
utilities for Self-Organizing Maps.
"""
import pandas as pd
import torch


__all__ = [
    "SomInterpretation",
]


class SomInterpretation:
    """
    SOM interpretation utility.

    Summarizes how the dataset is distributed over a trained map,
    building the mapping on the learner if needed.

    Parameters
    ----------
    learn : SomLearner
        The learner to be used for interpretation.
    """

    def __init__(self, learn) -> None:
        self.learn = learn

    @classmethod
    def from_learner(cls, learn):
        "Creates a new instance of `SomInterpretation` from a `SomLearner`."
        return cls(learn)

    @property
    def mapping(self):
        if not self.learn.has_mapping:
            self.learn.build_mapping()
        return self.learn.mapping

    @property
    def modelsize(self):
        return self.learn.model.size[:-1]

    def hitmap(self) -> torch.Tensor:
        "Returns the number of records mapped to each cell, `[rows, cols]`."
        return self.mapping.hit_counts()

    def label_map(self) -> torch.Tensor:
        "Returns the most common label of each cell, `[rows, cols]`; `-1` marks empty cells."
        if not self.learn.has_labels:
            raise RuntimeError(
                "Unable to show labels for a dataset that has no labels. Use `interp.hitmap()` instead.")
        if not self.learn.most_common_values:
            if not self.learn.has_mapping:
                self.learn.build_mapping()
            self.learn.find_most_common_values()
        return torch.tensor(self.learn.most_common_values, dtype=torch.long).view(*self.modelsize)

    def codebook_to_df(self) -> pd.DataFrame:
        "Exports the codebook with the grid position of each cell."
        return self.learn.codebook_to_df()

    def mapping_to_df(self) -> pd.DataFrame:
        "Exports the dataset with the map cell and squared BMU distance of each record."
        mapping = self.mapping
        df = self.learn.data.to_df()
        bmus = mapping.bmus.numpy()
        df["som_row"] = bmus[:, 0]
        df["som_col"] = bmus[:, 1]
        df["sq_distance"] = mapping.sq_distances.numpy()
        return df
