"""
Training schedule and trainer for Self-Organizing Maps.
"""
import torch
from fastprogress.fastprogress import progress_bar
from typing import Iterator, List, Tuple

from ..core import InvalidArgument
from ..datasets import FeatureDataset
from ..log import has_logger
from ..som import Som


__all__ = [
    "LinearDecaySchedule",
    "SomTrainer",
]


class LinearDecaySchedule:
    """
    Linearly decays the neighborhood radius and the learning rate
    from their maximum values towards zero over `steps_max` steps.

    Parameters
    ----------
    steps_max : int
        The number of training steps.
    lr_max : float
        The learning rate of the first step.
    range_max : int
        The neighborhood radius of the first step, usually `rows + cols`.
    """

    def __init__(self, steps_max: int, lr_max: float, range_max: int) -> None:
        self.steps_max, self.lr_max, self.range_max = steps_max, lr_max, range_max

    def percent_left(self, step: int) -> float:
        return 1.0 - step / self.steps_max

    def radius(self, step: int) -> int:
        "Neighborhood radius for `step`, as Manhattan distance on the grid."
        return int(self.percent_left(step) * self.range_max)

    def lr(self, step: int) -> float:
        return self.percent_left(step) * self.lr_max

    def __len__(self) -> int:
        return max(0, self.steps_max)

    def __iter__(self) -> Iterator[Tuple[int, int, float]]:
        for step in range(len(self)):
            yield step, self.radius(step), self.lr(step)


@has_logger
class SomTrainer:
    """
    Online trainer for Self-Organizing Maps.\n
    Each step picks a random record, finds its BMU and moves every node
    within the current radius towards the record.

    Parameters
    ----------
    model : Som
        The map to be trained in place.
    data : FeatureDataset
        The training data.
    generator : torch.Generator
        Generator used to pick training records.
    """

    def __init__(self, model: Som, data: FeatureDataset, generator: torch.Generator) -> None:
        self.model, self.data, self.generator = model, data, generator
        self.radiuses: List[int] = []

    def train(self, steps_max: int, lr_max: float, progress: bool = False) -> None:
        """
        Runs `steps_max` training steps.

        Parameters
        ----------
        steps_max : int
            The number of training steps. Non-positive values leave the map untouched.
        lr_max : float
            The initial learning rate, decaying linearly to zero.
        progress : bool default=False
            If True, displays a progress bar over training steps.
        """
        if lr_max < 0:
            raise InvalidArgument(f"Learning rate must not be negative, got {lr_max}")
        if steps_max <= 0:
            self.logger.debug(f"Skipping training with {steps_max} steps")
            return
        schedule = LinearDecaySchedule(steps_max, lr_max, self.model.rows + self.model.cols)
        self.logger.info(f"Training {self.model!r} for {steps_max} steps, lr={lr_max}")
        x = self.data.x
        self.radiuses = []
        iter_fn = progress_bar if progress else iter
        for _, radius, lr in iter_fn(schedule):
            t = torch.randint(0, self.data.n_data, (1,), generator=self.generator).item()
            bmu = self.model.find_bmu(x[t])
            self.model.update(x[t], bmu, radius, lr)
            self.radiuses.append(radius)
        self.logger.info(f"Training done, final radius {self.radiuses[-1]}")
