from __future__ import annotations

from abc import abstractmethod
from typing import Tuple

import torch

from ._utils import check_cost_matrix

__all__ = ["Assignment"]


class Assignment(torch.nn.Module):
    """
    Solves a square linear assignment problem (LAP).
    """

    threshold: float

    def __init__(self, threshold: float = torch.inf):
        super().__init__()

        self.threshold = threshold

    def forward(
        self, cost_matrix: torch.Tensor
    ) -> Tuple[torch.Tensor, torch.Tensor, torch.Tensor]:
        """
        Solve the cost matrix

        Parameters
        ----------
        cost_matrix
            Cost matrix (NxN) to solve

        Returns
        -------
            Tuple of matches (N_match x 2), unmatched rows and unmatched columns
        """

        cost_matrix = check_cost_matrix(cost_matrix)

        return self._assign(cost_matrix)

    def extra_repr(self) -> str:
        return f"threshold={self.threshold}"

    @abstractmethod
    def _assign(
        self, cost_matrix: torch.Tensor
    ) -> Tuple[torch.Tensor, torch.Tensor, torch.Tensor]:
        raise NotImplementedError
