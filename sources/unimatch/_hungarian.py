"""
PyTorch module around the shortest augmenting path Hungarian method.
"""

from __future__ import annotations

from typing import Tuple

import torch
import torch.fx
import typing_extensions as TX
from torch import Tensor

from ._base import Assignment
from ._matching import min_cost_matching
from ._utils import check_cost_matrix, mates_to_matches
from .debug import check_debug_enabled

__all__ = ["Hungarian", "hungarian_assignment"]


class Hungarian(Assignment):
    r"""
    Implements the Hungarian algorithm for solving a linear assignment problem.
    """

    @TX.override
    def _assign(self, cost_matrix: Tensor) -> Tuple[Tensor, Tensor, Tensor]:
        """
        Solves the assignment problem using the Hungarian algorithm.

        Parameters
        ----------
        cost_matrix
            Cost matrix

        Returns
        -------
            Tuple of matches, unmatched rows and unmatched columns.
        """
        return hungarian_assignment(cost_matrix, self.threshold)


def hungarian_assignment(
    cost_matrix: Tensor, threshold: float = torch.inf
) -> Tuple[Tensor, Tensor, Tensor]:
    """
    Perform linear assignment with a cost limit.

    Costs at or above ``threshold`` are clamped to the threshold before solving,
    which charges ``threshold`` for leaving a row and a column unmatched. Pairs
    whose cost is not below the threshold are reported as unmatched.
    """

    cost_matrix = check_cost_matrix(cost_matrix)

    with torch.no_grad():
        gated = cost_matrix.clamp(max=threshold)
        _, row_mate, _ = min_cost_matching(gated)

        rows = torch.arange(cost_matrix.shape[0], device=cost_matrix.device)
        accept = cost_matrix[rows, row_mate] < threshold

        matches = mates_to_matches(torch.where(accept, row_mate, -1))
        unmatched_rows = rows[~accept]
        unmatched_cols = row_mate[~accept].sort().values

    if check_debug_enabled():
        print(f"Unmatched rows: {unmatched_rows.tolist()}")
        print(f"Unmatched cols: {unmatched_cols.tolist()}")

    return matches, unmatched_rows, unmatched_cols


torch.fx.wrap("hungarian_assignment")
