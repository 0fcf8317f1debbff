r"""
Various utilities for working with assignment problems.
"""

from __future__ import annotations

import typing as T

import numpy as np
import torch
from torch import Tensor

__all__ = [
    "check_cost_matrix",
    "gather_total_cost",
    "reduced_costs",
    "check_optimality",
    "mates_to_matches",
]


def check_cost_matrix(cost_matrix: T.Any) -> Tensor:
    """
    Convert the input to a floating point tensor and ensure that it describes a
    valid (square, non-empty, finite) assignment problem.

    Parameters
    ----------
    cost_matrix
        Tensor, array or nested sequence of shape (N, N).

    Returns
    -------
    Tensor[N, N]
        The cost matrix as a floating point tensor. Inputs that are not tensors
        are converted via NumPy, such that Python floats keep double precision.

    Raises
    ------
    TypeError
        If the cost matrix holds complex values.
    ValueError
        If the cost matrix is not two-dimensional, not square, empty or has
        non-finite entries.
    """
    if not isinstance(cost_matrix, Tensor):
        cost_matrix = torch.as_tensor(np.asarray(cost_matrix))

    if cost_matrix.is_complex():
        msg = f"Cost matrix must be real-valued, got dtype {cost_matrix.dtype}!"
        raise TypeError(msg)
    if not cost_matrix.is_floating_point():
        cost_matrix = cost_matrix.to(torch.float64)

    if cost_matrix.ndim != 2:
        msg = f"Cost matrix must be two-dimensional, got shape {tuple(cost_matrix.shape)}!"
        raise ValueError(msg)

    rows, cols = cost_matrix.shape
    if rows != cols:
        msg = f"Cost matrix must be square, got shape ({rows}, {cols})!"
        raise ValueError(msg)
    if rows == 0:
        msg = "Cost matrix must have at least one row and column!"
        raise ValueError(msg)
    if not torch.isfinite(cost_matrix).all():
        msg = "Cost matrix contains NaN or infinite entries!"
        raise ValueError(msg)

    return cost_matrix


def gather_total_cost(cost_matrix: Tensor, row_mate: Tensor) -> Tensor:
    """
    Gather the total cost of an assignment. The amounts to summing all the assigned
    items from the cost matrix.

    Parameters
    ----------
    cost_matrix: Tensor[N, N]
        The cost matrix.
    row_mate: Tensor[N]
        Column assigned to each row.

    Returns
    -------
    Tensor[]
        The total cost of the assignment.
    """
    rows = torch.arange(cost_matrix.shape[0], device=cost_matrix.device)
    return cost_matrix[rows, row_mate.to(cost_matrix.device)].sum()


def reduced_costs(cost_matrix: Tensor, u: Tensor, v: Tensor) -> Tensor:
    """
    Slack of every edge relative to the row potentials ``u`` and the column
    potentials ``v``, i.e. ``cost[i, j] - u[i] - v[j]``.
    """
    cost_matrix = cost_matrix.to(dtype=u.dtype, device=u.device)
    return cost_matrix - u.view(-1, 1) - v.to(u.device).view(1, -1)


def check_optimality(
    cost_matrix: T.Any,
    row_mate: Tensor,
    col_mate: Tensor,
    u: Tensor,
    v: Tensor,
    tolerance: float = 1e-8,
) -> bool:
    """
    Verify that a matching together with its dual potentials certifies an optimal
    assignment.

    The certificate holds when the mates describe one perfect matching, every
    reduced cost is non-negative and every matched edge has zero reduced cost.
    Comparisons use ``tolerance`` scaled by the largest absolute cost (at least 1).
    """
    cost_matrix = check_cost_matrix(cost_matrix).detach().cpu().to(torch.float64)
    n = cost_matrix.shape[0]
    idx = torch.arange(n)

    row_mate = torch.as_tensor(row_mate).cpu().long()
    col_mate = torch.as_tensor(col_mate).cpu().long()
    if row_mate.shape != (n,) or col_mate.shape != (n,):
        return False
    for mate in (row_mate, col_mate):
        if ((mate < 0) | (mate >= n)).any():
            return False
    if not torch.equal(col_mate[row_mate], idx):
        return False
    if not torch.equal(row_mate[col_mate], idx):
        return False

    tol = tolerance * max(1.0, cost_matrix.abs().max().item())
    slack = reduced_costs(
        cost_matrix,
        torch.as_tensor(u, dtype=torch.float64).cpu(),
        torch.as_tensor(v, dtype=torch.float64).cpu(),
    )
    if (slack < -tol).any():
        return False

    return bool((slack[idx, row_mate].abs() <= tol).all())


def mates_to_matches(row_mate: Tensor) -> Tensor:
    """
    Convert the per-row mates into a list of (row, column) pairs, skipping rows
    that are unmatched (-1).

    Returns
    -------
    Tensor[N_match, 2]
    """
    rows = (row_mate >= 0).nonzero().flatten()
    return torch.column_stack((rows, row_mate[rows])).long()
