r"""
Minimum cost bipartite matching on a dense square cost matrix.

The solver is the primal-dual shortest augmenting path variant of the Hungarian
method (in the spirit of Jonker and Volgenant). It keeps a dual feasible pair of
potentials :math:`(u, v)` with

.. math::

    c_{ij} - u_i - v_j \geq 0

and grows a matching on tight edges (zero reduced cost) one augmenting path at a
time. Every path is found with a Dijkstra-like search over the reduced costs, so
the total running time is :math:`O(n^3)`.

Maximisation problems are solved by negating the cost matrix, see
:func:`max_cost_matching`.
"""

from __future__ import annotations

import typing as T

import torch
import torch.fx
from torch import Tensor

from .debug import check_debug_enabled
from ._utils import check_cost_matrix, gather_total_cost

__all__ = [
    "EPSILON",
    "Matching",
    "shortest_augmenting_path",
    "min_cost_matching",
    "max_cost_matching",
]

EPSILON: T.Final[float] = 1e-10


class Matching(T.NamedTuple):
    """
    Result of a matching, unpacks as ``(total_cost, row_mate, col_mate)``.
    """

    total_cost: Tensor
    row_mate: Tensor
    col_mate: Tensor


@torch.no_grad()
def shortest_augmenting_path(
    cost_matrix: T.Any,
) -> T.Tuple[Tensor, Tensor, Tensor, Tensor]:
    """
    Compute a minimum cost perfect matching together with an optimal dual
    solution.

    Parameters
    ----------
    cost_matrix
        Square (N x N) matrix of finite costs. It is never modified.

    Returns
    -------
    row_mate: Tensor[N]
        Column matched to each row.
    col_mate: Tensor[N]
        Row matched to each column.
    u: Tensor[N]
        Row potentials.
    v: Tensor[N]
        Column potentials.

    The matching and the potentials are computed in double precision on the CPU;
    see :func:`min_cost_matching` for the device-aware wrapper.
    """
    cost = check_cost_matrix(cost_matrix).detach().to(device="cpu", dtype=torch.float64)
    n = cost.shape[0]

    # Dual feasible starting point
    u = cost.min(dim=1).values
    v = (cost - u.view(-1, 1)).min(dim=0).values

    row_mate = torch.full((n,), -1, dtype=torch.long)
    col_mate = torch.full((n,), -1, dtype=torch.long)

    # Primal solution on tight edges, satisfying complementary slackness
    mated = 0
    for i in range(n):
        tight = (col_mate < 0) & ((cost[i] - u[i] - v).abs() < EPSILON)
        if not tight.any():
            continue
        j = int(tight.int().argmax())
        row_mate[i] = j
        col_mate[j] = i
        mated += 1

    seeded = mated

    dist = torch.empty(n, dtype=torch.float64)
    dad = torch.empty(n, dtype=torch.long)
    seen = torch.empty(n, dtype=torch.bool)

    while mated < n:
        s = int((row_mate < 0).int().argmax())

        dad.fill_(-1)
        seen.fill_(False)
        dist.copy_(cost[s] - u[s] - v)

        # Closest free column, first minimum wins on ties
        while True:
            j = int(dist.masked_fill(seen, torch.inf).argmin())
            seen[j] = True
            i = int(col_mate[j])
            if i < 0:
                break

            relaxed = dist[j] + cost[i] - u[i] - v
            closer = (~seen) & (relaxed < dist)
            dist[closer] = relaxed[closer]
            dad[closer] = j

        # Columns settled before the terminal one have matched rows
        settled = seen.clone()
        settled[j] = False
        delta = dist[settled] - dist[j]
        v[settled] += delta
        u[col_mate[settled]] -= delta
        u[s] += dist[j]

        while dad[j] >= 0:
            d = int(dad[j])
            col_mate[j] = col_mate[d]
            row_mate[int(col_mate[j])] = j
            j = d
        col_mate[j] = s
        row_mate[s] = j

        mated += 1

    if check_debug_enabled():
        print(
            f"Shortest augmenting path matching of size {n}: "
            f"{seeded} pairs seeded on tight edges, {n - seeded} augmentations"
        )

    return row_mate, col_mate, u, v


def min_cost_matching(cost_matrix: T.Any) -> Matching:
    """
    Solve the assignment problem for a square cost matrix.

    Parameters
    ----------
    cost_matrix
        Square (N x N) matrix of finite costs, as a tensor, array or nested
        sequence.

    Returns
    -------
    Matching
        Minimum total cost and the matching as row and column mates, such that
        ``row_mate[col_mate[j]] == j`` and ``col_mate[row_mate[i]] == i``.
        Tensors are placed on the device of the input.

    Raises
    ------
    ValueError
        If the cost matrix is not square, empty or has non-finite entries.
    """
    cost_matrix = check_cost_matrix(cost_matrix)
    device = cost_matrix.device

    row_mate, col_mate, _, _ = shortest_augmenting_path(cost_matrix)
    row_mate = row_mate.to(device)
    col_mate = col_mate.to(device)
    total_cost = gather_total_cost(cost_matrix, row_mate)

    if check_debug_enabled():
        print(f"Minimum cost matching completed with total cost: {total_cost.item()}")
        for i, j in enumerate(row_mate.tolist()):
            print(f"- match: row {i} -> col {j} (cost: {cost_matrix[i, j].item()})")

    return Matching(total_cost, row_mate, col_mate)


def max_cost_matching(cost_matrix: T.Any) -> Matching:
    """
    Solve the assignment problem for maximum total cost, by negating the costs.
    The reported total is the sum of the original costs of the matched pairs.
    """
    cost_matrix = check_cost_matrix(cost_matrix)
    _, row_mate, col_mate = min_cost_matching(-cost_matrix)

    return Matching(gather_total_cost(cost_matrix, row_mate), row_mate, col_mate)


torch.fx.wrap("min_cost_matching")
torch.fx.wrap("max_cost_matching")
