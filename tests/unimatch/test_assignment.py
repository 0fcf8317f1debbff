r"""
Tests for ``unimatch.Hungarian``.
"""

from __future__ import annotations

import time

import pytest
import torch

import unimatch


@pytest.fixture(
    params=[1, 8, 32],
    ids=(
        "cost:single",
        "cost:small",
        "cost:large",
    ),
)
def cost_matrix(request):
    size = request.param
    return torch.rand((size, size), dtype=torch.float) ** 10


@pytest.fixture(
    params=[torch.inf, 0.5],
    ids=(
        "threshold:none",
        "threshold:half",
    ),
    scope="module",
)
def solver(request):
    mod = unimatch.Hungarian(threshold=request.param)
    assert isinstance(mod, unimatch.Assignment)
    return mod


def test_assignment_invoke(cost_matrix, solver):
    matches, unmatch_rows, unmatch_cols = solver(cost_matrix)

    assert matches.shape[0] <= min(cost_matrix.shape)
    assert matches.shape[1] == 2
    assert matches.shape[0] + unmatch_rows.shape[0] == cost_matrix.shape[0]
    assert matches.shape[0] + unmatch_cols.shape[0] == cost_matrix.shape[1]
    assert not any(matches[:, 0] < 0)
    assert not any(matches[:, 1] < 0)
    assert not any(r in matches[:, 0] for r in unmatch_rows)
    assert not any(c in matches[:, 1] for c in unmatch_cols)
    assert torch.all(cost_matrix[matches[:, 0], matches[:, 1]] < solver.threshold)


@pytest.mark.parametrize(
    ["cost_matrix", "solution"],
    [
        (
            torch.arange(9, dtype=torch.float).reshape(3, 3),
            torch.tensor([[0, 0], [1, 1], [2, 2]]),
        ),
        (
            torch.arange(9, 0, -1, dtype=torch.float).reshape(3, 3),
            torch.tensor([[0, 0], [1, 1], [2, 2]]),
        ),
        (
            torch.tensor([[1.0, 4.0], [4.0, 100.0]]),
            torch.tensor([[0, 1], [1, 0]]),
        ),
    ],
)
def test_assignment_known(cost_matrix, solution):
    """
    Test if the solver finds the known N x 2 matches of an N x N cost matrix
    """
    solver = unimatch.Hungarian()

    time_list = []
    for _ in range(3):
        solve_time = time.process_time()
        matches, unmatch_rows, unmatch_cols = solver(cost_matrix)
        time_list.append((time.process_time() - solve_time) * 1e3)

    print(f"- Solve time: {sum(time_list) / len(time_list):.3f} ms")

    assert matches.shape == solution.shape
    assert torch.equal(matches, solution)
    assert unmatch_rows.numel() == 0
    assert unmatch_cols.numel() == 0


def test_assignment_threshold():
    cost_matrix = torch.tensor([[1.0, 4.0], [4.0, 100.0]])

    # Leaving the expensive pair unmatched is cheaper than the cross assignment
    matches, unmatch_rows, unmatch_cols = unimatch.Hungarian(threshold=5.0)(cost_matrix)

    assert matches.tolist() == [[0, 0]]
    assert unmatch_rows.tolist() == [1]
    assert unmatch_cols.tolist() == [1]


def test_assignment_threshold_all_gated():
    cost_matrix = torch.full((3, 3), 10.0)

    matches, unmatch_rows, unmatch_cols = unimatch.hungarian_assignment(cost_matrix, 10.0)

    assert matches.shape == (0, 2)
    assert unmatch_rows.tolist() == [0, 1, 2]
    assert unmatch_cols.tolist() == [0, 1, 2]


def test_assignment_invalid():
    solver = unimatch.Hungarian()

    with pytest.raises(ValueError):
        solver(torch.zeros((2, 3)))
    with pytest.raises(ValueError):
        solver(torch.zeros((0, 0)))


def test_assignment_repr():
    assert "threshold=2.5" in repr(unimatch.Hungarian(threshold=2.5))
