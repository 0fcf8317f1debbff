r"""
UniMatch
========

This module solves the linear assignment problem on a dense square cost matrix,
finding the one-to-one matching of rows to columns with minimum total cost.

.. math::

    \min_{\sigma \in S_n} \sum_i c_{i \sigma(i)}

Maximum cost matchings are found by negating the costs.

Terminology
-----------

- **Row/column mate**: The column matched to a row (``row_mate``) and the row
    matched to a column (``col_mate``), or -1 while unmatched.

- **Potentials**: Dual variables ``u`` (rows) and ``v`` (columns) that certify
    optimality.

- **Reduced cost**: The slack ``c[i, j] - u[i] - v[j]`` of an edge, which is
    non-negative everywhere and zero on matched edges.

- **Augmenting path**: An alternating path from a free row to a free column,
    which grows the matching by one pair.
"""

from __future__ import annotations

__version__ = "1.0.0"

from . import debug
from ._base import *
from ._hungarian import *
from ._matching import *
from ._utils import *
