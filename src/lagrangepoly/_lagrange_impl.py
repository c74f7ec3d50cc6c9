"""Precomputation of the per-node tables used by the Lagrange kernels."""

from __future__ import annotations

import logging

import numpy as np
import numpy.typing as npt

from .exceptions import DegenerateInputError
from .tolerance import get_node_separation_tolerance

_logger = logging.getLogger(__name__)


def _excluded_index_table(m: int) -> npt.NDArray[np.intp]:
    """Build the (m, m-1) table whose row k is ``range(m)`` without k.

    Row order and the order of the remaining indices are preserved, e.g.
    for m = 3: [[1, 2], [0, 2], [0, 1]].
    """
    indices = np.broadcast_to(np.arange(m), (m, m))
    return indices[~np.eye(m, dtype=bool)].reshape(m, m - 1)


def _check_distinct_nodes(nodes: npt.NDArray[np.float32 | np.float64]) -> None:
    """Raise if the two closest nodes are closer than the separation tolerance.

    The tolerance from ``get_node_separation_tolerance`` is scaled by
    ``max(1, max|x|)``, which makes it an absolute floor for node sets
    within unit magnitude.

    Args:
        nodes (npt.NDArray[np.float32 | np.float64]): Validated 1D nodes.

    Raises:
        DegenerateInputError: If two nodes are numerically identical.
    """
    order = np.argsort(nodes, kind="stable")
    gaps = np.diff(nodes[order])
    k = int(np.argmin(gaps))
    scale = max(1.0, float(np.max(np.abs(nodes))))
    tol = get_node_separation_tolerance(nodes.dtype) * scale
    if gaps[k] <= tol:
        i, j = sorted((int(order[k]), int(order[k + 1])))
        raise DegenerateInputError(
            f"nodes {i} and {j} are not distinct: separation {float(gaps[k])!r} "
            f"is below tolerance {tol!r}"
        )


def _compute_one_over_denominators(
    nodes: npt.NDArray[np.float32 | np.float64],
    other_nodes: npt.NDArray[np.float32 | np.float64],
) -> npt.NDArray[np.float32 | np.float64]:
    """Compute 1 / prod((x_j - x_i) for i != j) for every node j.

    Starting from 1.0, the value is divided by each difference in the order
    of ``other_nodes[j]``, i.e. all i < j ascending followed by all i > j
    ascending. Coincident nodes give a non-finite value without warning.
    """
    scalar = nodes.dtype.type
    one_over_denominators = np.empty_like(nodes)
    with np.errstate(divide="ignore"):
        for j in range(nodes.shape[0]):
            value = scalar(1.0)
            x_j = nodes[j]
            for x_i in other_nodes[j]:
                value /= x_j - x_i
            one_over_denominators[j] = value
    return one_over_denominators


def _build_Lagrange_poly_tables_impl(
    nodes: npt.NDArray[np.float32 | np.float64],
    check_distinct: bool = True,
) -> tuple[
    npt.NDArray[np.float32 | np.float64],
    npt.NDArray[np.float32 | np.float64],
    npt.NDArray[np.float32 | np.float64],
]:
    """Build the stacked, read-only tables for all nodes.

    Args:
        nodes (npt.NDArray[np.float32 | np.float64]): Validated 1D nodes with
            at least two entries (see ``_normalize_nodes``).
        check_distinct (bool): Whether to reject numerically coincident nodes.
            Defaults to True.

    Returns:
        tuple: ``(other_nodes, other_nodes_derivative, one_over_denominators)``
        with shapes (N, N-1), (N, N-1, N-2) and (N,). Row j of
        ``other_nodes`` is ``nodes`` without entry j; ``other_nodes_derivative[j, k]``
        is ``other_nodes[j]`` without its entry k.

    Raises:
        DegenerateInputError: If ``check_distinct`` is set and two nodes coincide.
    """
    if check_distinct:
        _check_distinct_nodes(nodes)

    n_nodes = nodes.shape[0]
    other_nodes = nodes[_excluded_index_table(n_nodes)]
    other_nodes_derivative = other_nodes[:, _excluded_index_table(n_nodes - 1)]
    one_over_denominators = _compute_one_over_denominators(nodes, other_nodes)

    non_finite = np.flatnonzero(~np.isfinite(one_over_denominators))
    if non_finite.size > 0:
        _logger.warning(
            "Non-finite Lagrange denominators for node indices %s; "
            "evaluations for these nodes will not be finite",
            non_finite.tolist(),
        )

    for arr in (other_nodes, other_nodes_derivative, one_over_denominators):
        arr.flags.writeable = False

    _logger.debug("Built Lagrange tables for %d nodes (dtype=%s)", n_nodes, nodes.dtype)
    return other_nodes, other_nodes_derivative, one_over_denominators
