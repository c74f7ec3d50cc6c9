"""Core Numba-compiled kernels for Lagrange basis polynomials.

This module provides low-level, Numba-accelerated functions evaluating a
single Lagrange basis polynomial (or its first derivative) from the
precomputed node tables, and tabulating all of them over many points.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, TypeVar

import numba as nb
import numpy as np
import numpy.typing as npt

F = TypeVar("F", bound=Callable[..., Any])

if TYPE_CHECKING:
    # During type-checking, make the decorator a no-op that preserves types.
    def nb_jit(*args: object, **kwargs: object) -> Callable[[F], F]:
        def decorator(func: F) -> F:
            return func

        return decorator
else:
    # At runtime, use the real Numba decorator.
    nb_jit = nb.jit  # type: ignore[attr-defined]


@nb_jit(
    nopython=True,
    cache=True,
    parallel=False,
    nogil=True,
)
def _Lagrange_poly_core(
    other_nodes: npt.NDArray[np.float32 | np.float64],
    one_over_denominator: np.float32 | np.float64,
    x: np.float32 | np.float64,
) -> float:
    """Evaluate l_j(x) = prod((x - x_i) for i != j) / prod((x_j - x_i) for i != j).

    The product over ``other_nodes`` is accumulated in stored order starting
    from 1.0 and multiplied by ``one_over_denominator`` at the end.

    Args:
        other_nodes (npt.NDArray[np.float32 | np.float64]): The N-1 nodes x_i, i != j.
        one_over_denominator (np.float32 | np.float64): Precomputed
            1 / prod((x_j - x_i) for i != j).
        x (np.float32 | np.float64): Evaluation point.

    Returns:
        float: Value of the basis polynomial at x.
    """
    poly = 1.0
    for i in range(other_nodes.shape[0]):
        poly *= x - other_nodes[i]
    poly *= one_over_denominator
    return poly


@nb_jit(
    nopython=True,
    cache=True,
    parallel=False,
    nogil=True,
)
def _Lagrange_poly_derivative_core(
    other_nodes_derivative: npt.NDArray[np.float32 | np.float64],
    one_over_denominator: np.float32 | np.float64,
    x: np.float32 | np.float64,
) -> float:
    """Evaluate the first derivative of a Lagrange basis polynomial.

    dl_j/dx(x) = sum(prod((x - x_k) for k != j, i) for i != j) / prod((x_j - x_i) for i != j)

    Each row of ``other_nodes_derivative`` holds the N-2 nodes of one term
    of the sum. Row products are accumulated in stored order and summed in
    row order; the sum is multiplied by ``one_over_denominator`` at the end.

    Args:
        other_nodes_derivative (npt.NDArray[np.float32 | np.float64]): Array of
            shape (N-1, N-2). Row k holds the nodes other than x_j and the k-th
            entry of ``other_nodes``.
        one_over_denominator (np.float32 | np.float64): Precomputed
            1 / prod((x_j - x_i) for i != j).
        x (np.float32 | np.float64): Evaluation point.

    Returns:
        float: Value of the basis polynomial derivative at x.
    """
    result = 0.0
    n_terms = other_nodes_derivative.shape[0]
    n_factors = other_nodes_derivative.shape[1]
    for k in range(n_terms):
        poly = 1.0
        for i in range(n_factors):
            poly *= x - other_nodes_derivative[k, i]
        result += poly
    result *= one_over_denominator
    return result


@nb_jit(
    nopython=True,
    cache=True,
    parallel=False,
    nogil=True,
)
def _tabulate_Lagrange_poly_core(
    other_nodes: npt.NDArray[np.float32 | np.float64],
    one_over_denominators: npt.NDArray[np.float32 | np.float64],
    t: npt.NDArray[np.float32 | np.float64],
    out: npt.NDArray[np.float32 | np.float64],
) -> None:
    """Evaluate every Lagrange basis polynomial at every point of t.

    Args:
        other_nodes (npt.NDArray[np.float32 | np.float64]): Array of shape
            (N, N-1); row j holds the nodes other than x_j.
        one_over_denominators (npt.NDArray[np.float32 | np.float64]): Array of
            shape (N,) with the inverse denominators.
        t (npt.NDArray[np.float32 | np.float64]): 1D array of evaluation points.
        out (npt.NDArray[np.float32 | np.float64]): Output array of shape
            (len(t), N). out[p, j] receives l_j(t[p]). No validation is
            performed inside this numba-compiled function.
    """
    n_basis = other_nodes.shape[0]
    for p in range(t.shape[0]):
        x = t[p]
        for j in range(n_basis):
            out[p, j] = _Lagrange_poly_core(other_nodes[j], one_over_denominators[j], x)


@nb_jit(
    nopython=True,
    cache=True,
    parallel=False,
    nogil=True,
)
def _tabulate_Lagrange_poly_derivative_core(
    other_nodes_derivative: npt.NDArray[np.float32 | np.float64],
    one_over_denominators: npt.NDArray[np.float32 | np.float64],
    t: npt.NDArray[np.float32 | np.float64],
    out: npt.NDArray[np.float32 | np.float64],
) -> None:
    """Evaluate every Lagrange basis polynomial derivative at every point of t.

    Args:
        other_nodes_derivative (npt.NDArray[np.float32 | np.float64]): Array of
            shape (N, N-1, N-2) stacking the per-node exclusion tables.
        one_over_denominators (npt.NDArray[np.float32 | np.float64]): Array of
            shape (N,) with the inverse denominators.
        t (npt.NDArray[np.float32 | np.float64]): 1D array of evaluation points.
        out (npt.NDArray[np.float32 | np.float64]): Output array of shape
            (len(t), N). out[p, j] receives dl_j/dx(t[p]). No validation is
            performed inside this numba-compiled function.
    """
    n_basis = other_nodes_derivative.shape[0]
    for p in range(t.shape[0]):
        x = t[p]
        for j in range(n_basis):
            out[p, j] = _Lagrange_poly_derivative_core(
                other_nodes_derivative[j], one_over_denominators[j], x
            )


def _warmup_numba_functions() -> None:
    """Precompile the kernels with float64 signatures for a faster first call.

    Node tables are read-only in practice, so the dummies are made read-only
    too and the compiled signatures match the ones used at runtime.
    """
    other_nodes = np.array([[1.0], [0.0]], dtype=np.float64)
    other_nodes_derivative = np.empty((2, 1, 0), dtype=np.float64)
    one_over_denominators = np.array([-1.0, 1.0], dtype=np.float64)
    for arr in (other_nodes, other_nodes_derivative, one_over_denominators):
        arr.flags.writeable = False
    t_dummy = np.array([0.0, 0.5, 1.0], dtype=np.float64)
    out_dummy = np.empty((3, 2), dtype=np.float64)

    x = np.float64(0.5)
    _Lagrange_poly_core(other_nodes[0], one_over_denominators[0], x)
    _Lagrange_poly_derivative_core(other_nodes_derivative[0], one_over_denominators[0], x)
    _tabulate_Lagrange_poly_core(other_nodes, one_over_denominators, t_dummy, out_dummy)
    _tabulate_Lagrange_poly_derivative_core(
        other_nodes_derivative, one_over_denominators, t_dummy, out_dummy
    )


# Precompile numba functions on module import (skip during type checking)
if not TYPE_CHECKING:
    _warmup_numba_functions()
