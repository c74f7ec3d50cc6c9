"""Lagrange basis polynomials on an arbitrary, fixed set of nodes.

Given N distinct nodes x_0, ..., x_{N-1}, the j-th Lagrange basis polynomial

    l_j(x) = prod((x - x_i) for i != j) / prod((x_j - x_i) for i != j)

is the unique polynomial of degree N-1 that is 1 at x_j and 0 at every
other node. A :class:`LagrangePolyData` is built once per node set and
precomputes, for each node, the nodes entering the products above and the
inverse of the denominator, so that any basis polynomial (or its first
derivative) can be evaluated repeatedly without recomputing node differences.

Interpolating a function f sampled at the nodes is left to the caller::

    data = build_Lagrange_poly_data(nodes)
    f_x = sum(f[j] * evaluate_Lagrange_poly(node_data, x) for j, node_data in enumerate(data))

or, for many points at once, ``tabulate_Lagrange_poly(data, pts) @ f``.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import cast

import numpy as np
import numpy.typing as npt

from ._lagrange_core import (
    _Lagrange_poly_core,
    _Lagrange_poly_derivative_core,
    _tabulate_Lagrange_poly_core,
    _tabulate_Lagrange_poly_derivative_core,
)
from ._lagrange_impl import _build_Lagrange_poly_tables_impl
from ._lagrange_utils import (
    _compute_final_output_shape_1D,
    _normalize_nodes,
    _normalize_points_1D,
    _validate_out_array_1D,
)


class LagrangeNodeData:
    """Precomputed data for the Lagrange basis polynomial of a single node.

    Instances are created by :class:`LagrangePolyData` and hold read-only
    views into its tables; they are never built directly.
    """

    __slots__ = (
        "_index",
        "_node",
        "_one_over_denominator",
        "_other_nodes",
        "_other_nodes_derivative",
    )

    def __init__(
        self,
        index: int,
        node: np.float32 | np.float64,
        other_nodes: npt.NDArray[np.float32 | np.float64],
        other_nodes_derivative: npt.NDArray[np.float32 | np.float64],
        one_over_denominator: np.float32 | np.float64,
    ) -> None:
        """Initialize the node data.

        Args:
            index (int): Position j of the node in the node set.
            node (np.float32 | np.float64): The node x_j.
            other_nodes (npt.NDArray[np.float32 | np.float64]): Read-only
                array of the N-1 nodes x_i, i != j, in node set order.
            other_nodes_derivative (npt.NDArray[np.float32 | np.float64]):
                Read-only array of shape (N-1, N-2); row k is ``other_nodes``
                without its k-th entry.
            one_over_denominator (np.float32 | np.float64):
                1 / prod((x_j - x_i) for i != j).
        """
        self._index = index
        self._node = node
        self._other_nodes = other_nodes
        self._other_nodes_derivative = other_nodes_derivative
        self._one_over_denominator = one_over_denominator

    @property
    def index(self) -> int:
        """Get the position j of the node in the node set."""
        return self._index

    @property
    def node(self) -> float:
        """Get the node x_j where this basis polynomial equals 1."""
        return float(self._node)

    @property
    def dtype(self) -> np.dtype[np.float32 | np.float64]:
        """Get the floating point dtype of the node data."""
        return self._other_nodes.dtype

    @property
    def other_nodes(self) -> npt.NDArray[np.float32 | np.float64]:
        """Get the nodes where this basis polynomial vanishes (read-only)."""
        return self._other_nodes

    @property
    def other_nodes_derivative(self) -> npt.NDArray[np.float32 | np.float64]:
        """Get the (N-1, N-2) table of nodes used by the derivative (read-only)."""
        return self._other_nodes_derivative

    @property
    def one_over_denominator(self) -> float:
        """Get 1 / prod((x_j - x_i) for i != j)."""
        return float(self._one_over_denominator)

    def __call__(self, x: float) -> float:
        """Evaluate this basis polynomial at x."""
        return evaluate_Lagrange_poly(self, x)

    def derivative(self, x: float) -> float:
        """Evaluate the first derivative of this basis polynomial at x."""
        return evaluate_Lagrange_poly_derivative(self, x)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(index={self._index}, node={self.node!r}, "
            f"n_nodes={self._other_nodes.shape[0] + 1})"
        )


class LagrangePolyData:
    """Lagrange basis data for an immutable, ordered set of nodes.

    The caller's node order is preserved and defines the index of every
    basis polynomial. All arrays exposed by this class and by its
    :class:`LagrangeNodeData` records are read-only, and the nodes are copied
    on construction, so later changes to the caller's array have no effect.
    """

    def __init__(self, nodes: npt.ArrayLike, check_distinct: bool = True) -> None:
        """Validate the nodes and precompute the per-node data.

        Args:
            nodes (npt.ArrayLike): Ordered sequence of at least two distinct
                real nodes. float32 and float64 arrays keep their dtype; other
                inputs are converted to float64.
            check_distinct (bool): If True, nodes closer than the separation
                tolerance (see
                :func:`lagrangepoly.tolerance.get_node_separation_tolerance`)
                are rejected. If False, no check is made and coincident nodes
                produce non-finite denominators. Defaults to True.

        Raises:
            InvalidConfigurationError: If nodes are not 1D, have fewer than two
                entries, or are not finite.
            DegenerateInputError: If ``check_distinct`` is True and two nodes
                are numerically identical.
        """
        self._nodes = _normalize_nodes(nodes)
        (
            self._other_nodes,
            self._other_nodes_derivative,
            self._one_over_denominators,
        ) = _build_Lagrange_poly_tables_impl(self._nodes, check_distinct)
        self._node_data = tuple(
            LagrangeNodeData(
                j,
                self._nodes[j],
                self._other_nodes[j],
                self._other_nodes_derivative[j],
                self._one_over_denominators[j],
            )
            for j in range(self.n_nodes)
        )

    @property
    def nodes(self) -> npt.NDArray[np.float32 | np.float64]:
        """Get the interpolation nodes (read-only copy of the input)."""
        return self._nodes

    @property
    def n_nodes(self) -> int:
        """Get the number of nodes N, equal to the number of basis polynomials."""
        return int(self._nodes.shape[0])

    @property
    def degree(self) -> int:
        """Get the degree N-1 of the basis polynomials."""
        return self.n_nodes - 1

    @property
    def dtype(self) -> np.dtype[np.float32 | np.float64]:
        """Get the floating point dtype of the nodes."""
        return self._nodes.dtype

    @property
    def node_data(self) -> tuple[LagrangeNodeData, ...]:
        """Get the per-node data, in node order."""
        return self._node_data

    @property
    def other_nodes(self) -> npt.NDArray[np.float32 | np.float64]:
        """Get the (N, N-1) stack of ``other_nodes`` tables (read-only)."""
        return self._other_nodes

    @property
    def other_nodes_derivative(self) -> npt.NDArray[np.float32 | np.float64]:
        """Get the (N, N-1, N-2) stack of derivative tables (read-only)."""
        return self._other_nodes_derivative

    @property
    def one_over_denominators(self) -> npt.NDArray[np.float32 | np.float64]:
        """Get the (N,) array of inverse denominators (read-only)."""
        return self._one_over_denominators

    def __len__(self) -> int:
        return self.n_nodes

    def __getitem__(self, index: int) -> LagrangeNodeData:
        return self._node_data[index]

    def __iter__(self) -> Iterator[LagrangeNodeData]:
        return iter(self._node_data)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(n_nodes={self.n_nodes}, dtype={self.dtype})"


def build_Lagrange_poly_data(nodes: npt.ArrayLike, check_distinct: bool = True) -> LagrangePolyData:
    """Precompute the Lagrange basis data for the given nodes.

    Construction costs O(N^2) time and stores O(N^3) values (one
    (N-1, N-2) derivative table per node); it should be done once per node set.

    Args:
        nodes (npt.ArrayLike): Ordered sequence of at least two distinct real
            nodes. The order defines the index of each basis polynomial.
        check_distinct (bool): Whether to reject numerically coincident nodes.
            Defaults to True.

    Returns:
        LagrangePolyData: The immutable node set data.

    Raises:
        InvalidConfigurationError: If fewer than two nodes are given, or the
            nodes are not a finite 1D sequence.
        DegenerateInputError: If ``check_distinct`` is True and two nodes are
            numerically identical.

    Example:
        >>> data = build_Lagrange_poly_data([0.0, 1.0])
        >>> evaluate_Lagrange_poly(data[0], 0.25)
        0.75
    """
    return LagrangePolyData(nodes, check_distinct=check_distinct)


def evaluate_Lagrange_poly(node_data: LagrangeNodeData, x: float) -> float:
    """Evaluate the Lagrange basis polynomial of one node at x.

    The result is exactly 1.0 at the node itself and exactly 0.0 at any
    other node. Cost is O(N).

    Args:
        node_data (LagrangeNodeData): Precomputed data of node j.
        x (float): Evaluation point. It is converted to the node set dtype.

    Returns:
        float: l_j(x).
    """
    x_typed = node_data.dtype.type(x)
    return float(
        _Lagrange_poly_core(node_data._other_nodes, node_data._one_over_denominator, x_typed)
    )


def evaluate_Lagrange_poly_derivative(node_data: LagrangeNodeData, x: float) -> float:
    """Evaluate the first derivative of the Lagrange basis polynomial of one node at x.

    Cost is O(N^2): N-1 products of N-2 factors each.

    Args:
        node_data (LagrangeNodeData): Precomputed data of node j.
        x (float): Evaluation point. It is converted to the node set dtype.

    Returns:
        float: dl_j/dx(x).
    """
    x_typed = node_data.dtype.type(x)
    return float(
        _Lagrange_poly_derivative_core(
            node_data._other_nodes_derivative, node_data._one_over_denominator, x_typed
        )
    )


def _tabulate_Lagrange_poly_impl_helper(
    data: LagrangePolyData,
    pts: npt.ArrayLike,
    table: npt.NDArray[np.float32 | np.float64],
    core_func: Callable[..., None],
    out: npt.NDArray[np.float32 | np.float64] | None,
) -> npt.NDArray[np.float32 | np.float64]:
    """Common implementation for tabulating basis values or derivatives.

    Handles input normalization and output allocation/validation before
    calling the core function with the flattened points.
    """
    t, input_shape = _normalize_points_1D(pts, data.dtype)
    n_basis = data.n_nodes

    expected_final_shape = _compute_final_output_shape_1D(input_shape, n_basis)
    if out is None:
        out = np.empty(expected_final_shape, dtype=data.dtype)
    else:
        _validate_out_array_1D(out, expected_final_shape, cast(npt.DTypeLike, data.dtype))

    core_func(table, data.one_over_denominators, t, out.reshape(t.shape[0], n_basis))
    return out


def tabulate_Lagrange_poly(
    data: LagrangePolyData,
    pts: npt.ArrayLike,
    out: npt.NDArray[np.float32 | np.float64] | None = None,
) -> npt.NDArray[np.float32 | np.float64]:
    """Evaluate all Lagrange basis polynomials of a node set at the given points.

    Entry ``[..., j]`` is identical to ``evaluate_Lagrange_poly(data[j], x)``.

    Args:
        data (LagrangePolyData): Node set data.
        pts (npt.ArrayLike): Evaluation points. Can be a scalar, list, or
            numpy array of any shape. Converted to the node set dtype.
        out (npt.NDArray[np.float32 | np.float64] | None): Optional output
            array where the result will be stored. If None, a new array is
            allocated. Defaults to None.

    Returns:
        npt.NDArray[np.float32 | np.float64]: Array of shape
        ``(*np.shape(pts), N)`` with the node set dtype. If `out` was
        provided, returns the same array.

    Raises:
        ValueError: If `out` is provided and has incorrect shape or dtype, or
            is not writeable or not C-contiguous.

    Example:
        >>> data = build_Lagrange_poly_data([0.0, 0.5, 1.0])
        >>> tabulate_Lagrange_poly(data, [0.0, 0.25])
        array([[ 1.   ,  0.   , -0.   ],
               [ 0.375,  0.75 , -0.125]])
    """
    return _tabulate_Lagrange_poly_impl_helper(
        data, pts, data.other_nodes, _tabulate_Lagrange_poly_core, out
    )


def tabulate_Lagrange_poly_derivative(
    data: LagrangePolyData,
    pts: npt.ArrayLike,
    out: npt.NDArray[np.float32 | np.float64] | None = None,
) -> npt.NDArray[np.float32 | np.float64]:
    """Evaluate the first derivatives of all Lagrange basis polynomials at the given points.

    Entry ``[..., j]`` is identical to
    ``evaluate_Lagrange_poly_derivative(data[j], x)``.

    Args:
        data (LagrangePolyData): Node set data.
        pts (npt.ArrayLike): Evaluation points. Can be a scalar, list, or
            numpy array of any shape. Converted to the node set dtype.
        out (npt.NDArray[np.float32 | np.float64] | None): Optional output
            array where the result will be stored. If None, a new array is
            allocated. Defaults to None.

    Returns:
        npt.NDArray[np.float32 | np.float64]: Array of shape
        ``(*np.shape(pts), N)`` with the node set dtype. If `out` was
        provided, returns the same array.

    Raises:
        ValueError: If `out` is provided and has incorrect shape or dtype, or
            is not writeable or not C-contiguous.
    """
    return _tabulate_Lagrange_poly_impl_helper(
        data, pts, data.other_nodes_derivative, _tabulate_Lagrange_poly_derivative_core, out
    )
