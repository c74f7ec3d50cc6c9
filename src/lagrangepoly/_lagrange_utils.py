"""Utility functions for normalizing nodes, points and output arrays."""

from __future__ import annotations

import numpy as np
from numpy import typing as npt

from .exceptions import InvalidConfigurationError

_MIN_NUM_NODES = 2


def _normalize_nodes(nodes: npt.ArrayLike) -> npt.NDArray[np.float32 | np.float64]:
    """Validate the interpolation nodes and return a private, read-only copy.

    float32 and float64 inputs keep their dtype; any other numeric input is
    converted to float64. The returned array never aliases ``nodes``.

    Args:
        nodes (npt.ArrayLike): Ordered sequence of interpolation nodes.

    Returns:
        npt.NDArray[np.float32 | np.float64]: 1D contiguous, non-writeable copy.

    Raises:
        InvalidConfigurationError: If nodes are not real numbers, are not 1D,
            have fewer than two entries, or contain NaN or infinite values.
    """
    arr = np.asarray(nodes)
    if not np.issubdtype(arr.dtype, np.number) or np.iscomplexobj(arr):
        raise InvalidConfigurationError(f"nodes must be real numbers, got dtype {arr.dtype}")
    if arr.dtype not in (np.float32, np.float64):
        arr = arr.astype(np.float64)

    if arr.ndim != 1:
        raise InvalidConfigurationError(f"nodes must be a 1D array, got {arr.ndim} dimensions")
    if arr.shape[0] < _MIN_NUM_NODES:
        raise InvalidConfigurationError(
            f"at least {_MIN_NUM_NODES} nodes are required, got {arr.shape[0]}"
        )
    if not np.all(np.isfinite(arr)):
        raise InvalidConfigurationError("nodes must be finite")

    arr = np.array(arr, copy=True, order="C")
    arr.flags.writeable = False
    return arr


def _normalize_points_1D(
    pts: npt.ArrayLike, dtype: npt.DTypeLike
) -> tuple[npt.NDArray[np.float32 | np.float64], tuple[int, ...]]:
    """Flatten evaluation points to a contiguous 1D array of the given dtype.

    Args:
        pts (npt.ArrayLike): Scalar, list, tuple or numpy array of points.
        dtype (npt.DTypeLike): Target dtype (the node set dtype).

    Returns:
        tuple[npt.NDArray[np.float32 | np.float64], tuple[int, ...]]: The
            flattened points and the shape of the input before flattening.
    """
    arr = np.asarray(pts)
    input_shape = arr.shape
    flat = np.ascontiguousarray(arr.ravel(), dtype=dtype)
    return flat, input_shape


def _compute_final_output_shape_1D(input_shape: tuple[int, ...], n_basis: int) -> tuple[int, ...]:
    """Output shape for tabulation: the input shape plus a trailing basis axis."""
    return (*input_shape, n_basis)


def _validate_out_array_1D(
    out: npt.NDArray[np.float32 | np.float64],
    expected_shape: tuple[int, ...],
    expected_dtype: npt.DTypeLike,
) -> None:
    """Validate that the output array has the correct shape and dtype.

    Args:
        out (npt.NDArray[np.float32 | np.float64]): The output array to validate.
        expected_shape (tuple[int, ...]): The expected shape of the output array.
        expected_dtype (npt.DTypeLike): The expected dtype.

    Raises:
        ValueError: If the array shape or dtype does not match expectations,
            or if it is not writeable or not C-contiguous.
    """
    if out.shape != expected_shape:
        raise ValueError(f"Output array has shape {out.shape}, but expected shape {expected_shape}")
    if out.dtype != expected_dtype:
        raise ValueError(f"Output array has dtype {out.dtype}, but expected dtype {expected_dtype}")
    if not out.flags.writeable:
        raise ValueError("Output array is not writeable")
    # Results are written through a reshaped view, which must not be a copy.
    if not out.flags.c_contiguous:
        raise ValueError("Output array is not C-contiguous")
