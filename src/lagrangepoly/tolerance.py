"""Tolerance presets for floating-point checks on Lagrange node sets."""

from functools import cache
from typing import Any, NamedTuple, cast

import numpy as np
from numpy import typing as npt

# Multiple of machine epsilon below which two nodes are considered equal.
_NODE_SEPARATION_EPS_FACTOR = 16.0


@cache
def _ensure_float_dtype_by_name(name: str) -> np.dtype[np.floating[Any]]:
    """Cached validator returning a supported floating dtype from its name.

    Args:
        name (str): Canonical NumPy dtype name (e.g., "float64").

    Returns:
        np.dtype[np.floating[Any]]: Validated floating-point dtype.

    Raises:
        ValueError: If dtype is not float32 or float64.
    """
    dtype_obj = np.dtype(name)
    if dtype_obj.type not in (np.float32, np.float64):
        raise ValueError(f"Unsupported dtype: {name}")
    return cast(np.dtype[np.floating[Any]], dtype_obj)


def _ensure_float_dtype(dtype: npt.DTypeLike) -> np.dtype[np.floating[Any]]:
    """Normalize and validate a dtype-like into float32 or float64."""
    return _ensure_float_dtype_by_name(np.dtype(dtype).name)


class _TolerancePreset(NamedTuple):
    """Tolerance values for each supported floating-point type."""

    float32: float
    float64: float


_TOLERANCE_PRESETS = {
    "default": _TolerancePreset(1e-6, 1e-12),
    "strict": _TolerancePreset(1e-7, 1e-15),
}


def _get_tolerance(dtype: npt.DTypeLike, preset: _TolerancePreset) -> float:
    dtype_obj = _ensure_float_dtype(dtype)
    if dtype_obj.type == np.float32:
        return preset.float32
    return preset.float64


def get_default_tolerance(dtype: npt.DTypeLike) -> float:
    """Get a reasonable default tolerance for comparing interpolated values.

    Args:
        dtype (npt.DTypeLike): float32 or float64 dtype (or its name).

    Returns:
        float: Recommended tolerance value for the given dtype.

    Raises:
        ValueError: If dtype is not float32 or float64.

    Example:
        >>> get_default_tolerance(np.float32)
        1e-06
        >>> get_default_tolerance("float64")
        1e-12
    """
    return _get_tolerance(dtype, _TOLERANCE_PRESETS["default"])


def get_strict_tolerance(dtype: npt.DTypeLike) -> float:
    """Get a strict tolerance, used for values that should be exact up to roundoff.

    Args:
        dtype (npt.DTypeLike): float32 or float64 dtype (or its name).

    Returns:
        float: Strict tolerance value for the given dtype.

    Raises:
        ValueError: If dtype is not float32 or float64.
    """
    return _get_tolerance(dtype, _TOLERANCE_PRESETS["strict"])


def get_machine_epsilon(dtype: npt.DTypeLike) -> float:
    """Get machine epsilon for a given floating-point dtype.

    Args:
        dtype (npt.DTypeLike): float32 or float64 dtype (or its name).

    Returns:
        float: Machine epsilon for the given dtype.

    Raises:
        ValueError: If dtype is not float32 or float64.
    """
    return float(np.finfo(_ensure_float_dtype(dtype)).eps)


def get_node_separation_tolerance(dtype: npt.DTypeLike) -> float:
    """Get the relative separation below which two nodes are treated as duplicates.

    Callers scale the returned value by ``max(1, max|x|)`` over the node set
    before comparing it against node differences. Above unit scale the check
    is therefore relative to the largest node magnitude; below unit scale it
    is an absolute floor, so node sets whose spacing is itself below
    ``16 * eps`` (e.g. ``[0, 1e-16, 2e-16]``) are rejected even when their
    denominators would be finite.

    Args:
        dtype (npt.DTypeLike): float32 or float64 dtype (or its name).

    Returns:
        float: ``16 * eps`` for the given dtype.

    Raises:
        ValueError: If dtype is not float32 or float64.
    """
    return _NODE_SEPARATION_EPS_FACTOR * get_machine_epsilon(dtype)
