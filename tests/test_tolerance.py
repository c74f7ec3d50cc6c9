"""Tests for tolerance utilities."""

from __future__ import annotations

from typing import Any

import numpy as np
import pytest

from lagrangepoly.tolerance import (
    get_default_tolerance,
    get_machine_epsilon,
    get_node_separation_tolerance,
    get_strict_tolerance,
)


class TestTolerance:
    """Test suite for tolerance utilities."""

    @pytest.mark.parametrize(
        ("dtype", "expected"),
        [(np.float32, 1e-6), ("float32", 1e-6), (np.float64, 1e-12), ("float64", 1e-12)],
    )
    def test_get_default_tolerance(self, dtype: Any, expected: float) -> None:
        """Default tolerance per dtype."""
        assert get_default_tolerance(dtype) == expected

    @pytest.mark.parametrize(("dtype", "expected"), [(np.float32, 1e-7), (np.float64, 1e-15)])
    def test_get_strict_tolerance(self, dtype: Any, expected: float) -> None:
        """Strict tolerance per dtype."""
        assert get_strict_tolerance(dtype) == expected

    @pytest.mark.parametrize("dtype", [np.float32, np.float64])
    def test_machine_epsilon(self, dtype: Any) -> None:
        """Machine epsilon matches numpy's finfo."""
        assert get_machine_epsilon(dtype) == float(np.finfo(dtype).eps)

    @pytest.mark.parametrize("dtype", [np.float32, np.float64])
    def test_node_separation_tolerance(self, dtype: Any) -> None:
        """Node separation tolerance is a small multiple of machine epsilon."""
        assert get_node_separation_tolerance(dtype) == 16.0 * float(np.finfo(dtype).eps)

    def test_accepts_dtype_instances(self) -> None:
        """np.dtype objects are accepted like scalar types."""
        assert get_default_tolerance(np.dtype(np.float64)) == 1e-12

    @pytest.mark.parametrize("dtype", [np.float16, np.int32, np.complex128, "int64"])
    def test_unsupported_dtype_raises(self, dtype: Any) -> None:
        """Only float32 and float64 are supported."""
        with pytest.raises(ValueError, match="Unsupported dtype"):
            get_default_tolerance(dtype)
        with pytest.raises(ValueError, match="Unsupported dtype"):
            get_node_separation_tolerance(dtype)
