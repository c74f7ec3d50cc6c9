"""Pytest configuration and shared node generators.

Makes `src` importable without installing the package.
"""

from __future__ import annotations

import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any, cast

import numpy as np
import numpy.typing as npt
import pytest
from numpy.polynomial import legendre


def _ensure_src_on_sys_path() -> None:
    """Prepend the repository `src` directory to `sys.path` if missing."""
    repo_root: Path = Path(__file__).resolve().parents[1]
    src_path: Path = repo_root / "src"
    if str(src_path) not in sys.path:
        sys.path.insert(0, str(src_path))


_ensure_src_on_sys_path()


def gauss_lobatto_nodes(n_pts: int, dtype: npt.DTypeLike = np.float64) -> npt.NDArray[Any]:
    """Gauss-Lobatto-Legendre nodes on [-1, 1]: the end points and the roots of P_{n-1}'."""
    basis_t = cast(Callable[[int], Any], legendre.Legendre.basis)
    P_prime = basis_t(n_pts - 1).deriv()
    interior = np.sort(np.real(cast(npt.NDArray[Any], P_prime.roots())))
    nodes = np.concatenate((np.array([-1.0]), interior, np.array([1.0])))
    return nodes.astype(dtype)


@pytest.fixture
def gll_nodes() -> Callable[..., npt.NDArray[Any]]:
    """Provide the Gauss-Lobatto-Legendre node generator to tests."""
    return gauss_lobatto_nodes
