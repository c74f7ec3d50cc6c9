"""Public API surface for LagrangePoly.

Defines package metadata and exported interfaces.
"""

from typing import Final

# Private API imports (accessible but not in __all__)
# Users can access private functions via: lagrangepoly._lagrange_impl._function_name, etc.
from . import (
    _lagrange_core,  # noqa: F401
    _lagrange_impl,  # noqa: F401
    _lagrange_utils,  # noqa: F401
)

# Public API imports
from .exceptions import DegenerateInputError, InvalidConfigurationError
from .lagrange import (
    LagrangeNodeData,
    LagrangePolyData,
    build_Lagrange_poly_data,
    evaluate_Lagrange_poly,
    evaluate_Lagrange_poly_derivative,
    tabulate_Lagrange_poly,
    tabulate_Lagrange_poly_derivative,
)
from .tolerance import (
    get_default_tolerance,
    get_machine_epsilon,
    get_node_separation_tolerance,
    get_strict_tolerance,
)

# Package metadata
__version__: Final[str] = "0.1.0"
__license__: Final[str] = "MIT"
__author__: Final[str] = "LagrangePoly developers"

# Public interface: only functions/classes that don't start with _
__all__ = [
    "DegenerateInputError",
    "InvalidConfigurationError",
    "LagrangeNodeData",
    "LagrangePolyData",
    "__author__",
    "__license__",
    "__version__",
    "build_Lagrange_poly_data",
    "evaluate_Lagrange_poly",
    "evaluate_Lagrange_poly_derivative",
    "get_default_tolerance",
    "get_machine_epsilon",
    "get_node_separation_tolerance",
    "get_strict_tolerance",
    "tabulate_Lagrange_poly",
    "tabulate_Lagrange_poly_derivative",
]
