"""Exceptions raised while building Lagrange node sets."""


class InvalidConfigurationError(ValueError):
    """Raised when the nodes cannot define a Lagrange basis.

    This covers fewer than two nodes, nodes that are not a 1D sequence and
    non-finite node values.
    """


class DegenerateInputError(ValueError):
    """Raised when two nodes are numerically identical.

    Coincident nodes make the denominator product of the affected basis
    polynomials vanish.
    """
