"""
Exception hierarchy for eigenstructure simulation.

Every failure raised by this package derives from ``SimulationError``.
Input problems are also ``ValueError`` subclasses so callers that already
catch ``ValueError`` keep working; numerical breakdowns are
``ArithmeticError`` subclasses.
"""


class SimulationError(Exception):
    """Base class for all simulation failures."""


class InvalidDimension(SimulationError, ValueError):
    """N, K or M is not a positive integer."""


class InvalidRank(SimulationError, ValueError):
    """K is not strictly smaller than both N and M."""


class InvalidNoiseLevel(SimulationError, ValueError):
    """sigma2 is missing or outside (0, 1]."""


class InvalidSpectrum(SimulationError, ValueError):
    """A user-supplied spectrum has the wrong length or contents."""


class InfeasibleSpectrum(SimulationError, ValueError):
    """The requested spectrum cannot fit in the available variance."""


class UnsupportedTrend(SimulationError, ValueError):
    """The trend name is not one of the registered trends."""


class InvalidParameter(SimulationError, ValueError):
    """A sampling parameter (dist, rho, df) is invalid."""


class NumericalFailure(SimulationError, ArithmeticError):
    """Root finding or positive-semidefinite repair broke down."""
