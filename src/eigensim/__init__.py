"""
eigensim: simulated sample eigenvalues with a known latent rank.

This package generates test instances for rank-estimation and
signal-detection procedures in high-dimensional covariance analysis:
- Signal spectra from linear, quadratic or exponential trends
- Independent Gaussian rows or AR(1) multivariate-t noise
- Sample eigenvalues after nearest positive semidefinite repair

Example usage:
    >>> from eigensim import get_data_singular, SingularSimulator
    >>>
    >>> # Explicit squared singular values
    >>> X, eigs = get_data_singular(N=200, K=5, M=1000, sq_singular=[5, 4, 2, 1, 1])
    >>>
    >>> # Trend-based spectrum with full diagnostics
    >>> sim = SingularSimulator(n_features=200, rank=5, n_samples=1000,
    ...                         sigma2=0.2, last=0.1, trend='exponential',
    ...                         random_state=0)
    >>> result = sim.simulate()
    >>> result.sample_eigenvalues[:6]
"""

__version__ = '0.1.0'

from .simulator import SingularSimulator, get_data_singular
from .spectrum import build_spectrum, spectrum_from_singular, get_trend
from .sampling import GaussianSampler, AutoregressiveTSampler, get_sampler
from .estimator import SpectralEstimator, estimate, repaired_eigenvalues

from .visualization import plot_scree, plot_result

from .base import (
    SimulationResult,
    SampledData,
    SimulationError,
    InvalidDimension,
    InvalidRank,
    InvalidNoiseLevel,
    InvalidSpectrum,
    InfeasibleSpectrum,
    UnsupportedTrend,
    InvalidParameter,
    NumericalFailure
)

__all__ = [
    # Entry points
    'SingularSimulator',
    'get_data_singular',

    # Pipeline stages
    'build_spectrum',
    'spectrum_from_singular',
    'get_trend',
    'GaussianSampler',
    'AutoregressiveTSampler',
    'get_sampler',
    'SpectralEstimator',
    'estimate',
    'repaired_eigenvalues',

    # Visualization
    'plot_scree',
    'plot_result',

    # Data structures
    'SimulationResult',
    'SampledData',

    # Exceptions
    'SimulationError',
    'InvalidDimension',
    'InvalidRank',
    'InvalidNoiseLevel',
    'InvalidSpectrum',
    'InfeasibleSpectrum',
    'UnsupportedTrend',
    'InvalidParameter',
    'NumericalFailure',

    # Version
    '__version__'
]
