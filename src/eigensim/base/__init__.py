"""Base classes, containers and exceptions for eigensim."""

from .errors import (
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

from .data_structures import (
    SampledData,
    SimulationResult
)

from .interfaces import (
    SpectrumTrend,
    CovarianceSampler
)

__all__ = [
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

    # Data structures
    'SampledData',
    'SimulationResult',

    # Interfaces
    'SpectrumTrend',
    'CovarianceSampler'
]
