"""
Core interfaces for the eigenstructure simulation pipeline.

The pipeline has two pluggable stages: the trend that shapes the signal
spectrum, and the sampler that turns a spectrum into a data matrix. Both are
defined here as abstract base classes so that every implementation exposes
the same API.
"""

from abc import ABC, abstractmethod
from typing import Optional
import torch
from torch import Tensor

from .data_structures import SampledData


class SpectrumTrend(ABC):
    """Abstract base class for signal spectrum shapes.

    A trend fixes the smallest of the K signal eigenvalues to ``last`` and
    distributes the remaining variance over the first K-1 values so that the
    whole spectrum sums to ``remain``.
    """

    name: str = ''

    @abstractmethod
    def build(self, K: int, remain: float, last: float,
              dtype: torch.dtype = torch.float64,
              device: Optional[torch.device] = None) -> Tensor:
        """Compute the K signal eigenvalues.

        Args:
            K: Latent rank
            remain: Total variance available to the signal directions
            last: Value of the K-th (smallest) eigenvalue
            dtype: Output dtype
            device: Output device

        Returns:
            (K,) tensor of eigenvalues sorted in descending order
        """
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class CovarianceSampler(ABC):
    """Abstract base class for covariance samplers.

    Implementations draw a fresh orthogonal basis, build the population
    covariance from it and return an M x N data matrix whose rows are
    samples.
    """

    dist: str = ''

    @abstractmethod
    def sample(self, N: int, M: int, spectrum: Tensor, sigma2: float,
               generator: Optional[torch.Generator] = None) -> SampledData:
        """Draw a data matrix.

        Args:
            N: Ambient dimension
            M: Number of samples
            spectrum: (K,) squared singular values of the signal subspace
            sigma2: Noise variance per direction
            generator: Source of randomness (None for the global generator)

        Returns:
            SampledData with (N, N) covariance, (M, N) data and (N, K) basis
        """
        pass
