"""
Data containers passed between the pipeline stages.

None of these objects outlives a single simulation call; they exist so that
stages can hand several related tensors to each other at once.
"""

from typing import Optional, Dict, Any, Tuple
import torch
from torch import Tensor
from dataclasses import dataclass, field


@dataclass
class SampledData:
    """Output of a covariance sampler."""

    covariance: Tensor  # (N, N) population covariance
    data: Tensor        # (M, N) rows are samples
    basis: Tensor       # (N, K) orthonormal signal directions

    def __post_init__(self):
        """Validate shapes."""
        N = self.covariance.shape[0]
        assert self.covariance.shape == (N, N)
        assert self.data.dim() == 2 and self.data.shape[1] == N
        assert self.basis.shape[0] == N

    @property
    def n_samples(self) -> int:
        return self.data.shape[0]

    @property
    def n_features(self) -> int:
        return self.data.shape[1]


@dataclass
class SimulationResult:
    """Everything produced by one simulation call.

    ``data`` is always laid out with samples as rows, whichever sampling
    model produced it.
    """

    sample_eigenvalues: Tensor  # (N,) descending
    spectrum: Tensor            # (K,) descending
    sigma2: float
    population_covariance: Tensor  # (N, N)
    data: Optional[Tensor] = None  # (M, N)

    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def rank(self) -> int:
        return self.spectrum.shape[0]

    @property
    def dimension(self) -> int:
        return self.sample_eigenvalues.shape[0]

    @property
    def population_eigenvalues(self) -> Tensor:
        """(N,) eigenvalues of the population covariance, descending.

        The first K are ``spectrum + sigma2``, the rest equal ``sigma2``.
        """
        values = torch.full((self.dimension,), self.sigma2,
                            dtype=self.spectrum.dtype, device=self.spectrum.device)
        values[:self.rank] += self.spectrum
        return torch.sort(values, descending=True).values

    def as_tuple(self) -> Tuple[Optional[Tensor], Tensor]:
        """Return ``(data, sample_eigenvalues)``."""
        return self.data, self.sample_eigenvalues
