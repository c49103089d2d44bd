"""Population covariance construction shared by the samplers."""

from typing import Optional
import torch
from torch import Tensor

from ..utils.linalg import random_orthogonal


def draw_basis(N: int, K: int, generator: Optional[torch.Generator] = None,
               dtype: torch.dtype = torch.float64,
               device: Optional[torch.device] = None) -> Tensor:
    """First K columns of a fresh uniformly random N x N orthogonal matrix."""
    return random_orthogonal(N, generator=generator, dtype=dtype, device=device)[:, :K]


def population_covariance(basis: Tensor, spectrum: Tensor, sigma2: float) -> Tensor:
    """``basis @ diag(spectrum) @ basis.T + sigma2 * I``.

    Args:
        basis: (N, K) orthonormal columns
        spectrum: (K,) squared singular values
        sigma2: Noise variance added to every direction

    Returns:
        (N, N) symmetric covariance
    """
    N = basis.shape[0]
    signal = (basis * spectrum.unsqueeze(0)) @ basis.t()
    signal = 0.5 * (signal + signal.t())
    return signal + sigma2 * torch.eye(N, dtype=basis.dtype, device=basis.device)
