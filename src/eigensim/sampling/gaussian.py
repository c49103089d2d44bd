"""
Independent-rows Gaussian sampler.

Draws M i.i.d. rows from N(0, S) with
``S = U diag(spectrum) U^T + sigma2 I`` and U a random orthonormal N x K
basis.
"""

from typing import Optional
import torch
from torch import Tensor

from ..base.interfaces import CovarianceSampler
from ..base.data_structures import SampledData
from ..utils.linalg import nearest_psd
from .covariance import draw_basis, population_covariance
from .distributions import mvnormal_sample


class GaussianSampler(CovarianceSampler):
    """Sampler for ``dist='norm'``.

    Args:
        repair: Whether to project the population covariance onto the PSD
            cone before drawing (guards against rounding in the outer product)
    """

    dist = 'norm'

    def __init__(self, repair: bool = True):
        self.repair = repair

    def sample(self, N: int, M: int, spectrum: Tensor, sigma2: float,
               generator: Optional[torch.Generator] = None) -> SampledData:
        K = spectrum.shape[0]
        basis = draw_basis(N, K, generator=generator,
                           dtype=spectrum.dtype, device=spectrum.device)

        covariance = population_covariance(basis, spectrum, sigma2)
        if self.repair:
            covariance = nearest_psd(covariance)

        data = mvnormal_sample(M, None, covariance, generator=generator)
        return SampledData(covariance=covariance, data=data, basis=basis)

    def __repr__(self) -> str:
        return f"GaussianSampler(repair={self.repair})"
