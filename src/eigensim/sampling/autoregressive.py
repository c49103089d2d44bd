"""
Correlated heavy-tailed sampler.

Noise rows are multivariate t with scale ``sigma2 I`` and are chained into
an AR(1) sequence over the sample index. The signal comes from K latent
factors whose sample covariance is exactly the identity.
"""

from typing import Optional
import torch
from torch import Tensor

from ..base.interfaces import CovarianceSampler
from ..base.data_structures import SampledData
from .covariance import draw_basis, population_covariance
from .distributions import mvt_sample, empirical_normal


def autoregressive_filter(noise: Tensor, rho: float) -> Tensor:
    """Turn independent noise rows into an AR(1) sequence.

    ``out[0] = noise[0]`` and ``out[m] = rho * out[m-1] + noise[m]``. Rows
    are produced in ascending order since each depends on the previous
    output row.

    Args:
        noise: (M, N) independent rows
        rho: Autoregressive coefficient

    Returns:
        (M, N) autocorrelated rows
    """
    out = noise.clone()
    for m in range(1, out.shape[0]):
        out[m] = rho * out[m - 1] + noise[m]
    return out


class AutoregressiveTSampler(CovarianceSampler):
    """Sampler for ``dist='t'``.

    Args:
        rho: Autoregressive coefficient in [0, 1)
        df: Degrees of freedom of the t noise
    """

    dist = 't'

    def __init__(self, rho: float, df: int):
        self.rho = rho
        self.df = df

    def sample(self, N: int, M: int, spectrum: Tensor, sigma2: float,
               generator: Optional[torch.Generator] = None) -> SampledData:
        dtype, device = spectrum.dtype, spectrum.device
        K = spectrum.shape[0]

        scale = sigma2 * torch.eye(N, dtype=dtype, device=device)
        errors = mvt_sample(M, scale, self.df, generator=generator)  # (M, N)
        errors = autoregressive_filter(errors, self.rho)

        latent = empirical_normal(M, K, generator=generator, dtype=dtype, device=device)  # (M, K)
        basis = draw_basis(N, K, generator=generator, dtype=dtype, device=device)

        signal = (basis * torch.sqrt(spectrum).unsqueeze(0)) @ latent.t()  # (N, M)
        data = (signal + errors.t()).t()

        covariance = population_covariance(basis, spectrum, sigma2)
        return SampledData(covariance=covariance, data=data, basis=basis)

    def __repr__(self) -> str:
        return f"AutoregressiveTSampler(rho={self.rho}, df={self.df})"
