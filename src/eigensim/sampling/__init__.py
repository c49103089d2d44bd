"""Covariance samplers and the distributions they draw from."""

from typing import Optional, Union

from ..base.interfaces import CovarianceSampler
from ..base.errors import InvalidParameter
from ..utils.validation import check_ar_params

from .distributions import (
    mvnormal_sample,
    chi2_sample,
    mvt_sample,
    empirical_normal
)
from .covariance import draw_basis, population_covariance
from .gaussian import GaussianSampler
from .autoregressive import AutoregressiveTSampler, autoregressive_filter


def get_sampler(dist: Union[str, CovarianceSampler] = 'norm',
                rho: Optional[float] = None,
                df: Optional[int] = None) -> CovarianceSampler:
    """Resolve a distribution name to a sampler.

    Args:
        dist: 'norm', 't' or a CovarianceSampler instance
        rho: Autoregressive coefficient (required for 't')
        df: Degrees of freedom (required for 't')

    Raises:
        InvalidParameter: Unknown dist or invalid rho/df
    """
    if isinstance(dist, CovarianceSampler):
        return dist
    if dist == 'norm':
        return GaussianSampler()
    if dist == 't':
        rho, df = check_ar_params(rho, df)
        return AutoregressiveTSampler(rho=rho, df=df)
    raise InvalidParameter(f"Unknown dist {dist!r}; expected 'norm' or 't'")


__all__ = [
    'mvnormal_sample',
    'chi2_sample',
    'mvt_sample',
    'empirical_normal',
    'draw_basis',
    'population_covariance',
    'GaussianSampler',
    'AutoregressiveTSampler',
    'autoregressive_filter',
    'get_sampler'
]
