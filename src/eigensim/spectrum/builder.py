"""
Construction of the K signal eigenvalues.

Either derives them from a trend recipe under a total-variance constraint,
or validates a vector supplied by the caller and derives the noise level
from it.
"""

from typing import Optional, Union, Sequence, Tuple, Dict, Any
import math
import torch
from torch import Tensor
import numpy as np
import warnings

from ..base.interfaces import SpectrumTrend
from ..base.errors import InfeasibleSpectrum
from ..utils.validation import check_dimensions, check_noise_level, check_last, validate_spectrum
from .trends import get_trend


def available_variance(N: int, sigma2: float) -> float:
    """Variance left for the signal directions once noise takes ``sigma2 * N``."""
    return N - sigma2 * N


def build_spectrum(N: int, K: int, sigma2: float, last: float,
                   trend: Union[str, SpectrumTrend],
                   dtype: torch.dtype = torch.float64,
                   device: Optional[torch.device] = None,
                   return_info: bool = False) -> Union[Tensor, Tuple[Tensor, Dict[str, Any]]]:
    """Derive K squared singular values from a trend.

    Args:
        N: Ambient dimension
        K: Latent rank
        sigma2: Noise variance in (0, 1]
        last: Value of the K-th signal eigenvalue (> 0)
        trend: 'linear', 'quadratic', 'exponential' or a SpectrumTrend
        dtype: Output dtype
        device: Output device
        return_info: Whether to also return a dict of diagnostics

    Returns:
        (K,) tensor sorted descending summing to ``N - sigma2 * N``, and
        optionally ``{'trend', 'remain', 'resorted'}``

    Raises:
        InvalidDimension, InvalidRank, InvalidNoiseLevel, InfeasibleSpectrum,
        UnsupportedTrend, NumericalFailure
    """
    N, K, _ = check_dimensions(N, K)
    sigma2 = check_noise_level(sigma2)
    last = check_last(last)
    trend_obj = get_trend(trend)

    remain = available_variance(N, sigma2)
    if remain < 0:
        raise InfeasibleSpectrum("not enough variance left for the first K-1 eigenvalues")

    if K == 1:
        values = torch.tensor([last], dtype=dtype, device=device)
        if not math.isclose(last, remain, rel_tol=1e-9, abs_tol=1e-12):
            warnings.warn(f"With K=1 the spectrum is just last={last}; "
                          f"{remain - last:.6g} of the available variance is unused",
                          RuntimeWarning)
    else:
        values = trend_obj.build(K, remain, last, dtype=dtype, device=device)

    if return_info:
        info = {
            'trend': trend_obj.name,
            'remain': remain,
            'resorted': bool(getattr(trend_obj, 'resorted_', False)),
        }
        return values, info
    return values


def spectrum_from_singular(sq_singular: Union[Tensor, np.ndarray, Sequence[float]],
                           N: int, K: int,
                           dtype: torch.dtype = torch.float64,
                           device: Optional[torch.device] = None) -> Tuple[Tensor, float]:
    """Validate a caller-supplied spectrum and derive the noise level.

    Args:
        sq_singular: K squared singular values
        N: Ambient dimension
        K: Latent rank

    Returns:
        (K,) tensor sorted descending, and ``sigma2 = 1 - sum / N``

    Raises:
        InvalidSpectrum: Wrong length or non-numeric input
        InfeasibleSpectrum: If the values sum to N or more
    """
    N, K, _ = check_dimensions(N, K)
    values = validate_spectrum(sq_singular, K, dtype=dtype, device=device)

    total = values.sum().item()
    if total >= N:
        raise InfeasibleSpectrum(
            f"Please ensure sum of the squared singular values is less than N, "
            f"the total amount of standardized variance (sum={total:.6g}, N={N})"
        )

    sigma2 = 1.0 - total / N
    return torch.sort(values, descending=True).values, sigma2
