"""
Input validation and preprocessing utilities.

Every public entry point checks its inputs here before any random number
is drawn, so invalid calls fail fast with a descriptive exception.
"""

from typing import Optional, Union, Sequence, Tuple
import numbers
import torch
from torch import Tensor
import numpy as np

from ..base.errors import (
    InvalidDimension, InvalidRank, InvalidNoiseLevel, InvalidSpectrum,
    InfeasibleSpectrum, InvalidParameter
)


def _is_integer(value) -> bool:
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)


def check_dimensions(N: int, K: int, M: Optional[int] = None) -> Tuple[int, int, Optional[int]]:
    """Validate the ambient dimension, rank and sample size.

    Args:
        N: Ambient dimension
        K: Latent rank
        M: Number of samples (None to check N and K only)

    Returns:
        (N, K, M) as Python ints

    Raises:
        InvalidDimension: If any value is not a positive integer
        InvalidRank: If K >= N or K >= M
    """
    checks = [('N', N), ('K', K)] + ([('M', M)] if M is not None else [])
    for name, value in checks:
        if not _is_integer(value):
            raise InvalidDimension(f"{name} must be an integer, got {type(value).__name__}")
        if value <= 0:
            raise InvalidDimension("Please ensure all of N, K, and M are positive integers "
                                   f"({name}={value})")

    if K >= N or (M is not None and K >= M):
        raise InvalidRank(f"Please supply an integer K smaller than both N and M "
                          f"(N={N}, K={K}, M={M})")

    return int(N), int(K), (int(M) if M is not None else None)


def check_noise_level(sigma2: Optional[float]) -> float:
    """Validate the noise variance sigma2 in (0, 1]."""
    if sigma2 is None:
        raise InvalidNoiseLevel("sigma2 is required when sq_singular is not supplied")
    if not isinstance(sigma2, numbers.Real) or isinstance(sigma2, bool):
        raise InvalidNoiseLevel(f"sigma2 must be a real number, got {type(sigma2).__name__}")
    if not (0 < sigma2 <= 1):
        raise InvalidNoiseLevel(f"Please supply a sigma2 value between 0 and 1, got {sigma2}")
    return float(sigma2)


def check_last(last: Optional[float]) -> float:
    """Validate the value of the smallest signal eigenvalue."""
    if last is None:
        raise InfeasibleSpectrum("last is required for trend-based spectra")
    if not isinstance(last, numbers.Real) or isinstance(last, bool):
        raise InfeasibleSpectrum(f"last must be a real number, got {type(last).__name__}")
    if not last > 0:
        raise InfeasibleSpectrum(f"last must be positive, got {last}")
    return float(last)


def validate_spectrum(sq_singular: Union[Tensor, np.ndarray, Sequence[float]],
                      K: int,
                      dtype: torch.dtype = torch.float64,
                      device: Optional[torch.device] = None) -> Tensor:
    """Validate a user-supplied vector of squared singular values.

    Args:
        sq_singular: Values as a tensor, array or sequence of numbers
        K: Expected length
        dtype: Target dtype
        device: Target device

    Returns:
        (K,) tensor

    Raises:
        InvalidSpectrum: If the input is not numeric, has the wrong length,
            or contains negative or non-finite values
    """
    if isinstance(sq_singular, Tensor):
        if sq_singular.is_complex() or sq_singular.dtype == torch.bool:
            raise InvalidSpectrum("Please ensure singular is a numerical vector of length K")
        values = sq_singular.to(dtype=dtype, device=device)
    else:
        try:
            array = np.asarray(sq_singular)
        except (ValueError, TypeError) as e:
            raise InvalidSpectrum("Please ensure singular is a numerical vector of length K") from e
        if array.dtype.kind not in 'iuf':
            raise InvalidSpectrum("Please ensure singular is a numerical vector of length K")
        values = torch.as_tensor(array, dtype=dtype, device=device)

    if values.dim() != 1 or values.shape[0] != K:
        raise InvalidSpectrum(f"Please ensure singular is a numerical vector of length K "
                              f"(expected {K}, got shape {tuple(values.shape)})")

    if not torch.isfinite(values).all():
        raise InvalidSpectrum("Squared singular values must be finite")
    if (values < 0).any():
        raise InvalidSpectrum("Squared singular values must be non-negative")

    return values


def check_ar_params(rho: Optional[float], df: Optional[int]) -> Tuple[float, int]:
    """Validate the autoregressive coefficient and degrees of freedom."""
    if rho is None or df is None:
        raise InvalidParameter("rho and df are required when dist='t'")
    if not isinstance(rho, numbers.Real) or isinstance(rho, bool):
        raise InvalidParameter(f"rho must be a real number, got {type(rho).__name__}")
    if not (0 <= rho < 1):
        raise InvalidParameter(f"rho must lie in [0, 1), got {rho}")
    if not _is_integer(df) or df <= 0:
        raise InvalidParameter(f"df must be a positive integer, got {df}")
    return float(rho), int(df)


def check_random_state(random_state: Optional[Union[int, torch.Generator]],
                       device: Optional[torch.device] = None) -> Optional[torch.Generator]:
    """Create generator from random state.

    Args:
        random_state: Seed or generator
        device: Device the generator should live on

    Returns:
        Generator or None (use the global generator)
    """
    if random_state is None:
        return None
    elif isinstance(random_state, torch.Generator):
        return random_state
    elif _is_integer(random_state):
        generator = torch.Generator(device=device if device is not None else 'cpu')
        generator.manual_seed(int(random_state))
        return generator
    else:
        raise TypeError(f"random_state must be int or Generator, got {type(random_state)}")


def scale_data(X: Tensor) -> Tensor:
    """Standardize columns to zero mean and unit variance.

    Uses the n-1 denominator. Constant columns are centered but left
    unscaled.
    """
    mean = X.mean(dim=0, keepdim=True)
    std = X.std(dim=0, keepdim=True)
    std = torch.where(std == 0, torch.ones_like(std), std)
    return (X - mean) / std
