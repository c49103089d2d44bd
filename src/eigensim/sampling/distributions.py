"""
Random draws from the distributions used by the samplers.

All functions take an explicit ``torch.Generator`` so that a seeded
generator makes every draw reproducible.
"""

from typing import Optional
import torch
from torch import Tensor

from ..base.errors import NumericalFailure
from ..utils.linalg import eigenvalues, matrix_sqrt


def mvnormal_sample(m: int, mean: Optional[Tensor], covariance: Tensor,
                    generator: Optional[torch.Generator] = None,
                    tol: float = 1e-6) -> Tensor:
    """Draw m i.i.d. rows from N(mean, covariance).

    Args:
        m: Number of draws
        mean: (n,) mean vector, or None for zero mean
        covariance: (n, n) symmetric positive semidefinite matrix
        generator: Source of randomness
        tol: Relative tolerance for negative eigenvalues

    Returns:
        (m, n) samples

    Raises:
        NumericalFailure: If covariance is not positive semidefinite
    """
    n = covariance.shape[0]
    values = eigenvalues(covariance)

    if values[-1] < -tol * abs(values[0].item()):
        raise NumericalFailure("'covariance' is not positive definite")

    factor = matrix_sqrt(covariance)
    Z = torch.randn(m, n, generator=generator, dtype=covariance.dtype,
                    device=covariance.device)
    samples = Z @ factor.t()

    if mean is not None:
        samples = samples + mean.unsqueeze(0)
    return samples


def chi2_sample(m: int, df: int, generator: Optional[torch.Generator] = None,
                dtype: torch.dtype = torch.float64,
                device: Optional[torch.device] = None) -> Tensor:
    """Draw m chi-squared variates with an integer number of degrees of freedom.

    Computed as sums of ``df`` squared standard normals, which keeps the draw
    on the supplied generator.
    """
    Z = torch.randn(m, df, generator=generator, dtype=dtype, device=device)
    return Z.pow(2).sum(dim=1)


def mvt_sample(m: int, scale: Tensor, df: int,
               generator: Optional[torch.Generator] = None) -> Tensor:
    """Draw m i.i.d. rows from a centered multivariate t distribution.

    Each row is ``z / sqrt(w / df)`` with ``z ~ N(0, scale)`` and
    ``w ~ chi2(df)``.

    Args:
        m: Number of draws
        scale: (n, n) scale matrix
        df: Degrees of freedom (positive integer)
        generator: Source of randomness

    Returns:
        (m, n) samples
    """
    Z = mvnormal_sample(m, None, scale, generator=generator)
    W = chi2_sample(m, df, generator=generator, dtype=scale.dtype, device=scale.device)
    return Z / torch.sqrt(W / df).unsqueeze(1)


def empirical_normal(m: int, k: int, generator: Optional[torch.Generator] = None,
                     dtype: torch.dtype = torch.float64,
                     device: Optional[torch.device] = None) -> Tensor:
    """Draw an m x k Gaussian matrix whose sample covariance is exactly I.

    The draw is centered, rotated onto its principal axes and each column is
    rescaled to unit sample variance, so the columns are exactly
    uncorrelated and standardized. Requires ``m > k``.
    """
    if m <= k:
        raise ValueError(f"Need more rows than columns for an exact identity "
                         f"covariance (m={m}, k={k})")

    X = torch.randn(m, k, generator=generator, dtype=dtype, device=device)
    X = X - X.mean(dim=0, keepdim=True)

    _, _, Vh = torch.linalg.svd(X, full_matrices=False)
    X = X @ Vh.t()

    return X / X.std(dim=0, keepdim=True)
