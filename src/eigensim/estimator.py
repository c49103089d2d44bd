"""
Sample eigenvalues from a simulated data matrix.

The data are standardized column by column, their empirical covariance is
projected onto the nearest positive semidefinite matrix, and the
eigenvalues of the repaired matrix are returned in descending order.
"""

from typing import Optional, Union, Dict, Any
import torch
from torch import Tensor
import numpy as np

from .utils.linalg import (
    nearest_psd, eigenvalues, DEFAULT_EIG_TOL, DEFAULT_CONV_TOL,
    DEFAULT_PSD_TOL, DEFAULT_MAX_ITER
)
from .utils.validation import scale_data


def empirical_covariance(X: Tensor) -> Tensor:
    """Sample covariance of the columns of an (M, N) matrix, n-1 denominator."""
    M = X.shape[0]
    centered = X - X.mean(dim=0, keepdim=True)
    cov = centered.t() @ centered / (M - 1)
    return 0.5 * (cov + cov.t())


class SpectralEstimator:
    """Standardize, repair and diagonalize.

    Args:
        eig_tol: Relative eigenvalue cutoff for the PSD projection
        conv_tol: Convergence tolerance of the PSD projection
        psd_tol: Relative eigenvalue floor of the repaired matrix
        max_iter: Maximum projection rounds

    Attributes:
        repair_info_: Diagnostics from the last PSD projection
    """

    def __init__(self,
                 eig_tol: float = DEFAULT_EIG_TOL,
                 conv_tol: float = DEFAULT_CONV_TOL,
                 psd_tol: float = DEFAULT_PSD_TOL,
                 max_iter: int = DEFAULT_MAX_ITER):
        self.eig_tol = eig_tol
        self.conv_tol = conv_tol
        self.psd_tol = psd_tol
        self.max_iter = max_iter
        self.repair_info_: Optional[Dict[str, Any]] = None

    def repair(self, covariance: Tensor) -> Tensor:
        """Nearest positive semidefinite matrix to ``covariance``."""
        repaired, info = nearest_psd(covariance,
                                     eig_tol=self.eig_tol,
                                     conv_tol=self.conv_tol,
                                     psd_tol=self.psd_tol,
                                     max_iter=self.max_iter,
                                     return_info=True)
        self.repair_info_ = info
        return repaired

    def eigenvalues_from_covariance(self, covariance: Tensor) -> Tensor:
        """Descending eigenvalues of the repaired covariance."""
        return eigenvalues(self.repair(covariance))

    def estimate(self, data: Union[Tensor, np.ndarray]) -> Tensor:
        """Sample eigenvalues of an (M, N) data matrix, rows as samples.

        Returns:
            (N,) eigenvalues in descending order
        """
        if isinstance(data, np.ndarray):
            data = torch.from_numpy(data).to(torch.float64)
        if data.dim() != 2:
            raise ValueError(f"Expected 2D data matrix, got {data.dim()}D")
        if data.shape[0] < 2:
            raise ValueError("Need at least 2 samples to estimate a covariance")

        standardized = scale_data(data)
        return self.eigenvalues_from_covariance(empirical_covariance(standardized))


def estimate(data: Union[Tensor, np.ndarray]) -> Tensor:
    """Sample eigenvalues of an (M, N) data matrix with default tolerances."""
    return SpectralEstimator().estimate(data)


def repaired_eigenvalues(covariance: Tensor) -> Tensor:
    """Descending eigenvalues of the nearest PSD matrix to ``covariance``."""
    return SpectralEstimator().eigenvalues_from_covariance(covariance)
