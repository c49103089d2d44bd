"""
Linear algebra primitives for the simulation pipeline.

Provides random orthogonal bases, symmetric eigendecomposition, projection
of a symmetric matrix onto the positive semidefinite cone, and bracketed
scalar root finding.
"""

from typing import Tuple, Optional, Callable, Dict, Any, Union
import torch
from torch import Tensor
from scipy.optimize import brentq
import warnings

from ..base.errors import NumericalFailure


# Relative eigenvalue cutoff used inside the alternating projections
DEFAULT_EIG_TOL = 1e-6
# Relative change (infinity norm) at which the projections stop
DEFAULT_CONV_TOL = 1e-7
# Relative floor applied to the eigenvalues of the final matrix
DEFAULT_PSD_TOL = 1e-8
DEFAULT_MAX_ITER = 100


def random_orthogonal(n: int, generator: Optional[torch.Generator] = None,
                      dtype: torch.dtype = torch.float64,
                      device: Optional[torch.device] = None) -> Tensor:
    """Draw an n x n orthogonal matrix uniformly (Haar measure).

    Uses the QR decomposition of a standard Gaussian matrix, with the signs
    of R's diagonal folded back into Q so the distribution is uniform.

    Args:
        n: Matrix size
        generator: Source of randomness
        dtype: Output dtype
        device: Output device

    Returns:
        (n, n) matrix with orthonormal columns
    """
    A = torch.randn(n, n, generator=generator, dtype=dtype, device=device)
    Q, R = torch.linalg.qr(A)

    signs = torch.sign(torch.diagonal(R))
    signs = torch.where(signs == 0, torch.ones_like(signs), signs)

    return Q * signs.unsqueeze(0)


def safe_eigh(matrix: Tensor, tol: float = 1e-10) -> Tuple[Tensor, Tensor]:
    """Eigendecomposition of a symmetric matrix.

    Args:
        matrix: Symmetric matrix
        tol: Tolerance for the symmetry check

    Returns:
        eigenvalues (ascending), eigenvectors
    """
    matrix_sym = 0.5 * (matrix + matrix.t())

    if torch.max(torch.abs(matrix - matrix_sym)) > tol * max(1.0, torch.max(torch.abs(matrix)).item()):
        warnings.warn("Input matrix is not symmetric; symmetrizing.")

    try:
        return torch.linalg.eigh(matrix_sym)
    except RuntimeError as e:
        raise NumericalFailure(f"Eigendecomposition failed: {e}") from e


def eigenvalues(matrix: Tensor) -> Tensor:
    """Eigenvalues of a symmetric matrix in descending order."""
    values, _ = safe_eigh(matrix)
    return torch.flip(values, dims=[0])


def matrix_sqrt(matrix: Tensor) -> Tensor:
    """Square-root factor of a positive semidefinite matrix.

    Returns F such that F @ F.T equals ``matrix``. Eigenvalues that are
    slightly negative from rounding are clamped to zero.
    """
    eigvals, eigvecs = safe_eigh(matrix)
    eigvals = torch.clamp(eigvals, min=0)
    return eigvecs * torch.sqrt(eigvals).unsqueeze(0)


def is_psd(matrix: Tensor, tol: float = DEFAULT_PSD_TOL) -> bool:
    """Check positive semidefiniteness up to a tolerance relative to the spectrum."""
    values = eigenvalues(matrix)
    scale = max(1.0, abs(values[0].item()))
    return bool(values[-1].item() >= -tol * scale)


def nearest_psd(matrix: Tensor,
                eig_tol: float = DEFAULT_EIG_TOL,
                conv_tol: float = DEFAULT_CONV_TOL,
                psd_tol: float = DEFAULT_PSD_TOL,
                max_iter: int = DEFAULT_MAX_ITER,
                keep_diag: bool = False,
                return_info: bool = False) -> Union[Tensor, Tuple[Tensor, Dict[str, Any]]]:
    """Project a symmetric matrix onto the nearest positive semidefinite matrix.

    Alternating projections (Higham, 2002) with Dykstra's correction. The
    iteration stops once the relative change in infinity norm drops below
    ``conv_tol``. Afterwards eigenvalues below ``psd_tol`` times the largest
    one are raised to that floor, rescaling so the diagonal is preserved.

    Args:
        matrix: (n, n) symmetric matrix
        eig_tol: Eigenvalues below ``eig_tol * largest`` are treated as zero
        conv_tol: Convergence tolerance
        psd_tol: Relative floor for the eigenvalues of the result
        max_iter: Maximum number of projection rounds
        keep_diag: Whether to restore the original diagonal after each round
        return_info: Whether to also return iteration diagnostics

    Returns:
        PSD matrix, and optionally a dict with ``iterations`` and ``converged``

    Raises:
        NumericalFailure: If the matrix has no positive eigenvalue or the
            result still fails the PSD check
    """
    if matrix.dim() != 2 or matrix.shape[0] != matrix.shape[1]:
        raise ValueError(f"Expected a square matrix, got shape {tuple(matrix.shape)}")

    X = 0.5 * (matrix + matrix.t())
    diag_orig = torch.diagonal(X).clone()
    D_S = torch.zeros_like(X)

    converged = False
    iteration = 0
    for iteration in range(1, max_iter + 1):
        Y = X
        R = Y - D_S

        eigvals, eigvecs = torch.linalg.eigh(R)
        keep = eigvals > eig_tol * eigvals[-1]
        if eigvals[-1] <= 0 or not torch.any(keep):
            raise NumericalFailure("Matrix has no positive eigenvalues; "
                                   "cannot project to positive semidefinite")

        Q = eigvecs[:, keep]
        X = (Q * eigvals[keep].unsqueeze(0)) @ Q.t()
        D_S = X - R

        if keep_diag:
            X = X.clone()
            X.diagonal().copy_(diag_orig)

        change = torch.linalg.matrix_norm(Y - X, ord=float('inf'))
        conv = (change / torch.linalg.matrix_norm(Y, ord=float('inf'))).item()
        if conv <= conv_tol:
            converged = True
            break

    if not converged:
        warnings.warn(f"nearest_psd did not converge in {max_iter} iterations",
                      RuntimeWarning)

    # Raise tiny or negative eigenvalues to a positive floor
    eigvals, eigvecs = torch.linalg.eigh(X)
    floor = psd_tol * abs(eigvals[-1].item())
    if eigvals[0] < floor:
        diag_before = torch.diagonal(X).clone()
        eigvals = torch.clamp(eigvals, min=floor)
        X = (eigvecs * eigvals.unsqueeze(0)) @ eigvecs.t()
        scale = torch.sqrt(torch.clamp(diag_before, min=floor) / torch.diagonal(X))
        X = scale.unsqueeze(1) * X * scale.unsqueeze(0)

    X = 0.5 * (X + X.t())

    if not is_psd(X, tol=psd_tol):
        raise NumericalFailure("Matrix is not positive semidefinite after repair")

    if return_info:
        return X, {'iterations': iteration, 'converged': converged}
    return X


def root_find(func: Callable[[float], float], lo: float, hi: float,
              xtol: float = 2e-12, max_iter: int = 200) -> float:
    """Find a root of a scalar function inside a bracketing interval.

    Args:
        func: Scalar function with a sign change on [lo, hi]
        lo: Lower end of the bracket
        hi: Upper end of the bracket
        xtol: Absolute tolerance on the root
        max_iter: Maximum iterations

    Returns:
        The root

    Raises:
        NumericalFailure: If the interval does not bracket a root or the
            solver does not converge
    """
    try:
        return float(brentq(func, lo, hi, xtol=xtol, maxiter=max_iter))
    except (ValueError, RuntimeError) as e:
        raise NumericalFailure(f"Root finding failed on [{lo}, {hi}]: {e}") from e
