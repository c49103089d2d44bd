"""
Simulation of data with a prescribed low-rank-plus-noise eigenstructure.

The data matrix has the decomposition ``X = W L + error``: rows of X are
projections of a K-dimensional latent vector onto the subspace W plus noise.
The sample eigenvalues of X are the test instances for rank-estimation
procedures, which try to recover K from them.

Example usage:
    >>> from eigensim import get_data_singular
    >>> X, eigs = get_data_singular(N=200, K=5, M=1000, sq_singular=[5, 4, 2, 1, 1],
    ...                             random_state=0)
    >>> eigs = get_data_singular(N=200, K=5, M=1000, sigma2=0.8, last=0.1,
    ...                          trend='exponential', rho=0.2, df=5, dist='t',
    ...                          datamat=False)
"""

from typing import Optional, Union, Sequence, Dict, Any, Tuple
import time
import torch
from torch import Tensor
import numpy as np

from .base.data_structures import SimulationResult
from .base.interfaces import SpectrumTrend, CovarianceSampler
from .spectrum.builder import build_spectrum, spectrum_from_singular
from .sampling import get_sampler
from .estimator import SpectralEstimator
from .utils.validation import check_dimensions, check_random_state


SpectrumLike = Union[Tensor, np.ndarray, Sequence[float]]


class SingularSimulator:
    """One-shot generator of sample eigenvalues from a spiked covariance.

    Either ``sq_singular`` is given, in which case the noise level is
    ``1 - sum(sq_singular) / N``, or ``sigma2``, ``last`` and ``trend`` are
    given and the K signal eigenvalues are derived from the trend.

    Args:
        n_features: Ambient dimension N
        rank: True latent rank K (< N and < M)
        n_samples: Number of samples M
        sq_singular: Optional K squared singular values (sum < N)
        sigma2: Noise variance in (0, 1], required without ``sq_singular``
        last: K-th signal eigenvalue, required without ``sq_singular``
        trend: 'linear', 'quadratic' or 'exponential'
        rho: Autoregressive coefficient in [0, 1), for dist='t'
        df: Degrees of freedom of the t noise, for dist='t'
        dist: 'norm' (independent Gaussian rows) or 't' (AR(1) t noise)
        verbose: Verbosity level (0=silent, 1=stages, 2=detailed)
        random_state: Seed or torch.Generator. An int seed gives the same
            draw on every call to ``simulate``; a Generator advances.
        device: Torch device (None for CPU)
    """

    def __init__(self,
                 n_features: int,
                 rank: int,
                 n_samples: int,
                 sq_singular: Optional[SpectrumLike] = None,
                 sigma2: Optional[float] = None,
                 last: Optional[float] = None,
                 trend: Optional[Union[str, SpectrumTrend]] = None,
                 rho: Optional[float] = None,
                 df: Optional[int] = None,
                 dist: Union[str, CovarianceSampler] = 'norm',
                 verbose: int = 0,
                 random_state: Optional[Union[int, torch.Generator]] = None,
                 device: Optional[torch.device] = None):
        self.n_features = n_features
        self.rank = rank
        self.n_samples = n_samples
        self.sq_singular = sq_singular
        self.sigma2 = sigma2
        self.last = last
        self.trend = trend
        self.rho = rho
        self.df = df
        self.dist = dist
        self.verbose = verbose
        self.random_state = random_state
        self.device = device if device is not None else torch.device('cpu')
        self.dtype = torch.float64

    def _resolve_spectrum(self, N: int, K: int) -> Tuple[Tensor, float, Dict[str, Any]]:
        """Signal spectrum, noise level and spectrum diagnostics."""
        if self.sq_singular is None:
            spectrum, info = build_spectrum(N, K, self.sigma2, self.last, self.trend,
                                            dtype=self.dtype, device=self.device,
                                            return_info=True)
            return spectrum, float(self.sigma2), info

        spectrum, sigma2 = spectrum_from_singular(self.sq_singular, N, K,
                                                  dtype=self.dtype, device=self.device)
        info = {'trend': None, 'remain': N - sigma2 * N, 'resorted': False}
        return spectrum, sigma2, info

    def simulate(self, return_data: bool = True) -> SimulationResult:
        """Run spectrum construction, sampling and eigenvalue estimation.

        Args:
            return_data: Whether to keep the (M, N) data matrix in the result

        Returns:
            SimulationResult
        """
        N, K, M = check_dimensions(self.n_features, self.rank, self.n_samples)

        # Resolve everything that can fail on bad input before drawing
        sampler = get_sampler(self.dist, rho=self.rho, df=self.df)
        spectrum, sigma2, info = self._resolve_spectrum(N, K)
        generator = check_random_state(self.random_state, self.device)

        if self.verbose:
            print(f"Simulating N={N}, K={K}, M={M} with {sampler!r}, sigma2={sigma2:.4f}")
        if self.verbose >= 2:
            print(f"  spectrum = {spectrum.tolist()}")

        start_time = time.time()
        sampled = sampler.sample(N, M, spectrum, sigma2, generator=generator)
        if self.verbose >= 2:
            print(f"  sampled {sampled.n_samples} x {sampled.n_features} data matrix")

        estimator = SpectralEstimator()
        sample_eigenvalues = estimator.estimate(sampled.data)

        if self.verbose:
            print(f"  top eigenvalues = {sample_eigenvalues[:K + 1].tolist()}")
            print(f"Total simulation time: {time.time() - start_time:.3f}s")

        metadata = {
            'dist': sampler.dist,
            'trend': info['trend'],
            'remain': info['remain'],
            'resorted': info['resorted'],
            'psd_converged': estimator.repair_info_['converged'],
            'psd_iterations': estimator.repair_info_['iterations'],
        }

        return SimulationResult(
            sample_eigenvalues=sample_eigenvalues,
            spectrum=spectrum,
            sigma2=sigma2,
            population_covariance=sampled.covariance,
            data=sampled.data if return_data else None,
            metadata=metadata
        )

    def get_params(self) -> Dict[str, Any]:
        """Get parameters."""
        return {
            'n_features': self.n_features,
            'rank': self.rank,
            'n_samples': self.n_samples,
            'sq_singular': self.sq_singular,
            'sigma2': self.sigma2,
            'last': self.last,
            'trend': self.trend,
            'rho': self.rho,
            'df': self.df,
            'dist': self.dist,
            'verbose': self.verbose,
            'random_state': self.random_state,
            'device': self.device
        }

    def set_params(self, **params) -> 'SingularSimulator':
        """Set parameters."""
        for key, value in params.items():
            if key not in self.get_params():
                raise ValueError(f"Invalid parameter {key!r} for SingularSimulator")
            setattr(self, key, value)
        return self


def get_data_singular(N: int, K: int, M: int,
                      sq_singular: Optional[SpectrumLike] = None,
                      sigma2: Optional[float] = None,
                      last: Optional[float] = None,
                      trend: Optional[str] = None,
                      rho: Optional[float] = None,
                      df: Optional[int] = None,
                      dist: str = 'norm',
                      datamat: bool = True,
                      random_state: Optional[Union[int, torch.Generator]] = None,
                      device: Optional[torch.device] = None) -> Union[Tuple[Tensor, Tensor], Tensor]:
    """Simulate data from an eigenvalue structure.

    Args:
        N: Full dimension of the data
        K: True latent dimension
        M: Number of observations
        sq_singular: Squared singular values; the trend arguments can be
            skipped when this is supplied
        sigma2: Error variance in (0, 1]
        last: K-th signal eigenvalue; a large value may be infeasible for
            large K
        trend: 'exponential', 'linear' or 'quadratic'
        rho: Auto-correlation between sequential observations, for dist='t'
        df: Degrees of freedom, for dist='t'
        dist: 'norm' or 't'
        datamat: Whether to return the data matrix as well
        random_state: Seed or torch.Generator
        device: Torch device

    Returns:
        ``(X, eigenvalues)`` with X of shape (M, N), or just the (N,)
        descending eigenvalues when ``datamat`` is False
    """
    simulator = SingularSimulator(
        n_features=N, rank=K, n_samples=M,
        sq_singular=sq_singular, sigma2=sigma2, last=last, trend=trend,
        rho=rho, df=df, dist=dist, random_state=random_state, device=device
    )
    result = simulator.simulate(return_data=datamat)

    if datamat:
        return result.data, result.sample_eigenvalues
    return result.sample_eigenvalues
