# tests/integration/test_end_to_end.py
"""
End-to-end simulations at a realistic size.

Scenario: N=200 features, K=5 latent factors, M=1000 samples (aspect ratio
N/M = 0.2). With squared singular values [5, 4, 2, 1, 1] the noise level is
0.935 and the Marchenko-Pastur bulk of the noise spans roughly
[0.28, 1.97]. The three largest spikes sit well above the bulk edge.
"""

from __future__ import annotations

import math

import pytest
import torch

from eigensim import get_data_singular, SingularSimulator
from utils import is_non_increasing, time_block


N, K, M = 200, 5, 1000


def _check_correlation_spectrum(eigs):
    assert eigs.shape == (N,)
    assert torch.isfinite(eigs).all()
    assert is_non_increasing(eigs)
    assert (eigs >= -1e-8).all()
    # Eigenvalues of a correlation matrix sum to its dimension
    assert math.isclose(eigs.sum().item(), N, rel_tol=1e-6)


def test_explicit_spectrum_scenario(seed_all):
    with time_block("explicit spectrum", {"N": N, "K": K, "M": M}):
        X, eigs = get_data_singular(N, K, M, sq_singular=[5, 4, 2, 1, 1],
                                    random_state=seed_all)

    assert X.shape == (M, N)
    _check_correlation_spectrum(eigs)

    assert (eigs[:3] > 2.5).all()
    # Everything past the spikes stays near the noise bulk
    assert eigs[K].item() < 2.3
    median = eigs.median().item()
    assert 0.6 < median < 1.2


def test_exponential_normal_scenario(seed_all):
    result = SingularSimulator(N, K, M, sigma2=0.2, last=0.1, trend="exponential",
                               random_state=seed_all).simulate()

    _check_correlation_spectrum(result.sample_eigenvalues)
    assert math.isclose(result.spectrum.sum().item(), N * 0.8, rel_tol=1e-9)
    # Most of the variance sits in the leading direction
    assert result.sample_eigenvalues[0].item() > 50
    # Standardizing features of unequal variance pushes the noise bulk edge
    # above sigma2 (to about 1.2 here), still far below the third spike
    assert result.sample_eigenvalues[K].item() < 1.5
    assert result.sample_eigenvalues[2].item() > 2 * result.sample_eigenvalues[K].item()
    assert result.metadata["psd_converged"] is True


def test_exponential_t_scenario(seed_all):
    with time_block("exponential t", {"N": N, "K": K, "M": M, "rho": 0.2, "df": 5}):
        X, eigs = get_data_singular(N, K, M, sigma2=0.8, last=0.1,
                                    trend="exponential", rho=0.2, df=5, dist="t",
                                    random_state=seed_all)

    assert X.shape == (M, N)
    _check_correlation_spectrum(eigs)
    assert eigs[0].item() > eigs[K].item()


@pytest.mark.parametrize("trend", ["linear", "quadratic"])
def test_polynomial_trend_scenarios(trend, seed_all):
    result = SingularSimulator(N, K, M, sigma2=0.5, last=2.0, trend=trend,
                               random_state=seed_all).simulate(return_data=False)

    _check_correlation_spectrum(result.sample_eigenvalues)
    assert result.spectrum[-1].item() == 2.0
    # All five spikes clear the bulk edge 0.5 * (1 + sqrt(0.2))^2
    assert (result.sample_eigenvalues[:K] > 1.5).all()


def test_more_features_than_samples(seed_all):
    eigs = get_data_singular(100, 3, 40, sq_singular=[20.0, 10.0, 5.0],
                             datamat=False, random_state=seed_all)
    assert eigs.shape == (100,)
    assert is_non_increasing(eigs)
    assert (eigs >= -1e-8).all()
    # At most M - 1 non-trivial directions
    assert (eigs[39:] < 1e-4).all()
