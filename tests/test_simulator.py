# tests/test_simulator.py
"""
SingularSimulator and the get_data_singular entry point.

Covers:
- return shapes with and without the data matrix
- argument validation happens before any drawing
- metadata and the population eigenvalue view on SimulationResult
- get_params / set_params round trip and verbose output
"""

from __future__ import annotations

import math

import pytest
import torch

from eigensim import (
    SingularSimulator,
    get_data_singular,
    SimulationResult,
    InvalidNoiseLevel,
    InvalidRank,
    InfeasibleSpectrum,
    UnsupportedTrend,
    InvalidParameter,
)
from eigensim.sampling import GaussianSampler
from utils import is_non_increasing


def test_get_data_singular_returns_data_and_eigenvalues():
    X, eigs = get_data_singular(60, 3, 150, sq_singular=[6, 4, 2], random_state=0)

    assert X.shape == (150, 60)
    assert eigs.shape == (60,)
    assert X.dtype == torch.float64
    assert is_non_increasing(eigs)


def test_get_data_singular_eigenvalues_only():
    eigs = get_data_singular(60, 3, 150, sigma2=0.8, last=0.5, trend="linear",
                             datamat=False, random_state=0)
    assert isinstance(eigs, torch.Tensor)
    assert eigs.shape == (60,)


def test_get_data_singular_t_distribution():
    X, eigs = get_data_singular(40, 2, 120, sigma2=0.7, last=1.0, trend="exponential",
                                rho=0.3, df=6, dist="t", random_state=1)
    assert X.shape == (120, 40)
    assert torch.isfinite(X).all()
    assert is_non_increasing(eigs)
    assert (eigs >= -1e-8).all()


def test_supplied_spectrum_with_t_distribution():
    eigs = get_data_singular(40, 2, 120, sq_singular=[4.0, 2.0], rho=0.1, df=8,
                             dist="t", datamat=False, random_state=2)
    assert eigs.shape == (40,)


@pytest.mark.parametrize("kwargs,error", [
    (dict(sigma2=1.5, last=0.1, trend="linear"), InvalidNoiseLevel),
    (dict(sigma2=0.5, last=0.1), UnsupportedTrend),
    (dict(sigma2=0.5, last=0.1, trend="cubic"), UnsupportedTrend),
    (dict(sigma2=0.5, last=5.0, trend="linear"), InfeasibleSpectrum),
    (dict(sigma2=0.5, last=0.1, trend="linear", dist="t", df=5), InvalidParameter),
    (dict(sigma2=0.5, last=0.1, trend="linear", dist="laplace"), InvalidParameter),
])
def test_invalid_arguments_raise(kwargs, error):
    with pytest.raises(error):
        get_data_singular(20, 3, 50, random_state=0, **kwargs)


def test_supplied_spectrum_too_large():
    with pytest.raises(InfeasibleSpectrum):
        get_data_singular(10, 5, 50, sq_singular=[5, 4, 2, 1, 1])


def test_rank_must_be_below_samples():
    with pytest.raises(InvalidRank):
        get_data_singular(100, 10, 10, sigma2=0.5, last=0.1, trend="linear")


def test_simulate_result_fields():
    sim = SingularSimulator(50, 3, 200, sigma2=0.6, last=1.0, trend="quadratic",
                            random_state=3)
    result = sim.simulate()

    assert isinstance(result, SimulationResult)
    assert result.rank == 3
    assert result.dimension == 50
    assert result.data.shape == (200, 50)
    assert result.population_covariance.shape == (50, 50)
    assert set(result.metadata) >= {"dist", "trend", "remain", "resorted",
                                    "psd_converged", "psd_iterations"}
    assert result.metadata["dist"] == "norm"
    assert result.metadata["trend"] == "quadratic"
    assert math.isclose(result.metadata["remain"], 50 * 0.4)


def test_population_eigenvalues_match_covariance():
    result = SingularSimulator(30, 2, 100, sq_singular=[5.0, 2.0], random_state=4).simulate()

    expected = torch.flip(torch.linalg.eigvalsh(result.population_covariance), dims=[0])
    assert torch.allclose(result.population_eigenvalues, expected, atol=1e-8)
    assert math.isclose(result.population_eigenvalues.sum().item(), 30.0, rel_tol=1e-10)


def test_simulate_without_data():
    result = SingularSimulator(30, 2, 100, sq_singular=[5.0, 2.0],
                               random_state=5).simulate(return_data=False)
    assert result.data is None
    data, eigs = result.as_tuple()
    assert data is None
    assert eigs.shape == (30,)
    assert result.spectrum.tolist() == [5.0, 2.0]
    assert math.isclose(result.sigma2, 1 - 7 / 30)


def test_custom_sampler_instance():
    sim = SingularSimulator(30, 2, 100, sq_singular=[5.0, 2.0],
                            dist=GaussianSampler(repair=False), random_state=6)
    assert sim.simulate().metadata["dist"] == "norm"


def test_get_set_params():
    sim = SingularSimulator(20, 2, 50, sigma2=0.5, last=0.2, trend="linear")
    params = sim.get_params()
    assert params["n_features"] == 20
    assert params["trend"] == "linear"

    assert sim.set_params(trend="exponential", rank=3) is sim
    assert sim.trend == "exponential"
    assert sim.rank == 3

    with pytest.raises(ValueError):
        sim.set_params(bogus=1)


def test_verbose_prints_progress(capsys):
    SingularSimulator(20, 2, 50, sq_singular=[3.0, 1.0], verbose=2,
                      random_state=0).simulate()
    out = capsys.readouterr().out
    assert "N=20, K=2, M=50" in out
    assert "spectrum" in out
    assert "sampled 50 x 20 data matrix" in out
    assert "Total simulation time" in out


def test_silent_by_default(capsys):
    SingularSimulator(20, 2, 50, sq_singular=[3.0, 1.0], random_state=0).simulate()
    assert capsys.readouterr().out == ""
