"""
Scree plots for simulated spectra.

Draws the sample eigenvalues of a simulation against the population
eigenvalues, with the true rank marked.
"""

from typing import Optional, Union
from torch import Tensor
import matplotlib.pyplot as plt
import numpy as np

from ..base.data_structures import SimulationResult


def _to_numpy(values: Union[Tensor, np.ndarray]) -> np.ndarray:
    if isinstance(values, Tensor):
        return values.detach().cpu().numpy()
    return np.asarray(values)


def plot_scree(sample_eigenvalues: Union[Tensor, np.ndarray],
               population_eigenvalues: Optional[Union[Tensor, np.ndarray]] = None,
               rank: Optional[int] = None,
               n_show: Optional[int] = None,
               ax: Optional[plt.Axes] = None,
               log_scale: bool = False,
               title: Optional[str] = None) -> plt.Axes:
    """Plot descending eigenvalues by index.

    Args:
        sample_eigenvalues: (N,) sample eigenvalues
        population_eigenvalues: Optional (N,) population eigenvalues
        rank: Optional true rank, drawn as a vertical line
        n_show: Number of leading eigenvalues to show (None for all)
        ax: Matplotlib axes (created if None)
        log_scale: Whether to use a log y-axis
        title: Plot title

    Returns:
        Matplotlib axes
    """
    if ax is None:
        fig, ax = plt.subplots(figsize=(8, 5))

    sample = _to_numpy(sample_eigenvalues)
    n_show = len(sample) if n_show is None else min(n_show, len(sample))
    index = np.arange(1, n_show + 1)

    ax.plot(index, sample[:n_show], 'o-', markersize=4, label='Sample')

    if population_eigenvalues is not None:
        population = _to_numpy(population_eigenvalues)
        ax.plot(index, population[:n_show], 's--', markersize=3, alpha=0.7,
                label='Population')

    if rank is not None:
        ax.axvline(rank + 0.5, color='gray', linestyle=':', label=f'K = {rank}')

    if log_scale:
        ax.set_yscale('log')

    ax.set_xlabel('Index')
    ax.set_ylabel('Eigenvalue')
    ax.legend()
    ax.grid(True, alpha=0.3)

    if title:
        ax.set_title(title)

    return ax


def plot_result(result: SimulationResult, n_show: Optional[int] = None,
                ax: Optional[plt.Axes] = None, **kwargs) -> plt.Axes:
    """Scree plot of a SimulationResult with its population spectrum and rank."""
    return plot_scree(result.sample_eigenvalues,
                      population_eigenvalues=result.population_eigenvalues,
                      rank=result.rank,
                      n_show=n_show,
                      ax=ax,
                      **kwargs)
