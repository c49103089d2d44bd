"""Visualization utilities for simulated spectra."""

from .plot_spectrum import (
    plot_scree,
    plot_result
)

__all__ = [
    'plot_scree',
    'plot_result'
]
