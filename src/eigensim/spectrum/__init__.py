"""Signal spectrum construction."""

from .trends import (
    LinearTrend,
    QuadraticTrend,
    ExponentialTrend,
    TRENDS,
    get_trend
)

from .builder import (
    available_variance,
    build_spectrum,
    spectrum_from_singular
)

__all__ = [
    'LinearTrend',
    'QuadraticTrend',
    'ExponentialTrend',
    'TRENDS',
    'get_trend',
    'available_variance',
    'build_spectrum',
    'spectrum_from_singular'
]
