"""
Trend shapes for the signal spectrum.

Each trend fixes the K-th signal eigenvalue to ``last`` and spreads the
remaining variance over the first K-1 eigenvalues so that the K values sum
to ``remain``.
"""

from typing import Optional, Dict, Type, Union
import torch
from torch import Tensor
import warnings

from ..base.interfaces import SpectrumTrend
from ..base.errors import InfeasibleSpectrum, UnsupportedTrend
from ..utils.linalg import root_find


# Bracket for the geometric ratio of the exponential trend
EXP_RATIO_BRACKET = (1e-4, 1 - 1e-4)


def _check_room(K: int, remain: float, last: float) -> None:
    """Polynomial trends need ``remain >= K * last`` to stay non-increasing."""
    if remain < K * last:
        raise InfeasibleSpectrum(
            f"not enough variance left for the first K-1 eigenvalues: "
            f"remain={remain:.6g} < K*last={K * last:.6g}"
        )


class LinearTrend(SpectrumTrend):
    """Eigenvalues decrease by a constant step from the largest to ``last``.

    ``d[i] = last + b * (K - i)`` with ``b = 2 (remain - K last) / (K (K-1))``.
    """

    name = 'linear'

    def build(self, K: int, remain: float, last: float,
              dtype: torch.dtype = torch.float64,
              device: Optional[torch.device] = None) -> Tensor:
        _check_room(K, remain, last)

        b = 2.0 * (remain - K * last) / (K * (K - 1))
        steps = torch.arange(K - 1, -1, -1, dtype=dtype, device=device)  # K-i for i=1..K
        values = last + b * steps
        values[-1] = last
        return values


class QuadraticTrend(SpectrumTrend):
    """Eigenvalues grow quadratically with distance from the K-th one.

    ``d[i] = last + b * (K - i)^2`` with
    ``b = 3 (remain - K last) / (K (K-1) (K - 1/2))``.
    """

    name = 'quadratic'

    def build(self, K: int, remain: float, last: float,
              dtype: torch.dtype = torch.float64,
              device: Optional[torch.device] = None) -> Tensor:
        _check_room(K, remain, last)

        b = 3.0 * (remain - K * last) / (K * (K - 1) * (K - 0.5))
        steps = torch.arange(K - 1, -1, -1, dtype=dtype, device=device)
        values = last + b * steps ** 2
        values[-1] = last
        return values


class ExponentialTrend(SpectrumTrend):
    """Eigenvalues decay geometrically towards ``last``.

    The ratio r solves ``(1 - r^(K-1)) last = r^(K-1) (1 - r) remain``, then
    ``d[i] = last / r^(K-i)`` for i = 2..K. The first value absorbs whatever
    variance is left so that the total is exactly ``remain``; the result is
    sorted descending.

    Attributes:
        ratio_: Solved geometric ratio from the last call
        resorted_: Whether the final sort changed the order
    """

    name = 'exponential'

    def __init__(self, bracket=EXP_RATIO_BRACKET):
        self.bracket = bracket
        self.ratio_ = None
        self.resorted_ = False

    def build(self, K: int, remain: float, last: float,
              dtype: torch.dtype = torch.float64,
              device: Optional[torch.device] = None) -> Tensor:
        def objective(r: float) -> float:
            return (1 - r ** (K - 1)) * last - r ** (K - 1) * (1 - r) * remain

        r = root_find(objective, *self.bracket)
        self.ratio_ = r

        powers = torch.arange(K - 1, -1, -1, dtype=dtype, device=device)
        values = last / torch.pow(torch.tensor(r, dtype=dtype, device=device), powers)
        values[-1] = last
        values[0] = remain - values[1:].sum()

        sorted_values = torch.sort(values, descending=True).values
        self.resorted_ = not torch.equal(sorted_values, values)
        if self.resorted_:
            warnings.warn(
                f"Exponential spectrum was not monotone before sorting (r={r:.6g}); "
                f"last={last} may be infeasible for K={K}",
                RuntimeWarning
            )
        return sorted_values

    def __repr__(self) -> str:
        return f"ExponentialTrend(bracket={self.bracket})"


TRENDS: Dict[str, Type[SpectrumTrend]] = {
    'linear': LinearTrend,
    'quadratic': QuadraticTrend,
    'exponential': ExponentialTrend,
}


def get_trend(trend: Union[str, SpectrumTrend]) -> SpectrumTrend:
    """Resolve a trend name to a fresh trend instance.

    Raises:
        UnsupportedTrend: If the name is not registered
    """
    if isinstance(trend, SpectrumTrend):
        return trend
    if not isinstance(trend, str) or trend not in TRENDS:
        raise UnsupportedTrend(f"Unsupported trend {trend!r}; "
                               f"expected one of {sorted(TRENDS)}")
    return TRENDS[trend]()
