# tests/utils.py
"""
Small, reusable helpers used across the eigensim test suite.

Functions:
- to_numpy(x): convert a tensor or array-like to a 1D/2D numpy array.
- is_non_increasing(v, tol): check that a sequence is sorted descending.
- spiked_matrix(values, generator): symmetric matrix with prescribed eigenvalues.
- time_block(label, meta=None): context manager that prints wall-clock time with optional metadata.
- print_timing(label, seconds, **meta): convenience printer for timings (used by time_block).
"""

from __future__ import annotations

import json
import time
from contextlib import contextmanager
from typing import Any, Dict, Optional, Sequence, Union

import numpy as np
import torch

ArrayLike = Union[np.ndarray, torch.Tensor, Sequence[float]]


def to_numpy(x: ArrayLike) -> np.ndarray:
    """Convert a tensor (any device) or array-like to numpy."""
    if isinstance(x, torch.Tensor):
        return x.detach().cpu().numpy()
    return np.asarray(x)


def is_non_increasing(v: ArrayLike, tol: float = 0.0) -> bool:
    """True if every entry is <= its predecessor (up to ``tol``)."""
    arr = to_numpy(v)
    return bool(np.all(np.diff(arr) <= tol))


def spiked_matrix(values: Sequence[float],
                  generator: Optional[torch.Generator] = None) -> torch.Tensor:
    """Symmetric matrix Q diag(values) Q^T with a random orthogonal Q."""
    n = len(values)
    A = torch.randn(n, n, generator=generator, dtype=torch.float64)
    Q, _ = torch.linalg.qr(A)
    D = torch.tensor(values, dtype=torch.float64)
    M = (Q * D.unsqueeze(0)) @ Q.t()
    return 0.5 * (M + M.t())


@contextmanager
def time_block(label: str, meta: Dict[str, Any] | None = None):
    """
    Context manager to time a block and print a single-line summary.

    Example
    -------
    >>> with time_block("simulate", {"N": 200, "K": 5, "M": 1000}):
    ...     sim.simulate()

    Output
    ------
    [timing] simulate {"N":200,"K":5,"M":1000} 0.123s
    """
    t0 = time.perf_counter()
    try:
        yield
    finally:
        dt = time.perf_counter() - t0
        print_timing(label, dt, **(meta or {}))


def print_timing(label: str, seconds: float, **meta: Any) -> None:
    """
    Print timing in a compact, machine-readable single line.
    """
    meta_str = ""
    if meta:
        meta_str = " " + json.dumps(meta, separators=(",", ":"), default=repr)
    print(f"[timing] {label}{meta_str} {seconds:.3f}s")
