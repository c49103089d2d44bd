"""Utility functions for eigensim."""

from .linalg import (
    random_orthogonal,
    safe_eigh,
    eigenvalues,
    matrix_sqrt,
    is_psd,
    nearest_psd,
    root_find
)

from .validation import (
    check_dimensions,
    check_noise_level,
    check_last,
    validate_spectrum,
    check_ar_params,
    check_random_state,
    scale_data
)

__all__ = [
    # Linear algebra
    'random_orthogonal',
    'safe_eigh',
    'eigenvalues',
    'matrix_sqrt',
    'is_psd',
    'nearest_psd',
    'root_find',

    # Validation
    'check_dimensions',
    'check_noise_level',
    'check_last',
    'validate_spectrum',
    'check_ar_params',
    'check_random_state',
    'scale_data'
]
