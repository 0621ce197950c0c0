from __future__ import annotations

import numpy as np

from .statistics import _to_1d, check_fraction, resolve_quantile_method


def resample_and_summarize(
    values: np.ndarray | list[float],
    quantile_fraction: float,
    rng: np.random.Generator,
    method: str = "interpolated",
) -> float:
    """Draw one bootstrap resample of ``values`` and return its quantile.

    Missing values that land in the resample are dropped before the quantile is
    taken; a resample made only of missing values yields NaN.
    """
    quantile_fraction = check_fraction(quantile_fraction)
    summarize = resolve_quantile_method(method)
    values_array = _to_1d(values)

    n = values_array.size
    resample = values_array[rng.integers(0, n, size=n)]
    return summarize(resample, quantile_fraction)
