from __future__ import annotations

import warnings
from typing import NamedTuple

import numpy as np

from ..errors import InsufficientDataError, InvalidParameterError, SparseBootstrapWarning
from .resampling import resample_and_summarize
from .statistics import _to_1d, check_fraction, interpolated_quantile, resolve_quantile_method


class ConfidenceIntervalResult(NamedTuple):
    lower: float
    estimate: float
    upper: float


def check_confidence(confidence: float) -> float:
    if isinstance(confidence, bool) or not isinstance(confidence, (int, float, np.integer, np.floating)):
        raise InvalidParameterError("confidence must be a number in (0, 1)")
    if not (0.0 < float(confidence) < 1.0):
        raise InvalidParameterError(f"confidence must be between 0 and 1 (exclusive), got {confidence}")
    return float(confidence)


def check_repeats(repeats: int) -> int:
    if isinstance(repeats, bool) or not isinstance(repeats, (int, np.integer)):
        raise InvalidParameterError("repeats must be a positive integer")
    if repeats <= 0:
        raise InvalidParameterError("repeats must be positive")
    return int(repeats)


def validate_parameters(
    quantile_fraction: float,
    confidence: float,
    repeats: int,
    method: str = "interpolated",
) -> tuple[float, float, int]:
    resolve_quantile_method(method)
    return check_fraction(quantile_fraction), check_confidence(confidence), check_repeats(repeats)


def tail_fraction(confidence: float) -> float:
    return (1.0 - check_confidence(confidence)) / 2.0


def warn_if_sparse(repeats: int, confidence: float) -> None:
    alpha = tail_fraction(confidence)
    if repeats < 1.0 / alpha:
        warnings.warn(
            f"repeats={repeats} is below 1/alpha={1.0 / alpha:.1f} for confidence={confidence}; "
            "interval bounds collapse to the extreme order statistics",
            SparseBootstrapWarning,
            stacklevel=3,
        )


def bootstrap_distribution(
    values: np.ndarray | list[float],
    quantile_fraction: float,
    repeats: int,
    rng: np.random.Generator,
    method: str = "interpolated",
) -> np.ndarray:
    """Statistics of ``repeats`` independent resamples, NaN where a resample had no usable values."""
    quantile_fraction = check_fraction(quantile_fraction)
    repeats = check_repeats(repeats)
    resolve_quantile_method(method)
    values_array = _to_1d(values)

    statistics = np.empty(repeats, dtype=float)
    for index in range(repeats):
        statistics[index] = resample_and_summarize(values_array, quantile_fraction, rng, method=method)
    return statistics


def interval_from_distribution(distribution: np.ndarray | list[float], confidence: float) -> ConfidenceIntervalResult:
    alpha = tail_fraction(confidence)
    statistics = np.asarray(distribution, dtype=float).reshape(-1)
    statistics = statistics[~np.isnan(statistics)]
    if statistics.size == 0:
        raise InsufficientDataError("every bootstrap resample produced a missing statistic")

    return ConfidenceIntervalResult(
        lower=interpolated_quantile(statistics, alpha),
        estimate=interpolated_quantile(statistics, 0.5),
        upper=interpolated_quantile(statistics, 1.0 - alpha),
    )


def bootstrap_interval(
    values: np.ndarray | list[float],
    quantile_fraction: float = 0.10,
    confidence: float = 0.95,
    repeats: int = 3000,
    *,
    rng: np.random.Generator,
    method: str = "interpolated",
) -> ConfidenceIntervalResult:
    """Percentile bootstrap interval for a quantile of ``values``.

    The estimate is the median of the bootstrap distribution; the bounds are its
    ``alpha`` and ``1 - alpha`` quantiles with ``alpha = (1 - confidence) / 2``.
    Draws come from ``rng`` in a fixed order, so a generator seeded once makes the
    whole run reproducible.
    """
    quantile_fraction, confidence, repeats = validate_parameters(quantile_fraction, confidence, repeats, method)
    values_array = _to_1d(values)
    warn_if_sparse(repeats, confidence)

    distribution = bootstrap_distribution(values_array, quantile_fraction, repeats, rng, method=method)
    return interval_from_distribution(distribution, confidence)
