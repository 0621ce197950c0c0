"""Resampling, bootstrap interval estimation, and per-group aggregation."""

from .aggregate import (
    bootstrap_by_group,
    bootstrap_groups,
    failed_groups,
)
from .bootstrap import (
    ConfidenceIntervalResult,
    bootstrap_distribution,
    bootstrap_interval,
    interval_from_distribution,
)
from .resampling import resample_and_summarize
from .statistics import (
    interpolated_quantile,
    keyed_generators,
    make_generator,
    nearest_rank_quantile,
    spawn_generators,
)
