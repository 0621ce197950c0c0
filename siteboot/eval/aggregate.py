from __future__ import annotations

import logging
from typing import Hashable, Mapping, Sequence

import numpy as np
import pandas as pd

from ..errors import EmptyInputError, InsufficientDataError, InvalidParameterError
from .bootstrap import bootstrap_interval, validate_parameters
from .statistics import keyed_generators, make_generator, resolve_quantile_method

logger = logging.getLogger(__name__)

STREAM_MODES = ("shared", "per_group")

RESULT_COLUMNS = [
    "group",
    "num_observations",
    "num_missing",
    "observed_quantile",
    "lower",
    "estimate",
    "upper",
    "status",
    "error",
]


def _require_columns(frame: pd.DataFrame, columns: list[str], frame_name: str) -> None:
    missing = [column for column in columns if column not in frame.columns]
    if missing:
        raise ValueError(f"{frame_name} missing required columns: {', '.join(missing)}")


def _group_generators(
    group_keys: list[Hashable],
    seed: int | None,
    rng: np.random.Generator | None,
    stream_mode: str,
) -> list[np.random.Generator]:
    if (seed is None) == (rng is None):
        raise InvalidParameterError("provide exactly one of seed or rng")
    if stream_mode not in STREAM_MODES:
        raise InvalidParameterError(f"stream_mode must be one of: {', '.join(STREAM_MODES)}")

    if stream_mode == "per_group":
        return keyed_generators(rng if rng is not None else seed, group_keys)

    shared = rng if rng is not None else make_generator(seed)
    return [shared] * len(group_keys)


def _interval_row(
    group_key: Hashable,
    values: Sequence[float] | np.ndarray,
    quantile_fraction: float,
    confidence: float,
    repeats: int,
    rng: np.random.Generator,
    method: str,
) -> dict[str, object]:
    values_array = np.asarray(values, dtype=float).reshape(-1)
    num_missing = int(np.isnan(values_array).sum())
    row: dict[str, object] = {
        "group": group_key,
        "num_observations": int(values_array.size),
        "num_missing": num_missing,
        "observed_quantile": float("nan"),
        "lower": float("nan"),
        "estimate": float("nan"),
        "upper": float("nan"),
        "status": "ok",
        "error": "",
    }

    try:
        if values_array.size == 0:
            raise EmptyInputError(f"group {group_key!r} has no observations")
        row["observed_quantile"] = resolve_quantile_method(method)(values_array, quantile_fraction)
        result = bootstrap_interval(
            values_array,
            quantile_fraction=quantile_fraction,
            confidence=confidence,
            repeats=repeats,
            rng=rng,
            method=method,
        )
    except (EmptyInputError, InsufficientDataError) as exc:
        logger.warning("group %s skipped: %s", group_key, exc)
        row["status"] = "error"
        row["error"] = f"{type(exc).__name__}: {exc}"
        return row

    row["lower"], row["estimate"], row["upper"] = result
    return row


def bootstrap_groups(
    groups: Mapping[Hashable, Sequence[float] | np.ndarray],
    quantile_fraction: float = 0.10,
    confidence: float = 0.95,
    repeats: int = 3000,
    seed: int | None = None,
    rng: np.random.Generator | None = None,
    method: str = "interpolated",
    stream_mode: str = "shared",
) -> pd.DataFrame:
    """Map every group to its bootstrap interval and collect one row per group.

    Groups are processed in mapping order. A group that fails with
    ``EmptyInputError`` or ``InsufficientDataError`` becomes a ``status="error"``
    row; the remaining groups are still estimated. With ``stream_mode="per_group"``
    each group draws from a stream keyed on the group itself, so its interval does
    not change when other groups are added, removed or reordered.
    """
    quantile_fraction, confidence, repeats = validate_parameters(quantile_fraction, confidence, repeats, method)
    group_keys = list(groups.keys())
    generators = _group_generators(group_keys, seed=seed, rng=rng, stream_mode=stream_mode)

    rows = [
        _interval_row(key, groups[key], quantile_fraction, confidence, repeats, generator, method)
        for key, generator in zip(group_keys, generators)
    ]
    results = pd.DataFrame(rows, columns=RESULT_COLUMNS)

    num_failed = int((results["status"] == "error").sum())
    logger.info(
        "estimated %d of %d groups (quantile=%.3f, confidence=%.3f, repeats=%d)",
        len(group_keys) - num_failed,
        len(group_keys),
        quantile_fraction,
        confidence,
        repeats,
    )
    return results


def bootstrap_by_group(
    frame: pd.DataFrame,
    group_col: str = "site_id",
    value_col: str = "value",
    quantile_fraction: float = 0.10,
    confidence: float = 0.95,
    repeats: int = 3000,
    seed: int | None = None,
    rng: np.random.Generator | None = None,
    method: str = "interpolated",
    stream_mode: str = "shared",
) -> pd.DataFrame:
    _require_columns(frame, [group_col, value_col], "observation frame")
    if group_col in RESULT_COLUMNS[1:]:
        raise ValueError(f"group_col {group_col!r} collides with a result column; rename it before grouping")

    keyless = frame[group_col].isna()
    if keyless.any():
        logger.warning("dropping %d rows without a %s value", int(keyless.sum()), group_col)

    # Sorted keys and sorted values make the draws independent of input row order.
    values = pd.to_numeric(frame[value_col], errors="coerce")
    groups = {
        group_key: np.sort(group.to_numpy(dtype=float))
        for group_key, group in values.groupby(frame[group_col].to_numpy(), sort=True)
    }
    results = bootstrap_groups(
        groups,
        quantile_fraction=quantile_fraction,
        confidence=confidence,
        repeats=repeats,
        seed=seed,
        rng=rng,
        method=method,
        stream_mode=stream_mode,
    )
    return results.rename(columns={"group": group_col})


def failed_groups(results: pd.DataFrame) -> pd.DataFrame:
    _require_columns(results, ["status", "error"], "results frame")
    return results[results["status"] == "error"].reset_index(drop=True)
