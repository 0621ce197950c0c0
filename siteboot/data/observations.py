from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Hashable, Iterable

import pandas as pd

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Observation:
    group: Hashable
    value: float | None
    timestamp: object | None = None


def _require_columns(df: pd.DataFrame, columns: Iterable[str], frame_name: str) -> None:
    missing = [column for column in columns if column not in df.columns]
    if missing:
        missing_text = ", ".join(missing)
        raise ValueError(f"{frame_name} is missing required columns: {missing_text}")


def observations_to_frame(records: Iterable[Observation]) -> pd.DataFrame:
    rows = [
        {"group": record.group, "timestamp": record.timestamp, "value": record.value}
        for record in records
    ]
    frame = pd.DataFrame(rows, columns=["group", "timestamp", "value"])
    return normalize_observations(frame, group_col="group", value_col="value", timestamp_col="timestamp")


def normalize_observations(
    frame: pd.DataFrame,
    group_col: str,
    value_col: str,
    timestamp_col: str | None = None,
) -> pd.DataFrame:
    """Coerce values to floats and drop rows without a group key.

    Non-numeric cells such as ``"ND"`` or ``"<0.001"`` become NaN, the missing
    marker that the estimator excludes from every quantile.
    """
    required = [group_col, value_col] + ([timestamp_col] if timestamp_col else [])
    _require_columns(frame, required, "observation frame")

    output = frame.copy()
    raw_values = output[value_col]
    output[value_col] = pd.to_numeric(raw_values, errors="coerce").astype(float)
    coerced = int((output[value_col].isna() & raw_values.notna()).sum())
    if coerced:
        logger.info("treating %d non-numeric %s entries as missing", coerced, value_col)

    if timestamp_col:
        output[timestamp_col] = pd.to_datetime(output[timestamp_col], errors="coerce")

    keyless = output[group_col].isna()
    if keyless.any():
        logger.warning("dropping %d rows without a %s value", int(keyless.sum()), group_col)
        output = output.loc[~keyless]

    return output.reset_index(drop=True)


def load_observations(
    path: Path,
    group_col: str = "site_id",
    value_col: str = "value",
    timestamp_col: str | None = None,
) -> pd.DataFrame:
    frame = pd.read_csv(path, dtype={group_col: str})
    return normalize_observations(frame, group_col=group_col, value_col=value_col, timestamp_col=timestamp_col)
