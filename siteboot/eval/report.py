from __future__ import annotations

import json
from pathlib import Path

import pandas as pd

BOUND_COLUMNS = ["observed_quantile", "lower", "estimate", "upper"]


def format_interval_table(results: pd.DataFrame, digits: int = 4) -> str:
    if results.empty:
        return "(no groups)"

    table = results.copy()
    for column in BOUND_COLUMNS:
        if column in table.columns:
            table[column] = table[column].map(lambda value: "NA" if pd.isna(value) else f"{value:.{digits}g}")
    if "error" in table.columns and not table["error"].astype(bool).any():
        table = table.drop(columns=["error"])
    return table.to_string(index=False)


def write_interval_outputs(
    results: pd.DataFrame,
    meta: dict[str, object],
    output_dir: Path,
    prefix: str = "intervals",
) -> dict[str, str]:
    output_dir.mkdir(parents=True, exist_ok=True)
    intervals_csv = output_dir / f"{prefix}_intervals.csv"
    meta_json = output_dir / f"{prefix}_meta.json"

    results.to_csv(intervals_csv, index=False)
    with meta_json.open("w", encoding="utf-8") as handle:
        json.dump(meta, handle, indent=2)

    return {"intervals_csv": str(intervals_csv), "meta_json": str(meta_json)}
