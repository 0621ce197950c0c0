import json
from pathlib import Path

import pandas as pd

from siteboot.eval.aggregate import bootstrap_groups
from siteboot.eval.report import format_interval_table, write_interval_outputs


def test_format_interval_table_shows_failed_groups() -> None:
    results = bootstrap_groups({"north": [1.0, 2.0, 3.0, 4.0], "south": [float("nan")]}, repeats=100, seed=3)
    text = format_interval_table(results, digits=3)
    assert "north" in text and "south" in text
    assert "NA" in text
    assert "InsufficientDataError" in text


def test_format_interval_table_hides_empty_error_column() -> None:
    results = bootstrap_groups({"north": [1.0, 2.0, 3.0, 4.0]}, repeats=100, seed=3)
    text = format_interval_table(results)
    assert "error" not in text.splitlines()[0]
    assert format_interval_table(results.iloc[0:0]) == "(no groups)"


def test_write_interval_outputs(tmp_path: Path) -> None:
    results = bootstrap_groups({"north": [1.0, 2.0, 3.0, 4.0]}, repeats=100, seed=3)
    outputs = write_interval_outputs(results, {"seed": 3}, tmp_path / "out", prefix="low_flow")

    written = pd.read_csv(outputs["intervals_csv"])
    assert written.shape[0] == 1
    assert {"lower", "estimate", "upper"}.issubset(written.columns)
    assert json.loads(Path(outputs["meta_json"]).read_text(encoding="utf-8")) == {"seed": 3}
    assert Path(outputs["intervals_csv"]).name == "low_flow_intervals.csv"
