from pathlib import Path

import numpy as np
import pandas as pd
import pytest

from siteboot.data.observations import (
    Observation,
    load_observations,
    normalize_observations,
    observations_to_frame,
)


def test_normalize_observations_marks_non_detects_missing() -> None:
    frame = pd.DataFrame(
        {
            "site_id": ["A", "A", "A", None],
            "sample_dt": ["2021-06-01", "2021-06-02", "not a date", "2021-06-04"],
            "conc": ["0.00148", "ND", "<0.001", "0.2"],
        }
    )
    out = normalize_observations(frame, group_col="site_id", value_col="conc", timestamp_col="sample_dt")

    assert out.shape[0] == 3
    assert out.loc[0, "conc"] == pytest.approx(0.00148)
    assert out["conc"].isna().tolist() == [False, True, True]
    assert pd.isna(out.loc[2, "sample_dt"])
    assert frame.shape[0] == 4


def test_normalize_observations_requires_columns() -> None:
    frame = pd.DataFrame({"site_id": ["A"], "flow": [1.0]})
    with pytest.raises(ValueError, match="value"):
        normalize_observations(frame, group_col="site_id", value_col="value")


def test_load_observations_keeps_site_ids_as_text(tmp_path: Path) -> None:
    path = tmp_path / "flows.csv"
    path.write_text(
        "site_id,date,flow\n01491000,2020-10-01,31.0\n01491000,2020-10-02,\n01646500,2020-10-01,2890\n",
        encoding="utf-8",
    )
    out = load_observations(path, group_col="site_id", value_col="flow", timestamp_col="date")
    assert out["site_id"].tolist() == ["01491000", "01491000", "01646500"]
    assert np.isnan(out.loc[1, "flow"])
    assert pd.api.types.is_datetime64_any_dtype(out["date"])


def test_observations_to_frame_from_records() -> None:
    records = [
        Observation(group="A", value=1.5),
        Observation(group="A", value=None, timestamp="2022-01-02"),
        Observation(group="B", value=3),
    ]
    frame = observations_to_frame(records)
    assert list(frame.columns) == ["group", "timestamp", "value"]
    assert frame["value"].isna().tolist() == [False, True, False]
    assert frame["group"].tolist() == ["A", "A", "B"]
