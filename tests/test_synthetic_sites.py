import numpy as np
import pytest

from siteboot.data.synthetic_sites import SITE_PROFILES, build_synthetic_observations


def test_build_synthetic_observations_is_deterministic() -> None:
    first = build_synthetic_observations(num_sites=2, num_observations=120, seed=7, missing_fraction=0.1)
    second = build_synthetic_observations(num_sites=2, num_observations=120, seed=7, missing_fraction=0.1)

    assert first.equals(second)
    assert list(first.columns) == ["site_id", "date", "value"]
    assert first.shape[0] == 240
    assert first["site_id"].nunique() == 2
    assert first["value"].isna().any()
    assert (first["value"].dropna() > 0).all()


def test_build_synthetic_observations_validates_arguments() -> None:
    with pytest.raises(ValueError):
        build_synthetic_observations(num_sites=len(SITE_PROFILES) + 1)
    with pytest.raises(ValueError):
        build_synthetic_observations(num_observations=0)
    with pytest.raises(ValueError):
        build_synthetic_observations(missing_fraction=1.0)


def test_no_missing_values_when_fraction_is_zero() -> None:
    frame = build_synthetic_observations(num_sites=1, num_observations=50, seed=3, missing_fraction=0.0)
    assert not np.isnan(frame["value"].to_numpy()).any()
