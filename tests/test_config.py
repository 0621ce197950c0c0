import json
from pathlib import Path

import pytest

from siteboot.config import BootstrapConfig, load_config
from siteboot.errors import InvalidParameterError


def test_defaults_follow_low_flow_convention() -> None:
    config = BootstrapConfig(seed=27).validate()
    assert config.quantile_fraction == 0.10
    assert config.confidence == 0.95
    assert config.repeats == 3000
    assert config.alpha == pytest.approx(0.025)


def test_load_config_reads_json(tmp_path: Path) -> None:
    path = tmp_path / "bootstrap.json"
    path.write_text(json.dumps({"seed": 27, "repeats": 1500, "method": "nearest_rank"}), encoding="utf-8")
    config = load_config(path)
    assert config == BootstrapConfig(seed=27, repeats=1500, method="nearest_rank")


def test_load_config_requires_seed_and_known_keys(tmp_path: Path) -> None:
    no_seed = tmp_path / "no_seed.json"
    no_seed.write_text(json.dumps({"repeats": 100}), encoding="utf-8")
    with pytest.raises(InvalidParameterError):
        load_config(no_seed)

    extra = tmp_path / "extra.json"
    extra.write_text(json.dumps({"seed": 1, "workers": 4}), encoding="utf-8")
    with pytest.raises(InvalidParameterError):
        load_config(extra)


def test_replace_skips_unset_overrides_and_validates() -> None:
    config = BootstrapConfig(seed=3)
    updated = config.replace(seed=None, confidence=0.9, repeats=None)
    assert updated.seed == 3 and updated.confidence == 0.9 and updated.repeats == 3000

    with pytest.raises(InvalidParameterError):
        config.replace(confidence=1.5)
    with pytest.raises(InvalidParameterError):
        config.replace(stream_mode="threads")
