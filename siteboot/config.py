from __future__ import annotations

import dataclasses
import json
from dataclasses import dataclass
from pathlib import Path

from .errors import InvalidParameterError
from .eval.aggregate import STREAM_MODES
from .eval.bootstrap import tail_fraction, validate_parameters
from .eval.statistics import make_generator


@dataclass(frozen=True)
class BootstrapConfig:
    seed: int
    quantile_fraction: float = 0.10
    confidence: float = 0.95
    repeats: int = 3000
    method: str = "interpolated"
    stream_mode: str = "shared"

    def validate(self) -> "BootstrapConfig":
        make_generator(self.seed)
        validate_parameters(self.quantile_fraction, self.confidence, self.repeats, self.method)
        if self.stream_mode not in STREAM_MODES:
            raise InvalidParameterError(f"stream_mode must be one of: {', '.join(STREAM_MODES)}")
        return self

    @property
    def alpha(self) -> float:
        return tail_fraction(self.confidence)

    def replace(self, **overrides: object) -> "BootstrapConfig":
        changes = {key: value for key, value in overrides.items() if value is not None}
        return dataclasses.replace(self, **changes).validate()

    def to_dict(self) -> dict[str, object]:
        return dataclasses.asdict(self)


def load_config(path: Path) -> BootstrapConfig:
    with path.open("r", encoding="utf-8") as handle:
        data = json.load(handle)

    if data.get("seed") is None:
        raise InvalidParameterError(f"{path} must set an explicit integer seed")

    known = {field.name for field in dataclasses.fields(BootstrapConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise InvalidParameterError(f"unknown config keys: {', '.join(unknown)}")

    return BootstrapConfig(**data).validate()
