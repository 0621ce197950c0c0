from __future__ import annotations

import hashlib
from typing import Callable, Hashable, Iterable

import numpy as np

from ..errors import EmptyInputError, InvalidParameterError


def _to_1d(values: np.ndarray | list[float]) -> np.ndarray:
    array = np.asarray(values, dtype=float).reshape(-1)
    if array.size == 0:
        raise EmptyInputError("expected a non-empty numeric array")
    return array


def _usable(values: np.ndarray) -> np.ndarray:
    return values[~np.isnan(values)]


def check_fraction(fraction: float, name: str = "quantile_fraction") -> float:
    if isinstance(fraction, bool) or not isinstance(fraction, (int, float, np.integer, np.floating)):
        raise InvalidParameterError(f"{name} must be a number in [0, 1]")
    if not (0.0 <= float(fraction) <= 1.0):
        raise InvalidParameterError(f"{name} must be in [0, 1], got {fraction}")
    return float(fraction)


def interpolated_quantile(values: np.ndarray | list[float], fraction: float) -> float:
    """Type 7 quantile: linear interpolation at position ``1 + p * (n - 1)``.

    Missing values (NaN) are excluded. Returns NaN when nothing usable is left.
    """
    fraction = check_fraction(fraction)
    usable = _usable(_to_1d(values))
    if usable.size == 0:
        return float("nan")
    return float(np.quantile(usable, fraction, method="linear"))


def nearest_rank_quantile(values: np.ndarray | list[float], fraction: float) -> float:
    """Quantile forced onto a recorded value: ``sorted(x)[floor(n * p)]``.

    The rank is clamped to the last element, so ``p = 1`` gives the maximum.
    Missing values (NaN) are excluded. Returns NaN when nothing usable is left.
    """
    fraction = check_fraction(fraction)
    usable = np.sort(_usable(_to_1d(values)))
    if usable.size == 0:
        return float("nan")
    rank = min(int(usable.size * fraction), usable.size - 1)
    return float(usable[rank])


QUANTILE_METHODS: dict[str, Callable[[np.ndarray | list[float], float], float]] = {
    "interpolated": interpolated_quantile,
    "nearest_rank": nearest_rank_quantile,
}


def resolve_quantile_method(method: str) -> Callable[[np.ndarray | list[float], float], float]:
    if method not in QUANTILE_METHODS:
        raise InvalidParameterError(f"method must be one of: {', '.join(QUANTILE_METHODS)}")
    return QUANTILE_METHODS[method]


def make_generator(seed: int) -> np.random.Generator:
    if isinstance(seed, bool) or not isinstance(seed, (int, np.integer)):
        raise InvalidParameterError("seed must be an integer")
    if seed < 0:
        raise InvalidParameterError("seed must be non-negative")
    return np.random.default_rng(int(seed))


def spawn_generators(seed_or_rng: int | np.random.Generator, count: int) -> list[np.random.Generator]:
    """Independent child streams, one per worker or group, derived from one seed."""
    if count < 0:
        raise InvalidParameterError("count must be non-negative")
    if isinstance(seed_or_rng, np.random.Generator):
        return seed_or_rng.spawn(count)
    make_generator(seed_or_rng)
    children = np.random.SeedSequence(int(seed_or_rng)).spawn(count)
    return [np.random.default_rng(child) for child in children]


def _key_digest(key: Hashable) -> int:
    return int.from_bytes(hashlib.sha256(str(key).encode("utf-8")).digest()[:8], "little")


def keyed_generators(
    seed_or_rng: int | np.random.Generator,
    keys: Iterable[Hashable],
) -> list[np.random.Generator]:
    """One child stream per key, derived from the key itself rather than its position.

    A key's stream is the same whichever other keys are requested alongside it.
    Keys are identified by ``str(key)``.
    """
    if isinstance(seed_or_rng, np.random.Generator):
        entropy = int(seed_or_rng.integers(0, 2**63))
    else:
        make_generator(seed_or_rng)
        entropy = int(seed_or_rng)
    return [
        np.random.default_rng(np.random.SeedSequence(entropy, spawn_key=(_key_digest(key),)))
        for key in keys
    ]
