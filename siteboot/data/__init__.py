"""Observation tables: loading, normalization, and synthetic site data."""

from .observations import (
    Observation,
    load_observations,
    normalize_observations,
    observations_to_frame,
)
from .synthetic_sites import SAMPLE_CONCENTRATIONS, build_synthetic_observations
