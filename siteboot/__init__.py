"""Bootstrap confidence intervals for per-site quantiles of monitoring data."""

from .config import BootstrapConfig, load_config
from .errors import (
    EmptyInputError,
    InsufficientDataError,
    InvalidParameterError,
    SiteBootError,
    SparseBootstrapWarning,
)
from .eval import (
    ConfidenceIntervalResult,
    bootstrap_by_group,
    bootstrap_interval,
    make_generator,
    resample_and_summarize,
)

__version__ = "0.1.0"
