from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

import pandas as pd

from ..config import BootstrapConfig, load_config
from ..data.observations import load_observations
from ..errors import InsufficientDataError, InvalidParameterError
from .aggregate import STREAM_MODES, bootstrap_by_group, failed_groups
from .report import format_interval_table, write_interval_outputs
from .statistics import QUANTILE_METHODS

logger = logging.getLogger(__name__)


def run_interval_pipeline(
    frame: pd.DataFrame,
    config: BootstrapConfig,
    group_col: str = "site_id",
    value_col: str = "value",
) -> tuple[pd.DataFrame, dict[str, object]]:
    config.validate()
    results = bootstrap_by_group(
        frame,
        group_col=group_col,
        value_col=value_col,
        quantile_fraction=config.quantile_fraction,
        confidence=config.confidence,
        repeats=config.repeats,
        seed=config.seed,
        method=config.method,
        stream_mode=config.stream_mode,
    )

    meta = {
        **config.to_dict(),
        "alpha": float(config.alpha),
        "group_col": group_col,
        "value_col": value_col,
        "num_input_rows": int(frame.shape[0]),
        "num_groups": int(results.shape[0]),
        "num_failed_groups": int(failed_groups(results).shape[0]),
    }
    return results, meta


def resolve_config(args: argparse.Namespace) -> BootstrapConfig:
    overrides = {
        "seed": args.seed,
        "quantile_fraction": args.quantile,
        "confidence": args.confidence,
        "repeats": args.repeats,
        "method": args.method,
        "stream_mode": args.stream_mode,
    }
    if args.config is not None:
        return load_config(args.config).replace(**overrides)
    if args.seed is None:
        raise InvalidParameterError("a seed is required: pass --seed or a --config file that sets one")
    return BootstrapConfig(seed=args.seed).replace(**overrides)


def run_intervals(args: argparse.Namespace) -> dict[str, str]:
    config = resolve_config(args)
    frame = load_observations(
        args.input_csv,
        group_col=args.group_col,
        value_col=args.value_col,
        timestamp_col=args.timestamp_col,
    )
    results, meta = run_interval_pipeline(frame, config, group_col=args.group_col, value_col=args.value_col)
    meta["input_csv"] = str(args.input_csv)

    outputs = write_interval_outputs(results, meta, args.output_dir, prefix=args.output_prefix)
    logger.info("bootstrap intervals:\n%s", format_interval_table(results))

    failures = failed_groups(results)
    if args.fail_on_error and not failures.empty:
        failed_keys = ", ".join(str(key) for key in failures[args.group_col])
        raise InsufficientDataError(f"{failures.shape[0]} group(s) failed: {failed_keys}")
    return outputs


def build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Bootstrap confidence intervals for a per-group quantile.")
    parser.add_argument("--input-csv", type=Path, required=True)
    parser.add_argument("--output-dir", type=Path, required=True)
    parser.add_argument("--output-prefix", default="intervals")
    parser.add_argument("--group-col", default="site_id")
    parser.add_argument("--value-col", default="value")
    parser.add_argument("--timestamp-col", default=None)
    parser.add_argument("--config", type=Path, default=None)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--quantile", type=float, default=None)
    parser.add_argument("--confidence", type=float, default=None)
    parser.add_argument("--repeats", type=int, default=None)
    parser.add_argument("--method", choices=sorted(QUANTILE_METHODS), default=None)
    parser.add_argument("--stream-mode", choices=list(STREAM_MODES), default=None)
    parser.add_argument("--fail-on-error", action="store_true")
    return parser


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
    args = build_argument_parser().parse_args()
    outputs = run_intervals(args)
    print(json.dumps(outputs, indent=2))


if __name__ == "__main__":
    main()
