from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List, Optional, Tuple

import numpy as np

from ews.config import config_from_mapping, load_config
from ews.errors import ConfigurationError
from ews.estimate import estimate_transitions, flagged_times, transition_flags
from storage.export import ResultExporter
from surrogates.synthetic import SyntheticTipping


LOGGER = logging.getLogger("ews")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Surrogate-tested transition estimation")
    parser.add_argument("--config", default="config.yaml", help="Path to config file")
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--input", help="Timeseries as .npy or CSV (values, or time,values)")
    source.add_argument(
        "--demo",
        nargs="?",
        type=int,
        const=1234,
        help="Analyze a synthetic series approaching a tipping point (optional seed)",
    )
    parser.add_argument("--threshold", type=float, default=0.05, help="p-value threshold for flags")
    parser.add_argument("--output", help="Write change metrics, p-values and flags to this CSV")
    parser.add_argument("--lanes", type=int, default=None, help="Worker lanes (default: CPU count)")
    parser.add_argument("--log-level", default="INFO")
    return parser.parse_args(argv)


def load_series(path: Path) -> Tuple[Optional[np.ndarray], np.ndarray]:
    if path.suffix == ".npy":
        data = np.load(path)
    else:
        data = np.loadtxt(path, delimiter=",", ndmin=2)
    data = np.asarray(data, dtype=float)
    if data.ndim == 1:
        return None, data
    if data.shape[1] == 1:
        return None, data[:, 0]
    if data.shape[1] == 2:
        return data[:, 0], data[:, 1]
    raise ConfigurationError(f"Expected one or two columns in {path}, got {data.shape[1]}")


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s :: %(message)s",
    )


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    configure_logging(args.log_level)
    try:
        config = config_from_mapping(load_config(Path(args.config)), n_lanes=args.lanes)
        if args.demo is not None:
            t, x = SyntheticTipping(seed=args.demo).generate()
        else:
            t, x = load_series(Path(args.input))
        result = estimate_transitions(t, x, config)
        flags = transition_flags(result, args.threshold)
    except ConfigurationError as exc:
        LOGGER.error("Invalid configuration: %s", exc)
        return 1

    for col, (indicator, metric) in enumerate(zip(result.indicator_names, result.change_metric_names)):
        LOGGER.info(
            "%s of %s: %d of %d points below p=%.3f",
            metric,
            indicator,
            int(np.sum(flags[:, col])),
            len(result.t_change),
            args.threshold,
        )
    times = flagged_times(result, flags)
    if len(times):
        LOGGER.info("Significant under every metric at t=%s", np.array2string(times, threshold=20))
    else:
        LOGGER.info("No time point is significant under every metric")

    if args.output:
        written = ResultExporter(Path(args.output)).write(result, flags)
        LOGGER.info("Wrote %d rows to %s", written, args.output)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
