"""Print the query plan for a metric.

Usage:
    python -m stackdriver_requester compute.googleapis.com/instance/cpu/utilization \
        --project my-project --region us-central1 --period 300 --aligner mean
"""

import argparse
import importlib.metadata
import logging
import sys
from collections.abc import Sequence

from .config import RequesterConfig
from .exceptions import RequesterConfigError
from .requester import MetricsRequester

logger = logging.getLogger(__name__)


def _version() -> str:
    try:
        return importlib.metadata.version("stackdriver-requester")
    except importlib.metadata.PackageNotFoundError:
        return "0.0.0-dev"


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="stackdriver_requester",
        description="Show the filter, window and aligner for a metric query.",
    )
    parser.add_argument("metric_type", help="Full metric type")
    parser.add_argument("--project", dest="project_id", help="Google Cloud project ID")
    parser.add_argument("--region", help="Restrict zonal metrics to a region")
    parser.add_argument("--zone", help="Restrict zonal metrics to a zone")
    parser.add_argument("--period", type=int, help="Collection period in seconds")
    parser.add_argument(
        "--aligner", dest="per_series_aligner", help="Per-series aligner, e.g. mean"
    )
    parser.add_argument(
        "--sample-period",
        type=int,
        default=60,
        help="Native sample period of the metric in seconds (default: 60)",
    )
    parser.add_argument(
        "--ingest-delay",
        type=int,
        default=240,
        help="Ingest delay of the metric in seconds (default: 240)",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    parser.add_argument("--version", action="version", version=_version())
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = RequesterConfig.from_env(
            project_id=args.project_id,
            region=args.region,
            zone=args.zone,
            period=args.period,
            per_series_aligner=args.per_series_aligner,
        )
    except RequesterConfigError as e:
        logger.error(e.message)
        return 2

    plan = MetricsRequester(config).plan(
        args.metric_type, args.ingest_delay, args.sample_period
    )
    print(plan.model_dump_json(indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
