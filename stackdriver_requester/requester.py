"""Query planning for Cloud Monitoring ``ListTimeSeries`` calls.

The collector issues one query per metric per collection cycle. This module
combines the filter and alignment decisions for a metric into a
``QueryPlan`` and turns that plan into a ``monitoring_v3`` request. Nothing
here talks to the API; the caller sends the request with its own client.
"""

import logging
from datetime import datetime

from google.cloud import monitoring_v3

from .alignment import Duration, query_window, resolve_alignment
from .config import RequesterConfig
from .filters import FilterBuilder
from .schema import QueryPlan

logger = logging.getLogger(__name__)


class MetricsRequester:
    """Plans time series queries for one requester configuration."""

    def __init__(
        self,
        config: RequesterConfig,
        filter_builder: FilterBuilder | None = None,
    ):
        self.config = config
        self.filter_builder = filter_builder or FilterBuilder()

    def filter_for_metric(self, metric_type: str) -> str:
        return self.filter_builder.for_location(metric_type, self.config.location)

    def plan(
        self,
        metric_type: str,
        ingest_delay: Duration,
        sample_period: Duration,
        now: datetime | None = None,
    ) -> QueryPlan:
        """Build the query plan for ``metric_type``.

        Args:
            metric_type: Full metric type.
            ingest_delay: Ingest delay from the metric descriptor metadata.
            sample_period: Sample period from the metric descriptor metadata.
            now: Reference time for the query window. Defaults to now (UTC).

        Returns:
            The plan holding filter, time window and alignment.
        """
        alignment = resolve_alignment(
            ingest_delay,
            sample_period,
            self.config.period,
            self.config.per_series_aligner,
            default_aligner=self.config.default_aligner,
        )
        interval = query_window(ingest_delay, alignment.alignment_period, now=now)
        plan = QueryPlan(
            name=f"projects/{self.config.project_id}",
            metric_type=metric_type,
            filter=self.filter_for_metric(metric_type),
            interval=interval,
            alignment=alignment,
        )
        logger.debug(
            f"Planned {metric_type}: filter={plan.filter!r} "
            f"aligner={alignment.aligner.value} period={alignment.alignment_period}"
        )
        return plan


def build_query_plan(
    config: RequesterConfig,
    metric_type: str,
    ingest_delay: Duration,
    sample_period: Duration,
    now: datetime | None = None,
) -> QueryPlan:
    """Plan one query without keeping a ``MetricsRequester`` around."""
    return MetricsRequester(config).plan(
        metric_type, ingest_delay, sample_period, now=now
    )


def build_list_time_series_request(
    plan: QueryPlan,
) -> monitoring_v3.ListTimeSeriesRequest:
    """Convert a plan into a ``ListTimeSeriesRequest`` with the FULL view."""
    interval = monitoring_v3.TimeInterval(
        {
            "start_time": {"seconds": int(plan.interval.start_time.timestamp())},
            "end_time": {"seconds": int(plan.interval.end_time.timestamp())},
        }
    )
    aggregation = monitoring_v3.Aggregation(
        {
            "alignment_period": {
                "seconds": int(plan.alignment.alignment_period.total_seconds())
            },
            "per_series_aligner": monitoring_v3.Aggregation.Aligner[
                plan.alignment.aligner.value
            ],
        }
    )
    return monitoring_v3.ListTimeSeriesRequest(
        name=plan.name,
        filter=plan.filter,
        interval=interval,
        aggregation=aggregation,
        view=monitoring_v3.ListTimeSeriesRequest.TimeSeriesView.FULL,
    )
