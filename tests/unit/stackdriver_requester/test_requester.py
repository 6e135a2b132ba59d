"""Unit tests for query planning."""

from datetime import datetime, timedelta, timezone

import pytest
from google.cloud import monitoring_v3

from stackdriver_requester.config import RequesterConfig
from stackdriver_requester.requester import (
    MetricsRequester,
    build_list_time_series_request,
    build_query_plan,
)
from stackdriver_requester.schema import Aligner

NOW = datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc)
COMPUTE_CPU = "compute.googleapis.com/instance/cpu/utilization"
PUBSUB_ACK = "pubsub.googleapis.com/subscription/ack_message_count"


@pytest.fixture
def config():
    return RequesterConfig.create(
        project_id="p1", region="us-central1", period=300, per_series_aligner="max"
    )


def test_plan_aggregating(config):
    plan = MetricsRequester(config).plan(COMPUTE_CPU, 240, 60, now=NOW)

    assert plan.name == "projects/p1"
    assert plan.metric_type == COMPUTE_CPU
    assert plan.filter == (
        f'metric.type="{COMPUTE_CPU}" '
        'AND resource.labels.zone = starts_with("us-central1")'
    )
    assert plan.alignment.aligner is Aligner.MAX
    assert plan.alignment.alignment_period == timedelta(seconds=300)
    assert plan.interval.end_time == NOW - timedelta(seconds=240)
    assert plan.interval.start_time == NOW - timedelta(seconds=540)


def test_plan_non_aggregating(config):
    plan = build_query_plan(config, PUBSUB_ACK, 120, 300, now=NOW)

    assert plan.filter == f'metric.type="{PUBSUB_ACK}"'
    assert plan.alignment.aligner is Aligner.NONE
    assert plan.alignment.alignment_period == timedelta(seconds=300)
    assert plan.interval.end_time == NOW - timedelta(seconds=120)


def test_plan_uses_default_aligner():
    config = RequesterConfig.create(
        project_id="p1", period=600, default_aligner="ALIGN_SUM"
    )

    plan = build_query_plan(config, COMPUTE_CPU, 0, 60, now=NOW)

    assert plan.alignment.aligner is Aligner.SUM


def test_filter_for_metric_with_zone():
    requester = MetricsRequester(
        RequesterConfig.create(project_id="p1", zone="us-central1-a")
    )

    assert requester.filter_for_metric(COMPUTE_CPU).endswith(
        'resource.labels.zone = "us-central1-a"'
    )


def test_build_list_time_series_request(config):
    plan = MetricsRequester(config).plan(COMPUTE_CPU, 240, 60, now=NOW)

    request = build_list_time_series_request(plan)

    assert isinstance(request, monitoring_v3.ListTimeSeriesRequest)
    assert request.name == "projects/p1"
    assert request.filter == plan.filter
    assert request.view == monitoring_v3.ListTimeSeriesRequest.TimeSeriesView.FULL
    assert (
        request.aggregation.per_series_aligner
        == monitoring_v3.Aggregation.Aligner.ALIGN_MAX
    )
    assert request.aggregation.alignment_period == timedelta(seconds=300)
    assert request.interval.end_time.timestamp() == plan.interval.end_time.timestamp()
    assert (
        request.interval.start_time.timestamp()
        == plan.interval.start_time.timestamp()
    )


def test_plan_serializes_to_json(config):
    plan = MetricsRequester(config).plan(COMPUTE_CPU, 240, 60, now=NOW)

    data = plan.model_dump(mode="json")

    assert data["alignment"] == {"alignment_period": 300.0, "aligner": "ALIGN_MAX"}
    assert data["interval"]["end_time"].startswith("2024-05-01T11:56:00")
