"""Cloud Monitoring query planning for metrics collectors.

Decides, without calling the API, which filter selects a metric's time
series for a configured region or zone and which per-series aligner and
alignment period a ``ListTimeSeries`` request must carry.
"""

from .alignment import (
    DEFAULT_AGGREGATION_ALIGNER,
    derive_alignment_period,
    query_window,
    resolve_alignment,
)
from .config import RequesterConfig
from .exceptions import RequesterConfigError, UnknownAlignerError
from .filters import FilterBuilder, build_filter
from .requester import (
    MetricsRequester,
    build_list_time_series_request,
    build_query_plan,
)
from .resources.services import SERVICE_ZONE_TABLE, has_zone_label, service_namespace
from .schema import (
    AlignmentDecision,
    Aligner,
    LocationConfig,
    QueryPlan,
    TimeInterval,
)

__all__ = [
    "DEFAULT_AGGREGATION_ALIGNER",
    "SERVICE_ZONE_TABLE",
    "AlignmentDecision",
    "Aligner",
    "FilterBuilder",
    "LocationConfig",
    "MetricsRequester",
    "QueryPlan",
    "RequesterConfig",
    "RequesterConfigError",
    "TimeInterval",
    "UnknownAlignerError",
    "build_filter",
    "build_list_time_series_request",
    "build_query_plan",
    "derive_alignment_period",
    "has_zone_label",
    "query_window",
    "resolve_alignment",
    "service_namespace",
]
