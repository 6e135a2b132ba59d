"""Pydantic value types shared by the filter and alignment decisions.

This module defines:
- The per-series aligner enumeration (with an explicit unset variant)
- The location configuration consumed by the filter builder
- Alignment decisions and query time windows
- The composed query plan handed to the API client
"""

from datetime import datetime, timedelta
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from .exceptions import UnknownAlignerError


class Aligner(str, Enum):
    """Cloud Monitoring per-series aligners.

    ``UNSET`` means the operator did not choose an aligner and is distinct
    from ``NONE``, which asks the backend not to align at all.
    """

    UNSET = ""
    NONE = "ALIGN_NONE"
    DELTA = "ALIGN_DELTA"
    RATE = "ALIGN_RATE"
    INTERPOLATE = "ALIGN_INTERPOLATE"
    NEXT_OLDER = "ALIGN_NEXT_OLDER"
    MIN = "ALIGN_MIN"
    MAX = "ALIGN_MAX"
    MEAN = "ALIGN_MEAN"
    COUNT = "ALIGN_COUNT"
    SUM = "ALIGN_SUM"
    STDDEV = "ALIGN_STDDEV"
    COUNT_TRUE = "ALIGN_COUNT_TRUE"
    COUNT_FALSE = "ALIGN_COUNT_FALSE"
    FRACTION_TRUE = "ALIGN_FRACTION_TRUE"
    PERCENTILE_99 = "ALIGN_PERCENTILE_99"
    PERCENTILE_95 = "ALIGN_PERCENTILE_95"
    PERCENTILE_50 = "ALIGN_PERCENTILE_50"
    PERCENTILE_05 = "ALIGN_PERCENTILE_05"
    PERCENT_CHANGE = "ALIGN_PERCENT_CHANGE"

    @classmethod
    def parse(cls, value: "str | Aligner | None") -> "Aligner":
        """Parse an aligner token from configuration.

        Accepts the full API name (``ALIGN_MEAN``) or the short form
        (``mean``), case-insensitively. ``None`` and blank strings map to
        ``UNSET``.

        Raises:
            UnknownAlignerError: If the token names no known aligner.
        """
        if isinstance(value, cls):
            return value
        token = (value or "").strip().upper()
        if not token:
            return cls.UNSET
        if not token.startswith("ALIGN_"):
            token = f"ALIGN_{token}"
        try:
            return cls(token)
        except ValueError:
            raise UnknownAlignerError(str(value)) from None

    @property
    def is_set(self) -> bool:
        return self is not Aligner.UNSET


class LocationConfig(BaseModel):
    """Optional region and zone the operator restricted collection to."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    region: str = Field(default="", description="Region, e.g. us-central1")
    zone: str = Field(default="", description="Zone, e.g. us-central1-a")


class AlignmentDecision(BaseModel):
    """Aggregation parameters attached to one time series query."""

    model_config = ConfigDict(
        frozen=True, extra="forbid", ser_json_timedelta="float"
    )

    alignment_period: timedelta = Field(
        description="Width of each aligned point and of the query window"
    )
    aligner: Aligner = Field(description="Effective per-series aligner")


class TimeInterval(BaseModel):
    """Closed query window, both ends in UTC."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    start_time: datetime
    end_time: datetime


class QueryPlan(BaseModel):
    """Everything needed to issue one ListTimeSeries call for a metric."""

    model_config = ConfigDict(
        frozen=True, extra="forbid", ser_json_timedelta="float"
    )

    name: str = Field(description="Resource name, projects/<project_id>")
    metric_type: str
    filter: str = Field(description="Monitoring filter expression")
    interval: TimeInterval
    alignment: AlignmentDecision
