"""Monitoring filter construction for a metric and a location.

The filter always selects exactly one metric type. A location clause is only
added for services whose monitored resources expose a ``zone`` label; a
region is expressed as a zone prefix match since no region label exists.
"""

import logging
from collections.abc import Mapping

from .resources.services import SERVICE_ZONE_TABLE, has_zone_label, service_namespace
from .schema import LocationConfig

logger = logging.getLogger(__name__)


class FilterBuilder:
    """Builds ``ListTimeSeries`` filter expressions.

    The builder owns an immutable service-zone table so alternative tables
    can be injected in tests without touching module state.
    """

    def __init__(self, table: Mapping[str, bool] = SERVICE_ZONE_TABLE):
        self._table = table

    @property
    def table(self) -> Mapping[str, bool]:
        return self._table

    def is_zonal(self, metric_type: str) -> bool:
        return has_zone_label(service_namespace(metric_type), self._table)

    def build(self, metric_type: str, region: str = "", zone: str = "") -> str:
        """Return the filter expression for ``metric_type``.

        Args:
            metric_type: Full metric type, e.g.
                ``compute.googleapis.com/instance/cpu/utilization``.
            region: Optional region. Wins over ``zone`` when both are set.
            zone: Optional zone, matched exactly.

        Returns:
            ``metric.type="<metric_type>"`` optionally followed by a
            ``resource.labels.zone`` clause.
        """
        base = f'metric.type="{metric_type}"'
        if not self.is_zonal(metric_type):
            return base

        if region and zone:
            logger.warning(
                f"Both region {region!r} and zone {zone!r} are configured; "
                f"only region is used to filter {metric_type}"
            )
        if region:
            return f'{base} AND resource.labels.zone = starts_with("{region}")'
        if zone:
            return f'{base} AND resource.labels.zone = "{zone}"'
        return base

    def for_location(self, metric_type: str, location: LocationConfig) -> str:
        return self.build(metric_type, region=location.region, zone=location.zone)


_default_builder = FilterBuilder()


def build_filter(metric_type: str, region: str = "", zone: str = "") -> str:
    """Build a filter using the default service-zone table."""
    return _default_builder.build(metric_type, region=region, zone=zone)
