"""Google Cloud service namespaces and their monitored-resource locality.

All GCP metric types follow the format ``[service].googleapis.com/[path]``,
for example ``compute.googleapis.com/instance/cpu/utilization``. The service
namespace is the leading segment (``compute``).

Only some monitored resources carry a ``zone`` label. A location predicate
on a resource without one is rejected by the API, so the filter builder
consults ``SERVICE_ZONE_TABLE`` before adding one.
"""

from collections.abc import Mapping
from types import MappingProxyType

SERVICE_COMPUTE = "compute"
SERVICE_PUBSUB = "pubsub"
SERVICE_LOADBALANCING = "loadbalancing"
SERVICE_STORAGE = "storage"
SERVICE_CLOUDSQL = "cloudsql"
SERVICE_FIRESTORE = "firestore"
SERVICE_CLOUDFUNCTIONS = "cloudfunctions"
SERVICE_RUN = "run"

# gce_instance, gce_firewall, ... expose resource.labels.zone.
# pubsub_subscription, https_lb_rule, gcs_bucket, ... do not.
SERVICE_ZONE_TABLE: Mapping[str, bool] = MappingProxyType(
    {
        SERVICE_COMPUTE: True,
        SERVICE_PUBSUB: False,
        SERVICE_LOADBALANCING: False,
        SERVICE_STORAGE: False,
        SERVICE_CLOUDSQL: False,
        SERVICE_FIRESTORE: False,
        SERVICE_CLOUDFUNCTIONS: False,
        SERVICE_RUN: False,
    }
)


def service_namespace(metric_type: str) -> str:
    """Return the service namespace of a metric type.

    ``compute.googleapis.com/instance/cpu/utilization`` -> ``compute``.
    Metric types without a dotted host (``custom/foo``) yield the segment
    before the first ``/``.
    """
    head = metric_type.split("/", 1)[0]
    return head.split(".", 1)[0]


def has_zone_label(
    namespace: str, table: Mapping[str, bool] = SERVICE_ZONE_TABLE
) -> bool:
    """Whether monitored resources of ``namespace`` carry a zone label.

    Unknown namespaces are treated as non-zonal.
    """
    return table.get(namespace, False)
