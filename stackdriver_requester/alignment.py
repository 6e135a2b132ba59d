"""Per-series alignment and query window resolution.

Cloud Monitoring aggregates raw points per series when a request carries an
aligner and an alignment period. Aggregation only makes sense when the
collection period spans more than one native sample of the metric:

- collection period <= sample period: no aggregation, ``ALIGN_NONE`` is
  forced and the window covers one sample period.
- collection period > sample period: the requested aligner is used (or the
  configured default when none was requested) and the window covers one
  collection period.

The window always ends ``ingest_delay`` before now so that points still
being ingested are never requested.
"""

import logging
from datetime import datetime, timedelta, timezone

from .schema import AlignmentDecision, Aligner, TimeInterval

logger = logging.getLogger(__name__)

# Used when aggregation is needed and the operator chose no aligner.
DEFAULT_AGGREGATION_ALIGNER = Aligner.MEAN

Duration = timedelta | int | float


def _as_timedelta(value: Duration) -> timedelta:
    """Coerce seconds or a timedelta to a non-negative timedelta."""
    if not isinstance(value, timedelta):
        value = timedelta(seconds=value)
    return max(value, timedelta(0))


def needs_aggregation(sample_period: Duration, collection_period: Duration) -> bool:
    """Whether one collection period covers more than one native sample."""
    return _as_timedelta(collection_period) > _as_timedelta(sample_period)


def derive_alignment_period(
    sample_period: Duration, collection_period: Duration
) -> timedelta:
    """Return the alignment period, which is also the query window width.

    The larger of the two periods: a window shorter than one native sample
    may contain no point at all.
    """
    return max(_as_timedelta(collection_period), _as_timedelta(sample_period))


def resolve_alignment(
    ingest_delay: Duration,
    sample_period: Duration,
    collection_period: Duration,
    requested_aligner: Aligner | str | None = Aligner.UNSET,
    default_aligner: Aligner = DEFAULT_AGGREGATION_ALIGNER,
) -> AlignmentDecision:
    """Decide the aligner and alignment period for one metric query.

    When the collection period does not exceed the sample period the result
    is always ``ALIGN_NONE``, whatever was requested; the requested aligner
    is not even parsed in that case.

    Args:
        ingest_delay: Typical delay before a point becomes queryable. It
            does not change the decision. It is applied by ``query_window``
            (and so by ``MetricsRequester.plan``), which ends the query
            window ``ingest_delay`` before now.
        sample_period: Native sample period of the metric.
        collection_period: Period the collector runs at.
        requested_aligner: Aligner chosen by the operator, if any.
        default_aligner: Aligner used when aggregation is needed and none
            was requested.

    Returns:
        The effective alignment period and aligner.

    Raises:
        UnknownAlignerError: If aggregation is needed and
            ``requested_aligner`` is a string naming no known aligner.
    """
    period = derive_alignment_period(sample_period, collection_period)

    if not needs_aggregation(sample_period, collection_period):
        if requested_aligner and requested_aligner != Aligner.NONE:
            logger.debug(
                f"Collection period {_as_timedelta(collection_period)} does not "
                f"exceed sample period {_as_timedelta(sample_period)}; "
                f"ignoring aligner {requested_aligner!r}"
            )
        return AlignmentDecision(alignment_period=period, aligner=Aligner.NONE)

    requested = Aligner.parse(requested_aligner)
    if requested.is_set:
        return AlignmentDecision(alignment_period=period, aligner=requested)
    return AlignmentDecision(alignment_period=period, aligner=default_aligner)


def query_window(
    ingest_delay: Duration,
    alignment_period: Duration,
    now: datetime | None = None,
) -> TimeInterval:
    """Return the query interval ending ``ingest_delay`` before ``now``.

    Both ends fall on whole seconds: the end is truncated and the width is
    the alignment period truncated to whole seconds.
    """
    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    else:
        now = now.astimezone(timezone.utc)

    width = timedelta(seconds=int(_as_timedelta(alignment_period).total_seconds()))
    end_time = (now - _as_timedelta(ingest_delay)).replace(microsecond=0)
    start_time = end_time - width
    return TimeInterval(start_time=start_time, end_time=end_time)
