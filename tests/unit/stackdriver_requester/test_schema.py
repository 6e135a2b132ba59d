"""Unit tests for the shared value types."""

from datetime import timedelta

import pytest
from pydantic import ValidationError

from stackdriver_requester.exceptions import RequesterConfigError, UnknownAlignerError
from stackdriver_requester.schema import AlignmentDecision, Aligner, LocationConfig


@pytest.mark.parametrize(
    "token,expected",
    [
        ("ALIGN_MEAN", Aligner.MEAN),
        ("align_max", Aligner.MAX),
        ("mean", Aligner.MEAN),
        ("  percentile_99 ", Aligner.PERCENTILE_99),
        ("none", Aligner.NONE),
        ("", Aligner.UNSET),
        ("   ", Aligner.UNSET),
        (None, Aligner.UNSET),
        (Aligner.SUM, Aligner.SUM),
    ],
)
def test_aligner_parse(token, expected):
    assert Aligner.parse(token) is expected


def test_aligner_parse_unknown():
    with pytest.raises(UnknownAlignerError) as exc_info:
        Aligner.parse("median")

    assert exc_info.value.value == "median"
    assert exc_info.value.field == "aligner"
    assert isinstance(exc_info.value, RequesterConfigError)


def test_unset_is_distinct_from_none():
    assert Aligner.UNSET is not Aligner.NONE
    assert not Aligner.UNSET.is_set
    assert Aligner.NONE.is_set
    assert Aligner.NONE.value == "ALIGN_NONE"


def test_location_config_is_frozen():
    location = LocationConfig(region="us-east1")

    assert location.zone == ""
    with pytest.raises(ValidationError):
        location.region = "us-west1"  # type: ignore[misc]


def test_alignment_decision_serializes_period_as_seconds():
    decision = AlignmentDecision(
        alignment_period=timedelta(seconds=300), aligner=Aligner.MEAN
    )

    assert decision.model_dump(mode="json") == {
        "alignment_period": 300.0,
        "aligner": "ALIGN_MEAN",
    }
