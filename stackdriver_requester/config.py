"""Requester configuration.

Settings are validated once, when the collector starts, so the decision
functions can consume them without further checks. Values can be passed
directly or loaded from the environment (and a ``.env`` file).
"""

import logging
import os
from datetime import timedelta
from typing import Any

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .alignment import DEFAULT_AGGREGATION_ALIGNER
from .exceptions import RequesterConfigError
from .schema import Aligner, LocationConfig

logger = logging.getLogger(__name__)

# Cloud Monitoring does not accept collection periods below one minute.
MIN_PERIOD = timedelta(seconds=60)

ENV_PROJECT_ID = "GOOGLE_CLOUD_PROJECT"
ENV_REGION = "STACKDRIVER_REGION"
ENV_ZONE = "STACKDRIVER_ZONE"
ENV_PERIOD = "STACKDRIVER_PERIOD"
ENV_ALIGNER = "STACKDRIVER_ALIGNER"
ENV_DEFAULT_ALIGNER = "STACKDRIVER_DEFAULT_ALIGNER"


class RequesterConfig(BaseModel):
    """Validated settings for one metrics requester."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    project_id: str = Field(min_length=1, description="Google Cloud project ID")
    region: str = Field(default="", description="Restrict zonal metrics to a region")
    zone: str = Field(default="", description="Restrict zonal metrics to a zone")
    period: timedelta = Field(
        default=MIN_PERIOD, description="Collection period of the collector"
    )
    per_series_aligner: Aligner = Field(
        default=Aligner.UNSET, description="Aligner chosen by the operator"
    )
    default_aligner: Aligner = Field(
        default=DEFAULT_AGGREGATION_ALIGNER,
        description="Aligner used when aggregation is needed and none is chosen",
    )

    @field_validator("project_id", mode="before")
    @classmethod
    def _strip_project(cls, v: Any) -> Any:
        return v.strip() if isinstance(v, str) else v

    @field_validator("region", "zone", mode="before")
    @classmethod
    def _strip_location(cls, v: Any) -> Any:
        if v is None:
            return ""
        if isinstance(v, str):
            stripped = v.strip()
            if v and not stripped:
                raise ValueError("must not be whitespace only")
            return stripped
        return v

    @field_validator("period", mode="before")
    @classmethod
    def _period_seconds(cls, v: Any) -> Any:
        # Bare seconds ("300"), seconds with a unit ("300s") or ISO 8601 ("PT5M").
        if isinstance(v, str):
            token = v.strip().lower().removesuffix("s")
            if token.isdigit():
                return timedelta(seconds=int(token))
            if not v.strip().upper().startswith("P"):
                raise ValueError(
                    "period must be whole seconds such as 300 or 300s, "
                    f"or an ISO 8601 duration; got {v!r}"
                )
        return v

    @field_validator("period")
    @classmethod
    def _check_period(cls, v: timedelta) -> timedelta:
        if v < MIN_PERIOD:
            raise ValueError(
                f"collection period cannot be less than {MIN_PERIOD.seconds} seconds"
            )
        return v

    @field_validator("per_series_aligner", "default_aligner", mode="before")
    @classmethod
    def _parse_aligner(cls, v: Any) -> Any:
        if v is None or isinstance(v, str):
            return Aligner.parse(v)
        return v

    @field_validator("default_aligner")
    @classmethod
    def _check_default(cls, v: Aligner) -> Aligner:
        if not v.is_set:
            raise ValueError("default aligner must be set")
        return v

    @property
    def location(self) -> LocationConfig:
        return LocationConfig(region=self.region, zone=self.zone)

    @classmethod
    def create(cls, **values: Any) -> "RequesterConfig":
        """Validate ``values``, raising ``RequesterConfigError`` on bad input."""
        try:
            return cls(**values)
        except ValidationError as e:
            errors = e.errors()
            field = ".".join(str(p) for p in errors[0]["loc"]) if errors else None
            details = "; ".join(
                f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}"
                for err in errors
            )
            raise RequesterConfigError(
                f"Invalid requester configuration: {details}", field=field
            ) from e

    @classmethod
    def from_env(cls, **overrides: Any) -> "RequesterConfig":
        """Load configuration from the environment.

        A ``.env`` file in the working directory is read first without
        overriding variables that are already set. Keyword arguments that
        are not ``None`` take precedence over the environment.
        """
        load_dotenv()

        project_id = os.getenv(ENV_PROJECT_ID) or os.getenv("GCP_PROJECT_ID", "")
        values: dict[str, Any] = {
            "project_id": project_id,
            "region": os.getenv(ENV_REGION, ""),
            "zone": os.getenv(ENV_ZONE, ""),
            "per_series_aligner": os.getenv(ENV_ALIGNER, ""),
        }
        period = os.getenv(ENV_PERIOD)
        if period:
            values["period"] = period
        default_aligner = os.getenv(ENV_DEFAULT_ALIGNER)
        if default_aligner:
            values["default_aligner"] = default_aligner

        values.update({k: v for k, v in overrides.items() if v is not None})
        config = cls.create(**values)
        logger.debug(
            f"Loaded requester config for project {config.project_id} "
            f"(region={config.region!r}, zone={config.zone!r}, period={config.period})"
        )
        return config
