"""Rating policy file loading and validation.

Policies are YAML documents validated with Pydantic models and converted to
the immutable RatingPolicy snapshot. Every section is optional; missing
sections and keys fall back to the built-in defaults.

Example policy::

    name: living-room
    properties:
      video_codecs: {H.264: true, VP9: false}
      containers: {MKV: true}
    weights:
      hdr: 0
    thresholds:
      optimal: 85
      good: 65
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)

from mediacompat.rating.exceptions import PolicyValidationError
from mediacompat.rating.types import (
    DEFAULT_AUDIO_CODECS,
    DEFAULT_BIT_DEPTHS,
    DEFAULT_CONTAINERS,
    DEFAULT_SUBTITLE_FORMATS,
    DEFAULT_VIDEO_CODECS,
    MAX_SCORE,
    MAX_WEIGHT,
    MediaPropertySupport,
    RatingPolicy,
    RatingThresholds,
    RatingWeights,
)


class PropertiesModel(BaseModel):
    """Pydantic model for the support maps."""

    model_config = ConfigDict(extra="forbid")

    video_codecs: dict[str, bool] = Field(
        default_factory=lambda: dict(DEFAULT_VIDEO_CODECS)
    )
    audio_codecs: dict[str, bool] = Field(
        default_factory=lambda: dict(DEFAULT_AUDIO_CODECS)
    )
    containers: dict[str, bool] = Field(
        default_factory=lambda: dict(DEFAULT_CONTAINERS)
    )
    subtitle_formats: dict[str, bool] = Field(
        default_factory=lambda: dict(DEFAULT_SUBTITLE_FORMATS)
    )
    bit_depths: dict[str, bool] = Field(
        default_factory=lambda: dict(DEFAULT_BIT_DEPTHS)
    )

    @field_validator(
        "video_codecs",
        "audio_codecs",
        "containers",
        "subtitle_formats",
        "bit_depths",
        mode="before",
    )
    @classmethod
    def stringify_keys(cls, value: Any) -> Any:
        """Accept unquoted YAML keys such as bit depths (8: true)."""
        if isinstance(value, dict):
            return {str(key): flag for key, flag in value.items()}
        return value


class WeightsModel(BaseModel):
    """Pydantic model for deduction weights."""

    model_config = ConfigDict(extra="forbid")

    unsupported_video_codec: int = Field(default=35, ge=0, le=MAX_WEIGHT)
    unsupported_container: int = Field(default=30, ge=0, le=MAX_WEIGHT)
    unsupported_audio_codec: int = Field(default=25, ge=0, le=MAX_WEIGHT)
    unsupported_subtitle_format: int = Field(default=8, ge=0, le=MAX_WEIGHT)
    unsupported_bit_depth: int = Field(default=18, ge=0, le=MAX_WEIGHT)
    incorrect_codec_tag: int = Field(default=12, ge=0, le=MAX_WEIGHT)
    hdr: int = Field(default=8, ge=0, le=MAX_WEIGHT)
    surround_sound: int = Field(default=3, ge=0, le=MAX_WEIGHT)
    high_bitrate: int = Field(default=5, ge=0, le=MAX_WEIGHT)
    fast_start: int = Field(default=5, ge=0, le=MAX_WEIGHT)
    high_bitrate_threshold_mbps: float = Field(default=40.0, gt=0)


class ThresholdsModel(BaseModel):
    """Pydantic model for classification thresholds."""

    model_config = ConfigDict(extra="forbid")

    optimal: int = Field(default=80, ge=0, le=MAX_SCORE)
    good: int = Field(default=60, ge=0, le=MAX_SCORE)

    @model_validator(mode="after")
    def validate_ordering(self) -> ThresholdsModel:
        """Ensure the good threshold does not exceed the optimal one."""
        if self.good > self.optimal:
            raise ValueError(
                f"good ({self.good}) must not exceed optimal ({self.optimal})"
            )
        return self


class RatingPolicyModel(BaseModel):
    """Pydantic model for a complete rating policy document."""

    model_config = ConfigDict(extra="forbid")

    name: str = "default"
    properties: PropertiesModel = Field(default_factory=PropertiesModel)
    weights: WeightsModel = Field(default_factory=WeightsModel)
    thresholds: ThresholdsModel = Field(default_factory=ThresholdsModel)
    correct_duration_units: bool = False


def _convert_to_policy(model: RatingPolicyModel) -> RatingPolicy:
    props = model.properties
    return RatingPolicy(
        support=MediaPropertySupport(
            video_codecs=props.video_codecs,
            audio_codecs=props.audio_codecs,
            containers=props.containers,
            subtitle_formats=props.subtitle_formats,
            bit_depths=props.bit_depths,
        ),
        weights=RatingWeights(**model.weights.model_dump()),
        thresholds=RatingThresholds(**model.thresholds.model_dump()),
        correct_duration_units=model.correct_duration_units,
        name=model.name,
    )


def _format_validation_error(error: ValidationError) -> tuple[str, str | None]:
    """Format a Pydantic validation error into a message and field path."""
    errors = error.errors()
    if errors:
        first_error = errors[0]
        loc = ".".join(str(x) for x in first_error.get("loc", []))
        msg = first_error.get("msg", str(error))
        if loc:
            return f"Policy validation failed: {loc}: {msg}", loc
        return f"Policy validation failed: {msg}", None
    return f"Policy validation failed: {error}", None


def load_policy_from_dict(data: dict[str, Any]) -> RatingPolicy:
    """Validate a policy mapping and build a RatingPolicy.

    Args:
        data: Parsed policy document.

    Returns:
        Validated RatingPolicy.

    Raises:
        PolicyValidationError: If the policy data is invalid.
    """
    try:
        model = RatingPolicyModel.model_validate(data)
    except ValidationError as e:
        message, field = _format_validation_error(e)
        raise PolicyValidationError(message, field=field) from e

    return _convert_to_policy(model)


def load_policy(policy_path: Path) -> RatingPolicy:
    """Load and validate a rating policy from a YAML file.

    An empty file yields the default policy.

    Args:
        policy_path: Path to the YAML policy file.

    Returns:
        Validated RatingPolicy.

    Raises:
        PolicyValidationError: If the file is missing, unreadable, not
            valid YAML, or does not describe a valid policy.
    """
    try:
        with open(policy_path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except FileNotFoundError as e:
        raise PolicyValidationError(f"Policy file not found: {policy_path}") from e
    except OSError as e:
        raise PolicyValidationError(f"Cannot read policy file: {e}") from e
    except yaml.YAMLError as e:
        raise PolicyValidationError(f"Invalid YAML syntax: {e}") from e

    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise PolicyValidationError("Policy file must be a YAML mapping")

    return load_policy_from_dict(data)
