"""Rating policy types.

A RatingPolicy is an immutable snapshot: support maps per media property,
deduction weights and classification thresholds. Instances validate
themselves on construction and raise PolicyValidationError when the values
cannot produce a well-defined score.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from types import MappingProxyType

from mediacompat.core.string_utils import normalize_string
from mediacompat.domain.enums import Classification
from mediacompat.rating.exceptions import PolicyValidationError

# =============================================================================
# Default support maps
# =============================================================================
# Keys are policy labels as produced by mediacompat.core.codecs; lookups
# ignore case. A label missing from a map counts as unsupported.

DEFAULT_VIDEO_CODECS: dict[str, bool] = {
    "H.264": True,
    "H.264 8-bit": True,
    "H.265": True,
    "H.265 8-bit": True,
    "H.265 10-bit": False,
    "VP9": True,
    "AV1": False,
}

DEFAULT_AUDIO_CODECS: dict[str, bool] = {
    "AAC": True,
    "MP3": True,
    "AC3": False,
    "EAC3": False,
    "DTS": False,
    "FLAC": True,
    "Opus": True,
}

DEFAULT_CONTAINERS: dict[str, bool] = {
    "MP4": True,
    "M4V": True,
    "MOV": True,
    "MKV": False,
    "WebM": True,
    "TS": False,
}

DEFAULT_SUBTITLE_FORMATS: dict[str, bool] = {
    "SRT": True,
    "VTT": True,
    "ASS": False,
    "SSA": False,
}

DEFAULT_BIT_DEPTHS: dict[str, bool] = {
    "8": True,
    "10": False,
    "12": False,
}

MAX_WEIGHT = 100
MAX_SCORE = 100


def _folded(mapping: Mapping[str, bool]) -> Mapping[str, bool]:
    return MappingProxyType(
        {normalize_string(str(key)): bool(value) for key, value in mapping.items()}
    )


@dataclass(frozen=True)
class MediaPropertySupport:
    """Which media property values clients can play directly.

    Maps are stored read-only with casefolded keys.
    """

    video_codecs: Mapping[str, bool] = field(
        default_factory=lambda: dict(DEFAULT_VIDEO_CODECS)
    )
    audio_codecs: Mapping[str, bool] = field(
        default_factory=lambda: dict(DEFAULT_AUDIO_CODECS)
    )
    containers: Mapping[str, bool] = field(
        default_factory=lambda: dict(DEFAULT_CONTAINERS)
    )
    subtitle_formats: Mapping[str, bool] = field(
        default_factory=lambda: dict(DEFAULT_SUBTITLE_FORMATS)
    )
    bit_depths: Mapping[str, bool] = field(
        default_factory=lambda: dict(DEFAULT_BIT_DEPTHS)
    )

    def __post_init__(self) -> None:
        """Freeze the support maps."""
        for f in fields(self):
            object.__setattr__(self, f.name, _folded(getattr(self, f.name)))

    def is_video_codec_supported(self, codec: str | None, bit_depth: int) -> bool:
        """Check a video codec, preferring a "<codec> <depth>-bit" entry.

        Example:
            With the defaults, ("H.265", 10) is unsupported while
            ("H.265", 8) is supported.
        """
        if not codec:
            return False
        key = normalize_string(codec)
        with_depth = f"{key} {bit_depth}-bit"
        if with_depth in self.video_codecs:
            return self.video_codecs[with_depth]
        return self.video_codecs.get(key, False)

    def is_audio_codec_supported(self, codec: str | None) -> bool:
        if not codec:
            return False
        return self.audio_codecs.get(normalize_string(codec), False)

    def is_container_supported(self, container: str | None) -> bool:
        if not container:
            return False
        return self.containers.get(normalize_string(container), False)

    def is_subtitle_format_supported(self, fmt: str | None) -> bool:
        """Check a subtitle format; a track without a format is fine."""
        if not fmt:
            return True
        return self.subtitle_formats.get(normalize_string(fmt), False)

    def is_bit_depth_supported(self, bit_depth: int) -> bool:
        return self.bit_depths.get(str(bit_depth), False)


@dataclass(frozen=True)
class RatingWeights:
    """Points deducted per failed check, plus the high-bitrate threshold."""

    unsupported_video_codec: int = 35
    unsupported_container: int = 30
    unsupported_audio_codec: int = 25
    unsupported_subtitle_format: int = 8
    unsupported_bit_depth: int = 18
    incorrect_codec_tag: int = 12
    hdr: int = 8
    surround_sound: int = 3
    high_bitrate: int = 5
    fast_start: int = 5
    high_bitrate_threshold_mbps: float = 40.0

    def __post_init__(self) -> None:
        """Validate weight ranges."""
        for f in fields(self):
            if f.name == "high_bitrate_threshold_mbps":
                continue
            value = getattr(self, f.name)
            if not 0 <= value <= MAX_WEIGHT:
                raise PolicyValidationError(
                    f"weight {f.name} must be between 0 and {MAX_WEIGHT}, "
                    f"got {value}",
                    field=f"weights.{f.name}",
                )
        if self.high_bitrate_threshold_mbps <= 0:
            raise PolicyValidationError(
                "high_bitrate_threshold_mbps must be positive, "
                f"got {self.high_bitrate_threshold_mbps}",
                field="weights.high_bitrate_threshold_mbps",
            )


@dataclass(frozen=True)
class RatingThresholds:
    """Score thresholds separating Optimal, Good and Poor."""

    optimal: int = 80
    good: int = 60

    def __post_init__(self) -> None:
        """Validate threshold ordering."""
        for name in ("optimal", "good"):
            value = getattr(self, name)
            if not 0 <= value <= MAX_SCORE:
                raise PolicyValidationError(
                    f"{name} threshold must be between 0 and {MAX_SCORE}, got {value}",
                    field=f"thresholds.{name}",
                )
        if self.good > self.optimal:
            raise PolicyValidationError(
                f"good threshold ({self.good}) must not exceed "
                f"optimal threshold ({self.optimal})",
                field="thresholds.good",
            )

    def classify(self, score: int) -> Classification:
        """Classify a score.

        Example:
            >>> RatingThresholds(optimal=80, good=60).classify(54)
            <Classification.POOR: 'Poor'>
        """
        if score >= self.optimal:
            return Classification.OPTIMAL
        if score >= self.good:
            return Classification.GOOD
        return Classification.POOR


@dataclass(frozen=True)
class RatingPolicy:
    """Immutable rating policy snapshot used for a whole batch.

    Attributes:
        support: Supported media property values.
        weights: Deduction weights and the high-bitrate threshold.
        thresholds: Classification thresholds.
        correct_duration_units: Repair implausible bitrates caused by
            durations reported in the wrong unit before the high-bitrate
            check.
        name: Label for logs and reports.
    """

    support: MediaPropertySupport = field(default_factory=MediaPropertySupport)
    weights: RatingWeights = field(default_factory=RatingWeights)
    thresholds: RatingThresholds = field(default_factory=RatingThresholds)
    correct_duration_units: bool = False
    name: str = "default"


def default_policy() -> RatingPolicy:
    """Return the built-in rating policy."""
    return RatingPolicy()
