"""Weighted compatibility scoring.

Every record starts at 100 points. Each failed check deducts its weight
(never going below zero) and contributes one issue, and usually one
recommendation, to the outcome. Checks run in a fixed order so issue and
recommendation lists are reproducible:

1. video codec          6. codec tag
2. container            7. HDR
3. audio codecs         8. surround sound
4. subtitle formats     9. bitrate
5. bit depth           10. fast start

Audio and subtitle checks deduct once per record, however many tracks fail.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from mediacompat.core.codecs import is_fast_start_container
from mediacompat.domain.models import CompatibilityOutcome, MediaMetadataRecord
from mediacompat.rating.types import MAX_SCORE, RatingPolicy

logger = logging.getLogger(__name__)

# Bitrates above this are treated as corrupt metadata, not as real bitrates
IMPLAUSIBLE_BITRATE_MBPS = 1000.0


@dataclass
class _Deductions:
    """Running score with its issue and recommendation lists."""

    score: int = MAX_SCORE
    issues: list[str] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)

    def deduct(self, weight: int, issue: str, recommendation: str) -> None:
        self.score = max(0, self.score - weight)
        self.issues.append(issue)
        self.recommendations.append(recommendation)


def _distinct(values: list[str]) -> list[str]:
    return list(dict.fromkeys(values))


def bitrate_mbps(file_size: int, duration_seconds: float) -> float | None:
    """Average bitrate in Mbps, or None when size or duration is unknown."""
    if file_size <= 0 or duration_seconds <= 0:
        return None
    return file_size * 8 / duration_seconds / 1_000_000


def corrected_bitrate_mbps(file_size: int, duration_seconds: float) -> float | None:
    """Average bitrate with repair of durations reported in the wrong unit.

    When the naive bitrate exceeds 1000 Mbps the duration is assumed to be
    in the wrong unit: values under 0.01 are scaled up by 1000, values
    under 1 are scaled down by 1000, and values under 100 are scaled up by
    1000 if that yields a plausible bitrate. A bitrate that stays
    implausible is reported as None.

    Args:
        file_size: File size in bytes.
        duration_seconds: Reported duration.

    Returns:
        Bitrate in Mbps, or None if unknown or implausible.
    """
    mbps = bitrate_mbps(file_size, duration_seconds)
    if mbps is None:
        return None

    if mbps > IMPLAUSIBLE_BITRATE_MBPS:
        duration = duration_seconds
        if duration_seconds < 0.01:
            duration = duration_seconds * 1000.0
        elif duration_seconds < 1.0:
            duration = duration_seconds / 1000.0
        elif duration_seconds < 100.0:
            alternative = bitrate_mbps(file_size, duration_seconds * 1000.0)
            if alternative is not None and alternative < IMPLAUSIBLE_BITRATE_MBPS:
                duration = duration_seconds * 1000.0
        mbps = bitrate_mbps(file_size, duration)
        logger.debug(
            "Corrected duration %.4fs to %.4fs for bitrate check",
            duration_seconds,
            duration,
        )

    if mbps is None or mbps >= IMPLAUSIBLE_BITRATE_MBPS:
        return None
    return mbps


def score(record: MediaMetadataRecord, policy: RatingPolicy) -> CompatibilityOutcome:
    """Score a record against a rating policy.

    Args:
        record: Media metadata to score.
        policy: Rating policy snapshot.

    Returns:
        CompatibilityOutcome with a score in 0..100, its classification,
        and issues/recommendations in check order.

    Example:
        A VP9 8-bit SDR file in a supported MKV container with one stereo
        track, scored with only VP9 unsupported, loses 35 (video codec),
        8 (HDR) and 3 (surround) points: 54, Poor with Good at 60.
    """
    support = policy.support
    weights = policy.weights
    result = _Deductions()

    # 1. Video codec
    if not support.is_video_codec_supported(record.video_codec, record.bit_depth):
        result.deduct(
            weights.unsupported_video_codec,
            f"{record.video_codec} {record.bit_depth}-bit video codec is not supported",
            "Re-encode to a supported video codec (e.g., H.264 8-bit)",
        )

    # 2. Container
    if not support.is_container_supported(record.container):
        result.deduct(
            weights.unsupported_container,
            f"{record.container} container is not supported",
            "Use a supported container (e.g., MP4)",
        )

    # 3. Audio codecs, once per record
    unsupported_audio = _distinct(
        [
            track.codec
            for track in record.audio_tracks
            if not support.is_audio_codec_supported(track.codec)
        ]
    )
    if unsupported_audio:
        result.deduct(
            weights.unsupported_audio_codec,
            f"{', '.join(unsupported_audio)} audio codec(s) are not supported",
            "Use supported audio codecs (e.g., AAC)",
        )

    # 4. Subtitle formats, once per record
    unsupported_subtitles = _distinct(
        [
            track.format
            for track in record.subtitle_tracks
            if not support.is_subtitle_format_supported(track.format)
        ]
    )
    if unsupported_subtitles:
        result.deduct(
            weights.unsupported_subtitle_format,
            f"{', '.join(unsupported_subtitles)} subtitle format(s) are not supported",
            "Use supported subtitle formats (e.g., SRT, VTT)",
        )

    # 5. Bit depth
    if not support.is_bit_depth_supported(record.bit_depth):
        result.deduct(
            weights.unsupported_bit_depth,
            f"{record.bit_depth}-bit depth is not supported",
            "Use 8-bit depth for maximum compatibility",
        )

    # 6. Codec tag
    if not record.is_codec_tag_correct:
        tag = record.video_codec_tag or "unknown"
        result.deduct(
            weights.incorrect_codec_tag,
            f"Incorrect codec tag ({tag}) - should be correct for {record.video_codec}",
            "Fix codec tag to ensure proper playback",
        )

    # 7. HDR
    if not record.is_hdr:
        result.deduct(
            weights.hdr,
            "SDR content may have reduced visual quality compared to HDR",
            "Consider HDR version for better visual quality",
        )

    # 8. Surround sound: penalized only when no track has more than 2 channels
    if record.audio_tracks and all(t.channels <= 2 for t in record.audio_tracks):
        max_channels = max(t.channels for t in record.audio_tracks)
        result.deduct(
            weights.surround_sound,
            f"All audio tracks are stereo ({max_channels} channels) "
            "- may have compatibility limitations",
            "Provide a surround (5.1 or higher) audio track",
        )

    # 9. Bitrate
    if policy.correct_duration_units:
        mbps = corrected_bitrate_mbps(record.file_size, record.duration_seconds)
    else:
        mbps = bitrate_mbps(record.file_size, record.duration_seconds)
    if mbps is not None and mbps > weights.high_bitrate_threshold_mbps:
        result.deduct(
            weights.high_bitrate,
            f"High bitrate ({mbps:.2f} Mbps) may cause buffering on slower connections",
            "Consider reducing bitrate for better streaming performance",
        )

    # 10. Fast start
    if is_fast_start_container(record.container) and not record.is_fast_start:
        result.deduct(
            weights.fast_start,
            "MP4 file lacks fast start optimization (moov atom not at beginning)",
            "Re-encode with fast start flag (-movflags +faststart) "
            "for better streaming performance",
        )

    classification = policy.thresholds.classify(result.score)
    logger.debug(
        "Scored %s: %d (%s), %d issue(s)",
        record.file_name,
        result.score,
        classification.value,
        len(result.issues),
    )
    return CompatibilityOutcome(
        score=result.score,
        classification=classification,
        issues=tuple(result.issues),
        recommendations=tuple(result.recommendations),
    )
