"""Plain-text compatibility report rendering."""

from __future__ import annotations

from mediacompat.core.formatting import (
    format_duration,
    format_file_size,
    get_resolution_label,
)
from mediacompat.domain.models import CompatibilityOutcome, MediaMetadataRecord

RULE_HEAVY = "=" * 80
RULE_LIGHT = "-" * 80


def _section(lines: list[str], title: str) -> None:
    lines.append("")
    lines.append(title)
    lines.append(RULE_LIGHT)


def generate_report(
    record: MediaMetadataRecord, outcome: CompatibilityOutcome
) -> str:
    """Render a human-readable analysis of one scored record.

    Args:
        record: The scored media metadata.
        outcome: Result of scoring the record.

    Returns:
        Multi-line report text ending with a newline.
    """
    lines = [RULE_HEAVY, "MEDIA COMPATIBILITY ANALYSIS", RULE_HEAVY]

    _section(lines, "FILE INFORMATION")
    lines.append(f"  Name:     {record.file_name}")
    lines.append(f"  Path:     {record.file_path}")
    lines.append(f"  Size:     {format_file_size(record.file_size)}")
    lines.append(f"  Duration: {format_duration(record.duration_seconds)}")

    _section(lines, "CONTAINER")
    lines.append(f"  Format:     {record.container or 'Unknown'}")
    fast_start = "Yes" if record.is_fast_start else "No"
    lines.append(f"  Fast start: {fast_start}")

    _section(lines, "VIDEO")
    lines.append(f"  Codec:      {record.video_codec or 'Unknown'}")
    if record.video_codec_tag:
        tag_state = "correct" if record.is_codec_tag_correct else "incorrect"
        lines.append(f"  Codec tag:  {record.video_codec_tag} ({tag_state})")
    resolution = get_resolution_label(record.width, record.height)
    if record.width and record.height:
        resolution = f"{record.width}x{record.height} ({resolution})"
    lines.append(f"  Resolution: {resolution}")
    if record.frame_rate:
        lines.append(f"  Frame rate: {record.frame_rate:.3f} fps")
    lines.append(f"  Bit depth:  {record.bit_depth}-bit")
    dynamic_range = (record.hdr_type or "HDR") if record.is_hdr else "SDR"
    lines.append(f"  Range:      {dynamic_range}")

    _section(lines, f"AUDIO ({len(record.audio_tracks)} track(s))")
    if not record.audio_tracks:
        lines.append("  (none)")
    for index, track in enumerate(record.audio_tracks, start=1):
        detail = f"  #{index}: {track.codec}, {track.channels} ch, {track.language}"
        if track.bitrate_kbps:
            detail += f", {track.bitrate_kbps} kbps"
        lines.append(detail)

    _section(lines, f"SUBTITLES ({len(record.subtitle_tracks)} track(s))")
    if not record.subtitle_tracks:
        lines.append("  (none)")
    for index, sub in enumerate(record.subtitle_tracks, start=1):
        origin = "embedded" if sub.is_embedded else "external"
        fmt = sub.format or "Unknown"
        lines.append(f"  #{index}: {fmt}, {sub.language}, {origin}")

    _section(lines, "OVERALL COMPATIBILITY SCORE")
    classification = outcome.classification
    lines.append(
        f"  {classification.symbol} {classification.value} ({outcome.score}/100)"
    )

    if outcome.issues:
        _section(lines, "IDENTIFIED ISSUES")
        lines.extend(f"  ✗ {issue}" for issue in outcome.issues)

    if outcome.recommendations:
        _section(lines, "RECOMMENDATIONS")
        lines.extend(f"  • {rec}" for rec in outcome.recommendations)

    lines.append(RULE_HEAVY)
    return "\n".join(lines) + "\n"
