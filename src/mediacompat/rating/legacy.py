"""Legacy playback-count classification.

Before metadata scoring existed, files were bucketed from their playback
history alone: how often clients played them directly, and how often they
needed a remux. The bucket is always recomputed from the current thresholds.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from mediacompat.domain.enums import Classification
from mediacompat.domain.models import PlaybackCounters, PlaybackEvent
from mediacompat.rating.exceptions import PolicyValidationError


@dataclass(frozen=True)
class LegacyThresholds:
    """Playback-count thresholds for the legacy bucket.

    Attributes:
        optimal: Direct plays needed for Optimal.
        good_direct: Direct plays sufficient for Good.
        good_combined: Direct plays plus remuxes sufficient for Good.
    """

    optimal: int = 8
    good_direct: int = 5
    good_combined: int = 8

    def __post_init__(self) -> None:
        """Validate thresholds are non-negative."""
        for name in ("optimal", "good_direct", "good_combined"):
            value = getattr(self, name)
            if value < 0:
                raise PolicyValidationError(
                    f"legacy threshold {name} must be non-negative, got {value}",
                    field=f"legacy.{name}",
                )


def legacy_bucket(
    direct_play_count: int,
    remux_count: int,
    thresholds: LegacyThresholds | None = None,
) -> Classification:
    """Classify a file from its playback counts.

    Args:
        direct_play_count: Number of direct plays.
        remux_count: Number of remuxed plays.
        thresholds: Bucket thresholds; defaults to (8, 5, 8).

    Returns:
        Optimal when direct plays reach the optimal threshold, Good when
        direct plays reach good_direct or direct plays plus remuxes reach
        good_combined, otherwise Poor.
    """
    if thresholds is None:
        thresholds = LegacyThresholds()
    if direct_play_count >= thresholds.optimal:
        return Classification.OPTIMAL
    if (
        direct_play_count >= thresholds.good_direct
        or direct_play_count + remux_count >= thresholds.good_combined
    ):
        return Classification.GOOD
    return Classification.POOR


def count_play_methods(events: Iterable[PlaybackEvent]) -> PlaybackCounters:
    """Tally direct plays, remuxes and transcodes across playback events."""
    counters = PlaybackCounters()
    for event in events:
        counters.record(event.play_method)
    return counters
