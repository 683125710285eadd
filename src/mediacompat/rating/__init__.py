"""Compatibility rating.

- types: immutable rating policy snapshot
- loader: YAML policy loading
- scorer: weighted metadata scoring
- legacy: playback-count buckets
- report: text reports
- snapshot: hot-reloadable policy store
"""

from mediacompat.rating.exceptions import PolicyError, PolicyValidationError
from mediacompat.rating.legacy import (
    LegacyThresholds,
    count_play_methods,
    legacy_bucket,
)
from mediacompat.rating.loader import load_policy, load_policy_from_dict
from mediacompat.rating.report import generate_report
from mediacompat.rating.scorer import bitrate_mbps, corrected_bitrate_mbps, score
from mediacompat.rating.snapshot import PolicyStore, ReloadResult
from mediacompat.rating.types import (
    MediaPropertySupport,
    RatingPolicy,
    RatingThresholds,
    RatingWeights,
    default_policy,
)

__all__ = [
    "LegacyThresholds",
    "MediaPropertySupport",
    "PolicyError",
    "PolicyStore",
    "PolicyValidationError",
    "RatingPolicy",
    "RatingThresholds",
    "RatingWeights",
    "ReloadResult",
    "bitrate_mbps",
    "corrected_bitrate_mbps",
    "count_play_methods",
    "default_policy",
    "generate_report",
    "legacy_bucket",
    "load_policy",
    "load_policy_from_dict",
    "score",
]
