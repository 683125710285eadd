"""Core utilities shared across mediacompat modules.

Pure functions with no dependency on the domain layer:

- string_utils: case-insensitive comparison and squashing
- paths: separator and case normalization of path strings
- codecs: codec label normalization and codec tag validation
- formatting: human-readable sizes, durations and resolutions
- json_utils: JSON parsing that reports failures as values
"""

from mediacompat.core.codecs import (
    FAST_START_CONTAINERS,
    container_from_extension,
    is_codec_tag_correct,
    is_fast_start_container,
    normalize_audio_codec,
    normalize_subtitle_format,
    normalize_video_codec,
)
from mediacompat.core.formatting import (
    format_duration,
    format_file_size,
    get_resolution_label,
)
from mediacompat.core.json_utils import (
    JsonParseResult,
    load_json_file,
    parse_json_safe,
    parse_json_with_schema,
    serialize_json_safe,
)
from mediacompat.core.paths import (
    is_case_insensitive_platform,
    normalize_path,
    path_file_name,
)
from mediacompat.core.string_utils import (
    collapse_whitespace,
    normalize_string,
    squash,
    starts_with_ci,
)

__all__ = [
    # Codecs
    "FAST_START_CONTAINERS",
    "container_from_extension",
    "is_codec_tag_correct",
    "is_fast_start_container",
    "normalize_audio_codec",
    "normalize_subtitle_format",
    "normalize_video_codec",
    # Formatting
    "format_duration",
    "format_file_size",
    "get_resolution_label",
    # JSON
    "JsonParseResult",
    "load_json_file",
    "parse_json_safe",
    "parse_json_with_schema",
    "serialize_json_safe",
    # Paths
    "is_case_insensitive_platform",
    "normalize_path",
    "path_file_name",
    # Strings
    "collapse_whitespace",
    "normalize_string",
    "squash",
    "starts_with_ci",
]
