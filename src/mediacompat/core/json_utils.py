"""Safe JSON helpers with explicit result values.

Stored track lists and CLI input files are JSON. Parsing never raises for
malformed input; callers receive a JsonParseResult and decide whether a
failure is fatal.

Example usage:
    result = parse_json_with_schema(raw, AudioTrackList, context="audio_tracks")
    if result.success and result.value is not None:
        tracks = result.value.root
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any, Generic, TypeVar

if TYPE_CHECKING:
    from pydantic import BaseModel

T = TypeVar("T")
M = TypeVar("M", bound="BaseModel")

logger = logging.getLogger(__name__)

# Sentinel for "no default supplied"
_UNSET: Any = object()


@dataclass(frozen=True)
class JsonParseResult(Generic[T]):
    """Result of a JSON parsing operation.

    Attributes:
        success: True if parsing succeeded (or a default was substituted).
        value: Parsed value, the substituted default, or None.
        error: Error message when the input was malformed, else None.
    """

    success: bool
    value: T | None
    error: str | None = None


def _prefixed(context: str, message: str) -> str:
    return f"{context}: {message}" if context else message


def parse_json_safe(
    raw: str | bytes | None,
    *,
    default: Any = _UNSET,
    context: str = "",
) -> JsonParseResult[Any]:
    """Parse a JSON document without raising.

    Args:
        raw: JSON text. None or empty input yields the default (or None).
        default: Value substituted when the input is empty or malformed.
            When omitted, malformed input produces a failed result.
        context: Label prepended to error messages (e.g., a column name).

    Returns:
        JsonParseResult with the parsed value or error information.

    Example:
        >>> parse_json_safe("[1, 2]").value
        [1, 2]
        >>> parse_json_safe("{bad", default=[]).value
        []
    """
    if raw is None or raw == "" or raw == b"":
        return JsonParseResult(
            success=True, value=None if default is _UNSET else default
        )

    try:
        return JsonParseResult(success=True, value=json.loads(raw))
    except json.JSONDecodeError as e:
        error_msg = _prefixed(context, f"Invalid JSON at position {e.pos}: {e.msg}")
    except (TypeError, UnicodeDecodeError) as e:
        error_msg = _prefixed(context, f"Unreadable JSON input: {e}")

    logger.warning(error_msg)
    if default is not _UNSET:
        return JsonParseResult(success=True, value=default, error=error_msg)
    return JsonParseResult(success=False, value=None, error=error_msg)


def parse_json_with_schema(
    raw: str | bytes | None,
    schema: type[M],
    *,
    context: str = "",
) -> JsonParseResult[M]:
    """Parse JSON and validate it against a Pydantic model.

    Args:
        raw: JSON text.
        schema: Pydantic model class (RootModel subclasses work for arrays).
        context: Label prepended to error messages.

    Returns:
        JsonParseResult holding the validated model instance. Empty input
        succeeds with a None value.
    """
    from pydantic import ValidationError

    parsed = parse_json_safe(raw, context=context)
    if not parsed.success:
        return JsonParseResult(success=False, value=None, error=parsed.error)
    if parsed.value is None:
        return JsonParseResult(success=True, value=None)

    try:
        return JsonParseResult(success=True, value=schema.model_validate(parsed.value))
    except ValidationError as e:
        errors = e.errors()
        first = errors[0] if errors else {}
        loc = ".".join(str(part) for part in first.get("loc", ()))
        error_msg = _prefixed(
            context,
            f"Schema validation failed ({len(errors)} error(s)): "
            f"{loc}: {first.get('msg', 'validation error')}",
        )
        logger.warning(error_msg)
        return JsonParseResult(success=False, value=None, error=error_msg)


def serialize_json_safe(data: Any, *, context: str = "") -> str | None:
    """Serialize data to a compact JSON string.

    Args:
        data: JSON-compatible data. None returns None.
        context: Label prepended to error messages.

    Returns:
        JSON string, or None if data is None.

    Raises:
        TypeError: If data is not JSON-serializable.
    """
    if data is None:
        return None
    try:
        return json.dumps(data, ensure_ascii=False)
    except TypeError as e:
        error_msg = _prefixed(context, f"Cannot serialize to JSON: {e}")
        logger.error(error_msg)
        raise TypeError(error_msg) from e


def load_json_file(path: Path, *, context: str = "") -> JsonParseResult[Any]:
    """Read and parse a JSON file.

    Args:
        path: File to read.
        context: Label prepended to error messages (defaults to the path).

    Returns:
        JsonParseResult; an unreadable file is reported as a failure.
    """
    label = context or str(path)
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        error_msg = _prefixed(label, f"Cannot read file: {e}")
        logger.warning(error_msg)
        return JsonParseResult(success=False, value=None, error=error_msg)
    return parse_json_safe(raw, context=label)
