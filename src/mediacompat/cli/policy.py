"""Rating policy commands."""

from __future__ import annotations

from pathlib import Path

import click
import yaml

from mediacompat.cli.exit_codes import ExitCode
from mediacompat.cli.output import echo_json, error_exit
from mediacompat.rating.exceptions import PolicyValidationError
from mediacompat.rating.loader import load_policy
from mediacompat.rating.types import RatingPolicy, default_policy


def policy_to_dict(policy: RatingPolicy) -> dict:
    """Render a policy as the document load_policy() accepts."""
    support = policy.support
    weights = policy.weights
    return {
        "name": policy.name,
        "properties": {
            "video_codecs": dict(support.video_codecs),
            "audio_codecs": dict(support.audio_codecs),
            "containers": dict(support.containers),
            "subtitle_formats": dict(support.subtitle_formats),
            "bit_depths": dict(support.bit_depths),
        },
        "weights": {
            "unsupported_video_codec": weights.unsupported_video_codec,
            "unsupported_container": weights.unsupported_container,
            "unsupported_audio_codec": weights.unsupported_audio_codec,
            "unsupported_subtitle_format": weights.unsupported_subtitle_format,
            "unsupported_bit_depth": weights.unsupported_bit_depth,
            "incorrect_codec_tag": weights.incorrect_codec_tag,
            "hdr": weights.hdr,
            "surround_sound": weights.surround_sound,
            "high_bitrate": weights.high_bitrate,
            "fast_start": weights.fast_start,
            "high_bitrate_threshold_mbps": weights.high_bitrate_threshold_mbps,
        },
        "thresholds": {
            "optimal": policy.thresholds.optimal,
            "good": policy.thresholds.good,
        },
        "correct_duration_units": policy.correct_duration_units,
    }


def resolve_policy(ctx: click.Context, path: Path | None, json_output: bool):
    """Load the policy from path, the configured file, or the defaults."""
    if path is None:
        config = ctx.obj.get("config") if ctx.obj else None
        path = config.policy_path if config is not None else None
    if path is None:
        return default_policy()
    try:
        return load_policy(path)
    except PolicyValidationError as e:
        error_exit(str(e), ExitCode.POLICY_VALIDATION_ERROR, json_output)


@click.group("policy")
def policy_group() -> None:
    """Inspect and validate rating policies."""


@policy_group.command("validate")
@click.argument("policy_file", type=click.Path(path_type=Path, dir_okay=False))
@click.option("--json", "json_output", is_flag=True, help="Output as JSON.")
def validate_command(policy_file: Path, json_output: bool) -> None:
    """Validate a rating policy file."""
    try:
        policy = load_policy(policy_file)
    except PolicyValidationError as e:
        error_exit(str(e), ExitCode.POLICY_VALIDATION_ERROR, json_output)

    if json_output:
        echo_json({"status": "valid", "file": str(policy_file), "name": policy.name})
    else:
        click.echo(f"Policy {policy.name!r} is valid: {policy_file}")


@policy_group.command("show")
@click.argument(
    "policy_file",
    required=False,
    type=click.Path(path_type=Path, dir_okay=False),
)
@click.option("--json", "json_output", is_flag=True, help="Output as JSON.")
@click.pass_context
def show_command(
    ctx: click.Context, policy_file: Path | None, json_output: bool
) -> None:
    """Show the effective rating policy (built-in when none is configured)."""
    policy = resolve_policy(ctx, policy_file, json_output)
    document = policy_to_dict(policy)
    if json_output:
        echo_json(document)
    else:
        click.echo(yaml.safe_dump(document, sort_keys=False, allow_unicode=True))
