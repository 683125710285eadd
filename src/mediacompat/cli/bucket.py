"""Legacy playback-count bucket command."""

from __future__ import annotations

from dataclasses import replace

import click

from mediacompat.cli.exit_codes import ExitCode
from mediacompat.cli.output import echo_json, error_exit
from mediacompat.rating.exceptions import PolicyValidationError
from mediacompat.rating.legacy import legacy_bucket


@click.command("bucket")
@click.argument("direct_play", type=click.IntRange(min=0))
@click.argument("remux", type=click.IntRange(min=0))
@click.option("--optimal", type=int, default=None, help="Direct plays for Optimal.")
@click.option("--good-direct", type=int, default=None, help="Direct plays for Good.")
@click.option(
    "--good-combined",
    type=int,
    default=None,
    help="Direct plays plus remuxes for Good.",
)
@click.option("--json", "json_output", is_flag=True, help="Output as JSON.")
@click.pass_context
def bucket_command(
    ctx: click.Context,
    direct_play: int,
    remux: int,
    optimal: int | None,
    good_direct: int | None,
    good_combined: int | None,
    json_output: bool,
) -> None:
    """Classify a title from its direct-play and remux counts."""
    overrides = {
        "optimal": optimal,
        "good_direct": good_direct,
        "good_combined": good_combined,
    }
    try:
        thresholds = replace(
            ctx.obj["config"].legacy,
            **{k: v for k, v in overrides.items() if v is not None},
        )
    except PolicyValidationError as e:
        error_exit(str(e), ExitCode.POLICY_VALIDATION_ERROR, json_output)

    classification = legacy_bucket(direct_play, remux, thresholds)
    if json_output:
        echo_json(
            {
                "direct_play": direct_play,
                "remux": remux,
                "classification": classification.value,
            }
        )
    else:
        click.echo(f"{classification.symbol} {classification.value}")
