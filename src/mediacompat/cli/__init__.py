"""Command-line interface for mediacompat."""

from __future__ import annotations

import logging
from pathlib import Path

import click

from mediacompat.cli.exit_codes import ExitCode
from mediacompat.cli.output import error_exit
from mediacompat.config import ConfigError, build_logging_config, get_config
from mediacompat.logging import configure_logging

logger = logging.getLogger(__name__)


@click.group()
@click.version_option(package_name="mediacompat")
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="Config file (default: ~/.mediacompat/config.toml).",
)
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"], case_sensitive=False),
    default=None,
    help="Override log level (default: info).",
)
@click.option(
    "--log-file",
    type=click.Path(path_type=Path),
    default=None,
    help="Override log file path.",
)
@click.option(
    "--log-json",
    is_flag=True,
    default=False,
    help="Use JSON log format.",
)
@click.pass_context
def main(
    ctx: click.Context,
    config_path: Path | None,
    log_level: str | None,
    log_file: Path | None,
    log_json: bool,
) -> None:
    """Media compatibility scoring and playback reconciliation."""
    ctx.ensure_object(dict)
    if "config" not in ctx.obj:
        try:
            ctx.obj["config"] = get_config(config_path, strict=config_path is not None)
        except ConfigError as e:
            error_exit(str(e), ExitCode.CONFIG_ERROR)

    config = ctx.obj["config"]
    try:
        logging_config = build_logging_config(
            config.logging,
            level=log_level,
            file=log_file,
            format="json" if log_json else None,
        )
    except ValueError as e:
        error_exit(str(e), ExitCode.CONFIG_ERROR)
    configure_logging(logging_config)
    logger.debug(
        "Configuration: policy=%s, log_level=%s",
        config.policy_path or "built-in",
        logging_config.level,
    )


def _register_commands() -> None:
    from mediacompat.cli.bucket import bucket_command
    from mediacompat.cli.match import match_command
    from mediacompat.cli.policy import policy_group
    from mediacompat.cli.score import rescore_command, score_command
    from mediacompat.cli.subtitles import subtitles_command

    main.add_command(bucket_command)
    main.add_command(match_command)
    main.add_command(policy_group)
    main.add_command(rescore_command)
    main.add_command(score_command)
    main.add_command(subtitles_command)


_register_commands()
