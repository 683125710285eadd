"""External subtitle discovery command."""

from __future__ import annotations

from pathlib import Path

import click

from mediacompat.cli.exit_codes import ExitCode
from mediacompat.cli.output import echo_json, error_exit
from mediacompat.matching.subtitles import (
    build_external_subtitle_tracks,
    find_subtitles,
)


@click.command("subtitles")
@click.argument("video_path", type=click.Path(path_type=Path, dir_okay=False))
@click.option("--json", "json_output", is_flag=True, help="Output as JSON.")
def subtitles_command(video_path: Path, json_output: bool) -> None:
    """List external subtitle files belonging to a video."""
    if not video_path.parent.is_dir():
        error_exit(
            f"Directory not found: {video_path.parent}",
            ExitCode.TARGET_NOT_FOUND,
            json_output,
        )

    tracks = build_external_subtitle_tracks(find_subtitles(video_path))
    if json_output:
        echo_json(
            [
                {"path": t.file_path, "format": t.format, "language": t.language}
                for t in tracks
            ]
        )
        return

    if not tracks:
        click.echo(f"No external subtitles for {video_path.name}")
        return
    for track in tracks:
        click.echo(f"{track.file_path}  [{track.format}, {track.language}]")
