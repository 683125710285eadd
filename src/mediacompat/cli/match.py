"""Playback history reconciliation command."""

from __future__ import annotations

from collections import defaultdict
from pathlib import Path

import click

from mediacompat.cli.exit_codes import ExitCode
from mediacompat.cli.inputs import (
    InputError,
    LibraryInput,
    PlaybackEventList,
    load_document,
)
from mediacompat.cli.output import echo_json, error_exit
from mediacompat.domain.models import PlaybackCounters, PlaybackEvent
from mediacompat.jobs.batch import resolve_worker_count
from mediacompat.jobs.rematch import match_events
from mediacompat.rating.legacy import count_play_methods, legacy_bucket

_INPUT_PATH = click.Path(path_type=Path, dir_okay=False)


@click.command("match")
@click.argument("events_json", type=_INPUT_PATH)
@click.argument("library_json", type=_INPUT_PATH)
@click.option(
    "--workers",
    type=click.IntRange(min=1),
    default=None,
    help="Concurrent workers (default: from config).",
)
@click.option("--json", "json_output", is_flag=True, help="Output as JSON.")
@click.pass_context
def match_command(
    ctx: click.Context,
    events_json: Path,
    library_json: Path,
    workers: int | None,
    json_output: bool,
) -> None:
    """Match playback events to library entries and bucket each entry."""
    for path in (events_json, library_json):
        if not path.exists():
            error_exit(
                f"File not found: {path}", ExitCode.TARGET_NOT_FOUND, json_output
            )
    try:
        event_list = load_document(events_json, PlaybackEventList)
        library = load_document(library_json, LibraryInput)
    except InputError as e:
        error_exit(str(e), ExitCode.PARSE_ERROR, json_output)

    events = [event.to_domain() for event in event_list.root]
    config = ctx.obj["config"]
    summary = match_events(
        events,
        [entry.to_domain() for entry in library.entries],
        [root.to_domain() for root in library.roots],
        max_workers=resolve_worker_count(workers, config.batch.match_workers),
        case_insensitive=config.case_insensitive_paths,
    )

    matched: dict[int, list[PlaybackEvent]] = defaultdict(list)
    unmatched = 0
    for result in summary.results:
        if result.cancelled:
            continue
        if result.success and result.value.is_matched:
            matched[result.value.entry.id].append(result.item)
        else:
            unmatched += 1
    counters: dict[int, PlaybackCounters] = {
        entry_id: count_play_methods(entry_events)
        for entry_id, entry_events in matched.items()
    }

    buckets = {
        entry_id: legacy_bucket(c.direct_play, c.remux, config.legacy)
        for entry_id, c in sorted(counters.items())
    }

    if json_output:
        echo_json(
            {
                "events": [
                    {
                        "title": r.item.title,
                        **(
                            r.value.to_dict()
                            if r.success
                            else {"error": r.error_message or "cancelled"}
                        ),
                    }
                    for r in summary.results
                ],
                "entries": [
                    {
                        "entry_id": entry_id,
                        "direct_play": counters[entry_id].direct_play,
                        "remux": counters[entry_id].remux,
                        "transcode": counters[entry_id].transcode,
                        "classification": bucket.value,
                    }
                    for entry_id, bucket in buckets.items()
                ],
                "unmatched": unmatched,
                "cancelled": summary.cancelled,
            }
        )
    else:
        for entry_id, bucket in buckets.items():
            c = counters[entry_id]
            click.echo(
                f"{bucket.symbol} entry {entry_id}: {bucket.value} "
                f"(direct {c.direct_play}, remux {c.remux}, "
                f"transcode {c.transcode})"
            )
        matched_count = len(events) - unmatched - summary.cancelled
        click.echo(f"Matched {matched_count} of {len(events)} event(s)")
        if summary.cancelled:
            click.echo(f"Cancelled {summary.cancelled} event(s)")

    if summary.cancelled:
        ctx.exit(int(ExitCode.INTERRUPTED))
