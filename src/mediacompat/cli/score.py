"""Scoring commands."""

from __future__ import annotations

from pathlib import Path

import click

from mediacompat.cli.exit_codes import ExitCode
from mediacompat.cli.inputs import InputError, RecordInput, RecordList, load_document
from mediacompat.cli.output import echo_json, error_exit
from mediacompat.cli.policy import resolve_policy
from mediacompat.jobs.batch import resolve_worker_count
from mediacompat.jobs.rescore import rescore_records
from mediacompat.matching.subtitles import enrich_record
from mediacompat.rating.report import generate_report
from mediacompat.rating.scorer import score
from mediacompat.rating.types import RatingPolicy

_INPUT_PATH = click.Path(path_type=Path, dir_okay=False)


def _load_records(path: Path, json_output: bool) -> list[RecordInput]:
    if not path.exists():
        error_exit(f"File not found: {path}", ExitCode.TARGET_NOT_FOUND, json_output)
    try:
        document = load_document(path, RecordList)
    except InputError as e:
        error_exit(str(e), ExitCode.PARSE_ERROR, json_output)
    return document.root


@click.command("score")
@click.argument("record_json", type=_INPUT_PATH)
@click.option(
    "--policy",
    "policy_file",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="Rating policy YAML (default: configured or built-in).",
)
@click.option(
    "--find-subtitles",
    is_flag=True,
    help="Add external subtitle files found next to the video.",
)
@click.option("--report", "text_report", is_flag=True, help="Print a full report.")
@click.option("--json", "json_output", is_flag=True, help="Output as JSON.")
@click.pass_context
def score_command(
    ctx: click.Context,
    record_json: Path,
    policy_file: Path | None,
    find_subtitles: bool,
    text_report: bool,
    json_output: bool,
) -> None:
    """Score one media metadata record (a JSON object) for compatibility."""
    if not record_json.exists():
        error_exit(
            f"File not found: {record_json}", ExitCode.TARGET_NOT_FOUND, json_output
        )
    try:
        record = load_document(record_json, RecordInput).to_domain()
    except InputError as e:
        error_exit(str(e), ExitCode.PARSE_ERROR, json_output)

    policy: RatingPolicy = resolve_policy(ctx, policy_file, json_output)
    if find_subtitles:
        record = enrich_record(record)
    outcome = score(record, policy)

    if json_output:
        echo_json({"file_path": record.file_path, **outcome.to_dict()})
    elif text_report:
        click.echo(generate_report(record, outcome), nl=False)
    else:
        classification = outcome.classification
        click.echo(
            f"{classification.symbol} {classification.value} "
            f"({outcome.score}/100) {record.file_name}"
        )
        for issue in outcome.issues:
            click.echo(f"  - {issue}")


@click.command("rescore")
@click.argument("records_json", type=_INPUT_PATH)
@click.option(
    "--policy",
    "policy_file",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="Rating policy YAML (default: configured or built-in).",
)
@click.option(
    "--workers",
    type=click.IntRange(min=1),
    default=None,
    help="Concurrent workers (default: from config).",
)
@click.option("--json", "json_output", is_flag=True, help="Output as JSON.")
@click.pass_context
def rescore_command(
    ctx: click.Context,
    records_json: Path,
    policy_file: Path | None,
    workers: int | None,
    json_output: bool,
) -> None:
    """Score every record in a JSON array with one policy snapshot."""
    records = [item.to_domain() for item in _load_records(records_json, json_output)]
    policy: RatingPolicy = resolve_policy(ctx, policy_file, json_output)
    config = ctx.obj["config"]
    effective = resolve_worker_count(workers, config.batch.rescore_workers)

    summary = rescore_records(records, policy, max_workers=effective)

    if json_output:
        echo_json(
            {
                "policy": policy.name,
                "succeeded": summary.succeeded,
                "failed": summary.failed,
                "cancelled": summary.cancelled,
                "results": [
                    {
                        "file_path": r.item.file_path,
                        **(
                            r.value.to_dict()
                            if r.success
                            else {"error": r.error_message or "cancelled"}
                        ),
                    }
                    for r in summary.results
                ],
            }
        )
    else:
        for r in summary.results:
            if r.success:
                click.echo(
                    f"{r.value.classification.symbol} {r.value.score:3d} "
                    f"{r.item.file_path}"
                )
            else:
                click.echo(f"! {r.error_message or 'cancelled'} {r.item.file_path}")
        click.echo(
            f"Scored {summary.succeeded}, failed {summary.failed}, "
            f"cancelled {summary.cancelled}"
        )

    if summary.cancelled:
        ctx.exit(int(ExitCode.INTERRUPTED))
    if summary.failed:
        ctx.exit(int(ExitCode.GENERAL_ERROR))
