"""Shared CLI output helpers."""

from __future__ import annotations

import json
import sys
from typing import Any, NoReturn

import click

from mediacompat.cli.exit_codes import ExitCode


def error_exit(message: str, code: ExitCode, json_output: bool = False) -> NoReturn:
    """Print an error in the requested format and exit with code."""
    if json_output:
        click.echo(
            json.dumps(
                {"status": "failed", "error": {"code": code.name, "message": message}}
            ),
            err=True,
        )
    else:
        click.echo(f"Error: {message}", err=True)
    sys.exit(int(code))


def echo_json(data: Any) -> None:
    click.echo(json.dumps(data, indent=2, ensure_ascii=False))
