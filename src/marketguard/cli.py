"""Marketguard CLI entry point."""

from pathlib import Path
from typing import Annotated

import typer

from marketguard import __version__, cli_logger, exit_codes
from marketguard.config import FETCH_TIMEOUT_ENV_VAR, get_fetch_timeout
from marketguard.errors import IndexDocumentError, handle_cli_error
from marketguard.integrity import HttpArtifactSource
from marketguard.validator import load_index_document, validate_marketplace_change

app = typer.Typer(
    name="marketguard",
    help="Validate that a proposed plugin marketplace index is a safe, append-only update.",
    no_args_is_help=True,
)

USAGE = "Usage: marketguard validate --base <path> --pr <path> [--out <path>]"

OK_MESSAGE = "validate-marketplace-pr: ok"


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        cli_logger.info(f"marketguard {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show marketguard version and exit.",
    ),
) -> None:
    """Validate that a proposed plugin marketplace index is a safe, append-only update."""


@app.command()
def validate(
    base: Annotated[
        Path | None,
        typer.Option("--base", help="Path to the current (base) index.json."),
    ] = None,
    pr: Annotated[
        Path | None,
        typer.Option("--pr", help="Path to the proposed (pr) index.json."),
    ] = None,
    out: Annotated[
        Path | None,
        typer.Option("--out", help="Write the {ok, errors} result as JSON to this path."),
    ] = None,
    timeout: Annotated[
        float | None,
        typer.Option(
            "--timeout",
            help=f"Seconds to wait for each artifact download. Overrides {FETCH_TIMEOUT_ENV_VAR}.",
        ),
    ] = None,
) -> None:
    """Validate a proposed index against the current one.

    Checks both documents' shape, rejects changes to published versions,
    removed plugins and a renamed index, and downloads every new version's
    artifact to verify its sha256.
    """
    if base is None or pr is None:
        cli_logger.plain_error(USAGE)
        raise typer.Exit(exit_codes.INVALID_ARGS)

    try:
        fetch_timeout = get_fetch_timeout(timeout)
        base_index = load_index_document(base)
        pr_index = load_index_document(pr)
    except (OSError, IndexDocumentError, ValueError) as e:
        raise typer.Exit(handle_cli_error(e)) from e

    result = validate_marketplace_change(
        base_index, pr_index, HttpArtifactSource(timeout=fetch_timeout)
    )
    report = result.to_report()

    if out is not None:
        try:
            report.write(out)
        except OSError as e:
            raise typer.Exit(handle_cli_error(e)) from e

    if not report.ok:
        for message in report.errors:
            cli_logger.plain_error(message)
        raise typer.Exit(exit_codes.VALIDATION_FAILED)

    cli_logger.success(OK_MESSAGE)
    raise typer.Exit(exit_codes.SUCCESS)
