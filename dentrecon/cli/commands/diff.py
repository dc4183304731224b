from pathlib import Path

import typer

from dentrecon.cli.formatters.findings_formatter import format_diff
from dentrecon.cli.utils import console, echo_json, read_document
from dentrecon.domain.services.finding_canonicalizer import extract_finding_records
from dentrecon.domain.services.version_differ import VersionDiffEngine


def diff_findings(
    before: Path = typer.Argument(..., help="Earlier findings or report JSON"),
    after: Path = typer.Argument(..., help="Later findings or report JSON"),
    as_json: bool = typer.Option(False, "--json", help="Emit the diff as JSON"),
) -> None:
    """Show line-level changes between two finding sets."""
    result = VersionDiffEngine().diff_rows(
        extract_finding_records(read_document(before, [])),
        extract_finding_records(read_document(after, [])),
    )

    if as_json:
        echo_json(result.to_wire())
        return

    format_diff(console, result)
