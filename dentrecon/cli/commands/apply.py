from pathlib import Path
from typing import Any

import typer

from dentrecon.cli.formatters.findings_formatter import format_findings
from dentrecon.cli.theme import theme
from dentrecon.cli.utils import console, echo_json, fail, limits_from, load_manifest, read_document
from dentrecon.domain.errors import ReconciliationError
from dentrecon.domain.services.change_applicator import FindingChangeApplicator, parse_changes
from dentrecon.domain.services.finding_canonicalizer import (
    FindingCanonicalizer,
    extract_finding_records,
)
from dentrecon.domain.services.finding_merger import FindingMerger


def apply_changes(
    ctx: typer.Context,
    base: Path = typer.Argument(..., help="Base findings or report JSON"),
    changes: Path = typer.Argument(..., help="Finding changes JSON (list or rebuttal)"),
    images: int | None = typer.Option(None, "--images", "-n", help="Number of images"),
    manifest: Path | None = typer.Option(None, "--manifest", "-m", help="Image manifest JSON"),
    as_json: bool = typer.Option(False, "--json", help="Emit canonical JSON"),
) -> None:
    """Apply add/modify/remove finding changes to a base finding set."""
    limits = limits_from(ctx)
    records = extract_finding_records(read_document(base, []))
    change_list = parse_changes(change_records(read_document(changes, [])))
    manifest_refs = load_manifest(images, manifest)

    try:
        canonicalizer = FindingCanonicalizer(limits)
        merger = FindingMerger(limits)
        base_findings = merger.merge(canonicalizer.canonicalize_all(records, manifest_refs))
        result = FindingChangeApplicator(limits, canonicalizer, merger).apply(
            base_findings, change_list, manifest_refs
        )
    except ReconciliationError as e:
        fail(str(e))

    if as_json:
        echo_json([f.to_wire() for f in result])
        return

    console.print(f"[{theme.DIM}]Applied {len(change_list)} changes[/]")
    format_findings(console, result)


def change_records(document: Any) -> Any:
    """The change list of a document: bare, under ``finding_changes`` or a rebuttal."""
    if isinstance(document, dict):
        for container in (document, document.get("rebuttal"), document.get("payload")):
            if isinstance(container, dict):
                if isinstance(container.get("finding_changes"), list):
                    return container["finding_changes"]
                nested = container.get("rebuttal")
                if isinstance(nested, dict) and isinstance(nested.get("finding_changes"), list):
                    return nested["finding_changes"]
    return document
