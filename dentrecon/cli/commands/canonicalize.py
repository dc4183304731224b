from pathlib import Path

import typer

from dentrecon.cli.formatters.findings_formatter import format_findings
from dentrecon.cli.theme import theme
from dentrecon.cli.utils import console, echo_json, fail, limits_from, load_manifest, read_document
from dentrecon.domain.errors import ReconciliationError
from dentrecon.domain.services.finding_canonicalizer import (
    FindingCanonicalizer,
    extract_finding_records,
)
from dentrecon.domain.services.finding_merger import FindingMerger
from dentrecon.domain.services.overlay_geometry import OverlayGeometry


def canonicalize_findings(
    ctx: typer.Context,
    file: Path = typer.Argument(..., help="Generated findings (JSON, possibly wrapped in text)"),
    images: int | None = typer.Option(None, "--images", "-n", help="Number of images"),
    manifest: Path | None = typer.Option(None, "--manifest", "-m", help="Image manifest JSON"),
    as_json: bool = typer.Option(False, "--json", help="Emit canonical JSON"),
    bounds: bool = typer.Option(False, "--bounds", help="Include each finding's overlay region"),
) -> None:
    """Canonicalize and merge a list of loosely structured findings."""
    limits = limits_from(ctx)
    records = extract_finding_records(read_document(file, []))
    manifest_refs = load_manifest(images, manifest)

    try:
        canonicalizer = FindingCanonicalizer(limits)
        findings = FindingMerger(limits).merge(
            canonicalizer.canonicalize_all(records, manifest_refs)
        )
    except ReconciliationError as e:
        fail(str(e))

    if as_json:
        geometry = OverlayGeometry()
        rows = [f.to_wire() for f in findings]
        if bounds:
            for row, finding in zip(rows, findings, strict=True):
                row["bounds"] = list(geometry.bounds(finding.overlays))
        echo_json(rows)
        return

    format_findings(console, findings, show_bounds=bounds)
    if len(findings) < len(records):
        console.print(f"[{theme.DIM}]{len(records)} records in, {len(findings)} findings out[/]")
