from collections.abc import Sequence

from rich.console import Console
from rich.table import Table

from dentrecon.cli.theme import theme
from dentrecon.domain.entities.diff_result import DiffResult
from dentrecon.domain.entities.finding import Finding
from dentrecon.domain.entities.report_payload import ReportVersion
from dentrecon.domain.services.overlay_geometry import OverlayGeometry
from dentrecon.domain.services.tooth_numbering import ToothNumberingConverter
from dentrecon.domain.value_objects.tooth_info import ToothInfo

_converter = ToothNumberingConverter()
_geometry = OverlayGeometry()


def format_findings(
    console: Console,
    findings: Sequence[Finding],
    title: str = "Findings",
    show_bounds: bool = False,
) -> None:
    if not findings:
        console.print(f"[{theme.DIM}]No findings[/]")
        return

    table = Table(title=title)
    table.add_column("Tooth", style=theme.TABLE_ID)
    table.add_column("Notation", style=theme.TABLE_LABEL)
    table.add_column("Severity")
    table.add_column("Confidence", justify="right")
    table.add_column("Image")
    table.add_column("Overlays", justify="right")
    if show_bounds:
        table.add_column("Region")
    table.add_column("Notes")

    for finding in findings:
        style = theme.severity(finding.severity)
        cells = [
            str(finding.tooth_fdi),
            _converter.format_short(finding.tooth_fdi),
            f"[{style}]{finding.severity.value}[/]",
            f"{finding.confidence:.2f}",
            f"{finding.image_index}: {finding.image_id}",
            str(len(finding.overlays)),
        ]
        if show_bounds:
            cells.append(_region(finding))
        cells.append("; ".join(finding.notes) or "-")
        table.add_row(*cells)

    console.print(table)


def _region(finding: Finding) -> str:
    if not finding.overlays:
        return "-"
    x, y, w, h = _geometry.bounds(finding.overlays)
    return f"{x:.2f},{y:.2f} {w:.2f}x{h:.2f}"


def format_diff(console: Console, diff: DiffResult) -> None:
    if diff.is_empty:
        console.print(f"[{theme.DIM}]No differences[/]")
        return

    for line in diff.added:
        console.print(f"[{theme.DIFF_ADD}]+ {line.tooth}[/] {line.note} ({line.severity.value})")
    for line in diff.removed:
        console.print(
            f"[{theme.DIFF_REMOVE}]- {line.tooth}[/] {line.note} ({line.severity.value})"
        )
    for change in diff.modified:
        console.print(
            f"[{theme.DIFF_MODIFY}]~ {change.tooth}[/] {change.after.note} "
            f"({change.before.severity.value} -> {change.after.severity.value})"
        )

    console.print(
        f"\n[{theme.HEADER}]{len(diff.added)} added, {len(diff.removed)} removed, "
        f"{len(diff.modified)} modified[/]"
    )


def format_tooth(console: Console, tooth: ToothInfo) -> None:
    table = Table(title=f"Tooth {tooth.fdi}")
    table.add_column("Property", style=theme.INFO)
    table.add_column("Value")

    table.add_row("FDI", str(tooth.fdi))
    table.add_row("Universal", str(tooth.universal))
    table.add_row("Palmer", tooth.palmer)
    table.add_row("Name", tooth.name)
    table.add_row("Dentition", "primary" if tooth.is_primary else "permanent")

    console.print(table)


def format_history(console: Console, versions: Sequence[ReportVersion], case_id: str) -> None:
    if not versions:
        console.print(f"[{theme.DIM}]No reports for case {case_id}[/]")
        return

    table = Table(title=f"Reports for {case_id}")
    table.add_column("Version", style=theme.TABLE_ID, justify="right")
    table.add_column("Parent", style=theme.TABLE_LABEL, justify="right")
    table.add_column("Source")
    table.add_column("Findings", justify="right")
    table.add_column("Confidence", justify="right")
    table.add_column("Created", style=theme.DIM)

    for record in versions:
        meta = record.payload.get("_meta") or {}
        confidence = record.payload.get("confidence_overall")
        table.add_row(
            str(record.version),
            str(record.parent_version) if record.parent_version else "-",
            str(meta.get("type") or meta.get("source") or "-"),
            str(len(record.payload.get("findings") or [])),
            f"{confidence:.2f}" if isinstance(confidence, int | float) else "-",
            record.created_at.strftime("%Y-%m-%d %H:%M"),
        )

    console.print(table)
