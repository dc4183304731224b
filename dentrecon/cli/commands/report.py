import asyncio
from pathlib import Path

import typer

from dentrecon.application.use_cases.build_draft_report import BuildDraftReport
from dentrecon.application.use_cases.build_rebuttal_report import BuildRebuttalReport
from dentrecon.application.use_cases.compare_report_versions import CompareReportVersions
from dentrecon.cli.formatters.findings_formatter import format_diff, format_history
from dentrecon.cli.theme import theme
from dentrecon.cli.utils import (
    console,
    default_state_dir,
    echo_json,
    fail,
    limits_from,
    load_manifest,
)
from dentrecon.domain.entities.report_payload import ReportVersion
from dentrecon.domain.errors import ReconciliationError
from dentrecon.infrastructure.persistence.json_report_repo import JsonReportRepo


def _read_text(path: Path) -> str:
    if not path.exists():
        fail(f"File not found: {path}")
    return path.read_text(encoding="utf-8")


def _print_saved(record: ReportVersion, as_json: bool) -> None:
    if as_json:
        echo_json(record.model_dump(mode="json"))
        return
    findings = record.payload.get("findings") or []
    console.print(
        f"[{theme.SUCCESS}]Saved {record.case_id} v{record.version}[/] "
        f"[{theme.DIM}]({len(findings)} findings)[/]"
    )


def draft(
    ctx: typer.Context,
    case_id: str = typer.Argument(..., help="Case ID"),
    ai_file: Path = typer.Argument(..., help="Raw generated draft"),
    images: int | None = typer.Option(None, "--images", "-n", help="Number of images"),
    manifest: Path | None = typer.Option(None, "--manifest", "-m", help="Image manifest JSON"),
    state_dir: Path | None = typer.Option(None, "--state-dir", help="State directory"),
    as_json: bool = typer.Option(False, "--json", help="Emit the stored version as JSON"),
) -> None:
    """Store a generated draft as the next report version."""
    repo = JsonReportRepo(state_dir or default_state_dir())
    use_case = BuildDraftReport(repo, limits_from(ctx))
    text = _read_text(ai_file)
    manifest_refs = load_manifest(images, manifest)

    try:
        record = asyncio.run(use_case.execute(case_id, text, manifest_refs))
    except ReconciliationError as e:
        fail(str(e))
    _print_saved(record, as_json)


def rebuttal(
    ctx: typer.Context,
    case_id: str = typer.Argument(..., help="Case ID"),
    ai_file: Path = typer.Argument(..., help="Raw generated rebuttal"),
    version: int | None = typer.Option(None, "--version", help="Base version (default: latest)"),
    critique: str | None = typer.Option(None, "--critique", "-c", help="Clinician feedback"),
    images: int | None = typer.Option(None, "--images", "-n", help="Number of images"),
    manifest: Path | None = typer.Option(None, "--manifest", "-m", help="Image manifest JSON"),
    state_dir: Path | None = typer.Option(None, "--state-dir", help="State directory"),
    as_json: bool = typer.Option(False, "--json", help="Emit the stored version as JSON"),
) -> None:
    """Apply a generated rebuttal to a stored version and store the result."""
    repo = JsonReportRepo(state_dir or default_state_dir())
    use_case = BuildRebuttalReport(repo, limits_from(ctx))
    text = _read_text(ai_file)
    # without explicit images the base version's manifest is reused
    manifest_refs = load_manifest(images, manifest) if images or manifest else []

    try:
        record = asyncio.run(
            use_case.execute(
                case_id, text, manifest_refs, target_version=version, critique=critique
            )
        )
    except ReconciliationError as e:
        fail(str(e))
    _print_saved(record, as_json)


def history(
    case_id: str = typer.Argument(..., help="Case ID"),
    state_dir: Path | None = typer.Option(None, "--state-dir", help="State directory"),
) -> None:
    """List the stored versions of a case."""
    asyncio.run(_history(case_id, state_dir))


async def _history(case_id: str, state_dir: Path | None) -> None:
    repo = JsonReportRepo(state_dir or default_state_dir())
    try:
        numbers = await repo.list_versions(case_id)
    except ReconciliationError as e:
        fail(str(e))

    versions: list[ReportVersion] = []
    for number in numbers:
        record = await repo.load(case_id, number)
        if record:
            versions.append(record)

    format_history(console, versions, case_id)


def compare(
    case_id: str = typer.Argument(..., help="Case ID"),
    before: int | None = typer.Option(None, "--before", help="Earlier version"),
    after: int | None = typer.Option(None, "--after", help="Later version (default: latest)"),
    state_dir: Path | None = typer.Option(None, "--state-dir", help="State directory"),
    as_json: bool = typer.Option(False, "--json", help="Emit the diff as JSON"),
) -> None:
    """Diff the findings of two stored versions."""
    use_case = CompareReportVersions(JsonReportRepo(state_dir or default_state_dir()))
    try:
        result = asyncio.run(use_case.execute(case_id, before, after))
    except ReconciliationError as e:
        fail(str(e))

    if as_json:
        echo_json(result.to_wire())
        return

    format_diff(console, result)
