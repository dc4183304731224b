import typer

from dentrecon.cli.formatters.findings_formatter import format_tooth
from dentrecon.cli.utils import console, echo_json, fail
from dentrecon.domain.services.tooth_numbering import ToothNumberingConverter
from dentrecon.domain.value_objects.tooth_info import ToothRange


def show_tooth(
    value: str = typer.Argument(..., help="Tooth in FDI, universal, Palmer or dotted notation"),
    as_json: bool = typer.Option(False, "--json", help="Emit tooth metadata as JSON"),
) -> None:
    """Resolve a tooth identity to FDI and show its metadata."""
    converter = ToothNumberingConverter()
    fdi = converter.to_fdi(value)
    tooth = converter.describe(fdi) if fdi is not None else None
    if tooth is None:
        fail(f"Cannot resolve tooth: {value}")

    if as_json:
        echo_json({**tooth.model_dump(mode="json"), "name": tooth.name})
        return

    format_tooth(console, tooth)


def list_teeth(
    dentition: ToothRange = typer.Option(ToothRange.ALL, "--range", "-r", help="Dentition"),
) -> None:
    """List every tooth of a dentition with its notations."""
    converter = ToothNumberingConverter()
    for tooth in converter.list_teeth(dentition):
        console.print(f"{tooth.fdi:>3}  {converter.format_short(tooth.fdi):<12} {tooth.name}")
