import sys
from pathlib import Path

import typer
from loguru import logger

from dentrecon.cli.commands import apply, canonicalize, diff, report, tooth
from dentrecon.domain.value_objects.engine_limits import LimitPreset


def setup_logging(verbose: bool = False, log_file: Path | None = None) -> None:
    """Configure loguru logging."""
    logger.remove()

    file_path = log_file or Path("dentrecon.log")
    logger.add(
        file_path,
        format="{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function}:{line} - {message}",
        level="DEBUG",
        rotation="10 MB",
        encoding="utf-8",
    )

    if verbose:
        logger.add(
            sys.stderr,
            format="{time:HH:mm:ss} | {level: <8} | {message}",
            level="DEBUG",
        )


app = typer.Typer(
    name="dentrecon",
    help="dentrecon - dental finding reconciliation for generated reports",
    no_args_is_help=True,
)

# Register commands
app.command(name="canonicalize")(canonicalize.canonicalize_findings)
app.command(name="diff")(diff.diff_findings)
app.command(name="apply")(apply.apply_changes)
app.command(name="tooth")(tooth.show_tooth)
app.command(name="teeth")(tooth.list_teeth)

# Report subcommand group
report_app = typer.Typer(help="Versioned report commands")
report_app.command(name="draft")(report.draft)
report_app.command(name="rebuttal")(report.rebuttal)
report_app.command(name="history")(report.history)
report_app.command(name="compare")(report.compare)
app.add_typer(report_app, name="report")


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output", is_eager=True),
    preset: LimitPreset = typer.Option(
        LimitPreset.DEFAULT, "--preset", help="Engine limit preset"
    ),
    log_file: Path | None = typer.Option(None, "--log-file", help="Log file path"),
) -> None:
    """dentrecon - dental finding reconciliation for generated reports."""
    setup_logging(verbose=verbose, log_file=log_file)
    ctx.obj = {"preset": preset}


if __name__ == "__main__":
    app()
