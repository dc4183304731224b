from dentrecon.cli.formatters.findings_formatter import (
    format_diff,
    format_findings,
    format_history,
    format_tooth,
)

__all__ = ["format_diff", "format_findings", "format_history", "format_tooth"]
