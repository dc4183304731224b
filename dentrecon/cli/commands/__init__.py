from dentrecon.cli.commands import apply, canonicalize, diff, report, tooth

__all__ = ["apply", "canonicalize", "diff", "report", "tooth"]
