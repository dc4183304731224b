"""CLI theme configuration - all colors in one place.

Colors use Rich markup syntax (e.g., "green", "bold red", "dim italic").
"""

from dentrecon.domain.value_objects.severity import Severity


class Theme:
    """Terminal color theme for the dentrecon CLI."""

    # -------------------------------------------------------------------------
    # Status colors
    # -------------------------------------------------------------------------
    SUCCESS = "green"
    ERROR = "red"
    ERROR_BOLD = "bold red"
    WARNING = "yellow"
    INFO = "cyan"

    # -------------------------------------------------------------------------
    # Text styles
    # -------------------------------------------------------------------------
    HEADER = "bold"
    DIM = "grey62"

    # -------------------------------------------------------------------------
    # Table columns
    # -------------------------------------------------------------------------
    TABLE_ID = "cyan"
    TABLE_LABEL = "grey62"
    TABLE_VALUE = "bold"

    # -------------------------------------------------------------------------
    # Diff display
    # -------------------------------------------------------------------------
    DIFF_ADD = "green"
    DIFF_REMOVE = "red"
    DIFF_MODIFY = "yellow"

    # -------------------------------------------------------------------------
    # Severity
    # -------------------------------------------------------------------------
    SEVERITY_LOW = "green"
    SEVERITY_MODERATE = "yellow"
    SEVERITY_HIGH = "bold red"

    def severity(self, severity: Severity) -> str:
        match severity:
            case Severity.HIGH:
                return self.SEVERITY_HIGH
            case Severity.MODERATE:
                return self.SEVERITY_MODERATE
            case _:
                return self.SEVERITY_LOW


# Default theme instance - import this in other modules
theme = Theme()
