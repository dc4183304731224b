"""Finding reconciliation and overlay normalization for dental screening reports."""

__version__ = "0.1.0"
