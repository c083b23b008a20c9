"""Writing-process metrics and dual-axis (Linear / Free-Wheeling) scoring from keystroke logs."""

__version__ = "0.1.0"
