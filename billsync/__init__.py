"""Bill of materials generation and repository tree sync."""

__version__ = "0.3.0"
