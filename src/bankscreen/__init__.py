"""Bank-stock screening: filter, sort, project, share and export."""

__version__ = "0.1.0"
