"""In-memory tables with packed row storage, one-to-many relations and a demo command."""

__version__ = "0.1.0"
__all__ = ["__version__"]