"""Task Calendar: a date-scoped task list served over a small JSON API."""

__version__ = "1.0.0"
