"""Result storage and export."""

from .exporter import ResultExporter
from .results import JobListener, ResultStore

__all__ = ["JobListener", "ResultExporter", "ResultStore"]
