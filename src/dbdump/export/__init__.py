"""Export driver for dbdump."""

from dbdump.export.exporter import SchemaExporter
from dbdump.export.models import DumpSettings, ExportSummary
from dbdump.export.planner import ExportPlanner

__all__ = [
    "DumpSettings",
    "ExportPlanner",
    "ExportSummary",
    "SchemaExporter",
]
