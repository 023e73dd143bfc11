"""List export files (input) and resolution reports (output)."""

from __future__ import annotations

from .schema import ListEntryPayload, ListFilePayload, ResolutionReportPayload
from .translator import (
    ListFileError,
    build_report_payload,
    load_list_file,
    parse_list_entry,
    write_report,
)

__all__ = [
    "ListEntryPayload",
    "ListFileError",
    "ListFilePayload",
    "ResolutionReportPayload",
    "build_report_payload",
    "load_list_file",
    "parse_list_entry",
    "write_report",
]
