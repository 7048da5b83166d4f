"""
Core modules: source parsing, GS1 payload encoding and page composition.
"""

from .delimited import detect_delimiter, parse_delimited_line, CANDIDATE_DELIMITERS
from .dates import (
    parse_flexible_date,
    ParsedDate,
    DATE_FORMAT_CHAIN,
    last_day_of_month,
    end_of_month,
    from_spreadsheet_serial,
    strip_time_component,
)
from .record_builder import build_record, RawRow
from .sources import (
    TabularLabelSource,
    DelimitedTextRows,
    WorkbookRows,
    RowProvider,
    SourceStats,
    TextDecoding,
    read_labels,
)
from .payload import (
    GS,
    Gs1Payloads,
    pad_gtin,
    format_machine_date,
    format_human_expiry,
    build_human_readable,
    build_machine_payload,
    build_payloads,
)
from .composer import GridSlotComposer, compose_page_slots

__all__ = [
    "detect_delimiter",
    "parse_delimited_line",
    "CANDIDATE_DELIMITERS",
    "parse_flexible_date",
    "ParsedDate",
    "DATE_FORMAT_CHAIN",
    "last_day_of_month",
    "end_of_month",
    "from_spreadsheet_serial",
    "strip_time_component",
    "build_record",
    "RawRow",
    "TabularLabelSource",
    "DelimitedTextRows",
    "WorkbookRows",
    "RowProvider",
    "SourceStats",
    "TextDecoding",
    "read_labels",
    "GS",
    "Gs1Payloads",
    "pad_gtin",
    "format_machine_date",
    "format_human_expiry",
    "build_human_readable",
    "build_machine_payload",
    "build_payloads",
    "GridSlotComposer",
    "compose_page_slots",
]
