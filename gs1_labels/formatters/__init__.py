"""
Output formatters for label batches.
"""

from .report import (
    record_to_dict,
    records_to_dataframe,
    export_report,
    format_record_json,
    record_to_json_dict,
    REPORT_COLUMNS,
)

__all__ = [
    "record_to_dict",
    "records_to_dataframe",
    "export_report",
    "format_record_json",
    "record_to_json_dict",
    "REPORT_COLUMNS",
]
