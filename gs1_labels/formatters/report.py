"""
Batch report formatting (CSV / Excel / JSON).

One row per record with both payload forms and any data-quality warnings,
so a batch can be reviewed before it is sent to the printer.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Iterable, List, Union

import pandas as pd

from ..core.payload import build_payloads, display_machine_payload
from ..models import LabelRecord
from ..validators import validate_record


REPORT_COLUMNS = [
    "gtin",
    "lot",
    "expiry",
    "manufacture",
    "human_readable",
    "machine_payload",
    "warnings",
]


def record_to_dict(record: LabelRecord) -> Dict[str, Any]:
    """
    Flatten a record and its payloads into report fields.

    The machine payload shows GS separators as <GS>.
    """
    payloads = build_payloads(record)
    quality = validate_record(record)
    expiry = record.expiry.strftime("%Y-%m-00") if record.expiry_is_day_zero else record.expiry.isoformat()
    return {
        "gtin": record.gtin,
        "lot": record.lot,
        "expiry": expiry,
        "manufacture": record.manufacture.isoformat() if record.manufacture else "",
        "human_readable": payloads.human_readable,
        "machine_payload": display_machine_payload(payloads.machine),
        "warnings": "; ".join(quality.messages),
    }


def records_to_dataframe(records: Iterable[LabelRecord]) -> pd.DataFrame:
    rows: List[Dict[str, Any]] = [record_to_dict(record) for record in records]
    return pd.DataFrame(rows, columns=REPORT_COLUMNS)


def export_report(df: pd.DataFrame, path: Union[str, Path], sheet_name: str = "Labels") -> Path:
    """
    Write a report to .csv or .xlsx, chosen by extension.

    Raises:
        ValueError: Unsupported extension
    """
    target = Path(path)
    suffix = target.suffix.lower()
    target.parent.mkdir(parents=True, exist_ok=True)
    if suffix == ".csv":
        df.to_csv(target, index=False)
    elif suffix == ".xlsx":
        with pd.ExcelWriter(target, engine="openpyxl") as writer:
            df.to_excel(writer, sheet_name=sheet_name, index=False)
    else:
        raise ValueError(f"Unsupported report format: {suffix or target.name}")
    return target


def record_to_json_dict(record: LabelRecord) -> Dict[str, Any]:
    """JSON-ready fields for one record, with the raw payloads."""
    payloads = build_payloads(record)
    return {
        "gtin": record.gtin,
        "lot": record.lot,
        "expiry": record.expiry.isoformat(),
        "expiry_day_zero": record.expiry_is_day_zero,
        "resolved_expiry": record.resolved_expiry.isoformat(),
        "manufacture": record.manufacture.isoformat() if record.manufacture else None,
        "human_readable": payloads.human_readable,
        "machine_payload": payloads.machine,
    }


def format_record_json(record: LabelRecord, indent: int = 2) -> str:
    """JSON text for one record; GS is escaped as \\u001d."""
    return json.dumps(record_to_json_dict(record), indent=indent, ensure_ascii=True)
