"""
CLI interface for the GS1 label toolkit.

Usage:
    python -m gs1_labels <batch file> [options]

Options:
    --json                Output records and payloads as JSON
    --page NAME           Page size for the layout plan (a4, a5, letter, legal)
    --landscape           Use landscape orientation
    --config PATH         Layout override JSON (defaults to ./layout.json)
    --export PATH         Write a review report (.csv or .xlsx)
    --verbose             Log skipped rows and other details
"""

import argparse
import json
import logging
import sys
from typing import List, Optional

from .batch import PagePlan, paginate_with_config
from .core.payload import build_payloads, display_machine_payload
from .core.sources import TabularLabelSource
from .exceptions import Gs1LabelError
from .formatters import export_report, record_to_json_dict, records_to_dataframe
from .layouts import PAGE_SIZES_MM, LayoutConfig, load_layout_config, page_size_mm
from .models import LabelRecord
from .validators import validate_record


logger = logging.getLogger("gs1_labels")


def format_page(plan: PagePlan) -> str:
    """Format one planned page for display."""
    lines = [f"Page {plan.page_number}: {len(plan)} label(s)", "-" * 40]
    for placement in plan.placements:
        slot = placement.slot
        payloads = build_payloads(placement.record)
        lines.append(f"  @ ({slot.x:.1f}, {slot.y:.1f}) mm  {payloads.human_readable}")
        lines.append(f"    Machine: {display_machine_payload(payloads.machine)}")
        quality = validate_record(placement.record)
        for message in quality.messages:
            lines.append(f"    Warning: {message}")
    return "\n".join(lines)


def format_summary(source: TabularLabelSource, config: LayoutConfig, pages: int) -> str:
    stats = source.stats
    layout = config.layout
    lines = [
        "=" * 60,
        "GS1 Label Batch",
        "=" * 60,
        f"Source: {source.path}",
        f"Rows Read: {stats.rows_read}",
        f"Records: {stats.records_built}",
        f"Rows Skipped: {stats.rows_skipped}",
        f"Label: {layout.width_mm:g} x {layout.height_mm:g} mm, margin {config.margin_mm:g} mm",
        f"Pages: {pages}",
    ]
    if config.source is not None:
        lines.append(f"Layout Config: {config.source}")
    return "\n".join(lines)


def main(argv: Optional[list] = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog='gs1_labels',
        description='Encode GS1 label payloads from a CSV or Excel batch file'
    )

    parser.add_argument(
        'source',
        help='Batch file (.csv, .txt, .tsv, .xlsx)'
    )

    parser.add_argument(
        '--json',
        action='store_true',
        help='Output records and payloads as JSON'
    )

    parser.add_argument(
        '--page',
        default='a4',
        choices=sorted(PAGE_SIZES_MM),
        help='Page size used for the layout plan'
    )

    parser.add_argument(
        '--landscape',
        action='store_true',
        help='Use landscape page orientation'
    )

    parser.add_argument(
        '--config',
        default=None,
        help='Layout override JSON (defaults to ./layout.json when present)'
    )

    parser.add_argument(
        '--export',
        default=None,
        help='Write a review report to this .csv or .xlsx file'
    )

    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Log skipped rows and other details'
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    config = load_layout_config(args.config)
    page_width, page_height = page_size_mm(args.page, landscape_orientation=args.landscape)

    try:
        source = TabularLabelSource(args.source)
        records: List[LabelRecord] = list(source.read())
    except (OSError, Gs1LabelError) as e:
        error_output = {"error": str(e), "input": args.source}
        print(json.dumps(error_output, ensure_ascii=False, indent=2), file=sys.stderr)
        return 2

    try:
        pages = list(paginate_with_config(records, page_width, page_height, config))
    except ValueError as e:
        logger.error("%s", e)
        return 1

    if args.export:
        try:
            path = export_report(records_to_dataframe(records), args.export)
        except (OSError, ValueError) as e:
            logger.error("Could not write report: %s", e)
            return 2
        logger.info("Report written to %s", path)

    if args.json:
        output = {
            "source": str(source.path),
            "rows_read": source.stats.rows_read,
            "rows_skipped": source.stats.rows_skipped,
            "pages": len(pages),
            "records": [record_to_json_dict(record) for record in records],
        }
        print(json.dumps(output, indent=2, ensure_ascii=True))
    else:
        print(format_summary(source, config, len(pages)))
        for plan in pages:
            print("")
            print(format_page(plan))

    return 0 if records else 1


if __name__ == '__main__':
    sys.exit(main())
