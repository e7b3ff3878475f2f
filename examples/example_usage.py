#!/usr/bin/env python3
"""
Example usage of the Inventory Report Parser
Parses a sample report with both parsers and prepares it for upload.
"""

import json
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from inventory_report_parser import parse_inventory_report, parse_inventory_report_enhanced
from inventory_report_parser.upload import ReportUploadError, batched, prepare_upload

SAMPLE_REPORT = Path(__file__).parent.parent / "tests" / "fixtures" / "sample_report.txt"

# Store registry as store code -> store id
STORES = {
    "1021": "store-grand-ave",
    "0713": "store-apothecary",
}


def compare_parsers(text: str):
    """Show how the two parsers disagree on the same report."""
    print("=" * 60)
    print("COMPARISON: Enhanced vs Legacy Parser")
    print("=" * 60)

    enhanced = parse_inventory_report_enhanced(text)
    legacy = parse_inventory_report(text)

    print(f"Enhanced: {len(enhanced.items)} items, quantity {enhanced.total_quantity}, cost {enhanced.total_cost}")
    print(f"Legacy:   {len(legacy.items)} items, quantity {legacy.total_quantity}, cost {legacy.total_cost}")
    print(f"Unrecognized lines: {enhanced.unmatched_lines}, duplicates dropped: {enhanced.duplicate_lines}")


def demonstrate_upload(text: str):
    """Validate the parse result and print the insertion batches."""
    print("\n" + "=" * 60)
    print("DEMONSTRATION: Upload Preparation")
    print("=" * 60)

    result = parse_inventory_report_enhanced(text)
    try:
        plan = prepare_upload(result, STORES, selected_store_id="store-grand-ave")
    except ReportUploadError as e:
        print(f"❌ Upload rejected: {e}")
        return

    for number, batch in enumerate(batched(plan.records, size=2), start=1):
        print(f"Batch {number}: {[record['item_code'] for record in batch]}")

    print(f"\nReport value: {plan.total_cost}")
    print("First record:")
    print(json.dumps(plan.records[0], indent=2, default=str))


def main():
    text = SAMPLE_REPORT.read_text(encoding="utf-8")
    compare_parsers(text)
    demonstrate_upload(text)


if __name__ == "__main__":
    main()
