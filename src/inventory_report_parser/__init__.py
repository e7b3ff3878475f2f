"""
Inventory Report Parser

Recovers structured inventory records from pharmacy inventory report text.
"""

__version__ = "1.0.0"

from .models import HeaderInfo, ParsedInventoryItem, ParseResult
from .parser import (
    InventoryReportParser,
    LegacyInventoryReportParser,
    parse_inventory_report,
    parse_inventory_report_enhanced,
)

__all__ = [
    "HeaderInfo",
    "ParsedInventoryItem",
    "ParseResult",
    "InventoryReportParser",
    "LegacyInventoryReportParser",
    "parse_inventory_report",
    "parse_inventory_report_enhanced",
]
