"""
Data models for the Inventory Report Parser.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True)
class ParsedInventoryItem:
    """Represents a single product line from an inventory report."""
    item_code: str
    manufacturer_code: str
    description: str
    size: int
    unit_of_measure: str
    marketing_status: str
    order_control: str
    backroom_stock: int
    on_hand: int
    total_quantity: int
    cost: Decimal
    days_aging: Optional[int] = None

    @property
    def key(self) -> str:
        """Identity key used for deduplication."""
        return f"{self.item_code}-{self.manufacturer_code}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "item_code": self.item_code,
            "manufacturer_code": self.manufacturer_code,
            "description": self.description,
            "size": self.size,
            "unit_of_measure": self.unit_of_measure,
            "marketing_status": self.marketing_status,
            "order_control": self.order_control,
            "backroom_stock": self.backroom_stock,
            "on_hand": self.on_hand,
            "total_quantity": self.total_quantity,
            "cost": str(self.cost),
            "days_aging": self.days_aging,
        }


@dataclass(frozen=True)
class HeaderInfo:
    """Store identity and report date found in the report header."""
    store_name: Optional[str] = None
    store_code: Optional[str] = None
    report_date: Optional[str] = None


@dataclass(frozen=True)
class ParseResult:
    """Structured snapshot of one inventory report."""
    store_name: str
    store_code: str
    report_date: str
    items: Tuple[ParsedInventoryItem, ...]
    total_quantity: int
    total_cost: Decimal
    # Non-noise lines no grammar matched, and matched lines dropped as duplicates
    unmatched_lines: int = 0
    duplicate_lines: int = 0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the JSON-serializable report format."""
        return {
            "storeName": self.store_name,
            "storeCode": self.store_code,
            "reportDate": self.report_date,
            "items": [item.to_dict() for item in self.items],
            "totalQuantity": self.total_quantity,
            "totalCost": str(self.total_cost),
            "diagnostics": {
                "unmatchedLines": self.unmatched_lines,
                "duplicateLines": self.duplicate_lines,
            },
        }
