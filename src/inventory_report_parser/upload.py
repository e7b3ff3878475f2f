#!/usr/bin/env python3
"""
Upload preparation for parsed inventory reports.
Applies the acceptance checks an upload must pass before its items replace a
store's inventory, and maps parsed items onto storage records.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, Iterator, List, Mapping, Optional

from .models import ParseResult

logger = logging.getLogger(__name__)

INSERT_BATCH_SIZE = 100


class ReportUploadError(Exception):
    """Base class for rejected report uploads."""


class EmptyReportError(ReportUploadError):
    """The report produced no inventory items."""


class UnknownStoreError(ReportUploadError):
    """The report's store code is not in the store registry."""

    def __init__(self, store_code: str):
        self.store_code = store_code
        super().__init__(
            f'PDF contains unknown store code "{store_code}". Please verify the PDF is correct.'
        )


class StoreMismatchError(ReportUploadError):
    """The report belongs to a different store than the one selected."""

    def __init__(self, store_code: str, report_store_id: str, selected_store_id: str):
        self.store_code = store_code
        self.report_store_id = report_store_id
        self.selected_store_id = selected_store_id
        super().__init__(
            f"PDF mismatch: this report is for store {store_code} ({report_store_id}) "
            f"but store {selected_store_id} was selected"
        )


@dataclass(frozen=True)
class UploadPlan:
    """Validated records ready to replace a store's inventory."""
    store_id: str
    report_date: str
    records: List[Dict[str, Any]]
    total_cost: Decimal = Decimal("0")

    @property
    def items_count(self) -> int:
        return len(self.records)


def build_inventory_records(result: ParseResult, store_id: str) -> List[Dict[str, Any]]:
    """
    Map parsed items onto inventory storage records for ``store_id``.

    Records keep ``cost`` as a Decimal for the storage layer's numeric column.
    """
    records = []
    for item in result.items:
        record = item.to_dict()
        record["cost"] = item.cost
        record["store_id"] = store_id
        record["report_date"] = result.report_date
        records.append(record)
    return records


def prepare_upload(result: ParseResult,
                   store_registry: Mapping[str, str],
                   selected_store_id: Optional[str] = None) -> UploadPlan:
    """
    Validate a parse result and build the records to store.

    Args:
        result: Parsed report
        store_registry: Known stores as store code -> store id
        selected_store_id: Store the report is being uploaded for, if checked

    Returns:
        UploadPlan for the report's store

    Raises:
        EmptyReportError: No items were extracted
        UnknownStoreError: The store code is not registered
        StoreMismatchError: The report belongs to another store
    """
    if not result.items:
        raise EmptyReportError("No inventory items found in the report. Please check the PDF format.")

    store_id = store_registry.get(result.store_code)
    if store_id is None:
        logger.error(f"Unknown store code in report: {result.store_code}")
        raise UnknownStoreError(result.store_code)

    if selected_store_id is not None and store_id != selected_store_id:
        logger.error(f"Store mismatch - report: {result.store_code} ({store_id}), selected: {selected_store_id}")
        raise StoreMismatchError(result.store_code, store_id, selected_store_id)

    records = build_inventory_records(result, store_id)
    logger.info(f"Prepared {len(records)} records for store {result.store_code}")
    return UploadPlan(
        store_id=store_id,
        report_date=result.report_date,
        records=records,
        total_cost=result.total_cost,
    )


def batched(records: List[Dict[str, Any]], size: int = INSERT_BATCH_SIZE) -> Iterator[List[Dict[str, Any]]]:
    """Yield ``records`` in insertion batches of at most ``size``."""
    if size < 1:
        raise ValueError("Batch size must be at least 1")
    for start in range(0, len(records), size):
        yield records[start:start + size]
