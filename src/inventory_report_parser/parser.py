#!/usr/bin/env python3
"""
Inventory Report Parser
Recovers structured inventory records from the plaintext of pharmacy
investment analysis reports.
"""

import json
import logging
import re
from datetime import date
from typing import List, Optional, Sequence

from .aggregator import deduplicate_items, legacy_totals, sum_totals
from .header_extractor import DEFAULT_HEADER_WINDOW, extract_header
from .line_classifier import LineClassifier
from .models import ParseResult
from .patterns import (
    ENHANCED_GRAMMARS,
    ENHANCED_NOISE_RULES,
    LEGACY_GRAMMARS,
    LEGACY_NOISE_RULES,
    LEGACY_STORE_PATTERN,
    ItemGrammar,
    NoiseRule,
)

logger = logging.getLogger(__name__)

DEFAULT_STORE_NAME = "Unknown Store"
DEFAULT_STORE_CODE = "0000"


def store_banner_rule(store_name: str, store_code: str) -> NoiseRule:
    """
    Denylist rule for the "NAME (CODE)" banner found in the header.

    Only a line holding the banner alone is noise, so an item whose
    description mentions the store still reaches the grammars.
    """
    pattern = re.compile(
        r'^\s*' + re.escape(store_name) + r'\s*\(' + re.escape(store_code) + r'\)\s*$',
        re.IGNORECASE | re.ASCII,
    )
    return NoiseRule(name="store banner", pattern=pattern)


class InventoryReportParser:
    """Main parser class for inventory report text."""

    def __init__(self,
                 header_window: int = DEFAULT_HEADER_WINDOW,
                 noise_rules: Sequence[NoiseRule] = ENHANCED_NOISE_RULES,
                 grammars: Sequence[ItemGrammar] = ENHANCED_GRAMMARS,
                 default_store_name: str = DEFAULT_STORE_NAME,
                 default_store_code: str = DEFAULT_STORE_CODE):
        self.header_window = header_window
        self.default_store_name = default_store_name
        self.default_store_code = default_store_code
        self.classifier = LineClassifier(noise_rules=noise_rules, grammars=grammars)

    def parse_report(self, text: str, today: Optional[date] = None) -> ParseResult:
        """
        Parse report text into a deduplicated snapshot with summed totals.

        Never raises for malformed text: missing header fields fall back to
        defaults and unrecognized lines are skipped.

        Args:
            text: Newline separated report text in reading order
            today: Date used when the header carries no report date

        Returns:
            ParseResult for the report
        """
        lines = text.splitlines()
        header = extract_header(lines, window=self.header_window)

        classifier = self.classifier
        if header.store_code is not None:
            # Store banner repeats on every page
            classifier = classifier.with_extra_rules(store_banner_rule(header.store_name, header.store_code))

        matches, unmatched = classifier.extract_items(lines)
        items, duplicates = deduplicate_items(match.item for match in matches)
        total_quantity, total_cost = sum_totals(items)

        if header.report_date is None:
            logger.warning("No report date found in header, using current date")
        if header.store_code is None:
            logger.warning(f"No store code found in header, using {self.default_store_code}")

        result = ParseResult(
            store_name=header.store_name or self.default_store_name,
            store_code=header.store_code or self.default_store_code,
            report_date=header.report_date or (today or date.today()).isoformat(),
            items=tuple(items),
            total_quantity=total_quantity,
            total_cost=total_cost,
            unmatched_lines=unmatched,
            duplicate_lines=duplicates,
        )
        self._log_summary(result, len(lines))
        return result

    def parse_report_to_json(self, text: str, output_path: Optional[str] = None) -> str:
        """Parse report text and return a JSON string, optionally saved to a file."""
        result = self.parse_report(text)
        json_str = json.dumps(result.to_dict(), indent=2, ensure_ascii=False)

        if output_path:
            with open(output_path, 'w', encoding='utf-8') as f:
                f.write(json_str)
            logger.info(f"Results saved to: {output_path}")

        return json_str

    def _log_summary(self, result: ParseResult, line_count: int):
        logger.info(
            f"Parsed {len(result.items)} items from {line_count} lines "
            f"for store {result.store_code} ({result.report_date})"
        )
        if result.unmatched_lines:
            logger.info(f"Skipped {result.unmatched_lines} unrecognized lines")
        if result.duplicate_lines:
            logger.info(f"Dropped {result.duplicate_lines} duplicate item lines")
        if not result.items:
            logger.warning("No inventory items found in report text")


class LegacyInventoryReportParser:
    """
    The first-generation report parser.

    Differs from InventoryReportParser in three ways: it keeps every matched
    line (no deduplication), it trusts the report's own GRAND TOTAL line, and it
    leaves missing header fields empty instead of substituting defaults.
    """

    def __init__(self, header_window: int = DEFAULT_HEADER_WINDOW):
        self.header_window = header_window
        self.classifier = LineClassifier(noise_rules=LEGACY_NOISE_RULES, grammars=LEGACY_GRAMMARS)

    def parse_report(self, text: str) -> ParseResult:
        lines: List[str] = text.splitlines()
        header = extract_header(lines, window=self.header_window, store_pattern=LEGACY_STORE_PATTERN)

        matches, unmatched = self.classifier.extract_items(lines)
        items = [match.item for match in matches]
        total_quantity, total_cost = legacy_totals(lines, items)

        logger.info(f"Legacy parser found {len(items)} items")
        return ParseResult(
            store_name=header.store_name or '',
            store_code=header.store_code or '',
            report_date=header.report_date or '',
            items=tuple(items),
            total_quantity=total_quantity,
            total_cost=total_cost,
            unmatched_lines=unmatched,
        )


def parse_inventory_report_enhanced(text: str, today: Optional[date] = None) -> ParseResult:
    """
    Convenience function to parse report text with the default parser.

    Args:
        text: Report text
        today: Fallback report date

    Returns:
        ParseResult
    """
    return InventoryReportParser().parse_report(text, today=today)


def parse_inventory_report(text: str) -> ParseResult:
    """Convenience function to parse report text with the legacy parser."""
    return LegacyInventoryReportParser().parse_report(text)
