#!/usr/bin/env python3
"""
Report layout patterns.
Noise denylists, record grammars and header patterns are kept here as data so a
new report layout only needs new table entries, not new parsing code.
"""

import re
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional, Tuple

from .models import ParsedInventoryItem


@dataclass(frozen=True)
class NoiseRule:
    """
    A boilerplate line recognizer.

    A line is noise when it contains every entry of ``substrings``, matches
    ``pattern`` (if set) and does not match ``unless`` (if set).
    """
    name: str
    substrings: Tuple[str, ...] = ()
    pattern: Optional[re.Pattern] = None
    unless: Optional[re.Pattern] = None

    def matches(self, line: str) -> bool:
        if self.substrings and not all(s in line for s in self.substrings):
            return False
        if self.pattern is not None and not self.pattern.search(line):
            return False
        if self.unless is not None and self.unless.search(line):
            return False
        return True


@dataclass(frozen=True)
class ItemGrammar:
    """A named single-line record grammar for one inventory item."""
    name: str
    regex: re.Pattern

    def match(self, line: str) -> Optional[ParsedInventoryItem]:
        """Return the item captured from ``line``, or None if it does not fit."""
        match = self.regex.match(line)
        if not match:
            return None

        fields = match.groupdict()
        days_aging = fields.get("days_aging")
        return ParsedInventoryItem(
            item_code=fields["item_code"],
            manufacturer_code=fields["manufacturer_code"],
            description=fields["description"].strip(),
            size=int(fields["size"]),
            unit_of_measure=fields["unit_of_measure"],
            marketing_status=fields["marketing_status"],
            order_control=fields["order_control"],
            backroom_stock=int(fields["backroom_stock"]),
            on_hand=int(fields["on_hand"]),
            total_quantity=int(fields["total_quantity"]),
            cost=Decimal(fields["cost"]),
            days_aging=int(days_aging) if days_aging is not None else None,
        )


# --- Header ---

STORE_PATTERN = re.compile(
    r'([A-Z][A-Z\s]+(?:LTD|INC|CORP|PHARMACY)?\.?)\s*\((\d+)\)', re.IGNORECASE | re.ASCII
)
LEGACY_STORE_PATTERN = re.compile(
    r'([A-Z][A-Z\s]+(?:LTD|INC|CORP)?\.?)\s*\((\d+)\)', re.IGNORECASE | re.ASCII
)

# Report date at the start of a line, e.g. "Jan 28/26  13:53"
DATE_PATTERN = re.compile(
    r'^(Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Oct|Nov|Dec)\s+(\d{1,2})/(\d{2})',
    re.IGNORECASE | re.ASCII,
)

MONTHS = {
    'Jan': '01', 'Feb': '02', 'Mar': '03', 'Apr': '04',
    'May': '05', 'Jun': '06', 'Jul': '07', 'Aug': '08',
    'Sep': '09', 'Oct': '10', 'Nov': '11', 'Dec': '12',
}

GRAND_TOTAL_PATTERN = re.compile(r'GRAND TOTAL:\s+(\d+)\s+(\d*\.?\d+)', re.ASCII)


# --- Noise ---

def _contains(*substrings: str) -> NoiseRule:
    return NoiseRule(name=" + ".join(substrings), substrings=substrings)


_BLANK = NoiseRule(name="blank", pattern=re.compile(r'^\s*$'))

ENHANCED_NOISE_RULES: Tuple[NoiseRule, ...] = (
    _contains('INVESTMENT ANALYSIS'),
    _contains('SALES DEPARTMENT'),
    _contains('AREA OF STORE'),
    # Column banner, but item lines may carry an aging figure in front
    NoiseRule(name="DAYS AGING", substrings=('DAYS AGING',), unless=re.compile(r'^\s*\d', re.ASCII)),
    _contains('MARKETING STATUS'),
    _contains('TYPE OF SORT'),
    _contains('PLANOGRAM'),
    _contains('ORDER CONTROL'),
    _contains('---'),
    _contains('continued'),
    _contains('PAGE:'),
    _contains('GRAND TOTAL'),
    _BLANK,
    NoiseRule(name="column header", pattern=re.compile(r'^DAYS\s+.*ITEM', re.ASCII)),
)

LEGACY_NOISE_RULES: Tuple[NoiseRule, ...] = (
    _contains('INVESTMENT ANALYSIS'),
    _contains('SALES DEPARTMENT'),
    _contains('AREA OF STORE'),
    _contains('DAYS AGING RANGE'),
    _contains('MARKETING STATUS'),
    _contains('TYPE OF SORT'),
    _contains('PLANOGRAM'),
    _contains('ORDER CONTROL'),
    _contains('DAYS', 'ITEM'),
    _contains('AGING', 'DESCRIPTION'),
    _contains('---'),
    _contains('continued'),
    _contains('PAGE:'),
    _contains('GRAND TOTAL'),
    _BLANK,
)


# --- Item grammars ---
# Columns: DAYS_AGING ITEM_CODE MANUF_CODE DESCRIPTION SIZE UOM MS O/C B/R_STOCK ON_HAND TOTAL COST

_AGING = r'(?P<days_aging>\d+)'
_CODES = r'(?P<item_code>\d{5})\s+(?P<manufacturer_code>\d{10,12})'
_FIELDS = (
    r'(?P<size>\d+)\s+(?P<unit_of_measure>[A-Z]+)\s+'
    r'(?P<marketing_status>[A-Z])\s+(?P<order_control>[A-Z])\s+'
    r'(?P<backroom_stock>\d+)\s+(?P<on_hand>\d+)\s+(?P<total_quantity>\d+)\s+'
    r'(?P<cost>\d*\.?\d+)'
)
# Tight: description of 8 to 80 characters followed by any whitespace
_TIGHT = r'\s+(?P<description>.{8,80}?)\s+' + _FIELDS
# Loose: description of any length, up to the first gap of two or more spaces
_LOOSE = r'\s+(?P<description>.+?)\s{2,}' + _FIELDS


def _grammar(name: str, pattern: str) -> ItemGrammar:
    # Report columns are ASCII; other Unicode digits must not pass as codes
    return ItemGrammar(name, re.compile(pattern, re.ASCII))


AGING_TIGHT = _grammar("aging_tight", r'^\s*' + _AGING + r'\s+' + _CODES + _TIGHT)
PLAIN_TIGHT = _grammar("plain_tight", r'^\s*' + _CODES + _TIGHT)
AGING_LOOSE = _grammar("aging_loose", r'^\s*' + _AGING + r'\s+' + _CODES + _LOOSE)
PLAIN_LOOSE = _grammar("plain_loose", r'^\s*' + _CODES + _LOOSE)

# Grammars that can capture an aging figure go first
ENHANCED_GRAMMARS: Tuple[ItemGrammar, ...] = (
    AGING_TIGHT,
    AGING_LOOSE,
    PLAIN_TIGHT,
    PLAIN_LOOSE,
)

LEGACY_GRAMMARS: Tuple[ItemGrammar, ...] = (
    _grammar("legacy_tight", r'^\s*' + _AGING + r'?\s+' + _CODES + _TIGHT),
    _grammar("legacy_loose", r'^\s*' + _AGING + r'?\s*' + _CODES + _LOOSE),
)
