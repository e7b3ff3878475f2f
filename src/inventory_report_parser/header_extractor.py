#!/usr/bin/env python3
"""
Header extraction for inventory reports.
Finds the store name/code pair and the report date in the first lines of a report.
"""

import logging
import re
from typing import Iterable, Optional

from .models import HeaderInfo
from .patterns import DATE_PATTERN, MONTHS, STORE_PATTERN

logger = logging.getLogger(__name__)

DEFAULT_HEADER_WINDOW = 5


def normalize_report_date(month: str, day: str, year: str) -> str:
    """
    Convert a "Mon D/YY" date into ISO form.

    Args:
        month: Three-letter month abbreviation, any case
        day: One or two digit day
        year: Two digit year

    Returns:
        Date string formatted as YYYY-MM-DD
    """
    month_number = MONTHS.get(month.title(), '01')
    return f"20{year}-{month_number}-{day.zfill(2)}"


def extract_header(lines: Iterable[str],
                   window: int = DEFAULT_HEADER_WINDOW,
                   store_pattern: re.Pattern = STORE_PATTERN) -> HeaderInfo:
    """
    Scan the first ``window`` lines for the store identity and the report date.

    Store and date may sit on different lines, so the whole window is scanned;
    the first store match and the first date match win. Fields that are never
    found are left as None for the caller to default.
    """
    store_name: Optional[str] = None
    store_code: Optional[str] = None
    report_date: Optional[str] = None

    for line_number, line in enumerate(lines):
        if line_number >= window:
            break

        if store_code is None:
            store_match = store_pattern.search(line)
            if store_match:
                store_name = store_match.group(1).strip()
                store_code = store_match.group(2)
                logger.debug(f"Store header on line {line_number + 1}: {store_name} ({store_code})")

        if report_date is None:
            date_match = DATE_PATTERN.match(line)
            if date_match:
                report_date = normalize_report_date(*date_match.groups())
                logger.debug(f"Report date on line {line_number + 1}: {report_date}")

        if store_code is not None and report_date is not None:
            break

    return HeaderInfo(store_name=store_name, store_code=store_code, report_date=report_date)
