#!/usr/bin/env python3
"""
PDF text extraction for inventory reports.
Hands report pages to pdfplumber and returns line-oriented text for the parser.
"""

import logging
from typing import List

import pdfplumber

logger = logging.getLogger(__name__)


class PDFExtractionError(Exception):
    """Raised when a report PDF cannot be read or contains no text."""


class ReportPDFExtractor:
    """Extracts reading-order text lines from report PDFs."""

    def __init__(self, x_tolerance: float = 3, y_tolerance: float = 3):
        self.x_tolerance = x_tolerance
        self.y_tolerance = y_tolerance

    def extract_lines(self, pdf_path: str) -> List[str]:
        """
        Extract non-empty text lines from every page, top to bottom.

        Args:
            pdf_path: Path to the PDF file

        Returns:
            List of text lines
        """
        lines: List[str] = []
        try:
            with pdfplumber.open(pdf_path) as pdf:
                for page_number, page in enumerate(pdf.pages, start=1):
                    page_text = page.extract_text(
                        x_tolerance=self.x_tolerance,
                        y_tolerance=self.y_tolerance,
                    )
                    if not page_text:
                        # Try extracting with layout spacing preserved
                        page_text = page.extract_text(layout=True)

                    if not page_text:
                        logger.warning(f"No text on page {page_number}")
                        continue

                    page_lines = [line for line in page_text.splitlines() if line.strip()]
                    logger.debug(f"Page {page_number}: {len(page_lines)} lines")
                    lines.extend(page_lines)
        except Exception as e:
            logger.error(f"pdfplumber extraction failed: {e}")
            raise PDFExtractionError(f"Failed to extract text from PDF: {e}") from e

        if not lines:
            raise PDFExtractionError(f"No text could be extracted from {pdf_path}")

        return lines


def extract_report_text(pdf_path: str) -> str:
    """
    Convenience function to extract report text from a PDF.

    Args:
        pdf_path: Path to the PDF file

    Returns:
        Newline separated text
    """
    lines = ReportPDFExtractor().extract_lines(pdf_path)
    text = '\n'.join(lines)

    logger.info(f"Extracted {len(lines)} lines, {len(text)} characters from PDF")
    return text
