#!/usr/bin/env python3
"""
Tests for the command line interface.
"""

import json
import os
import tempfile
import unittest
from unittest.mock import patch

from click.testing import CliRunner

# Add src to path for imports
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from inventory_report_parser.cli import cli
from inventory_report_parser.pdf_extractor import PDFExtractionError

SAMPLE_PATH = str(Path(__file__).parent / "fixtures" / "sample_report.txt")


class TestParseCommand(unittest.TestCase):
    """Test cases for the parse command."""

    def setUp(self):
        self.runner = CliRunner()

    def test_parse_text_file(self):
        """Test JSON is printed for a text report."""
        result = self.runner.invoke(cli, ['parse', SAMPLE_PATH])

        self.assertEqual(result.exit_code, 0, result.output)
        data = json.loads(result.stdout)
        self.assertEqual(data["storeCode"], "1021")
        self.assertEqual(len(data["items"]), 4)
        self.assertEqual(data["totalCost"], "27.69")

    def test_parse_legacy(self):
        """Test the legacy parser is selectable."""
        result = self.runner.invoke(cli, ['parse', SAMPLE_PATH, '--legacy'])

        self.assertEqual(result.exit_code, 0, result.output)
        data = json.loads(result.stdout)
        self.assertEqual(data["totalQuantity"], 999)
        self.assertEqual(len(data["items"]), 5)

    def test_output_file(self):
        """Test results are written to the output file."""
        with tempfile.TemporaryDirectory() as tmp_dir:
            output_path = os.path.join(tmp_dir, "result.json")
            result = self.runner.invoke(cli, ['parse', SAMPLE_PATH, '-o', output_path])

            self.assertEqual(result.exit_code, 0, result.output)
            with open(output_path, encoding='utf-8') as f:
                self.assertEqual(json.load(f)["reportDate"], "2026-01-28")

    def test_empty_report_fails(self):
        """A report without items is a failure."""
        with self.runner.isolated_filesystem():
            Path("empty.txt").write_text("GRAND AVE PHARMACY (1021)\nJan 28/26\n", encoding='utf-8')
            result = self.runner.invoke(cli, ['parse', 'empty.txt'])

        self.assertEqual(result.exit_code, 1)
        self.assertIn("No inventory items found", result.output)

    def test_expect_store(self):
        """Test the store code check."""
        ok = self.runner.invoke(cli, ['parse', SAMPLE_PATH, '--expect-store', '1021'])
        self.assertEqual(ok.exit_code, 0, ok.output)

        wrong = self.runner.invoke(cli, ['parse', SAMPLE_PATH, '--expect-store', '0713'])
        self.assertEqual(wrong.exit_code, 1)
        self.assertIn('unknown store code "1021"', wrong.output)

    @patch('inventory_report_parser.cli.extract_report_text')
    def test_pdf_goes_through_extractor(self, mock_extract):
        """PDF files are read through the PDF extractor."""
        mock_extract.return_value = Path(SAMPLE_PATH).read_text(encoding='utf-8')

        with self.runner.isolated_filesystem():
            Path("report.pdf").write_bytes(b"%PDF-1.4")
            result = self.runner.invoke(cli, ['parse', 'report.pdf'])

        self.assertEqual(result.exit_code, 0, result.output)
        mock_extract.assert_called_once_with("report.pdf")
        self.assertEqual(json.loads(result.stdout)["storeName"], "GRAND AVE PHARMACY")

    @patch('inventory_report_parser.cli.extract_report_text')
    def test_pdf_extraction_error(self, mock_extract):
        """Extraction failures exit with an error message."""
        mock_extract.side_effect = PDFExtractionError("No text could be extracted from report.pdf")

        with self.runner.isolated_filesystem():
            Path("report.pdf").write_bytes(b"%PDF-1.4")
            result = self.runner.invoke(cli, ['parse', 'report.pdf'])

        self.assertEqual(result.exit_code, 1)
        self.assertIn("No text could be extracted", result.output)

    def test_missing_file(self):
        result = self.runner.invoke(cli, ['parse', 'does-not-exist.txt'])
        self.assertEqual(result.exit_code, 2)


if __name__ == '__main__':
    unittest.main()
