"""Tests for error collection and logging."""

import json

import pytest

from ledger_parser.parsers.base import ParseError
from ledger_parser.parsers.journal import parse_journal
from ledger_parser.utils.error_handler import (
    ErrorCategory,
    ErrorHandler,
    handle_file_access_error,
    handle_parse_error,
)


class TestErrorHandler:
    """Test cases for ErrorHandler"""

    def _parse_error(self, text, source_name="book.ledger"):
        with pytest.raises(ParseError) as exc_info:
            parse_journal(text, source_name)
        return exc_info.value

    def test_parse_error_details(self, tmp_path):
        """Test that position information is carried into the record"""
        handler = ErrorHandler(log_directory=str(tmp_path), enable_console=False)
        error = self._parse_error("2016/01/31 A\n Assets  1\n")

        detail = handle_parse_error(handler, error)

        assert detail.file_path == "book.ledger"
        assert (detail.line_number, detail.column_number) == (2, 10)
        assert detail.expected == "amount"
        assert detail.found == "1"
        assert detail.category == ErrorCategory.LEXICAL.value
        assert detail.stack_trace is None
        assert handler.has_errors()

    def test_structured_log_file(self, tmp_path):
        """Test that errors are written as JSON lines"""
        handler = ErrorHandler(log_directory=str(tmp_path), enable_console=False)
        handle_parse_error(handler, self._parse_error("2016/01/31\n Cash  1 $\n"))

        log_files = list(tmp_path.glob("parser_*.jsonl"))
        assert len(log_files) == 1
        records = [json.loads(line) for line in log_files[0].read_text().splitlines()]
        assert records[0]["level"] == "ERROR"
        assert records[0]["error_code"] == "P002"
        assert records[0]["category"] == "structural"

    def test_file_access_errors(self):
        handler = ErrorHandler(log_directory=None, enable_console=False)

        missing = handle_file_access_error(handler, "a.ledger", FileNotFoundError("gone"))
        denied = handle_file_access_error(handler, "b.ledger", PermissionError("no"))
        other = handle_file_access_error(handler, "c.ledger", IsADirectoryError("dir"))

        assert [missing.error_code, denied.error_code, other.error_code] == ["F001", "F002", "S999"]
        assert missing.stack_trace is not None

    def test_summary_and_report(self, tmp_path):
        """Test error summary counts and the JSON report"""
        handler = ErrorHandler(log_directory=str(tmp_path), enable_console=False)
        handle_parse_error(handler, self._parse_error("x"))
        handle_parse_error(handler, self._parse_error("2016/01/31\n Cash  1 $\n", "other.ledger"))
        handler.log_warning("Empty journal", "UNKNOWN", file_path="empty.ledger")

        summary = handler.get_error_summary()
        assert summary["total_errors"] == 2
        assert summary["total_warnings"] == 1
        assert summary["errors_by_category"] == {"lexical": 1, "structural": 1}
        assert summary["files_with_errors"] == 2

        report_path = handler.generate_error_report(str(tmp_path / "report.json"))
        with open(report_path) as f:
            report = json.load(f)
        assert len(report["all_errors"]) == 2
        assert report["all_warnings"][0]["error_code"] == "W999"

        assert len(handler.get_errors_for_file("other.ledger")) == 1
        handler.clear_errors()
        assert not handler.has_errors()
