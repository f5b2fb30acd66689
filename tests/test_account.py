"""Tests for account path parsing."""

import pytest

from ledger_parser import parse
from ledger_parser.parsers.account import parse_account
from ledger_parser.parsers.base import Cursor, StructuralError


class TestAccountParser:
    """Test cases for account paths"""

    @pytest.mark.parametrize("text", [
        "Payp:x test",
        "Assets:Giro Konto",
        "Expenses:Food:Eating Out",
        "Girokonto",
    ])
    def test_whole_input_is_account(self, text):
        """Test that single interior spaces stay part of the account"""
        assert parse(text, 'account') == text

    def test_double_space_ends_account(self):
        """Test that two spaces separate the account from what follows"""
        account, rest = parse_account(Cursor("Paypal:Test  Hello"))
        assert account == "Paypal:Test"
        assert rest.text[rest.offset:] == "  Hello"

    def test_tab_ends_account(self):
        account, rest = parse_account(Cursor("Assets:Cash\t$ 5"))
        assert account == "Assets:Cash"
        assert rest.peek() == "\t"

    def test_leading_whitespace_fails(self):
        """Test that an account may not start with whitespace"""
        with pytest.raises(StructuralError) as exc_info:
            parse_account(Cursor(" Paypal"))
        assert "not whitespace" in exc_info.value.expected

    def test_comment_is_not_an_account(self):
        with pytest.raises(StructuralError):
            parse_account(Cursor("; a comment"))

    def test_segments_never_empty(self):
        """Test that a trailing colon is not part of the account"""
        account, rest = parse_account(Cursor("Assets:"))
        assert account == "Assets"
        assert rest.peek() == ":"
