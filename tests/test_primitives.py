"""Tests for the primitive lexical parsers."""

from decimal import Decimal

import pytest

from ledger_parser import parse
from ledger_parser.models.core import Amount, Date
from ledger_parser.parsers.base import Cursor, LexicalError, ParseError
from ledger_parser.parsers.primitives import (
    parse_amount,
    parse_date,
    parse_identifier,
    parse_number,
    parse_regex_literal,
    parse_string_literal,
)


class TestDateParser:
    """Test cases for date parsing"""

    @pytest.mark.parametrize("text, expected", [
        ("2016/06/21", Date(2016, 6, 21)),
        ("14-1-31", Date(14, 1, 31)),
        ("2016-12-01", Date(2016, 12, 1)),
        ("16/2/30", Date(16, 2, 30)),
    ])
    def test_valid_dates(self, text, expected):
        """Test both accepted date forms"""
        assert parse(text, 'date') == expected

    def test_date_round_trip(self):
        """Test that formatted dates parse back to the same value"""
        for year, month, day in [(2016, 1, 1), (1999, 12, 31), (2024, 2, 29)]:
            assert parse(f"{year:04d}/{month:02d}/{day:02d}", 'date') == Date(year, month, day)
            assert parse(f"{year % 100:02d}-{month}-{day}", 'date') == Date(year % 100, month, day)

    def test_mixed_separators_fail(self):
        """Test that a date must use one separator throughout"""
        with pytest.raises(LexicalError) as exc_info:
            parse("2016/06-21", 'date')
        assert exc_info.value.column == 8

    @pytest.mark.parametrize("text", ["2016/13/01", "2016/00/10", "2016/01/32", "2016/01", "216/01/01", "x"])
    def test_invalid_dates(self, text):
        """Test malformed and out of range dates"""
        with pytest.raises(ParseError):
            parse(text, 'date')

    def test_date_leaves_rest(self):
        """Test that the date parser consumes only the date"""
        date, rest = parse_date(Cursor("2016/01/31 Title"))
        assert date == Date(2016, 1, 31)
        assert rest.offset == 10

    def test_date_helpers(self):
        """Test string form and calendar conversion"""
        assert str(Date(16, 1, 5)) == "0016/01/05"
        assert Date(2016, 1, 5).to_date().isoformat() == "2016-01-05"
        with pytest.raises(ValueError):
            Date(2016, 2, 30).to_date()


class TestNumberParser:
    """Test cases for number parsing"""

    @pytest.mark.parametrize("text, expected", [
        ("100", Decimal("100")),
        ("-12.50", Decimal("-12.50")),
        ("+3", Decimal("3")),
        ("1,000,000.25", Decimal("1000000.25")),
    ])
    def test_numbers(self, text, expected):
        value, rest = parse_number(Cursor(text))
        assert value == expected
        assert rest.at_end

    def test_fraction_precision_preserved(self):
        value, _ = parse_number(Cursor("10.010"))
        assert str(value) == "10.010"

    def test_not_a_number(self):
        with pytest.raises(LexicalError):
            parse_number(Cursor("USD"))


class TestAmountParser:
    """Test cases for amount parsing"""

    @pytest.mark.parametrize("text, expected", [
        ("$ 100.00", Amount(Decimal("100.00"), "$")),
        ("100.00$", Amount(Decimal("100.00"), "$")),
        ("100 USD", Amount(Decimal("100"), "USD")),
        ("1,000.00 EUR", Amount(Decimal("1000.00"), "EUR")),
        ("€12", Amount(Decimal("12"), "€")),
        ("EUR 5", Amount(Decimal("5"), "EUR")),
        ("-60.00 $", Amount(Decimal("-60.00"), "$")),
        ("USD100", Amount(Decimal("100"), "USD")),
        ("100USD", Amount(Decimal("100"), "USD")),
        ("$-5", Amount(Decimal("-5"), "$")),
        ("-$100", Amount(Decimal("-100"), "$")),
        ("-EUR 12.50", Amount(Decimal("-12.50"), "EUR")),
    ])
    def test_amount_shapes(self, text, expected):
        """Test commodity before and after the number"""
        assert parse(text, 'amount') == expected

    def test_commodity_side_not_recorded(self):
        """Test that both shapes give equal amounts"""
        assert parse("$ 100.00", 'amount') == parse("100.00$", 'amount')

    def test_amount_stops_before_note(self):
        amount, rest = parse_amount(Cursor("200 $  ;note"))
        assert amount == Amount(Decimal("200"), "$")
        assert rest.offset == 5

    @pytest.mark.parametrize("text", ["100", "$", "USD", "usd 10", "-$-5", "-$"])
    def test_amount_requires_number_and_commodity(self, text):
        with pytest.raises(LexicalError):
            parse_amount(Cursor(text))


class TestLiteralParsers:
    """Test cases for string, regex and identifier literals"""

    def test_string_literal(self):
        value, rest = parse_string_literal(Cursor('"EUR" rest'))
        assert value == "EUR"
        assert rest.offset == 5

    def test_unterminated_string(self):
        with pytest.raises(LexicalError):
            parse_string_literal(Cursor('"EUR'))

    def test_regex_literal_verbatim(self):
        value, _ = parse_regex_literal(Cursor(r'/^Income:Core\/Data$/'))
        assert value == r'^Income:Core\/Data$'

    def test_unterminated_regex(self):
        with pytest.raises(LexicalError):
            parse_regex_literal(Cursor('/abc'))

    def test_identifier(self):
        value, rest = parse_identifier(Cursor("true && x"))
        assert value == "true"
        assert rest.offset == 4

    def test_identifier_cannot_start_with_digit(self):
        with pytest.raises(LexicalError):
            parse_identifier(Cursor("1abc"))
