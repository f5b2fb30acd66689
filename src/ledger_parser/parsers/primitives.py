"""Primitive lexical rules: dates, numbers, amounts and literals."""

import re
from decimal import Decimal
from typing import Tuple

from .base import Cursor, LexicalError, ParseError
from ..models.core import Amount, Date


_DATE_START = re.compile(r'(\d{4}|\d{2})(?!\d)([/-])(\d{1,2})(?!\d)')
_DATE_SEPARATOR = re.compile(r'[/-]')
_DATE_DAY = re.compile(r'(\d{1,2})(?!\d)')

NUMBER = re.compile(r'[+-]?\d+(?:,\d+)*(?:\.\d+)?')

# Currency symbols such as $ or £: anything but whitespace, word characters
# and grammar punctuation.
SYMBOL = re.compile(r'''[^\s\w.,;:'"()\[\]{}<>/*+\-=&|!~@#%^?\\]+''')
CODE = re.compile(r'[A-Z]+(?![A-Za-z_])')
_SIGN = re.compile(r'[+-]?')
_SPACES = re.compile(r'[ \t]*')

_STRING = re.compile(r'"([^"\n]*)"')
_REGEX = re.compile(r'/((?:\\.|[^/\\\n])*)/')
IDENTIFIER = re.compile(r'[A-Za-z_][A-Za-z0-9_]*')


def parse_date(cursor: Cursor) -> Tuple[Date, Cursor]:
    """Parse ``YYYY/MM/DD`` or ``YY-MM-DD``; both separators must agree"""
    result = cursor.match(_DATE_START)
    if result is None:
        raise LexicalError("date (YYYY/MM/DD or YY-MM-DD)", cursor)
    m, rest = result
    separator = m.group(2)

    result = rest.match(_DATE_SEPARATOR)
    if result is None:
        raise LexicalError(f"'{separator}' before day", rest)
    if result[0].group(0) != separator:
        raise LexicalError(f"'{separator}' before day (date separators must match)", rest)
    rest = result[1]

    result = rest.match(_DATE_DAY)
    if result is None:
        raise LexicalError("day of month", rest)
    day_match, rest = result

    month, day = int(m.group(3)), int(day_match.group(1))
    if not 1 <= month <= 12:
        raise LexicalError("month between 1 and 12", cursor.seek(m.start(3)), m.group(3))
    if not 1 <= day <= 31:
        raise LexicalError("day between 1 and 31", cursor.seek(day_match.start(1)), day_match.group(1))
    return Date(int(m.group(1)), month, day), rest


def parse_number(cursor: Cursor) -> Tuple[Decimal, Cursor]:
    """Parse a signed decimal; ',' thousands grouping is dropped"""
    result = cursor.match(NUMBER)
    if result is None:
        raise LexicalError("number", cursor)
    m, rest = result
    return Decimal(m.group(0).replace(',', '')), rest


def parse_commodity(cursor: Cursor) -> Tuple[str, Cursor]:
    """Parse a currency symbol run or an upper case commodity code"""
    result = cursor.match(SYMBOL) or cursor.match(CODE)
    if result is None:
        raise LexicalError("commodity", cursor)
    m, rest = result
    return m.group(0), rest


def parse_amount(cursor: Cursor) -> Tuple[Amount, Cursor]:
    """Parse ``<commodity> <number>`` or ``<number> <commodity>``.

    The space is optional in both shapes. A prefix commodity may itself be
    signed (``-$100``), but then the number may not carry a second sign.
    """
    try:
        sign, rest = cursor.match(_SIGN)
        commodity, rest = parse_commodity(rest)
        _, rest = rest.match(_SPACES)
        if sign.group(0) and rest.peek() in ('+', '-'):
            raise LexicalError("unsigned number after signed commodity", rest)
        number, rest = parse_number(rest)
        if sign.group(0) == '-':
            number = -number
        return Amount(number, commodity), rest
    except ParseError:
        pass

    try:
        number, rest = parse_number(cursor)
        _, rest = rest.match(_SPACES)
        commodity, rest = parse_commodity(rest)
    except ParseError:
        raise LexicalError("amount", cursor)
    return Amount(number, commodity), rest


def parse_string_literal(cursor: Cursor) -> Tuple[str, Cursor]:
    if cursor.peek() != '"':
        raise LexicalError("string literal", cursor)
    result = cursor.match(_STRING)
    if result is None:
        raise LexicalError("closing '\"'", cursor.seek(cursor.line_end()))
    m, rest = result
    return m.group(1), rest


def parse_regex_literal(cursor: Cursor) -> Tuple[str, Cursor]:
    """Parse ``/pattern/``; the pattern is returned verbatim, escapes included"""
    if cursor.peek() != '/':
        raise LexicalError("regular expression literal", cursor)
    result = cursor.match(_REGEX)
    if result is None:
        raise LexicalError("closing '/'", cursor.seek(cursor.line_end()))
    m, rest = result
    return m.group(1), rest


def parse_identifier(cursor: Cursor) -> Tuple[str, Cursor]:
    result = cursor.match(IDENTIFIER)
    if result is None:
        raise LexicalError("identifier", cursor)
    m, rest = result
    return m.group(0), rest
