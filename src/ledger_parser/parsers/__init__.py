"""Grammar rules for ledger journals and filter expressions"""

from .base import Cursor, ParseError, LexicalError, StructuralError
from .primitives import (
    parse_amount,
    parse_commodity,
    parse_date,
    parse_identifier,
    parse_number,
    parse_regex_literal,
    parse_string_literal,
)
from .account import parse_account
from .journal import (
    iter_entries,
    parse_account_directive,
    parse_comment,
    parse_entry,
    parse_journal,
    parse_posting,
    parse_transaction,
    skip_entry,
)
from .expression import ExpressionParser, Lexer, parse_expression, parse_filter

__all__ = [
    'Cursor',
    'ParseError',
    'LexicalError',
    'StructuralError',
    'parse_amount',
    'parse_commodity',
    'parse_date',
    'parse_identifier',
    'parse_number',
    'parse_regex_literal',
    'parse_string_literal',
    'parse_account',
    'iter_entries',
    'parse_account_directive',
    'parse_comment',
    'parse_entry',
    'parse_journal',
    'parse_posting',
    'parse_transaction',
    'skip_entry',
    'ExpressionParser',
    'Lexer',
    'parse_expression',
    'parse_filter',
]
