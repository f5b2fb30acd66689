"""Parser and syntax model for plain-text ledger journals."""

import re
from typing import Any

from .parsers import (
    Cursor,
    ParseError,
    StructuralError,
    parse_account,
    parse_account_directive,
    parse_amount,
    parse_comment,
    parse_date,
    parse_entry,
    parse_expression,
    parse_journal,
    parse_posting,
    parse_transaction,
)

__version__ = "0.1.0"

GRAMMARS = {
    'transaction': parse_transaction,
    'expression': parse_expression,
    'accountDirective': parse_account_directive,
    'posting': parse_posting,
    'date': parse_date,
    'amount': parse_amount,
    'account': parse_account,
    'comment': parse_comment,
    'entry': parse_entry,
}

_TRAILING_WHITESPACE = re.compile(r'\s*')


def parse(text: str, grammar: str = 'journal', source_name: str = "") -> Any:
    """Parse the whole of ``text`` with the named entry grammar.

    ``grammar`` is ``'journal'`` or one of the keys of ``GRAMMARS``. Only
    trailing whitespace may be left over.
    """
    if grammar == 'journal':
        return parse_journal(text, source_name)
    if grammar not in GRAMMARS:
        raise ValueError(f"Unknown grammar: {grammar}")

    value, rest = GRAMMARS[grammar](Cursor(text, 0, source_name))
    _, rest = rest.match(_TRAILING_WHITESPACE)
    if not rest.at_end:
        raise StructuralError(f"end of {grammar}", rest)
    return value


__all__ = ['GRAMMARS', 'ParseError', 'parse', '__version__']
