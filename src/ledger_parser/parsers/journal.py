"""Journal grammar: comments, postings, transactions and directives.

A journal is a sequence of entries separated by blank lines::

    account Expenses:Food

    2016/01/31 * Groceries  ; weekly shop
        ; paid by card
        Expenses:Food      $ 42.10  ; vegetables
        Assets:Checking

Transaction headers and directives start in column zero; posting and
comment lines belonging to a transaction are indented.
"""

import re
from typing import Iterator, List, Optional, Tuple

from .account import parse_account
from .base import Cursor, ParseError, StructuralError
from .primitives import parse_amount, parse_date
from ..models.core import (
    AccountDirective,
    Entry,
    Note,
    Posting,
    Transaction,
    TransactionState,
)


_INDENT = re.compile(r'[ \t]+')
_OPTIONAL_INDENT = re.compile(r'[ \t]*')
_LINE_REST = re.compile(r'[^\r\n]*')
_END_OF_LINE = re.compile(r'[ \t]*(?=\r?\n|\Z)')
_NEWLINE = re.compile(r'\r?\n')
_STATE = re.compile(r'[ \t]+([*!])(?=[ \t])')
_TRAILING_COMMENT = re.compile(r'(?:[ \t]*\t|  )[ \t]*;')
_DIRECTIVE = re.compile(r'account[ \t]+')
_SEPARATORS = re.compile(r'(?:[ \t]*(?:;[^\r\n]*)?(?:\r?\n|\Z))+')
_ENTRY_START = re.compile(r'\r?\n(?=[^\s;])')
_BARE_COMMENT = re.compile(r';[ \t]*(?=\r?\n|\Z)')


def _separator(cursor: Cursor) -> Optional[Cursor]:
    """Consume a field separator: two or more blanks, or any run with a tab"""
    result = cursor.match(_OPTIONAL_INDENT)
    blanks = result[0].group(0)
    if len(blanks) >= 2 or '\t' in blanks:
        return result[1]
    return None


def _end_of_line(cursor: Cursor, expected: str) -> Cursor:
    result = cursor.match(_END_OF_LINE)
    if result is None:
        raise StructuralError(expected, cursor)
    return result[1]


def _indented_line(cursor: Cursor) -> Optional[Cursor]:
    """Cursor after the line break and indentation of an indented next line"""
    result = cursor.match(_NEWLINE)
    if result is None:
        return None
    result = result[1].match(_INDENT)
    if result is None:
        return None
    return result[1]


def parse_comment(cursor: Cursor) -> Tuple[Note, Cursor]:
    """Parse ``; text`` up to, not including, the end of the line"""
    if cursor.peek() != ';':
        raise StructuralError("';' comment", cursor)
    m, rest = cursor.advance(1).match(_LINE_REST)
    text = m.group(0).strip()
    if not text:
        raise StructuralError("comment text after ';'", cursor.advance(1))
    return Note(text), rest


def _attached_note(cursor: Cursor, notes: List[Note]) -> Cursor:
    """Parse a comment belonging to a transaction or posting into ``notes``.

    A bare ``;`` adds nothing.
    """
    result = cursor.match(_BARE_COMMENT)
    if result is not None:
        return result[1]
    note, cursor = parse_comment(cursor)
    notes.append(note)
    return cursor


def _continuation_notes(cursor: Cursor, notes: List[Note]) -> Cursor:
    """Append indented comment-only lines that follow the cursor"""
    while True:
        line = _indented_line(cursor)
        if line is None or line.peek() != ';':
            return cursor
        cursor = _attached_note(line, notes)
        cursor = _end_of_line(cursor, "end of line")


def _posting_line(cursor: Cursor) -> Tuple[Posting, Cursor]:
    account, cursor = parse_account(cursor)
    posting = Posting(account)

    field = _separator(cursor)
    if field is not None and field.peek() not in ('', '\r', '\n'):
        if field.peek() != ';':
            posting.amount, cursor = parse_amount(field)
            field = cursor.match(_OPTIONAL_INDENT)[1]
        if field.peek() == ';':
            cursor = _attached_note(field, posting.notes)

    cursor = _end_of_line(cursor, "amount, comment or end of line after posting")
    cursor = _continuation_notes(cursor, posting.notes)
    return posting, cursor


def parse_posting(cursor: Cursor) -> Tuple[Posting, Cursor]:
    """Parse a posting line and the comment lines that continue it.

    Grammar::

        [indent] account [sep amount] [sep? ; note] {newline indent ; note}

    where ``sep`` is two or more blanks or a tab.
    """
    _, cursor = cursor.match(_OPTIONAL_INDENT)
    return _posting_line(cursor)


def _parse_title(cursor: Cursor, notes: List[Note]) -> Tuple[str, Cursor]:
    """Split the rest of the header line into title and trailing note.

    A ';' only opens a comment when preceded by two blanks or a tab, so
    ``Rent ; March`` is a title while ``Rent  ; March`` carries a note.
    """
    line_end = cursor.line_end()
    comment = _TRAILING_COMMENT.search(cursor.text, cursor.offset, line_end)
    title_end = comment.start() if comment else line_end
    title = cursor.text[cursor.offset:title_end]
    if not title.strip():
        raise StructuralError("transaction title", cursor)
    if comment is None:
        return title, cursor.seek(line_end)
    return title, _attached_note(cursor.seek(comment.end() - 1), notes)


def parse_transaction(cursor: Cursor) -> Tuple[Transaction, Cursor]:
    """Parse a transaction header and its indented lines.

    Parsing stops before the first line that is neither an indented posting
    nor an indented comment; the line break itself is left unconsumed.
    """
    date, cursor = parse_date(cursor)

    state = None
    result = cursor.match(_STATE)
    if result is not None:
        state = TransactionState(result[0].group(1))
        cursor = result[1]

    result = cursor.match(_INDENT)
    if result is None:
        raise StructuralError("whitespace before transaction title", cursor)
    notes: List[Note] = []
    title, cursor = _parse_title(result[1], notes)

    transaction = Transaction(date=date, state=state, title=title, notes=notes)
    cursor = _continuation_notes(cursor, transaction.notes)

    while True:
        line = _indented_line(cursor)
        if line is None or line.match(_END_OF_LINE) is not None:
            break
        posting, cursor = _posting_line(line)
        transaction.postings.append(posting)

    if not transaction.postings:
        raise StructuralError("indented posting line", cursor)
    return transaction, cursor


def parse_account_directive(cursor: Cursor) -> Tuple[AccountDirective, Cursor]:
    """Parse ``account <name>``"""
    result = cursor.match(_DIRECTIVE)
    if result is None:
        raise StructuralError("'account' directive", cursor)
    name, cursor = parse_account(result[1])
    cursor = _end_of_line(cursor, "end of line after account name")
    return AccountDirective(name), cursor


def parse_entry(cursor: Cursor) -> Tuple[Entry, Cursor]:
    """Parse a directive or, failing that, a transaction"""
    try:
        return parse_account_directive(cursor)
    except ParseError:
        pass
    return parse_transaction(cursor)


def skip_entry(cursor: Cursor) -> Cursor:
    """Cursor at the next line that can start an entry, or end of input"""
    m = _ENTRY_START.search(cursor.text, cursor.offset)
    if m is None:
        return cursor.seek(len(cursor.text))
    return cursor.seek(m.end())


def skip_separators(cursor: Cursor) -> Cursor:
    """Skip blank lines and column-zero comment lines between entries"""
    result = cursor.match(_SEPARATORS)
    if result is None:
        return cursor
    return result[1]


def iter_entries(cursor: Cursor) -> Iterator[Entry]:
    """Yield journal entries until the end of input"""
    cursor = skip_separators(cursor)
    while not cursor.at_end:
        entry, cursor = parse_entry(cursor)
        yield entry
        if not cursor.at_end and cursor.match(_NEWLINE) is None:
            raise StructuralError("line break after entry", cursor)
        cursor = skip_separators(cursor)


def parse_journal(text: str, source_name: str = "") -> List[Entry]:
    """Parse a whole journal document into its entries"""
    return list(iter_entries(Cursor(text, 0, source_name)))
