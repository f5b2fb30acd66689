"""Account path parser."""

import re
from typing import Tuple

from .base import Cursor, StructuralError
from ..models.core import Account


# A segment may hold single spaces; two spaces or a tab end the account.
# The first character may not be ';' so comment lines never read as postings.
_ACCOUNT = re.compile(
    r'[^\s:;][^\s:]*(?: [^\s:]+)*'
    r'(?::[^\s:]+(?: [^\s:]+)*)*'
)


def parse_account(cursor: Cursor) -> Tuple[Account, Cursor]:
    """Parse a colon separated account path such as ``Assets:Giro Konto``"""
    result = cursor.match(_ACCOUNT)
    if result is None:
        if cursor.peek().isspace():
            raise StructuralError("account name at start of field, not whitespace", cursor)
        raise StructuralError("account name", cursor)
    m, rest = result
    return m.group(0), rest
