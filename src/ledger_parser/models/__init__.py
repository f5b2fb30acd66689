"""Data models and structures"""

from .core import (
    Account,
    AccountDirective,
    Amount,
    Date,
    Entry,
    Note,
    ParserConfig,
    Posting,
    Transaction,
    TransactionState,
)
from .expression import (
    AmountExpr,
    Expression,
    IdentExpr,
    InfixExpr,
    NumberExpr,
    RegexExpr,
    StringExpr,
)

__all__ = [
    'Account',
    'AccountDirective',
    'Amount',
    'Date',
    'Entry',
    'Note',
    'ParserConfig',
    'Posting',
    'Transaction',
    'TransactionState',
    'AmountExpr',
    'Expression',
    'IdentExpr',
    'InfixExpr',
    'NumberExpr',
    'RegexExpr',
    'StringExpr',
]
