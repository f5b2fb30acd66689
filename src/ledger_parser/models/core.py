"""Core data models for the ledger journal parser."""

import datetime
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import List, Optional, Union


Account = str


@dataclass(frozen=True)
class Date:
    """Calendar date as written in the journal.

    No calendar validation is done here beyond the month and day ranges
    checked by the parser, and two-digit years are kept as written.

    Attributes:
        year: Year as written (e.g. 2016 or 14)
        month: Month number, 1..12
        day: Day of month, 1..31
    """
    year: int
    month: int
    day: int

    def to_date(self) -> datetime.date:
        """Convert to datetime.date, raising ValueError for impossible days"""
        return datetime.date(self.year, self.month, self.day)

    def __str__(self) -> str:
        return f"{self.year:04d}/{self.month:02d}/{self.day:02d}"


@dataclass(frozen=True)
class Amount:
    """Numeric quantity paired with its commodity symbol or code"""
    number: Decimal
    commodity: str

    def __str__(self) -> str:
        return f"{self.number} {self.commodity}"


@dataclass(frozen=True)
class Note:
    """Free-form comment text attached to a transaction or posting"""
    text: str


class TransactionState(Enum):
    """Reconciliation marker written after the transaction date"""
    CLEARED = "*"
    PENDING = "!"


@dataclass
class Posting:
    """One account line of a transaction.

    Attributes:
        account: Colon separated account path
        amount: Posted amount, or None for an elided posting
        notes: Trailing and continuation comments, in textual order
    """
    account: Account
    amount: Optional[Amount] = None
    notes: List[Note] = field(default_factory=list)


@dataclass
class Transaction:
    """Dated journal entry made of one or more postings.

    Attributes:
        date: Transaction date
        state: Cleared/pending marker, None when absent
        title: Title text exactly as written
        notes: Transaction level comments (not posting comments)
        postings: Posting lines, never empty for a parsed transaction
    """
    date: Date
    state: Optional[TransactionState]
    title: str
    notes: List[Note] = field(default_factory=list)
    postings: List[Posting] = field(default_factory=list)


@dataclass(frozen=True)
class AccountDirective:
    """Top-level `account` declaration"""
    name: Account


Entry = Union[Transaction, AccountDirective]


@dataclass
class ParserConfig:
    """Configuration for journal reading and export"""
    journal_extensions: Optional[List[str]] = None
    encoding: str = "utf-8"
    skip_invalid_entries: bool = False
    log_directory: str = "logs"
    export_directory: str = "data"

    def __post_init__(self):
        if self.journal_extensions is None:
            self.journal_extensions = ['.ledger', '.journal', '.dat']
