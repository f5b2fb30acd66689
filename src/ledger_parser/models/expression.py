"""Syntax tree for filter expressions.

Every node is an immutable dataclass and ``Expression`` is the closed union
of them, so consumers can dispatch with ``isinstance`` over a fixed set.
``str()`` renders a fully parenthesized prefix form::

    >>> str(InfixExpr('+', NumberExpr(Decimal(1)), IdentExpr('x')))
    '(+ 1 x)'
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Union

from .core import Amount


@dataclass(frozen=True)
class NumberExpr:
    value: Decimal

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class AmountExpr:
    amount: Amount

    def __str__(self) -> str:
        return f"[{self.amount}]"


@dataclass(frozen=True)
class IdentExpr:
    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class StringExpr:
    value: str

    def __str__(self) -> str:
        return f'"{self.value}"'


@dataclass(frozen=True)
class RegexExpr:
    pattern: str

    def __str__(self) -> str:
        return f"/{self.pattern}/"


@dataclass(frozen=True)
class InfixExpr:
    """Binary operator node; owns both operand subtrees"""
    operator: str
    lhs: 'Expression'
    rhs: 'Expression'

    def __str__(self) -> str:
        return f"({self.operator} {self.lhs} {self.rhs})"


Expression = Union[NumberExpr, AmountExpr, IdentExpr, StringExpr, RegexExpr, InfixExpr]
