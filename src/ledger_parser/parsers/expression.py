"""Filter expression lexer and Pratt parser.

Filter expressions select or compute over postings, for example::

    account =~ /^Expenses:/ && commodity == "EUR"
    amount * 2 + 10 USD

Binary operators, loosest first: ``&&``; ``==`` and ``=~``; ``+`` and
``-``; ``*`` and ``/``. All are left-associative and parentheses group.
"""

import re
from collections import deque
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Deque, Iterator, Optional, Tuple

from .base import Cursor, LexicalError, ParseError, StructuralError
from .primitives import (
    CODE,
    IDENTIFIER,
    NUMBER,
    SYMBOL,
    parse_number,
    parse_regex_literal,
    parse_string_literal,
)
from ..models.core import Amount
from ..models.expression import (
    AmountExpr,
    Expression,
    IdentExpr,
    InfixExpr,
    NumberExpr,
    RegexExpr,
    StringExpr,
)


class TokenKind(Enum):
    NUMBER = "number"
    SYMBOL = "commodity symbol"
    IDENT = "identifier"
    STRING = "string"
    REGEX = "regular expression"
    OPERATOR = "operator"
    LPAREN = "'('"
    RPAREN = "')'"
    INVALID = "invalid input"
    EOF = "end of expression"


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    value: str
    start: Cursor
    end: Cursor
    error: Optional[ParseError] = None


BINDING_POWERS = {
    '&&': 10,
    '==': 20,
    '=~': 20,
    '+': 30,
    '-': 30,
    '*': 40,
    '/': 40,
}

_WHITESPACE = re.compile(r'\s*')
_OPERATOR = re.compile(r'&&|==|=~|[+\-*/]')

# Tokens after which an operator, not an operand, is expected
_OPERAND_END = {
    TokenKind.NUMBER,
    TokenKind.SYMBOL,
    TokenKind.IDENT,
    TokenKind.STRING,
    TokenKind.REGEX,
    TokenKind.RPAREN,
}


class Lexer:
    """Lazy tokenizer over a cursor.

    ``/``, ``+`` and ``-`` depend on the previous token: where an operand is
    expected they open a regex literal or sign a number, otherwise they are
    operators. Bad input becomes an INVALID token so the parser decides
    whether it is an error or simply the end of the expression.
    """

    def __init__(self, cursor: Cursor):
        self.cursor = cursor
        self.previous: Optional[TokenKind] = None

    def __iter__(self) -> Iterator[Token]:
        while True:
            token = self._next_token()
            self.previous = token.kind
            yield token
            if token.kind in (TokenKind.EOF, TokenKind.INVALID):
                return

    def _next_token(self) -> Token:
        _, start = self.cursor.match(_WHITESPACE)
        self.cursor = start
        if start.at_end:
            return Token(TokenKind.EOF, '', start, start)

        ch = start.peek()
        expect_operand = self.previous not in _OPERAND_END

        if ch == '(':
            return self._token(TokenKind.LPAREN, start, start.advance(1))
        if ch == ')':
            return self._token(TokenKind.RPAREN, start, start.advance(1))
        if ch == '"':
            return self._literal(TokenKind.STRING, parse_string_literal, start)
        if ch == '/' and expect_operand:
            return self._literal(TokenKind.REGEX, parse_regex_literal, start)
        if expect_operand or ch.isdigit():
            result = start.match(NUMBER)
            if result is not None:
                return self._token(TokenKind.NUMBER, start, result[1])

        for kind, pattern in ((TokenKind.OPERATOR, _OPERATOR),
                              (TokenKind.IDENT, IDENTIFIER),
                              (TokenKind.SYMBOL, SYMBOL)):
            result = start.match(pattern)
            if result is not None:
                return self._token(kind, start, result[1])

        return Token(TokenKind.INVALID, ch, start, start.advance(1))

    def _token(self, kind: TokenKind, start: Cursor, end: Cursor) -> Token:
        self.cursor = end
        return Token(kind, start.text[start.offset:end.offset], start, end)

    def _literal(self, kind, parse, start: Cursor) -> Token:
        try:
            value, end = parse(start)
        except LexicalError as e:
            return Token(TokenKind.INVALID, start.peek(), start, start.advance(1), e)
        self.cursor = end
        return Token(kind, value, start, end)


class ExpressionParser:
    """Operator precedence parser for filter expressions"""

    def __init__(self, cursor: Cursor):
        self._tokens = iter(Lexer(cursor))
        self._buffer: Deque[Token] = deque()

    def _peek(self, distance: int = 0) -> Token:
        while len(self._buffer) <= distance:
            token = next(self._tokens, None)
            if token is None:
                # The lexer stops after EOF/INVALID; repeat that token.
                token = self._buffer[-1]
            self._buffer.append(token)
        return self._buffer[distance]

    def _advance(self, count: int = 1) -> Token:
        self._peek(count - 1)
        token = self._buffer[0]
        for _ in range(count):
            self._buffer.popleft()
        return token

    def parse(self) -> Tuple[Expression, Cursor]:
        """Parse the longest expression at the start of the input"""
        expression = self._parse_expression(0)
        return expression, self._peek().start

    def _parse_expression(self, min_bp: int) -> Expression:
        left = self._parse_operand()
        while True:
            token = self._peek()
            if token.kind is not TokenKind.OPERATOR:
                return left
            bp = BINDING_POWERS[token.value]
            if bp <= min_bp:
                return left
            self._advance()
            right = self._parse_expression(bp)
            left = InfixExpr(token.value, left, right)

    def _parse_operand(self) -> Expression:
        token = self._peek()

        if token.kind is TokenKind.NUMBER:
            commodity = self._peek(1)
            if self._is_commodity(commodity):
                self._advance(2)
                return AmountExpr(Amount(self._number(token), commodity.value))
            self._advance()
            return NumberExpr(self._number(token))

        # -$100: a sign written directly before a prefix commodity
        if token.kind is TokenKind.OPERATOR and token.value in ('+', '-'):
            commodity, number = self._peek(1), self._peek(2)
            if (self._is_commodity(commodity) and self._adjacent(token, commodity)
                    and number.kind is TokenKind.NUMBER):
                self._advance(3)
                value = self._signed(token, self._number(number))
                return AmountExpr(Amount(value, commodity.value))

        if self._is_commodity(token):
            signed = self._signed_number(1)
            if signed is not None:
                value, count = signed
                self._advance(count + 1)
                return AmountExpr(Amount(value, token.value))
            if token.kind is TokenKind.SYMBOL:
                raise LexicalError("number after commodity symbol", self._peek(1).start)

        if token.kind is TokenKind.IDENT:
            self._advance()
            return IdentExpr(token.value)
        if token.kind is TokenKind.STRING:
            self._advance()
            return StringExpr(token.value)
        if token.kind is TokenKind.REGEX:
            self._advance()
            return RegexExpr(token.value)

        if token.kind is TokenKind.LPAREN:
            self._advance()
            inner = self._parse_expression(0)
            closing = self._peek()
            if closing.kind is not TokenKind.RPAREN:
                raise StructuralError("')'", closing.start)
            self._advance()
            return inner

        if token.kind is TokenKind.INVALID:
            raise token.error or LexicalError("operand", token.start, token.value)
        raise StructuralError("operand", token.start)

    def _signed_number(self, distance: int) -> Optional[Tuple[Decimal, int]]:
        """Number at ``distance`` and its token count, folding in a sign
        operator written directly before it (``$-5`` lexes as ``$``, ``-``, ``5``)
        """
        token = self._peek(distance)
        if token.kind is TokenKind.NUMBER:
            return self._number(token), 1
        digits = self._peek(distance + 1)
        if (token.kind is TokenKind.OPERATOR and token.value in ('+', '-')
                and digits.kind is TokenKind.NUMBER and self._adjacent(token, digits)
                and digits.value[0].isdigit()):
            return self._signed(token, self._number(digits)), 2
        return None

    @staticmethod
    def _number(token: Token) -> Decimal:
        return parse_number(token.start)[0]

    @staticmethod
    def _signed(sign: Token, value: Decimal) -> Decimal:
        return -value if sign.value == '-' else value

    @staticmethod
    def _adjacent(left: Token, right: Token) -> bool:
        return left.end.offset == right.start.offset

    @staticmethod
    def _is_code(token: Token) -> bool:
        return token.kind is TokenKind.IDENT and CODE.fullmatch(token.value) is not None

    def _is_commodity(self, token: Token) -> bool:
        return token.kind is TokenKind.SYMBOL or self._is_code(token)


def parse_expression(cursor: Cursor) -> Tuple[Expression, Cursor]:
    """Parse a filter expression prefix and return the cursor after it"""
    return ExpressionParser(cursor).parse()


def parse_filter(text: str, source_name: str = "") -> Expression:
    """Parse a complete filter expression; trailing input is an error"""
    expression, rest = parse_expression(Cursor(text, 0, source_name))
    _, rest = rest.match(_WHITESPACE)
    if not rest.at_end:
        raise StructuralError("operator or end of expression", rest)
    return expression
