"""Parser for KQL query text."""

from __future__ import annotations

import re
from typing import Callable, List, Tuple, TypeVar

from kodecd.query_ast import (
    And,
    BooleanLiteral,
    Comparison,
    ComparisonOp,
    EntityType,
    Expression,
    FromClause,
    MethodCall,
    Not,
    NumberLiteral,
    Or,
    Predicate,
    PropertyAccess,
    Query,
    SelectBoth,
    SelectClause,
    SelectItem,
    SelectMessage,
    SelectVariable,
    StringLiteral,
    Variable,
    WhereClause,
)

__all__ = ["QueryParseError", "parse_query", "parse_where_clause"]

T = TypeVar("T")

_WHITESPACE = " \t\r\n"
_IDENTIFIER = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")
_STRING = re.compile(r'"([^"]+)"|\'([^\']+)\'')
_NUMBER = re.compile(r"-?[0-9]+")
_I64_MIN, _I64_MAX = -(2**63), 2**63 - 1

_OPERATORS = [
    ("!=", ComparisonOp.NOT_EQUAL),
    ("==", ComparisonOp.EQUAL),
    ("=", ComparisonOp.EQUAL),
    ("CONTAINS", ComparisonOp.CONTAINS),
    ("STARTS_WITH", ComparisonOp.STARTS_WITH),
    ("ENDS_WITH", ComparisonOp.ENDS_WITH),
    ("MATCHES", ComparisonOp.MATCHES),
]


class QueryParseError(ValueError):
    """Raised when query text is not a valid query."""

    def __init__(self, message: str, offset: int | None = None) -> None:
        super().__init__(message)
        self.offset = offset


class _Backtrack(Exception):
    pass


class _Parser:
    def __init__(self, text: str) -> None:
        self.text = text
        self.furthest = 0

    # -- primitives -------------------------------------------------------

    def _fail(self, pos: int) -> _Backtrack:
        self.furthest = max(self.furthest, pos)
        return _Backtrack()

    def skip_ws(self, pos: int) -> int:
        text = self.text
        while pos < len(text) and text[pos] in _WHITESPACE:
            pos += 1
        return pos

    def ws(self, item: Callable[[int], Tuple[T, int]], pos: int) -> Tuple[T, int]:
        value, pos = item(self.skip_ws(pos))
        return value, self.skip_ws(pos)

    def char(self, pos: int, ch: str) -> int:
        pos = self.skip_ws(pos)
        if self.text.startswith(ch, pos):
            return self.skip_ws(pos + len(ch))
        raise self._fail(pos)

    def keyword(self, pos: int, word: str) -> int:
        pos = self.skip_ws(pos)
        if self.text[pos : pos + len(word)].lower() == word.lower():
            return self.skip_ws(pos + len(word))
        raise self._fail(pos)

    def regex(self, pattern: re.Pattern[str], pos: int) -> re.Match[str]:
        match = pattern.match(self.text, pos)
        if match is None:
            raise self._fail(pos)
        return match

    def identifier(self, pos: int) -> Tuple[str, int]:
        match = self.regex(_IDENTIFIER, pos)
        return match.group(0), match.end()

    def string_literal(self, pos: int) -> Tuple[str, int]:
        match = self.regex(_STRING, pos)
        value = match.group(1) if match.group(1) is not None else match.group(2)
        return value, match.end()

    def number_literal(self, pos: int) -> Tuple[int, int]:
        match = self.regex(_NUMBER, pos)
        value = int(match.group(0))
        if not _I64_MIN <= value <= _I64_MAX:
            raise QueryParseError(
                f"Parse error: number literal out of range: {match.group(0)}", pos
            )
        return value, match.end()

    def boolean_literal(self, pos: int) -> Tuple[bool, int]:
        if self.text[pos : pos + 4].lower() == "true":
            return True, pos + 4
        if self.text[pos : pos + 5].lower() == "false":
            return False, pos + 5
        raise self._fail(pos)

    def separated(
        self,
        pos: int,
        item: Callable[[int], Tuple[T, int]],
        separator: Callable[[int], int],
        *,
        at_least_one: bool,
    ) -> Tuple[List[T], int]:
        try:
            first, pos = item(pos)
        except _Backtrack:
            if at_least_one:
                raise
            return [], pos
        items = [first]
        while True:
            try:
                value, after = item(separator(pos))
            except _Backtrack:
                return items, pos
            items.append(value)
            pos = after

    # -- expressions ------------------------------------------------------

    def primary_expression(self, pos: int) -> Tuple[Expression, int]:
        try:
            after = self.char(pos, "(")
            expr, after = self.expression(after)
            return expr, self.char(after, ")")
        except _Backtrack:
            pass
        try:
            flag, after = self.boolean_literal(pos)
            return BooleanLiteral(flag), after
        except _Backtrack:
            pass
        try:
            number, after = self.number_literal(pos)
            return NumberLiteral(number), after
        except _Backtrack:
            pass
        try:
            text, after = self.string_literal(pos)
            return StringLiteral(text), after
        except _Backtrack:
            pass
        name, after = self.identifier(pos)
        return Variable(name), after

    def expression(self, pos: int) -> Tuple[Expression, int]:
        expr, pos = self.primary_expression(pos)
        while True:
            try:
                after_dot = self.char(pos, ".")
                name, after_name = self.ws(self.identifier, after_dot)
            except _Backtrack:
                break
            try:
                after_paren = self.char(after_name, "(")
            except _Backtrack:
                expr = PropertyAccess(expr, name)
                pos = after_name
                continue
            args, after_args = self.separated(
                after_paren,
                self.expression,
                lambda p: self.char(p, ","),
                at_least_one=False,
            )
            try:
                after_close = self.char(after_args, ")")
            except _Backtrack:
                break
            expr = MethodCall(expr, name, args)
            pos = after_close
        return expr, pos

    def comparison_op(self, pos: int) -> Tuple[ComparisonOp, int]:
        for word, op in _OPERATORS:
            try:
                return op, self.keyword(pos, word)
            except _Backtrack:
                continue
        raise self._fail(self.skip_ws(pos))

    # -- predicates -------------------------------------------------------

    def comparison_predicate(self, pos: int) -> Tuple[Predicate, int]:
        left, pos = self.ws(self.expression, pos)
        operator, pos = self.ws(self.comparison_op, pos)
        right, pos = self.ws(self.expression, pos)
        return Comparison(left, operator, right), pos

    def primary_predicate(self, pos: int) -> Tuple[Predicate, int]:
        try:
            after = self.char(pos, "(")
            pred, after = self.predicate(after)
            return pred, self.char(after, ")")
        except _Backtrack:
            pass
        try:
            after = self.keyword(pos, "NOT")
            inner, after = self.primary_predicate(after)
            return Not(inner), after
        except _Backtrack:
            pass
        return self.comparison_predicate(pos)

    def _chain(
        self,
        pos: int,
        operand: Callable[[int], Tuple[Predicate, int]],
        word: str,
        combine: Callable[[Predicate, Predicate], Predicate],
    ) -> Tuple[Predicate, int]:
        result, pos = operand(pos)
        while True:
            try:
                right, after = operand(self.keyword(pos, word))
            except _Backtrack:
                return result, pos
            result = combine(result, right)
            pos = after

    def and_predicate(self, pos: int) -> Tuple[Predicate, int]:
        return self._chain(pos, self.primary_predicate, "AND", And)

    def predicate(self, pos: int) -> Tuple[Predicate, int]:
        return self._chain(pos, self.and_predicate, "OR", Or)

    # -- clauses ----------------------------------------------------------

    def entity_type(self, pos: int) -> Tuple[EntityType, int]:
        for entity in EntityType:
            word = entity.value
            if self.text[pos : pos + len(word)].lower() == word.lower():
                return entity, pos + len(word)
        raise self._fail(pos)

    def from_clause(self, pos: int) -> Tuple[FromClause, int]:
        pos = self.keyword(pos, "FROM")
        entity, pos = self.ws(self.entity_type, pos)
        pos = self.keyword(pos, "AS")
        variable, pos = self.ws(self.identifier, pos)
        return FromClause(entity, variable), pos

    def where_clause(self, pos: int) -> Tuple[WhereClause, int]:
        pos = self.keyword(pos, "WHERE")
        predicates, pos = self.separated(
            pos,
            self.predicate,
            lambda p: self.keyword(p, "AND"),
            at_least_one=True,
        )
        return WhereClause(predicates), pos

    def select_item(self, pos: int) -> Tuple[SelectItem, int]:
        try:
            message, after = self.string_literal(pos)
            return SelectMessage(message), after
        except _Backtrack:
            name, after = self.identifier(pos)
            return SelectVariable(name), after

    def select_clause(self, pos: int) -> Tuple[SelectClause, int]:
        pos = self.keyword(pos, "SELECT")
        items, pos = self.separated(
            pos,
            lambda p: self.ws(self.select_item, p),
            lambda p: self.char(p, ","),
            at_least_one=True,
        )
        if (
            len(items) == 2
            and isinstance(items[0], SelectVariable)
            and isinstance(items[1], SelectMessage)
        ):
            items = [SelectBoth(items[0].variable, items[1].message)]
        return SelectClause(items), pos

    def query(self, pos: int) -> Tuple[Query, int]:
        from_clause, pos = self.ws(self.from_clause, pos)
        try:
            where, pos = self.ws(self.where_clause, pos)
        except _Backtrack:
            where = None
        select, pos = self.ws(self.select_clause, pos)
        return Query(from_clause, where, select), pos


def _run(source: str, rule: Callable[[_Parser, int], Tuple[T, int]]) -> T:
    parser = _Parser(source)
    try:
        value, pos = rule(parser, 0)
    except _Backtrack:
        offset = parser.furthest
        snippet = source[offset : offset + 30]
        raise QueryParseError(
            f"Parse error: unexpected input at offset {offset}: {snippet!r}", offset
        ) from None
    remaining = source[pos:].strip()
    if remaining:
        raise QueryParseError(
            f"Invalid query syntax: Unexpected input after query: {remaining}", pos
        )
    return value


def parse_query(source: str) -> Query:
    """Parse a complete query; raise QueryParseError if it is not valid."""
    return _run(source, _Parser.query)


def parse_where_clause(source: str) -> WhereClause:
    """Parse text consisting of a single WHERE clause."""
    return _run(source, lambda p, pos: p.ws(p.where_clause, pos))