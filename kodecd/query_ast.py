"""Syntax tree of KQL queries: entities, expressions, predicates and clauses."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple, Union


def _quote(text: str) -> str:
    if '"' in text and "'" not in text:
        return f"'{text}'"
    return f'"{text}"'


class EntityType(Enum):
    """Kind of syntax node a query ranges over."""

    METHOD_CALL = "MethodCall"
    FUNCTION_DECLARATION = "FunctionDeclaration"
    VARIABLE_DECLARATION = "VariableDeclaration"
    ASSIGNMENT = "Assignment"
    LITERAL = "Literal"
    BINARY_EXPRESSION = "BinaryExpression"
    CALL_EXPRESSION = "CallExpression"
    MEMBER_EXPRESSION = "MemberExpression"
    ANY_NODE = "AnyNode"

    def __str__(self) -> str:
        return self.value


class ComparisonOp(Enum):
    """Operator of a comparison predicate."""

    EQUAL = "=="
    NOT_EQUAL = "!="
    CONTAINS = "CONTAINS"
    STARTS_WITH = "STARTS_WITH"
    ENDS_WITH = "ENDS_WITH"
    MATCHES = "MATCHES"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Variable:
    """Reference to a query variable."""

    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class StringLiteral:
    value: str

    def __str__(self) -> str:
        return _quote(self.value)


@dataclass(frozen=True)
class NumberLiteral:
    value: int

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class BooleanLiteral:
    value: bool

    def __str__(self) -> str:
        return "true" if self.value else "false"


@dataclass(frozen=True)
class PropertyAccess:
    """``object.property``."""

    object: Expression
    property: str

    def __str__(self) -> str:
        return f"{self.object}.{self.property}"


@dataclass(frozen=True)
class MethodCall:
    """``object.method(arguments...)``."""

    object: Expression
    method: str
    arguments: Tuple[Expression, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "arguments", tuple(self.arguments))

    def __str__(self) -> str:
        args = ", ".join(str(a) for a in self.arguments)
        return f"{self.object}.{self.method}({args})"


Expression = Union[
    Variable, StringLiteral, NumberLiteral, BooleanLiteral, PropertyAccess, MethodCall
]


@dataclass(frozen=True)
class Comparison:
    """``left OP right``."""

    left: Expression
    operator: ComparisonOp
    right: Expression

    def __str__(self) -> str:
        return f"{self.left} {self.operator.value} {self.right}"


@dataclass(frozen=True)
class MethodName:
    """Compares the name of the method bound to a variable with a value."""

    variable: str
    operator: ComparisonOp
    value: str

    def __str__(self) -> str:
        return f"{self.variable}.name {self.operator.value} {_quote(self.value)}"


@dataclass(frozen=True)
class And:
    left: Predicate
    right: Predicate

    def __str__(self) -> str:
        return f"({self.left} AND {self.right})"


@dataclass(frozen=True)
class Or:
    left: Predicate
    right: Predicate

    def __str__(self) -> str:
        return f"({self.left} OR {self.right})"


@dataclass(frozen=True)
class Not:
    predicate: Predicate

    def __str__(self) -> str:
        return f"NOT {self.predicate}"


Predicate = Union[Comparison, MethodName, And, Or, Not]


@dataclass(frozen=True)
class SelectVariable:
    variable: str

    def __str__(self) -> str:
        return self.variable


@dataclass(frozen=True)
class SelectMessage:
    message: str

    def __str__(self) -> str:
        return _quote(self.message)


@dataclass(frozen=True)
class SelectBoth:
    """A selected variable together with the message reported for it."""

    variable: str
    message: str

    def __str__(self) -> str:
        return f"{self.variable}, {_quote(self.message)}"


SelectItem = Union[SelectVariable, SelectMessage, SelectBoth]


@dataclass(frozen=True)
class FromClause:
    entity: EntityType
    variable: str

    def __str__(self) -> str:
        return f"FROM {self.entity.value} AS {self.variable}"


@dataclass(frozen=True)
class WhereClause:
    """Predicates that must all hold."""

    predicates: Tuple[Predicate, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "predicates", tuple(self.predicates))

    def __str__(self) -> str:
        return "WHERE " + " AND ".join(str(p) for p in self.predicates)


@dataclass(frozen=True)
class SelectClause:
    items: Tuple[SelectItem, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "items", tuple(self.items))

    def __str__(self) -> str:
        return "SELECT " + ", ".join(str(i) for i in self.items)


@dataclass(frozen=True)
class Query:
    """A complete ``FROM ... [WHERE ...] SELECT ...`` query."""

    from_clause: FromClause
    where_clause: Optional[WhereClause]
    select: SelectClause

    def __str__(self) -> str:
        parts = [str(self.from_clause)]
        if self.where_clause is not None:
            parts.append(str(self.where_clause))
        parts.append(str(self.select))
        return " ".join(parts)