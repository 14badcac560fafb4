# ============================================================================
# MODULE CONTEXT - PREDICATE COMPILER
# ============================================================================
# STATUS: Core - Intent to SQL comparison
# PURPOSE: Compile RangeIntent / ListIntent into column predicates rendered with psycopg.sql
# EXPORTS: PredicateKind, Predicate, compile_predicate, column_identifier, constraint_clause
# DEPENDENCIES: psycopg.sql
# ============================================================================

"""
Predicate compiler.

Categorical filters resolve to two lists: the raw values the client asked
for (include, I) and the raw values of every other category (exclude, X).
The compiler compares whichever list is shorter:

    I    X      result
    0    0      none
    1    0      col = include[0]
    0    1      NOT (col = exclude[0])
    >1   <=1    col IN include
    <=1  >1     col NOT IN exclude
    >1   >1     IN when I < X, NOT IN when I > X, none on a tie
    1    1      none

Then the first NULL sentinel in the compared list is pulled out. If the
list is left empty the comparison becomes ``col IS NULL``. Otherwise
``OR col IS NULL`` is appended, or ``OR col IS NOT NULL`` when the
original include list was the longer one.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Mapping, Optional, Sequence, Tuple

from psycopg import sql

from .options import ListIntent, RangeIntent, RequestIntent, is_null_sentinel


class PredicateKind(str, Enum):
    NONE = "none"
    EQUAL = "equal"
    NOT_EQUAL = "not_equal"
    GREATER_EQUAL = "greater_equal"
    LESS_EQUAL = "less_equal"
    BETWEEN = "between"
    IN = "in"
    NOT_IN = "not_in"
    IS_NULL = "is_null"
    IS_NOT_NULL = "is_not_null"


def column_identifier(column: str) -> sql.Identifier:
    """Identifier for ``column`` or ``table.column``."""
    return sql.Identifier(*column.split(".", 1))


def _placeholders(count: int) -> sql.Composed:
    return sql.SQL(", ").join([sql.Placeholder()] * count)


@dataclass(frozen=True)
class Predicate:
    """
    A comparison on one column.

    ``negated`` is set for the not-equal row of the table: the comparison
    is built as an equality and the whole clause is wrapped in NOT.
    ``or_null`` is IS_NULL or IS_NOT_NULL when a NULL sentinel was pulled
    out of a non-empty list.
    """
    column: str
    kind: PredicateKind
    values: Tuple[Any, ...] = ()
    or_null: Optional[PredicateKind] = None
    negated: bool = False

    @property
    def is_empty(self) -> bool:
        return self.kind is PredicateKind.NONE

    def comparison(self) -> sql.Composable:
        """The comparison without the NOT wrapper."""
        col = column_identifier(self.column)
        kind = self.kind

        if kind in (PredicateKind.EQUAL, PredicateKind.NOT_EQUAL):
            clause = sql.SQL("{} = %s").format(col)
        elif kind is PredicateKind.GREATER_EQUAL:
            clause = sql.SQL("{} >= %s").format(col)
        elif kind is PredicateKind.LESS_EQUAL:
            clause = sql.SQL("{} <= %s").format(col)
        elif kind is PredicateKind.BETWEEN:
            clause = sql.SQL("{} BETWEEN %s AND %s").format(col)
        elif kind is PredicateKind.IN:
            clause = sql.SQL("{} IN ({})").format(col, _placeholders(len(self.values)))
        elif kind is PredicateKind.NOT_IN:
            clause = sql.SQL("{} NOT IN ({})").format(col, _placeholders(len(self.values)))
        elif kind is PredicateKind.IS_NULL:
            clause = sql.SQL("{} IS NULL").format(col)
        elif kind is PredicateKind.IS_NOT_NULL:
            clause = sql.SQL("{} IS NOT NULL").format(col)
        else:
            raise ValueError(f"Predicate on '{self.column}' is empty")

        if self.or_null is PredicateKind.IS_NULL:
            clause = sql.SQL("{} OR {} IS NULL").format(clause, col)
        elif self.or_null is PredicateKind.IS_NOT_NULL:
            clause = sql.SQL("{} OR {} IS NOT NULL").format(clause, col)
        return clause

    def to_sql(self) -> Tuple[sql.Composable, List[Any]]:
        """
        Render the predicate as a parenthesized WHERE term.

        Returns:
            (composed clause, bound parameters)
        """
        clause = sql.SQL("({})").format(self.comparison())
        if self.negated:
            clause = sql.SQL("NOT {}").format(clause)
        return clause, list(self.values)


def compile_predicate(column: str, intent: RequestIntent) -> Predicate:
    """
    Compile a request intent into a predicate on ``column``.

    Raises:
        TypeError: For an intent type with no compilation rule
    """
    if isinstance(intent, RangeIntent):
        return _compile_range(column, intent)
    if isinstance(intent, ListIntent):
        return _compile_list(column, intent)
    raise TypeError(f"Cannot compile intent of type {type(intent).__name__}")


def _compile_range(column: str, intent: RangeIntent) -> Predicate:
    if intent.start is None and intent.end is None:
        return Predicate(column, PredicateKind.NONE)
    if intent.end is None:
        return Predicate(column, PredicateKind.GREATER_EQUAL, (intent.start,))
    if intent.start is None:
        return Predicate(column, PredicateKind.LESS_EQUAL, (intent.end,))
    return Predicate(column, PredicateKind.BETWEEN, (intent.start, intent.end))


def _compile_list(column: str, intent: ListIntent) -> Predicate:
    include, exclude = list(intent.include), list(intent.exclude)
    n_in, n_out = len(include), len(exclude)

    negated = False
    if n_in == 1 and n_out == 0:
        kind, values = PredicateKind.EQUAL, include
    elif n_in == 0 and n_out == 1:
        kind, values, negated = PredicateKind.NOT_EQUAL, exclude, True
    elif n_in > 1 and (n_out <= 1 or n_in < n_out):
        kind, values = PredicateKind.IN, include
    elif n_out > 1 and (n_in <= 1 or n_in > n_out):
        kind, values = PredicateKind.NOT_IN, exclude
    else:
        # (0, 0), (1, 1) and ties above one
        return Predicate(column, PredicateKind.NONE)

    pruned = _without_first_null(values)
    if pruned is None:
        return Predicate(column, kind, tuple(values), negated=negated)
    if not pruned:
        return Predicate(column, PredicateKind.IS_NULL, (), negated=negated)

    or_null = PredicateKind.IS_NOT_NULL if n_in > n_out else PredicateKind.IS_NULL
    return Predicate(column, kind, tuple(pruned), or_null=or_null, negated=negated)


def _without_first_null(values: Sequence[Any]) -> Optional[List[Any]]:
    """Copy of ``values`` minus its first NULL sentinel, or None when there is none."""
    for i, value in enumerate(values):
        if is_null_sentinel(value):
            return [*values[:i], *values[i + 1:]]
    return None


def constraint_clause(required: Mapping[str, Any]) -> Tuple[List[sql.Composable], List[Any]]:
    """
    Equality terms for a filter's mandatory constraints.

    Sequence values become ``col IN (...)``.
    """
    clauses: List[sql.Composable] = []
    params: List[Any] = []
    for column, value in required.items():
        col = column_identifier(column)
        if isinstance(value, (list, tuple, set, frozenset)):
            values = list(value)
            clauses.append(sql.SQL("{} IN ({})").format(col, _placeholders(len(values))))
            params.extend(values)
        else:
            clauses.append(sql.SQL("{} = %s").format(col))
            params.append(value)
    return clauses, params
