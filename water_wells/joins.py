# ============================================================================
# MODULE CONTEXT - JOIN REGISTRY
# ============================================================================
# STATUS: Core - Join deduplication and ordering
# PURPOSE: Turn the joins contributed by a dataset and its active filters into ordered JOIN clauses
# EXPORTS: JoinKind, JoinTable, JoinSpec, JoinPlan, build_join_plan
# DEPENDENCIES: psycopg.sql
# ============================================================================

"""
Join registry.

Several filters on one dataset often need the same lookup table (every
Alberta filter except colour joins ``Well_Reports``). Joins are keyed on
their right-hand table. A second join to an already registered table is
kept only when its correlation name differs, in which case it is aliased
by that correlation name.

The registry sorts its keys lexically, and the first join in that order is
the only one whose projection, grouping and ordering reach the query.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List, Optional, Tuple

from psycopg import sql

logger = logging.getLogger(__name__)


class JoinKind(str, Enum):
    JOIN = "JOIN"
    INNER = "INNER JOIN"
    LEFT = "LEFT JOIN"
    RIGHT = "RIGHT JOIN"


@dataclass(frozen=True)
class JoinTable:
    name: str
    key: str


def _title(value: str) -> str:
    return value[:1].upper() + value[1:]


@dataclass(frozen=True)
class JoinSpec:
    """
    One join from the dataset's base table to a lookup table.

    ``group_by``, ``order_by`` and ``select`` are trusted SQL fragments
    from static dataset configuration. They are only applied when this
    join ends up first in the plan.
    """
    kind: JoinKind
    left: JoinTable
    right: JoinTable
    group_by: Optional[str] = None
    order_by: Optional[str] = None
    select: Optional[str] = None

    @property
    def correlation_name(self) -> str:
        return (
            self.left.name.lower()
            + _title(self.left.key)
            + _title(self.right.name)
            + _title(self.right.key)
        )

    def statement(self, name: str = "") -> sql.Composed:
        """
        Render the JOIN clause.

        ``name`` is the alias the registry assigned. It is only written as
        ``AS <name>`` when it differs from the right-hand table.
        """
        alias = name or self.right.name
        parts: List[sql.Composable] = [sql.SQL(self.kind.value), sql.Identifier(self.right.name)]
        if alias != self.right.name:
            parts.extend([sql.SQL("AS"), sql.Identifier(alias)])
        parts.append(
            sql.SQL("ON {} = {}").format(
                sql.Identifier(alias, self.right.key),
                sql.Identifier(self.left.name, self.left.key),
            )
        )
        return sql.SQL(" ").join(parts)


@dataclass(frozen=True)
class JoinPlan:
    """Ordered joins for one request, plus the clauses the leading join drives."""
    entries: Tuple[Tuple[str, JoinSpec], ...] = ()
    keys: Tuple[str, ...] = ()

    @property
    def lead(self) -> Optional[JoinSpec]:
        return self.entries[0][1] if self.entries else None

    @property
    def select(self) -> Optional[str]:
        return self.lead.select if self.lead else None

    @property
    def group_by(self) -> Optional[str]:
        return self.lead.group_by if self.lead else None

    @property
    def order_by(self) -> Optional[str]:
        return self.lead.order_by if self.lead else None

    def clauses(self) -> List[sql.Composed]:
        return [join.statement(name) for name, join in self.entries]

    def __len__(self) -> int:
        return len(self.entries)


def build_join_plan(static_joins: Iterable[JoinSpec], filter_joins: Iterable[JoinSpec] = ()) -> JoinPlan:
    """
    Deduplicate and order joins.

    Args:
        static_joins: Joins the dataset always needs, in declaration order
        filter_joins: Joins contributed by active filters, in filter order

    Returns:
        JoinPlan whose first entry drives SELECT, GROUP BY and ORDER BY
    """
    registered: Dict[str, JoinSpec] = {}
    keys: List[str] = []

    for position, join in enumerate([*static_joins, *filter_joins]):
        existing = registered.get(join.right.name)
        if existing is None:
            registered[join.right.name] = join
            keys.append(f"{position}*{join.right.name}")
            continue

        correlation = join.correlation_name
        if existing.correlation_name != correlation and correlation not in registered:
            registered[correlation] = join
            keys.append(f"{position}*{correlation}")

    keys.sort()
    entries = tuple((key.split("*", 1)[1], registered[key.split("*", 1)[1]]) for key in keys)

    if entries:
        logger.debug(f"Join plan: {', '.join(keys)}")

    return JoinPlan(entries=entries, keys=tuple(keys))
