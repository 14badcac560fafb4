# ============================================================================
# MODULE CONTEXT - RETRIEVER
# ============================================================================
# STATUS: Core - Query assembly and orchestration for one dataset
# PURPOSE: Merge client filters, compile predicates, plan joins and pages, fetch and project rows
# EXPORTS: Retriever, BuiltQuery, RetrievalResult, WellsStore
# DEPENDENCIES: psycopg.sql
# PATTERNS: Query Builder, SQL Composition, stateless orchestrator
# ============================================================================

"""
Retriever - per-dataset query orchestration.

A Retriever is static configuration: database, table, filter templates,
joins, page-size table and coordinate projection. It holds no request
state. Every call to ``build_query`` or ``retrieve`` works on merged
copies of the templates and returns what it built.

Query shape::

    SELECT <lead join projection | dataset columns>
    FROM <table>
    [<join clauses in registry order>]
    [WHERE <predicate> AND <constraint> AND ...]
    [GROUP BY <lead join grouping>]
    [ORDER BY <lead join ordering> DESC]
    LIMIT %s OFFSET %s
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Protocol, Sequence, Tuple

from psycopg import sql

from .coordinates import Projection
from .exceptions import UnsetFilterError
from .joins import JoinPlan, JoinSpec, build_join_plan
from .options import FilterOption
from .pagination import PaginationPlan, plan_pagination
from .predicates import Predicate, compile_predicate, constraint_clause

logger = logging.getLogger(__name__)


class WellsStore(Protocol):
    """What the retriever needs from a repository."""

    def count(self, query: sql.Composable, params: Sequence[Any]) -> int: ...

    def fetch(self, query: sql.Composable, params: Sequence[Any]) -> List[Dict[str, Any]]: ...

    def render(self, query: sql.Composable, params: Sequence[Any]) -> str: ...


@dataclass(frozen=True)
class BuiltQuery:
    """A filtered, joined query without pagination."""
    query: sql.Composed
    params: Tuple[Any, ...]
    predicates: Tuple[Tuple[str, Predicate], ...] = ()
    joins: JoinPlan = field(default_factory=JoinPlan)

    def count_query(self) -> sql.Composed:
        return sql.SQL("SELECT COUNT(*) AS count FROM ({}) AS matched").format(self.query)

    def page_query(self, plan: PaginationPlan) -> Tuple[sql.Composed, Tuple[Any, ...]]:
        query = sql.SQL("{} LIMIT %s OFFSET %s").format(self.query)
        return query, self.params + (plan.chunk, plan.offset)


@dataclass(frozen=True)
class RetrievalResult:
    statement: str
    plan: PaginationPlan
    data: List[List[float]]


@dataclass(frozen=True)
class Retriever:
    """
    Query configuration for one provincial wells dataset.

    Attributes:
        slug: URL segment, e.g. "british-columbia"
        title: Human readable name
        database: Database holding the dataset
        table: Base table or view
        options: Filter templates keyed by filter name, in application order
        projection: Row to [lat, lng] conversion
        joins: Joins every query needs
        columns: Columns selected when no join supplies a projection.
            Defaults to the projection's columns.
        response_chunks: Ordered result size -> page count table
    """
    slug: str
    title: str
    database: str
    table: str
    options: Mapping[str, FilterOption]
    projection: Projection
    joins: Tuple[JoinSpec, ...] = ()
    columns: Tuple[str, ...] = ()
    response_chunks: Mapping[int, int] = field(default_factory=dict)

    @property
    def selected_columns(self) -> Tuple[str, ...]:
        return self.columns or tuple(self.projection.columns)

    def merge(self, overrides: Optional[Mapping[str, FilterOption]] = None) -> Dict[str, FilterOption]:
        """Merged copy of every filter template. The templates are untouched."""
        overrides = overrides or {}
        return {name: option.merge(overrides.get(name)) for name, option in self.options.items()}

    def compile(self, merged: Mapping[str, FilterOption]) -> Tuple[List[Tuple[str, Predicate]], List[JoinSpec]]:
        """
        Compile predicates for the active filters.

        Returns:
            (named predicates, joins contributed by those filters)
        """
        predicates: List[Tuple[str, Predicate]] = []
        filter_joins: List[JoinSpec] = []

        for name, option in merged.items():
            if not option.enabled:
                continue
            try:
                intent = option.request()
            except UnsetFilterError:
                continue

            predicate = compile_predicate(option.column, intent)
            if predicate.is_empty:
                logger.debug(f"{self.slug}: filter '{name}' compiled to no predicate")
                continue

            predicates.append((name, predicate))
            filter_joins.extend(option.joins)

        return predicates, filter_joins

    def build_query(self, overrides: Optional[Mapping[str, FilterOption]] = None) -> BuiltQuery:
        """Assemble the filtered, joined query for a set of client overrides."""
        merged = self.merge(overrides)
        predicates, filter_joins = self.compile(merged)
        plan = build_join_plan(self.joins, filter_joins)

        where: List[sql.Composable] = []
        params: List[Any] = []
        for name, predicate in predicates:
            clause, values = predicate.to_sql()
            where.append(clause)
            params.extend(values)
            required = merged[name].required
            if required:
                clauses, values = constraint_clause(required)
                where.extend(clauses)
                params.extend(values)

        if plan.select:
            projection: sql.Composable = sql.SQL(plan.select)
        else:
            projection = sql.SQL(", ").join(
                [sql.Identifier(self.table, column) for column in self.selected_columns]
            )

        parts: List[sql.Composable] = [
            sql.SQL("SELECT {} FROM {}").format(projection, sql.Identifier(self.table))
        ]
        parts.extend(plan.clauses())
        if where:
            parts.append(sql.SQL("WHERE {}").format(sql.SQL(" AND ").join(where)))
        if plan.group_by:
            parts.append(sql.SQL("GROUP BY {}").format(sql.SQL(plan.group_by)))
        if plan.order_by:
            parts.append(sql.SQL("ORDER BY {} DESC").format(sql.SQL(plan.order_by)))

        return BuiltQuery(
            query=sql.SQL(" ").join(parts),
            params=tuple(params),
            predicates=tuple(predicates),
            joins=plan,
        )

    def retrieve(self, store: WellsStore,
                 overrides: Optional[Mapping[str, FilterOption]] = None,
                 page: int = 1, total: int = 0) -> RetrievalResult:
        """
        Count, paginate, fetch and project one page of matching wells.

        Args:
            store: Repository executing the queries
            overrides: Client filter values keyed by filter name
            page: 1-based page number
            total: Row count the client already knows. Skips the count query when positive.
        """
        built = self.build_query(overrides)

        if total and total > 0:
            logger.debug(f"{self.slug}: using client supplied total {total}")
        else:
            total = store.count(built.count_query(), built.params)

        plan = plan_pagination(total, self.response_chunks, page)
        query, params = built.page_query(plan)
        statement = store.render(query, params)

        if plan.is_empty:
            return RetrievalResult(statement=statement, plan=plan, data=[])

        rows = store.fetch(query, params)
        return RetrievalResult(statement=statement, plan=plan, data=self.projection(rows))

    def describe(self) -> Dict[str, Any]:
        """Dataset summary for the listing endpoint."""
        return {
            "id": self.slug,
            "title": self.title,
            "filters": {
                name: option.describe() for name, option in self.options.items() if option.enabled
            },
        }
