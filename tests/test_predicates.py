"""Predicate compilation and rendering."""

import pytest

from tests.conftest import render
from water_wells.options import ListIntent, RangeIntent
from water_wells.predicates import (
    PredicateKind,
    compile_predicate,
    constraint_clause,
)


def compiled(intent, column="col"):
    predicate = compile_predicate(column, intent)
    if predicate.is_empty:
        return predicate.kind, None, []
    clause, params = predicate.to_sql()
    return predicate.kind, render(clause), params


class TestRangePredicates:

    def test_both_bounds(self):
        assert compiled(RangeIntent(10, 20)) == (
            PredicateKind.BETWEEN, '("col" BETWEEN %s AND %s)', [10, 20]
        )

    def test_start_only(self):
        assert compiled(RangeIntent(start="2020.01.01")) == (
            PredicateKind.GREATER_EQUAL, '("col" >= %s)', ["2020.01.01"]
        )

    def test_end_only(self):
        assert compiled(RangeIntent(end=300)) == (PredicateKind.LESS_EQUAL, '("col" <= %s)', [300])

    def test_no_bounds(self):
        assert compiled(RangeIntent())[0] is PredicateKind.NONE

    def test_table_qualified_column(self):
        _, clause, _ = compiled(RangeIntent(1, 2), column="Well_Reports.Recommended_Rate")
        assert clause == '("Well_Reports"."Recommended_Rate" BETWEEN %s AND %s)'


class TestListPredicates:

    def test_single_include(self):
        assert compiled(ListIntent(include=("A",))) == (PredicateKind.EQUAL, '("col" = %s)', ["A"])

    def test_single_exclude_is_negated_equality(self):
        assert compiled(ListIntent(exclude=("B",))) == (PredicateKind.NOT_EQUAL, 'NOT ("col" = %s)', ["B"])

    def test_include_shorter(self):
        assert compiled(ListIntent(include=("A", "B"), exclude=("C", "D", "E"))) == (
            PredicateKind.IN, '("col" IN (%s, %s))', ["A", "B"]
        )

    def test_exclude_shorter(self):
        assert compiled(ListIntent(include=("A", "B", "C"), exclude=("D", "E"))) == (
            PredicateKind.NOT_IN, '("col" NOT IN (%s, %s))', ["D", "E"]
        )

    def test_many_include_one_exclude(self):
        kind, _, params = compiled(ListIntent(include=("X", "Y"), exclude=("Z",)))
        assert kind is PredicateKind.IN
        assert params == ["X", "Y"]

    def test_one_include_many_exclude(self):
        kind, _, params = compiled(ListIntent(include=("X",), exclude=("Y", "Z")))
        assert kind is PredicateKind.NOT_IN
        assert params == ["Y", "Z"]

    def test_only_excludes(self):
        kind, _, params = compiled(ListIntent(exclude=("Y", "Z")))
        assert kind is PredicateKind.NOT_IN
        assert params == ["Y", "Z"]

    @pytest.mark.parametrize("include,exclude", [
        ((), ()),
        (("A",), ("B",)),
        (("A", "B"), ("C", "D")),
    ])
    def test_no_predicate(self, include, exclude):
        assert compile_predicate("col", ListIntent(include, exclude)).is_empty


class TestNullSentinels:

    def test_only_null_included(self):
        assert compiled(ListIntent(include=("NULL",))) == (PredicateKind.IS_NULL, '("col" IS NULL)', [])

    def test_only_null_excluded(self):
        assert compiled(ListIntent(exclude=(None,))) == (PredicateKind.IS_NULL, 'NOT ("col" IS NULL)', [])

    def test_null_in_shorter_include(self):
        assert compiled(ListIntent(include=(None, "A"), exclude=("B", "C", "D"))) == (
            PredicateKind.IN, '("col" IN (%s) OR "col" IS NULL)', ["A"]
        )

    def test_null_in_exclude_when_include_longer(self):
        assert compiled(ListIntent(include=("A", "B", "C"), exclude=("NULL", "D"))) == (
            PredicateKind.NOT_IN, '("col" NOT IN (%s) OR "col" IS NOT NULL)', ["D"]
        )

    def test_only_first_null_removed(self):
        _, clause, params = compiled(ListIntent(include=("NULL", "A", "null"), exclude=("B", "C", "D", "E")))
        assert clause == '("col" IN (%s, %s) OR "col" IS NULL)'
        assert params == ["A", "null"]


def test_unknown_intent_type():
    with pytest.raises(TypeError):
        compile_predicate("col", object())


def test_constraint_clause():
    clauses, params = constraint_clause({"status": "ABANDONED", "code": (5, 6)})
    assert [render(c) for c in clauses] == ['"status" = %s', '"code" IN (%s, %s)']
    assert params == ["ABANDONED", 5, 6]
