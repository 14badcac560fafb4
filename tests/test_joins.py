"""Join registry deduplication and ordering."""

from tests.conftest import render
from water_wells.joins import JoinKind, JoinSpec, JoinTable, build_join_plan


def join(left_key="Well_ID", right="Well_Reports", right_key="Well_ID", **fragments):
    return JoinSpec(JoinKind.INNER, JoinTable("Wells", left_key), JoinTable(right, right_key), **fragments)


def test_correlation_name():
    spec = JoinSpec(JoinKind.JOIN, JoinTable("Wells", "gic_id"), JoinTable("lithology", "well_id"))
    assert spec.correlation_name == "wellsGic_idLithologyWell_id"


def test_statement_without_alias():
    assert render(join().statement()) == (
        'INNER JOIN "Well_Reports" ON "Well_Reports"."Well_ID" = "Wells"."Well_ID"'
    )


def test_statement_with_alias():
    spec = join(left_key="GIC_Well_ID")
    assert render(spec.statement("reports2")) == (
        'INNER JOIN "Well_Reports" AS "reports2" ON "reports2"."Well_ID" = "Wells"."GIC_Well_ID"'
    )


def test_same_join_deduplicates():
    plan = build_join_plan([], [join(), join(), join()])
    assert len(plan) == 1
    assert plan.keys == ("0*Well_Reports",)


def test_differing_correlation_is_aliased():
    first = join(select="first")
    second = join(left_key="GIC_Well_ID", select="second")
    plan = build_join_plan([], [first, second])

    assert [name for name, _ in plan.entries] == ["Well_Reports", second.correlation_name]
    assert plan.select == "first"
    clauses = [render(c) for c in plan.clauses()]
    assert clauses[1].startswith(f'INNER JOIN "Well_Reports" AS "{second.correlation_name}"')


def test_static_joins_come_first():
    static = join(right="gryVBUTM", select="utm", order_by='"northing"')
    plan = build_join_plan([static], [join(right="qryAbandoned", select="other")])
    assert plan.lead is static
    assert plan.order_by == '"northing"'
    assert plan.group_by is None


def test_keys_sort_lexically():
    joins = [join(right=f"t{i}") for i in range(11)]
    plan = build_join_plan([], joins)
    # "10*t10" sorts between "1*t1" and "2*t2"
    assert plan.keys[:3] == ("0*t0", "1*t1", "10*t10")
    assert plan.entries[2][0] == "t10"


def test_empty_plan():
    plan = build_join_plan([], [])
    assert plan.lead is None
    assert plan.select is None
    assert plan.clauses() == []
