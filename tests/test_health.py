"""Health checks with the database checks stubbed out."""

import pytest

import health
from health import CheckResult, HealthStatus


def result(status):
    return CheckResult(status=status, latency_ms=1.0, message=status)


@pytest.fixture
def dataset_checks(monkeypatch):
    outcomes = {}

    def fake_check(slug, database, table):
        return result(outcomes.get(slug, "pass"))

    monkeypatch.setattr(health, "check_dataset_database", fake_check)
    monkeypatch.setattr(health, "check_station_inventory", lambda: result("pass"))
    return outcomes


def test_public_health_healthy(dataset_checks):
    body = health.get_public_health()
    assert body["status"] == HealthStatus.HEALTHY.value
    assert set(body) == {"status", "timestamp"}


def test_one_failing_dataset_degrades(dataset_checks):
    dataset_checks["ontario"] = "fail"
    assert health.get_public_health()["status"] == HealthStatus.DEGRADED.value


def test_all_failing_datasets_is_unhealthy(dataset_checks):
    for slug in ("alberta", "british-columbia", "nova-scotia", "ontario", "saskatchewan"):
        dataset_checks[slug] = "fail"
    assert health.get_public_health()["status"] == HealthStatus.UNHEALTHY.value


def test_detailed_health(dataset_checks, monkeypatch):
    monkeypatch.setattr(health, "check_station_inventory", lambda: result("fail"))
    body = health.get_detailed_health()

    assert body["status"] == HealthStatus.DEGRADED.value
    assert body["app"] == health.get_app_identity()["name"]
    assert set(body["checks"]["datasets"]) == {
        "alberta", "british-columbia", "nova-scotia", "ontario", "saskatchewan"
    }
    assert body["checks"]["api_modules"]["status"] == "pass"
    assert body["connection"]["auth_mode"] == "password"


def test_check_result_omits_empty_details():
    assert "details" not in result("pass").to_dict()
