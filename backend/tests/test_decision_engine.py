"""Tests for decision engine endpoints."""
import pytest

from verdanta.services import decision_engine_service


def _rule(client, rule_id):
    rules = client.get("/api/ai-ml/decision-engine/rules").json()["data"]
    return next(r for r in rules if r["id"] == rule_id)


def test_list_rules(client):
    body = client.get("/api/ai-ml/decision-engine/rules").json()
    assert body["metadata"] == {"total": 5, "enabled": 4}


def test_filter_rules(client):
    disabled = client.get("/api/ai-ml/decision-engine/rules", params={"enabled": "false"}).json()["data"]
    assert [r["id"] for r in disabled] == ["rule_005"]

    climate = client.get("/api/ai-ml/decision-engine/rules", params={"category": "climate"}).json()["data"]
    assert [r["id"] for r in climate] == ["rule_003"]


def test_toggle_round_trip_restores_state(client):
    original = _rule(client, "rule_001")["enabled"]

    res = client.post("/api/ai-ml/decision-engine/rules/toggle", json={"ruleId": "rule_001", "enabled": False})
    assert res.json()["data"]["enabled"] is False
    assert _rule(client, "rule_001")["enabled"] is False

    client.post("/api/ai-ml/decision-engine/rules/toggle", json={"ruleId": "rule_001", "enabled": True})
    assert _rule(client, "rule_001")["enabled"] is original


def test_toggle_unknown_rule_is_echoed(client):
    body = client.post("/api/ai-ml/decision-engine/rules/toggle", json={"ruleId": "rule_999", "enabled": True}).json()
    assert body["data"]["ruleId"] == "rule_999"
    assert decision_engine_service.rule_counts()["totalRules"] == 5


@pytest.mark.parametrize("payload,field", [
    ({"enabled": True}, "ruleId"),
    ({"ruleId": "", "enabled": True}, "ruleId"),
    ({"ruleId": "rule_001"}, "enabled"),
])
def test_toggle_missing_fields(client, payload, field):
    res = client.post("/api/ai-ml/decision-engine/rules/toggle", json=payload)
    assert res.status_code == 400
    assert field in res.json()["error"]


def test_toggle_rejects_non_boolean(client):
    res = client.post("/api/ai-ml/decision-engine/rules/toggle", json={"ruleId": "rule_001", "enabled": "yes"})
    assert res.status_code == 400
    assert "enabled" in res.json()["error"]


def test_pending_actions_metadata(client):
    body = client.get("/api/ai-ml/decision-engine/actions").json()
    assert body["metadata"] == {"total": 3, "pending_approval": 2, "auto_executable": 1}

    auto = client.get("/api/ai-ml/decision-engine/actions", params={"requires_approval": "false"}).json()
    assert [a["id"] for a in auto["data"]] == ["action_002"]


def test_approve_action(client):
    body = client.post("/api/ai-ml/decision-engine/actions/approve", json={"actionId": "action_001"}).json()
    assert body["data"]["status"] == "approved_and_executed"
    assert body["data"]["actionId"] == "action_001"


def test_reject_action_default_reason(client):
    body = client.post("/api/ai-ml/decision-engine/actions/reject", json={"actionId": "action_003"}).json()
    assert body["data"]["status"] == "rejected"
    assert body["data"]["reason"] == "Manual override by user"


@pytest.mark.parametrize("path", ["approve", "reject"])
def test_action_id_required(client, path):
    res = client.post(f"/api/ai-ml/decision-engine/actions/{path}", json={})
    assert res.status_code == 400
    assert "actionId" in res.json()["error"]


def test_recent_decisions(client):
    body = client.get("/api/ai-ml/decision-engine/decisions", params={"limit": "3"}).json()
    assert [d["id"] for d in body["data"]] == ["decision_001", "decision_002", "decision_003"]
    assert body["metadata"]["limit"] == 3


def test_decisions_filter_by_rule(client):
    body = client.get("/api/ai-ml/decision-engine/decisions", params={"rule_id": "rule_001"}).json()
    assert {d["rule_id"] for d in body["data"]} == {"rule_001"}
    assert len(body["data"]) == 2
