"""Tests for the automation status endpoints."""


def test_status_includes_automation_and_summary(client):
    body = client.get("/api/automation/status").json()
    assert body["success"] is True
    assert body["action"] == "status"
    automation = body["data"]["automation"]
    assert automation["isRunning"] is True
    assert automation["totalRules"] == 5
    assert automation["enabledRules"] == 4
    summary = body["data"]["alerts"]["summary"]
    assert summary["total"] == len(body["data"]["alerts"]["active"])
    assert "timestamp" in body


def test_alerts_action(client):
    body = client.get("/api/automation/status", params={"action": "alerts"}).json()
    assert body["data"]["summary"]["total"] == 2
    assert body["data"]["summary"]["by_type"]["environmental"] == 1


def test_stop_then_start(client):
    stopped = client.get("/api/automation/status", params={"action": "stop"}).json()
    assert stopped["data"]["status"]["isRunning"] is False

    started = client.get("/api/automation/status", params={"action": "start"}).json()
    assert started["data"]["status"]["isRunning"] is True


def test_invalid_get_action(client):
    res = client.get("/api/automation/status", params={"action": "explode"})
    assert res.status_code == 400
    assert res.json()["success"] is False


def test_acknowledge_alert(client):
    res = client.post("/api/automation/status", json={"action": "acknowledge_alert", "alertId": "alert_001"})
    body = res.json()
    assert res.status_code == 200
    assert body["data"]["result"] is True
    assert body["message"] == "Action completed successfully"


def test_resolve_removes_alert_from_active_list(client):
    client.post("/api/automation/status", json={"action": "resolve_alert", "alertId": "alert_001"})
    body = client.get("/api/automation/status", params={"action": "alerts"}).json()
    assert [a["id"] for a in body["data"]["alerts"]] == ["alert_002"]


def test_unknown_alert_id_still_succeeds(client):
    body = client.post("/api/automation/status", json={"action": "resolve_alert", "alertId": "nope"}).json()
    assert body["data"]["result"] is True


def test_missing_alert_id(client):
    res = client.post("/api/automation/status", json={"action": "acknowledge_alert"})
    assert res.status_code == 400
    assert "alertId" in res.json()["error"]

    res = client.post("/api/automation/status", json={"action": "acknowledge_alert", "alertId": ""})
    assert res.status_code == 400


def test_invalid_post_action(client):
    res = client.post("/api/automation/status", json={"action": "reboot", "alertId": "alert_001"})
    assert res.status_code == 400
