from __future__ import annotations

import importlib

import pytest

from hrm_system.container import build_container
from hrm_system.core.exceptions import PersistenceError
from hrm_system.main import create_app
from hrm_system.state.codec import from_document, to_document
from hrm_system.state.seed import initial_state
from hrm_system.sync.local_cache import LocalCache
from hrm_system.sync.storage import HRMStorage

# Hash the demo passwords once for the whole module.
SEED_DOC = to_document(initial_state())


class FakeStoreClient:
    def __init__(self, document=None):
        self.document = document
        self.down = False

    def fetch(self):
        if self.down:
            raise PersistenceError("store down")
        return self.document

    def save(self, document):
        if self.down:
            raise PersistenceError("store down")
        self.document = document

    def init(self, document):
        self.document = self.document or document
        return True

    def reset(self, document):
        self.document = document


@pytest.fixture()
def store_client():
    return FakeStoreClient(SEED_DOC)


@pytest.fixture()
def container(monkeypatch, tmp_path, store_client):
    monkeypatch.setenv("APP_ENV", "testing")
    settings = importlib.import_module("config.testing")
    storage = HRMStorage(store_client, LocalCache(tmp_path / "cache.json"), seed=lambda: from_document(SEED_DOC))
    c = build_container(settings, storage=storage)
    yield c
    c.holder.shutdown()


@pytest.fixture()
def client(container):
    app = create_app(container=container)
    app.config["TESTING"] = True
    return app.test_client()


def login(client, email, password):
    return client.post("/api/auth/login", json={"email": email, "password": password})


def as_employee(client):
    assert login(client, "ali.hassan@harphrm.com", "employee123").status_code == 200


def as_manager(client, email="manager@harphrm.com"):
    assert login(client, email, "manager123").status_code == 200


def as_admin(client):
    assert login(client, "admin@harphrm.com", "admin123").status_code == 200


def test_login_rejects_bad_credentials(client):
    resp = login(client, "admin@harphrm.com", "wrong")
    assert resp.status_code == 401
    assert resp.get_json()["type"] == "AuthenticationError"


def test_login_and_me(client):
    resp = login(client, "Admin@HarpHRM.com", "admin123")
    assert resp.get_json()["user"] == {"id": "emp1", "name": "Admin User", "role": "admin", "managerId": None}

    me = client.get("/api/auth/me").get_json()
    assert me["employee"]["email"] == "admin@harphrm.com"
    assert "passwordHash" not in me["employee"]

    client.post("/api/auth/logout")
    assert client.get("/api/auth/me").status_code == 401


def test_endpoints_require_login(client):
    resp = client.post("/api/attendance/check-in")
    assert resp.status_code == 401


def test_work_day_flow(client, container):
    as_employee(client)

    assert client.post("/api/attendance/check-in").status_code == 200
    dup = client.post("/api/attendance/check-in")
    assert (dup.status_code, dup.get_json()["type"]) == (409, "DuplicateCheckIn")

    assert client.post("/api/attendance/break-start").status_code == 200
    assert client.post("/api/attendance/break-end").status_code == 200

    blocked = client.post("/api/attendance/check-out")
    assert (blocked.status_code, blocked.get_json()["type"]) == (422, "TasksRequired")

    bad_task = client.post("/api/tasks", json={"description": "", "hoursSpent": 1})
    assert (bad_task.status_code, bad_task.get_json()["type"]) == (400, "InvalidTask")
    assert client.post("/api/tasks", json={"description": "API work", "hoursSpent": 3}).status_code == 201

    done = client.post("/api/attendance/check-out")
    assert done.status_code == 200
    assert done.get_json()["timeLog"]["status"] == "checked-out"

    today = client.get("/api/attendance/today").get_json()
    assert today["tasksLogged"] == 1
    assert len(client.get("/api/attendance/history").get_json()["timeLogs"]) == 1


def test_mutations_are_pushed_to_the_store(client, container, store_client):
    as_employee(client)
    client.post("/api/attendance/check-in")
    container.holder.flush(timeout=5)

    assert len(store_client.document["timeLogs"]) == 1
    assert store_client.document["auditLogs"][-1]["action"] == "Check In"


def test_store_outage_does_not_block_local_operation(client, container, store_client):
    store_client.down = True
    as_employee(client)

    assert client.post("/api/attendance/check-in").status_code == 200
    container.holder.flush(timeout=5)
    assert len(container.holder.state.time_logs) == 1
    assert store_client.document == SEED_DOC


def test_manager_reviews_only_direct_reports(client):
    as_employee(client)
    task_id = client.post("/api/tasks", json={"description": "Design review", "hoursSpent": 1}).get_json()["task"]["id"]

    as_manager(client, "sarah.ahmed@harphrm.com")
    assert client.post(f"/api/tasks/{task_id}/approve", json={}).status_code == 403

    as_manager(client)
    assert [t["id"] for t in client.get("/api/tasks/review").get_json()["tasks"]] == [task_id]
    empty = client.post(f"/api/tasks/{task_id}/comment", json={"comment": " "})
    assert (empty.status_code, empty.get_json()["type"]) == (400, "CommentRequired")
    approved = client.post(f"/api/tasks/{task_id}/approve", json={"comment": "ok"}).get_json()["task"]
    assert approved["status"] == "approved"
    again = client.post(f"/api/tasks/{task_id}/comment", json={"comment": "late"})
    assert (again.status_code, again.get_json()["type"]) == (409, "TaskAlreadyReviewed")

    as_employee(client)
    locked = client.delete(f"/api/tasks/{task_id}")
    assert (locked.status_code, locked.get_json()["type"]) == (409, "TaskLocked")


def test_leave_workflow(client, container):
    as_employee(client)
    bad = client.post("/api/leaves", json={"startDate": "2026-05-05", "endDate": "2026-05-01", "reason": "x"})
    assert (bad.status_code, bad.get_json()["type"]) == (400, "InvalidRange")
    leave = client.post(
        "/api/leaves", json={"startDate": "2026-05-01", "endDate": "2026-05-05", "reason": "Wedding"}
    ).get_json()["leaveRequest"]

    as_manager(client)
    decided = client.post(f"/api/leaves/{leave['id']}/decision", json={"approve": True, "comment": "Congrats"})
    assert decided.get_json()["leaveRequest"]["status"] == "approved"
    assert container.holder.state.get_employee("emp3").comp_leaves_used == 2

    again = client.post(f"/api/leaves/{leave['id']}/decision", json={"approve": False})
    assert (again.status_code, again.get_json()["type"]) == (409, "NotPending")

    granted = client.post("/api/employees/emp3/comp-leaves", json={"days": 2}).get_json()["employee"]
    assert granted["compLeavesEarned"] == 5


def test_employee_cannot_use_admin_endpoints(client):
    as_employee(client)
    assert client.get("/api/employees").status_code == 403
    assert client.post("/api/payroll/process", json={"month": "2026-03"}).status_code == 403
    assert client.get("/api/employees/emp4").status_code == 403


def test_payroll_processing_is_idempotent(client):
    as_admin(client)
    first = client.post("/api/payroll/process", json={"month": "2026-03"}).get_json()
    second = client.post("/api/payroll/process", json={"month": "2026-03"})

    assert first["created"] == 10
    assert second.status_code == 200
    assert second.get_json()["created"] == 0

    entries = client.get("/api/payroll?month=2026-03").get_json()["payrollEntries"]
    assert len(entries) == 10
    entry_id = entries[0]["id"]
    paid = client.patch(f"/api/payroll/{entry_id}", json={"status": "paid"}).get_json()["payrollEntry"]
    assert paid["status"] == "paid"

    bad_month = client.post("/api/payroll/process", json={"month": "March"})
    assert bad_month.status_code == 400


def test_admin_manages_employees(client, container):
    as_admin(client)
    created = client.post(
        "/api/employees",
        json={
            "name": "Bilal Shah",
            "email": "bilal@harphrm.com",
            "password": "secret123",
            "role": "employee",
            "monthlyHourTarget": 60,
            "hourlyRate": 4000,
            "managerId": "emp2",
        },
    )
    assert created.status_code == 201
    new_id = created.get_json()["employee"]["id"]
    assert container.holder.state.get_employee(new_id).password_hash != "secret123"

    ot = client.put(f"/api/overtime-settings/{new_id}", json={"overtimeMultiplier": 1.5}).get_json()
    assert ot == {"employeeId": new_id, "overtimeMultiplier": 1.5}

    assert login(client, "bilal@harphrm.com", "secret123").status_code == 200
    as_admin(client)
    assert client.delete("/api/employees/emp1").status_code == 400
    assert client.delete(f"/api/employees/{new_id}").status_code == 200
    assert container.holder.state.find_employee(new_id) is None


def test_self_service_profile_update(client):
    as_employee(client)
    ok = client.patch("/api/employees/emp3", json={"phone": "+92-000"})
    assert ok.get_json()["employee"]["phone"] == "+92-000"
    assert client.patch("/api/employees/emp3", json={"hourlyRate": 99999}).status_code == 403


def test_csv_exports_and_audit(client):
    as_employee(client)
    client.post("/api/attendance/check-in")

    as_admin(client)
    csv_resp = client.get("/api/exports/employees.csv")
    assert csv_resp.mimetype == "text/csv"
    assert csv_resp.get_data(as_text=True).splitlines()[0].startswith("Name,Email,Phone")

    audit = client.get("/api/audit").get_json()["auditLogs"]
    assert audit[0]["action"] == "Check In"
    assert audit[0]["userName"] == "Ali Hassan"
    assert client.get("/api/exports/audit.csv").get_data(as_text=True).startswith("Timestamp,User,Action")


def test_admin_reset_restores_seed(client, container, store_client):
    as_employee(client)
    client.post("/api/attendance/check-in")
    container.holder.flush(timeout=5)

    as_admin(client)
    assert client.post("/api/admin/reset").status_code == 200
    assert container.holder.state.time_logs == ()
    assert store_client.document == SEED_DOC


def test_malformed_values_are_rejected_as_400(client, container):
    as_employee(client)
    nan_task = client.post("/api/tasks", json={"description": "Work", "hoursSpent": "NaN"})
    assert (nan_task.status_code, nan_task.get_json()["type"]) == (400, "InvalidTask")
    leave = client.post(
        "/api/leaves", json={"startDate": "2026-05-01", "endDate": "2026-05-01", "reason": "Errand"}
    ).get_json()["leaveRequest"]

    as_manager(client)
    bad_comment = client.post(f"/api/leaves/{leave['id']}/decision", json={"approve": True, "comment": 5})
    assert bad_comment.status_code == 400

    as_admin(client)
    assert client.put("/api/overtime-settings/emp3", json={"overtimeMultiplier": "Infinity"}).status_code == 400
    bad_name = client.post(
        "/api/employees",
        json={"name": 5, "email": "x@harphrm.com", "password": "secret123", "role": "employee",
              "monthlyHourTarget": 60, "hourlyRate": 4000},
    )
    assert bad_name.status_code == 400

    assert container.holder.state.find_overtime_settings("emp3").overtime_multiplier == 1.0
    assert container.holder.state.find_employee_by_email("x@harphrm.com") is None
