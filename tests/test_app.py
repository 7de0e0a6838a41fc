from __future__ import annotations

import pytest

from academic_ledger.container import wire_container
from academic_ledger.main import create_app
from academic_ledger.payments.verifier import PaymentVerifier

SECRET = "test-payment-secret"


@pytest.fixture
def client(monkeypatch, students_repo, fees_repo, reviews_repo, attendance_repo):
    monkeypatch.setenv("APP_ENV", "testing")
    container = wire_container(
        students_repo=students_repo,
        fees_repo=fees_repo,
        reviews_repo=reviews_repo,
        attendance_repo=attendance_repo,
        payment_secret=SECRET,
    )
    app = create_app(container)
    return app.test_client()


def confirm_body(payment_id="pay_1", order_id="order_1", **overrides):
    body = {
        "order_id": order_id,
        "payment_id": payment_id,
        "signature": PaymentVerifier(SECRET).sign(order_id, payment_id),
        "amount": "500",
        "student_id": "STU001",
    }
    body.update(overrides)
    return body


def test_fee_schedule_lists_the_whole_cycle(client):
    res = client.get("/students/STU001/fees")

    assert res.status_code == 200
    data = res.get_json()
    assert [m["month"] for m in data["months"]][:2] == ["May", "June"]
    assert len(data["months"]) == 12
    assert data["months"][0]["status"] == "Due"


def test_unknown_student_is_404(client):
    res = client.get("/students/NOPE/fees")

    assert res.status_code == 404
    assert res.get_json()["kind"] == "NotFoundError"


def test_confirmed_payment_then_replay(client, fees_repo):
    first = client.post("/payments/confirm", json=confirm_body())
    replay = client.post("/payments/confirm", json=confirm_body())

    assert first.status_code == 200
    assert first.get_json()["reason"] == "allocated"
    assert first.get_json()["month"] == "May"
    assert replay.status_code == 200
    assert replay.get_json()["reason"] == "duplicate_payment"
    assert len(fees_repo.records) == 1


def test_confirm_accepts_form_posts(client):
    res = client.post("/payments/confirm", data=confirm_body())
    assert res.get_json()["accepted"] is True


def test_forged_confirmation_is_400(client, fees_repo):
    res = client.post("/payments/confirm", json=confirm_body(signature="forged"))

    assert res.status_code == 400
    assert res.get_json() == {"accepted": False, "reason": "invalid_signature"}
    assert fees_repo.records == []


def test_manual_payment_and_revenue_report(client):
    body = {"student_id": "STU002", "month": "June", "year": 2026, "amount": "650", "method": "UPI", "date_paid": "2026-06-10"}

    created = client.post("/fees/manual", json=body)
    again = client.post("/fees/manual", json=body)

    assert created.status_code == 201
    fee = created.get_json()["fee"]
    assert fee["amount"] == "650.00"
    assert fee["date_paid"] == "2026-06-10T00:00:00"
    assert again.status_code == 400

    report = client.get("/reports/revenue?year=2026").get_json()
    assert report["total_revenue"] == "650.00"
    assert report["standard_stats"]["9"] == {"total": "650.00", "count": 1}
    assert report["method_stats"]["UPI"] == 1
    assert report["years"] == [2026]

    fees_report = client.get("/reports/fees?year=2026").get_json()
    row = next(r for r in fees_report if r["student_id"] == "STU002")
    assert row["records"]["June"]["status"] == "Paid"
    assert row["records"]["May"] == {"status": "Unpaid"}
    assert row["balance"] == "7150.00"


def test_manual_payment_with_bad_date(client):
    body = {"student_id": "STU001", "month": "May", "year": 2026, "amount": "500", "method": "Cash", "date_paid": "10/06/2026"}

    res = client.post("/fees/manual", json=body)

    assert res.status_code == 400
    assert res.get_json()["kind"] == "ValidationError"


def test_attendance_register_and_defaulters(client):
    assert client.post("/attendance/2026-07-01", json={"marks": {"STU001": "P", "STU002": "A"}}).status_code == 200
    assert client.post("/attendance/2026-07-02", json={"marks": {"STU001": "P", "STU002": "P"}}).status_code == 200

    data = client.get("/attendance/defaulters/2026/7").get_json()

    assert data["threshold"] == 75.0
    assert [d["student_id"] for d in data["defaulters"]] == ["STU002"]
    assert data["defaulters"][0]["percentage"] == 50.0

    summary = client.get("/students/STU001/attendance?start=2026-07-01&end=2026-07-31").get_json()
    assert summary["present"] == 2
    assert summary["is_defaulter"] is False

    detailed = client.get("/attendance/detailed").get_json()
    assert detailed["dates"] == ["2026-07-01", "2026-07-02"]
    assert detailed["report"][1]["records"] == {"2026-07-01": "A", "2026-07-02": "P"}


@pytest.mark.parametrize(
    "path, body",
    [
        ("/attendance/2026-07-01", {"marks": {"STU001": "Z"}}),
        ("/attendance/2026-07-01", {"marks": ["STU001"]}),
        ("/attendance/yesterday", {"marks": {"STU001": "P"}}),
    ],
)
def test_attendance_rejects_bad_input(client, path, body):
    res = client.post(path, json=body)
    assert res.status_code == 400


def test_reviews_start_empty(client):
    assert client.get("/payments/reviews").get_json() == []


@pytest.mark.parametrize("body", [["order_1", "pay_1"], "pay_1", 42])
def test_non_object_json_bodies_are_rejected(client, fees_repo, body):
    confirm = client.post("/payments/confirm", json=body)
    manual = client.post("/fees/manual", json=body)
    register = client.post("/attendance/2026-07-01", json=body)

    assert confirm.status_code == 400
    assert confirm.get_json() == {"accepted": False, "reason": "invalid_input"}
    assert manual.status_code == 400
    assert manual.get_json()["kind"] == "ValidationError"
    assert register.status_code == 400
    assert fees_repo.records == []
