from decimal import Decimal

import pytest


@pytest.fixture
def officer(auth_headers):
    return auth_headers("PAYROLL_OFFICER")


@pytest.fixture
def employees(make_employee):
    return [make_employee(), make_employee(), make_employee()]


def _payload(employee_id: int, **overrides) -> dict:
    payload = {
        "employee_id": employee_id,
        "pay_period_month": 7,
        "pay_period_year": 2025,
        "base_salary": "5000.00",
        "overtime": "120.00",
        "allowances": "80.00",
        "deductions": "150.00",
        "tax_deduction": "700.00",
        "notes": "July run",
    }
    payload.update(overrides)
    return payload


def test_create_get_and_lifecycle(client, officer, employees):
    created = client.post("/payrolls", json=_payload(employees[0].id), headers=officer)
    assert created.status_code == 201, created.text
    payroll = created.json()
    assert Decimal(payroll["gross_pay"]) == Decimal("5200")
    assert Decimal(payroll["net_pay"]) == Decimal("4350")
    assert payroll["status"] == "Draft"

    fetched = client.get(f"/payrolls/{payroll['id']}", headers=officer)
    assert fetched.json()["pay_period"] == "July 2025"

    early_paid = client.post(f"/payrolls/{payroll['id']}/mark-paid", headers=officer)
    assert early_paid.status_code == 400
    assert early_paid.json()["detail"]["errors"] == ["Only processed payrolls can be marked as paid"]

    processed = client.post(f"/payrolls/{payroll['id']}/process", headers=officer)
    assert processed.status_code == 200
    assert processed.json()["status"] == "Processed"
    assert processed.json()["processed_date"] is not None

    paid = client.post(f"/payrolls/{payroll['id']}/mark-paid", headers=officer)
    assert paid.status_code == 200
    assert paid.json()["status"] == "Paid"

    frozen = client.put(f"/payrolls/{payroll['id']}", json=_payload(employees[0].id), headers=officer)
    assert frozen.status_code == 400
    assert frozen.json()["detail"]["errors"] == ["Cannot update paid payroll"]

    not_deletable = client.delete(f"/payrolls/{payroll['id']}", headers=officer)
    assert not_deletable.json()["detail"]["errors"] == ["Cannot delete processed or paid payroll"]


def test_duplicate_period_message(client, officer, employees):
    client.post("/payrolls", json=_payload(employees[0].id), headers=officer)

    resp = client.post("/payrolls", json=_payload(employees[0].id), headers=officer)

    assert resp.status_code == 400
    assert resp.json()["detail"] == {
        "message": "Validation failed",
        "errors": ["Payroll for this employee already exists for July 2025"],
    }


def test_sub_cent_amounts_are_rejected_before_storage(client, officer, employees):
    resp = client.post(
        "/payrolls",
        json=_payload(employees[0].id, base_salary="1000.005", overtime="1000.005"),
        headers=officer,
    )

    assert resp.status_code == 422
    assert client.get(f"/payrolls/by-employee/{employees[0].id}", headers=officer).json() == []


def test_items_are_returned_with_type_names(client, officer, employees, uow):
    allowance = uow.payroll_item_types.get_by_code("ALLOWANCE")
    insurance = uow.payroll_item_types.get_by_code("INSURANCE")
    body = _payload(
        employees[0].id,
        payroll_items=[
            {"payroll_item_type_id": allowance.id, "description": "Meal allowance", "amount": "80.00"},
            {
                "payroll_item_type_id": insurance.id,
                "description": "Health plan",
                "amount": "150.00",
                "is_deduction": True,
            },
        ],
    )

    resp = client.post("/payrolls", json=body, headers=officer)

    assert resp.status_code == 201, resp.text
    items = resp.json()["payroll_items"]
    assert [(i["payroll_item_type_name"], i["is_deduction"]) for i in items] == [
        ("Allowance", False),
        ("Insurance", True),
    ]


def test_generate_all_reports_created_and_skipped(client, officer, employees):
    client.post("/payrolls", json=_payload(employees[1].id), headers=officer)

    resp = client.post("/payrolls/generate-all/2025/7", headers=officer)

    assert resp.status_code == 200, resp.text
    report = resp.json()
    assert report["created_count"] == 2
    assert report["skipped_count"] == 1
    assert report["skipped_employee_ids"] == [employees[1].id]
    assert report["errors"] == []

    by_period = client.get("/payrolls/by-period/2025/7", headers=officer)
    assert len(by_period.json()) == 3


def test_generate_all_rejects_invalid_period(client, officer, employees):
    resp = client.post("/payrolls/generate-all/2025/13", headers=officer)

    assert resp.status_code == 400
    assert resp.json()["detail"]["errors"] == ["Pay period month must be between 1 and 12"]


def test_generate_for_missing_employee_is_404(client, officer):
    resp = client.post("/payrolls/generate/9999/2025/7", headers=officer)

    assert resp.status_code == 404


def test_total_amount_for_period(client, officer, employees):
    first = client.post("/payrolls", json=_payload(employees[0].id), headers=officer).json()
    client.post("/payrolls", json=_payload(employees[1].id), headers=officer)
    client.post(f"/payrolls/{first['id']}/process", headers=officer)

    resp = client.get("/payrolls/total-amount/2025/7", headers=officer)

    assert resp.status_code == 200
    assert Decimal(resp.json()["total_net_pay"]) == Decimal("4350.00")


def test_search_filters_by_status(client, officer, employees):
    first = client.post("/payrolls", json=_payload(employees[0].id), headers=officer).json()
    client.post("/payrolls", json=_payload(employees[1].id), headers=officer)
    client.post(f"/payrolls/{first['id']}/process", headers=officer)

    resp = client.get("/payrolls", params={"status": "Processed"}, headers=officer)

    body = resp.json()
    assert body["total_count"] == 1
    assert body["items"][0]["id"] == first["id"]


def test_item_types_listing(client, auth_headers):
    resp = client.get("/payroll-item-types", headers=auth_headers("EMPLOYEE"))

    assert resp.status_code == 200
    codes = {t["code"] for t in resp.json()}
    assert {"BASIC", "TAX", "OTHER_DEDUCTION"} <= codes


def test_employee_role_cannot_process(client, officer, auth_headers, employees):
    payroll = client.post("/payrolls", json=_payload(employees[0].id), headers=officer).json()

    resp = client.post(f"/payrolls/{payroll['id']}/process", headers=auth_headers("EMPLOYEE"))

    assert resp.status_code == 403
