from decimal import Decimal

from payroll_api.models.department import Department
from payroll_api.models.employee import Employee, EmployeeStatus
from payroll_api.models.payroll import Payroll, PayrollStatus


def test_employee_search_matches_name_email_and_code(uow, make_employee):
    ada = make_employee(first_name="Ada", last_name="Lovelace", email="ada@analytical.org")
    make_employee(first_name="Charles", last_name="Babbage", employee_code="CB-1")

    assert [e.id for e in uow.employees.search("LOVE")] == [ada.id]
    assert [e.id for e in uow.employees.search("analytical")] == [ada.id]
    assert [e.last_name for e in uow.employees.search("cb-")] == ["Babbage"]


def test_employee_lookups(uow, make_department, make_employee):
    department = make_department()
    active = make_employee(department)
    make_employee(department, status=EmployeeStatus.INACTIVE.value)

    assert uow.employees.get_by_email(active.email.upper()).id == active.id
    assert len(uow.employees.get_by_department(department.id)) == 2
    assert [e.id for e in uow.employees.get_active()] == [active.id]
    assert uow.employees.has_active_in_department(department.id)
    assert uow.departments.count_employees(department.id) == 2


def test_payroll_status_queries(uow, make_employee, make_payroll):
    employee = make_employee()
    draft = make_payroll(employee, month=6)
    processed = make_payroll(employee, month=7, status=PayrollStatus.PROCESSED.value)

    assert [p.id for p in uow.payrolls.get_by_status(PayrollStatus.DRAFT)] == [draft.id]
    assert uow.payrolls.has_processed_for_employee(employee.id)
    assert uow.payrolls.has_payroll_for_period(employee.id, 7, 2025)
    assert not uow.payrolls.has_payroll_for_period(employee.id, 8, 2025)
    assert [p.id for p in uow.payrolls.get_by_employee(employee.id)] == [processed.id, draft.id]


def test_generic_repository_operations(uow, db, make_employee):
    employee = make_employee(base_salary=Decimal("3000"))

    assert uow.employees.first(Employee.employee_code == employee.employee_code).id == employee.id
    assert uow.employees.exists(Employee.id == employee.id)
    assert uow.employees.count() == 1

    employee.base_salary = Decimal("3100")
    uow.employees.update(employee)
    uow.commit()
    db.expire_all()
    assert uow.employees.get_by_id(employee.id).base_salary == Decimal("3100")

    with uow.transaction():
        uow.payrolls.add_all(
            [
                Payroll(employee_id=employee.id, pay_period_month=m, pay_period_year=2025)
                for m in (1, 2)
            ]
        )
    assert uow.payrolls.count() == 2

    with uow.transaction():
        uow.payrolls.delete_all(uow.payrolls.get_all())
    assert uow.payrolls.count() == 0
    assert uow.payroll_item_types.get_by_code("TAX").is_deduction
    assert len(uow.payroll_item_types.get_active()) == 8


def test_update_merges_a_detached_row(uow, db, make_department):
    department = make_department(name="Research", code="RND")
    db.expunge(department)
    department.description = "Applied research"

    merged = uow.departments.update(department)
    uow.commit()

    assert merged is not department
    db.expire_all()
    assert uow.departments.first(Department.code == "RND").description == "Applied research"
