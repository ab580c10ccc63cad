"""
Tests for salary updates and the salary audit trail
"""
from decimal import Decimal, ROUND_HALF_UP
from uuid import uuid4

import pytest
from hypothesis import HealthCheck, given, settings, strategies as st
from sqlalchemy.exc import OperationalError
from app.core.errors import NotFoundError, ValidationError, TransientStorageError
from app.models.employee import Employee
from app.models.salary_audit import SalaryAudit
from app.schemas.employee import EmployeeCreate
from app.services.audit_service import list_salary_history, record_salary_change
from app.services.employee_service import (
    add_employee,
    calculate_bonus,
    deactivate_employee,
    update_salary,
)

salaries = st.decimals(
    min_value=0,
    max_value=1_000_000,
    places=2,
    allow_nan=False,
    allow_infinity=False,
)


def _audit_count(db, employee_id=None) -> int:
    query = db.query(SalaryAudit)
    if employee_id is not None:
        query = query.filter(SalaryAudit.employee_id == employee_id)
    return query.count()


def test_update_salary_scenario_employee_1000(seeded_db):
    employee = update_salary(seeded_db, 1000, Decimal("95000"))

    assert employee.salary == Decimal("95000")
    latest = list_salary_history(seeded_db, 1000)[0]
    assert latest.old_salary == Decimal("75000")
    assert latest.new_salary == Decimal("95000")
    assert latest.changed_at is not None


def test_history_reproduces_transitions_in_order(db, test_employee):
    update_salary(db, test_employee.id, Decimal("60000"))
    update_salary(db, test_employee.id, Decimal("70000"))

    chronological = list_salary_history(db, test_employee.id, newest_first=False)
    assert [(e.old_salary, e.new_salary) for e in chronological] == [
        (Decimal("50000"), Decimal("60000")),
        (Decimal("60000"), Decimal("70000")),
    ]

    newest_first = list_salary_history(db, test_employee.id)
    assert [e.id for e in newest_first] == [e.id for e in reversed(chronological)]


def test_update_salary_unknown_employee(db):
    with pytest.raises(NotFoundError):
        update_salary(db, 9999, Decimal("1000"))

    assert _audit_count(db) == 0


def test_update_salary_inactive_employee(db, test_employee):
    deactivate_employee(db, test_employee.id)

    with pytest.raises(NotFoundError):
        update_salary(db, test_employee.id, Decimal("65000"))

    assert _audit_count(db, test_employee.id) == 0


@pytest.mark.parametrize("salary", [Decimal("-1"), Decimal("-50000"), "-0.01"])
def test_update_salary_negative_leaves_state_unchanged(db, test_employee, salary):
    with pytest.raises(ValidationError):
        update_salary(db, test_employee.id, salary)

    db.expire_all()
    assert db.get(Employee, test_employee.id).salary == Decimal("50000")
    assert _audit_count(db, test_employee.id) == 0


def test_update_salary_same_value_records_nothing(db, test_employee):
    employee = update_salary(db, test_employee.id, Decimal("50000.00"))

    assert employee.salary == Decimal("50000")
    assert _audit_count(db, test_employee.id) == 0


def test_update_salary_rolls_back_when_audit_write_fails(db, test_employee, monkeypatch):
    import app.services.employee_service as employee_service

    def broken_append(*args, **kwargs):
        raise RuntimeError("audit store unavailable")

    monkeypatch.setattr(employee_service, "record_salary_change", broken_append)

    with pytest.raises(RuntimeError):
        update_salary(db, test_employee.id, Decimal("80000"))

    db.expire_all()
    assert db.get(Employee, test_employee.id).salary == Decimal("50000")
    assert _audit_count(db, test_employee.id) == 0


def test_update_salary_lock_failure_is_transient(db, test_employee, monkeypatch):
    import app.services.employee_service as employee_service

    def locked_append(*args, **kwargs):
        raise OperationalError("INSERT INTO salary_audit", {}, Exception("database is locked"))

    monkeypatch.setattr(employee_service, "record_salary_change", locked_append)

    with pytest.raises(TransientStorageError):
        update_salary(db, test_employee.id, Decimal("80000"))

    db.expire_all()
    assert db.get(Employee, test_employee.id).salary == Decimal("50000")
    assert _audit_count(db, test_employee.id) == 0


def test_audit_entries_cannot_be_modified(db, test_employee):
    update_salary(db, test_employee.id, Decimal("60000"))
    entry = list_salary_history(db, test_employee.id)[0]

    entry.new_salary = Decimal("1")
    with pytest.raises(ValidationError, match="append-only"):
        db.flush()
    db.rollback()

    assert list_salary_history(db, test_employee.id)[0].new_salary == Decimal("60000")


def test_audit_entries_cannot_be_deleted(db, test_employee):
    update_salary(db, test_employee.id, Decimal("60000"))
    entry = list_salary_history(db, test_employee.id)[0]

    db.delete(entry)
    with pytest.raises(ValidationError, match="append-only"):
        db.flush()
    db.rollback()

    assert _audit_count(db, test_employee.id) == 1


def test_record_salary_change_joins_callers_transaction(db, test_employee):
    record_salary_change(db, test_employee.id, Decimal("50000"), Decimal("51000"))
    db.rollback()

    assert _audit_count(db, test_employee.id) == 0


def test_history_of_unknown_employee(db):
    with pytest.raises(NotFoundError):
        list_salary_history(db, 4242)


def test_history_kept_after_deactivation(db, test_employee):
    update_salary(db, test_employee.id, Decimal("60000"))
    deactivate_employee(db, test_employee.id)

    history = list_salary_history(db, test_employee.id)
    assert [(e.old_salary, e.new_salary) for e in history] == [(Decimal("50000"), Decimal("60000"))]


@settings(max_examples=25, deadline=None, suppress_health_check=[HealthCheck.function_scoped_fixture])
@given(initial=salaries, updates=st.lists(salaries, min_size=1, max_size=8))
def test_history_is_gap_free_chain(db, initial, updates):
    employee = add_employee(
        db,
        EmployeeCreate(
            first_name="Chain",
            last_name="Tester",
            email=f"chain-{uuid4().hex}@x.com",
            salary=initial,
        )
    )

    expected = []
    current = initial
    for value in updates:
        update_salary(db, employee.id, value)
        if value != current:
            expected.append((current, value))
            current = value

        # Bonus is always derived from the live salary
        assert calculate_bonus(db, employee.id) == (current * Decimal("0.10")).quantize(
            Decimal("0.01"), rounding=ROUND_HALF_UP
        )

    history = list_salary_history(db, employee.id, newest_first=False)
    assert [(e.old_salary, e.new_salary) for e in history] == expected
    assert db.get(Employee, employee.id).salary == current
