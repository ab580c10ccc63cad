"""
Salary audit service

Only two operations exist: append an entry (called from update_salary inside
its transaction) and list the entries of one employee. There is no update or
delete path.
"""
from decimal import Decimal
from typing import List
from sqlalchemy.orm import Session
from app.core.errors import NotFoundError
from app.models.employee import Employee
from app.models.salary_audit import SalaryAudit
from app.utils.datetime_utils import now_utc


def record_salary_change(
    db: Session,
    employee_id: int,
    old_salary: Decimal,
    new_salary: Decimal
) -> SalaryAudit:
    """
    Append a salary audit entry to the caller's unit of work

    The entry is flushed but not committed; the caller commits it together
    with the salary write, or rolls both back.

    Args:
        db: Database session holding the open transaction
        employee_id: ID of the employee whose salary changed
        old_salary: Salary read inside the same transaction
        new_salary: Salary being written

    Returns:
        Pending SalaryAudit instance
    """
    entry = SalaryAudit(
        employee_id=employee_id,
        old_salary=old_salary,
        new_salary=new_salary,
        changed_at=now_utc()
    )
    db.add(entry)
    db.flush()
    return entry


def list_salary_history(
    db: Session,
    employee_id: int,
    newest_first: bool = True
) -> List[SalaryAudit]:
    """
    List salary audit entries for an employee

    Args:
        db: Database session
        employee_id: ID of the employee (inactive employees included)
        newest_first: Most recent change first (default) or chronological

    Returns:
        List of SalaryAudit instances ordered by changed_at, ties broken by id

    Raises:
        NotFoundError: If the employee does not exist
    """
    exists = db.query(Employee.id).filter(Employee.id == employee_id).first()
    if not exists:
        raise NotFoundError(f"Employee with id {employee_id} not found")

    query = db.query(SalaryAudit).filter(SalaryAudit.employee_id == employee_id)
    if newest_first:
        query = query.order_by(SalaryAudit.changed_at.desc(), SalaryAudit.id.desc())
    else:
        query = query.order_by(SalaryAudit.changed_at.asc(), SalaryAudit.id.asc())
    return query.all()
