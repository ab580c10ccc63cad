"""
Employee endpoints
"""
from typing import List, Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from app.core.config import settings
from app.core.deps import get_db
from app.schemas.employee import (
    EmployeeCreate,
    EmployeeOut,
    EmployeeNameOut,
    BonusOut,
    SalaryUpdate,
    ManagerAssignment,
)
from app.schemas.salary_audit import SalaryAuditOut
from app.services.audit_service import list_salary_history
from app.services.employee_service import (
    add_employee,
    update_salary,
    get_employee_name,
    compute_bonus,
    get_employee_or_404,
    list_employees,
    deactivate_employee,
    assign_manager,
)

router = APIRouter()


@router.post("", response_model=EmployeeOut, status_code=201)
def add_employee_endpoint(
    employee_data: EmployeeCreate,
    db: Session = Depends(get_db)
):
    """Create a new employee. The response carries the assigned id."""
    return add_employee(db, employee_data)


@router.get("", response_model=List[EmployeeOut])
def list_employees_endpoint(
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
    department_id: Optional[int] = Query(None),
    active_only: Optional[bool] = Query(None),
    db: Session = Depends(get_db)
):
    """List employees"""
    return list_employees(
        db,
        skip=skip,
        limit=limit,
        department_id=department_id,
        active_only=active_only
    )


@router.get("/{employee_id}", response_model=EmployeeOut)
def get_employee_endpoint(
    employee_id: int,
    db: Session = Depends(get_db)
):
    """Get an employee by ID (inactive employees included)"""
    return get_employee_or_404(db, employee_id)


@router.get("/{employee_id}/name", response_model=EmployeeNameOut)
def get_employee_name_endpoint(
    employee_id: int,
    db: Session = Depends(get_db)
):
    """Get "first last" for an employee"""
    return EmployeeNameOut(id=employee_id, name=get_employee_name(db, employee_id))


@router.get("/{employee_id}/bonus", response_model=BonusOut)
def calculate_bonus_endpoint(
    employee_id: int,
    db: Session = Depends(get_db)
):
    """Compute the bonus from the current salary"""
    employee = get_employee_or_404(db, employee_id)
    return BonusOut(
        id=employee_id,
        salary=employee.salary,
        bonus_rate=settings.BONUS_RATE,
        bonus=compute_bonus(employee.salary)
    )


@router.put("/{employee_id}/salary", response_model=EmployeeOut)
def update_salary_endpoint(
    employee_id: int,
    salary_data: SalaryUpdate,
    db: Session = Depends(get_db)
):
    """
    Change an employee's salary

    The change and its audit entry are committed together. Setting the
    current value again returns the record without recording anything.
    """
    return update_salary(db, employee_id, salary_data.salary)


@router.get("/{employee_id}/salary-history", response_model=List[SalaryAuditOut])
def salary_history_endpoint(
    employee_id: int,
    order: str = Query("desc", pattern="^(asc|desc)$", description="desc = most recent first"),
    db: Session = Depends(get_db)
):
    """List salary audit entries for an employee"""
    return list_salary_history(db, employee_id, newest_first=(order == "desc"))


@router.patch("/{employee_id}/manager", response_model=EmployeeOut)
def assign_manager_endpoint(
    employee_id: int,
    assignment: ManagerAssignment,
    db: Session = Depends(get_db)
):
    """Set or clear an employee's manager"""
    return assign_manager(db, employee_id, assignment.manager_id)


@router.delete("/{employee_id}", status_code=status.HTTP_204_NO_CONTENT)
def deactivate_employee_endpoint(
    employee_id: int,
    db: Session = Depends(get_db)
):
    """
    Deactivate an employee (logical delete)

    Returns 204 No Content. The record and its salary history are kept.
    """
    deactivate_employee(db, employee_id)
    return None
