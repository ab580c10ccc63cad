"""
Report service - derived read-only views over the record store
"""
from typing import List, Dict, Optional
from sqlalchemy import select
from sqlalchemy.orm import Session, aliased
from app.core.constants import NAME_SEPARATOR
from app.models.department import Department
from app.models.employee import Employee


def _full_name(model):
    return model.first_name + NAME_SEPARATOR + model.last_name


def employee_directory_query(department_id: Optional[int] = None):
    """
    Build the employee directory select

    Active employees only, outer-joined to their department and manager so
    employees without either still appear.
    """
    manager = aliased(Employee)
    query = (
        select(
            Employee.id.label("employee_id"),
            _full_name(Employee).label("full_name"),
            Employee.email,
            Employee.phone,
            Employee.job_title,
            Employee.salary,
            Employee.department_id,
            Department.name.label("department_name"),
            Department.location,
            _full_name(manager).label("manager_name"),
        )
        .select_from(Employee)
        .outerjoin(Department, Employee.department_id == Department.id)
        .outerjoin(manager, Employee.manager_id == manager.id)
        .where(Employee.active == True)  # noqa: E712
        .order_by(Employee.id)
    )
    if department_id is not None:
        query = query.where(Employee.department_id == department_id)
    return query


def employee_directory(
    db: Session,
    department_id: Optional[int] = None
) -> List[Dict]:
    """
    Get the employee directory rows

    Executed on every call against committed store contents; nothing is
    cached.

    Args:
        db: Database session
        department_id: Optional department filter

    Returns:
        List of dictionaries, one per active employee
    """
    result = db.execute(employee_directory_query(department_id))
    return [dict(row) for row in result.mappings()]
