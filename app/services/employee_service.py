"""
Employee service - business logic for employee management

Every public operation runs as one unit of work on the given session: it
either commits all of its writes or rolls all of them back before the error
reaches the caller.
"""
import logging
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import List, Optional
from sqlalchemy import text
from sqlalchemy.orm import Session, joinedload
from sqlalchemy.exc import IntegrityError, OperationalError, TimeoutError as PoolTimeoutError
from app.core.config import settings
from app.core.constants import MONEY_QUANTUM
from app.core.errors import (
    ValidationError,
    ConflictError,
    UnresolvedReferenceError,
    NotFoundError,
    TransientStorageError,
)
from app.db.session import begin_write
from app.models.department import Department
from app.models.employee import Employee
from app.schemas.employee import EmployeeCreate
from app.services.audit_service import record_salary_change
from app.utils.datetime_utils import now_utc

logger = logging.getLogger(__name__)

TRANSIENT_ERRORS = (OperationalError, PoolTimeoutError)

# Largest amount the Numeric salary and audit columns hold
_SALARY_TYPE = Employee.__table__.c.salary.type
MAX_SALARY = Decimal(10) ** (_SALARY_TYPE.precision - _SALARY_TYPE.scale) - MONEY_QUANTUM


def _normalize_email(email: Optional[str]) -> str:
    return (email or "").strip().lower()


def _validate_salary(salary) -> Decimal:
    """
    Validate a salary value and return it at currency precision

    Raises:
        ValidationError: If missing, not a number, negative, above MAX_SALARY,
            or finer than 0.01
    """
    if salary is None:
        raise ValidationError("Salary is required")
    try:
        value = salary if isinstance(salary, Decimal) else Decimal(str(salary))
        if not value.is_finite():
            raise ValidationError("Salary must be a finite number")
        if value < 0:
            raise ValidationError("Salary must be non-negative")
        if value > MAX_SALARY:
            raise ValidationError(f"Salary must not exceed {MAX_SALARY}")
        quantized = value.quantize(MONEY_QUANTUM)
    except InvalidOperation as e:
        raise ValidationError(f"Invalid salary value: {salary!r}") from e
    if quantized != value:
        raise ValidationError("Salary must not have more than two decimal places")
    return quantized


def _check_reporting_hierarchy_cycle(
    db: Session,
    employee_id: int,
    manager_id: int
) -> bool:
    """
    Check if setting manager_id would create a cycle

    Args:
        db: Database session
        employee_id: ID of employee being updated
        manager_id: Proposed manager ID

    Returns:
        True if cycle would be created, False otherwise
    """
    if employee_id == manager_id:
        return True

    # Walk up the chain from the proposed manager
    visited = set()
    current_id = manager_id

    while current_id is not None:
        if current_id == employee_id:
            return True

        if current_id in visited:
            break  # Pre-existing loop that does not involve this employee

        visited.add(current_id)
        manager = db.query(Employee).filter(Employee.id == current_id).first()
        if not manager or not manager.manager_id:
            break

        current_id = manager.manager_id

    return False


def _validate_new_employee(db: Session, employee_data: EmployeeCreate) -> dict:
    """Validate creation input and return the column values to insert"""
    first_name = (employee_data.first_name or "").strip()
    last_name = (employee_data.last_name or "").strip()
    email = _normalize_email(employee_data.email)

    if not first_name:
        raise ValidationError("First name is required")
    if not last_name:
        raise ValidationError("Last name is required")
    if not email:
        raise ValidationError("Email is required")
    salary = _validate_salary(employee_data.salary)

    # Email is unique across active and inactive employees
    existing = db.query(Employee.id).filter(Employee.email == email).first()
    if existing:
        raise ConflictError(f"Email '{email}' is already in use")

    if employee_data.department_id is not None:
        department = db.query(Department).filter(Department.id == employee_data.department_id).first()
        if not department:
            raise UnresolvedReferenceError(
                f"Department with id {employee_data.department_id} not found"
            )

    if employee_data.manager_id is not None:
        manager = db.query(Employee.id).filter(Employee.id == employee_data.manager_id).first()
        if not manager:
            raise UnresolvedReferenceError(
                f"Manager with id {employee_data.manager_id} not found"
            )

    return {
        "first_name": first_name,
        "last_name": last_name,
        "email": email,
        "phone": (employee_data.phone or "").strip() or None,
        "job_title": (employee_data.job_title or "").strip() or None,
        "salary": salary,
        "department_id": employee_data.department_id,
        "manager_id": employee_data.manager_id,
    }


def add_employee(
    db: Session,
    employee_data: EmployeeCreate
) -> Employee:
    """
    Create a new active employee

    On SQLite the write lock is taken before the email pre-check, so the
    check and the insert cannot interleave with another writer. Elsewhere the
    unique constraint is the final arbiter: if it fires at commit, the
    transaction is rolled back and the input is validated once more, which
    turns a lost race into ConflictError.

    Args:
        db: Database session
        employee_data: Employee creation data

    Returns:
        Created Employee instance (its id is the newly assigned employee id)

    Raises:
        ValidationError: If a required field is empty or salary is invalid
        ConflictError: If the email is already in use
        UnresolvedReferenceError: If department_id or manager_id do not resolve
        TransientStorageError: If the store is locked or unreachable
    """
    for attempt in range(2):
        try:
            begin_write(db)
            fields = _validate_new_employee(db, employee_data)
            employee = Employee(**fields, active=True, created_at=now_utc())
            db.add(employee)
            db.commit()
        except IntegrityError as e:
            db.rollback()
            if attempt == 0:
                logger.warning(
                    "Constraint violation while creating employee %s, re-validating",
                    _normalize_email(employee_data.email)
                )
                continue
            raise ConflictError(
                f"Employee '{_normalize_email(employee_data.email)}' conflicts with an existing record"
            ) from e
        except TRANSIENT_ERRORS as e:
            db.rollback()
            logger.warning("Storage unavailable while creating employee: %s", e)
            raise TransientStorageError("Storage is busy or unavailable, retry the request") from e
        except Exception:
            db.rollback()
            raise

        db.refresh(employee)
        logger.info("Created employee %s (%s)", employee.id, employee.email)
        return employee


def _lock_active_employee(db: Session, employee_id: int) -> Employee:
    """
    Load an active employee with a row lock held until the transaction ends

    Raises:
        NotFoundError: If the employee does not exist or is inactive
    """
    if db.get_bind().dialect.name == "postgresql":
        timeout_ms = int(settings.LOCK_TIMEOUT_SECONDS * 1000)
        db.execute(text(f"SET LOCAL lock_timeout = '{timeout_ms}ms'"))

    employee = (
        db.query(Employee)
        .filter(Employee.id == employee_id)
        .with_for_update()
        .populate_existing()
        .first()
    )
    if not employee or not employee.active:
        raise NotFoundError(f"Employee with id {employee_id} not found")
    return employee


def update_salary(
    db: Session,
    employee_id: int,
    new_salary
) -> Employee:
    """
    Change an employee's salary and record the transition in the audit log

    The old salary is read under a row lock in the same transaction that
    writes the new salary and the audit entry, so concurrent updates on one
    employee form a single linear history. Setting the salary to its
    current value writes nothing and records no audit entry.

    Args:
        db: Database session
        employee_id: ID of the employee
        new_salary: New salary (non-negative)

    Returns:
        Updated Employee instance

    Raises:
        ValidationError: If new_salary is negative, above MAX_SALARY or malformed
        NotFoundError: If the employee does not exist or is inactive
        TransientStorageError: If the lock could not be acquired in time
    """
    new_salary = _validate_salary(new_salary)

    try:
        begin_write(db)
        employee = _lock_active_employee(db, employee_id)
        old_salary = employee.salary

        if old_salary == new_salary:
            db.commit()
            logger.info("Salary for employee %s already %s, nothing recorded", employee_id, new_salary)
            return employee

        employee.salary = new_salary
        record_salary_change(db, employee.id, old_salary, new_salary)
        db.commit()
    except TRANSIENT_ERRORS as e:
        db.rollback()
        logger.warning("Salary update for employee %s failed on storage: %s", employee_id, e)
        raise TransientStorageError(
            f"Could not update salary for employee {employee_id}: storage busy, retry the request"
        ) from e
    except Exception:
        db.rollback()
        raise

    logger.info("Salary for employee %s changed %s -> %s", employee_id, old_salary, new_salary)
    return employee


def get_employee(db: Session, employee_id: int) -> Optional[Employee]:
    """Get an employee by ID (active or inactive)"""
    return (
        db.query(Employee)
        .options(joinedload(Employee.manager))
        .filter(Employee.id == employee_id)
        .first()
    )


def get_employee_or_404(db: Session, employee_id: int) -> Employee:
    employee = get_employee(db, employee_id)
    if not employee:
        raise NotFoundError(f"Employee with id {employee_id} not found")
    return employee


def get_employee_name(db: Session, employee_id: int) -> str:
    """
    Get an employee's display name, first and last name joined by one space

    Inactive employees are still visible.

    Raises:
        NotFoundError: If no employee with that id exists
    """
    return get_employee_or_404(db, employee_id).full_name


def compute_bonus(salary) -> Decimal:
    """Bonus for a salary at BONUS_RATE, rounded half-up to 0.01"""
    bonus = Decimal(salary) * settings.BONUS_RATE
    return bonus.quantize(MONEY_QUANTUM, rounding=ROUND_HALF_UP)


def calculate_bonus(db: Session, employee_id: int) -> Decimal:
    """
    Compute the bonus from the current salary and BONUS_RATE

    The bonus is derived on every call and never stored. The result is kept
    at the currency minor unit (0.01, half-up).

    Raises:
        NotFoundError: If no employee with that id exists
    """
    return compute_bonus(get_employee_or_404(db, employee_id).salary)


def list_employees(
    db: Session,
    skip: int = 0,
    limit: int = 100,
    department_id: Optional[int] = None,
    active_only: Optional[bool] = None
) -> List[Employee]:
    """
    List employees with optional filtering

    Args:
        db: Database session
        skip: Number of records to skip
        limit: Maximum number of records to return
        department_id: Filter by department ID
        active_only: If True only active, if False only inactive employees

    Returns:
        List of Employee instances ordered by id
    """
    query = db.query(Employee).options(joinedload(Employee.manager))

    if department_id is not None:
        query = query.filter(Employee.department_id == department_id)

    if active_only is not None:
        query = query.filter(Employee.active == active_only)

    return query.order_by(Employee.id).offset(skip).limit(limit).all()


def deactivate_employee(db: Session, employee_id: int) -> Employee:
    """
    Logically delete an employee by clearing the active flag

    The row and its salary audit entries are kept. Deactivating an already
    inactive employee is a no-op.

    Raises:
        NotFoundError: If no employee with that id exists
    """
    try:
        begin_write(db)
        employee = get_employee_or_404(db, employee_id)
        if not employee.active:
            db.commit()
            return employee

        employee.active = False
        db.commit()
    except TRANSIENT_ERRORS as e:
        db.rollback()
        raise TransientStorageError("Storage is busy or unavailable, retry the request") from e
    except Exception:
        db.rollback()
        raise
    db.refresh(employee)

    logger.info("Deactivated employee %s", employee_id)
    return employee


def assign_manager(
    db: Session,
    employee_id: int,
    manager_id: Optional[int]
) -> Employee:
    """
    Set or clear an employee's manager

    Args:
        db: Database session
        employee_id: ID of the employee
        manager_id: ID of the new manager, or None to clear

    Returns:
        Updated Employee instance

    Raises:
        NotFoundError: If the employee does not exist
        ValidationError: If the employee would manage themselves or the chain would loop
        UnresolvedReferenceError: If the manager does not exist
    """
    try:
        begin_write(db)
        employee = get_employee_or_404(db, employee_id)

        if manager_id is not None:
            if manager_id == employee_id:
                raise ValidationError("Employee cannot be their own manager")

            manager = db.query(Employee.id).filter(Employee.id == manager_id).first()
            if not manager:
                raise UnresolvedReferenceError(f"Manager with id {manager_id} not found")

            if _check_reporting_hierarchy_cycle(db, employee_id, manager_id):
                raise ValidationError("Cannot set manager: would create a cycle in the hierarchy")

        employee.manager_id = manager_id
        db.commit()
    except TRANSIENT_ERRORS as e:
        db.rollback()
        raise TransientStorageError("Storage is busy or unavailable, retry the request") from e
    except IntegrityError as e:
        db.rollback()
        raise UnresolvedReferenceError(f"Manager with id {manager_id} not found") from e
    except Exception:
        db.rollback()
        raise
    db.refresh(employee)

    logger.info("Employee %s now reports to %s", employee_id, manager_id)
    return employee
