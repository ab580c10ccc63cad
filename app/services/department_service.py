"""
Department service - business logic for department management
"""
import logging
from sqlalchemy.orm import Session
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError, OperationalError
from typing import List, Optional
from app.core.errors import ConflictError, NotFoundError, TransientStorageError, ValidationError
from app.db.session import begin_write
from app.models.department import Department
from app.schemas.department import DepartmentCreate

logger = logging.getLogger(__name__)


def create_department(
    db: Session,
    department_data: DepartmentCreate
) -> Department:
    """
    Create a new department

    Args:
        db: Database session
        department_data: Department creation data

    Returns:
        Created Department instance

    Raises:
        ValidationError: If the name is empty
        ConflictError: If the name or explicit id is already taken
        TransientStorageError: If the store is locked or unreachable
    """
    name = (department_data.name or "").strip()
    if not name:
        raise ValidationError("Department name is required")

    try:
        begin_write(db)

        # Check for duplicate name (case-insensitive)
        existing = db.query(Department).filter(
            func.lower(Department.name) == func.lower(name)
        ).first()
        if existing:
            raise ConflictError(f"Department with name '{name}' already exists")

        if department_data.id is not None and get_department(db, department_data.id):
            raise ConflictError(f"Department with id {department_data.id} already exists")

        department = Department(
            id=department_data.id,
            name=name,
            location=department_data.location
        )
        db.add(department)
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise ConflictError(f"Department '{name}' conflicts with an existing department") from e
    except OperationalError as e:
        db.rollback()
        raise TransientStorageError("Storage is busy or unavailable, retry the request") from e
    except Exception:
        db.rollback()
        raise
    db.refresh(department)

    logger.info("Created department %s (%s)", department.id, department.name)
    return department


def list_departments(
    db: Session,
    skip: int = 0,
    limit: int = 100
) -> List[Department]:
    """
    List departments ordered by id

    Args:
        db: Database session
        skip: Number of records to skip
        limit: Maximum number of records to return

    Returns:
        List of Department instances
    """
    return db.query(Department).order_by(Department.id).offset(skip).limit(limit).all()


def get_department(db: Session, department_id: int) -> Optional[Department]:
    """Get a department by ID"""
    return db.query(Department).filter(Department.id == department_id).first()


def get_department_or_404(db: Session, department_id: int) -> Department:
    department = get_department(db, department_id)
    if not department:
        raise NotFoundError(f"Department with id {department_id} not found")
    return department
