"""
Department endpoints
"""
from typing import List
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from app.core.deps import get_db
from app.schemas.department import DepartmentCreate, DepartmentOut
from app.services.department_service import (
    create_department,
    list_departments,
    get_department_or_404,
)

router = APIRouter()


@router.post("", response_model=DepartmentOut, status_code=201)
def create_department_endpoint(
    department_data: DepartmentCreate,
    db: Session = Depends(get_db)
):
    """Create a new department"""
    return create_department(db, department_data)


@router.get("", response_model=List[DepartmentOut])
def list_departments_endpoint(
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
    db: Session = Depends(get_db)
):
    """List departments"""
    return list_departments(db, skip=skip, limit=limit)


@router.get("/{department_id}", response_model=DepartmentOut)
def get_department_endpoint(
    department_id: int,
    db: Session = Depends(get_db)
):
    """Get a department by ID"""
    return get_department_or_404(db, department_id)
