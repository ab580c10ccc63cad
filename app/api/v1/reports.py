"""
Reporting endpoints
"""
from typing import List, Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from app.core.deps import get_db
from app.schemas.report import EmployeeDirectoryRow
from app.services.report_service import employee_directory

router = APIRouter()


@router.get("/employee-directory", response_model=List[EmployeeDirectoryRow])
def employee_directory_endpoint(
    department_id: Optional[int] = Query(None, description="Filter by department ID"),
    db: Session = Depends(get_db)
):
    """
    Active employees with department and manager names

    Read-only and computed per request.
    """
    return employee_directory(db, department_id=department_id)
