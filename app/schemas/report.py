"""
Reporting schemas
"""
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel


class EmployeeDirectoryRow(BaseModel):
    """Active employee joined with department and manager names"""
    employee_id: int
    full_name: str
    email: str
    phone: Optional[str] = None
    job_title: Optional[str] = None
    salary: Decimal
    department_id: Optional[int] = None
    department_name: Optional[str] = None
    location: Optional[str] = None
    manager_name: Optional[str] = None
