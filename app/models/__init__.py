"""
Database models
"""
from app.models.department import Department
from app.models.employee import Employee
from app.models.salary_audit import SalaryAudit

__all__ = [
    "Department",
    "Employee",
    "SalaryAudit",
]
