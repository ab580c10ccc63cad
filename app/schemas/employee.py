"""
Employee schemas
"""
from datetime import datetime
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, Field, field_serializer, ConfigDict


class EmployeeCreate(BaseModel):
    """Schema for creating an employee

    Required fields are optional here. Presence, range and emptiness checks
    live in the service so they surface as VALIDATION_ERROR rather than a
    request-shape error.
    """
    first_name: Optional[str] = Field(None, description="First name (required)")
    last_name: Optional[str] = Field(None, description="Last name (required)")
    email: Optional[str] = Field(None, description="Email address (unique, case-insensitive)")
    phone: Optional[str] = Field(None, description="Phone number")
    job_title: Optional[str] = Field(None, description="Job title")
    salary: Optional[Decimal] = Field(None, description="Salary (required, non-negative)")
    department_id: Optional[int] = Field(None, description="Department ID")
    manager_id: Optional[int] = Field(None, description="Manager's employee ID")


class SalaryUpdate(BaseModel):
    """Schema for changing an employee's salary"""
    salary: Optional[Decimal] = Field(None, description="New salary (required, non-negative)")


class ManagerAssignment(BaseModel):
    """Schema for (re)assigning or clearing an employee's manager"""
    manager_id: Optional[int] = Field(None, description="Manager's employee ID, null to clear")


class ManagerRef(BaseModel):
    """Minimal manager reference"""
    id: int
    first_name: str
    last_name: str

    model_config = ConfigDict(from_attributes=True)


class EmployeeOut(BaseModel):
    """Schema for employee output. Datetimes in UTC (Z)."""
    id: int
    first_name: str
    last_name: str
    email: str
    phone: Optional[str] = None
    job_title: Optional[str] = None
    salary: Decimal
    department_id: Optional[int] = None
    manager_id: Optional[int] = None
    manager: Optional[ManagerRef] = None
    active: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @field_serializer("created_at", when_used="always")
    @classmethod
    def _ser_datetime(cls, dt):
        from app.utils.datetime_utils import iso_8601_utc
        return iso_8601_utc(dt) if dt is not None else None


class EmployeeNameOut(BaseModel):
    id: int
    name: str


class BonusOut(BaseModel):
    id: int
    salary: Decimal
    bonus_rate: Decimal
    bonus: Decimal
