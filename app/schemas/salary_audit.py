"""
Salary audit schemas
"""
from datetime import datetime
from decimal import Decimal
from pydantic import BaseModel, field_serializer, ConfigDict


class SalaryAuditOut(BaseModel):
    """One salary transition. Datetimes in UTC (Z)."""
    id: int
    employee_id: int
    old_salary: Decimal
    new_salary: Decimal
    changed_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @field_serializer("changed_at", when_used="always")
    @classmethod
    def _ser_datetime(cls, dt):
        from app.utils.datetime_utils import iso_8601_utc
        return iso_8601_utc(dt) if dt is not None else None
