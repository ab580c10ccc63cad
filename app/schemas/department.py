"""
Department schemas
"""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, field_serializer, ConfigDict


class DepartmentCreate(BaseModel):
    """Schema for creating a department"""
    id: Optional[int] = Field(None, description="Explicit department ID (assigned when omitted)")
    name: str = Field(..., description="Department name")
    location: Optional[str] = Field(None, description="Department location")


class DepartmentOut(BaseModel):
    """Schema for department output. Datetimes in UTC (Z)."""
    id: int
    name: str
    location: Optional[str] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @field_serializer("created_at", when_used="always")
    @classmethod
    def _ser_datetime(cls, dt):
        from app.utils.datetime_utils import iso_8601_utc
        return iso_8601_utc(dt) if dt is not None else None
