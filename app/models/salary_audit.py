"""
Salary audit model

One row per salary transition. Rows are append-only: the mapper refuses to
update or delete an entry once it has been persisted.
"""
from sqlalchemy import Column, Integer, DateTime, Numeric, ForeignKey, event
from sqlalchemy.orm import relationship
from app.core.errors import ValidationError
from app.db.base import Base
from app.utils.datetime_utils import now_utc


class SalaryAudit(Base):
    __tablename__ = "salary_audit"

    id = Column(Integer, primary_key=True, index=True)
    employee_id = Column(Integer, ForeignKey("employees.id"), nullable=False, index=True)
    old_salary = Column(Numeric(12, 2), nullable=False)
    new_salary = Column(Numeric(12, 2), nullable=False)
    changed_at = Column(DateTime(timezone=True), default=now_utc, nullable=False, index=True)

    employee = relationship("Employee", back_populates="salary_changes")


@event.listens_for(SalaryAudit, "before_update")
def _reject_update(mapper, connection, target):
    raise ValidationError(f"Salary audit entry {target.id} is append-only and cannot be modified")


@event.listens_for(SalaryAudit, "before_delete")
def _reject_delete(mapper, connection, target):
    raise ValidationError(f"Salary audit entry {target.id} is append-only and cannot be deleted")
