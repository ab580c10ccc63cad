"""
Employee model
"""
from sqlalchemy import Column, Integer, String, Boolean, DateTime, Numeric, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship
from app.core.constants import NAME_SEPARATOR
from app.db.base import Base
from app.utils.datetime_utils import now_utc


class Employee(Base):
    __tablename__ = "employees"
    __table_args__ = (
        CheckConstraint("salary >= 0", name="ck_employees_salary_non_negative"),
        CheckConstraint("manager_id IS NULL OR manager_id <> id", name="ck_employees_not_own_manager"),
    )

    id = Column(Integer, primary_key=True, index=True)
    first_name = Column(String, nullable=False)
    last_name = Column(String, nullable=False)
    email = Column(String, unique=True, nullable=False, index=True)  # Stored lower-cased
    phone = Column(String, nullable=True)
    job_title = Column(String, nullable=True)
    salary = Column(Numeric(12, 2), nullable=False)
    department_id = Column(Integer, ForeignKey("departments.id"), nullable=True)
    manager_id = Column(Integer, ForeignKey("employees.id"), nullable=True)
    active = Column(Boolean, default=True, nullable=False)
    # Set explicitly to avoid SQLite issues with server_default
    created_at = Column(DateTime(timezone=True), default=now_utc, nullable=False)

    # Relationships
    department = relationship("Department", backref="employees")
    manager = relationship("Employee", remote_side=[id], backref="direct_reports")
    salary_changes = relationship("SalaryAudit", back_populates="employee", order_by="SalaryAudit.id")

    @property
    def full_name(self) -> str:
        return f"{self.first_name}{NAME_SEPARATOR}{self.last_name}"
