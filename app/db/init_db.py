"""
Database initialization
Helper to seed the sample departments and employees
"""
import logging
from decimal import Decimal
from sqlalchemy import text
from sqlalchemy.orm import Session
from app.db.session import begin_write
from app.models.department import Department
from app.models.employee import Employee

logger = logging.getLogger(__name__)

SAMPLE_DEPARTMENTS = [
    {"id": 10, "name": "Sales", "location": "New York"},
    {"id": 20, "name": "Engineering", "location": "San Francisco"},
    {"id": 30, "name": "Marketing", "location": "Chicago"},
    {"id": 40, "name": "Human Resources", "location": "Boston"},
]

# Managers are listed before their reports
SAMPLE_EMPLOYEES = [
    {"id": 1000, "first_name": "John", "last_name": "Smith", "email": "john.smith@company.com",
     "phone": "555-0100", "job_title": "Sales Manager", "salary": Decimal("75000.00"),
     "department_id": 10, "manager_id": None},
    {"id": 1001, "first_name": "Sarah", "last_name": "Davis", "email": "sarah.davis@company.com",
     "phone": "555-0101", "job_title": "Engineering Manager", "salary": Decimal("120000.00"),
     "department_id": 20, "manager_id": None},
    {"id": 1002, "first_name": "Michael", "last_name": "Brown", "email": "michael.brown@company.com",
     "phone": "555-0102", "job_title": "Software Engineer", "salary": Decimal("95000.00"),
     "department_id": 20, "manager_id": 1001},
    {"id": 1003, "first_name": "Emily", "last_name": "Wilson", "email": "emily.wilson@company.com",
     "phone": None, "job_title": "Sales Representative", "salary": Decimal("55000.00"),
     "department_id": 10, "manager_id": 1000},
    {"id": 1004, "first_name": "David", "last_name": "Lee", "email": "david.lee@company.com",
     "phone": "555-0104", "job_title": "Marketing Specialist", "salary": Decimal("62000.00"),
     "department_id": 30, "manager_id": None},
    {"id": 1005, "first_name": "Lisa", "last_name": "Garcia", "email": "lisa.garcia@company.com",
     "phone": "555-0105", "job_title": "HR Coordinator", "salary": Decimal("58000.00"),
     "department_id": 40, "manager_id": None},
]


def seed_sample_data(db: Session) -> bool:
    """
    Load the sample departments and employees into an empty store

    Rows are inserted with explicit ids, so employees created afterwards
    continue from 1006. Nothing is written when any department or employee
    already exists.

    Returns:
        True if the sample data was loaded, False if the store was not empty
    """
    begin_write(db)
    if db.query(Department.id).first() or db.query(Employee.id).first():
        db.rollback()
        logger.info("Store already contains data, skipping sample data")
        return False

    for dept in SAMPLE_DEPARTMENTS:
        db.add(Department(**dept))
    db.flush()

    for emp in SAMPLE_EMPLOYEES:
        db.add(Employee(**emp, active=True))
        # Flush one by one so a manager row exists before its reports
        db.flush()

    if db.get_bind().dialect.name == "postgresql":
        # Explicit ids do not advance serial sequences
        for table in ("departments", "employees"):
            db.execute(text(
                f"SELECT setval(pg_get_serial_sequence('{table}', 'id'), (SELECT MAX(id) FROM {table}))"
            ))

    db.commit()
    logger.info(
        "Loaded %d sample departments and %d sample employees",
        len(SAMPLE_DEPARTMENTS),
        len(SAMPLE_EMPLOYEES)
    )
    return True
