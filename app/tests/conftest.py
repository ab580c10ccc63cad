"""
Pytest configuration and fixtures
"""
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from app.main import app
from app.db.base import Base
from app.db.init_db import seed_sample_data
from app.db.session import build_engine
from app.core.deps import get_db

# Import all models to ensure they're registered with Base.metadata
from app.models import Department, Employee, SalaryAudit  # noqa: F401


# Use in-memory SQLite for testing
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"

engine = build_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db():
    """Create a fresh database for each test"""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)

    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.rollback()
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def seeded_db(db):
    """Database loaded with the sample departments (10-40) and employees (1000-1005)"""
    assert seed_sample_data(db)
    return db


@pytest.fixture(scope="function")
def client(db):
    """Test client fixture with database override"""
    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def test_department(db):
    """Create a test department"""
    dept = Department(name="IT", location="Austin")
    db.add(dept)
    db.commit()
    db.refresh(dept)
    return dept


@pytest.fixture
def test_employee(db, test_department):
    """Create an active test employee earning 50000"""
    employee = Employee(
        first_name="Test",
        last_name="Employee",
        email="test.employee@company.com",
        job_title="Analyst",
        salary=Decimal("50000.00"),
        department_id=test_department.id,
        active=True
    )
    db.add(employee)
    db.commit()
    db.refresh(employee)
    return employee
