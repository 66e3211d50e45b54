"""
Shared test fixtures: SQLite test database, test client, seeded catalogue.
"""

import os
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

# Point settings at the test database before importing app modules
os.environ["DATABASE_URL"] = "sqlite:///./test_budgets.db"

from insulation_budget import models
from insulation_budget.database import Base, get_db
from insulation_budget.main import app
from insulation_budget.routers.materials import seed_default_materials


TEST_DATABASE_URL = "sqlite:///./test_budgets.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = override_get_db


@pytest.fixture(autouse=True)
def setup_database():
    """Create all tables before each test, drop after."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client():
    """FastAPI test client."""
    return TestClient(app)


@pytest.fixture
def db():
    """Direct database session for test setup/assertions."""
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def catalogue(db):
    """Default materials and bags plus one customer. Returns the ids tests need."""
    seed_default_materials(db)
    customer = models.Customer(name="Marta Gómez", email="marta@example.com")
    db.add(customer)
    db.commit()

    cellulose = db.query(models.BuildingMaterial).filter(
        models.BuildingMaterial.name == "Celulosa proyectada"
    ).first()
    rock_wool = db.query(models.BuildingMaterial).filter(
        models.BuildingMaterial.name == "Lana de roca"
    ).first()
    return {
        "customer_id": customer.id,
        "cellulose_id": cellulose.id,
        "cellulose_bag_id": cellulose.bags[0].id,
        "rock_wool_id": rock_wool.id,
    }
