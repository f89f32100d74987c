"""
Pytest configuration and shared fixtures.

Every test gets its own SQLite database file with foreign keys enabled.
"""

import uuid

import pytest

from app import create_app
from config.constants import BOQStatus
from config.db import db, shutdown_db
from models import BOQ, Job, JobMaterial, Material, Project
from services.boq_service import BOQService
from utils.authentication import create_access_token


@pytest.fixture
def app(tmp_path):
    """Application bound to a temporary SQLite database."""
    app = create_app({
        "TESTING": True,
        "SQLALCHEMY_DATABASE_URI": f"sqlite:///{tmp_path / 'boq_test.db'}",
        "AUTO_CREATE_TABLES": True,
        "JWT_SECRET": "test-secret",
        "JWT_EXPIRATION_MINUTES": 15,
        "REQUEST_TIMEOUT_SECONDS": 30,
    })
    yield app
    shutdown_db(app)


@pytest.fixture
def session(app):
    """The app's scoped session inside an application context."""
    with app.app_context():
        yield db.session


@pytest.fixture
def service(session) -> BOQService:
    return BOQService(session)


@pytest.fixture
def client(app, session):
    return app.test_client()


@pytest.fixture
def auth_headers(session):
    token = create_access_token(uuid.uuid4(), role="estimator")
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def make_project(session):
    """Create a project and return its id."""
    def _make(name="Riverside Villa"):
        project = Project(project_name=name)
        session.add(project)
        session.commit()
        return project.project_id
    return _make


@pytest.fixture
def make_material(session):
    """Create a material and return its id."""
    def _make(name, unit="kg"):
        material = Material(name=name, unit=unit)
        session.add(material)
        session.commit()
        return material.material_id
    return _make


@pytest.fixture
def make_job(session):
    """Create a job with an optional material composition and return its id."""
    def _make(name="Concrete Slab", unit="m3", description=None, materials=()):
        job = Job(name=name, unit=unit, description=description)
        session.add(job)
        session.flush()
        for material_id, quantity in materials:
            session.add(JobMaterial(job_id=job.job_id, material_id=material_id, quantity=quantity))
        session.commit()
        return job.job_id
    return _make


@pytest.fixture
def make_boq(session, make_project):
    """Insert a BOQ row directly (any status) and return its id."""
    def _make(status=BOQStatus.DRAFT.value, project_id=None, selling_general_cost=None):
        boq = BOQ(
            project_id=project_id or make_project(),
            status=status,
            selling_general_cost=selling_general_cost,
        )
        session.add(boq)
        session.commit()
        return boq.boq_id
    return _make
