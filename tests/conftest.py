# tests/conftest.py
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from core.events.domain_events import DomainEvents
from infra.config import Settings
from infra.db.base import Base
from infra.db.models import ProjectORM
from infra.operational_support import OperationalSupport
from infra.services import build_service_graph


@pytest.fixture
def session_factory():
    # separate in-memory DB for tests; every session of a thread shares its connection
    engine = create_engine("sqlite:///:memory:", future=True)
    Base.metadata.create_all(bind=engine)
    TestingSessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)
    yield TestingSessionLocal
    engine.dispose()


@pytest.fixture
def events():
    return DomainEvents()


@pytest.fixture
def support(tmp_path):
    return OperationalSupport(events_path=tmp_path / "support-events.jsonl")


@pytest.fixture
def services(session_factory, events, support):
    # Same wiring as the application, with recomputation running inline
    settings = Settings(database_url="sqlite:///:memory:", trigger_mode="sync")
    graph = build_service_graph(session_factory, settings, support=support, events=events)
    try:
        yield graph.as_dict()
    finally:
        graph.close()


@pytest.fixture
def stored_total(session_factory):
    """Reads the persisted aggregate through a fresh session."""

    def _read(project_id: str) -> float:
        with session_factory() as session:
            return session.get(ProjectORM, project_id).total_non_cancelled_invoice_amount

    return _read


@pytest.fixture
def project_with_supplier(services):
    project = services["project_service"].create_project("Warehouse", actual_budget=1000.0)
    supplier = services["supplier_service"].create_supplier("Acme LLC", "7701234567")
    return project, supplier
