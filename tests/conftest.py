from datetime import date, datetime, time, timedelta

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool

from app.database import create_db_engine, create_session_factory, init_db
from app.domain.schedules.repository import ScheduleRepository
from app.main import create_app
from app.models import ScheduleStatus

API = "/api/v1"


def today_at(hour: int, minute: int = 0) -> datetime:
    return datetime.combine(date.today(), time(hour, minute))


@pytest.fixture
def engine():
    # One shared in-memory database for the test and the app
    engine = create_db_engine("sqlite://", poolclass=StaticPool)
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return create_session_factory(engine)


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(engine):
    app = create_app(engine=engine, seed=False)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def make_schedule(session_factory):
    """Insert a schedule (plus visit row and tasks) and return its id"""

    def _make(
        status=ScheduleStatus.UPCOMING,
        shift_start=None,
        client_name="John Smith",
        tasks=("Check vital signs", "Prepare light meal"),
    ):
        shift_start = shift_start or today_at(9)
        with session_factory() as session:
            schedule = ScheduleRepository.create_schedule(
                session,
                task_descriptions=list(tasks),
                client_name=client_name,
                shift_start=shift_start,
                shift_end=shift_start + timedelta(hours=2),
                latitude=40.7128,
                longitude=-74.0060,
                status=status,
            )
            return schedule.id

    return _make
