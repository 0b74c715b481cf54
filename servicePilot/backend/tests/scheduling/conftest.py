import pytest
from datetime import date, time, datetime, timedelta
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.db.models import Base
from app.services.scheduling.types import (
    WorkSchedule,
    OrderItem,
    ScheduleResolution,
)


def get_test_monday() -> date:
    # returns a fixed Monday for deterministic tests
    return date(2025, 1, 20)


def at(day_offset: int, hour: int, minute: int = 0) -> datetime:
    # datetime relative to the test Monday
    return datetime.combine(get_test_monday() + timedelta(days=day_offset), time(hour, minute))


def weekday_schedule(break_minutes: int = 0) -> WorkSchedule:
    # Mon-Fri 08:00-16:00
    return WorkSchedule(
        work_days=frozenset({1, 2, 3, 4, 5}),
        start_time=time(8, 0),
        end_time=time(16, 0),
        break_duration_minutes=break_minutes,
    )


@pytest.fixture
def schedule() -> WorkSchedule:
    return weekday_schedule()


@pytest.fixture
def schedule_with_break() -> WorkSchedule:
    return weekday_schedule(break_minutes=60)


@pytest.fixture
def schedule_source():
    # every technician works the standard week
    return lambda technician_id: ScheduleResolution(schedule=weekday_schedule())


@pytest.fixture
def exclusive_item() -> OrderItem:
    return OrderItem(id=1, estimated_hours=4, shared_time=False)


@pytest.fixture
def db():
    """In-memory SQLite session with all tables created."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    session = sessionmaker(bind=engine, autocommit=False, autoflush=False)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()
