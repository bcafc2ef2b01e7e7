import pytest

from naplan_tutor.bank import get_question_bank
from naplan_tutor.scheduler import ManualClock, Scheduler
from naplan_tutor.storage import Storage


@pytest.fixture
def tmp_db(tmp_path):
    """Provide a temporary SQLite database path for tests."""
    db_path = str(tmp_path / "test_tutor.db")
    return db_path


@pytest.fixture
def storage(tmp_db):
    return Storage(tmp_db)


@pytest.fixture(scope="session")
def bank():
    return get_question_bank()


@pytest.fixture
def clock():
    return ManualClock()


@pytest.fixture
def scheduler(clock):
    return Scheduler(clock)
