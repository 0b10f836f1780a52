from collections.abc import Callable, Generator
from unittest.mock import patch

import pytest

from app.config.settings import Settings
from app.processor.processor import FormattingPipeline, build_pipeline
from app.records.models import Record
from app.store.memory_adapter import InMemoryRecordStore

SHEET_ID = "us_sh_contacts"


@pytest.fixture
def test_settings() -> Settings:
    return Settings(store_backend="memory", fetch_retry_delay_seconds=0.0)


@pytest.fixture
def no_sleep() -> Generator[None, None, None]:
    with patch("app.processor.fetcher.time.sleep"):
        yield


@pytest.fixture
def imported_rows() -> list[Record]:
    """Five raw import rows; rows 2 and 4 carry identical contents."""
    return [
        Record(id="r1", values={
            "firstName": {"value": "DANIELLE", "messages": []},
            "lastName": {"value": "ADAMS", "messages": []},
            "email": {"value": "danielle@example.com"},
            "phone": {"value": "5551234567"},
        }),
        Record(id="r2", values={
            "firstName": {"value": "o'brien"},
            "lastName": {"value": "smith"},
            "email": {"value": "obrien@example.com"},
            "phone": {"value": "15559876543"},
        }),
        Record(id="r3", values={
            "firstName": {"value": "Amelia"},
            "lastName": {"value": "Pond"},
            "email": {"value": "amelia@example.co.uk"},
            "phone": {"value": "+44 20 7946 0958"},
        }),
        Record(id="r4", values={
            "email": {"value": "obrien@example.com"},
            "phone": {"value": "15559876543"},
            "lastName": {"value": "smith"},
            "firstName": {"value": "o'brien"},
        }),
        Record(id="r5", values={
            "firstName": {"value": "rory"},
            "lastName": {"value": "WILLIAMS"},
            "email": {"value": "rory@example.com"},
            "phone": {"value": "N/A"},
        }),
    ]


@pytest.fixture
def memory_store(imported_rows: list[Record]) -> InMemoryRecordStore:
    return InMemoryRecordStore({SHEET_ID: imported_rows})


@pytest.fixture
def pipeline_for(
    test_settings: Settings,
) -> Callable[[InMemoryRecordStore], FormattingPipeline]:
    def _build(store: InMemoryRecordStore) -> FormattingPipeline:
        return build_pipeline(test_settings, store)

    return _build
