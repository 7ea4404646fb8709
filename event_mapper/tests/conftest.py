import copy

import pytest

from event_mapper.core.binding import BindingRegistry
from event_mapper.core.engine import EventMapper
from event_mapper.tests.events import EVENT_RAW_DATA, create_event_v2


@pytest.fixture
def event_raw_data():
    return copy.deepcopy(EVENT_RAW_DATA)


@pytest.fixture
def jwt_event(event_raw_data):
    return create_event_v2(
        body=event_raw_data["body"],
        query=event_raw_data["query"],
        params=event_raw_data["params"],
        claims=event_raw_data["claims"],
    )


@pytest.fixture
def non_jwt_event(event_raw_data):
    return create_event_v2(
        body=event_raw_data["body"],
        query=event_raw_data["query"],
        params=event_raw_data["params"],
    )


@pytest.fixture
def registry():
    return BindingRegistry()


@pytest.fixture
def mapper(registry):
    return EventMapper(registry=registry)
