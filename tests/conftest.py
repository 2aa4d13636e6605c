"""Shared fixtures: a fake RUMApi that records its calls."""

from types import SimpleNamespace

import pytest


class FakeRUMApi:
    """Stands in for datadog_api_client's RUMApi."""

    def __init__(self, events=None, applications=None):
        self.events = events
        self.applications = applications
        self.calls = []

    def list_rum_events(self, **kwargs):
        self.calls.append(("list_rum_events", kwargs))
        return SimpleNamespace(data=self.events)

    def get_rum_applications(self):
        self.calls.append(("get_rum_applications", {}))
        return SimpleNamespace(data=self.applications)

    @property
    def last_kwargs(self):
        return self.calls[-1][1]


def make_event(**attributes):
    """Build an event dict shaped like the API's to_dict() output."""
    return {"id": "evt", "type": "rum", "attributes": {"attributes": attributes}}


@pytest.fixture
def fake_api():
    return FakeRUMApi(events=[], applications=[])
