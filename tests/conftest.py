"""
Pytest configuration and shared fixtures.

The project root is put on sys.path so tests run without an editable install.
"""

import sys
from pathlib import Path

project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

import pytest

from jira_sprint.adapters.outbound.agile_url_resolver import AgileUrlResolver
from jira_sprint.application.services.completion import notify_completion
from jira_sprint.application.services.request_builder import SprintRequestBuilder

BASE_URL = "https://jira.example.com"
AGILE_URL = f"{BASE_URL}/rest/agile/1.0"


class RecordingTransport:
    """Transport double: records descriptors and returns (or raises) a canned outcome."""

    def __init__(self, result=None, error=None):
        self.result = result
        self.error = error
        self.calls = []

    async def execute(self, descriptor, callback=None):
        self.calls.append(descriptor)
        if self.error is not None:
            await notify_completion(callback, self.error, None)
            raise self.error
        await notify_completion(callback, None, self.result)
        return self.result


@pytest.fixture
def url_resolver():
    return AgileUrlResolver(base_url=BASE_URL)


@pytest.fixture
def builder(url_resolver):
    return SprintRequestBuilder(url_resolver=url_resolver)


@pytest.fixture
def recording_transport():
    return RecordingTransport(result={"id": 42, "name": "Sprint 1"})
