from concurrent.futures import ThreadPoolExecutor

import pytest

from jira_records.core.config import AppSettings
from jira_records.core.factory import RecordFactory
from jira_records.core.jira_client import JiraAPI


class FakeIssue:
    def __init__(self, raw):
        self.raw = raw


class FakeJira:
    def __init__(self):
        self.calls = []

    def issue(self, key, fields=None, expand=None):
        self.calls.append((key, fields, expand))
        return FakeIssue({"key": key, "id": "10000", "fields": {"summary": f"Issue {key}"}})


class DummyAPI(JiraAPI):
    def __init__(self, executor=None):
        self.server = "https://example.atlassian.net"
        self.client = FakeJira()
        self.executor = executor


def test_fetch_issue_raw_requests_fields():
    api = DummyAPI()
    raw = api.fetch_issue_raw("EX-1")
    assert raw["key"] == "EX-1"
    key, fields, expand = api.client.calls[0]
    assert key == "EX-1"
    assert "summary" in fields.split(",")
    assert "customfield_10015" in fields.split(",")
    assert expand == "renderedFields"


def test_issue_strategy_sync():
    api = DummyAPI()
    factory = RecordFactory.for_client(api)
    record = factory.create_from_id("issue", "EX-2")
    assert record.raw_data["key"] == "EX-2"
    assert factory.map_record(record).summary == "Issue EX-2"


def test_issue_strategy_with_executor_returns_future():
    with ThreadPoolExecutor(max_workers=2) as pool:
        api = DummyAPI(executor=pool)
        fut = api.issue_strategy()("EX-3")
        assert fut.result(timeout=5)["key"] == "EX-3"


def test_fetch_issue_async_requires_executor():
    with pytest.raises(RuntimeError):
        DummyAPI().fetch_issue_async("EX-4")


class RecordingJIRA:
    def __init__(self, basic_auth=None, options=None):
        self.basic_auth = basic_auth
        self.options = options


def test_from_settings_uses_configured_server(monkeypatch):
    monkeypatch.setattr("jira_records.core.jira_client.JIRA", RecordingJIRA)
    settings = AppSettings(server="https://jira.example.org/", hydrate_max_workers=3)
    api = JiraAPI.from_settings("me@example.org", "token", settings=settings)
    assert api.server == "https://jira.example.org"
    assert api.client.options == {"server": "https://jira.example.org", "rest_api_version": "3"}
    assert api.client.basic_auth == ("me@example.org", "token")
    assert api.executor is None
    assert api.issue_strategy() == api.fetch_issue_raw


def test_from_settings_concurrent_builds_pool(monkeypatch):
    monkeypatch.setattr("jira_records.core.jira_client.JIRA", RecordingJIRA)
    api = JiraAPI.from_settings(
        "me@example.org", "token", settings=AppSettings(hydrate_max_workers=3), concurrent=True
    )
    try:
        assert isinstance(api.executor, ThreadPoolExecutor)
        assert api.executor._max_workers == 3
        assert api.issue_strategy() == api.fetch_issue_async
    finally:
        api.executor.shutdown(wait=True)
