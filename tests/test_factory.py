import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from jira_records.core import factory as factory_mod
from jira_records.core.errors import InvalidArgument, UnknownRecordType
from jira_records.core.factory import RecordFactory, create_from_data, create_record_from_data
from jira_records.core.models import Comment, Issue

RAW = {
    "key": "EX-1",
    "id": "10000",
    "fields": {"summary": "Test", "project": {"key": "EX"}, "status": {"name": "Open"}},
}


def _stub_factory(strategy=None):
    factory = RecordFactory.default()
    factory.register("issue", Issue, strategy or (lambda key: RAW))
    return factory


def test_create_from_id_is_two_phase():
    factory = _stub_factory()
    record = factory.create_from_id("issue", "EX-1")
    assert isinstance(record, Issue)
    assert record.raw_data == RAW
    assert not record.is_mapped
    assert record.summary is None

    mapped = factory.map_record(record)
    assert mapped.id == "EX-1"
    assert mapped.issue_id == "10000"
    assert mapped.summary == "Test"
    assert mapped.project_key == "EX"
    assert mapped.status == "Open"
    assert mapped.components == ""


def test_create_from_id_callback_receives_loaded_record():
    seen = []
    record = _stub_factory().create_from_id("issue", "EX-1", callback=seen.append)
    assert seen == [record]
    assert seen[0].raw_data == RAW


def test_create_from_id_async_strategy():
    done = threading.Event()
    seen = []

    def on_done(record):
        seen.append(record)
        done.set()

    with ThreadPoolExecutor(max_workers=1) as pool:
        factory = _stub_factory(lambda key: pool.submit(lambda: {**RAW, "key": key}))
        record = factory.create_from_id(":issue", "EX-1", callback=on_done)
        assert record.raw_data is None
        assert done.wait(timeout=5)
    assert len(seen) == 1
    assert factory.map_record(seen[0]).summary == "Test"


def test_create_from_id_without_strategy_stays_unmapped():
    record = RecordFactory.default().create_from_id("comment", "20001")
    assert isinstance(record, Comment)
    assert record.raw_data is None
    assert RecordFactory.map_record(record) is record


def test_create_from_id_rejects_empty_id():
    with pytest.raises(InvalidArgument):
        _stub_factory().create_from_id("issue", "")


def test_create_from_data_maps_immediately():
    issue = create_from_data("issue", RAW)
    assert issue.is_mapped
    assert issue.id == "EX-1"
    assert issue.issue_id == "10000"
    assert create_from_data("issue", RAW) == issue


def test_create_from_data_without_key_fails():
    with pytest.raises(InvalidArgument):
        create_from_data("issue", {})


def test_unknown_tag():
    with pytest.raises(UnknownRecordType) as excinfo:
        create_from_data("widget", {})
    assert "issue" in str(excinfo.value)
    assert isinstance(excinfo.value, LookupError)
    with pytest.raises(UnknownRecordType):
        create_record_from_data("widget")


def test_tag_resolution_is_normalized():
    factory = RecordFactory.default()
    assert factory.resolve(":issue").record_cls is Issue
    assert factory.resolve("Comment").record_cls is Comment
    assert factory.tags == ["comment", "issue"]


def test_batch_closure():
    build = create_record_from_data("issue")
    records = [build({**RAW, "key": f"EX-{i}"}) for i in range(3)]
    assert [r.id for r in records] == ["EX-0", "EX-1", "EX-2"]
    comments = RecordFactory.default().create_many_from_data("comment", [{"id": "1"}, {"id": "2"}])
    assert [c.id for c in comments] == ["1", "2"]


def test_configure_binds_client(monkeypatch):
    class FakeAPI:
        def issue_strategy(self):
            return lambda key: {**RAW, "key": key}

    monkeypatch.setattr(factory_mod, "_DEFAULT_FACTORY", factory_mod.get_factory())
    factory_mod.configure(FakeAPI())
    record = factory_mod.create_from_id("issue", "EX-5")
    assert factory_mod.map_record(record).id == "EX-5"


def test_create_from_id_async_without_callback_waits_for_data():
    with ThreadPoolExecutor(max_workers=1) as pool:
        factory = _stub_factory(lambda key: pool.submit(lambda: {**RAW, "key": key}))
        record = factory.create_from_id("issue", "EX-1")
    assert record.raw_data["key"] == "EX-1"
    assert factory.map_record(record).summary == "Test"


def _failing_fetch(key):
    raise RuntimeError(f"Failed to fetch issue {key}")


def test_create_from_id_async_failure_without_callback_raises():
    with ThreadPoolExecutor(max_workers=1) as pool:
        factory = _stub_factory(lambda key: pool.submit(_failing_fetch, key))
        with pytest.raises(RuntimeError, match="EX-1"):
            factory.create_from_id("issue", "EX-1")


def test_create_from_id_async_failure_calls_back_once():
    done = threading.Event()
    seen = []

    def on_done(record):
        seen.append(record)
        done.set()

    with ThreadPoolExecutor(max_workers=1) as pool:
        factory = _stub_factory(lambda key: pool.submit(_failing_fetch, key))
        factory.create_from_id("issue", "EX-1", callback=on_done)
        assert done.wait(timeout=5)
    assert len(seen) == 1
    assert seen[0].id == "EX-1"
    assert seen[0].raw_data is None
    assert factory.map_record(seen[0]) is seen[0]


def test_create_from_id_sync_failure_propagates():
    factory = _stub_factory(_failing_fetch)
    with pytest.raises(RuntimeError, match="EX-1"):
        factory.create_from_id("issue", "EX-1")
