"""Tests for the key-value storage backends."""

import pytest

from waitlyst.errors import StorageError
from waitlyst.settings import Settings
from waitlyst.storage import InMemoryBackend, JsonFileBackend, SqlBackend, WaitlistStore, create_backend
from waitlyst.referral import ReferralLedger


@pytest.fixture(params=["memory", "file", "sql"])
def any_backend(request, tmp_path):
    if request.param == "memory":
        yield InMemoryBackend()
    elif request.param == "file":
        yield JsonFileBackend(tmp_path / "data" / "slots.json")
    else:
        backend = SqlBackend(f"sqlite:///{tmp_path / 'slots.db'}")
        yield backend
        backend.dispose()


def test_get_set_delete(any_backend):
    assert any_backend.get("k") is None

    any_backend.set("k", "v1")
    any_backend.set("k", "v2")
    any_backend.set("other", "x")
    assert any_backend.get("k") == "v2"

    any_backend.delete("k")
    assert any_backend.get("k") is None
    assert any_backend.get("other") == "x"

    any_backend.delete("missing")


def test_ledger_runs_on_every_backend(any_backend):
    ledger = ReferralLedger(WaitlistStore(any_backend))

    a = ledger.signup("a@x.com")
    ledger.signup("b@x.com", a.referral_code)

    store = WaitlistStore(any_backend)
    assert store.total_signups() == 2
    assert store.find_by_referral_code(a.referral_code).referral_count == 1
    assert store.get_current_user().email == "b@x.com"


def test_file_backend_survives_reopen(tmp_path):
    path = tmp_path / "slots.json"
    JsonFileBackend(path).set("k", "value")

    assert JsonFileBackend(path).get("k") == "value"
    assert not list(tmp_path.glob("*.tmp"))


def test_file_backend_treats_garbage_as_empty(tmp_path):
    path = tmp_path / "slots.json"
    path.write_text("not json at all", encoding="utf-8")

    backend = JsonFileBackend(path)
    assert backend.get("k") is None

    backend.set("k", "v")
    assert backend.get("k") == "v"


def test_file_backend_unwritable_location_raises(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")

    backend = JsonFileBackend(blocker / "slots.json")

    with pytest.raises(StorageError):
        backend.set("k", "v")


def test_sql_backend_persists_across_instances(tmp_path):
    url = f"sqlite:///{tmp_path / 'slots.db'}"
    first = SqlBackend(url)
    first.set("k", "v")
    first.dispose()

    second = SqlBackend(url)
    assert second.get("k") == "v"
    second.dispose()


@pytest.mark.parametrize(
    "kind, expected",
    [("memory", InMemoryBackend), ("file", JsonFileBackend), ("sql", SqlBackend)],
)
def test_create_backend(tmp_path, kind, expected):
    config = Settings(
        storage_backend=kind,
        data_dir=tmp_path,
        database_url=f"sqlite:///{tmp_path / 'w.db'}",
    )

    backend = create_backend(config)

    assert isinstance(backend, expected)
    if isinstance(backend, SqlBackend):
        backend.dispose()


def test_file_backend_removes_temp_file_when_write_fails(tmp_path, monkeypatch):
    path = tmp_path / "slots.json"
    backend = JsonFileBackend(path)
    backend.set("k", "old")

    def failing_dump(*args, **kwargs):
        raise OSError("disk full")

    monkeypatch.setattr("waitlyst.storage.backends.json.dump", failing_dump)

    with pytest.raises(StorageError):
        backend.set("k", "new")

    monkeypatch.undo()
    assert list(tmp_path.iterdir()) == [path]
    assert backend.get("k") == "old"
