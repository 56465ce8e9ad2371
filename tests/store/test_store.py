"""Contract tests run against both StatusStore backends."""

import uuid

import pytest

from doorsign.core.exceptions import DuplicateKeyError, StorageError
from doorsign.status.models import StatusHistory
from doorsign.status_option.exceptions import StatusOptionExistsError
from doorsign.status_option.models import StatusColor, StatusOption
from doorsign.store import InMemoryStatusStore, SqlStatusStore, build_store
from doorsign.sync.models import SyncStatus
from doorsign.user.exceptions import UsernameExistsError
from doorsign.user.models import UserRole


class TestUsers:
    def test_create_and_get(self, store, make_user):
        user = make_user(store, "carol", epaper_id="user3")

        fetched = store.get_user(user.id)

        assert fetched is not None
        assert fetched.username == "carol"
        assert fetched.current_status == "Available"
        assert fetched.role == UserRole.regular
        assert fetched.epaper_id == "user3"

    def test_get_missing_returns_none(self, store):
        assert store.get_user(uuid.uuid4()) is None
        assert store.get_user_by_username("nobody") is None

    def test_get_by_username(self, store, make_user):
        user = make_user(store, "dave")

        assert store.get_user_by_username("dave").id == user.id

    def test_duplicate_username_rejected(self, store, make_user):
        make_user(store, "erin")

        with pytest.raises(UsernameExistsError) as exc_info:
            make_user(store, "erin")

        assert isinstance(exc_info.value, DuplicateKeyError)
        assert exc_info.value.status_code == 400
        assert store.count_users() == 1

    def test_count_and_list(self, store, make_user):
        make_user(store, "a-user")
        make_user(store, "b-user")

        assert store.count_users() == 2
        assert [u.username for u in store.list_users()] == ["a-user", "b-user"]

    def test_update_user_fields(self, store, make_user):
        user = make_user(store, "frank")

        updated = store.update_user(user.id, {"first_name": "Frank", "role": UserRole.admin})

        assert updated.first_name == "Frank"
        assert updated.role == UserRole.admin
        assert store.get_user(user.id).first_name == "Frank"

    def test_update_user_to_taken_username(self, store, make_user):
        make_user(store, "gina")
        other = make_user(store, "hank")

        with pytest.raises(UsernameExistsError):
            store.update_user(other.id, {"username": "gina"})

        assert store.get_user(other.id).username == "hank"

    def test_update_missing_user_returns_none(self, store):
        assert store.update_user(uuid.uuid4(), {"first_name": "x"}) is None

    def test_update_status(self, store, make_user):
        user = make_user(store, "ivan")

        updated = store.update_status(user.id, "Out", "Back tomorrow")

        assert updated.current_status == "Out"
        assert updated.custom_status_text == "Back tomorrow"
        fetched = store.get_user(user.id)
        assert fetched.current_status == "Out"
        assert fetched.custom_status_text == "Back tomorrow"

    def test_update_status_clears_custom_text(self, store, make_user):
        user = make_user(store, "judy")
        store.update_status(user.id, "Out", "Lunch")

        updated = store.update_status(user.id, "Available", None)

        assert updated.custom_status_text is None

    def test_update_status_missing_user(self, store):
        assert store.update_status(uuid.uuid4(), "Out", None) is None

    def test_returned_rows_are_detached(self, store, make_user):
        user = make_user(store, "kate")

        fetched = store.get_user(user.id)
        fetched.current_status = "Tampered"

        assert store.get_user(user.id).current_status == "Available"

    def test_delete_user(self, store, make_user):
        user = make_user(store, "leo")

        assert store.delete_user(user.id) is True
        assert store.get_user(user.id) is None
        assert store.delete_user(user.id) is False


class TestHistory:
    def _add(self, store, user_id, status):
        return store.create_history(
            StatusHistory(user_id=user_id, status=status, changed_by="tester")
        )

    def test_newest_first(self, store, make_user):
        user = make_user(store, "mia")
        for status in ("Out", "In Meeting", "Available"):
            self._add(store, user.id, status)

        rows = store.list_history(user.id)

        assert [r.status for r in rows] == ["Available", "In Meeting", "Out"]
        assert all(r.id is not None for r in rows)

    def test_limit(self, store, make_user):
        user = make_user(store, "ned")
        for status in ("a", "b", "c"):
            self._add(store, user.id, status)

        assert [r.status for r in store.list_history(user.id, limit=2)] == ["c", "b"]

    def test_scoped_to_user(self, store, make_user):
        first = make_user(store, "olga")
        second = make_user(store, "pete")
        self._add(store, first.id, "Out")

        assert store.list_history(second.id) == []

    def test_deleting_user_removes_history(self, store, make_user):
        user = make_user(store, "quin")
        other = make_user(store, "rita")
        self._add(store, user.id, "Out")
        self._add(store, other.id, "Out")

        store.delete_user(user.id)

        assert store.list_history(user.id) == []
        assert len(store.list_history(other.id)) == 1

    def test_missing_owner_is_a_storage_error(self, store):
        with pytest.raises(StorageError) as exc_info:
            self._add(store, uuid.uuid4(), "Out")

        assert not isinstance(exc_info.value, DuplicateKeyError)
        assert exc_info.value.status_code == 500

    def test_owner_deleted_before_history_write(self, store, make_user):
        user = make_user(store, "sven")
        store.update_status(user.id, "Out", None)
        store.delete_user(user.id)

        with pytest.raises(StorageError):
            self._add(store, user.id, "Out")


class TestStatusOptions:
    def _add(self, store, name, sort_order="0", color=StatusColor.blue):
        return store.create_status_option(
            StatusOption(name=name, color=color, sort_order=sort_order)
        )

    def test_numeric_ordering_with_unparsable_last(self, store):
        for name, order in (("two", "2"), ("abc", "abc"), ("zero", "0"), ("one", "1")):
            self._add(store, name, order)

        assert [o.sort_order for o in store.list_status_options()] == [
            "0",
            "1",
            "2",
            "abc",
        ]

    def test_numeric_not_lexicographic(self, store):
        self._add(store, "ten", "10")
        self._add(store, "nine", "9")

        assert [o.name for o in store.list_status_options()] == ["nine", "ten"]

    def test_ties_keep_insertion_order(self, store):
        for name in ("first", "second", "third"):
            self._add(store, name, "1")

        assert [o.name for o in store.list_status_options()] == [
            "first",
            "second",
            "third",
        ]

    def test_duplicate_name_rejected(self, store):
        self._add(store, "Out")

        with pytest.raises(StatusOptionExistsError):
            self._add(store, "Out")

    def test_update_and_delete(self, store):
        option = self._add(store, "Lunch", "5", StatusColor.orange)

        updated = store.update_status_option(option.id, {"color": StatusColor.gray})

        assert updated.color == StatusColor.gray
        assert store.get_status_option(option.id).color == StatusColor.gray
        assert store.delete_status_option(option.id) is True
        assert store.get_status_option(option.id) is None
        assert store.delete_status_option(option.id) is False

    def test_update_missing_returns_none(self, store):
        assert store.update_status_option(999, {"name": "x"}) is None


class TestSyncLedger:
    def test_latest_is_none_when_empty(self, store):
        assert store.get_latest_sync() is None

    def test_latest_returns_newest(self, store):
        store.record_sync(SyncStatus(success=False, error_message="boom"))
        store.record_sync(SyncStatus(success=True, updated_count=3))

        latest = store.get_latest_sync()

        assert latest.success is True
        assert latest.updated_count == 3


def test_ping_succeeds(store):
    store.ping()


def test_build_store_memory(test_settings):
    assert isinstance(build_store(test_settings), InMemoryStatusStore)


def test_build_store_database(test_settings, monkeypatch):
    from doorsign.core.settings import StorageBackend

    settings = test_settings.model_copy(update={"storage_backend": StorageBackend.database})
    monkeypatch.setattr("doorsign.db.engine.get_engine", lambda: "engine")

    store = build_store(settings)

    assert isinstance(store, SqlStatusStore)
    assert store.engine == "engine"
