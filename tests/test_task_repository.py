"""
Tests for TaskRepository against a real SQLite file.
"""
import sqlite3

import pytest

import tasklist.storage.task_repository as task_repository_module
from tasklist.exceptions import StoreError, TaskNotFoundError, ValidationError
from tasklist.models import TaskFilter, TaskUpdate
from tasklist.storage import TaskRepository


@pytest.fixture
def fixed_clock(monkeypatch):
    """Replace the repository clock with a sequence of known timestamps."""
    stamps = iter(f"2026-01-01T00:00:0{i}+00:00" for i in range(10))
    monkeypatch.setattr(task_repository_module, "_now", lambda: next(stamps))


class TestInsert:

    def test_insert_defaults(self, repository):
        task = repository.insert("Buy milk")
        assert isinstance(task.id, int)
        assert task.title == "Buy milk"
        assert task.completed is False
        assert task.created_at is not None
        assert task.updated_at == task.created_at

    def test_insert_assigns_fresh_ids(self, repository):
        first = repository.insert("First")
        second = repository.insert("Second")
        assert second.id != first.id

    def test_insert_completed(self, repository):
        assert repository.insert("Done already", completed=True).completed is True

    @pytest.mark.parametrize("title", ["", "   ", None, 42, ["a"]])
    def test_insert_rejects_invalid_title(self, repository, title):
        with pytest.raises(ValidationError) as exc_info:
            repository.insert(title)
        assert exc_info.value.field == "title"
        assert repository.count() == 0

    def test_insert_rejects_non_bool_completed(self, repository):
        with pytest.raises(ValidationError):
            repository.insert("Buy milk", completed="yes")
        assert repository.count() == 0


class TestGetById:

    def test_get_existing(self, repository):
        created = repository.insert("Buy milk")
        assert repository.get_by_id(created.id) == created

    def test_get_missing(self, repository):
        with pytest.raises(TaskNotFoundError) as exc_info:
            repository.get_by_id(999)
        assert exc_info.value.resource_id == "999"

    @pytest.mark.parametrize("task_id", [2 ** 63, -2 ** 63 - 1, 10 ** 20])
    def test_id_outside_integer_range_is_not_found(self, repository, task_id):
        repository.insert("Keep me")
        with pytest.raises(TaskNotFoundError):
            repository.get_by_id(task_id)
        with pytest.raises(TaskNotFoundError):
            repository.update(task_id, TaskUpdate(completed=True))
        with pytest.raises(TaskNotFoundError):
            repository.delete(task_id)
        assert repository.count() == 1


class TestList:

    def test_list_newest_first(self, repository, fixed_clock):
        older = repository.insert("Older")
        newer = repository.insert("Newer")
        assert [task.id for task in repository.list()] == [newer.id, older.id]

    def test_list_same_timestamp_breaks_ties_by_id(self, repository, monkeypatch):
        monkeypatch.setattr(task_repository_module, "_now", lambda: "2026-01-01T00:00:00+00:00")
        first = repository.insert("First")
        second = repository.insert("Second")
        assert [task.id for task in repository.list()] == [second.id, first.id]

    def test_list_filter_completed(self, repository):
        repository.insert("Open")
        done = repository.insert("Done", completed=True)
        assert [task.id for task in repository.list(TaskFilter(completed=True))] == [done.id]
        assert [task.title for task in repository.list(TaskFilter(completed=False))] == ["Open"]

    def test_list_title_search_is_case_sensitive(self, repository):
        repository.insert("Buy milk")
        repository.insert("MILK shake")
        repository.insert("Bread")
        titles = [task.title for task in repository.list(TaskFilter(q="milk"))]
        assert titles == ["Buy milk"]

    def test_list_filters_combine(self, repository):
        repository.insert("Buy milk")
        repository.insert("Pour milk", completed=True)
        repository.insert("Bake bread", completed=True)
        tasks = repository.list(TaskFilter(completed=True, q="milk"))
        assert [task.title for task in tasks] == ["Pour milk"]

    def test_list_search_uses_like_wildcards(self, repository):
        repository.insert("cat")
        repository.insert("cut")
        repository.insert("dog")
        titles = sorted(task.title for task in repository.list(TaskFilter(q="c_t")))
        assert titles == ["cat", "cut"]

    def test_list_empty_search_is_ignored(self, repository):
        repository.insert("Anything")
        assert len(repository.list(TaskFilter(q=""))) == 1


class TestUpdate:

    def test_update_completed_only(self, repository):
        task = repository.insert("Buy milk")
        updated = repository.update(task.id, TaskUpdate(completed=True))
        assert updated.completed is True
        assert updated.title == "Buy milk"
        assert updated.id == task.id
        assert repository.get_by_id(task.id).completed is True

    def test_update_false_is_applied(self, repository):
        task = repository.insert("Buy milk", completed=True)
        updated = repository.update(task.id, TaskUpdate(completed=False))
        assert updated.completed is False

    def test_update_title_only(self, repository):
        task = repository.insert("Buy milk", completed=True)
        updated = repository.update(task.id, TaskUpdate(title="Buy oat milk"))
        assert updated.title == "Buy oat milk"
        assert updated.completed is True

    def test_empty_update_returns_task_unchanged(self, repository):
        task = repository.insert("Buy milk")
        assert repository.update(task.id, TaskUpdate()) == task

    def test_update_rejects_blank_title(self, repository):
        task = repository.insert("Buy milk")
        with pytest.raises(ValidationError):
            repository.update(task.id, TaskUpdate(title="  "))
        assert repository.get_by_id(task.id).title == "Buy milk"

    def test_update_missing_task(self, repository):
        with pytest.raises(TaskNotFoundError):
            repository.update(404, TaskUpdate(completed=True))
        assert repository.count() == 0

    def test_update_refreshes_updated_at(self, repository, fixed_clock):
        task = repository.insert("Buy milk")
        updated = repository.update(task.id, TaskUpdate(completed=True))
        assert updated.created_at == task.created_at
        assert updated.updated_at > task.updated_at

    def test_update_can_keep_creation_timestamp(self, db, fixed_clock):
        repository = TaskRepository(db, refresh_updated_at=False)
        task = repository.insert("Buy milk")
        updated = repository.update(task.id, TaskUpdate(completed=True))
        assert updated.updated_at == task.updated_at


class TestDelete:

    def test_delete(self, repository):
        task = repository.insert("Buy milk")
        repository.delete(task.id)
        with pytest.raises(TaskNotFoundError):
            repository.get_by_id(task.id)
        assert repository.list() == []

    def test_delete_missing(self, repository):
        repository.insert("Keep me")
        with pytest.raises(TaskNotFoundError):
            repository.delete(999)
        assert repository.count() == 1


class TestStoreErrors:

    def test_driver_errors_become_store_errors(self, db, repository):
        conn = db._get_connection()
        conn.execute("DROP TABLE tasks")
        conn.commit()
        conn.close()

        with pytest.raises(StoreError) as exc_info:
            repository.list()
        assert exc_info.value.operation == "list"
        assert isinstance(exc_info.value.original_error, sqlite3.OperationalError)
        assert "no such table" in exc_info.value.details

    def test_closed_handle(self, db, repository):
        db.close()
        with pytest.raises(StoreError):
            repository.insert("Too late")
