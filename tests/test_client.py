"""
Tests for TaskClient and the TaskListView controller.

The client talks to the real application through TestClient; transport
failures are simulated with a mocked HTTP adapter.
"""
from unittest.mock import MagicMock

import httpx
import pytest

import tasklist.adapters as adapters
from tasklist.adapters import HTTPClientAdapterFactory, HTTPResponse, HttpxClientAdapter
from tasklist.client import ClientError, TaskClient
from tasklist.view import NO_TASKS, TaskListView


class FakeClock:
    def __init__(self):
        self.now = 100.0

    def __call__(self):
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def view(api, clock):
    return TaskListView(api, clock=clock)


@pytest.fixture
def offline_client():
    """TaskClient whose every request fails to connect."""
    adapter = MagicMock()
    for method in ("get", "post", "patch", "delete"):
        getattr(adapter, method).side_effect = httpx.ConnectError("Connection refused")
    return TaskClient(base_url="http://unreachable/api/tasks", http_client=adapter)


def messages(view):
    return [(alert.message, alert.level) for alert in view.alerts]


class TestTaskClient:

    def test_create_and_get(self, api):
        created = api.create_task("Buy milk")
        assert created.title == "Buy milk"
        assert created.completed is False
        assert api.get_task(created.id) == created

    def test_list_with_filters(self, api):
        api.create_task("Buy milk")
        api.create_task("Pour milk", completed=True)
        api.create_task("Bake bread", completed=True)
        assert [task.title for task in api.list_tasks(completed=True, q="milk")] == ["Pour milk"]
        assert [task.title for task in api.list_tasks(completed=False)] == ["Buy milk"]
        assert len(api.list_tasks()) == 3

    def test_partial_update(self, api):
        task = api.create_task("Buy milk")
        updated = api.update_task(task.id, completed=True)
        assert updated.completed is True
        assert updated.title == "Buy milk"

    def test_delete(self, api):
        task = api.create_task("Buy milk")
        assert api.delete_task(task.id) == "Task deleted successfully"
        assert api.list_tasks() == []

    def test_missing_task_raises_client_error(self, api):
        with pytest.raises(ClientError) as exc_info:
            api.get_task(12345)
        assert exc_info.value.status_code == 404
        assert "not found" in exc_info.value.message

    def test_rejected_payload_raises_client_error(self, api):
        with pytest.raises(ClientError) as exc_info:
            api.create_task("   ")
        assert exc_info.value.status_code == 400

    def test_transport_error_raises_client_error(self, offline_client):
        with pytest.raises(ClientError) as exc_info:
            offline_client.list_tasks()
        assert exc_info.value.status_code is None
        assert "Connection refused" in str(exc_info.value)


class TestAlerts:

    def test_alerts_dismiss_after_three_seconds(self, view, clock):
        view.show_alert("Hello", "success")
        clock.now += 2.9
        assert messages(view) == [("Hello", "success")]
        clock.now += 0.2
        assert view.alerts == []

    def test_has_errors(self, view):
        view.show_alert("Fine", "success")
        assert not view.has_errors()
        view.show_alert("Broken", "error")
        assert view.has_errors()


class TestAddTask:

    @pytest.mark.parametrize("title", ["", None])
    def test_empty_title(self, view, api, title):
        assert view.add_task(title) is False
        assert messages(view) == [("Please enter a valid task", "error")]
        assert api.list_tasks() == []

    @pytest.mark.parametrize("title", ["ab", "  ab  "])
    def test_short_title(self, view, api, title):
        assert view.add_task(title) is False
        assert messages(view) == [("Task must be at least 3 characters", "error")]
        assert api.list_tasks() == []

    def test_add_reloads_list(self, view):
        assert view.add_task("  Buy milk  ") is True
        assert messages(view) == [("Task added successfully", "success")]
        assert [task.title for task in view.tasks] == ["Buy milk"]
        assert view.tasks[0].completed is False

    def test_add_failure(self, offline_client, clock):
        view = TaskListView(offline_client, clock=clock)
        assert view.add_task("Buy milk") is False
        assert messages(view) == [("Error adding task", "error")]
        assert view.loading is False


class TestFilters:

    def test_filter_selection(self, view, api):
        api.create_task("Open one")
        api.create_task("Done one", completed=True)

        view.set_filter("active")
        assert [task.title for task in view.tasks] == ["Open one"]
        view.set_filter("completed")
        assert [task.title for task in view.tasks] == ["Done one"]
        view.set_filter("all")
        assert len(view.tasks) == 2

    def test_unknown_filter(self, view):
        with pytest.raises(ValueError):
            view.set_filter("archived")

    def test_mutation_keeps_filter(self, view, api):
        task = api.create_task("Buy milk")
        view.set_filter("active")
        assert view.toggle_task(task.id, True) is True
        assert view.tasks == []
        assert view.current_filter == "active"

    def test_load_failure(self, offline_client, clock):
        view = TaskListView(offline_client, clock=clock)
        assert view.load_tasks() is False
        assert messages(view) == [("Error loading tasks", "error")]


class TestEditAndDelete:

    def test_toggle(self, view, api):
        task = api.create_task("Buy milk")
        assert view.toggle_task(task.id, True) is True
        assert view.find(task.id).completed is True
        assert view.alerts == []

    def test_toggle_missing_task(self, view):
        assert view.toggle_task(999, True) is False
        assert messages(view) == [("Error updating task", "error")]

    def test_edit(self, view, api):
        task = api.create_task("Buy milk")
        assert view.edit_task(task.id, "Buy oat milk") is True
        assert messages(view) == [("Task updated successfully", "success")]
        assert view.find(task.id).title == "Buy oat milk"

    @pytest.mark.parametrize("new_title", [None, "", "   "])
    def test_edit_cancelled(self, view, api, new_title):
        task = api.create_task("Buy milk")
        assert view.edit_task(task.id, new_title) is False
        assert view.alerts == []
        assert api.get_task(task.id).title == "Buy milk"

    def test_edit_short_title(self, view, api):
        task = api.create_task("Buy milk")
        assert view.edit_task(task.id, "ab") is False
        assert messages(view) == [("Task must be at least 3 characters", "error")]

    def test_edit_missing_task(self, view):
        assert view.edit_task(999, "Anything") is False
        assert messages(view) == [("Error editing task", "error")]

    def test_delete_requires_confirmation(self, view, api):
        task = api.create_task("Buy milk")
        assert view.delete_task(task.id, confirmed=False) is False
        assert len(api.list_tasks()) == 1

    def test_delete(self, view, api):
        task = api.create_task("Buy milk")
        assert view.delete_task(task.id, confirmed=True) is True
        assert messages(view) == [("Task deleted successfully", "success")]
        assert view.tasks == []

    def test_delete_missing_task(self, view):
        assert view.delete_task(999, confirmed=True) is False
        assert messages(view) == [("Error deleting task", "error")]


class TestRender:

    def test_empty(self, view):
        view.load_tasks()
        assert view.render() == [NO_TASKS]

    def test_marks_completed(self, view, api):
        done = api.create_task("Done task", completed=True)
        view.load_tasks()
        assert view.render() == [f"[x] {done.id:>4}  Done task"]


class TestHttpAdapter:

    def test_public_names(self):
        assert set(adapters.__all__) == {
            "HTTPClientAdapter",
            "HTTPClientAdapterFactory",
            "HttpxClientAdapter",
            "HTTPResponse",
            "HTTPError",
        }

    def test_wrapped_client_is_left_open(self):
        wrapped = MagicMock(spec=httpx.Client)
        HttpxClientAdapter(client=wrapped).close()
        wrapped.close.assert_not_called()

    def test_factory_client_is_closed(self):
        adapter = HTTPClientAdapterFactory.create_client(timeout=5.0)
        adapter.close()
        assert adapter._client.is_closed

    def test_non_json_error_body_uses_text(self):
        adapter = MagicMock()
        adapter.get.return_value = HTTPResponse(httpx.Response(502, text="Bad gateway"))
        client = TaskClient(base_url="http://proxy.test/api/tasks", http_client=adapter)
        with pytest.raises(ClientError) as exc_info:
            client.get_task(1)
        assert exc_info.value.status_code == 502
        assert exc_info.value.message == "Bad gateway"
