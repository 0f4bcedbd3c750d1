"""
Unit tests for request parsing into typed action models.
"""

import pytest
from pydantic import ValidationError

from taskproxy import actions
from taskproxy.actions import ACTION_MODELS, parse_request
from taskproxy.errors import InvalidActionError


def test_registry_covers_all_actions():
    assert set(ACTION_MODELS) == {
        "getTask",
        "getTasks",
        "getTasksByCategoryAndUser",
        "updateTask",
        "updateGuestTasks",
        "createTask",
        "deleteTask",
        "getCategories",
        "createCategory",
        "deleteCategory",
    }


def test_get_task_parsed():
    request = parse_request({"action": "getTask", "data": {"taskId": 42}, "userId": "u1"})

    assert isinstance(request, actions.GetTask)
    assert request.data.task_id == 42
    assert request.user_id == "u1"


def test_string_ids_kept_as_strings():
    request = parse_request({
        "action": "deleteCategory",
        "data": {"categoryId": "5b8f0c1e-2c1a-4d1e-9a57-1f0d2c6b7a11"},
        "userId": "u1",
    })

    assert request.data.category_id == "5b8f0c1e-2c1a-4d1e-9a57-1f0d2c6b7a11"


def test_update_task_parsed():
    request = parse_request({
        "action": "updateTask",
        "data": {"taskId": 1, "updates": {"finished": True}},
        "userId": "u1",
    })

    assert isinstance(request, actions.UpdateTask)
    assert request.data.updates == {"finished": True}


def test_create_task_keeps_arbitrary_fields():
    request = parse_request({
        "action": "createTask",
        "data": {"title": "x", "category_id": 3, "deferral": None},
        "userId": "u1",
    })

    assert request.data == {"title": "x", "category_id": 3, "deferral": None}


def test_guest_reset_does_not_need_user_id():
    request = parse_request({"action": "updateGuestTasks", "data": {"guestUserId": "g1"}})

    assert request.user_id is None
    assert request.data.guest_user_id == "g1"


def test_list_actions_accept_missing_data():
    assert isinstance(parse_request({"action": "getTasks", "userId": "u1"}), actions.GetTasks)
    assert isinstance(parse_request({"action": "getCategories", "userId": "u1"}), actions.GetCategories)


@pytest.mark.parametrize("payload", [
    {"action": "frobnicate", "userId": "u1"},
    {"userId": "u1"},
    {"action": 7, "userId": "u1"},
    {"action": "GETTASKS", "userId": "u1"},
])
def test_unknown_actions_rejected(payload):
    with pytest.raises(InvalidActionError) as exc_info:
        parse_request(payload)

    assert exc_info.value.http_status == 400
    assert exc_info.value.to_response() == {"error": "Invalid action"}


def test_missing_user_id_fails_validation():
    with pytest.raises(ValidationError):
        parse_request({"action": "createTask", "data": {"title": "x"}})


def test_missing_updates_fails_validation():
    with pytest.raises(ValidationError):
        parse_request({"action": "updateTask", "data": {"taskId": 1}, "userId": "u1"})


def test_non_object_body_rejected():
    with pytest.raises(ValueError, match="JSON object"):
        parse_request("getTasks")
