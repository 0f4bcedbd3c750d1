"""
Request models for every supported action.

Each action is its own pydantic model with a literal ``action`` tag and a
typed ``data`` record. ``ACTION_MODELS`` is the closed registry the
dispatcher routes over; anything not in it is an invalid action.
"""

from typing import Any, Dict, Literal, Mapping, Optional, Type, Union

from pydantic import BaseModel, ConfigDict, Field

from taskproxy.errors import InvalidActionError

RowId = Union[int, str]


class _Record(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class TaskRef(_Record):
    task_id: RowId = Field(alias="taskId")


class CategoryRef(_Record):
    category_id: RowId = Field(alias="categoryId")


class TaskUpdate(_Record):
    task_id: RowId = Field(alias="taskId")
    updates: Dict[str, Any]


class GuestRef(_Record):
    guest_user_id: str = Field(alias="guestUserId")


class ActionRequest(BaseModel):
    """Fields shared by every request envelope."""

    model_config = ConfigDict(extra="ignore")

    action: str
    user_id: str = Field(alias="userId")


class GetTask(ActionRequest):
    action: Literal["getTask"] = "getTask"
    data: TaskRef


class GetTasks(ActionRequest):
    action: Literal["getTasks"] = "getTasks"
    data: Any = None


class GetTasksByCategoryAndUser(ActionRequest):
    action: Literal["getTasksByCategoryAndUser"] = "getTasksByCategoryAndUser"
    data: CategoryRef


class UpdateTask(ActionRequest):
    action: Literal["updateTask"] = "updateTask"
    data: TaskUpdate


class UpdateGuestTasks(ActionRequest):
    action: Literal["updateGuestTasks"] = "updateGuestTasks"
    # Scoped by data.guestUserId, so the caller's own id is not needed
    user_id: Optional[str] = Field(default=None, alias="userId")
    data: GuestRef


class CreateTask(ActionRequest):
    action: Literal["createTask"] = "createTask"
    data: Dict[str, Any] = Field(default_factory=dict)


class DeleteTask(ActionRequest):
    action: Literal["deleteTask"] = "deleteTask"
    data: TaskRef


class GetCategories(ActionRequest):
    action: Literal["getCategories"] = "getCategories"
    data: Any = None


class CreateCategory(ActionRequest):
    action: Literal["createCategory"] = "createCategory"
    data: Dict[str, Any] = Field(default_factory=dict)


class DeleteCategory(ActionRequest):
    action: Literal["deleteCategory"] = "deleteCategory"
    data: CategoryRef


def _action_name(model: Type[ActionRequest]) -> str:
    return model.model_fields["action"].default


ACTION_MODELS: Dict[str, Type[ActionRequest]] = {
    _action_name(model): model
    for model in (
        GetTask,
        GetTasks,
        GetTasksByCategoryAndUser,
        UpdateTask,
        UpdateGuestTasks,
        CreateTask,
        DeleteTask,
        GetCategories,
        CreateCategory,
        DeleteCategory,
    )
}


def parse_request(payload: Any) -> ActionRequest:
    """
    Turn a decoded request body into its typed action model.

    Raises:
        InvalidActionError: ``action`` is missing or not supported
        ValueError: body is not an object, or fields fail validation
    """
    if not isinstance(payload, Mapping):
        raise ValueError("Request body must be a JSON object")

    action = payload.get("action")
    model = ACTION_MODELS.get(action) if isinstance(action, str) else None
    if model is None:
        raise InvalidActionError(action)

    return model.model_validate(dict(payload))
