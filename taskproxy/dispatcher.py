"""
Request dispatcher: routes a typed action to exactly one store call and
wraps the outcome in the ``{success, data}`` / ``{error}`` envelope.

Every Task and Category operation is filtered by ``owner_id`` so a caller
only ever reads or mutates its own rows. The guest reset is the one action
scoped by another id (``guestUserId``).
"""

from typing import Any, Callable, Dict, Mapping, Optional, Tuple, Type

from config.logging import LoggerMixin, log_error_with_context
from taskproxy import actions
from taskproxy.actions import ActionRequest, parse_request
from taskproxy.db.store import Store
from taskproxy.errors import InvalidActionError, RecordNotFoundError, error_message

GUEST_RESET_VALUES = {
    "suggestible_at": None,
    "deferral": None,
    "finished": False,
}

Envelope = Dict[str, Any]


class RequestDispatcher(LoggerMixin):
    """Stateless per request; holds only the injected store handle."""

    def __init__(
        self,
        store: Store,
        tasks_table: str = "Tasks",
        categories_table: str = "Categories",
    ):
        self.store = store
        self.tasks_table = tasks_table
        self.categories_table = categories_table

        self._handlers: Dict[Type[ActionRequest], Callable[[Any], Any]] = {
            actions.GetTask: self._get_task,
            actions.GetTasks: self._get_tasks,
            actions.GetTasksByCategoryAndUser: self._get_tasks_by_category,
            actions.UpdateTask: self._update_task,
            actions.UpdateGuestTasks: self._update_guest_tasks,
            actions.CreateTask: self._create_task,
            actions.DeleteTask: self._delete_task,
            actions.GetCategories: self._get_categories,
            actions.CreateCategory: self._create_category,
            actions.DeleteCategory: self._delete_category,
        }

        unhandled = set(actions.ACTION_MODELS.values()) - set(self._handlers)
        if unhandled:
            names = sorted(model.__name__ for model in unhandled)
            raise TypeError(f"No handler registered for actions: {', '.join(names)}")

    def handle(self, payload: Any) -> Tuple[int, Envelope]:
        """
        Dispatch a decoded request body.

        Returns:
            (HTTP status, response envelope)
        """
        try:
            data = self.dispatch(payload)
        except InvalidActionError as e:
            self.logger.warning(f"Invalid action: {e.action!r}")
            return e.http_status, e.to_response()
        except Exception as e:
            action = payload.get("action") if isinstance(payload, dict) else None
            log_error_with_context(e, {"operation": "dispatch", "action": action})
            return 500, {"error": error_message(e)}

        return 200, {"success": True, "data": data}

    def dispatch(self, payload: Any) -> Any:
        """Validate the body, run its action and return the success payload."""
        request = parse_request(payload)
        self.logger.info(f"Action: {request.action}, user: {request.user_id}")
        return self.execute(request)

    def execute(self, request: ActionRequest) -> Any:
        handler = self._handlers[type(request)]
        return handler(request)

    def _owned(self, user_id: Optional[str], fields: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        return {**(fields or {}), "owner_id": user_id}

    # Tasks

    def _get_task(self, request: actions.GetTask) -> Optional[list]:
        try:
            task = self.store.query(
                self.tasks_table,
                self._owned(request.user_id, {"id": request.data.task_id}),
                single=True,
            )
        except RecordNotFoundError:
            self.logger.debug(f"Task {request.data.task_id} not found for user {request.user_id}")
            return None
        return [task]

    def _get_tasks(self, request: actions.GetTasks) -> list:
        tasks = self.store.query(
            self.tasks_table,
            self._owned(request.user_id),
            order_by="created_at",
            descending=True,
        )
        self.logger.info(f"Found {len(tasks)} tasks")
        return tasks

    def _get_tasks_by_category(self, request: actions.GetTasksByCategoryAndUser) -> list:
        tasks = self.store.query(
            self.tasks_table,
            self._owned(request.user_id, {"category_id": request.data.category_id}),
            order_by="created_at",
            descending=True,
        )
        self.logger.info(f"Found {len(tasks)} tasks in category {request.data.category_id}")
        return tasks

    def _update_task(self, request: actions.UpdateTask) -> list:
        return self.store.update(
            self.tasks_table,
            request.data.updates,
            self._owned(request.user_id, {"id": request.data.task_id}),
        )

    def _update_guest_tasks(self, request: actions.UpdateGuestTasks) -> Any:
        self.logger.info(f"Resetting guest tasks for {request.data.guest_user_id}")
        return self.store.update(
            self.tasks_table,
            GUEST_RESET_VALUES,
            {"owner_id": request.data.guest_user_id},
        )

    def _create_task(self, request: actions.CreateTask) -> list:
        return self.store.insert(self.tasks_table, self._owned(request.user_id, request.data))

    def _delete_task(self, request: actions.DeleteTask) -> list:
        return self.store.delete(
            self.tasks_table,
            self._owned(request.user_id, {"id": request.data.task_id}),
        )

    # Categories

    def _get_categories(self, request: actions.GetCategories) -> list:
        categories = self.store.query(
            self.categories_table,
            self._owned(request.user_id),
            order_by="created_at",
            descending=True,
        )
        self.logger.info(f"Found {len(categories)} categories")
        return categories

    def _create_category(self, request: actions.CreateCategory) -> list:
        return self.store.insert(self.categories_table, self._owned(request.user_id, request.data))

    def _delete_category(self, request: actions.DeleteCategory) -> list:
        return self.store.delete(
            self.categories_table,
            self._owned(request.user_id, {"id": request.data.category_id}),
        )
