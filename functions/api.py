# Lambda handler for the task/category data endpoint

from typing import Optional

from config.logging import get_logger, log_error_with_context, setup_logging
from config.settings import get_settings
from taskproxy.db.supabase_client import get_store
from taskproxy.dispatcher import RequestDispatcher
from taskproxy.http import build_response, get_method, get_url, parse_json_body

setup_logging()
logger = get_logger(__name__)

_settings = get_settings()
logger.info(f"API: Initializing with URL: {'SET' if _settings.supabase_url else 'NOT SET'}")
logger.info(f"API: Service key: {'SET' if _settings.supabase_service_role_key else 'NOT SET'}")

_dispatcher: Optional[RequestDispatcher] = None


def get_dispatcher() -> RequestDispatcher:
    """Build the dispatcher once per container, around the shared store."""
    global _dispatcher

    if _dispatcher is None:
        settings = get_settings()
        _dispatcher = RequestDispatcher(
            get_store(),
            tasks_table=settings.tasks_table,
            categories_table=settings.categories_table,
        )

    return _dispatcher


def handler(event, context):
    """
    Data endpoint handler.

    Body: {"action": str, "data": object, "userId": str}
    """
    method = get_method(event)
    logger.info(f"API: Request received: {method} {get_url(event)}")

    if method == "OPTIONS":
        return build_response(200)

    try:
        payload = parse_json_body(event)
    except Exception as e:
        log_error_with_context(e, {"operation": "parse_body"})
        return build_response(500, {"error": str(e)})

    status_code, envelope = get_dispatcher().handle(payload)
    return build_response(status_code, envelope)
