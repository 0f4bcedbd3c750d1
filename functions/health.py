# Lambda handler for health check endpoint

from datetime import datetime, timezone

from config.logging import get_logger
from taskproxy.db.supabase_client import get_store
from taskproxy.http import build_response, get_method, get_query_param, get_url

logger = get_logger(__name__)


def handler(event, context):
    """
    Health check endpoint handler.

    ``?deep=true`` also pings the database.
    """
    method = get_method(event)
    url = get_url(event)
    logger.info(f"Health: Request received: {method} {url}")

    if method == "OPTIONS":
        return build_response(200)

    body = {
        "success": True,
        "message": "API is working",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "method": method,
        "url": url,
    }

    if (get_query_param(event, "deep") or "").lower() in ("1", "true", "yes"):
        body["database"] = get_store().health_check()

    return build_response(200, body)
