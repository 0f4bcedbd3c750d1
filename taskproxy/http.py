"""
API Gateway proxy helpers: request inspection and JSON responses.

Accepts both payload format 1.0 (REST API) and 2.0 (HTTP API) events.
"""

import base64
import json
from typing import Any, Dict, Optional
from urllib.parse import urlencode

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, PUT, DELETE, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization",
}


def build_response(status_code: int, payload: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Proxy-integration response; an omitted payload yields an empty body."""
    return {
        "statusCode": int(status_code),
        "headers": {"Content-Type": "application/json", **CORS_HEADERS},
        "body": "" if payload is None else json.dumps(payload, default=str),
    }


def get_method(event: Dict[str, Any]) -> str:
    method = event.get("httpMethod")
    if not method:
        method = (event.get("requestContext") or {}).get("http", {}).get("method", "")
    return method.upper()


def get_url(event: Dict[str, Any]) -> str:
    """Request path plus query string, as the client sent it."""
    path = event.get("rawPath") or event.get("path") or "/"
    query = event.get("rawQueryString")
    if query is None:
        query = urlencode(event.get("queryStringParameters") or {})
    return f"{path}?{query}" if query else path


def get_query_param(event: Dict[str, Any], name: str) -> Optional[str]:
    return (event.get("queryStringParameters") or {}).get(name)


def parse_json_body(event: Dict[str, Any]) -> Any:
    """
    Decode the JSON request body.

    Raises:
        ValueError: body is missing or is not valid JSON
    """
    body = event.get("body")
    if body is None or body == "":
        raise ValueError("Request body is required")
    if event.get("isBase64Encoded"):
        body = base64.b64decode(body).decode("utf-8")
    return json.loads(body)
