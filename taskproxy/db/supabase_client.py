"""
Supabase-backed store with lazy client creation and health checks.
Optimized for AWS Lambda environments.
"""

import time
from typing import Any, Dict, List, Mapping, Optional

import httpx
from postgrest.exceptions import APIError
from supabase import Client, create_client
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from config.logging import LoggerMixin, log_error_with_context, log_performance
from config.settings import Settings, get_settings
from taskproxy.db.store import Filters, Row
from taskproxy.errors import ConfigurationError, RecordNotFoundError, StoreError

# PostgREST: "JSON object requested, multiple (or no) rows returned"
NOT_FOUND_CODE = "PGRST116"


class SupabaseStore(LoggerMixin):
    """
    Store implementation over the Supabase (PostgREST) client.
    Designed for AWS Lambda with client reuse across invocations.
    """

    def __init__(self, settings: Optional[Settings] = None, client: Optional[Client] = None):
        """Initialize the store; the client is created on first use unless given."""
        self.settings = settings or get_settings()
        self._client: Optional[Client] = client
        self._last_health_check = 0.0
        self._last_health_result: Optional[Dict[str, Any]] = None

    @property
    def client(self) -> Client:
        """Get Supabase client, creating if necessary."""
        if self._client is None:
            self._client = self._create_client()
        return self._client

    def _create_client(self) -> Client:
        """Create the Supabase client from the service-role credentials."""
        self.logger.info(
            f"Creating Supabase client - URL: {'SET' if self.settings.supabase_url else 'NOT SET'}, "
            f"service key: {'SET' if self.settings.supabase_service_role_key else 'NOT SET'}"
        )
        if not self.settings.has_store_credentials:
            raise ConfigurationError(
                "SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY must both be set"
            )

        try:
            client = create_client(
                self.settings.supabase_url,
                self.settings.supabase_service_role_key,
            )
        except Exception as e:
            log_error_with_context(e, {"operation": "create_client"})
            raise

        self.logger.info("Supabase client created successfully")
        return client

    def query(
        self,
        table: str,
        filters: Filters,
        order_by: Optional[str] = None,
        descending: bool = False,
        single: bool = False,
    ) -> Any:
        builder = self.client.table(table).select("*")
        for column, value in filters.items():
            builder = builder.eq(column, value)
        if order_by:
            builder = builder.order(order_by, desc=descending)
        if single:
            builder = builder.single()

        try:
            response = self._execute(builder, "select", table)
        except StoreError as e:
            if single and e.store_code == NOT_FOUND_CODE:
                raise RecordNotFoundError(table, dict(filters)) from e
            raise
        return response.data

    def insert(self, table: str, record: Mapping[str, Any]) -> List[Row]:
        builder = self.client.table(table).insert(dict(record))
        return self._execute(builder, "insert", table).data

    def update(self, table: str, values: Mapping[str, Any], filters: Filters) -> List[Row]:
        builder = self.client.table(table).update(dict(values))
        for column, value in filters.items():
            builder = builder.eq(column, value)
        return self._execute(builder, "update", table).data

    def delete(self, table: str, filters: Filters) -> List[Row]:
        builder = self.client.table(table).delete()
        for column, value in filters.items():
            builder = builder.eq(column, value)
        return self._execute(builder, "delete", table).data

    def _execute(self, builder, operation: str, table: str):
        """Run a built request, timing it and translating PostgREST errors."""
        start_time = time.time()
        try:
            response = builder.execute()
        except APIError as e:
            raise StoreError(
                e.message or str(e),
                operation=operation,
                table=table,
                store_code=e.code,
                details=e.details,
                hint=e.hint,
            ) from e
        finally:
            duration_ms = (time.time() - start_time) * 1000
            log_performance(f"supabase_{operation}", duration_ms, table=table)
        return response

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=1, max=5),
        retry=retry_if_exception_type(httpx.TransportError),
        reraise=True,
    )
    def _ping(self) -> None:
        """Issue the cheapest possible read against the tasks table."""
        self.client.table(self.settings.tasks_table).select("id").limit(1).execute()

    def health_check(self) -> Dict[str, Any]:
        """
        Perform health check on the Supabase connection.
        Cached for performance in high-frequency Lambda calls.
        """
        current_time = time.time()

        if (
            self._last_health_result is not None
            and (current_time - self._last_health_check) < self.settings.health_check_interval_seconds
        ):
            return {**self._last_health_result, "cached": True}

        start_time = time.time()

        try:
            self._ping()
        except Exception as e:
            log_error_with_context(e, {"operation": "health_check"})
            return {
                "status": "unhealthy",
                "error": str(e),
                "error_type": e.__class__.__name__
            }

        duration_ms = (time.time() - start_time) * 1000
        log_performance("supabase_health_check", duration_ms)

        self._last_health_check = current_time
        self._last_health_result = {
            "status": "healthy",
            "response_time_ms": duration_ms,
        }

        self.logger.info(f"Supabase health check passed - Response time: {duration_ms:.2f}ms")
        return {**self._last_health_result, "cached": False}


# Global store instance for Lambda
_store: Optional[SupabaseStore] = None


def get_store() -> SupabaseStore:
    """
    Get global store instance.
    Reuses the client across Lambda invocations.
    """
    global _store

    if _store is None:
        _store = SupabaseStore()

    return _store


def reset_store() -> None:
    """Drop the global store so the next call rebuilds it."""
    global _store
    _store = None
