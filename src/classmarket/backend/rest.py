"""RestBackend - Talks to a Supabase-style hosted backend over HTTP."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from classmarket.backend.exceptions import (
    BackendAuthError,
    BackendError,
    BackendUnavailableError,
    DuplicateRecordError,
    RecordNotFoundError,
)
from classmarket.backend.models import Filter, Table
from classmarket.logging import sanitize_for_log

logger = logging.getLogger("classmarket.backend.rest")

# Postgres function expected on the backend for atomic counter updates
INCREMENT_RPC = "increment_counter"


class RestBackend:
    """Backend served by PostgREST (rows) and GoTrue (identity).

    Rows live under ``/rest/v1/<table>``, the caller identity under
    ``/auth/v1/user``.
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        timeout: float = 30.0,
    ) -> None:
        """Initialize the REST backend.

        Args:
            base_url: Project URL, e.g. "https://xyz.supabase.co"
            api_key: Project API key sent with every request
            timeout: Request timeout in seconds
        """
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout
        self._client: httpx.Client | None = None

    @property
    def client(self) -> httpx.Client:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.Client(
                headers={
                    "apikey": self.api_key,
                    "Authorization": f"Bearer {self.api_key}",
                    "Content-Type": "application/json",
                },
                timeout=self.timeout,
            )
        return self._client

    def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            self._client.close()
            self._client = None

    def _request(
        self,
        method: str,
        path: str,
        params: list[tuple[str, str]] | None = None,
        json: Any = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        """Send a request and translate failures into backend errors.

        Raises:
            BackendUnavailableError: On transport errors and 5xx responses
            BackendAuthError: On 401/403
            DuplicateRecordError: On 409
            BackendError: On any other non-2xx response
        """
        url = f"{self.base_url}{path}"
        try:
            response = self.client.request(
                method, url, params=params, json=json, headers=headers
            )
        except httpx.TransportError as e:
            logger.warning("%s %s failed: %s", method, path, e)
            raise BackendUnavailableError(f"{method} {path} failed: {e}") from e

        status = response.status_code
        if status < 300:
            return response

        detail = sanitize_for_log(response.text)
        logger.warning("%s %s returned %d: %s", method, path, status, detail)
        if status >= 500:
            raise BackendUnavailableError(f"{method} {path}: {status} - {detail}")
        if status in (401, 403):
            raise BackendAuthError(f"{method} {path}: {status} - {detail}")
        if status == 409:
            raise DuplicateRecordError(f"{method} {path}: {detail}")
        raise BackendError(f"{method} {path}: {status} - {detail}")

    @staticmethod
    def _filter_params(filters: list[Filter] | None) -> list[tuple[str, str]]:
        params = []
        for f in filters or []:
            value = "true" if f.value is True else "false" if f.value is False else str(f.value)
            params.append((f.column, f"{f.op.value}.{value}"))
        return params

    def get_auth_user_id(self, access_token: str) -> str | None:
        """Return the user id behind an access token.

        An expired or unknown token yields None rather than an error.
        """
        try:
            response = self._request(
                "GET",
                "/auth/v1/user",
                headers={"Authorization": f"Bearer {access_token}"},
            )
        except BackendAuthError:
            return None
        data: dict[str, Any] = response.json()
        user_id = data.get("id")
        return str(user_id) if user_id else None

    def select(
        self,
        table: Table,
        filters: list[Filter] | None = None,
        limit: int | None = None,
        order_by: str | None = None,
    ) -> list[dict[str, Any]]:
        """Read rows matching all filters."""
        params = [("select", "*")]
        params.extend(self._filter_params(filters))
        if order_by is not None:
            params.append(("order", f"{order_by}.asc"))
        if limit is not None:
            params.append(("limit", str(limit)))
        response = self._request("GET", f"/rest/v1/{table.value}", params=params)
        return list(response.json())

    def insert(self, table: Table, row: dict[str, Any]) -> dict[str, Any]:
        """Insert one row and return it as stored."""
        response = self._request(
            "POST",
            f"/rest/v1/{table.value}",
            json=[row],
            headers={"Prefer": "return=representation"},
        )
        rows = response.json()
        if not rows:
            raise BackendError(f"Insert into {table.value} returned no row")
        return dict(rows[0])

    def update(
        self, table: Table, filters: list[Filter], values: dict[str, Any]
    ) -> list[dict[str, Any]]:
        """Update rows matching all filters and return them."""
        if not filters:
            raise ValueError("update requires at least one filter")
        response = self._request(
            "PATCH",
            f"/rest/v1/{table.value}",
            params=self._filter_params(filters),
            json=values,
            headers={"Prefer": "return=representation"},
        )
        return list(response.json())

    def increment(self, table: Table, row_id: str, column: str, amount: int = 1) -> int:
        """Atomically add amount to a column through the increment_counter RPC."""
        response = self._request(
            "POST",
            f"/rest/v1/rpc/{INCREMENT_RPC}",
            json={
                "table_name": table.value,
                "row_id": row_id,
                "column_name": column,
                "amount": amount,
            },
        )
        value = response.json()
        if value is None:
            raise RecordNotFoundError(f"{table.value} row '{row_id}' not found")
        return int(value)
