"""HTTP client for the task service.

One method per service operation. Every non-2xx response and every
transport failure is raised as ``TaskApiError`` so callers deal with a
single exception type.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx

from taskboard.client.config import get_client_settings

logger = logging.getLogger(__name__)


class TaskApiError(Exception):
    """Raised when the task service rejects a request or cannot be reached."""

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        payload: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.payload = payload or {}


def _decode_error(response: httpx.Response) -> Dict[str, Any]:
    try:
        data = response.json()
    except ValueError:
        return {"error": response.text}
    return data if isinstance(data, dict) else {"error": str(data)}


class TaskApiClient:
    def __init__(
        self,
        base_url: Optional[str] = None,
        *,
        timeout: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        settings = get_client_settings()
        self.base_url = (base_url or settings.api_url).rstrip("/")
        self._client = httpx.Client(
            base_url=self.base_url,
            timeout=timeout if timeout is not None else settings.timeout,
            transport=transport,
        )

    def __enter__(self) -> "TaskApiClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def _request(self, method: str, path: str, json: Optional[dict] = None) -> Any:
        try:
            response = self._client.request(method, path, json=json)
        except httpx.HTTPError as exc:
            logger.warning("%s %s failed: %s", method, path, exc)
            raise TaskApiError(f"Task service unreachable: {exc}") from exc

        if response.is_error:
            payload = _decode_error(response)
            logger.warning(
                "%s %s -> %s %s", method, path, response.status_code, payload.get("error")
            )
            raise TaskApiError(
                str(payload.get("error") or response.reason_phrase),
                status_code=response.status_code,
                payload=payload,
            )
        try:
            return response.json()
        except ValueError as exc:
            logger.warning("%s %s -> %s with non-JSON body", method, path, response.status_code)
            raise TaskApiError(
                "Task service returned a non-JSON response",
                status_code=response.status_code,
                payload={"error": response.text},
            ) from exc

    def health(self) -> Dict[str, Any]:
        return self._request("GET", "/app/health")

    def list_tasks(self) -> List[Dict[str, Any]]:
        return self._request("GET", "/task/get-all") or []

    def create_task(self, topic: str, description: str) -> Dict[str, Any]:
        return self._request(
            "POST", "/task/create", json={"topic": topic, "description": description}
        )

    def update_task(self, task_id: int, topic: str, description: str) -> Dict[str, Any]:
        return self._request(
            "PUT",
            f"/task/{task_id}/update",
            json={"topic": topic, "description": description},
        )

    def delete_task(self, task_id: int) -> Dict[str, Any]:
        return self._request("DELETE", f"/task/{task_id}/delete")
