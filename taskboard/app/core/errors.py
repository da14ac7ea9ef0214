"""Error taxonomy shared by the task store, the service layer and the HTTP handlers."""

from typing import Any, Dict, Optional


class TaskError(Exception):
    """Base class for failures that are converted into an HTTP response."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_payload(self) -> Dict[str, Any]:
        return {"error": self.message}


class ValidationError(TaskError):
    """Caller input failed a required-field check. Nothing was written."""

    status_code = 400


class NotFoundError(TaskError):
    """No stored task matched the identifier at mutation time."""

    status_code = 404

    def __init__(self, message: str = "Task not found"):
        super().__init__(message)


class StoreError(TaskError):
    """The underlying data store failed (connectivity, constraint, timeout)."""

    status_code = 500

    def __init__(
        self,
        message: str,
        *,
        code: Optional[str] = None,
        cause: Optional[BaseException] = None,
    ):
        super().__init__(message)
        self.code = code
        self.cause = cause

    def to_payload(self) -> Dict[str, Any]:
        if self.code:
            return {"error": "Database error", "code": self.code, "message": self.message}
        return {"error": f"Server error: {self.message}"}
