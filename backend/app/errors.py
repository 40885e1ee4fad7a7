"""Error types raised by the completion gateway.

Every error carries the HTTP status it maps to, a user-facing message and an
optional short ``details`` string. Upstream response bodies are kept on the
exception for logging only and never rendered to the caller.
"""
from typing import Optional


class GatewayError(Exception):
    """Base class for errors rendered as ``{"error": ..., "details": ...}``"""

    status_code: int = 500
    message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None, details: Optional[str] = None):
        self.message = message or self.message
        self.details = details
        super().__init__(self.message if details is None else f"{self.message} ({details})")

    def to_dict(self) -> dict:
        body = {"error": self.message}
        if self.details:
            body["details"] = self.details
        return body


class ValidationError(GatewayError):
    """A required request field is missing or the body is unusable"""

    status_code = 400
    message = "Missing required fields"


class MethodNotAllowedError(GatewayError):
    status_code = 405
    message = "Method not allowed"


class CompletionError(GatewayError):
    """Any failure on the path to a usable model completion"""

    status_code = 500
    message = "Failed to get a completion from the model."


class UpstreamTimeoutError(CompletionError):
    def __init__(self, timeout_seconds: float):
        self.timeout_seconds = timeout_seconds
        super().__init__(details=f"Upstream model did not respond within {timeout_seconds:g}s")


class UpstreamError(CompletionError):
    """The provider answered with a non-success status"""

    def __init__(self, status: Optional[int], body: str = ""):
        self.status = status
        self.body = body
        if status is None:
            super().__init__(details="Upstream model request failed")
        else:
            super().__init__(details=f"Upstream model returned status {status}")


class BlockedOrEmptyCompletionError(CompletionError):
    """The provider returned no usable content, usually due to safety filtering"""

    message = "API returned no content, it might be blocked due to safety settings."

    def __init__(self, details: Optional[str] = None):
        super().__init__(details=details)


class MalformedCompletionError(CompletionError):
    def __init__(self, details: Optional[str] = None):
        super().__init__(details=details or "Model response was not valid JSON")
