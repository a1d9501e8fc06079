"""Tern exception hierarchy.

Shared across the route table, dispatcher, and app so every module
raises and catches the same types.
"""

from dataclasses import dataclass


class TernError(Exception):
    """Base for all tern-specific errors."""


class ConfigurationError(TernError):
    """Raised when app or route table setup is invalid.

    Typically surfaces at import time while routes are being registered.
    """


class RouteConflict(ConfigurationError):  # noqa: N818 — reads as the condition it reports
    """A handler is already registered for this method and path.

    The existing registration is left untouched. Callers usually let this
    propagate and abort startup.
    """

    def __init__(self, method: str, path: str) -> None:
        self.method = method
        self.path = path
        super().__init__(f"Route already exists: {method} {path!r}")


@dataclass(frozen=True, slots=True)
class HTTPError(TernError):
    """An error that maps directly to an HTTP status code.

    The dispatcher converts these into a finalized response carrying
    ``status`` and, as the body, ``detail``.
    """

    status: int
    detail: str = ""

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818 — conventional name in web frameworks
    """404 — no route matched the request method and path."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)


class BodyParseError(HTTPError):
    """400 — the request body is not valid JSON."""

    def __init__(self, detail: str = "Malformed request body") -> None:
        super().__init__(status=400, detail=detail)


class PayloadTooLarge(HTTPError):  # noqa: N818 — conventional name in web frameworks
    """413 — the request body exceeds ``AppConfig.max_content_length``."""

    def __init__(self, limit: int) -> None:
        super().__init__(status=413, detail=f"Request body exceeds {limit} bytes")


class GatewayTimeout(HTTPError):  # noqa: N818 — conventional name in web frameworks
    """504 — the request did not finish within ``AppConfig.request_timeout``."""

    def __init__(self, timeout: float) -> None:
        super().__init__(status=504, detail=f"Request exceeded {timeout:g}s deadline")
