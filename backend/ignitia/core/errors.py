"""
Error taxonomy shared by the agent, the store and the HTTP layer.

Every error carries a client-facing ``message`` and optional diagnostic
``details``. The HTTP boundary in ``ignitia.main`` turns them into
``{"error": message, "details": details}`` with the class's ``status_code``.
"""


class IgnitiaError(Exception):
    """Base class for all errors surfaced at the request boundary."""

    status_code = 500

    def __init__(self, message: str, details: str | None = None):
        self.message = message
        self.details = details
        super().__init__(message)

    def to_dict(self) -> dict[str, str]:
        body = {"error": self.message}
        if self.details:
            body["details"] = self.details
        return body


class InvalidInput(IgnitiaError):
    status_code = 400


class Unauthorized(IgnitiaError):
    status_code = 401

    def __init__(self, message: str = "Unauthorized", details: str | None = None):
        super().__init__(message, details)


class NotFound(IgnitiaError):
    status_code = 404


class UpstreamError(IgnitiaError):
    """The AI provider failed or answered with something unusable."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        body: str | None = None,
        details: str | None = None,
    ):
        super().__init__(message, details or message)
        self.upstream_status = status_code
        self.body = body


class EmptyContent(UpstreamError):
    pass


class MalformedResponse(UpstreamError):
    def __init__(self, parse_error: str, excerpt: str):
        super().__init__(
            f"Failed to parse AI response: {parse_error}",
            details=(
                f"Failed to parse AI response: {parse_error}. "
                f"Content (first 1000 chars): {excerpt}"
            ),
        )
        self.parse_error = parse_error
        self.excerpt = excerpt


class PersistenceError(IgnitiaError):
    pass
