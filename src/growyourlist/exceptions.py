"""GrowYourList SDK exceptions."""


class GylError(Exception):
    """Base exception for GrowYourList SDK."""

    def __init__(self, message: str, status_code: int | None = None):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class ConfigurationError(GylError):
    """Raised when the client is configured with unusable settings."""


class ValidationError(GylError):
    """Raised when input is rejected before any request is sent."""


class TransportError(GylError):
    """Raised when no usable response was received (timeout, refused connection)."""


class ApiError(GylError):
    """Raised when the API responds with a status outside [200, 400).

    The raw response body is kept on ``body`` and is also used as the message.
    """

    def __init__(self, body: str, status_code: int):
        self.body = body
        super().__init__(body or f"Request failed with status {status_code}", status_code)


class AuthenticationError(ApiError):
    """Raised when authentication fails (401)."""

    def __init__(self, body: str = ""):
        super().__init__(body, status_code=401)


class ForbiddenError(ApiError):
    """Raised when access is denied (403)."""

    def __init__(self, body: str = ""):
        super().__init__(body, status_code=403)


class NotFoundError(ApiError):
    """Raised when a subscriber or resource is not found (404)."""

    def __init__(self, body: str = ""):
        super().__init__(body, status_code=404)


class RateLimitError(ApiError):
    """Raised when rate limit is exceeded (429)."""

    def __init__(self, body: str = "", retry_after: int | None = None):
        super().__init__(body, status_code=429)
        self.retry_after = retry_after
