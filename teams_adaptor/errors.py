"""Errors raised by the adaptor."""


class AdaptorError(Exception):
    """Base class for adaptor errors."""

    pass


class ConfigError(AdaptorError):
    """Raised when configuration is missing or invalid at startup."""

    pass


class DecodeError(AdaptorError):
    """Raised when an inbound event payload cannot be decoded."""

    pass


class DownstreamHTTPError(AdaptorError):
    """Raised when Teams answered with an HTTP error status (>= 400)."""

    def __init__(self, status_code: int, body: str = "") -> None:
        super().__init__(f"{status_code}: {body}" if body else str(status_code))
        self.status_code = status_code
        self.body = body


class DownstreamNetworkError(AdaptorError):
    """Raised when the request to Teams could not complete (no response)."""

    pass
