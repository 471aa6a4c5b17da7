class AppError(Exception):
    """Base for errors rendered as ``{"error": message}`` at the HTTP boundary.

    Extra keyword arguments are merged into the response body.
    """

    status_code = 500

    def __init__(self, message: str, **extra):
        super().__init__(message)
        self.message = message
        self.extra = extra


class QueryValidationError(AppError):
    """Caller input is missing or blank."""

    status_code = 400


class ConfigurationError(AppError):
    """A required provider credential is not configured."""

    status_code = 500


class ChannelSendError(Exception):
    """The chat channel could not accept a message."""
