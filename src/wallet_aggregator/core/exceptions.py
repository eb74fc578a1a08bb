"""Application-level exceptions."""


class AppError(Exception):
    """Base exception for application errors."""

    status_code = 400

    def __init__(self, message: str, code: str = "APP_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)


class ValidationError(AppError):
    """Raised when input validation fails."""

    def __init__(self, message: str):
        super().__init__(message, code="VALIDATION_ERROR")


class UpstreamUnavailableError(AppError):
    """Raised when no unit of a batch could possibly reach the upstream provider."""

    status_code = 503

    def __init__(self, message: str):
        super().__init__(message, code="UPSTREAM_UNAVAILABLE")


class UpstreamRequestError(AppError):
    """Raised when a single upstream call fails."""

    status_code = 502

    def __init__(self, message: str, status: int | None = None):
        self.status = status
        super().__init__(message, code="UPSTREAM_REQUEST_FAILED")


class ConfigWriteError(AppError):
    """Raised when the settings document cannot be persisted."""

    status_code = 500

    def __init__(self, path: str, reason: str):
        super().__init__(
            f"Failed to write settings document {path}: {reason}",
            code="CONFIG_WRITE_ERROR",
        )


class ConfigReadError(AppError):
    """Raised when the settings document exists but cannot be read."""

    status_code = 500

    def __init__(self, path: str, reason: str):
        super().__init__(
            f"Failed to read settings document {path}: {reason}",
            code="CONFIG_READ_ERROR",
        )
