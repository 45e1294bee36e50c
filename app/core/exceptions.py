"""Custom application exceptions."""


class AppException(Exception):
    """Base application exception."""

    def __init__(self, message: str, status_code: int = 500):
        """Initialize exception with message and status code."""
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class NotFoundException(AppException):
    """Resource not found exception."""

    def __init__(self, message: str = "Resource not found"):
        """Initialize with 404 status code."""
        super().__init__(message, status_code=404)


class ValidationException(AppException):
    """Validation error exception."""

    def __init__(self, message: str = "Validation error"):
        """Initialize with 422 status code."""
        super().__init__(message, status_code=422)


class ReferenceException(ValidationException):
    """A record references a patient that does not exist."""

    def __init__(self, message: str = "Referenced record does not exist"):
        """Initialize with 422 status code."""
        super().__init__(message)
