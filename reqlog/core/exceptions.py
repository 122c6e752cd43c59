"""Custom exception classes for the application."""

from fastapi import HTTPException, status


class InvalidLevelError(ValueError):
    """Raised when a configured log level name is not a known severity."""

    def __init__(self, level: str):
        self.level = level
        super().__init__(f"unrecognized log level: {level!r}")


class NotFoundError(HTTPException):
    def __init__(self, resource: str = "Resource"):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"{resource} not found",
        )
