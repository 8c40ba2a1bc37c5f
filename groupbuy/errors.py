"""Custom exception classes for the application."""


class AppError(Exception):
    """Base application error class."""

    def __init__(self, message, status_code=400):
        """Initialize the error."""
        super().__init__(message)
        self.status_code = status_code
        self.message = message


class NotFoundError(AppError):
    """Raised when a resource is not found."""

    def __init__(self, message="Resource not found."):
        """Initialize the error."""
        super().__init__(message, 404)


class GroupNotFound(NotFoundError):
    """Raised when a group id does not reference a group in the store."""

    def __init__(self, group_id):
        """Initialize the error."""
        super().__init__(f"Group {group_id} not found.")
        self.group_id = group_id
