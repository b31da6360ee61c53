"""Custom exceptions for the SFV Tech quotations service."""

class SfvError(Exception):
    """Base exception for all application errors."""
    def __init__(self, message="An internal error occurred", status_code=500, payload=None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.payload = payload

    def to_dict(self):
        rv = dict(self.payload or ())
        rv['error'] = self.message
        rv['status'] = 'error'
        return rv

class ValidationError(SfvError):
    """Raised when required input is missing or malformed."""
    def __init__(self, message, payload=None):
        super().__init__(message, 400, payload)

class NotFoundError(SfvError):
    """Exception raised when a resource is not found."""
    def __init__(self, message="Resource not found", payload=None):
        super().__init__(message, 404, payload)

class UnauthorizedError(SfvError):
    """Raised when the request carries no valid credentials."""
    def __init__(self, message="Not authorized, token missing"):
        super().__init__(message, 401)

class ForbiddenError(SfvError):
    """Raised when a user lacks permission for an action."""
    def __init__(self, message="Access denied: insufficient permissions"):
        super().__init__(message, 403)

class ConflictError(SfvError):
    """Raised when an operation clashes with the current state of a resource."""
    def __init__(self, message, payload=None):
        # The REST contract reports state conflicts as 400
        super().__init__(message, 400, payload)

class StorageError(SfvError):
    """Raised when the database rejects or fails an operation."""
    def __init__(self, message="Server error, please try again later"):
        super().__init__(message, 500)
