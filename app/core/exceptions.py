"""
Application exception taxonomy; endpoints map these to HTTP status codes
"""

class BaseAppException(Exception):
    """Base application exception"""
    def __init__(self, message: str, details: str = None):
        self.message = message
        self.details = details
        super().__init__(self.message)


class NotFoundError(BaseAppException):
    """Raised when a resource is not found"""
    pass


class ValidationError(BaseAppException):
    """Raised when validation fails"""
    def __init__(self, message: str, details: str = None, error_code: str = None):
        super().__init__(message, details)
        self.error_code = error_code


class InvalidArgumentError(ValidationError):
    """Raised for malformed month/date keys or unusable window sizes"""
    def __init__(self, message: str, details: str = None):
        super().__init__(message, details, error_code="invalid_argument")


class ConflictError(BaseAppException):
    """Raised when a resource already exists or cannot be changed in its current state"""
    pass


class InsufficientDataError(BaseAppException):
    """Raised when an analysis window resolves to no data points"""
    pass
