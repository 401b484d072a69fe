"""Base service exceptions.

These exceptions are raised by the service layer and should be caught
by the API layer and converted to appropriate HTTP responses.
"""


class ServiceError(Exception):
    """Base service exception."""

    pass


class ConfigurationError(ServiceError):
    """Required configuration is missing."""

    def __init__(self, missing: list[str]):
        self.missing = missing
        super().__init__(f"Missing required environment variables: {', '.join(missing)}")


class MethodError(ServiceError):
    """HTTP method is not supported by the endpoint."""

    def __init__(self, method: str):
        self.method = method
        super().__init__(f"Method {method} not allowed")


class ParseError(ServiceError):
    """Request body is not valid JSON."""

    pass


class ValidationError(ServiceError):
    """Validation error."""

    pass
