"""Exception hierarchy for the service container."""
from __future__ import annotations


class GimpleException(Exception):
    """Base exception for all container errors."""
    pass


class ServiceNotFoundError(GimpleException, KeyError):
    """Raised (or returned in a Failure) when no factory is registered under an id.

    Attributes:
        service_id: The identifier that was looked up
    """

    def __init__(self, service_id: str):
        super().__init__(service_id)
        self.service_id = service_id

    def __str__(self) -> str:
        return f"There is no service with id {self.service_id}"


class ConfigurationError(GimpleException):
    """Raised when configuration is invalid or missing."""
    pass
