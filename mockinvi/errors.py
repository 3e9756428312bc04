from typing import Any, Dict, Optional


class MockInviError(Exception):
    """Base class for the evaluation pipeline errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class InsufficientDataError(MockInviError):
    """Questions, answers or ideal answers are missing. Raised before any remote call."""


class RemoteServiceError(MockInviError):
    """The text-generation call failed, timed out or returned nothing."""


class MalformedResponseError(MockInviError):
    """The remote call succeeded but its content is not a usable evaluation."""


class PersistenceError(MockInviError):
    """Writing the completed session to the store failed."""
