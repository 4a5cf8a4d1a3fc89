"""Error taxonomy shared by the services and the HTTP layer."""

from typing import Any, Dict, Optional


class ArcHivesError(Exception):
    """Base class for every error surfaced to API clients."""

    kind = "internal_error"
    status_code = 500

    def __init__(self, message: str, operation: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.operation = operation

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind,
            "message": self.message,
            "operation": self.operation,
        }


class ValidationError(ArcHivesError):
    """A required field is missing or malformed. Raised before any store access."""

    kind = "validation_error"
    status_code = 400


class Conflict(ArcHivesError):
    """The exact same content was already published."""

    kind = "conflict"
    status_code = 409


class NotFound(ArcHivesError):
    kind = "not_found"
    status_code = 404


class InsufficientBalance(ArcHivesError):
    """A spend request exceeds the member's balance."""

    kind = "insufficient_balance"
    status_code = 400


class StoreUnavailable(ArcHivesError):
    """Transport or infrastructure failure from the database."""

    kind = "store_unavailable"
    status_code = 503
