"""Error hierarchy for the POS transaction orchestrator."""
import enum


class FailureKind(enum.Enum):
    """Why an authorization attempt failed to reach a verdict."""

    DEPENDENCY = "dependency"
    TRANSPORT = "transport"
    UNEXPECTED_STATUS = "unexpected_status"
    INTERNAL = "internal"


class PosError(Exception):
    """Base exception for all orchestrator errors."""


class ValidationError(PosError):
    """Raised when a transaction request breaks a structural or business rule."""


class NotFoundError(PosError):
    """Raised when no transaction exists for a unique code."""


class ConflictError(PosError):
    """Raised when a write collides with existing or concurrent data."""


class InvalidStateTransitionError(ConflictError):
    """Raised when a state update would move a transaction backwards."""


class DependencyError(PosError):
    """Raised when a remote collaborator cannot be used."""

    def __init__(self, message: str, kind: FailureKind = FailureKind.DEPENDENCY):
        super().__init__(message)
        self.kind = kind
