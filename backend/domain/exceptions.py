"""
Custom exception classes for the guildhall application.

Game-rule and lookup failures raised by the services carry the HTTP status
they map to, so routers can let them propagate and FastAPI renders them as
{"detail": <message>}. The message is the user-facing text and is also what
str(error) returns.
"""

from fastapi import HTTPException, status


class GameError(HTTPException):
    """Base class for errors raised by the character and wizard services."""

    status_code_default = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(status_code=status_code or self.status_code_default, detail=message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class NotFoundError(GameError):
    """Raised when a character, wizard, class or catalog item referenced by a compound operation is absent."""

    status_code_default = status.HTTP_404_NOT_FOUND


class ConflictError(GameError):
    """Raised when an item is already attached, or a unique name is already taken."""

    status_code_default = status.HTTP_409_CONFLICT


class RuleViolationError(GameError):
    """Raised when a game rule rejects the operation (not enough mana, HP already full, wrong class...)."""

    status_code_default = status.HTTP_400_BAD_REQUEST


class PersistenceError(GameError):
    """Raised when a transactional operation fails and the cause is deliberately not exposed."""

    status_code_default = status.HTTP_500_INTERNAL_SERVER_ERROR


class ConfigurationError(ValueError):
    """Raised when there's an error in configuration parsing or validation."""

    def __init__(self, message: str):
        super().__init__(f"Configuration error: {message}")
