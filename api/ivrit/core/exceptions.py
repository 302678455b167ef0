"""
Custom exceptions for the application.
"""


class IvritException(Exception):
    """Base exception for all Ivrit application exceptions."""
    pass


class ValidationError(IvritException):
    """Raised when validation fails."""
    pass


class InvalidQuality(ValidationError):
    """Raised when a review quality score is not an integer in [0, 5]."""

    def __init__(self, quality):
        self.quality = quality
        super().__init__(f"Quality must be an integer between 0 and 5, got {quality!r}")


class NotFoundError(IvritException):
    """Raised when a requested resource is not found."""
    pass


class CardNotFound(NotFoundError):
    """Raised when a referenced card is absent from the catalog."""

    def __init__(self, card_id: int):
        self.card_id = card_id
        super().__init__(f"Card with id {card_id} not found")


class UserNotFound(NotFoundError):
    """Raised when a referenced user does not exist."""

    def __init__(self, user_id: int):
        self.user_id = user_id
        super().__init__(f"User with id {user_id} not found")


class ConflictError(IvritException):
    """Raised when there's a conflict (e.g., duplicate entry or concurrent update)."""
    pass


class ExternalServiceError(IvritException):
    """Raised when a best-effort external collaborator fails."""
    pass


class SettlementFailure(ExternalServiceError):
    """Raised when the external reward ledger rejects or cannot receive a credit."""
    pass


class ReminderSchedulingFailure(ExternalServiceError):
    """Raised when a review reminder cannot be scheduled."""
    pass
