"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class InvalidInputError(DomainException):
    """Caller passed a missing or malformed value to an evaluator"""

    pass


class DebtorNotFoundError(DomainException):
    """No debtor snapshot exists for the requested customer"""

    pass


class NotificationError(DomainException):
    """Notification webhook rejected the event or is unavailable"""

    pass
