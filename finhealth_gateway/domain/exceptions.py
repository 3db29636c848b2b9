"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class SnapshotProviderError(DomainException):
    """Snapshot provider returned an error or is unavailable"""

    pass


class UserNotFoundError(SnapshotProviderError):
    """Snapshot provider has no data for the requested user"""

    pass


class InvalidTransactionError(DomainException):
    """Transaction type or amount cannot be applied to a snapshot"""

    pass
