"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class DataStoreError(DomainException):
    """Backing store returned an error or is unavailable"""

    pass


class InvalidRowError(DomainException):
    """Row fetched from the store is malformed or invalid"""

    pass


class NotFoundError(DomainException):
    """Requested row does not exist for this user"""

    pass


class InvalidPeriodError(DomainException):
    """Unknown reporting period name"""

    pass
