"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class InvalidInputError(DomainException):
    """Input record failed validation; carries the offending field name"""

    def __init__(self, field: str, message: str):
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message


class InvalidAffordabilityInputError(InvalidInputError):
    """Income or expense amount is negative, non-finite or not a number"""

    pass


class InvalidRiskInputError(InvalidInputError):
    """Reputation or active loan data cannot be assessed"""

    pass


class BorrowerDataStoreError(DomainException):
    """Borrower data store is unavailable or returned an error"""

    pass
