class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class InvalidTimeFormat(ValidationError):
    """Raised when a time value is not a 24-hour HH:MM string."""


class MissingRequiredField(ValidationError):
    """Raised when a write is missing status, date, period or student id."""

    def __init__(self, field_name: str):
        super().__init__(f"Missing required field: {field_name}")
        self.field_name = field_name


class NotFoundError(DomainError):
    """Raised when a referenced entity does not exist."""


class DuplicateKeyViolation(DomainError):
    """Raised when storage reports a duplicate key on an upsert path.

    Kept apart from generic storage errors: a correct upsert never hits it.
    """


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""
