"""Errors raised by the service layer and translated to HTTP responses by the API."""


class NotFoundError(Exception):
    """Raised when a referenced entity does not exist."""

    pass


class ConflictError(Exception):
    """Raised on uniqueness or capacity violations."""

    pass


class InvalidStateError(Exception):
    """Raised when an operation is not allowed in the entity's current lifecycle state."""

    pass


class ReportDataValidationError(ValueError):
    """Raised when report data does not match its template under strict validation."""

    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__("Report data does not match template: " + "; ".join(errors))
