"""
Ledger error types.

Both are raised by the booking store and turned into user-facing
notifications at the HTTP boundary (see main.py exception handlers).
"""


class LedgerError(Exception):
    """Base class for errors surfaced to the user."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(LedgerError):
    """A required booking field (date, location, phone) is empty."""

    status_code = 422

    def __init__(self, missing_fields: list[str]):
        self.missing_fields = missing_fields
        super().__init__(
            f"Please fill in all required fields: {', '.join(missing_fields)}"
        )


class FormatError(LedgerError):
    """Imported data is not a JSON array of bookings."""

    status_code = 400

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Could not import bookings: {reason}")
