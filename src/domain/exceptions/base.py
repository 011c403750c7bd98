"""Base domain exception."""


class DomainException(Exception):
    """
    Base exception for finance domain errors.

    Business outcomes such as a rejected purchase or an overdue invoice
    are returned as results, not raised. Domain exceptions are reserved
    for inputs the finance module cannot interpret at all.
    """

    def __init__(self, message: str, code: str = "FINANCE_ERROR"):
        self.message = message
        self.code = code
        super().__init__(self.message)

    def to_dict(self) -> dict:
        """Convert to error response format."""
        return {"code": self.code, "message": self.message}
