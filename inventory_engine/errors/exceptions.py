"""Custom exception hierarchy for inventory aggregation errors."""


class InventoryError(Exception):
    """Base exception for all inventory aggregation errors."""

    def __init__(self, message: str, *args, **kwargs):
        """Initialize error with message."""
        self.message = message
        super().__init__(message, *args, **kwargs)


class StoreUnavailableError(InventoryError):
    """Raised when the bulk variant fetch fails or times out.

    Aborts the whole batch; no partial results are returned.
    """
    pass


class InventoryValidationError(InventoryError):
    """Raised when caller input is invalid (unknown field, unknown policy)."""
    pass
