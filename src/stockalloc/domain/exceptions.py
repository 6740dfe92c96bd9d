"""Domain-level exceptions.

All engine failures are expressed as subclasses of DomainException so the
workflow layer and the CLI can catch them uniformly and turn them into
user-facing rejections.  Errors raised by collaborators (variant store,
inventory ledger) are never wrapped; they propagate as-is.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class InvalidQuantityError(ValidationError):
    """A multiplier or reservation quantity is not a positive integer."""


class NoLocationForChannelError(ValidationError):
    """A sales channel has no stock locations associated with it."""

    def __init__(self, sales_channel_id: str) -> None:
        super().__init__(
            f"Sales channel '{sales_channel_id}' has no associated stock locations"
        )
        self.sales_channel_id = sales_channel_id


class LocationRequiredError(ValidationError):
    """A single location is needed but the context does not pin one down."""


class InsufficientStockError(ValidationError):
    """A line item cannot be served from the stock that is available."""

    def __init__(self, line_item_id: str, detail: str = "") -> None:
        message = f"Insufficient stock for line item '{line_item_id}'"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
        self.line_item_id = line_item_id
