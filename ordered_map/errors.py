class OrderedMapError(Exception):
    """Base class for ordered map failures."""


class InvalidArgumentError(OrderedMapError, TypeError):
    """Raised when an operation receives an argument of the wrong kind."""


__all__ = [
    "OrderedMapError",
    "InvalidArgumentError",
]
