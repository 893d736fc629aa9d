"""Domain exceptions."""


class ERPAccessError(Exception):
    """Base exception for the access control core."""

    pass


class InsufficientPermission(ERPAccessError):
    """Acting user is not allowed to perform the requested mutation."""

    pass


class NotFound(ERPAccessError):
    """Requested entity was not found."""

    pass


class ValidationError(ERPAccessError):
    """Validation failed for input data."""

    pass
