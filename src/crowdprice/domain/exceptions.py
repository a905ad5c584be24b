"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.

The hierarchy mirrors the error categories callers care about:

- ``ValidationError``    -- invalid input, never retried
- ``EntityNotFoundError`` -- a referenced record does not exist
- ``ConflictError``      -- the request collides with current state
- ``UnauthorizedError``  -- the caller may not perform the action
- ``UnavailableError``   -- storage or identity backend unreachable
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class InvalidAmountError(ValidationError):
    """A price amount is missing, malformed or not strictly positive."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class ConflictError(DomainException):
    """The operation conflicts with the current stored state."""


class DuplicateBarcodeError(ConflictError):
    """Another product already carries this barcode."""


class NotPendingError(ConflictError):
    """The price has already been reviewed."""


class UnauthorizedError(DomainException):
    """The caller is anonymous or lacks the required role."""


class UnavailableError(DomainException):
    """The backing store or identity provider could not be reached in time."""
