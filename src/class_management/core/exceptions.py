class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when a referenced document does not exist."""


class DataIntegrityError(DomainError):
    """Raised when persisted records break an invariant the code relies on.

    Unlike ValidationError this is never the caller's fault: it means a record
    reached a computation without the fields write-time validation guarantees.
    """
