"""
Error taxonomy for the accounts core.
Callers catch AccountError for anything raised here; subclasses say whether it is retryable.
"""

from pydantic import ValidationError as SchemaValidationError


class AccountError(Exception):
    """Base class for accounts errors."""

    retryable = False


class ValidationError(AccountError):
    """Constraint violated on a user field. Carries field-level messages."""

    def __init__(self, errors: dict[str, list[str]]) -> None:
        self.errors = errors
        message = "; ".join(f"{field} {', '.join(msgs)}" for field, msgs in errors.items())
        super().__init__(message or "validation failed")

    @classmethod
    def single(cls, field: str, message: str) -> "ValidationError":
        return cls({field: [message]})

    @classmethod
    def from_schema(cls, exc: SchemaValidationError) -> "ValidationError":
        """Translate a pydantic ValidationError into field-level messages."""
        errors: dict[str, list[str]] = {}
        for err in exc.errors():
            field = ".".join(str(part) for part in err["loc"]) or "__root__"
            errors.setdefault(field, []).append(err["msg"])
        return cls(errors)


class DuplicateIdentityError(AccountError):
    """A unique constraint rejected the write. Safe to retry with fresh values."""

    retryable = True


class IdentitySpaceExhausted(AccountError):
    """Every candidate identifier collided within the retry budget."""

    def __init__(self, attempts: int) -> None:
        self.attempts = attempts
        super().__init__(f"no free identifier after {attempts} attempts")


class AttachmentError(AccountError):
    """Icon could not be converted or attached."""


class StoreError(AccountError):
    """Backing persistence or blob store failed."""
