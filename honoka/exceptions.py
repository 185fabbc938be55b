from typing import Optional


class StoreError(Exception):
    """Base exception for card store errors."""

    def __init__(
        self, message: str, original_exception: Optional[Exception] = None
    ):
        super().__init__(message)
        self.original_exception = original_exception


class StoreConnectionError(StoreError):
    """Raised for errors opening the database."""

    pass


class SchemaInitializationError(StoreError):
    """Raised for errors during schema setup."""

    pass


class CardOperationError(StoreError):
    """Raised for errors during card operations (CRUD)."""

    pass


class DuplicateKeyError(CardOperationError):
    """Raised when inserting a card whose front already exists."""

    pass


class ConversionError(StoreError):
    """Indicates a value could not be converted between application models
    and DB format."""

    pass


class ReviewSessionError(Exception):
    """Raised when a review session step is invoked out of order."""

    pass
