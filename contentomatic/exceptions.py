"""Custom exceptions for content serialization and storage operations."""


class ContentError(Exception):
    """Base exception for content errors."""

    pass


class ConfigurationError(ContentError):
    """Raised when block handlers are misconfigured or a document refers to
    mutations that cannot be resolved."""

    def __init__(self, message: str, block_type: str | None = None):
        super().__init__(message)
        self.block_type = block_type


class ContractViolationError(ContentError, TypeError):
    """Raised when a block handler returns a value of the wrong kind."""

    def __init__(self, message: str, block_type: str | None = None):
        super().__init__(message)
        self.block_type = block_type


class PreconditionError(ContentError, AssertionError):
    """Raised when a required argument is missing."""

    pass


class ValidationError(ContentError):
    """Raised when input validation fails."""

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.field = field


class NotFoundError(ContentError):
    """Raised when a record is not found."""

    def __init__(self, resource_type: str, resource_id: str):
        message = f"{resource_type} with ID '{resource_id}' not found"
        super().__init__(message)
        self.resource_type = resource_type
        self.resource_id = resource_id


class DuplicateError(ContentError):
    """Raised when attempting to create a duplicate resource."""

    def __init__(self, resource_type: str, field: str, value: str):
        message = f"{resource_type} with {field} '{value}' already exists"
        super().__init__(message)
        self.resource_type = resource_type
        self.field = field
        self.value = value


class DatabaseError(ContentError):
    """Raised when a database operation fails."""

    def __init__(self, message: str, original_error: Exception | None = None):
        super().__init__(message)
        self.original_error = original_error
