"""
Error types for the dynamic CRUD runtime.

Every error here is request-scoped: the caller corrects its input and retries.
The HTTP layer maps them to responses in ``exception_handlers``.
"""


class DynCrudError(Exception):
    """Base exception for all dyncrud runtime errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class NoSuchModelError(DynCrudError):
    """Raised when a model name has no registered schema."""

    def __init__(self, model_name: str):
        self.model_name = model_name
        super().__init__(f"No schema found for model '{model_name}'")


class ValidationFailedError(DynCrudError):
    """
    Raised when a payload does not satisfy its model's schema.

    ``errors`` is never empty; each entry describes one violation.
    """

    def __init__(self, errors: list[str], message: str = "Validation failed"):
        self.errors = list(errors)
        super().__init__(message)


class SchemaCompileError(ValidationFailedError):
    """
    Raised when a registered schema document is itself malformed.

    Carries the compiler's complaint as a one-element error list so callers
    handling ``ValidationFailedError`` see it the same way as a payload error.
    """

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__([detail])

    def __str__(self) -> str:
        return f"{self.message}: {self.detail}"


class RecordNotFoundError(DynCrudError):
    """Raised when an id does not exist within a model."""

    def __init__(self, model_name: str, record_id: str):
        self.model_name = model_name
        self.record_id = record_id
        super().__init__(f"Item with ID '{record_id}' not found in model '{model_name}'")
