"""Exceptions and error-code mapping for gql-bootstrap."""

from typing import Any

from .model import ErrorInfo


class BootstrapError(Exception):
    """Base exception for all gql-bootstrap errors."""
    pass


class ClassNotFoundError(BootstrapError, LookupError):
    """Raised when a class identifier is not known to the class registry."""

    def __init__(self, class_name: str):
        self.class_name = class_name
        super().__init__(f"Class not registered: {class_name}")


class BatchLoadError(BootstrapError):
    """Raised for every key of a batch whose results could not be aligned."""

    def __init__(self, loader_name: str, message: str):
        self.loader_name = loader_name
        super().__init__(f"Batch loader '{loader_name}' failed: {message}")


class ExecutionError(BootstrapError):
    """Raised when a GraphQL execution returns errors."""

    def __init__(self, message: str, errors: list[dict[str, Any]]):
        self.message = message
        self.errors = errors
        super().__init__(message)


class ErrorInfoMap:
    """Maps exception classes to the error codes declared in the model.

    Lookups walk the exception's MRO, so a code declared for a base class
    applies to its subclasses.
    """

    def __init__(self, errors: dict[str, ErrorInfo] | None = None):
        self._codes: dict[str, str] = {}
        if errors:
            self.register(errors)

    def register(self, errors: dict[str, ErrorInfo]):
        for error_info in errors.values():
            self._codes[error_info.class_name] = error_info.error_code

    def get_error_code(self, exception: BaseException | None) -> str | None:
        """Return the declared code for an exception, or None."""
        if exception is None:
            return None
        for cls in type(exception).__mro__:
            code = self._codes.get(f"{cls.__module__}.{cls.__qualname__}")
            if code is None:
                code = self._codes.get(cls.__qualname__)
            if code is not None:
                return code
        return None

    def __len__(self) -> int:
        return len(self._codes)
