"""
Formatter errors.

Every failure the formatter surfaces to its caller derives from
``ClefFormatterError``. Each subclass also derives from the closest builtin so
callers that only know the builtin hierarchy still catch it.
"""

from typing import Any


class ClefFormatterError(Exception):
    
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message
    
    def __str__(self) -> str:
        return self.message


class InvalidRecordError(ClefFormatterError, TypeError):
    """Record field value has the wrong shape."""
    
    def __init__(self, fieldName: str, value: Any, expected: str = 'Mapping'):
        self.fieldName = fieldName
        super().__init__(
            f"{expected} expected for {fieldName}, got {type(value).__name__}"
        )


class UnknownLevelError(ClefFormatterError, ValueError):
    """Level code outside the fixed severity table."""
    
    def __init__(self, code: Any):
        self.code = code
        super().__init__(f"Unknown log level code: {code!r}")


class UnknownFieldError(ClefFormatterError, KeyError):
    """Record field with no registered handler."""
    
    def __init__(self, fieldName: str):
        self.fieldName = fieldName
        super().__init__(f"No handler registered for record field: {fieldName}")


class WrongCodePathError(ClefFormatterError, RuntimeError):
    
    def __init__(self):
        super().__init__('Wrong code path!')
