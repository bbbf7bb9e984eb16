# ============================================================================
# ClassProfiler - Error Classes
#
# Purpose: Custom exception hierarchy for the package
# Inputs: Error messages and context
# Outputs: Structured exceptions
# Dependencies: None
# Usage: raise MethodNotFoundError("No method 'run' on Worker")
#
# Changelog:
#   2026-09-02: Initial error classes
#   2026-09-14: Added MethodNotFoundError (also an AttributeError)
# ============================================================================

from typing import Optional


class ClassProfilerError(Exception):
    """Base exception for all ClassProfiler errors."""

    def __init__(self, message: str, details: Optional[str] = None):
        """
        Initialize error.

        Args:
            message: Error message
            details: Optional detailed error information
        """
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        """String representation."""
        if self.details:
            return f"{self.message}\nDetails: {self.details}"
        return self.message


class ConfigurationError(ClassProfilerError):
    """Raised when instrumentation setup or configuration is invalid."""

    pass


class MethodNotFoundError(ConfigurationError, AttributeError):
    """Raised when wrapping a method name the target class does not define."""

    def __init__(self, cls: type, name: str):
        super().__init__(f"No method '{name}' on {cls.__qualname__}")
        self.cls = cls
        self.name = name


class SinkError(ClassProfilerError):
    """Raised when a sink fails to emit a message."""

    pass
