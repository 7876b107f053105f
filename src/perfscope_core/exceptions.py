"""
Exception hierarchy for Perfscope.

The monitor never raises during normal operation; failures inside measured
operations are re-raised unchanged. These types cover construction-time
misconfiguration only.

Author: Goncharenko Anton aka alienxs2
License: MIT
"""

from typing import Any, Dict, Optional


class PerfscopeError(Exception):
    """
    Base exception for all Perfscope errors.

    Attributes:
        message: Human-readable error message
        error_code: Programmatic error code (e.g., "CFG_001")
        details: Additional context (dict)

    Example:
        raise PerfscopeError(
            message="Operation failed",
            error_code="ERR_UNKNOWN",
            details={"param": "value"},
        )
    """

    def __init__(
        self,
        message: str,
        error_code: str = "ERR_UNKNOWN",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert exception to dictionary for logging/serialization.

        Returns:
            Dictionary with all error information
        """
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code,
            "details": self.details,
        }


class ConfigurationError(PerfscopeError):
    """
    Raised when a monitor is constructed with invalid thresholds or capacities.

    Error Codes:
        CFG_001: Value out of range
    """

    def __init__(self, message: str, error_code: str = "CFG_001", **kwargs):
        super().__init__(message=message, error_code=error_code, **kwargs)
