"""Typed errors raised by the payroll engine.

Every engine component fails fast: invalid input and missing configuration
are raised before any amount is computed, so callers never see a partial
result.
"""

from typing import Any, Dict, Optional


class PayrollError(Exception):
    """Base class for payroll engine errors."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}

    def to_dict(self) -> Dict[str, Any]:
        """Error details for logging and MCP responses."""
        return {
            "error": type(self).__name__,
            "message": str(self),
            "context": self.context,
        }


class InvalidInputError(PayrollError, ValueError):
    """Raised when calculation input is rejected (negative hours, rates, etc.)."""

    def __init__(self, message: str, field: Optional[str] = None, context: Optional[Dict[str, Any]] = None):
        super().__init__(message, {**(context or {}), "field": field})
        self.field = field


class MissingConfigurationError(PayrollError):
    """Raised when no tax configuration or withholding table can be resolved."""
    pass
