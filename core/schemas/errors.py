"""
Error Taxonomy
File: errors.py

Purpose: Standard error taxonomy for Merkle commitments and the
Proof-of-Reserve service. Defines both Pydantic models for structured
error communication and Python exceptions for control flow.

An empty item collection is deliberately absent from this taxonomy:
an empty tree has no root, which is a valid state, not a failure.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes."""

    # Lookup Errors
    NOT_FOUND = "NOT_FOUND"

    # Encoding Errors
    INVALID_ENCODING = "INVALID_ENCODING"

    # Configuration & Runtime Errors
    CONFIG_ERROR = "CONFIG_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


# =============================================================================
# Pydantic Error Models (Structured Communication)
# =============================================================================

class ReserveError(BaseModel):
    """
    Base error model for structured error communication.

    Used to pass errors across the service boundary without exceptions,
    e.g. when rendering an API error body.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=False,
        validate_assignment=True,
    )

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.NOT_FOUND],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional structured details about the error",
    )
    retryable: bool = Field(
        default=False,
        description="Whether the operation can be retried",
    )

    def to_exception(self) -> "ReserveException":
        """Convert this error model to a raised exception."""
        return ReserveException(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class ReserveException(Exception):
    """
    Base exception for all Proof-of-Reserve errors.

    Carries structured error information and can be converted to/from
    ReserveError models. Operations here are deterministic, so nothing
    is ever marked retryable by default.
    """

    def __init__(
        self,
        message: str,
        code: str = ErrorCodes.INTERNAL_ERROR,
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}
        self.retryable = retryable

    def to_error_model(self) -> ReserveError:
        """Convert this exception to a ReserveError model."""
        return ReserveError(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class ItemNotFoundException(ReserveException):
    """Raised when a proof is requested for an item absent from the tree."""

    def __init__(
        self,
        message: str = "Data not found in the Merkle tree",
        item: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if item is not None:
            full_details["item"] = item
        super().__init__(
            message=message,
            code=ErrorCodes.NOT_FOUND,
            details=full_details,
            retryable=False,
        )


class InvalidEncodingException(ReserveException):
    """Raised when a hex string cannot be decoded (odd length, bad characters)."""

    def __init__(
        self,
        message: str,
        value: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if value is not None:
            # Only a prefix, a malformed hash can be arbitrarily long
            full_details["value"] = value[:80]
        super().__init__(
            message=message,
            code=ErrorCodes.INVALID_ENCODING,
            details=full_details,
            retryable=False,
        )


class ConfigurationException(ReserveException):
    """Raised when runtime configuration or the account source is invalid."""

    def __init__(
        self,
        message: str,
        path: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if path:
            full_details["path"] = path
        super().__init__(
            message=message,
            code=ErrorCodes.CONFIG_ERROR,
            details=full_details,
            retryable=False,
        )


__all__ = [
    "ErrorCodes",
    "ReserveError",
    "ReserveException",
    "ItemNotFoundException",
    "InvalidEncodingException",
    "ConfigurationException",
]
