"""
Schemas
File: errors.py

Purpose: Standard error taxonomy for the allow-list Merkle engine.
Defines both Pydantic models for structured error communication
and Python exceptions for control flow.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes used across the engine and CLI."""

    # Input Errors
    INVALID_INPUT = "INVALID_INPUT"
    HEX_DECODING_ERROR = "HEX_DECODING_ERROR"

    # Lookup Errors
    LEAF_INDEX_OUT_OF_RANGE = "LEAF_INDEX_OUT_OF_RANGE"
    LEAF_NOT_FOUND = "LEAF_NOT_FOUND"

    # Commitment Errors
    ROOT_MISMATCH = "ROOT_MISMATCH"

    # Configuration Errors
    CONFIG_ERROR = "CONFIG_ERROR"


# =============================================================================
# Pydantic Error Models (Structured Communication)
# =============================================================================

class AllowTreeError(BaseModel):
    """
    Base error model for structured error communication.

    Collaborators (API layer, storage layer) use this model to pass
    engine errors around without exceptions and to serialize them.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=False,
        validate_assignment=True,
    )

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.INVALID_INPUT],
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

    def to_exception(self) -> "AllowTreeException":
        """Convert this error model to a raised exception."""
        return AllowTreeException(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class AllowTreeException(Exception):
    """
    Base exception for all allowtree errors.

    This exception carries structured error information and can be
    converted to/from AllowTreeError models.
    """

    def __init__(
        self,
        message: str,
        code: str = "ALLOWTREE_ERROR",
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}
        self.retryable = retryable

    def to_error_model(self) -> AllowTreeError:
        """Convert this exception to an AllowTreeError model."""
        return AllowTreeError(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class InvalidInputException(AllowTreeException, ValueError):
    """Exception raised when an engine precondition is violated."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
        code: str = ErrorCodes.INVALID_INPUT,
    ) -> None:
        super().__init__(
            message=message,
            code=code,
            details=details,
            retryable=False,
        )


class HexDecodingException(InvalidInputException):
    """Exception raised when a hex string cannot be decoded."""

    def __init__(
        self,
        message: str,
        value: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if value is not None:
            full_details["value"] = value[:80]
        super().__init__(
            message=message,
            details=full_details,
            code=ErrorCodes.HEX_DECODING_ERROR,
        )


class LeafIndexException(InvalidInputException, IndexError):
    """Exception raised when a leaf position is outside level 0."""

    def __init__(
        self,
        message: str,
        leaf_index: int | None = None,
        leaf_count: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if leaf_index is not None:
            full_details["leaf_index"] = leaf_index
        if leaf_count is not None:
            full_details["leaf_count"] = leaf_count
        super().__init__(
            message=message,
            details=full_details,
            code=ErrorCodes.LEAF_INDEX_OUT_OF_RANGE,
        )


class LeafNotFoundException(AllowTreeException, LookupError):
    """Exception raised when a proof is requested for a leaf not in the tree."""

    def __init__(
        self,
        message: str,
        leaf_hash: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if leaf_hash:
            full_details["leaf_hash"] = leaf_hash
        super().__init__(
            message=message,
            code=ErrorCodes.LEAF_NOT_FOUND,
            details=full_details,
            retryable=False,
        )


class RootMismatchException(InvalidInputException):
    """Exception raised when leaves do not rebuild the root they are paired with."""

    def __init__(
        self,
        message: str,
        expected_root: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if expected_root:
            full_details["expected_root"] = expected_root
        super().__init__(
            message=message,
            details=full_details,
            code=ErrorCodes.ROOT_MISMATCH,
        )


class ConfigException(AllowTreeException):
    """Exception raised when runtime configuration is invalid."""

    def __init__(
        self,
        message: str,
        key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if key:
            full_details["key"] = key
        super().__init__(
            message=message,
            code=ErrorCodes.CONFIG_ERROR,
            details=full_details,
            retryable=False,
        )
