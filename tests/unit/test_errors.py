"""
Error Taxonomy Unit Tests
Tests for allowtree/schemas/errors.py
"""
import pytest
from pydantic import ValidationError

from allowtree.schemas.errors import (
    AllowTreeError,
    AllowTreeException,
    ConfigException,
    ErrorCodes,
    HexDecodingException,
    InvalidInputException,
    LeafIndexException,
    LeafNotFoundException,
    RootMismatchException,
)


class TestAllowTreeError:
    """Tests for the structured error model."""

    def test_defaults(self):
        err = AllowTreeError(code=ErrorCodes.INVALID_INPUT, message="bad")

        assert err.details == {}
        assert err.retryable is False

    def test_extra_fields_forbidden(self):
        with pytest.raises(ValidationError):
            AllowTreeError(code="X", message="y", unexpected=True)

    def test_to_exception(self):
        err = AllowTreeError(code=ErrorCodes.ROOT_MISMATCH, message="nope", details={"a": 1})
        exc = err.to_exception()

        assert isinstance(exc, AllowTreeException)
        assert exc.code == ErrorCodes.ROOT_MISMATCH
        assert exc.details == {"a": 1}


class TestExceptions:
    """Tests for the exception hierarchy."""

    def test_round_trip_to_model(self):
        exc = LeafIndexException("out of range", leaf_index=7, leaf_count=3)
        model = exc.to_error_model()

        assert model.code == ErrorCodes.LEAF_INDEX_OUT_OF_RANGE
        assert model.details == {"leaf_index": 7, "leaf_count": 3}
        assert model.message == "out of range"

    def test_builtin_compatibility(self):
        """Engine errors remain catchable by the matching builtin types."""
        assert issubclass(InvalidInputException, ValueError)
        assert issubclass(HexDecodingException, ValueError)
        assert issubclass(LeafIndexException, IndexError)
        assert issubclass(LeafNotFoundException, LookupError)
        assert issubclass(RootMismatchException, ValueError)

    def test_all_derive_from_base(self):
        for cls in (
            InvalidInputException,
            HexDecodingException,
            LeafIndexException,
            LeafNotFoundException,
            RootMismatchException,
            ConfigException,
        ):
            assert issubclass(cls, AllowTreeException)

    def test_repr(self):
        exc = LeafNotFoundException("missing", leaf_hash="0xab")

        assert repr(exc) == "LeafNotFoundException(code='LEAF_NOT_FOUND', message='missing')"
        assert exc.details == {"leaf_hash": "0xab"}

    def test_hex_value_truncated(self):
        exc = HexDecodingException("bad", value="0x" + "z" * 200)

        assert len(exc.details["value"]) == 80

    def test_root_mismatch_details(self):
        exc = RootMismatchException("wrong leaves", expected_root="0xaa", details={"position": 3})

        assert exc.code == ErrorCodes.ROOT_MISMATCH
        assert exc.details == {"position": 3, "expected_root": "0xaa"}
