# test/test_exceptions.py
import pytest

from ssrtools.core import (
    CoreError,
    InvalidRecord,
    StructuralError,
    DimensionMismatch,
    InvalidFilter,
    ChannelNotFound,
)


def test_exception_inheritance_validation():
    assert issubclass(InvalidRecord, CoreError)
    assert issubclass(StructuralError, CoreError)
    assert issubclass(DimensionMismatch, CoreError)
    assert issubclass(InvalidFilter, CoreError)


def test_exception_inheritance_builtin_bases():
    assert issubclass(StructuralError, KeyError)
    assert issubclass(ChannelNotFound, KeyError)
    assert issubclass(ChannelNotFound, CoreError)
    assert issubclass(DimensionMismatch, ValueError)
    assert issubclass(InvalidFilter, ValueError)


def test_lookup_errors_can_be_raised_and_caught_as_keyerror():
    with pytest.raises(KeyError):
        raise ChannelNotFound("Cz")

    with pytest.raises(KeyError):
        raise StructuralError("missing key 'Index'")
