# ssrtools/core/exceptions.py
from __future__ import annotations


class CoreError(Exception):
    """Base error for all core-domain exceptions."""


# ---- Construction / validation errors ----
class InvalidRecord(CoreError):
    """Raised when a Record is constructed with inconsistent fields."""


class StructuralError(CoreError, KeyError):
    """Raised when an event table is missing keys, has extra keys or misaligned columns."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else ""


class DimensionMismatch(CoreError, ValueError):
    """Raised when array shapes disagree or a selection resolves to no channels."""


class InvalidFilter(CoreError, ValueError):
    """Raised when a filter response, design method or order is invalid."""


# ---- Lookup errors (also behave like KeyError for dict-like APIs) ----
class ChannelNotFound(CoreError, KeyError):
    """Raised when a requested channel name or index is not present."""
