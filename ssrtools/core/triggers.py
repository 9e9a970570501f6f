# ssrtools/core/triggers.py
"""
Event table validation and trimming.

An event table (triggers or system codes) is a mapping with exactly the keys
``Index`` (1-based sample positions), ``Duration`` and ``Code``, all of the
same length. Rows are aligned across the three columns.
"""
from __future__ import annotations

import logging
from typing import Any, Mapping

import numpy as np

from .exceptions import DimensionMismatch, StructuralError

log = logging.getLogger(__name__)


INDEX = "Index"
DURATION = "Duration"
CODE = "Code"

EVENT_KEYS = (INDEX, DURATION, CODE)


def validate_triggers(table: Mapping[str, Any]) -> None:
    """
    Check the structure of an event table without modifying it.

    Raises StructuralError if a required key is missing, an unexpected key is
    present, or the three columns differ in length.
    """
    if not isinstance(table, Mapping):
        raise StructuralError("Event table must be a mapping.")

    for key in EVENT_KEYS:
        if key not in table:
            raise StructuralError(f"Event table is missing key '{key}'.")
    for key in table:
        if key not in EVENT_KEYS:
            raise StructuralError(f"Event table has unexpected key '{key}'.")

    lengths = {key: len(table[key]) for key in EVENT_KEYS}
    if len(set(lengths.values())) != 1:
        raise StructuralError(f"Event table length mismatch: {lengths}.")


def empty_events() -> dict[str, np.ndarray]:
    return {
        INDEX: np.zeros(0, dtype=np.int64),
        DURATION: np.zeros(0, dtype=np.int64),
        CODE: np.zeros(0, dtype=np.int64),
    }


def _event_column(table: Mapping[str, Any], key: str, integral: bool) -> np.ndarray:
    try:
        col = np.array(table[key])
    except ValueError as e:
        raise StructuralError(f"Event column '{key}' is not a flat sequence: {e}") from e
    if col.ndim != 1:
        raise StructuralError(f"Event column '{key}' must be 1D, got shape {col.shape}.")
    if not integral or col.size == 0:
        return col.astype(np.int64) if integral else col

    if np.issubdtype(col.dtype, np.integer) and not np.issubdtype(col.dtype, np.bool_):
        return col.astype(np.int64)
    if np.issubdtype(col.dtype, np.floating) and np.all(np.isfinite(col)) and np.all(col == np.round(col)):
        return col.astype(np.int64)
    raise StructuralError(f"Event column '{key}' must hold whole numbers, got {col.tolist()}.")


def normalize_events(table: Mapping[str, Any]) -> dict[str, np.ndarray]:
    """Validate `table` and return a fresh dict of 1D numpy columns."""
    validate_triggers(table)
    return {
        INDEX: _event_column(table, INDEX, integral=True),
        DURATION: _event_column(table, DURATION, integral=True),
        CODE: _event_column(table, CODE, integral=False),
    }


def trim_events(table: Mapping[str, Any], stop: int, start: int = 1) -> dict[str, np.ndarray]:
    """
    Re-base an event table onto the sample window [start, stop] (1-based, inclusive).

    Every Index is shifted by (start - 1); rows that land outside
    [1, stop - start + 1] are dropped from all three columns together.
    """
    if start < 1 or stop < start:
        raise DimensionMismatch(f"Invalid trim window [{start}, {stop}].")

    events = normalize_events(table)
    shifted = events[INDEX] - (start - 1)
    keep = (shifted >= 1) & (shifted <= stop - start + 1)

    dropped = int(keep.size - np.count_nonzero(keep))
    if dropped:
        log.debug(f"Dropping {dropped} event(s) outside samples {start}..{stop}")

    return {
        INDEX: shifted[keep],
        DURATION: events[DURATION][keep],
        CODE: events[CODE][keep],
    }
