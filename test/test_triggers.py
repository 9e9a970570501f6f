# test/test_triggers.py
import numpy as np
import pytest

from ssrtools.core import validate_triggers, trim_events, StructuralError, DimensionMismatch


def _table():
    return {
        "Index": [10, 20, 30, 40, 50],
        "Duration": [1, 1, 2, 2, 1],
        "Code": [252, 253, 252, 253, 252],
    }


def test_valid_table_passes_and_is_not_modified():
    t = _table()
    validate_triggers(t)
    assert t == _table()


@pytest.mark.parametrize("key", ["Index", "Duration", "Code"])
def test_missing_key_raises(key):
    t = _table()
    del t[key]
    with pytest.raises(StructuralError, match=key):
        validate_triggers(t)


def test_unexpected_key_raises_and_is_a_keyerror():
    t = _table()
    t["test"] = [1]
    with pytest.raises(KeyError, match="test"):
        validate_triggers(t)


@pytest.mark.parametrize("key", ["Index", "Duration", "Code"])
def test_truncated_column_raises_length_mismatch(key):
    t = _table()
    t[key] = t[key][:4]
    with pytest.raises(StructuralError, match="length mismatch"):
        validate_triggers(t)


def test_non_mapping_rejected():
    with pytest.raises(StructuralError):
        validate_triggers([1, 2, 3])  # type: ignore[arg-type]


def test_trim_events_rebases_and_drops_outside_window():
    out = trim_events(_table(), 35, start=11)
    # window is samples 11..35 -> 25 samples; indices shift by 10
    assert np.array_equal(out["Index"], [10, 20])
    assert np.array_equal(out["Duration"], [1, 2])
    assert np.array_equal(out["Code"], [253, 252])


def test_trim_events_keeps_window_edges():
    out = trim_events(_table(), 50, start=10)
    assert np.array_equal(out["Index"], [1, 11, 21, 31, 41])


def test_trim_events_does_not_touch_input():
    t = _table()
    trim_events(t, 20)
    assert t == _table()


def test_trim_events_rejects_bad_window():
    with pytest.raises(DimensionMismatch):
        trim_events(_table(), 5, start=10)
    with pytest.raises(DimensionMismatch):
        trim_events(_table(), 5, start=0)


def test_structural_error_message_reads_cleanly():
    t = _table()
    del t["Duration"]
    with pytest.raises(StructuralError) as info:
        validate_triggers(t)
    assert str(info.value) == "Event table is missing key 'Duration'."
