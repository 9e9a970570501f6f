# test/test_reference.py
import logging

import numpy as np
import pytest

from ssrtools.core import Record, ChannelNotFound, DimensionMismatch
from ssrtools.processing import remove_template, rereference, reference_record


NAMES = ["C1", "C2", "C3"]


def _signals():
    return np.array([[0.0, 1.0, 2.0]]) * np.ones((5, 3))


def _expected(row):
    return np.array([row], dtype=float) * np.ones((5, 3))


def test_remove_template_broadcasts_over_columns():
    out = remove_template(_signals(), 2 * np.ones(5))
    assert np.array_equal(out, _expected([-2, -1, 0]))


def test_remove_template_rejects_wrong_length():
    with pytest.raises(DimensionMismatch):
        remove_template(_signals(), np.ones(4))


def test_reference_to_single_channel_index():
    out = rereference(_signals(), 3)
    assert np.array_equal(out, _expected([-2, -1, 0]))
    assert np.all(out[:, 2] == 0)


def test_reference_to_single_channel_name():
    out = rereference(_signals(), "C2", NAMES)
    assert np.array_equal(out, _expected([-1, 0, 1]))


def test_reference_to_group_of_channels():
    assert np.array_equal(rereference(_signals(), [1, 2, 3]), _expected([-1, 0, 1]))
    assert np.array_equal(rereference(_signals(), ["C2", "C1", "C3"], NAMES), _expected([-1, 0, 1]))


def test_reference_to_subset_matches_manual_mean():
    rng = np.random.default_rng(0)
    signals = rng.normal(size=(50, 4))
    out = rereference(signals, [1, 4])
    expected = signals - signals[:, [0, 3]].mean(axis=1, keepdims=True)
    assert np.allclose(out, expected)


@pytest.mark.parametrize("scheme", ["car", "average", "CAR"])
def test_common_average_equals_full_channel_list(scheme):
    rng = np.random.default_rng(1)
    signals = rng.normal(size=(20, 3))
    assert np.allclose(rereference(signals, scheme, NAMES), rereference(signals, [1, 2, 3]))
    assert np.allclose(rereference(signals, scheme), rereference(signals, NAMES, NAMES))


def test_reference_does_not_modify_input():
    signals = _signals()
    rereference(signals, 1)
    assert np.array_equal(signals, _signals())


def test_unknown_single_channel_raises():
    with pytest.raises(ChannelNotFound):
        rereference(_signals(), "C9", NAMES)
    with pytest.raises(ChannelNotFound):
        rereference(_signals(), 4)


def test_name_without_channel_names_raises():
    with pytest.raises(ValueError):
        rereference(_signals(), "C2")
    with pytest.raises(ValueError):
        rereference(_signals(), ["C2", 1])


def test_group_with_unknown_names_warns_and_uses_rest(caplog):
    with caplog.at_level(logging.WARNING):
        out = rereference(_signals(), ["C3", "C9"], NAMES)
    assert np.array_equal(out, _expected([-2, -1, 0]))
    assert "C9" in caplog.text


def test_group_resolving_to_nothing_raises():
    with pytest.raises(DimensionMismatch):
        rereference(_signals(), ["C8", "C9"], NAMES)


def test_channel_names_length_must_match():
    with pytest.raises(DimensionMismatch):
        rereference(_signals(), "car", ["C1", "C2"])


def test_reference_record_updates_data_and_reference_channel():
    rec = Record(data=_signals(), channel_names=NAMES, samplingrate=100, modulationrate=40)
    out = reference_record(rec, "car")

    assert out is rec
    assert np.array_equal(rec.data, _expected([-1, 0, 1]))
    assert rec.reference_channel == NAMES

    reference_record(rec, "C1")
    assert rec.reference_channel == ["C1"]
    assert np.array_equal(rec.data, _expected([0, 1, 2]))
