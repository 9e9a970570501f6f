# ssrtools/processing/reference.py
"""
Re-referencing of multichannel signals.

All functions take a samples x channels matrix. Channels are addressed by
1-based index, or by name when the matching channel name list is supplied.
The reference (a single channel, the mean of several, or the mean of all
channels for a common average) is subtracted from every column, including
the reference channels themselves.
"""
from __future__ import annotations

import logging
from numbers import Integral
from typing import Sequence

import numpy as np

from ..core.channels import ChannelSelector, channel_index, valid_channels
from ..core.exceptions import ChannelNotFound, DimensionMismatch
from ..core.record import Record

log = logging.getLogger(__name__)

COMMON_AVERAGE = ("car", "average")


def _as_matrix(signals: np.ndarray) -> np.ndarray:
    s = np.asarray(signals)
    if s.ndim != 2:
        raise DimensionMismatch(f"Signals must be 2D (samples x channels), got shape {s.shape}")
    return s


def remove_template(signals: np.ndarray, template: np.ndarray) -> np.ndarray:
    """Subtract the 1D `template` from every column of `signals`."""
    s = _as_matrix(signals)
    t = np.asarray(template)
    if t.ndim != 1 or t.shape[0] != s.shape[0]:
        raise DimensionMismatch(
            f"Template of shape {t.shape} does not match {s.shape[0]} samples."
        )
    return s - t[:, np.newaxis]


def reference_columns(
    n_channels: int,
    target: ChannelSelector,
    channel_names: Sequence[str] | None = None,
) -> list[int]:
    """
    1-based columns making up the reference for `target`.

    - "car" / "average": every channel
    - a single name or index: that channel (ChannelNotFound if it does not exist)
    - a list of names and/or indices: those channels; unknown entries are
      dropped with a warning, DimensionMismatch if none remain
    """
    if channel_names is not None and len(channel_names) != n_channels:
        raise DimensionMismatch(
            f"Got {len(channel_names)} channel names for {n_channels} channels."
        )

    if isinstance(target, str) and target.lower() in COMMON_AVERAGE:
        return list(range(1, n_channels + 1))

    if isinstance(target, str):
        if channel_names is None:
            raise ValueError(f"Referencing to channel '{target}' by name requires channel_names.")
        idx = channel_index(channel_names, target)
        if idx == 0:
            raise ChannelNotFound(target)
        return [idx]

    if isinstance(target, Integral) and not isinstance(target, bool):
        if not 1 <= target <= n_channels:
            raise ChannelNotFound(target)
        return [int(target)]

    targets = list(target)
    if channel_names is None:
        if any(isinstance(t, str) for t in targets):
            raise ValueError("Referencing to channels by name requires channel_names.")
        channel_names = [str(i) for i in range(1, n_channels + 1)]

    columns = valid_channels(channel_names, targets, "reference")
    if not columns:
        raise DimensionMismatch("None of the requested reference channels exist.")
    return columns


def rereference(
    signals: np.ndarray,
    target: ChannelSelector,
    channel_names: Sequence[str] | None = None,
) -> np.ndarray:
    """
    Re-reference `signals` to `target`.

    Example: with three channels C1..C3,
    rereference(signals, 3), rereference(signals, ["C1", "C2"], names) and
    rereference(signals, "car", names) are all valid.
    """
    s = _as_matrix(signals)
    columns = reference_columns(s.shape[1], target, channel_names)
    log.debug(f"Reference columns: {columns}")
    reference = s[:, [c - 1 for c in columns]].mean(axis=1)
    return remove_template(s, reference)


def reference_record(record: Record, target: ChannelSelector) -> Record:
    """
    Re-reference a Record's data in place and note the reference channels.

    Returns the same Record for chaining.
    """
    columns = reference_columns(record.n_channels, target, record.channel_names)
    names = [record.channel_names[c - 1] for c in columns]
    log.info(f"Referencing {record.n_channels} channels to {', '.join(names)}")

    reference = record.data[:, [c - 1 for c in columns]].mean(axis=1)
    record.data = remove_template(record.data, reference)
    record.reference_channel = names
    return record
