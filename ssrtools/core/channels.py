# ssrtools/core/channels.py
"""
Channel management for Records.

Channels are addressed by name or by 1-based column index. Name lookup is
first-match; names that do not resolve map to index 0 and are dropped from
the working selection with a warning, so the operation proceeds on the
channels that do exist.
"""
from __future__ import annotations

import logging
from numbers import Integral
from typing import Iterable, Sequence, Union

import numpy as np

from .exceptions import DimensionMismatch
from .record import Record
from .triggers import trim_events

log = logging.getLogger(__name__)

ChannelSelector = Union[str, int, Iterable[Union[str, int]]]


def channel_index(channel_names: Sequence[str], name: str) -> int:
    """1-based position of the first channel called `name`, or 0 if absent."""
    for i, candidate in enumerate(channel_names, start=1):
        if candidate == name:
            return i
    return 0


def resolve_channels(channel_names: Sequence[str], selector: ChannelSelector) -> list[int]:
    """
    Resolve a selector to 1-based channel indices.

    Accepts a name, an index, or an iterable mixing both. Names are looked up
    with `channel_index` (0 when unresolved); indices pass through unchanged.
    """
    if isinstance(selector, (str, Integral)):
        selector = [selector]

    resolved: list[int] = []
    for item in selector:
        if isinstance(item, str):
            resolved.append(channel_index(channel_names, item))
        elif isinstance(item, Integral) and not isinstance(item, bool):
            resolved.append(int(item))
        else:
            raise TypeError(f"Channel selector items must be str or int, got {type(item).__name__}.")
    return resolved


def valid_channels(channel_names: Sequence[str], selector: ChannelSelector, action: str) -> list[int]:
    """Resolve `selector`, warn about entries that match no channel and return the rest."""
    items = [selector] if isinstance(selector, (str, Integral)) else list(selector)
    resolved = resolve_channels(channel_names, items)

    n = len(channel_names)
    valid: list[int] = []
    missing: list[str] = []
    for item, idx in zip(items, resolved):
        if 1 <= idx <= n:
            valid.append(idx)
        else:
            missing.append(str(item))

    if missing:
        log.warning(f"Could not {action} as these channels don't exist: {', '.join(missing)}")
    log.debug(f"Resolved channels for {action}: {valid}")
    return valid


def add_channel(record: Record, column: np.ndarray, name: str) -> Record:
    """Return a new Record with `column` appended as the last channel, named `name`."""
    col = np.asarray(column)
    if col.ndim == 2 and col.shape[1] == 1:
        col = col[:, 0]
    if col.ndim != 1:
        raise DimensionMismatch(f"New channel must be a single column, got shape {col.shape}")
    if col.shape[0] != record.n_samples:
        raise DimensionMismatch(
            f"New channel has {col.shape[0]} samples but the record has {record.n_samples}."
        )

    log.info(f"Adding channel {name}")
    return record.evolve(
        data=np.column_stack([record.data, col]),
        channel_names=[*record.channel_names, name],
    )


def remove_channel(record: Record, selector: ChannelSelector) -> Record:
    """
    Return a new Record without the selected channels.

    Unresolved names and out-of-range indices are skipped with a warning; if
    nothing valid remains the result is an unchanged copy. Removing every
    channel is allowed.
    """
    to_remove = valid_channels(record.channel_names, selector, "remove")
    if not to_remove:
        return record.copy()

    keep = list(range(1, record.n_channels + 1))
    for c in sorted(set(to_remove), reverse=True):
        del keep[c - 1]

    log.info(f"Removing channel(s) {', '.join(record.channel_names[c - 1] for c in sorted(set(to_remove)))}")
    columns = [c - 1 for c in keep]
    return record.evolve(
        data=record.data[:, columns],
        channel_names=[record.channel_names[c] for c in columns],
    )


def keep_channel(record: Record, selector: ChannelSelector) -> Record:
    """
    Return a new Record holding only the selected channels, in their original order.

    Raises DimensionMismatch if the selector resolves to no existing channel.
    """
    to_keep = set(valid_channels(record.channel_names, selector, "keep"))
    if not to_keep:
        raise DimensionMismatch("None of the requested channels exist; refusing to remove all channels.")

    log.info(f"Keeping channel(s) {', '.join(record.channel_names[c - 1] for c in sorted(to_keep))}")
    return remove_channel(record, [c for c in range(1, record.n_channels + 1) if c not in to_keep])


def merge_channels(record: Record, selector: ChannelSelector, new_name: str) -> Record:
    """
    Return a new Record with the row-wise mean of the selected channels appended as `new_name`.

    Example: merge_channels(rec, ["P6", "P8"], "P68")
    """
    log.debug(f"Total origin channels: {record.n_channels}")
    to_merge = valid_channels(record.channel_names, selector, "merge")
    if not to_merge:
        raise DimensionMismatch("None of the requested channels exist; nothing to merge.")

    log.info(f"Merging channels {', '.join(record.channel_names[c - 1] for c in to_merge)}")
    merged = record.data[:, [c - 1 for c in to_merge]].mean(axis=1)
    return add_channel(record, merged, new_name)


def trim_channel(record: Record, stop: int, start: int = 1) -> Record:
    """
    Return a new Record holding samples start..stop (1-based, inclusive).

    Event indices in both triggers and system codes are re-based onto the new
    window; events that fall outside it are dropped.

    Example: trim_channel(rec, 8192 * 300, start=8192)
    """
    if not 1 <= start <= stop <= record.n_samples:
        raise DimensionMismatch(
            f"Trim window [{start}, {stop}] is outside the record (1..{record.n_samples})."
        )

    log.info(f"Trimming {record.n_channels} channels between {start} and {stop}")
    return record.evolve(
        data=record.data[start - 1:stop, :].copy(),
        triggers=trim_events(record.triggers, stop, start=start),
        system_codes=trim_events(record.system_codes, stop, start=start),
    )
