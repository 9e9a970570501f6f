"""
Core domain objects for ssrtools.

This module defines the in-memory recording model:
- Record: samples x channels data, channel names, event tables, rates and metadata
- validate_triggers / trim_events: event table integrity
- add/remove/keep/merge/trim channel operations returning new Records

Reading recordings from disk and extracting epochs happen outside this layer.
"""

from .record import Record
from .metadata import StimulusInfo, PROCESSING_KEYS
from .triggers import EVENT_KEYS, validate_triggers, trim_events
from .channels import (
    channel_index,
    resolve_channels,
    add_channel,
    remove_channel,
    keep_channel,
    merge_channels,
    trim_channel,
)
from .stimulus import assr_frequency
from .exceptions import (
    CoreError,
    InvalidRecord,
    StructuralError,
    DimensionMismatch,
    InvalidFilter,
    ChannelNotFound,
)


__all__ = [
    # record
    "Record",

    # metadata
    "StimulusInfo",
    "PROCESSING_KEYS",

    # event tables
    "EVENT_KEYS",
    "validate_triggers",
    "trim_events",

    # channel management
    "channel_index",
    "resolve_channels",
    "add_channel",
    "remove_channel",
    "keep_channel",
    "merge_channels",
    "trim_channel",

    # stimulus
    "assr_frequency",

    # exceptions
    "CoreError",
    "InvalidRecord",
    "StructuralError",
    "DimensionMismatch",
    "InvalidFilter",
    "ChannelNotFound",
]
