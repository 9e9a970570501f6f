"""
Signal conditioning for ssrtools.

- reference: template removal and re-referencing (single channel, channel set, common average)
- filtering: window-method FIR design and causal / zero-phase application
"""

from .reference import remove_template, rereference, reference_columns, reference_record
from .filtering import (
    ResponseType,
    Lowpass,
    Highpass,
    Bandpass,
    Bandstop,
    FIRWindow,
    FIRFilter,
    default_filter_order,
    design_filter,
    apply_filter,
    filter_record,
)


__all__ = [
    # referencing
    "remove_template",
    "rereference",
    "reference_columns",
    "reference_record",

    # filtering
    "ResponseType",
    "Lowpass",
    "Highpass",
    "Bandpass",
    "Bandstop",
    "FIRWindow",
    "FIRFilter",
    "default_filter_order",
    "design_filter",
    "apply_filter",
    "filter_record",
]
