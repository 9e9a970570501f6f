# ssrtools/processing/filtering.py
"""
Window-method FIR filter design and application.

A filter is designed once with `design_filter` and the resulting FIRFilter
can be applied to any number of signals or Records. Application is either a
single causal pass (`filtfilt=False`, delays the signal by order/2 samples)
or a forward-backward pass (`filtfilt=True`, zero phase, squared magnitude
response).

Default orders follow the window-method rule of thumb
order = factor * samplingrate / transition_bandwidth, with the transition
bandwidth derived from the cutoffs:
  - low edge (high-pass):  min(max(0.25 * f, 2 Hz), f)
  - high edge (low-pass):  min(max(0.25 * f, 2 Hz), nyquist - f)
and rounded up to an even order, so the filter has an odd number of taps
and a whole-sample group delay.
"""
from __future__ import annotations

import logging
import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, field

import numpy as np
from scipy import signal

from ..core.exceptions import DimensionMismatch, InvalidFilter
from ..core.record import Record

log = logging.getLogger(__name__)


# Transition bandwidth factor (in units of samplingrate / order) per window.
WINDOW_FACTORS = {
    "hann": 3.1,
    "hamming": 3.3,
    "blackman": 5.0,
}

MIN_TRANSITION_HZ = 2.0


def _low_edge_transition(freq: float) -> float:
    return min(max(0.25 * freq, MIN_TRANSITION_HZ), freq)


def _high_edge_transition(freq: float, nyquist: float) -> float:
    return min(max(0.25 * freq, MIN_TRANSITION_HZ), nyquist - freq)


def _positive(value: float, label: str) -> float:
    v = float(value)
    if not math.isfinite(v) or v <= 0:
        raise InvalidFilter(f"{label} must be positive and finite, got {value}.")
    return v


class ResponseType(ABC):
    """Abstract base for the frequency responses a FIR filter can be designed for."""

    __slots__ = ()

    pass_zero = ""
    odd_taps_only = False

    @property
    @abstractmethod
    def cutoff(self) -> float | tuple[float, float]: ...

    def edges(self) -> tuple[float, ...]:
        c = self.cutoff
        return c if isinstance(c, tuple) else (c,)

    @abstractmethod
    def transition_bandwidth(self, samplingrate: float) -> float: ...

    def check(self, samplingrate: float) -> None:
        nyquist = samplingrate / 2
        for f in self.edges():
            if f >= nyquist:
                raise InvalidFilter(
                    f"Cutoff {f} Hz must be below the Nyquist frequency ({nyquist} Hz)."
                )


@dataclass(frozen=True, slots=True)
class Lowpass(ResponseType):
    freq: float

    pass_zero = "lowpass"

    def __post_init__(self) -> None:
        object.__setattr__(self, "freq", _positive(self.freq, "Lowpass.freq"))

    @property
    def cutoff(self) -> float:
        return self.freq

    def transition_bandwidth(self, samplingrate: float) -> float:
        return _high_edge_transition(self.freq, samplingrate / 2)


@dataclass(frozen=True, slots=True)
class Highpass(ResponseType):
    freq: float

    pass_zero = "highpass"
    odd_taps_only = True

    def __post_init__(self) -> None:
        object.__setattr__(self, "freq", _positive(self.freq, "Highpass.freq"))

    @property
    def cutoff(self) -> float:
        return self.freq

    def transition_bandwidth(self, samplingrate: float) -> float:
        return _low_edge_transition(self.freq)


@dataclass(frozen=True, slots=True)
class Bandpass(ResponseType):
    low: float
    high: float

    pass_zero = "bandpass"

    def __post_init__(self) -> None:
        low = _positive(self.low, "Bandpass.low")
        high = _positive(self.high, "Bandpass.high")
        if low >= high:
            raise InvalidFilter(f"Bandpass.low ({low}) must be < Bandpass.high ({high}).")
        object.__setattr__(self, "low", low)
        object.__setattr__(self, "high", high)

    @property
    def cutoff(self) -> tuple[float, float]:
        return (self.low, self.high)

    def transition_bandwidth(self, samplingrate: float) -> float:
        return min(
            _low_edge_transition(self.low),
            _high_edge_transition(self.high, samplingrate / 2),
        )


@dataclass(frozen=True, slots=True)
class Bandstop(ResponseType):
    low: float
    high: float

    pass_zero = "bandstop"
    odd_taps_only = True

    def __post_init__(self) -> None:
        low = _positive(self.low, "Bandstop.low")
        high = _positive(self.high, "Bandstop.high")
        if low >= high:
            raise InvalidFilter(f"Bandstop.low ({low}) must be < Bandstop.high ({high}).")
        object.__setattr__(self, "low", low)
        object.__setattr__(self, "high", high)

    @property
    def cutoff(self) -> tuple[float, float]:
        return (self.low, self.high)

    def transition_bandwidth(self, samplingrate: float) -> float:
        return min(
            _low_edge_transition(self.low),
            _high_edge_transition(self.high, samplingrate / 2),
        )


@dataclass(frozen=True, slots=True)
class FIRWindow:
    """
    Window-method design settings.

    window: any window name scipy.signal.firwin accepts
    order: filter order (taps - 1); None picks default_filter_order
    """
    window: str = "hamming"
    order: int | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.window, str) or not self.window.strip():
            raise InvalidFilter("FIRWindow.window must be a non-empty string.")
        if self.order is not None:
            if isinstance(self.order, bool) or not isinstance(self.order, (int, np.integer)):
                raise InvalidFilter("FIRWindow.order must be an integer.")
            if self.order < 1:
                raise InvalidFilter(f"FIRWindow.order must be >= 1, got {self.order}.")


@dataclass(frozen=True, slots=True, eq=False)
class FIRFilter:
    """A designed FIR filter; owned by the caller and reusable across signals."""
    coefficients: np.ndarray = field(repr=False)
    samplingrate: float
    response: ResponseType
    window: str

    @property
    def order(self) -> int:
        return int(self.coefficients.size - 1)


def default_filter_order(
    response: ResponseType,
    samplingrate: float,
    window: str = "hamming",
) -> int:
    """
    Even FIR order for `response` at `samplingrate` using `window`.

    Example: default_filter_order(Highpass(2), 10.0) -> 18
    """
    fs = _positive(samplingrate, "samplingrate")
    try:
        factor = WINDOW_FACTORS[window]
    except KeyError as e:
        raise InvalidFilter(
            f"No default order for window '{window}'; choose one of {sorted(WINDOW_FACTORS)} "
            "or set FIRWindow.order."
        ) from e

    response.check(fs)
    transition = response.transition_bandwidth(fs)
    if transition <= 0:
        raise InvalidFilter(f"Transition bandwidth for {response} is not positive.")

    order = math.ceil(factor * fs / transition)
    order += order % 2
    log.debug(f"Default {window} order for {response} at {fs} Hz: {order} (transition {transition} Hz)")
    return int(order)


def design_filter(
    response: ResponseType,
    samplingrate: float,
    design: FIRWindow | None = None,
) -> FIRFilter:
    if not isinstance(response, ResponseType):
        raise InvalidFilter(f"Unsupported response type: {type(response).__name__}")
    design = design if design is not None else FIRWindow()
    fs = _positive(samplingrate, "samplingrate")
    response.check(fs)

    order = design.order if design.order is not None else default_filter_order(response, fs, design.window)
    if response.odd_taps_only and order % 2:
        raise InvalidFilter(f"{type(response).__name__} filters need an even order, got {order}.")

    try:
        taps = signal.firwin(order + 1, response.cutoff, pass_zero=response.pass_zero, window=design.window, fs=fs)
    except ValueError as e:
        raise InvalidFilter(str(e)) from e

    log.debug(f"Designed {design.window} FIR filter of order {order} for {response} at {fs} Hz")
    return FIRFilter(coefficients=taps, samplingrate=fs, response=response, window=design.window)


def _filter_array(x: np.ndarray, fir: FIRFilter, filtfilt: bool) -> np.ndarray:
    b = fir.coefficients
    if filtfilt:
        padlen = 3 * b.size
        if x.shape[0] <= padlen:
            raise DimensionMismatch(
                f"Zero-phase filtering with {b.size} taps needs more than {padlen} samples, got {x.shape[0]}."
            )
        return signal.filtfilt(b, [1.0], x, axis=0, padlen=padlen)
    return signal.lfilter(b, [1.0], x, axis=0)


def apply_filter(target, fir: FIRFilter, *, filtfilt: bool = True):
    """
    Filter a signal (1D, or samples x channels) or a Record with `fir`.

    Arrays are filtered along the sample axis and a new array is returned.
    A Record has every channel filtered and its data replaced in place;
    the same Record is returned.
    """
    if isinstance(target, Record):
        if not math.isclose(target.get_samplingrate(), fir.samplingrate):
            log.warning(
                f"Filter designed for {fir.samplingrate} Hz applied to a record sampled at {target.samplingrate} Hz"
            )
        log.info(
            f"Filtering {target.n_channels} channels with order {fir.order} {fir.response} "
            f"({'zero phase' if filtfilt else 'causal'})"
        )
        target.data = _filter_array(target.data, fir, filtfilt)
        return target

    return _filter_array(np.asarray(target, dtype=float), fir, filtfilt)


def filter_record(
    record: Record,
    response: ResponseType,
    design: FIRWindow | None = None,
    *,
    filtfilt: bool = True,
) -> Record:
    """Design a filter for `record`'s sampling rate and apply it in place."""
    fir = design_filter(response, record.get_samplingrate(), design)
    return apply_filter(record, fir, filtfilt=filtfilt)
