# ssrtools/core/record.py
from __future__ import annotations

import copy
import math
from dataclasses import dataclass, field
from numbers import Real
from typing import Any, Callable

import numpy as np

from .exceptions import InvalidRecord
from .metadata import StimulusInfo
from .triggers import empty_events, normalize_events


def _positive_rate(value: Any, label: str) -> float:
    if isinstance(value, bool) or not isinstance(value, Real):
        raise InvalidRecord(f"Record.{label} must be a real number, got {type(value).__name__}.")
    if not math.isfinite(float(value)) or value <= 0:
        raise InvalidRecord(f"Record.{label} must be positive and finite, got {value}.")
    return value


@dataclass(slots=True)
class Record:
    """
    Steady-state response recording held in memory.

    - data: samples x channels matrix
    - channel_names: one name per data column, same order
    - triggers / system_codes: event tables with Index, Duration and Code
    - samplingrate: sampling rate of `data` (Hz)
    - modulationrate: modulation rate of the stimulus (Hz)
    - reference_channel: channel names the data is currently referenced to
    - file_path / file_name: where the loader read the recording from
    - processing: analysis results and stimulus description (see metadata.PROCESSING_KEYS)
    - header: loader-supplied information, opaque here

    A Record is built once by a loader. Channel operations return new Records;
    signal conditioning replaces `data` in place.
    """
    data: np.ndarray = field(repr=False)
    channel_names: list[str]
    samplingrate: float
    modulationrate: float
    triggers: dict[str, np.ndarray] = field(default_factory=empty_events, repr=False)
    system_codes: dict[str, np.ndarray] = field(default_factory=empty_events, repr=False)
    reference_channel: list[str] = field(default_factory=list)
    file_path: str = ""
    file_name: str = ""
    processing: dict[str, Any] = field(default_factory=dict, repr=False)
    header: dict[str, Any] = field(default_factory=dict, repr=False)

    def __post_init__(self) -> None:
        d = np.asarray(self.data)
        if d.ndim == 1:
            d = d.reshape(-1, 1)
        if d.ndim != 2:
            raise InvalidRecord(f"Record.data must be 2D (samples x channels), got shape {d.shape}")
        self.data = d

        names = [self.channel_names] if isinstance(self.channel_names, str) else list(self.channel_names)
        if not all(isinstance(n, str) for n in names):
            raise InvalidRecord("Record.channel_names must contain strings only.")
        if len(names) != d.shape[1]:
            raise InvalidRecord(
                f"Record has {d.shape[1]} data columns but {len(names)} channel names."
            )
        self.channel_names = names

        self.triggers = normalize_events(self.triggers)
        self.system_codes = normalize_events(self.system_codes)

        self.samplingrate = _positive_rate(self.samplingrate, "samplingrate")
        self.modulationrate = _positive_rate(self.modulationrate, "modulationrate")

        if isinstance(self.reference_channel, str):
            self.reference_channel = [self.reference_channel]
        else:
            self.reference_channel = list(self.reference_channel or [])

        for label in ("processing", "header"):
            value = getattr(self, label)
            if value is None:
                setattr(self, label, {})
            elif not isinstance(value, dict):
                raise InvalidRecord(f"Record.{label} must be a dict.")

    # ---- shape ----
    @property
    def n_samples(self) -> int:
        return int(self.data.shape[0])

    @property
    def n_channels(self) -> int:
        return int(self.data.shape[1])

    @property
    def duration_minutes(self) -> float:
        return self.n_samples / float(self.samplingrate) / 60

    # ---- rates ----
    def get_samplingrate(self, dtype: Callable[[float], Any] = float) -> Any:
        """Sampling rate converted to `dtype` (float unless asked otherwise)."""
        return dtype(float(self.samplingrate))

    def get_modulationrate(self, dtype: Callable[[float], Any] = float) -> Any:
        """Modulation rate converted to `dtype` (float unless asked otherwise)."""
        return dtype(float(self.modulationrate))

    @property
    def stimulus(self) -> StimulusInfo:
        return StimulusInfo.from_processing(self.processing)

    # ---- description ----
    def summary(self) -> str:
        lines = [
            f"SSR measurement of {round(self.duration_minutes, 2)} mins with "
            f"{self.n_channels} channels sampled at {self.samplingrate} Hz",
            f"  Modulation frequency: {self.modulationrate} Hz",
        ]
        lines.extend(f"  {line}" for line in self.stimulus.describe())
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.summary()

    # ---- copies ----
    def copy(self) -> "Record":
        return self.evolve()

    def evolve(self, **changes: Any) -> "Record":
        """
        Return a new Record with `changes` applied.

        Fields not in `changes` are copied, so the new Record shares no
        buffers or mappings with this one. The result is validated again.
        """
        fields = {
            "data": lambda: self.data.copy(),
            "channel_names": lambda: list(self.channel_names),
            "triggers": lambda: {k: v.copy() for k, v in self.triggers.items()},
            "system_codes": lambda: {k: v.copy() for k, v in self.system_codes.items()},
            "samplingrate": lambda: self.samplingrate,
            "modulationrate": lambda: self.modulationrate,
            "reference_channel": lambda: list(self.reference_channel),
            "file_path": lambda: self.file_path,
            "file_name": lambda: self.file_name,
            "processing": lambda: copy.deepcopy(self.processing),
            "header": lambda: copy.deepcopy(self.header),
        }
        unknown = set(changes) - set(fields)
        if unknown:
            raise InvalidRecord(f"Unknown Record field(s): {sorted(unknown)}")

        kwargs = {name: changes[name] if name in changes else make() for name, make in fields.items()}
        return Record(**kwargs)
