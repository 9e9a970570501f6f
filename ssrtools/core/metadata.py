# ssrtools/core/metadata.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from .exceptions import InvalidRecord


# Recognized keys of Record.processing. The mapping stays open: external
# analysis steps may add anything else.
NAME = "Name"
SIDE = "Side"
CARRIER_FREQUENCY = "Carrier_Frequency"
AMPLITUDE = "Amplitude"
EPOCHS = "epochs"
SWEEPS = "sweeps"

PROCESSING_KEYS = (NAME, SIDE, CARRIER_FREQUENCY, AMPLITUDE, EPOCHS, SWEEPS)


@dataclass(frozen=True, slots=True)
class StimulusInfo:
    """
    Typed view over the stimulus-related entries of Record.processing.

    - name: participant identifier
    - side: side of stimulation
    - carrier_frequency: carrier frequency of the stimulus (Hz)
    - amplitude: stimulation amplitude (dB)
    - attrs: every other processing entry, untouched
    """
    name: str | None = None
    side: str | None = None
    carrier_frequency: float | None = None
    amplitude: float | None = None
    attrs: dict[str, Any] = field(default_factory=dict, repr=False)

    def __post_init__(self) -> None:
        if self.attrs is None:
            object.__setattr__(self, "attrs", {})
        elif not isinstance(self.attrs, dict):
            raise InvalidRecord("StimulusInfo.attrs must be a dict.")

    @classmethod
    def from_processing(cls, processing: Mapping[str, Any]) -> "StimulusInfo":
        if not isinstance(processing, Mapping):
            raise InvalidRecord("processing must be a mapping.")
        known = {NAME, SIDE, CARRIER_FREQUENCY, AMPLITUDE}
        return cls(
            name=processing.get(NAME),
            side=processing.get(SIDE),
            carrier_frequency=processing.get(CARRIER_FREQUENCY),
            amplitude=processing.get(AMPLITUDE),
            attrs={k: v for k, v in processing.items() if k not in known},
        )

    def describe(self) -> list[str]:
        """Summary lines for the fields that are set, in display order."""
        lines: list[str] = []
        if self.amplitude is not None:
            lines.append(f"Stimulation amplitude: {self.amplitude} dB")
        if self.name is not None:
            lines.append(f"Participant name: {self.name}")
        if self.side is not None:
            lines.append(f"Stimulation side: {self.side}")
        if self.carrier_frequency is not None:
            lines.append(f"Carrier frequency: {self.carrier_frequency} Hz")
        return lines
