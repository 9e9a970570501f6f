# ssrtools/core/stimulus.py
from __future__ import annotations

from typing import Iterable

import numpy as np


def assr_frequency(
    rounded_freq: float | Iterable[float],
    *,
    stimulation_samplingrate: float = 32000,
    stimulation_frames_per_epoch: int = 32768,
) -> float | np.ndarray:
    """
    Exact modulation frequency used by the stimulus for a nominal rate.

    The stimulus plays epochs of `stimulation_frames_per_epoch` frames at
    `stimulation_samplingrate`, so only whole multiples of
    samplingrate / frames_per_epoch fit an integer number of cycles per epoch.
    The nominal frequency is snapped to the nearest such multiple.

    Example: assr_frequency(40) -> 40.0390625
    """
    resolution = stimulation_samplingrate / stimulation_frames_per_epoch
    if np.isscalar(rounded_freq):
        return float(np.round(float(rounded_freq) / resolution) * resolution)
    freqs = np.asarray(list(rounded_freq), dtype=float)
    return np.round(freqs / resolution) * resolution
