# test/test_metadata.py
import pytest

from ssrtools.core import StimulusInfo, PROCESSING_KEYS, InvalidRecord


def test_processing_keys_cover_recognized_names():
    for key in ("Name", "Side", "Carrier_Frequency", "Amplitude", "epochs", "sweeps"):
        assert key in PROCESSING_KEYS


def test_stimulusinfo_from_processing_splits_known_and_other_keys():
    info = StimulusInfo.from_processing(
        {"Name": "P01", "Side": "Left", "Carrier_Frequency": 1000, "Amplitude": 60, "epochs": [1]}
    )
    assert info.name == "P01"
    assert info.side == "Left"
    assert info.carrier_frequency == 1000
    assert info.amplitude == 60
    assert info.attrs == {"epochs": [1]}


def test_stimulusinfo_describe_only_present_fields_in_order():
    info = StimulusInfo(name="P01", amplitude=55)
    assert info.describe() == ["Stimulation amplitude: 55 dB", "Participant name: P01"]
    assert StimulusInfo().describe() == []


def test_stimulusinfo_normalizes_none_attrs_and_rejects_non_dict():
    assert StimulusInfo(attrs=None).attrs == {}
    with pytest.raises(InvalidRecord):
        StimulusInfo(attrs=["nope"])  # type: ignore[arg-type]


def test_from_processing_rejects_non_mapping():
    with pytest.raises(InvalidRecord):
        StimulusInfo.from_processing(["Name"])  # type: ignore[arg-type]
