import numpy as np
import pytest

from edfstream.io.config import reset_config


DEFAULT_SIGNAL = {
    "label": "EEG Fpz-Cz",
    "transducer": "AgAgCl electrode",
    "units": "uV",
    "physical_min": "-100",
    "physical_max": "100",
    "digital_min": "-2048",
    "digital_max": "2047",
    "prefiltering": "HP:0.1Hz LP:75Hz",
    "num_samples": "2",
    "reserved": "",
}

# (field, width) of each signal header field group, in file order
SIGNAL_FIELD_WIDTHS = [
    ("label", 16),
    ("transducer", 80),
    ("units", 8),
    ("physical_min", 8),
    ("physical_max", 8),
    ("digital_min", 8),
    ("digital_max", 8),
    ("prefiltering", 80),
    ("num_samples", 8),
    ("reserved", 32),
]


def _field(value, width):
    return str(value).ljust(width)[:width].encode("ascii")


def build_main_header(
    num_signals,
    num_records,
    record_duration="1",
    version="0",
    patient_id="X F 02-MAY-1951 Haagse_Harry",
    recording_id="Startdate 10-JAN-2025 PSG-1234/2025 NN Telemetry03",
    start_date="10.01.25",
    start_time="14.20.35",
    header_bytes=None,
    reserved="",
):
    if header_bytes is None:
        header_bytes = 256 + 256 * int(num_signals)
    return b"".join(
        [
            _field(version, 8),
            _field(patient_id, 80),
            _field(recording_id, 80),
            _field(start_date, 8),
            _field(start_time, 8),
            _field(header_bytes, 8),
            _field(reserved, 44),
            _field(num_records, 8),
            _field(record_duration, 8),
            _field(num_signals, 4),
        ]
    )


def build_signal_block(signals):
    """
    Lay out signal fields field by field: every label, then every
    transducer type, and so on.
    """
    return b"".join(
        _field(signal[name], width)
        for name, width in SIGNAL_FIELD_WIDTHS
        for signal in signals
    )


def build_record(raw_samples):
    """
    Concatenate the raw 16 bit samples of each signal.
    """
    return b"".join(
        np.asarray(samples, dtype="<i2").tobytes() for samples in raw_samples
    )


def build_edf(signals=None, records=(), num_records=None, **header_fields):
    """
    Build the bytes of an EDF file.

    `signals` is a list of dicts overriding `DEFAULT_SIGNAL`, and
    `records` a list of records, each a list of raw sample sequences.
    """
    if signals is None:
        signals = [{}]
    signals = [dict(DEFAULT_SIGNAL, **s) for s in signals]
    if num_records is None:
        num_records = len(records)
    return (
        build_main_header(len(signals), num_records, **header_fields)
        + build_signal_block(signals)
        + b"".join(build_record(r) for r in records)
    )


@pytest.fixture
def edf_bytes():
    return build_edf


@pytest.fixture
def edf_file(tmp_path):
    """
    Write an EDF file built by `build_edf` and return its path.
    """

    def _write(name="test.edf", **kwargs):
        path = tmp_path / name
        path.write_bytes(build_edf(**kwargs))
        return str(path)

    return _write


@pytest.fixture(autouse=True)
def _default_config():
    reset_config()
    yield
    reset_config()


@pytest.fixture(autouse=True)
def _np_errors():
    # Raise exceptions for arithmetic errors, except underflow
    with np.errstate(all="raise", under="ignore"):
        yield
