from dataclasses import asdict, dataclass
import datetime
from typing import Optional


# Byte layout of the fixed main header: (field, start, stop)
MAIN_HEADER_SIZE = 256
MAIN_HEADER_FIELDS = [
    ("version", 0, 8),
    ("patient_id", 8, 88),
    ("recording_id", 88, 168),
    ("start_date", 168, 176),
    ("start_time", 176, 184),
    ("header_bytes", 184, 192),
    ("reserved", 192, 236),
    ("num_records", 236, 244),
    ("record_duration", 244, 252),
    ("num_signals", 252, 256),
]

# Bytes used by each signal in the signal header block
SIGNAL_HEADER_SIZE = 256


@dataclass(frozen=True)
class Header:
    """
    Recording-level metadata decoded from the 256 byte main header.

    The start date and time are kept as recorded. Use `start_datetime`
    for a parsed value.
    """

    version: str
    patient_id: str
    recording_id: str
    start_date: str
    start_time: str
    header_bytes: int
    reserved: str
    num_records: int
    record_duration: float
    num_signals: int

    @property
    def duration(self):
        """Total recorded duration in seconds."""
        return self.num_records * self.record_duration

    @property
    def expected_header_bytes(self):
        return MAIN_HEADER_SIZE + SIGNAL_HEADER_SIZE * self.num_signals

    @property
    def start_datetime(self) -> Optional[datetime.datetime]:
        """
        The recording start as a datetime, parsed from the 'dd.mm.yy'
        date and 'hh.mm.ss' time fields. Two digit years before 1970
        are moved into the 2000s. None if either field is unparsable.
        """
        try:
            day, month, year = [int(i) for i in self.start_date.split(".")]
            hour, minute, second = [
                int(i) for i in self.start_time.split(".")
            ]
        except ValueError:
            return None

        # This should work for a while
        if year < 1970:
            year += 1900
        if year < 1970:
            year += 100

        try:
            return datetime.datetime(year, month, day, hour, minute, second)
        except ValueError:
            return None

    def to_dict(self):
        return asdict(self)


@dataclass(frozen=True)
class SignalDescriptor:
    """
    Specification fields for one signal. The position of a descriptor
    in the signal list is the signal's index.
    """

    label: str
    transducer: str
    units: str
    physical_min: float
    physical_max: float
    digital_min: int
    digital_max: int
    prefiltering: str
    num_samples: int
    reserved: str

    def sample_rate(self, record_duration: float) -> float:
        """
        Samples per second, given the duration of one data record.
        """
        if record_duration <= 0:
            return float(self.num_samples)
        return self.num_samples / record_duration

    def to_dict(self):
        return asdict(self)


@dataclass(frozen=True)
class ScalingFactor:
    """
    Affine map from digital sample values to physical units:
    `physical = digital * scale + offset`.
    """

    scale: float
    offset: float
