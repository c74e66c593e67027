from typing import List, Sequence

import numpy as np

from edfstream.io.errors import BufferOverrunError
from edfstream.io.recordinfo import ScalingFactor, SignalDescriptor


# Every sample is a little-endian signed 16 bit integer
SAMPLE_DTYPE = "<i2"
BYTES_PER_SAMPLE = 2

# Dtype of decoded physical samples
PHYSICAL_DTYPE = "float64"


def calc_scaling(signals: Sequence[SignalDescriptor]) -> List[ScalingFactor]:
    """
    Compute the digital to physical scaling of each signal.

    Parameters
    ----------
    signals : list
        The `SignalDescriptor` of each signal.

    Returns
    -------
    list
        One `ScalingFactor` per signal, in signal order.

    Notes
    -----
    A signal whose digital minimum equals its digital maximum is scaled
    as if its digital range were 1, so its samples map to a constant
    offset instead of dividing by zero.

    """
    scalings = []
    for signal in signals:
        digital_range = signal.digital_max - signal.digital_min
        if digital_range == 0:
            digital_range = 1
        scale = (signal.physical_max - signal.physical_min) / float(
            digital_range
        )
        offset = signal.physical_min - float(signal.digital_min) * scale
        scalings.append(ScalingFactor(scale=scale, offset=offset))
    return scalings


def calc_bytes_per_record(signals: Sequence[SignalDescriptor]) -> int:
    """
    Size in bytes of one data record.
    """
    return sum(s.num_samples * BYTES_PER_SAMPLE for s in signals)


def decode_record(
    buffer,
    signals: Sequence[SignalDescriptor],
    scalings: Sequence[ScalingFactor],
    record_index=None,
) -> List[np.ndarray]:
    """
    Decode one raw data record into physical units.

    Parameters
    ----------
    buffer : bytes
        The raw bytes of the record. Signals are stored one after the
        other, in header order, each as `num_samples` little-endian
        16 bit integers.
    signals : list
        The `SignalDescriptor` of each signal.
    scalings : list
        The `ScalingFactor` of each signal.
    record_index : int, optional
        Index of the record, used in error messages.

    Returns
    -------
    list
        One float64 array per signal, of length `num_samples`, holding
        `raw * scale + offset` for each raw sample.

    Raises
    ------
    BufferOverrunError
        A signal's samples would extend past the end of `buffer`.

    """
    record = []
    offset = 0
    for sig_ind, (signal, scaling) in enumerate(zip(signals, scalings)):
        n_bytes = signal.num_samples * BYTES_PER_SAMPLE
        if signal.num_samples < 0 or offset + n_bytes > len(buffer):
            raise BufferOverrunError(
                f"Signal {sig_ind} needs bytes {offset}-{offset + n_bytes} "
                f"of a {len(buffer)} byte record",
                signal_index=sig_ind,
                record_index=record_index,
            )
        if signal.num_samples == 0:
            record.append(np.empty(0, dtype=PHYSICAL_DTYPE))
            continue
        raw = np.frombuffer(
            buffer, dtype=SAMPLE_DTYPE, count=signal.num_samples, offset=offset
        )
        record.append(
            raw.astype(PHYSICAL_DTYPE) * scaling.scale + scaling.offset
        )
        offset += n_bytes
    return record
