"""
Module for decoding the two ASCII header regions of an EDF file.

The main header is a fixed 256 byte block. The signal header that
follows is 256 bytes per signal, but it is laid out field by field:
all of the labels come first, then all of the transducer types, and
so on. Reading it as one contiguous row per signal gives wrong values.

"""
import logging
import re
from typing import List, Tuple

from edfstream.io import _coreio
from edfstream.io.config import config
from edfstream.io.errors import MalformedFieldError, TruncatedInputError
from edfstream.io.recordinfo import (
    Header,
    MAIN_HEADER_FIELDS,
    MAIN_HEADER_SIZE,
    SIGNAL_HEADER_SIZE,
    SignalDescriptor,
)


_LOGGER = logging.getLogger(__name__)

# Numeric fields of the main header and their types
MAIN_HEADER_NUMERIC = {
    "header_bytes": int,
    "num_records": int,
    "record_duration": float,
    "num_signals": int,
}

# Signal header field groups, in file order: (field, byte width, type)
SIGNAL_HEADER_FIELDS = [
    ("label", 16, str),
    ("transducer", 80, str),
    ("units", 8, str),
    ("physical_min", 8, float),
    ("physical_max", 8, float),
    ("digital_min", 8, int),
    ("digital_max", 8, int),
    ("prefiltering", 80, str),
    ("num_samples", 8, int),
    ("reserved", 32, str),
]

# Plain ASCII notation only: no digit separators, no non-ASCII digits
rx_int = re.compile(r"[+-]?\d+", re.ASCII)
rx_float = re.compile(
    r"[+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan)",
    re.ASCII | re.IGNORECASE,
)


def _to_number(value, cast):
    """
    Cast a stripped header field to `int` or `float`, raising
    ValueError for anything but plain ASCII notation.
    """
    pattern = rx_int if cast is int else rx_float
    if pattern.fullmatch(value) is None:
        raise ValueError(f"Not an ASCII {cast.__name__}: {value!r}")
    return cast(value)


def _read_section(fp, n_bytes, section):
    data = _coreio._read_exact(fp, n_bytes)
    if len(data) < n_bytes:
        raise TruncatedInputError(
            f"Input ended while reading the {section}: expected {n_bytes} "
            f"bytes, got {len(data)}",
            section=section,
            expected=n_bytes,
            received=len(data),
        )
    return data


def rd_main_header(fp, encoding=None) -> Header:
    """
    Decode the fixed 256 byte main header.

    Parameters
    ----------
    fp : file-like
        Binary file object positioned at the start of the file. Its
        cursor is advanced by exactly 256 bytes.
    encoding : str, optional
        Codec for the header text. Defaults to `config.encoding`.

    Returns
    -------
    Header
        The decoded recording metadata.

    Raises
    ------
    TruncatedInputError
        Fewer than 256 bytes are available.
    MalformedFieldError
        A numeric field does not parse. The field name is stored on
        the exception.

    """
    encoding = encoding or config.encoding
    raw = _read_section(fp, MAIN_HEADER_SIZE, "main header")

    fields = {}
    for name, start, stop in MAIN_HEADER_FIELDS:
        value = raw[start:stop].decode(encoding).strip()
        cast = MAIN_HEADER_NUMERIC.get(name)
        if cast is not None:
            try:
                value = _to_number(value, cast)
            except ValueError:
                raise MalformedFieldError(
                    f"Invalid {name} in main header: {value!r}",
                    field=name,
                    value=value,
                ) from None
        fields[name] = value

    header = Header(**fields)
    _LOGGER.debug("Main header: %s", header)
    return header


def read_field_major(block, width, start, n_sig, encoding=None) -> List[str]:
    """
    Read one field group from a field-major signal header block.

    The group begins at byte `start` and holds `n_sig` entries of
    `width` bytes each, back to back, one per signal.

    Parameters
    ----------
    block : bytes
        The whole signal header block.
    width : int
        Byte width of one entry of the field.
    start : int
        Byte offset of the field group within the block.
    n_sig : int
        Number of signals.
    encoding : str, optional
        Codec for the header text. Defaults to `config.encoding`.

    Returns
    -------
    list
        The stripped string value of the field for each signal.

    """
    encoding = encoding or config.encoding
    values = []
    for i in range(n_sig):
        entry_start = start + i * width
        entry = block[entry_start : entry_start + width]
        values.append(entry.decode(encoding).strip())
    return values


def _parse_signal_field(value, cast, field, signal_index, strict):
    try:
        return _to_number(value, cast)
    except ValueError:
        if strict:
            raise MalformedFieldError(
                f"Invalid {field} for signal {signal_index}: {value!r}",
                field=field,
                value=value,
                signal_index=signal_index,
            ) from None
        _LOGGER.warning(
            "Invalid %s for signal %d (%r), using 0",
            field,
            signal_index,
            value,
        )
        return cast(0)


def rd_signal_headers(
    fp, n_sig, encoding=None, strict=None
) -> List[SignalDescriptor]:
    """
    Decode the signal header block that follows the main header.

    Parameters
    ----------
    fp : file-like
        Binary file object positioned just past the main header. Its
        cursor is advanced by exactly `256 * n_sig` bytes.
    n_sig : int
        The number of signals declared in the main header.
    encoding : str, optional
        Codec for the header text. Defaults to `config.encoding`.
    strict : bool, optional
        Whether unparsable numeric fields raise `MalformedFieldError`
        (True) or are read as zero (False). Defaults to
        `config.strict_signal_fields`.

    Returns
    -------
    list
        One `SignalDescriptor` per signal, in file order.

    """
    if n_sig < 0:
        raise MalformedFieldError(
            f"Negative signal count: {n_sig}",
            field="num_signals",
            value=n_sig,
        )
    encoding = encoding or config.encoding
    if strict is None:
        strict = config.strict_signal_fields

    block = _read_section(fp, SIGNAL_HEADER_SIZE * n_sig, "signal header")

    columns = {}
    offset = 0
    for name, width, cast in SIGNAL_HEADER_FIELDS:
        values = read_field_major(block, width, offset, n_sig, encoding)
        if cast is not str:
            values = [
                _parse_signal_field(v, cast, name, i, strict)
                for i, v in enumerate(values)
            ]
        columns[name] = values
        offset += width * n_sig

    signals = [
        SignalDescriptor(**{name: columns[name][i] for name in columns})
        for i in range(n_sig)
    ]
    for i, signal in enumerate(signals):
        _LOGGER.debug("Signal %d: %s", i, signal)
    return signals


def rd_headers(fp, encoding=None, strict=None):
    """
    Decode the main header and the signal header block from an open
    binary file object.

    Returns
    -------
    header : Header
    signals : list
        The `SignalDescriptor` of each signal.

    """
    header = rd_main_header(fp, encoding=encoding)
    signals = rd_signal_headers(
        fp, header.num_signals, encoding=encoding, strict=strict
    )
    if header.header_bytes != header.expected_header_bytes:
        _LOGGER.warning(
            "Header declares %d bytes but %d signals occupy %d",
            header.header_bytes,
            header.num_signals,
            header.expected_header_bytes,
        )
    return header, signals


def rdheader(record_name, encoding=None, strict=None) -> Tuple[Header, list]:
    """
    Read only the header information of an EDF file.

    Parameters
    ----------
    record_name : str
        Local path or fsspec URL of the EDF file.
    encoding : str, optional
        Codec for the header text.
    strict : bool, optional
        Whether unparsable numeric signal fields raise.

    Returns
    -------
    header : Header
    signals : list
        The `SignalDescriptor` of each signal.

    Examples
    --------
    >>> header, signals = edfstream.rdheader('sample-data/n16.edf')

    """
    with _coreio._open_file(record_name, "rb") as fp:
        return rd_headers(fp, encoding=encoding, strict=strict)
