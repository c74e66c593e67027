"""
Record-by-record decoding of EDF data, and the pipeline that feeds the
decoded records to a sink.

"""
from enum import Enum, auto
import logging
import os

from edfstream.io import _coreio
from edfstream.io._signal import (
    calc_bytes_per_record,
    calc_scaling,
    decode_record,
)
from edfstream.io.errors import TruncatedInputError
from edfstream.io.header import rd_headers


_LOGGER = logging.getLogger(__name__)


class StreamState(Enum):
    IDLE = auto()
    READING = auto()
    DONE = auto()
    FAILED = auto()


class RecordStreamer:
    """
    Iterate over the data records of an EDF file, decoding each one into
    physical units.

    Exactly `header.num_records` records are read from `fp`, which must
    be positioned at the first data record. Only the record currently
    being yielded is held in memory.

    Parameters
    ----------
    fp : file-like
        Binary file object positioned just past the signal header.
    header : Header
        The decoded main header.
    signals : list
        The `SignalDescriptor` of each signal.
    scalings : list, optional
        The `ScalingFactor` of each signal. Computed from `signals` if
        not given.

    Attributes
    ----------
    state : StreamState
        IDLE before iteration, READING while records are being decoded,
        DONE after the last record, FAILED after any error.
    record_index : int
        Index of the record being read, or the number of records read
        once DONE.

    Examples
    --------
    >>> for index, record in RecordStreamer(fp, header, signals):
    ...     print(index, [len(samples) for samples in record])

    """

    def __init__(self, fp, header, signals, scalings=None):
        self.fp = fp
        self.header = header
        self.signals = signals
        if scalings is None:
            scalings = calc_scaling(signals)
        self.scalings = scalings
        self.bytes_per_record = calc_bytes_per_record(signals)
        self.state = StreamState.IDLE
        self.record_index = 0

    def __iter__(self):
        if self.state is not StreamState.IDLE:
            raise RuntimeError("A RecordStreamer can only be iterated once")

        if self.header.num_records < 0:
            _LOGGER.warning(
                "Number of data records is unknown (%d), no records read",
                self.header.num_records,
            )

        for rec in range(self.header.num_records):
            self.state = StreamState.READING
            self.record_index = rec
            try:
                record = self._read_record(rec)
            except Exception:
                self.state = StreamState.FAILED
                raise
            _LOGGER.debug("Decoded record %d", rec)
            yield rec, record

        self.record_index = max(self.header.num_records, 0)
        self.state = StreamState.DONE

    def _read_record(self, rec):
        buffer = _coreio._read_exact(self.fp, self.bytes_per_record)
        if len(buffer) < self.bytes_per_record:
            raise TruncatedInputError(
                f"Input ended while reading record {rec}: expected "
                f"{self.bytes_per_record} bytes, got {len(buffer)}",
                section="data record",
                record_index=rec,
                expected=self.bytes_per_record,
                received=len(buffer),
            )
        return decode_record(
            buffer, self.signals, self.scalings, record_index=rec
        )


class EdfPipeline:
    """
    Decode one EDF file and stream it into one sink.

    The pipeline owns the input file and the sink for the duration of
    `run`. Both are released on every exit path, and any error aborts
    the run.

    Parameters
    ----------
    record_name : str or file-like
        Local path or fsspec URL of the EDF file, or a binary file
        object positioned at its start. A file object is not closed by
        the pipeline.
    sink : Sink
        Where the decoded header, signals and records are written.
    encoding : str, optional
        Codec for the header text.
    strict : bool, optional
        Whether unparsable numeric signal fields raise.

    Attributes
    ----------
    header : Header
        The decoded main header, once `run` has read it.
    signals : list
        The decoded `SignalDescriptor` list, once `run` has read it.

    """

    def __init__(self, record_name, sink, encoding=None, strict=None):
        self.record_name = record_name
        self.sink = sink
        self.encoding = encoding
        self.strict = strict
        self.header = None
        self.signals = None

    def run(self):
        """
        Run the pipeline to completion.

        Returns
        -------
        int
            The number of records written to the sink.

        """
        if isinstance(self.record_name, (str, os.PathLike)):
            with _coreio._open_file(os.fspath(self.record_name), "rb") as fp:
                return self._run(fp)
        return self._run(self.record_name)

    def _run(self, fp):
        try:
            self.header, self.signals = rd_headers(
                fp, encoding=self.encoding, strict=self.strict
            )
            self.sink.open(self.header, self.signals)
            streamer = RecordStreamer(fp, self.header, self.signals)
            for index, record in streamer:
                self.sink.write_record(index, record)
            self.sink.close()
        except Exception:
            self.sink.abort()
            raise

        _LOGGER.info(
            "Streamed %d records of %d signals",
            streamer.record_index,
            len(self.signals),
        )
        return streamer.record_index


def rdedf(record_name, encoding=None, strict=None):
    """
    Read a whole EDF file into memory.

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
    records : list
        Every decoded record, each a list of one float64 array per
        signal.

    """
    with _coreio._open_file(record_name, "rb") as fp:
        header, signals = rd_headers(fp, encoding=encoding, strict=strict)
        records = [
            record for _, record in RecordStreamer(fp, header, signals)
        ]
    return header, signals, records
