import json
import logging
import os

from edfstream.io import _coreio
from edfstream.io.config import config
from edfstream.io.sink import Sink
from edfstream.io.streaming import EdfPipeline


_LOGGER = logging.getLogger(__name__)


class JSONSink(Sink):
    """
    Stream a decoded EDF file into a single JSON document of the form
    `{"header": {...}, "signals": [...], "data": [record, ...]}`, where
    each record is a list, indexed by signal, of lists of physical
    sample values.

    Only one record is held in memory at a time, so the document is
    only complete once `close` has succeeded. Output from a run that
    failed part way through is not valid JSON. Non-finite values (NaN or
    infinite physical bounds or samples) cannot be represented in JSON
    and raise `SinkError`.

    Parameters
    ----------
    output : str or file-like
        Path or fsspec URL of the output file, or an open text file
        object. A file object is not closed by the sink.
    indent : int, optional
        Indentation of the header and signal sections. Defaults to
        `config.json_indent`.

    """

    def __init__(self, output, indent=None):
        super().__init__()
        self.output = output
        self.indent = config.json_indent if indent is None else indent
        self._open_file = None
        self._fp = None

    def _open(self, header, signals):
        if isinstance(self.output, (str, os.PathLike)):
            self._open_file = _coreio._open_file(
                os.fspath(self.output), "w", encoding="utf-8"
            )
            self._fp = self._open_file.open()
        else:
            self._fp = self.output

        self._fp.write('{\n  "header": ')
        self._fp.write(
            json.dumps(header.to_dict(), indent=self.indent, allow_nan=False)
        )
        self._fp.write(',\n  "signals": ')
        self._fp.write(
            json.dumps(
                [s.to_dict() for s in signals],
                indent=self.indent,
                allow_nan=False,
            )
        )
        self._fp.write(',\n  "data": [\n')

    def _write_record(self, index, record):
        if index > 0:
            self._fp.write(",\n")
        self._fp.write("    ")
        self._fp.write(
            json.dumps(
                [samples.tolist() for samples in record], allow_nan=False
            )
        )

    def _close(self):
        self._fp.write("\n  ]\n}\n")
        self._fp.flush()

    def _release(self):
        if self._open_file is not None and self._fp is not None:
            self._fp.close()
        self._fp = None
        self._open_file = None


def edf_to_json(record_name, output_filename, encoding=None, indent=None):
    """
    Convert an EDF file into a JSON document, one record at a time.

    Parameters
    ----------
    record_name : str
        Local path or fsspec URL of the input EDF file.
    output_filename : str
        Path or fsspec URL of the JSON file to write.
    encoding : str, optional
        Codec for the EDF header text.
    indent : int, optional
        Indentation of the header and signal sections.

    Returns
    -------
    int
        The number of records written.

    Examples
    --------
    >>> edfstream.edf_to_json('sample-data/n16.edf', 'n16.json')

    """
    sink = JSONSink(output_filename, indent=indent)
    n_records = EdfPipeline(record_name, sink, encoding=encoding).run()
    _LOGGER.info("Wrote %d records to %s", n_records, output_filename)
    return n_records
