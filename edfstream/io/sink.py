"""
Base class for the destinations that decoded records are streamed to.

"""
from enum import Enum, auto
import logging

from edfstream.io.errors import SinkError


_LOGGER = logging.getLogger(__name__)


class SinkState(Enum):
    NEW = auto()
    OPENED = auto()
    CLOSED = auto()
    FAILED = auto()


class Sink:
    """
    A destination for one decoded EDF file.

    A sink is driven through `open`, then `write_record` once per
    record with consecutive indices starting at 0, then `close`. Any
    other order raises `SinkError`. Subclasses implement `_open`,
    `_write_record`, `_close` and `_release`.

    Attributes
    ----------
    state : SinkState
        Where the sink is in its open/write/close sequence.
    records_written : int
        Number of records successfully written.

    """

    def __init__(self):
        self.state = SinkState.NEW
        self.records_written = 0

    def __repr__(self):
        return (
            f"{type(self).__name__}(state={self.state.name}, "
            f"records_written={self.records_written})"
        )

    def _run(self, operation, func, *args):
        try:
            return func(*args)
        except SinkError:
            self.state = SinkState.FAILED
            raise
        except Exception as exc:
            self.state = SinkState.FAILED
            raise SinkError(
                f"{type(self).__name__} failed to {operation}: {exc}",
                operation=operation,
            ) from exc

    def open(self, header, signals):
        """
        Start the output with the header and signal descriptors.
        """
        if self.state is not SinkState.NEW:
            raise SinkError(
                f"Cannot open a sink in state {self.state.name}",
                operation="open",
            )
        self._run("open", self._open, header, signals)
        self.state = SinkState.OPENED
        _LOGGER.info("Opened %s", self)

    def write_record(self, index, record):
        """
        Write one decoded record.

        Parameters
        ----------
        index : int
            Index of the record in the file. Must equal the number of
            records already written.
        record : list
            One array of physical sample values per signal.

        """
        if self.state is not SinkState.OPENED:
            raise SinkError(
                f"Cannot write record {index} to a sink in state "
                f"{self.state.name}",
                operation="write",
            )
        if index != self.records_written:
            raise SinkError(
                f"Expected record {self.records_written}, got {index}",
                operation="write",
            )
        self._run("write", self._write_record, index, record)
        self.records_written += 1

    def close(self):
        """
        Finish the output and release the sink's resources.
        """
        if self.state is not SinkState.OPENED:
            raise SinkError(
                f"Cannot close a sink in state {self.state.name}",
                operation="close",
            )
        try:
            self._run("close", self._close)
        finally:
            self._release()
        self.state = SinkState.CLOSED
        _LOGGER.info("Closed %s", self)

    def abort(self):
        """
        Release the sink's resources without finishing the output.
        """
        if self.state is not SinkState.CLOSED:
            self.state = SinkState.FAILED
        self._release()

    def _open(self, header, signals):
        raise NotImplementedError

    def _write_record(self, index, record):
        raise NotImplementedError

    def _close(self):
        pass

    def _release(self):
        pass
