"""
Exceptions raised while decoding EDF files and writing their contents
to a sink.

"""


class EdfError(Exception):
    """Base class for all errors raised by edfstream."""


class TruncatedInputError(EdfError, EOFError):
    """The input ended before a section of the file was complete."""

    def __init__(
        self,
        message,
        section=None,
        record_index=None,
        expected=None,
        received=None,
    ):
        super().__init__(message)
        self.section = section
        self.record_index = record_index
        self.expected = expected
        self.received = received


class MalformedFieldError(EdfError, ValueError):
    """A numeric header field could not be parsed."""

    def __init__(self, message, field=None, value=None, signal_index=None):
        super().__init__(message)
        self.field = field
        self.value = value
        self.signal_index = signal_index


class BufferOverrunError(EdfError):
    """A signal's sample span runs past the end of the record buffer."""

    def __init__(self, message, signal_index=None, record_index=None):
        super().__init__(message)
        self.signal_index = signal_index
        self.record_index = record_index


class SinkError(EdfError):
    """A sink failed to open, write or commit."""

    def __init__(self, message, operation=None):
        super().__init__(message)
        self.operation = operation
