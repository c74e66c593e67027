from edfstream.io.recordinfo import Header, ScalingFactor, SignalDescriptor
from edfstream.io.errors import (
    BufferOverrunError,
    EdfError,
    MalformedFieldError,
    SinkError,
    TruncatedInputError,
)
from edfstream.io.header import rdheader
from edfstream.io.streaming import EdfPipeline, RecordStreamer, rdedf
from edfstream.io.convert.json import JSONSink, edf_to_json
from edfstream.io.convert.sql import (
    RelationalSink,
    edf_to_sql,
    rdsql_samples,
    rdsql_signals,
)
from edfstream.plot.chart import chart_data

from edfstream.version import __version__
