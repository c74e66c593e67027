from edfstream.io.recordinfo import Header, ScalingFactor, SignalDescriptor
from edfstream.io.errors import (
    BufferOverrunError,
    EdfError,
    MalformedFieldError,
    SinkError,
    TruncatedInputError,
)
from edfstream.io.header import (
    rd_main_header,
    rd_signal_headers,
    rdheader,
    read_field_major,
)
from edfstream.io._signal import calc_scaling, decode_record
from edfstream.io.streaming import (
    EdfPipeline,
    RecordStreamer,
    StreamState,
    rdedf,
)
from edfstream.io.sink import Sink, SinkState
from edfstream.io.convert.json import JSONSink, edf_to_json
from edfstream.io.convert.sql import (
    RelationalSink,
    edf_to_sql,
    rdsql_samples,
    rdsql_signals,
)
from edfstream.io.config import (
    config,
    reset_config,
    set_encoding,
    set_strict_signal_fields,
)
