import logging

import numpy as np
import pandas as pd
from sqlalchemy import (
    Column,
    Float,
    ForeignKey,
    Integer,
    LargeBinary,
    MetaData,
    String,
    Table,
    create_engine,
    select,
)
from sqlalchemy.engine import Engine

from edfstream.io.config import config
from edfstream.io.sink import Sink
from edfstream.io.streaming import EdfPipeline


_LOGGER = logging.getLogger(__name__)

# Stored sample sequences are little-endian float64
BLOB_DTYPE = "<f8"

metadata = MetaData()

header_table = Table(
    "header",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("version", String),
    Column("patient_id", String),
    Column("recording_id", String),
    Column("start_date", String),
    Column("start_time", String),
    Column("reserved", String),
    Column("header_bytes", Integer),
    Column("num_records", Integer),
    Column("record_duration", Float),
    Column("num_signals", Integer),
)

signals_table = Table(
    "signals",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("header_id", Integer, ForeignKey("header.id"), nullable=False),
    Column("label", String),
    Column("transducer", String),
    Column("units", String),
    Column("physical_min", Float),
    Column("physical_max", Float),
    Column("digital_min", Integer),
    Column("digital_max", Integer),
    Column("prefiltering", String),
    Column("num_samples", Integer),
    Column("reserved", String),
)

data_table = Table(
    "data",
    metadata,
    Column("signal_id", Integer, ForeignKey("signals.id"), primary_key=True),
    Column("record_number", Integer, primary_key=True),
    Column("samples", LargeBinary),
)


def samples_to_blob(samples):
    """
    Encode a sequence of physical samples as little-endian float64 bytes.
    """
    return np.asarray(samples, dtype=BLOB_DTYPE).tobytes()


def blob_to_samples(blob):
    """
    Decode little-endian float64 bytes into a float64 array.
    """
    return np.frombuffer(blob, dtype=BLOB_DTYPE).astype("float64")


def _get_engine(db):
    if isinstance(db, Engine):
        return db, False
    return create_engine(db), True


class RelationalSink(Sink):
    """
    Stream a decoded EDF file into a relational database.

    On `open`, one row is added to `header` and one row per signal to
    `signals`, in a single transaction. Each record then adds one row
    per signal to `data`, holding that signal's samples for the record
    as a little-endian float64 blob. Every record is written in its own
    transaction, so a failure rolls back only the record being written.

    The tables are created if they do not exist.

    Parameters
    ----------
    db : str or sqlalchemy.engine.Engine
        A database URL (eg. 'sqlite:///out.db') or an engine. An engine
        passed in is not disposed of by the sink.
    sqlite_pragmas : dict, optional
        PRAGMA statements applied to a SQLite database. Defaults to
        `config.sqlite_pragmas`.

    Attributes
    ----------
    header_id : int
        The id of the inserted header row, once opened.
    signal_ids : list
        The id of the inserted row of each signal, in signal order.

    """

    def __init__(self, db, sqlite_pragmas=None):
        super().__init__()
        self.db = db
        self.sqlite_pragmas = (
            config.sqlite_pragmas if sqlite_pragmas is None else sqlite_pragmas
        )
        self.header_id = None
        self.signal_ids = []
        self._engine = None
        self._owns_engine = False
        self._conn = None

    def _open(self, header, signals):
        self._engine, self._owns_engine = _get_engine(self.db)
        self._conn = self._engine.connect()

        if self._engine.dialect.name == "sqlite":
            for name, value in self.sqlite_pragmas.items():
                self._conn.exec_driver_sql(f"PRAGMA {name} = {value}")
            self._conn.commit()

        metadata.create_all(self._conn)
        self._conn.commit()

        with self._conn.begin():
            result = self._conn.execute(
                header_table.insert().values(**header.to_dict())
            )
            self.header_id = result.inserted_primary_key[0]

            signal_ids = []
            for signal in signals:
                result = self._conn.execute(
                    signals_table.insert().values(
                        header_id=self.header_id, **signal.to_dict()
                    )
                )
                signal_ids.append(result.inserted_primary_key[0])
        self.signal_ids = signal_ids
        _LOGGER.debug(
            "Header row %d, signal rows %s", self.header_id, self.signal_ids
        )

    def _write_record(self, index, record):
        rows = [
            {
                "signal_id": signal_id,
                "record_number": index,
                "samples": samples_to_blob(samples),
            }
            for signal_id, samples in zip(self.signal_ids, record)
        ]
        with self._conn.begin():
            if rows:
                self._conn.execute(data_table.insert(), rows)

    def _release(self):
        if self._conn is not None:
            self._conn.close()
            self._conn = None
        if self._engine is not None and self._owns_engine:
            self._engine.dispose()
        self._engine = None


def edf_to_sql(record_name, db, encoding=None, sqlite_pragmas=None):
    """
    Convert an EDF file into a relational database, one record at a
    time.

    Parameters
    ----------
    record_name : str
        Local path or fsspec URL of the input EDF file.
    db : str or sqlalchemy.engine.Engine
        A database URL (eg. 'sqlite:///n16.db') or an engine.
    encoding : str, optional
        Codec for the EDF header text.
    sqlite_pragmas : dict, optional
        PRAGMA statements applied to a SQLite database.

    Returns
    -------
    int
        The number of records written.

    Examples
    --------
    >>> edfstream.edf_to_sql('sample-data/n16.edf', 'sqlite:///n16.db')

    """
    sink = RelationalSink(db, sqlite_pragmas=sqlite_pragmas)
    n_records = EdfPipeline(record_name, sink, encoding=encoding).run()
    _LOGGER.info(
        "Wrote %d records as header row %d", n_records, sink.header_id
    )
    return n_records


def rdsql_signals(db, header_id=None):
    """
    Read the stored signal descriptors.

    Parameters
    ----------
    db : str or sqlalchemy.engine.Engine
        A database URL or an engine.
    header_id : int, optional
        Only return the signals of this header row.

    Returns
    -------
    pandas.DataFrame
        One row per signal, with the columns of the `signals` table.

    """
    engine, owns_engine = _get_engine(db)
    query = select(signals_table).order_by(signals_table.c.id)
    if header_id is not None:
        query = query.where(signals_table.c.header_id == header_id)
    try:
        with engine.connect() as conn:
            return pd.read_sql(query, conn)
    finally:
        if owns_engine:
            engine.dispose()


def rdsql_samples(db, signal_id, record_number):
    """
    Read the samples of one signal in one record.

    Parameters
    ----------
    db : str or sqlalchemy.engine.Engine
        A database URL or an engine.
    signal_id : int
        The id of the signal's row in the `signals` table.
    record_number : int
        The index of the record.

    Returns
    -------
    numpy.ndarray
        The physical sample values, as float64.

    """
    engine, owns_engine = _get_engine(db)
    query = select(data_table.c.samples).where(
        data_table.c.signal_id == signal_id,
        data_table.c.record_number == record_number,
    )
    try:
        with engine.connect() as conn:
            blob = conn.execute(query).scalar_one()
    finally:
        if owns_engine:
            engine.dispose()
    return blob_to_samples(blob)
