import io

from edfstream.io import config, reset_config, set_encoding
from edfstream.io.config import DEFAULT_SQLITE_PRAGMAS
from edfstream.io.header import rd_headers


class TestConfig:
    def test_defaults(self):
        assert config.encoding == "iso8859-1"
        assert config.strict_signal_fields is False
        assert config.json_indent == 2
        assert config.sqlite_pragmas == DEFAULT_SQLITE_PRAGMAS

    def test_reset(self):
        set_encoding("utf-8")
        config.sqlite_pragmas["synchronous"] = "FULL"
        reset_config()
        assert config.encoding == "iso8859-1"
        assert DEFAULT_SQLITE_PRAGMAS["synchronous"] == "OFF"
        assert config.sqlite_pragmas == DEFAULT_SQLITE_PRAGMAS

    def test_encoding_is_used(self, edf_bytes):
        data = edf_bytes(signals=[{"label": "K_rper"}])
        # Swap in a utf-8 label of the same byte length
        data = data.replace(b"K_rper ", "Körper".encode("utf-8"))
        set_encoding("utf-8")
        _, signals = rd_headers(io.BytesIO(data))
        assert signals[0].label == "Körper"
