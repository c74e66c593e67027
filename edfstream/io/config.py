"""
Library-wide settings for decoding and exporting EDF files.

"""
import copy


# Default values, restored by `reset_config`
DEFAULT_ENCODING = "iso8859-1"
DEFAULT_JSON_INDENT = 2
DEFAULT_SQLITE_PRAGMAS = {"synchronous": "OFF", "journal_mode": "WAL"}


class Config(object):
    """
    General class structure for the library settings.

    Attributes
    ----------
    encoding : str
        The codec used for the ASCII header fields. Although the EDF
        specification requires ascii strings, some files do not adhere
        to it.
    strict_signal_fields : bool
        Whether an unparsable numeric field in the signal header raises
        (True) or is read as zero (False).
    json_indent : int
        Indentation of the header and signal sections of JSON output.
    sqlite_pragmas : dict
        PRAGMA statements applied when writing to a SQLite database.

    """

    pass


config = Config()


def reset_config():
    """
    Restore every setting to its default value.

    Parameters
    ----------
    N/A

    Returns
    -------
    N/A

    """
    config.encoding = DEFAULT_ENCODING
    config.strict_signal_fields = False
    config.json_indent = DEFAULT_JSON_INDENT
    config.sqlite_pragmas = copy.deepcopy(DEFAULT_SQLITE_PRAGMAS)


reset_config()


def set_encoding(encoding=DEFAULT_ENCODING):
    """
    Set the codec used to decode header text. Leave as default to reset
    to iso8859-1.

    Parameters
    ----------
    encoding : str, optional
        Name of a codec known to the `codecs` module.

    Returns
    -------
    N/A

    """
    config.encoding = encoding


def set_strict_signal_fields(strict=True):
    """
    Choose how unparsable numeric signal header fields are handled.

    Parameters
    ----------
    strict : bool, optional
        If True, raise `MalformedFieldError`. If False, read the field
        as zero and log a warning.

    Returns
    -------
    N/A

    """
    config.strict_signal_fields = strict
