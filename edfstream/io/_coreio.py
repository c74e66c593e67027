import fsspec


def _open_file(
    file_name,
    mode="rb",
    *,
    buffering=-1,
    encoding=None,
    errors=None,
    newline=None,
):
    """
    Open a local or remote file through fsspec.

    See the documentation of `open` for details about the `mode`,
    `buffering`, `encoding`, `errors`, and `newline` parameters.

    Parameters
    ----------
    file_name : str
        The name of the file, either as a local filesystem path or any
        URL understood by fsspec (eg. 's3://bucket/record.edf').
    mode : str, optional
        The standard I/O mode for the file ("rb" by default).
    buffering : int, optional
        Buffering policy.
    encoding : str, optional
        Name of character encoding used in text mode.
    errors : str, optional
        Error handling strategy used in text mode.
    newline : str, optional
        Newline translation mode used in text mode.

    Returns
    -------
    fsspec.core.OpenFile
        An object to be used as a context manager, which yields the
        underlying file object.

    """
    if "b" in mode:
        return fsspec.open(file_name, mode, buffering=buffering)
    return fsspec.open(
        file_name,
        mode,
        buffering=buffering,
        encoding=encoding,
        errors=errors,
        newline=newline,
    )


def _read_exact(fp, n_bytes):
    """
    Read exactly `n_bytes` from a binary file object, unless it ends
    first. Returns the bytes actually read.
    """
    chunks = []
    remaining = n_bytes
    while remaining > 0:
        chunk = fp.read(remaining)
        if not chunk:
            break
        chunks.append(chunk)
        remaining -= len(chunk)
    return b"".join(chunks)
