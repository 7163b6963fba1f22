"""
linecat file collaborator: read every requested path and concatenate the texts.

All files are read, in order, before anything is transformed. The first path
that cannot be read (missing, not a regular file, permission denied, or not
valid text in the requested encoding) aborts the whole read with FileReadError.
"""
from .faults import FaultCode, FileReadError, getdoc


def read(path, /, encoding="utf-8"):
    """
    Return the full text of path, line terminators untouched.

    Raises FileReadError carrying the path and the underlying cause.
    """
    try:
        with open(path, encoding=encoding, newline="") as stream:
            return stream.read()
    except (OSError, UnicodeDecodeError) as cause:
        reason = cause.strerror if isinstance(cause, OSError) and cause.strerror else str(cause)
        raise FileReadError(
            "cannot read file %r: %s" % (path, reason.lower()),
            title="unreadable file",
            code=FaultCode.UNREADABLE_FILE,
            path=path,
            cause=cause,
            hint="check that the path exists, is a regular file and is readable as %s text" % encoding,
            docs=getdoc(FaultCode.UNREADABLE_FILE),
        ) from cause


def concatenate(paths, /, encoding="utf-8"):
    """
    Read paths in order and return their concatenated text.
    """
    return "".join(read(path, encoding=encoding) for path in paths)


__all__ = (
    "read",
    "concatenate",
)
