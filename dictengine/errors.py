# dictengine/errors.py
"""
Error kinds raised while reading StarDict files.

Every class derives from StarDictError and from the closest builtin, so
callers can catch either the dictionary-specific kind or the usual
OSError / ValueError / EOFError / IndexError family.
"""


class StarDictError(Exception):
    """Base class for all dictionary decoding failures."""


class DictFileError(StarDictError, OSError):
    """A dictionary file is missing or unreadable."""


class EncodingError(StarDictError, ValueError):
    """A word or text field is not valid UTF-8."""


class TruncatedInputError(StarDictError, EOFError):
    """The buffer ended in the middle of a record."""


class CorruptDataError(StarDictError, ValueError):
    """Entry fields disagree with the declared entry length, or gunzip failed."""


class OutOfRangeError(StarDictError, IndexError):
    """An (offset, length) pair addresses bytes past the loaded buffer."""


class PreconditionError(StarDictError, RuntimeError):
    """An accessor was called on metadata that does not support it."""
