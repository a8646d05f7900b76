"""
dictengine/decoder.py

Turns one entry block of the .dict buffer into its typed fields.

StarDict has two mutually exclusive entry layouts:

  uniform (the .ifo declares sametypesequence, e.g. "m" or "tm"):
      fields appear in sequence order and carry no type byte.
      - the LAST field always takes every remaining byte of the entry
      - 'W' / 'P' (wav / picture) fields: uint32 size (big-endian) + data
      - any other type: utf-8 text terminated by '\\0'

  self-describing (no sametypesequence):
      each field starts with its own type byte.
      - lowercase type: '\\0'-terminated text
      - any other type: uint32 size (big-endian) + data
      decoding stops once the declared entry length is consumed.

Tags are single characters; values are raw bytes. In the dict returned by
decode() a tag repeated inside one entry keeps only its last value, which is
what existing StarDict readers do. iter_fields() yields every field.
"""

from __future__ import annotations
import struct
from typing import Dict, Iterator, Tuple

from dictengine.dictdata import DictData
from dictengine.errors import CorruptDataError, EncodingError
from dictengine.index import WordRecord
from dictengine.info import DictInfo

_U32 = struct.Struct(">I")
SIZED_TYPES = ("W", "P")


class EntryCursor:
    """
    Bounded read position over [start, end) of a buffer.

    One cursor is created per decode call; nothing on DictData moves, so the
    same DictData can be decoded from several threads.
    """

    __slots__ = ("buf", "start", "end", "pos")

    def __init__(self, buf: bytes, start: int, end: int):
        self.buf = buf
        self.start = start
        self.end = end
        self.pos = start

    @property
    def consumed(self) -> int:
        return self.pos - self.start

    @property
    def remaining(self) -> int:
        return self.end - self.pos

    def read(self, n: int) -> bytes:
        if n > self.remaining:
            raise CorruptDataError(
                f"field needs {n} bytes at {self.pos}, entry [{self.start}, {self.end}) has {self.remaining} left"
            )
        value = self.buf[self.pos:self.pos + n]
        self.pos += n
        return value

    def read_u8(self) -> int:
        return self.read(1)[0]

    def read_u32(self) -> int:
        return _U32.unpack(self.read(4))[0]

    def read_sized(self) -> bytes:
        return self.read(self.read_u32())

    def read_cstring(self) -> bytes:
        """Bytes up to the next '\\0'; the terminator is consumed but not returned."""
        nul = self.buf.find(b"\0", self.pos, self.end)
        if nul == -1:
            raise CorruptDataError(f"unterminated text field at {self.pos}, entry ends at {self.end}")
        value = self.buf[self.pos:nul]
        self.pos = nul + 1
        return value

    def read_rest(self) -> bytes:
        return self.read(self.remaining)


def _entry_cursor(record: WordRecord, data: DictData) -> EntryCursor:
    # slice_at raises OutOfRangeError for blocks past the buffer
    data.slice_at(record.offset, record.length)
    return EntryCursor(data.buf, record.offset, record.offset + record.length)


def _iter_uniform(cur: EntryCursor, sequence: str) -> Iterator[Tuple[str, bytes]]:
    last = len(sequence) - 1
    for i, c in enumerate(sequence):
        if i == last:
            yield c, cur.read_rest()
        elif c in SIZED_TYPES:
            yield c, cur.read_sized()
        else:
            yield c, cur.read_cstring()


def _iter_self_describing(cur: EntryCursor) -> Iterator[Tuple[str, bytes]]:
    while cur.consumed < cur.end - cur.start:
        tag = chr(cur.read_u8())
        if tag.islower():
            yield tag, cur.read_cstring()
        else:
            yield tag, cur.read_sized()


def iter_fields(record: WordRecord, info: DictInfo, data: DictData) -> Iterator[Tuple[str, bytes]]:
    """
    Yield (tag, value) for every field of the record's entry, in on-disk order.
    Bounds are checked before the first field is produced.
    """
    cur = _entry_cursor(record, data)
    if info.is_uniform_layout():
        return _iter_uniform(cur, info.uniform_layout_sequence())
    return _iter_self_describing(cur)


def decode(record: WordRecord, info: DictInfo, data: DictData) -> Dict[str, bytes]:
    """
    Decode one entry into {tag: value}. A repeated tag keeps its last value.

    Raises:
        OutOfRangeError: record.offset + record.length is past the buffer
        CorruptDataError: the fields do not fit the declared entry length
    """
    fields: Dict[str, bytes] = {}
    for tag, value in iter_fields(record, info, data):
        fields[tag] = value
    return fields


def decode_text(record: WordRecord, info: DictInfo, data: DictData) -> str:
    """Decode every field as UTF-8 and join them with newlines."""
    parts = []
    for tag, value in decode(record, info, data).items():
        try:
            parts.append(value.decode("utf-8"))
        except UnicodeDecodeError as e:
            raise EncodingError(
                f"field {tag!r} of {record.word!r} (record {record.ordinal}) is not valid UTF-8: {e}"
            ) from e
    return "\n".join(parts)
