"""
dictengine/index.py

Reader for the StarDict .idx word list.

The file is a packed sequence of records with no header and no padding:

    word_str          utf-8 bytes terminated by '\\0'
    word_data_offset  uint32 (or uint64 when idxoffsetbits=64), big-endian
    word_data_size    uint32, big-endian, whatever the offset width

A word may appear in several records (homographs); each points at its own
entry block in the .dict file. WordIndex keeps both the records in file order
and a word -> [records] map, so lookups return every block in file order.
"""

from __future__ import annotations
import struct
from typing import Dict, Iterator, List, NamedTuple

from dictengine.errors import DictFileError, EncodingError, TruncatedInputError

_U32 = struct.Struct(">I")
_U64 = struct.Struct(">Q")


class WordRecord(NamedTuple):
    word: str
    offset: int    # byte offset into the decompressed .dict buffer
    length: int    # byte length of the entry block
    ordinal: int   # position in the .idx file, zero-based


class WordIndex:
    """
    In-memory .idx index.

    Typical usage:
        idx = WordIndex.load("data/oxford.idx")
        for rec in idx.lookup("hello"):
            print(rec.offset, rec.length)
    """

    def __init__(self, records: List[WordRecord]):
        self._records = records
        self._by_word: Dict[str, List[WordRecord]] = {}
        for rec in records:
            self._by_word.setdefault(rec.word, []).append(rec)

    @classmethod
    def from_bytes(cls, data: bytes, offset_bits: int = 32) -> "WordIndex":
        if offset_bits == 32:
            off_struct = _U32
        elif offset_bits == 64:
            off_struct = _U64
        else:
            raise ValueError(f"offset_bits must be 32 or 64, got {offset_bits}")

        view = memoryview(data)
        size = len(data)
        records: List[WordRecord] = []
        pos = 0
        while pos < size:
            nul = data.find(b"\0", pos)
            if nul == -1:
                raise TruncatedInputError(f"unterminated word at byte {pos} (record {len(records)})")
            try:
                word = bytes(view[pos:nul]).decode("utf-8")
            except UnicodeDecodeError as e:
                raise EncodingError(f"word at byte {pos} is not valid UTF-8: {e}") from e
            pos = nul + 1

            # offset + size must both fit before end-of-buffer
            if pos + off_struct.size + _U32.size > size:
                raise TruncatedInputError(
                    f"record {len(records)} ({word!r}) cut short: "
                    f"need {off_struct.size + _U32.size} bytes at {pos}, have {size - pos}"
                )
            offset = off_struct.unpack_from(view, pos)[0]
            pos += off_struct.size
            length = _U32.unpack_from(view, pos)[0]
            pos += _U32.size

            records.append(WordRecord(word, offset, length, len(records)))
        return cls(records)

    @classmethod
    def load(cls, path: str, offset_bits: int = 32, verbose: bool = True) -> "WordIndex":
        try:
            with open(path, "rb") as f:
                data = f.read()
        except OSError as e:
            raise DictFileError(f"cannot read idx file {path}: {e}") from e
        idx = cls.from_bytes(data, offset_bits=offset_bits)
        if verbose:
            print(f"[WordIndex] loaded {len(idx)} records ({len(idx._by_word)} words) from {path}")
        return idx

    def all(self) -> List[WordRecord]:
        """Every record in file order."""
        return list(self._records)

    def lookup(self, word: str) -> List[WordRecord]:
        """Records for an exact word, in file order; [] when absent."""
        return list(self._by_word.get(word, ()))

    def words(self) -> Iterator[str]:
        """Distinct words, first-seen order."""
        return iter(self._by_word)

    def __iter__(self) -> Iterator[WordRecord]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, word) -> bool:
        return word in self._by_word
