"""
dictengine/dictdata.py

DictData owns the whole .dict payload as one immutable buffer.

.dict.dz files are dictzip, which is plain gzip with an extra header field,
so gzip.decompress reads them. The file is decompressed once at load time and
every later lookup slices the same buffer.
"""

import gzip
import zlib
from typing import Optional

from dictengine.errors import CorruptDataError, DictFileError, OutOfRangeError

COMPRESSED_SUFFIXES = (".dz", ".gz")


class DictData:
    __slots__ = ("buf",)

    def __init__(self, buf: bytes):
        self.buf = bytes(buf)

    @classmethod
    def from_bytes(cls, data: bytes) -> "DictData":
        return cls(data)

    @classmethod
    def load(cls, path: str, compressed: Optional[bool] = None, verbose: bool = True) -> "DictData":
        """
        Read a .dict file. compressed=None decides by suffix (.dz / .gz).
        """
        if compressed is None:
            compressed = path.endswith(COMPRESSED_SUFFIXES)
        try:
            with open(path, "rb") as f:
                raw = f.read()
        except OSError as e:
            raise DictFileError(f"cannot read dict file {path}: {e}") from e

        if compressed:
            try:
                data = gzip.decompress(raw)
            except (OSError, EOFError, zlib.error) as e:
                raise CorruptDataError(f"{path}: gzip decompression failed: {e}") from e
            if verbose:
                print(f"[DictData] inflated {len(raw)} -> {len(data)} bytes from {path}")
        else:
            data = raw
            if verbose:
                print(f"[DictData] loaded {len(data)} bytes from {path}")
        return cls(data)

    def slice_at(self, offset: int, length: int) -> memoryview:
        if offset < 0 or length < 0 or offset + length > len(self.buf):
            raise OutOfRangeError(
                f"entry [{offset}, {offset + length}) outside dict buffer of {len(self.buf)} bytes"
            )
        return memoryview(self.buf)[offset:offset + length]

    def __len__(self) -> int:
        return len(self.buf)
