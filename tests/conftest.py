# tests/conftest.py
# Builders for small synthetic StarDict dictionaries.
import gzip
import struct

import pytest


def pack_idx(records, offset_bits=32):
    """records: iterable of (word, offset, length) -> .idx bytes"""
    fmt = ">I" if offset_bits == 32 else ">Q"
    out = bytearray()
    for word, offset, length in records:
        out += word.encode("utf-8") + b"\0"
        out += struct.pack(fmt, offset)
        out += struct.pack(">I", length)
    return bytes(out)


def pack_entries(entries):
    """entries: list of (word, entry_bytes) -> (.dict bytes, [(word, offset, length)])"""
    buf = bytearray()
    records = []
    for word, block in entries:
        records.append((word, len(buf), len(block)))
        buf += block
    return bytes(buf), records


@pytest.fixture
def idx_bytes():
    return pack_idx


@pytest.fixture
def write_dict(tmp_path):
    """
    Write <tmp>/<name>.ifo/.idx/.dict[.dz] and return the path prefix.

        prefix = write_dict([("hello", b"hello world")], sametypesequence="m")
    """
    def _write(entries, sametypesequence=None, name="test", compressed=False,
               offset_bits=32, extra_ifo=""):
        data, records = pack_entries(entries)
        prefix = tmp_path / name
        idx = pack_idx(records, offset_bits=offset_bits)
        lines = [
            "StarDict's dict ifo file",
            "version=2.4.2",
            f"bookname={name}",
            f"wordcount={len(records)}",
            f"idxfilesize={len(idx)}",
        ]
        if sametypesequence is not None:
            lines.append(f"sametypesequence={sametypesequence}")
        text = "\n".join(lines) + "\n" + extra_ifo
        (tmp_path / f"{name}.ifo").write_text(text, encoding="utf-8")
        (tmp_path / f"{name}.idx").write_bytes(idx)
        if compressed:
            (tmp_path / f"{name}.dict.dz").write_bytes(gzip.compress(data))
        else:
            (tmp_path / f"{name}.dict").write_bytes(data)
        return str(prefix)
    return _write
