# dictengine/dictionary.py
import os
from typing import Callable, Dict, Iterator, List, Optional, Tuple

from dictengine.decoder import decode, decode_text
from dictengine.dictdata import DictData
from dictengine.errors import DictFileError, StarDictError
from dictengine.index import WordIndex, WordRecord
from dictengine.info import DictInfo
from dictengine.paths import DICT_PREFIX, OFFSET_BITS

DICT_SUFFIXES = (".dict.dz", ".dict.gz", ".dict")


def find_dict_files(prefix: str) -> Dict[str, str]:
    """
    Resolve the three files of a dictionary from its path prefix.

    Every dictionary consists of:
        <prefix>.ifo
        <prefix>.idx
        <prefix>.dict.dz | <prefix>.dict.gz | <prefix>.dict   (first one found)
    """
    ifo = prefix + ".ifo"
    idx = prefix + ".idx"
    for path in (ifo, idx):
        if not os.path.exists(path):
            raise DictFileError(f"missing dictionary file: {path}")
    for suffix in DICT_SUFFIXES:
        dict_path = prefix + suffix
        if os.path.exists(dict_path):
            return {"ifo": ifo, "idx": idx, "dict": dict_path}
    raise DictFileError(f"missing dictionary file: {prefix}{{{','.join(DICT_SUFFIXES)}}}")


class Dictionary:
    """
    A loaded StarDict dictionary.

    - Dictionary.load(prefix) reads .ifo, .idx and .dict once; the .dict payload is inflated once and kept.
    - lookup() decodes every index record of a word against that payload.
    - iter_entries() streams (word, text) for bulk consumers such as dictengine.dump.
    """

    def __init__(self, info: DictInfo, index: WordIndex, data: DictData, prefix: str = ""):
        self.prefix = prefix
        self.info = info
        self.index = index
        self.data = data

    @classmethod
    def load(cls, prefix: str = DICT_PREFIX, offset_bits: int = OFFSET_BITS, verbose: bool = True) -> "Dictionary":
        files = find_dict_files(prefix)
        return cls(
            DictInfo.load(files["ifo"], verbose=verbose),
            WordIndex.load(files["idx"], offset_bits=offset_bits, verbose=verbose),
            DictData.load(files["dict"], verbose=verbose),
            prefix=prefix,
        )

    @classmethod
    def from_files(cls, ifo_path: str, idx_path: str, dict_path: str,
                   offset_bits: int = OFFSET_BITS, compressed: Optional[bool] = None,
                   verbose: bool = True) -> "Dictionary":
        return cls(
            DictInfo.load(ifo_path, verbose=verbose),
            WordIndex.load(idx_path, offset_bits=offset_bits, verbose=verbose),
            DictData.load(dict_path, compressed=compressed, verbose=verbose),
        )

    def decode(self, record: WordRecord) -> Dict[str, bytes]:
        return decode(record, self.info, self.data)

    def decode_text(self, record: WordRecord) -> str:
        return decode_text(record, self.info, self.data)

    def lookup(self, word: str) -> List[Dict[str, bytes]]:
        """One field map per index record of `word`, in index order; [] when absent."""
        return [self.decode(rec) for rec in self.index.lookup(word)]

    def lookup_text(self, word: str) -> List[str]:
        return [self.decode_text(rec) for rec in self.index.lookup(word)]

    def iter_records(self, on_error: Optional[Callable[[WordRecord, StarDictError], None]] = None
                     ) -> Iterator[Tuple[WordRecord, str]]:
        """
        Yield (record, text) for every index record, in index order.

        A record that fails to decode raises, unless `on_error` is given: then
        on_error(record, exc) is called and the record is skipped.
        """
        for rec in self.index:
            try:
                text = self.decode_text(rec)
            except StarDictError as e:
                if on_error is None:
                    raise
                on_error(rec, e)
                continue
            yield rec, text

    def iter_entries(self, on_error: Optional[Callable[[WordRecord, StarDictError], None]] = None
                     ) -> Iterator[Tuple[str, str]]:
        for rec, text in self.iter_records(on_error=on_error):
            yield rec.word, text

    @property
    def name(self) -> str:
        return self.info.bookname or os.path.basename(self.prefix)

    def __contains__(self, word) -> bool:
        return word in self.index

    def __len__(self) -> int:
        return len(self.index)

    def __repr__(self) -> str:
        return f"Dictionary({self.name!r}, records={len(self.index)})"
