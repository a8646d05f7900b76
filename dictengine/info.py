"""
dictengine/info.py

DictInfo holds the key/value pairs of a StarDict .ifo file:

    StarDict's dict ifo file
    version=2.4.2
    bookname=Oxford Advanced Learner's Dictionary
    wordcount=39429
    idxfilesize=721264
    sametypesequence=m

The first line is a magic header and is always skipped. Every other line is
`key=value`; lines that do not split into exactly two parts are ignored, and
the first occurrence of a key wins.

The only key the decoder cares about is `sametypesequence`: when present every
entry in the .dict file shares that field layout.
"""

from typing import Dict, Optional

from dictengine.errors import DictFileError, EncodingError, PreconditionError

SAME_TYPE = "sametypesequence"


class DictInfo:
    """
    Parsed .ifo metadata.

    Typical usage:
        info = DictInfo.load("data/oxford.ifo")
        if info.is_uniform_layout():
            seq = info.uniform_layout_sequence()   # e.g. "m" or "tm"
    """

    __slots__ = ("fields",)

    def __init__(self, fields: Optional[Dict[str, str]] = None):
        self.fields: Dict[str, str] = dict(fields or {})

    @classmethod
    def from_text(cls, text: str) -> "DictInfo":
        fields: Dict[str, str] = {}
        for line in text.split("\n")[1:]:
            kv = line.split("=")
            if len(kv) != 2:
                continue
            key, value = kv[0].strip(), kv[1].strip()
            if key not in fields:
                fields[key] = value
        return cls(fields)

    @classmethod
    def load(cls, path: str, verbose: bool = True) -> "DictInfo":
        try:
            with open(path, "rb") as f:
                raw = f.read()
        except OSError as e:
            raise DictFileError(f"cannot read ifo file {path}: {e}") from e
        try:
            text = raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise EncodingError(f"{path}: ifo file is not valid UTF-8: {e}") from e
        info = cls.from_text(text)
        if verbose:
            print(f"[DictInfo] loaded {len(info.fields)} keys from {path}")
        return info

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self.fields.get(key, default)

    def is_uniform_layout(self) -> bool:
        return SAME_TYPE in self.fields

    def uniform_layout_sequence(self) -> str:
        if not self.is_uniform_layout():
            raise PreconditionError("dictionary has no sametypesequence; entries are self-describing")
        return self.fields[SAME_TYPE]

    @property
    def version(self) -> Optional[str]:
        return self.fields.get("version")

    @property
    def bookname(self) -> Optional[str]:
        return self.fields.get("bookname")

    @property
    def wordcount(self) -> Optional[int]:
        raw = self.fields.get("wordcount")
        if raw is None:
            return None
        try:
            return int(raw)
        except ValueError:
            return None

    def __contains__(self, key) -> bool:
        return key in self.fields

    def __len__(self) -> int:
        return len(self.fields)

    def __repr__(self) -> str:
        return f"DictInfo({self.fields!r})"
