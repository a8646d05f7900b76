# tests/test_dump.py
import pytest

from dictengine import dump
from dictengine.dictionary import Dictionary
from dictengine.errors import EncodingError
from dictengine.store import WordStore


@pytest.fixture
def store(tmp_path):
    s = WordStore(str(tmp_path / "dump.db"))
    yield s
    s.close()


def test_populate_counts_duplicates(write_dict, store):
    prefix = write_dict(
        [("bank", b"river side"), ("cat", b"animal"), ("bank", b"money house")],
        sametypesequence="m",
    )
    stats = dump.populate(Dictionary.load(prefix, verbose=False), store, verbose=False)
    assert stats == {"records": 3, "inserted": 2, "duplicates": 1, "failed": 0}
    assert store.get_meaning("bank") == "river side"
    assert store.get_meaning("cat") == "animal"


def test_populate_skips_bad_records(write_dict, store):
    prefix = write_dict([("good", b"fine"), ("bad", b"\xff\xfe"), ("also", b"ok")], sametypesequence="m")
    stats = dump.populate(Dictionary.load(prefix, verbose=False), store, batch_size=1, verbose=False)
    assert stats["failed"] == 1
    assert stats["inserted"] == 2
    assert "bad" not in store


def test_populate_strict_raises(write_dict, store):
    prefix = write_dict([("bad", b"\xff\xfe")], sametypesequence="m")
    with pytest.raises(EncodingError):
        dump.populate(Dictionary.load(prefix, verbose=False), store, strict=True, verbose=False)


def test_populate_clean(write_dict, store):
    prefix = write_dict([("salt", b"salt &amp; pepper\r\n")], sametypesequence="m")
    dump.populate(Dictionary.load(prefix, verbose=False), store, clean=True, verbose=False)
    assert store.get_meaning("salt") == "salt & pepper"


def test_main_writes_db(tmp_path, write_dict):
    prefix = write_dict([("hello", b"hello world")], sametypesequence="m", compressed=True)
    db = tmp_path / "out" / "words.db"
    assert dump.main([prefix, "--db", str(db), "--quiet"]) == 0
    with WordStore(str(db)) as s:
        assert s.get_meaning("hello") == "hello world"


def test_main_missing_dictionary(tmp_path):
    assert dump.main([str(tmp_path / "nothing"), "--db", str(tmp_path / "x.db"), "--quiet"]) == 1


def test_main_strict_abort(tmp_path, write_dict):
    prefix = write_dict([("bad", b"\xff")], sametypesequence="m")
    assert dump.main([prefix, "--db", str(tmp_path / "x.db"), "--strict", "--quiet"]) == 2


def test_populate_strict_keeps_records_before_failure(write_dict, store):
    prefix = write_dict([("a", b"one"), ("b", b"two"), ("bad", b"\xff"), ("c", b"three")],
                        sametypesequence="m")
    with pytest.raises(EncodingError):
        dump.populate(Dictionary.load(prefix, verbose=False), store, strict=True,
                      batch_size=10, verbose=False)
    assert len(store) == 2
    assert store.get_meaning("a") == "one"
    assert store.get_meaning("b") == "two"
    assert "c" not in store


def test_populate_counts_failed_with_large_batch(write_dict, store):
    prefix = write_dict([("bad", b"\xff"), ("good", b"fine")], sametypesequence="m")
    stats = dump.populate(Dictionary.load(prefix, verbose=False), store, batch_size=100, verbose=False)
    assert stats == {"records": 2, "inserted": 1, "duplicates": 0, "failed": 1}
