"""
dictengine/dump.py

Populate the sqlite word store from a StarDict dictionary.

For every record of the .idx file (in file order) the entry is decoded to
text and inserted as (word, meaning). The store keeps the first meaning of a
word; later homographs are counted as duplicates.

A record that fails to decode is logged and skipped, unless strict=True, in
which case the error propagates and the dump stops; records before the
failing one stay committed.

Run (from project root):
  python -m dictengine.dump data/oxford/oxford-gb-formated --db data/words.db
  python -m dictengine.dump data/oxford/oxford-gb-formated --offset-bits 64 --strict
"""

import argparse
import os
import sys
import time

from dictengine.dictionary import Dictionary
from dictengine.errors import StarDictError
from dictengine.paths import DB_PATH, DICT_PREFIX, OFFSET_BITS
from dictengine.store import WordStore
from dictengine.utils import clean_meaning

BATCH_SIZE = 1000


def populate(dictionary: Dictionary, store: WordStore, strict: bool = False, clean: bool = False,
             batch_size: int = BATCH_SIZE, verbose: bool = True) -> dict:
    """
    Decode every index record and insert it into `store`.

    On a strict abort every record before the failing one is committed first,
    so the store content does not depend on batch_size.

    Returns stats: {"records", "inserted", "duplicates", "failed"}.
    """
    store.create_table()
    stats = {"records": 0, "inserted": 0, "duplicates": 0, "failed": 0}
    batch = []

    def flush():
        inserted, skipped = store.insert_many(batch)
        stats["inserted"] += inserted
        stats["duplicates"] += skipped
        batch.clear()

    def skip(rec, exc):
        stats["records"] += 1
        stats["failed"] += 1
        if verbose:
            print(f"[Dump] skip record {rec.ordinal} {rec.word!r}: {exc}")

    try:
        for word, meaning in dictionary.iter_entries(on_error=None if strict else skip):
            stats["records"] += 1
            if clean:
                meaning = clean_meaning(meaning)
            batch.append((word, meaning))
            if len(batch) >= batch_size:
                flush()
                if verbose:
                    print(f"[Dump] {stats['records']}/{len(dictionary)} records processed")
    finally:
        if batch:
            flush()
    return stats


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Dump a StarDict dictionary into a sqlite word store.")
    ap.add_argument("prefix", nargs="?", default=DICT_PREFIX,
                    help="path prefix of the dictionary files (without .ifo/.idx/.dict)")
    ap.add_argument("--db", default=DB_PATH, help="sqlite database to create or extend")
    ap.add_argument("--offset-bits", type=int, choices=[32, 64], default=OFFSET_BITS,
                    help="width of word_data_offset in the .idx file")
    ap.add_argument("--strict", action="store_true", help="abort on the first record that fails to decode")
    ap.add_argument("--clean", action="store_true", help="unescape HTML entities and fix mojibake before storing")
    ap.add_argument("--batch-size", type=int, default=BATCH_SIZE, help="rows per insert transaction")
    ap.add_argument("--quiet", action="store_true", help="Less logging.")
    args = ap.parse_args(argv)
    verbose = not args.quiet

    try:
        dictionary = Dictionary.load(args.prefix, offset_bits=args.offset_bits, verbose=verbose)
    except StarDictError as e:
        print(f"[Dump] cannot load {args.prefix}: {e}", file=sys.stderr)
        return 1

    db_dir = os.path.dirname(args.db)
    if db_dir:
        os.makedirs(db_dir, exist_ok=True)

    t0 = time.perf_counter()
    with WordStore(args.db) as store:
        try:
            stats = populate(dictionary, store, strict=args.strict, clean=args.clean,
                             batch_size=args.batch_size, verbose=verbose)
        except StarDictError as e:
            print(f"[Dump] aborted: {e}", file=sys.stderr)
            return 2
    dt = time.perf_counter() - t0

    print(f"[Dump] {dictionary.name}: records={stats['records']} inserted={stats['inserted']} "
          f"duplicates={stats['duplicates']} failed={stats['failed']} -> {args.db} ({dt:.2f}s)")
    return 0


if __name__ == "__main__":
    sys.exit(main())
