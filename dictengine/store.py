"""
dictengine/store.py

sqlite-backed word -> meaning store, filled by dictengine.dump and read by the
lookup front ends (lookup.py, app.py).

Schema:
    words(id integer primary key, word text not null, meaning text not null)
    unique index idx_words on words(word)

The unique index decides the duplicate policy: the first meaning stored for a
word is kept and later inserts of the same word are skipped.
"""

from __future__ import annotations
import sqlite3
import threading
from typing import Iterable, List, Optional, Tuple

SCHEMA = (
    """create table if not exists words(
        id integer primary key,
        word text not null,
        meaning text not null
    )""",
    "create unique index if not exists idx_words on words(word)",
)


def _like_prefix(prefix: str) -> str:
    escaped = prefix.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return escaped + "%"


class WordStore:
    def __init__(self, db_path: str):
        self.db_path = db_path
        self._lock = threading.RLock()
        self._conn = sqlite3.connect(db_path, check_same_thread=False)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False

    def create_table(self):
        with self._lock, self._conn:
            for sql in SCHEMA:
                self._conn.execute(sql)

    def insert_word(self, word: str, meaning: str) -> bool:
        """Insert one word; False if the word is already stored."""
        with self._lock, self._conn:
            cur = self._conn.execute(
                "insert or ignore into words(word, meaning) values (?, ?)", (word, meaning)
            )
            return cur.rowcount == 1

    def insert_many(self, pairs: Iterable[Tuple[str, str]]) -> Tuple[int, int]:
        """
        Insert (word, meaning) pairs in a single transaction.
        Returns (inserted, skipped_duplicates).
        """
        inserted = skipped = 0
        with self._lock, self._conn:
            for word, meaning in pairs:
                cur = self._conn.execute(
                    "insert or ignore into words(word, meaning) values (?, ?)", (word, meaning)
                )
                if cur.rowcount == 1:
                    inserted += 1
                else:
                    skipped += 1
        return inserted, skipped

    def get_meaning(self, word: str) -> str:
        """Stored meaning of `word`, or "" when it is not in the store."""
        with self._lock:
            row = self._conn.execute(
                "select meaning from words where word = ?", (word,)
            ).fetchone()
        return row[0] if row else ""

    def get_candidates(self, prefix: str, limit: Optional[int] = None) -> List[str]:
        """Words starting with `prefix`, sorted."""
        sql = "select word from words where word like ? escape '\\' order by word"
        params: list = [_like_prefix(prefix)]
        if limit is not None:
            sql += " limit ?"
            params.append(int(limit))
        with self._lock:
            rows = self._conn.execute(sql, params).fetchall()
        return [r[0] for r in rows]

    def __contains__(self, word) -> bool:
        with self._lock:
            row = self._conn.execute("select 1 from words where word = ?", (word,)).fetchone()
        return row is not None

    def __len__(self) -> int:
        with self._lock:
            return int(self._conn.execute("select count(*) from words").fetchone()[0])

    def close(self):
        with self._lock:
            self._conn.close()
