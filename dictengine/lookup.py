"""
dictengine/lookup.py

Interactive word lookup against the sqlite word store.

    > hel<Tab>       complete from the words in the store (hello, help, ...)
    > hello          print the meaning of "hello"
    > hel*           list words starting with "hel"
    > exit           quit

Run (after `dictengine-dump`):
  dictengine-lookup --db data/words.db
  python -m dictengine.lookup --db data/words.db
"""

import argparse
import sys

from dictengine.paths import DB_PATH
from dictengine.store import WordStore

PROMPT = "> "


class WordCompleter:
    """
    readline completer over WordStore.get_candidates.

    readline calls complete(text, state) with state = 0, 1, 2, ... until it
    returns None; candidates are fetched once per new text (state == 0).
    """

    def __init__(self, store: WordStore, limit: int = 20):
        self.store = store
        self.limit = limit
        self._matches = []

    def complete(self, text: str, state: int):
        if state == 0:
            self._matches = self.store.get_candidates(text, limit=self.limit) if text else []
        if state < len(self._matches):
            return self._matches[state]
        return None


def install_completer(store: WordStore, limit: int = 20):
    """Bind Tab to word completion; returns the completer or None without readline."""
    try:
        import readline
    except ImportError:
        return None
    completer = WordCompleter(store, limit=limit)
    readline.set_completer(completer.complete)
    # whole input line is one word, phrases included
    readline.set_completer_delims("")
    readline.parse_and_bind("tab: complete")
    return completer


def answer(store: WordStore, line: str, limit: int = 20) -> str:
    """Response text for one input line."""
    word = line.strip()
    if not word:
        return ""
    if word.endswith("*"):
        candidates = store.get_candidates(word[:-1], limit=limit)
        return "\n".join(candidates) if candidates else f"(no words start with {word[:-1]!r})"
    meaning = store.get_meaning(word)
    return meaning if meaning else f"(not found: {word!r})"


def _read_line(stdin, stdout):
    # input() goes through readline (and the completer) only on the real terminal
    if stdin is None:
        try:
            return input(PROMPT) + "\n"
        except EOFError:
            return ""
    stdout.write(PROMPT)
    stdout.flush()
    return stdin.readline()


def repl(store: WordStore, stdin=None, stdout=None, limit: int = 20):
    """
    Read words until 'exit' or end of input. stdin=None reads the terminal
    with line editing; pass a stream to read from it instead.
    """
    if stdout is None:
        stdout = sys.stdout
    while True:
        line = _read_line(stdin, stdout)
        if not line:
            break
        if line.strip() == "exit":
            break
        out = answer(store, line, limit=limit)
        if out:
            stdout.write(out + "\n")


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Interactive dictionary lookup")
    ap.add_argument("--db", default=DB_PATH, help="sqlite word store built by dictengine-dump")
    ap.add_argument("--limit", type=int, default=20, help="max candidates for Tab completion and 'prefix*'")
    args = ap.parse_args(argv)

    with WordStore(args.db) as store:
        store.create_table()
        if install_completer(store, limit=args.limit) is None:
            print("[Lookup] readline unavailable; use 'prefix*' to list words")
        print(f"[Lookup] {len(store)} words in {args.db}; Tab completes, 'exit' quits")
        repl(store, limit=args.limit)
    return 0


if __name__ == "__main__":
    sys.exit(main())
