"""
dictengine/app.py

Flask web application for dictionary lookup and autocomplete.

Serves from the sqlite word store built by `dictengine-dump`.
When started with --prefix it also keeps the StarDict files loaded and
answers /lookup with the live decoded fields of every homograph.
"""

import argparse
import base64
import time
from flask import Flask, request, jsonify
from dictengine.dictionary import Dictionary
from dictengine.errors import StarDictError
from dictengine.paths import DB_PATH, OFFSET_BITS
from dictengine.store import WordStore

app = Flask(__name__)

# Global lookup backends
store = None
dictionary = None

DEFAULT_LIMIT = 10
MAX_LIMIT = 100


def initialize(db_path=DB_PATH, prefix=None, offset_bits=OFFSET_BITS):
    """Open the word store and, optionally, the StarDict files."""
    global store, dictionary
    try:
        print("Opening word store...")
        store = WordStore(db_path)
        store.create_table()
        print(f"Word store ready: {db_path} ({len(store)} words)")
    except Exception as e:
        print(f"Error opening word store: {e}")
        store = None
    if prefix:
        try:
            dictionary = Dictionary.load(prefix, offset_bits=offset_bits)
        except StarDictError as e:
            print(f"Error loading dictionary {prefix}: {e}")
            dictionary = None


def _field_json(tag, value):
    """Text fields as str, binary fields ('W', 'P', ...) as base64."""
    if tag.islower():
        try:
            return {'type': tag, 'text': value.decode('utf-8')}
        except UnicodeDecodeError:
            pass
    return {'type': tag, 'base64': base64.b64encode(value).decode('ascii')}


@app.route('/lookup', methods=['POST'])
def lookup():
    """Meaning of one word."""
    if store is None and dictionary is None:
        return jsonify({'error': 'Dictionary not initialized'}), 500

    data = request.get_json(silent=True) or {}
    word = (data.get('word') or '').strip()
    if not word:
        return jsonify({'error': 'Empty word'}), 400

    start_time = time.perf_counter()
    try:
        if dictionary is not None:
            entries = [
                [_field_json(tag, value) for tag, value in fields.items()]
                for fields in dictionary.lookup(word)
            ]
            found = bool(entries)
            payload = {'word': word, 'entries': entries}
        else:
            meaning = store.get_meaning(word)
            found = bool(meaning)
            payload = {'word': word, 'meaning': meaning}
    except StarDictError as e:
        print(f"Lookup error: {e}")
        return jsonify({'error': f'Lookup failed: {e}'}), 500
    payload['lookupTime'] = (time.perf_counter() - start_time) * 1000  # ms

    if not found:
        payload['error'] = 'Word not found'
        return jsonify(payload), 404
    return jsonify(payload)


@app.route('/complete')
def complete():
    """Autocomplete candidates for a prefix."""
    if store is None:
        return jsonify({'error': 'Word store not initialized'}), 500

    prefix = request.args.get('prefix', '')
    if not prefix:
        return jsonify({'error': 'Empty prefix'}), 400
    try:
        limit = int(request.args.get('limit', DEFAULT_LIMIT))
    except ValueError:
        return jsonify({'error': 'Invalid limit'}), 400
    limit = max(1, min(limit, MAX_LIMIT))

    candidates = store.get_candidates(prefix, limit=limit)
    return jsonify({'prefix': prefix, 'candidates': candidates, 'total': len(candidates)})


@app.route('/health')
def health():
    """Health check endpoint."""
    return jsonify({
        'status': 'healthy',
        'store_initialized': store is not None,
        'dictionary_loaded': dictionary is not None,
    })


def main(argv=None):
    ap = argparse.ArgumentParser(description="Dictionary lookup web app")
    ap.add_argument("--db", default=DB_PATH, help="sqlite word store built by dictengine-dump")
    ap.add_argument("--prefix", default=None, help="StarDict path prefix for live decoding")
    ap.add_argument("--offset-bits", type=int, choices=[32, 64], default=OFFSET_BITS)
    ap.add_argument("--port", type=int, default=5001)
    ap.add_argument("--debug", action="store_true", help="Flask debug mode")
    args = ap.parse_args(argv)

    initialize(db_path=args.db, prefix=args.prefix, offset_bits=args.offset_bits)
    app.run(debug=args.debug, host='0.0.0.0', port=args.port)


if __name__ == '__main__':
    main()
