"""Canonical on-disk form of a glossary and its search history.

Cache file::

    Keyword,Definition
    cat,small pet|meows|

History file::

    Code,Term
    0,cat

Commas and pipes inside keywords or definitions are not escaped, so a
round trip only holds for text without them.
"""
import os

from termbank.display import warn
from termbank.errors import IOFailure
from termbank.history import KIND_NAMES, HistoryEntry
from termbank.store import Record, Store, clean_definitions

CACHE_HEADER = "Keyword,Definition"
HISTORY_HEADER = "Code,Term"
CACHE_EXTENSION = ".csv"
HISTORY_EXTENSION = ".hist.csv"


def base_name(path):
    """Path of the glossary file without its extension."""
    return os.path.splitext(path)[0]


def cache_path(path):
    return base_name(path) + CACHE_EXTENSION


def history_path(path):
    return base_name(path) + HISTORY_EXTENSION


# ----------------------------------------
# RECORDS
# ----------------------------------------

def encode_records(records):
    lines = [CACHE_HEADER]
    for record in records:
        lines.append(record.keyword + "," + ''.join(definition + "|" for definition in record.definitions))
    return '\n'.join(lines) + '\n'


def decode_records(text, settings=None):
    """Build a clean Store from cache text, skipping the header line."""
    records = []
    for line_no, line in enumerate(text.splitlines()[1:], start=2):
        if not line.strip():
            continue
        if ',' not in line:
            warn(f"Line {line_no} of the cache has no definitions, ignored.", settings)
            continue
        keyword, blob = line.split(',', 1)
        definitions = clean_definitions(blob.split('|'))
        if not keyword.strip() or not definitions:
            warn(f"Line {line_no} of the cache is incomplete, ignored.", settings)
            continue
        records.append(Record(keyword, definitions))
    return Store.from_records(records)


# ----------------------------------------
# HISTORY
# ----------------------------------------

def encode_history(entries):
    lines = [HISTORY_HEADER]
    for entry in entries:
        lines.append(f"{entry.kind},{entry.term}")
    return '\n'.join(lines) + '\n'


def decode_history(text, settings=None):
    entries = []
    for line_no, line in enumerate(text.splitlines()[1:], start=2):
        if not line.strip():
            continue
        code, _, term = line.partition(',')
        try:
            kind = int(code)
        except ValueError:
            kind = None
        if kind not in KIND_NAMES:
            warn(f"Line {line_no} of the history has unknown code '{code}', ignored.", settings)
            continue
        entries.append(HistoryEntry(kind, term))
    return entries


# ----------------------------------------
# FILES
# ----------------------------------------

def read_text(path):
    try:
        with open(path, 'r', encoding='utf-8') as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise IOFailure(f"Error reading file '{path}': {e}", path) from e


def write_text(path, text):
    """Write text next to path first, then move it into place."""
    tmp_path = path + ".tmp"
    try:
        with open(tmp_path, 'w', encoding='utf-8') as f:
            f.write(text)
        os.replace(tmp_path, path)
    except OSError as e:
        if os.path.exists(tmp_path):
            os.remove(tmp_path)
        raise IOFailure(f"Error writing file '{path}': {e}", path) from e


def read_cache(path, settings=None):
    print(f"Reading from '{path}'...")
    store = decode_records(read_text(path), settings)
    print("Done.")
    return store


def write_cache(path, store):
    print(f"Writing to '{path}'...")
    write_text(path, encode_records(store.all()))


def read_history(path, settings=None):
    """Persisted history entries, or none when the file does not exist."""
    if not os.path.exists(path):
        return []
    return decode_history(read_text(path), settings)


def write_history(path, history):
    write_text(path, encode_history(history.entries()))
