"""Parse the free-text glossary format into a Store.

The first line is a header. Every other line is either a keyword line
(``keyword`def1|def2``) or a continuation line (``def3|def4``) whose
definitions extend the keyword declared most recently.
"""
from termbank.display import warn
from termbank.errors import IOFailure
from termbank.store import Record, Store, clean_definitions

DELIMITER = '`'
SEPARATOR = '|'


def parse_import(text, delimiter=DELIMITER, separator=SEPARATOR, settings=None):
    """Return a clean Store built from raw import text."""
    store = Store()
    # Keyword line still collecting continuation lines
    keyword = None
    definitions = []

    lines = text.splitlines()
    # Skip columns name
    for line_no, line in enumerate(lines[1:], start=2):
        if not line.strip():
            continue
        parts = line.split(delimiter, 1)
        if len(parts) == 2:
            _flush(store, keyword, definitions, settings)
            keyword = parts[0].strip()
            definitions = clean_definitions(parts[1].split(separator))
            if not keyword:
                warn(f"Line {line_no} has an empty keyword, ignored.", settings)
                keyword = None
        elif keyword is None:
            warn(f"Line {line_no} continues an unknown keyword, ignored.", settings)
        else:
            definitions.extend(clean_definitions(parts[0].split(separator)))
    _flush(store, keyword, definitions, settings)

    store.mark_clean()
    return store


def _flush(store, keyword, definitions, settings):
    if keyword is None:
        return
    if definitions:
        store.put(Record(keyword, definitions))
    else:
        warn(f"'{keyword}' has no definitions, ignored.", settings)


def import_file(path, delimiter=DELIMITER, separator=SEPARATOR, settings=None):
    """Read and parse a raw glossary file."""
    print(f"Reading from '{path}'...")
    try:
        with open(path, 'r', encoding='utf-8') as f:
            text = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise IOFailure(f"Error reading file '{path}': {e}", path) from e
    store = parse_import(text, delimiter, separator, settings)
    print("Done.")
    return store
