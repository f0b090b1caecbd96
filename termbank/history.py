from collections import namedtuple

KEYWORD = 0
DEFINITION = 1

KIND_NAMES = {
    KEYWORD: 'keyword',
    DEFINITION: 'definition'
}

HistoryEntry = namedtuple('HistoryEntry', ['kind', 'term'])


class HistoryLog:
    """Append-only log of search queries.

    Entries loaded from disk come first and are never touched. Queries made
    during this session are appended after them; a session logs each
    (kind, term) pair once, so repeating a search does not grow the log while
    a new term of an already logged kind is still appended.
    """

    def __init__(self, persisted=None):
        self._entries = list(persisted or [])
        self._session = set()
        self.dirty = False

    def __len__(self):
        return len(self._entries)

    def __iter__(self):
        return iter(self._entries)

    def entries(self):
        return list(self._entries)

    def record(self, kind, term):
        """Log a query, returning False when the session already has it."""
        if kind not in KIND_NAMES:
            raise ValueError(f"Unknown search kind {kind!r}")
        entry = HistoryEntry(kind, term)
        if entry in self._session:
            return False
        self._session.add(entry)
        self._entries.append(entry)
        self.dirty = True
        return True

    def mark_clean(self):
        self.dirty = False
