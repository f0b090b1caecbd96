from termbank.errors import InvalidRecord, KeywordNotFound


class Record:
    """One keyword and its ordered definitions."""

    def __init__(self, keyword, definitions):
        keyword = keyword.strip()
        if not keyword:
            raise InvalidRecord("Keyword cannot be empty.")
        self.keyword = keyword
        self.definitions = clean_definitions(definitions)
        if not self.definitions:
            raise InvalidRecord(f"'{keyword}' needs at least one definition.")

    def __eq__(self, other):
        if not isinstance(other, Record):
            return NotImplemented
        return self.keyword == other.keyword and self.definitions == other.definitions

    def __repr__(self):
        return f"Record({self.keyword!r}, {self.definitions!r})"


def clean_definitions(definitions):
    """Trim every definition and drop the empty ones."""
    cleaned = []
    for definition in definitions:
        definition = definition.strip()
        if definition:
            cleaned.append(definition)
    return cleaned


class Store:
    """Records of one glossary.

    Iteration goes in keyword order. A second list keeps insertion order so
    random picks can address every record by an integer id.
    """

    def __init__(self):
        self._records = {}
        self._order = []
        self.dirty = False

    @classmethod
    def from_records(cls, records):
        """Build a clean store, later records replacing earlier ones."""
        store = cls()
        for record in records:
            store._insert(record)
        return store

    def __len__(self):
        return len(self._records)

    def __contains__(self, keyword):
        return keyword in self._records

    def __iter__(self):
        return iter(self.all())

    def size(self):
        return len(self._records)

    def get(self, keyword):
        return self._records.get(keyword)

    def get_case_insensitive(self, keyword):
        """Every record whose keyword equals keyword ignoring case, sorted."""
        wanted = keyword.lower()
        return [record for record in self.all() if record.keyword.lower() == wanted]

    def put(self, record):
        self._insert(record)
        self.dirty = True

    def replace_definitions(self, keyword, definitions):
        record = self._records.get(keyword)
        if record is None:
            raise KeywordNotFound(keyword)
        definitions = clean_definitions(definitions)
        if not definitions:
            raise InvalidRecord(f"'{keyword}' needs at least one definition.")
        record.definitions = definitions
        self.dirty = True

    def remove(self, keyword):
        if keyword not in self._records:
            raise KeywordNotFound(keyword)
        del self._records[keyword]
        self._order.remove(keyword)
        self.dirty = True

    def all(self):
        return [self._records[keyword] for keyword in sorted(self._records)]

    def by_insertion_id(self, n):
        if n < 0 or n >= len(self._order):
            raise IndexError(f"No record with id {n}, the store holds {len(self._order)}.")
        return self._records[self._order[n]]

    def mark_clean(self):
        self.dirty = False

    def _insert(self, record):
        if record.keyword not in self._records:
            self._order.append(record.keyword)
        self._records[record.keyword] = record
