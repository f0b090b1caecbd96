from termbank.history import DEFINITION, KEYWORD


def search_by_keyword(store, history, term):
    """Records whose whole keyword equals term, ignoring case."""
    term = term.strip()
    if not term:
        return []
    history.record(KEYWORD, term)
    return store.get_case_insensitive(term)


def search_by_definition(store, history, term):
    """Records with a definition containing term, ignoring case."""
    term = term.strip()
    if not term:
        return []
    history.record(DEFINITION, term)
    wanted = term.lower()
    return [record for record in store.all()
            if any(wanted in definition.lower() for definition in record.definitions)]


SEARCHES = {
    KEYWORD: search_by_keyword,
    DEFINITION: search_by_definition
}


def search(store, history, kind, term):
    if kind not in SEARCHES:
        raise ValueError(f"Unknown search kind {kind!r}")
    return SEARCHES[kind](store, history, term)
