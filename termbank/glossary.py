import copy
import os
import random

from termcolor import colored

from termbank import importer, serializer
from termbank.config import DEFAULT_SETTINGS
from termbank.display import format_record, print_records, warn
from termbank.editing import AddFlow, EditSession, add_definition
from termbank.errors import GlossaryError, IOFailure
from termbank.history import DEFINITION, KIND_NAMES, HistoryLog
from termbank.quiz import QuizGenerator, run_quiz
from termbank.search import search
from termbank.store import Store


class Glossary:
    """Operations behind every console command, on one opened glossary."""

    def __init__(self, settings=None, rng=None):
        self.settings = settings or copy.deepcopy(DEFAULT_SETTINGS)
        self.rng = rng or random.Random()
        self.path = None
        self.store = Store()
        self.history = HistoryLog()

    @classmethod
    def open(cls, path, settings=None, rng=None):
        glossary = cls(settings, rng)
        glossary.load(path)
        return glossary

    @property
    def cache_path(self):
        return serializer.cache_path(self.path)

    @property
    def history_path(self):
        return serializer.history_path(self.path)

    def load(self, path):
        """Read the cache next to path if there is one, otherwise import path.

        Nothing changes in memory when a file cannot be read.
        """
        store = self._read_store(path)
        history = HistoryLog(serializer.read_history(serializer.history_path(path), self.settings))
        self.path = path
        self.store = store
        self.history = history

    def _read_store(self, path):
        csv_path = serializer.cache_path(path)
        if os.path.exists(csv_path):
            return serializer.read_cache(csv_path, self.settings)

        import_settings = self.settings['import']
        store = importer.import_file(path, import_settings['delimiter'],
                                     import_settings['separator'], self.settings)
        try:
            serializer.write_cache(csv_path, store)
        except IOFailure as e:
            warn(f"{e} Changes will be written on the next save.", self.settings)
            store.dirty = True
        return store

    def is_dirty(self):
        return self.store.dirty

    # ----------------------------------------
    # QUERIES
    # ----------------------------------------

    def print_all(self):
        print("Printing content of Glossary...")
        print_records(self.store.all(), self.settings)

    def search(self, kind, term):
        if kind not in KIND_NAMES:
            raise GlossaryError(f"Unknown search kind {kind!r}")
        print(f"Searching for {term} as {KIND_NAMES[kind]}...")
        results = search(self.store, self.history, kind, term)
        if results:
            print("The following results are found:")
            print_records(results, self.settings, term if kind == DEFINITION else None)
        elif not self.settings.get('silent_fail', False):
            print(f"No entries found for '{term}'\n")
        return results

    def print_history(self):
        print("Printing search history...")
        for entry in self.history:
            print(f"By {KIND_NAMES[entry.kind]}: {entry.term}")
        print()

    def random_pick(self):
        if not self.store.size():
            raise GlossaryError("The glossary is empty.")
        record = self.store.by_insertion_id(self.rng.randrange(self.store.size()))
        print("Term of the day:")
        print(format_record(record, self.settings))
        return record

    # ----------------------------------------
    # CHANGES
    # ----------------------------------------

    def add(self, keyword, definition, option=None):
        return add_definition(self.store, keyword, definition, option)

    def add_interactive(self, prompter, keyword='', definition=''):
        return AddFlow(self.store, prompter, self.settings).run(keyword, definition)

    def edit(self, keyword, prompter=None):
        return EditSession(self.store, keyword, prompter, self.settings)

    def delete(self, keyword, confirmed):
        """Remove keyword when the caller confirmed it, report whether it did."""
        record = self.store.get(keyword)
        if record is None:
            print(f"Term '{keyword}' does not exist.")
            return False
        if not confirmed:
            print("Deleting cancelled.")
            return False
        self.store.remove(keyword)
        print(colored("Term deleted from glossary.", 'green'))
        return True

    def reset(self):
        """Drop the cache and import the original file again."""
        csv_path = self.cache_path
        if os.path.abspath(csv_path) == os.path.abspath(self.path):
            raise IOFailure(f"'{self.path}' is the cache itself, there is nothing to reset from.", self.path)
        if not os.path.exists(self.path):
            raise IOFailure(f"'{self.path}' no longer exists.", self.path)
        try:
            if os.path.exists(csv_path):
                os.remove(csv_path)
        except OSError as e:
            raise IOFailure(f"Error removing '{csv_path}': {e}", csv_path) from e
        self.store = self._read_store(self.path)

    # ----------------------------------------
    # QUIZ
    # ----------------------------------------

    def quiz(self, mode, stages):
        return QuizGenerator(self.store, self.rng).questions(mode, stages)

    def play_quiz(self, mode, stages, prompter):
        return run_quiz(self.store, mode, stages, prompter, self.rng, self.settings)

    # ----------------------------------------
    # PERSISTENCE
    # ----------------------------------------

    def save(self):
        serializer.write_cache(self.cache_path, self.store)
        self.store.mark_clean()
        self.save_history()
        print("Done.")

    def save_history(self):
        if self.history.dirty:
            serializer.write_history(self.history_path, self.history)
            self.history.mark_clean()
