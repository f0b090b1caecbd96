from termcolor import colored

from termbank.display import error, format_definitions, format_record
from termbank.errors import GlossaryError, InvalidIndex, InvalidRecord, KeywordNotFound, UnknownCommand, UnknownOption
from termbank.store import Record

OVERWRITE = 'overwrite'
APPEND = 'append'
CANCEL = 'cancel'

ADDED = 'added'
OVERWRITTEN = 'overwritten'
APPENDED = 'appended'
CANCELLED = 'cancelled'

ADD_ANSWERS = {
    'y': OVERWRITE, 'yes': OVERWRITE,
    'a': APPEND, 'append': APPEND,
    'n': CANCEL, 'no': CANCEL, '': CANCEL
}
CONFIRM_ANSWERS = {
    'y': True, 'yes': True,
    'n': False, 'no': False, '': False
}
HELP_ANSWERS = ('?', 'h', 'help')


class Prompter:
    """Reads answers for the interactive flows."""

    def __init__(self, input_func=input):
        self.input_func = input_func

    @classmethod
    def scripted(cls, answers):
        """Prompter replaying answers, then behaving like a closed stdin."""
        remaining = iter(answers)

        def read(prompt):
            try:
                return next(remaining)
            except StopIteration:
                raise EOFError("No more scripted answers") from None
        return cls(read)

    def ask(self, prompt=" > "):
        return self.input_func(prompt).strip()

    def confirm(self, question):
        """Ask a y/N question until the answer is understood."""
        print(f"{question} (y/N)")
        while True:
            answer = self.ask().lower()
            if answer in CONFIRM_ANSWERS:
                return CONFIRM_ANSWERS[answer]
            error(UnknownOption(answer, "'y' and 'n'"))


def confirm_answer(answer):
    answer = answer.strip().lower()
    if answer not in CONFIRM_ANSWERS:
        raise UnknownOption(answer, "'y' and 'n'")
    return CONFIRM_ANSWERS[answer]


# ----------------------------------------
# ADD
# ----------------------------------------

def parse_add_option(answer):
    """Map a typed answer to an add option, None when help was asked for."""
    answer = answer.strip().lower()
    if answer in HELP_ANSWERS:
        return None
    if answer not in ADD_ANSWERS:
        raise UnknownOption(answer, "y/n/a/?")
    return ADD_ANSWERS[answer]


def add_definition(store, keyword, definition, option=None):
    """Add a definition under keyword.

    A new keyword gets a record of its own. For an existing one option picks
    what happens: OVERWRITE replaces every definition, APPEND adds it at the
    end and CANCEL leaves the store alone. Returns what was done.
    """
    keyword = keyword.strip()
    definition = definition.strip()
    if not keyword or not definition:
        raise InvalidRecord("Both a keyword and a definition are required.")

    record = store.get(keyword)
    if record is None:
        store.put(Record(keyword, [definition]))
        return ADDED
    if option == OVERWRITE:
        store.replace_definitions(keyword, [definition])
        return OVERWRITTEN
    if option == APPEND:
        store.replace_definitions(keyword, record.definitions + [definition])
        return APPENDED
    if option == CANCEL:
        return CANCELLED
    raise UnknownOption(option, f"'{OVERWRITE}', '{APPEND}' and '{CANCEL}'")


class AddFlow:
    """Ask for whatever add_definition needs and run it."""

    MESSAGES = {
        ADDED: "Term added to glossary.",
        OVERWRITTEN: "Term updated in glossary.",
        APPENDED: "Term updated in glossary.",
        CANCELLED: "Adding cancelled."
    }

    def __init__(self, store, prompter, settings=None):
        self.store = store
        self.prompter = prompter
        self.settings = settings

    def run(self, keyword='', definition=''):
        if not keyword:
            print("Enter keyword...")
            keyword = self.prompter.ask()
        if not definition:
            print("Enter definition...")
            definition = self.prompter.ask()

        option = None
        record = self.store.get(keyword.strip())
        if record is not None:
            print(f"Found an existing entry {format_record(record, self.settings)}")
            option = self.ask_option()

        result = add_definition(self.store, keyword, definition, option)
        print(self.MESSAGES[result])
        return result

    def ask_option(self):
        print("Do you want to overwrite? (y/N/a/?)")
        while True:
            try:
                option = parse_add_option(self.prompter.ask())
            except UnknownOption as e:
                error(e, self.settings)
                continue
            if option is not None:
                return option
            print("Options: y = yes, n = no (default), a = append definition, ? = show this help.")


# ----------------------------------------
# EDIT
# ----------------------------------------

LISTING = 'listing'
AWAITING_COMMAND = 'awaiting_command'
CONFIRMING_DELETE = 'confirming_delete'
DONE = 'done'

EDIT_HELP = """Edit commands:
 - (h)elp: Print this help.
 - (p)rint: Print the definitions.
 - (c)hange <id> <def>: Change the <id>th definition with <def>.
 - (d)elete <id>: Delete the <id>th definition.
 - (q)uit: Quit the edit menu."""


class EditSession:
    """Edit menu for the definitions of one record.

    The session starts in LISTING, shows the definitions and waits for a
    command. ``delete`` moves to CONFIRMING_DELETE until the next answer;
    ``quit`` ends in DONE. Failed commands are reported and change nothing.
    """

    def __init__(self, store, keyword, prompter=None, settings=None):
        if keyword not in store:
            raise KeywordNotFound(keyword)
        self.store = store
        self.keyword = keyword
        self.prompter = prompter or Prompter()
        self.settings = settings
        self.state = LISTING
        self.pending_delete = None

    @property
    def definitions(self):
        return list(self.store.get(self.keyword).definitions)

    def show(self):
        self.state = LISTING
        print(format_definitions(self.store.get(self.keyword), self.settings))
        self.state = AWAITING_COMMAND

    def run(self):
        self.show()
        print(EDIT_HELP)
        while self.state != DONE:
            prompt = " > " if self.state == CONFIRMING_DELETE else " e> "
            self.handle(self.prompter.ask(prompt))
        return self.definitions

    def handle(self, line):
        """Feed one line of input to the session and return the new state."""
        try:
            if self.state == CONFIRMING_DELETE:
                self.confirm(line)
            elif self.state != DONE:
                self.dispatch(line)
        except GlossaryError as e:
            error(e, self.settings)
        return self.state

    def dispatch(self, line):
        command, _, args = line.strip().partition(' ')
        if command in ('print', 'p', ''):
            self.show()
        elif command in ('help', 'h'):
            print(EDIT_HELP)
        elif command in ('change', 'c'):
            index, _, text = args.strip().partition(' ')
            if not text.strip():
                raise InvalidRecord("Missing arguments. Correct syntax is 'change <id> <def>'.")
            self.change(self._parse_index(index), text)
            print("Definition changed.")
        elif command in ('delete', 'd'):
            self.request_delete(self._parse_index(args.strip().split(' ')[0]))
        elif command in ('quit', 'q'):
            self.state = DONE
        else:
            raise UnknownCommand(line.strip())

    def change(self, index, text):
        definitions = self.definitions
        self._check_index(index, definitions)
        text = text.strip()
        if not text:
            raise InvalidRecord("A definition cannot be empty.")
        definitions[index - 1] = text
        self.store.replace_definitions(self.keyword, definitions)

    def request_delete(self, index):
        definitions = self.definitions
        self._check_index(index, definitions)
        if len(definitions) == 1:
            raise InvalidRecord(f"Cannot delete the only definition of '{self.keyword}'.")
        self.pending_delete = index
        self.state = CONFIRMING_DELETE
        print(f"Deleting '{definitions[index - 1]}'...")
        print("Do you want to delete this definition? (y/N)")

    def confirm(self, answer):
        """Answer the pending delete question; unknown answers ask again."""
        if confirm_answer(answer):
            self.delete(self.pending_delete)
            print(colored("Definition deleted.", 'green'))
        self.pending_delete = None
        self.state = AWAITING_COMMAND

    def delete(self, index):
        definitions = self.definitions
        self._check_index(index, definitions)
        if len(definitions) == 1:
            raise InvalidRecord(f"Cannot delete the only definition of '{self.keyword}'.")
        del definitions[index - 1]
        self.store.replace_definitions(self.keyword, definitions)

    def _parse_index(self, text):
        try:
            return int(text)
        except ValueError:
            raise InvalidIndex(text, len(self.definitions)) from None

    @staticmethod
    def _check_index(index, definitions):
        if index < 1 or index > len(definitions):
            raise InvalidIndex(index, len(definitions))
