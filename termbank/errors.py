"""Exceptions raised by the glossary core."""


class GlossaryError(Exception):
    """Base class for every recoverable glossary failure."""


class IOFailure(GlossaryError):
    """A glossary, cache or history file could not be read or written."""

    def __init__(self, message, path=None):
        super().__init__(message)
        self.path = path


class InvalidIndex(GlossaryError):
    """A definition index outside [1, len] was given to an edit command."""

    def __init__(self, index, length):
        super().__init__(f"Invalid index '{index}', the possible range is [1,{length}].")
        self.index = index
        self.length = length


class UnknownOption(GlossaryError):
    def __init__(self, option, valid=None):
        message = f"Unknown option '{option}'."
        if valid:
            message += f" Valid ones are {valid}."
        super().__init__(message)
        self.option = option


class UnknownCommand(GlossaryError):
    def __init__(self, command):
        super().__init__(f"Unknown command '{command}'.")
        self.command = command


class KeywordNotFound(GlossaryError):
    def __init__(self, keyword):
        super().__init__(f"Keyword '{keyword}' not found.")
        self.keyword = keyword


class InvalidRecord(GlossaryError):
    """A record would end up without a keyword or without definitions."""
