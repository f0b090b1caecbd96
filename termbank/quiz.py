import random

from termcolor import colored

from termbank.config import clamp_stages
from termbank.display import error
from termbank.errors import GlossaryError, UnknownOption

KEY = 'key'
DEF = 'def'
MODES = (KEY, DEF)

OPTION_COUNT = 4
OPTION_LETTERS = 'ABCD'


class Question:
    def __init__(self, number, prompt, options, answer):
        self.number = number
        self.prompt = prompt
        self.options = options
        self.answer = answer

    def is_correct(self, choice):
        # Two slots may hold the same text when repeats were tolerated
        return self.options[choice] == self.options[self.answer]

    def __str__(self):
        lines = [f"{self.number}. {self.prompt}"]
        for letter, option in zip(OPTION_LETTERS, self.options):
            lines.append(f"{letter}. {option}.")
        return '\n'.join(lines)


def score(correct, stages):
    """Percentage of correct answers, halves rounded up."""
    return (correct * 200 + stages) // (2 * stages)


def parse_choice(answer):
    """Map A-D / a-d / 1-4 to an option slot."""
    answer = answer.strip().upper()
    if len(answer) == 1 and answer in OPTION_LETTERS:
        return OPTION_LETTERS.index(answer)
    if answer in ('1', '2', '3', '4'):
        return int(answer) - 1
    raise UnknownOption(answer, "A/B/C/D/1/2/3/4")


class QuizGenerator:
    """Builds multiple choice questions from random records.

    In ``key`` mode a definition is shown and the keyword must be picked,
    in ``def`` mode it is the other way round.
    """

    def __init__(self, store, rng=None):
        self.store = store
        self.rng = rng or random.Random()

    def sample(self, stages):
        """Pick (record, definition) pairs, distinct unless the store is too small."""
        size = self.store.size()
        if size == 0:
            raise GlossaryError("Not enough entries for a quiz.")
        allow_repeats = size < stages
        picked = []
        seen = set()
        while len(picked) < stages:
            record = self.store.by_insertion_id(self.rng.randrange(size))
            if not allow_repeats and record.keyword in seen:
                continue
            seen.add(record.keyword)
            definition = record.definitions[self.rng.randrange(len(record.definitions))]
            picked.append((record, definition))
        return picked

    def questions(self, mode, stages):
        if mode not in MODES:
            raise UnknownOption(mode, "'key' and 'def'")
        stages = clamp_stages(stages)
        return [self.question(number, mode, record, definition)
                for number, (record, definition) in enumerate(self.sample(stages), start=1)]

    def question(self, number, mode, record, definition):
        if mode == KEY:
            prompt = f"{definition}:"
            correct = record.keyword
        else:
            prompt = f"What is {record.keyword}?"
            correct = definition

        answer = self.rng.randrange(OPTION_COUNT)
        options = [None] * OPTION_COUNT
        options[answer] = correct
        pool = self._distractor_pool(mode, record, correct)
        for slot in range(OPTION_COUNT):
            if slot != answer:
                options[slot] = self._draw(mode, record, options, pool)
        return Question(number, prompt, options, answer)

    def _draw(self, mode, record, options, pool):
        """A distractor not shown yet, or any value once the pool is used up."""
        unused = pool.difference(options)
        size = self.store.size()
        while True:
            other = self.store.by_insertion_id(self.rng.randrange(size))
            if mode == KEY:
                value = other.keyword
            else:
                value = other.definitions[self.rng.randrange(len(other.definitions))]
            if not unused or (other is not record and value in unused):
                return value

    def _distractor_pool(self, mode, record, correct):
        pool = set()
        for other in self.store:
            if other is record:
                continue
            if mode == KEY:
                pool.add(other.keyword)
            else:
                pool.update(other.definitions)
        pool.discard(correct)
        return pool


def play(questions, prompter, settings=None):
    """Ask every question and return how many were answered correctly."""
    correct = 0
    for question in questions:
        print(question)
        while True:
            try:
                choice = parse_choice(prompter.ask())
                break
            except UnknownOption as e:
                error(e, settings)
        if question.is_correct(choice):
            print(colored(" * CORRECT!!!", 'green'))
            correct += 1
        else:
            right = question.answer
            print(colored(" * Wrong answer... The correct one is "
                          f"{OPTION_LETTERS[right]}. {question.options[right]}.", 'red'))
    return correct


def run_quiz(store, mode, stages, prompter, rng=None, settings=None):
    """Generate a quiz, play it and return the score out of 100."""
    questions = QuizGenerator(store, rng).questions(mode, stages)
    title = "Keyword" if mode == KEY else "Definition"
    print(f"-- Welcome to Quiz Game: {title}")
    correct = play(questions, prompter, settings)
    result = score(correct, len(questions))
    print(f"-- Game complete! Your score: {result}.")
    return result
