#!/usr/bin/env python3
import glob
import os
import sys

from termcolor import colored

from termbank.config import clamp_stages, get_settings
from termbank.display import error
from termbank.editing import Prompter
from termbank.errors import GlossaryError, IOFailure
from termbank.glossary import Glossary
from termbank.history import DEFINITION, KEYWORD
from termbank.quiz import MODES

HELP = {
    '': [
        "Commands (enter 'help <command>' for more details of that command):",
        " - (h)elp: Print this help.",
        " - (p)rint: Output data to terminal.",
        " - (s)earch: Search entries by keyword/definition.",
        " - (a)dd <keyword> <definition>: Add a term to the glossary.",
        " - (e)dit <keyword>: Change or delete the definitions of a term.",
        " - (d)elete <keyword>: Delete a term from the glossary.",
        " - (r)andom: Show a random term.",
        " - (g)ame [key|def] [stages]: Open the quiz game menu.",
        " - reset: Re-import the original glossary file, dropping all changes.",
        " - save: Write the glossary and search history to disk.",
        " - (q)uit: Quit the program.",
    ],
    'print': [
        "Print commands (print <subcommand>):",
        " - <no subcommand>: Output all entries in the glossary.",
        " - search: Output search history.",
    ],
    'search': [
        "Search commands (search <subcommand> <term>):",
        " - key: Search entries by keyword (case-insensitive, whole words).",
        " - def: Search entries by definition (case-insensitive).",
    ],
    'game': [
        "Game (game [key|def] [stages]), then play, change or setstages in the menu:",
        " - key: Guess the keyword of a definition.",
        " - def: Guess the definition of a keyword.",
        " - stages: Number of questions, possible range is [1,20].",
    ],
}

ALIASES = {
    'h': 'help', 'p': 'print', 's': 'search', 'a': 'add', 'e': 'edit',
    'd': 'delete', 'r': 'random', 'g': 'game', 'q': 'quit'
}


def print_help(section=''):
    section = ALIASES.get(section, section)
    for line in HELP.get(section, ["No help exists for entered command."]):
        print(line)


def find_glossary_path(args, settings, prompter):
    """Glossary file from the arguments, the data directory or the user."""
    if args and os.path.isfile(args[0]):
        return args[0], args[1:]

    data_dir = os.path.expanduser(settings['data_dir'])
    files = sorted(f for f in glob.glob(os.path.join(data_dir, '*.csv'))
                   if not f.endswith('.hist.csv'))
    if len(files) == 1:
        print(f"Found glossary: {os.path.basename(files[0])}")
        return files[0], args
    if files:
        print("Existing glossary: " + ' '.join(os.path.basename(f) for f in files))
        print("Choose one file to open...")

    path = ''
    while not os.path.isfile(path):
        path = prompter.ask("path > ")
    return path, args


def run_command(glossary, line, prompter):
    """Run one console command, returning False once the user quits."""
    command, _, rest = line.strip().partition(' ')
    command = ALIASES.get(command, command)
    sub, _, arg = rest.strip().partition(' ')

    if command == 'help':
        print_help(sub)
    elif command == 'print':
        if not sub:
            glossary.print_all()
        elif sub == 'search':
            glossary.print_history()
        else:
            print(f"Unknown subcommand \"{sub}\".")
    elif command == 'search':
        kinds = {'key': KEYWORD, 'def': DEFINITION}
        if sub not in kinds:
            print(f"Unknown subcommand \"{sub}\".")
        else:
            glossary.search(kinds[sub], arg)
    elif command == 'add':
        glossary.add_interactive(prompter, sub, arg)
    elif command == 'edit':
        keyword = rest.strip() or prompter.ask("keyword > ")
        glossary.edit(keyword, prompter).run()
    elif command == 'delete':
        keyword = rest.strip() or prompter.ask("keyword > ")
        confirmed = keyword in glossary.store and prompter.confirm("Are you sure to delete?")
        glossary.delete(keyword, confirmed)
    elif command == 'random':
        glossary.random_pick()
    elif command == 'game':
        run_game(glossary, sub, arg, prompter)
    elif command == 'reset':
        if prompter.confirm("Do you want to reset the glossary? All changes made will be lost."):
            glossary.reset()
        else:
            print("Resetting cancelled.")
    elif command == 'save':
        glossary.save()
    elif command == 'quit':
        return False
    else:
        print(f"Unknown command \"{command}\".")
    return True


GAME_HELP = """Game commands:
 - (p)lay: Play the game.
 - (c)hange key/def: Change game.
 - (s)etstages <number>: Set number of stages, possible range is [1,20].
 - (h)elp: Print this help.
 - (q)uit: Quit game menu."""


def run_game(glossary, mode, stages, prompter):
    settings = glossary.settings
    mode = mode or settings['quiz_mode']
    if mode.isdigit() and not stages:
        mode, stages = settings['quiz_mode'], mode
    if mode not in MODES:
        print(f"Unknown game \"{mode}\". Games: {', '.join(MODES)}")
        return
    try:
        count = clamp_stages(int(stages) if stages else settings['quiz_stages'])
    except ValueError:
        print("Error: Invalid number of stages")
        return
    game_menu(glossary, mode, count, prompter)


def game_menu(glossary, mode, stages, prompter):
    """Play rounds until the user quits, return the last score."""
    last_score = 0
    print(GAME_HELP)
    while True:
        print(f"Current game: {mode}")
        print(f"Stages: {stages}")
        print(f"Last score: {last_score}")
        print("----")
        command, _, arg = prompter.ask(" g> ").partition(' ')
        arg = arg.strip()
        if command in ('play', 'p'):
            last_score = glossary.play_quiz(mode, stages, prompter)
        elif command in ('change', 'c'):
            if arg in MODES:
                mode = arg
            else:
                print(f"Unknown game \"{arg}\". Games: {', '.join(MODES)}")
        elif command in ('setstages', 's'):
            try:
                stages = clamp_stages(int(arg))
            except ValueError:
                print("Error: Invalid number of stages")
        elif command in ('help', 'h'):
            print(GAME_HELP)
        elif command in ('quit', 'q'):
            return last_score
        else:
            print(f"Unknown command \"{command}\".")


def close(glossary, prompter):
    """Offer to save unsaved changes. A failing save is raised to the caller."""
    if glossary.is_dirty() and prompter.confirm("Save changes before quitting?"):
        glossary.save()
    else:
        glossary.save_history()


def main(argv=None, prompter=None):
    args = sys.argv[1:] if argv is None else list(argv)
    if args and args[0] in ['--help', '-h']:
        print("Usage: termbank [path] [command ...]")
        print_help()
        return 0

    settings = get_settings()
    prompter = prompter or Prompter()
    print("\n---- WELCOME TO TERMBANK ----\n")

    try:
        path, args = find_glossary_path(args, settings, prompter)
        glossary = Glossary.open(path, settings)
    except (EOFError, KeyboardInterrupt):
        print()
        return 0
    except GlossaryError as e:
        error(e, settings)
        return 1

    print_help()
    line = ' '.join(args)
    listening = True
    while listening:
        try:
            if not line:
                line = prompter.ask()
            listening = run_command(glossary, line, prompter)
        except GlossaryError as e:
            error(e, settings)
        except (EOFError, KeyboardInterrupt):
            print()
            listening = False
        line = ''

    try:
        close(glossary, prompter)
    except IOFailure as e:
        error(e, settings)
        return 1
    except (EOFError, KeyboardInterrupt):
        print(colored("\nUnsaved changes were discarded.", settings['colors']['warning']))
    return 0


if __name__ == "__main__":
    sys.exit(main())
