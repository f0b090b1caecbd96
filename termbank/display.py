from termcolor import colored

from termbank.config import DEFAULT_SETTINGS


def _colors(settings):
    if settings is None:
        return DEFAULT_SETTINGS['colors']
    return settings['colors']


def warn(message, settings=None):
    print(colored(f"Warning: {message}", _colors(settings)['warning']))


def error(message, settings=None):
    print(colored(f"Error: {message}", _colors(settings)['error']))


def highlight_text(text, search_term, settings=None):
    """Highlight all occurrences of search term in text, ignoring case."""
    colors = _colors(settings)
    if not text or not search_term:
        return colored(text, colors['definition'])

    parts = []
    last_end = 0
    text_lower = text.lower()
    search_lower = search_term.lower()

    while True:
        start = text_lower.find(search_lower, last_end)
        if start == -1:
            parts.append(colored(text[last_end:], colors['definition']))
            break

        parts.append(colored(text[last_end:start], colors['definition']))
        matched = text[start:start + len(search_term)]
        parts.append(colored(matched, colors['match'], 'on_' + colors['highlight_background']))

        last_end = start + len(search_term)

    return ''.join(parts)


def format_record(record, settings=None, search_term=None):
    """Render 'keyword: def1 || def2 ||' with the keyword coloured."""
    colors = _colors(settings)
    head = colored(record.keyword, colors['keyword'])
    body = ''.join(highlight_text(definition, search_term, settings) + " || "
                   for definition in record.definitions)
    return f"{head}: {body}".rstrip()


def print_records(records, settings=None, search_term=None):
    for record in records:
        print(format_record(record, settings, search_term))
    print()


def format_definitions(record, settings=None):
    """Numbered definition list used by the edit menu."""
    colors = _colors(settings)
    lines = [f"Found {colored(record.keyword, colors['keyword'])}:"]
    for i, definition in enumerate(record.definitions, start=1):
        lines.append(f" - {i}. {definition}")
    lines.append("----")
    return '\n'.join(lines)
