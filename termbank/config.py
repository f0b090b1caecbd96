import copy
import os

import yaml
from termcolor import COLORS, colored

DEFAULT_CONFIG_FILE = os.path.expanduser("~/.config/termbank/config.yaml")

DEFAULT_SETTINGS = {
    'colors': {
        'keyword': 'light_green',
        'definition': 'white',
        'match': 'grey',
        'highlight_background': 'yellow',
        'warning': 'yellow',
        'error': 'red'
    },
    'quiz_stages': 10,
    'quiz_mode': 'key',
    'silent_fail': False,
    'data_dir': './Data',
    'import': {
        'delimiter': '`',
        'separator': '|'
    }
}

MIN_STAGES = 1
MAX_STAGES = 20


def load_config(config_file):
    if not config_file:
        raise ValueError("Config file path is empty.")
    try:
        with open(config_file, 'r', encoding='utf-8') as f:
            try:
                config = yaml.safe_load(f)
                return config or {}
            except yaml.YAMLError as e:
                print(colored(f"Warning: Invalid YAML syntax in {config_file}: {e}", "red"))
                print("Loading default settings.")
                return {}
    except FileNotFoundError:
        print("Config file not found. Creating with default settings.")
        default_settings = copy.deepcopy(DEFAULT_SETTINGS)
        config_dir = os.path.dirname(config_file)
        if config_dir:
            os.makedirs(config_dir, exist_ok=True)
        with open(config_file, 'w', encoding='utf-8') as f:
            yaml.safe_dump(default_settings, f, default_flow_style=False, allow_unicode=True)
        return default_settings


def get_settings(config_file=DEFAULT_CONFIG_FILE):
    """Load settings and fill in every key missing from the config file."""
    loaded = load_config(config_file)
    if not isinstance(loaded, dict):
        print(colored(f"Warning: {config_file} does not hold a mapping, ignoring it.", "red"))
        loaded = {}
    settings = copy.deepcopy(DEFAULT_SETTINGS)
    for key, value in loaded.items():
        if not isinstance(settings.get(key), dict):
            settings[key] = value
        elif isinstance(value, dict):
            settings[key] = {**settings[key], **value}
        else:
            print(colored(f"Warning: '{key}' in {config_file} must be a section, using defaults.", "red"))

    for key, value in settings['colors'].items():
        settings['colors'][key] = validate_color(value, DEFAULT_SETTINGS['colors'].get(key, 'white'))
    settings['quiz_stages'] = validate_numeric(settings['quiz_stages'], DEFAULT_SETTINGS['quiz_stages'])
    settings['silent_fail'] = validate_boolean(settings['silent_fail'])
    if settings['quiz_mode'] not in ('key', 'def'):
        print(colored(f"Warning: Unknown quiz_mode '{settings['quiz_mode']}', using 'key'.", "red"))
        settings['quiz_mode'] = 'key'
    return settings


def validate_color(value, default):
    """Return value if termcolor knows it, otherwise the default."""
    value = str(value).lower().strip()
    if value in COLORS:
        return value
    print(colored(f"Warning: Invalid color '{value}', using '{default}'.", "red"))
    return default


def validate_numeric(value, default):
    try:
        return int(value)
    except (TypeError, ValueError):
        print(colored(f"Warning: Invalid number '{value}', using {default}.", "red"))
        return default


def validate_boolean(value):
    """Validate and convert a config value to a boolean (True/False)."""
    if isinstance(value, bool):
        return value
    value = str(value).lower()
    if value in ['true', 't', 'yes', 'y', '1']:
        return True
    return False


def clamp_stages(stages):
    """Keep the number of quiz questions inside [MIN_STAGES, MAX_STAGES]."""
    if stages < MIN_STAGES:
        print(f"Number too small, raised to {MIN_STAGES}.")
        return MIN_STAGES
    if stages > MAX_STAGES:
        print(f"Number too large, capped at {MAX_STAGES}.")
        return MAX_STAGES
    return stages
