import copy

import pytest

from termbank import term
from termbank.config import DEFAULT_SETTINGS
from termbank.editing import Prompter
from termbank.glossary import Glossary


@pytest.fixture(autouse=True)
def default_settings(monkeypatch):
    monkeypatch.setattr(term, "get_settings", lambda: copy.deepcopy(DEFAULT_SETTINGS))


def test_print_help_sections(capsys):
    term.print_help("s")
    term.print_help("nothing")

    out = capsys.readouterr().out
    assert "key: Search entries by keyword" in out
    assert "No help exists for entered command." in out


def test_run_command_search_and_print(raw_glossary, capsys):
    glossary = Glossary.open(str(raw_glossary))
    prompter = Prompter.scripted([])

    assert term.run_command(glossary, "search def live", prompter)
    assert term.run_command(glossary, "p search", prompter)
    assert term.run_command(glossary, "search name yolo", prompter)
    assert term.run_command(glossary, "launch", prompter)
    assert not term.run_command(glossary, "q", prompter)

    out = capsys.readouterr().out
    assert "you only live once" in out
    assert "By definition: live" in out
    assert 'Unknown subcommand "name".' in out
    assert 'Unknown command "launch".' in out


def test_run_command_delete_asks_for_confirmation(raw_glossary):
    glossary = Glossary.open(str(raw_glossary))

    term.run_command(glossary, "delete dog", Prompter.scripted(["n"]))
    assert "dog" in glossary.store

    term.run_command(glossary, "d dog", Prompter.scripted(["y"]))
    assert "dog" not in glossary.store


def test_run_game_opens_menu_with_settings_for_defaults(raw_glossary, capsys):
    glossary = Glossary.open(str(raw_glossary))
    glossary.settings['quiz_stages'] = 2

    term.run_command(glossary, "game", Prompter.scripted(["p", "a", "a", "q"]))
    term.run_command(glossary, "g def 1", Prompter.scripted(["p", "b", "c key", "s 0", "p", "c", "jump", "q"]))
    term.run_command(glossary, "g riddle", Prompter.scripted([]))

    out = capsys.readouterr().out
    assert out.count("Game complete!") == 3
    assert "Quiz Game: Keyword" in out
    assert "Quiz Game: Definition" in out
    assert "Stages: 2" in out
    assert "Number too small, raised to 1." in out
    assert out.count("Last score:") == 9
    assert 'Unknown game "".' in out
    assert 'Unknown command "jump".' in out
    assert 'Unknown game "riddle".' in out


def test_main_skips_blank_cache_lines(tmp_path, capsys):
    path = tmp_path / "g.csv"
    path.write_text("Keyword,Definition\ncat, |\ndog,hound|\n", encoding="utf-8")

    status = term.main([str(path), "print"], Prompter.scripted(["q"]))

    assert status == 0
    out = capsys.readouterr().out
    assert "Line 2 of the cache is incomplete" in out
    assert "dog: hound" in out


def test_find_glossary_path_prefers_argument(raw_glossary, settings):
    path, rest = term.find_glossary_path([str(raw_glossary), "random"], settings, Prompter.scripted([]))

    assert path == str(raw_glossary)
    assert rest == ["random"]


def test_find_glossary_path_uses_single_csv_in_data_dir(tmp_path, settings):
    (tmp_path / "words.csv").write_text("Keyword,Definition\n", encoding="utf-8")
    (tmp_path / "words.hist.csv").write_text("Code,Term\n", encoding="utf-8")
    settings['data_dir'] = str(tmp_path)

    path, rest = term.find_glossary_path(["print"], settings, Prompter.scripted([]))

    assert path == str(tmp_path / "words.csv")
    assert rest == ["print"]


def test_find_glossary_path_asks_until_file_exists(tmp_path, raw_glossary, settings):
    settings['data_dir'] = str(tmp_path / "empty")

    path, _ = term.find_glossary_path([], settings, Prompter.scripted(["nope.txt", str(raw_glossary)]))

    assert path == str(raw_glossary)


def test_main_runs_command_line_then_saves_history(raw_glossary, capsys):
    status = term.main([str(raw_glossary), "search", "key", "cat"], Prompter.scripted(["quit"]))

    assert status == 0
    assert "big house" in capsys.readouterr().out
    assert raw_glossary.with_name("slang.hist.csv").read_text(encoding="utf-8") == "Code,Term\n0,cat\n"


def test_main_offers_to_save_changes(raw_glossary):
    status = term.main([str(raw_glossary), "add", "bae", "before anyone else"],
                       Prompter.scripted(["q", "y"]))

    assert status == 0
    assert "bae,before anyone else|" in raw_glossary.with_suffix(".csv").read_text(encoding="utf-8")


def test_main_reports_errors_and_keeps_going(raw_glossary, capsys):
    status = term.main([str(raw_glossary), "edit", "unicorn"], Prompter.scripted(["q"]))

    assert status == 0
    assert "Error: Keyword 'unicorn' not found." in capsys.readouterr().out


def test_main_fails_when_final_save_fails(raw_glossary, monkeypatch, capsys):
    def broken_save(self):
        raise term.IOFailure("disk full")
    monkeypatch.setattr(Glossary, "save", broken_save)

    status = term.main([str(raw_glossary), "add", "bae", "before anyone else"],
                       Prompter.scripted(["q", "y"]))

    assert status == 1
    assert "Error: disk full" in capsys.readouterr().out


def test_main_without_glossary_exits_quietly(tmp_path, monkeypatch):
    settings = copy.deepcopy(DEFAULT_SETTINGS)
    settings['data_dir'] = str(tmp_path)
    monkeypatch.setattr(term, "get_settings", lambda: settings)

    assert term.main([], Prompter.scripted([])) == 0
