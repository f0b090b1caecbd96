import pytest

from termbank.errors import IOFailure
from termbank.importer import import_file, parse_import


def definitions(store):
    return {record.keyword: record.definitions for record in store.all()}


def test_continuation_lines_extend_previous_keyword():
    store = parse_import("Slag`Meaning\ncat`small pet|meows\nbig house")

    assert definitions(store) == {"cat": ["small pet", "meows", "big house"]}


def test_header_is_always_discarded():
    store = parse_import("cat`pet\ndog`hound\n")

    assert definitions(store) == {"dog": ["hound"]}


def test_definitions_are_trimmed_and_empty_ones_dropped():
    store = parse_import("header\n  cat ` small pet |  | meows |\n")

    assert definitions(store) == {"cat": ["small pet", "meows"]}


def test_later_declaration_replaces_earlier_one():
    store = parse_import("header\ncat`pet\nmeows\ndog`hound\ncat`feline\n")

    assert definitions(store) == {"cat": ["feline"], "dog": ["hound"]}


def test_continuation_extends_most_recent_keyword_not_last_sorted():
    store = parse_import("header\nzebra`stripes\napple`fruit\nred|green\n")

    assert store.get("apple").definitions == ["fruit", "red", "green"]
    assert store.get("zebra").definitions == ["stripes"]


def test_orphan_continuation_is_warned_and_discarded(capsys):
    store = parse_import("header\nlost meaning\ncat`pet\n")

    assert definitions(store) == {"cat": ["pet"]}
    assert "Warning: Line 2 continues an unknown keyword, ignored." in capsys.readouterr().out


def test_empty_keyword_orphans_following_continuations(capsys):
    store = parse_import("header\n`nothing\nstill nothing\ncat`pet\n")

    assert definitions(store) == {"cat": ["pet"]}
    out = capsys.readouterr().out
    assert "Line 2 has an empty keyword" in out
    assert "Line 3 continues an unknown keyword" in out


def test_keyword_without_definitions_collects_continuations():
    store = parse_import("header\ncat`\nsmall pet|meows\n")

    assert definitions(store) == {"cat": ["small pet", "meows"]}


def test_keyword_that_never_gets_definitions_is_dropped(capsys):
    store = parse_import("header\ncat`\ndog`hound\n")

    assert definitions(store) == {"dog": ["hound"]}
    assert "'cat' has no definitions" in capsys.readouterr().out


def test_blank_lines_are_skipped():
    store = parse_import("header\n\ncat`pet\n   \nmeows\n")

    assert definitions(store) == {"cat": ["pet", "meows"]}


def test_only_the_first_delimiter_splits():
    store = parse_import("header\nbacktick`the ` character\n")

    assert store.get("backtick").definitions == ["the ` character"]


def test_custom_delimiters():
    store = parse_import("header\ncat:pet;meows\nhunter\n", delimiter=":", separator=";")

    assert definitions(store) == {"cat": ["pet", "meows", "hunter"]}


def test_parsed_store_is_clean_and_keeps_file_order():
    store = parse_import("header\nzebra`stripes\napple`fruit\n")

    assert not store.dirty
    assert store.by_insertion_id(0).keyword == "zebra"
    assert store.by_insertion_id(1).keyword == "apple"


def test_import_file_reads_utf8(raw_glossary):
    store = import_file(str(raw_glossary))

    assert definitions(store) == {
        "cat": ["small pet", "meows", "big house"],
        "dog": ["Loyal friend"],
        "yolo": ["you only live once"],
    }


def test_import_file_missing(tmp_path):
    with pytest.raises(IOFailure) as excinfo:
        import_file(str(tmp_path / "missing.txt"))

    assert excinfo.value.path == str(tmp_path / "missing.txt")
