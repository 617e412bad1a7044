"""Tests for the replay script runner and command line entry point."""

import blessed
import pytest

from rangemark import settings_persistence
from rangemark.__main__ import ReplayError, main, replay
from rangemark.formatting import FormattingKind, FormattingRange, Selection
from rangemark.session import EditorSession
from rangemark.settings_persistence import SettingsPersistence

K = FormattingKind


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    monkeypatch.setattr(settings_persistence, "_persistence", SettingsPersistence(config_dir=tmp_path / "config"))


@pytest.fixture
def plain_terminal(monkeypatch):
    """Make the default terminal emit no escape sequences."""
    terminal = blessed.Terminal
    monkeypatch.setattr(blessed, "Terminal", lambda: terminal(force_styling=None))


def write_script(tmp_path, text):
    path = tmp_path / "events.txt"
    path.write_text(text, encoding='utf-8')
    return str(path)


def test_replay_bold_selected_word():
    session = EditorSession()
    replay(session, ["type Hello World", "select 0 5", "format bold"])
    assert session.text == "Hello World"
    assert session.selection == Selection(0, 5)
    assert FormattingRange(0, 5, K.BOLD) in session.ranges


def test_replay_keeps_spaces_in_typed_text():
    session = EditorSession()
    replay(session, ["type   two  spaces "])
    assert session.text == "  two  spaces "


def test_replay_aliases_and_keys():
    session = EditorSession()
    replay(session, [
        "# a title, then body text",
        "format title",
        "type Notes",
        "",
        "enter",
        "key <Ctrl-b>",
        "type x",
    ])
    assert session.text == "Notes\nx"
    assert FormattingRange(6, 7, K.BOLD) in session.ranges
    assert FormattingRange(6, 7, K.BODY) in session.ranges


def test_replay_caret_and_backspace():
    session = EditorSession()
    replay(session, ["type abc", "caret 2", "backspace"])
    assert session.text == "ac"
    assert session.selection == Selection.caret(1)


@pytest.mark.parametrize("line,message", [
    ("jump 3", "unknown directive"),
    ("format sparkly", "unknown format"),
    ("caret 9", "outside text"),
    ("select 1", "select takes 2"),
    ("caret x", "not an index"),
    ("key", "key needs a token"),
])
def test_replay_errors(line, message):
    session = EditorSession()
    with pytest.raises(ReplayError) as excinfo:
        replay(session, ["type abc", line])
    assert excinfo.value.line_number == 2
    assert message in str(excinfo.value)
    assert str(excinfo.value).startswith("line 2:")


def test_main_prints_final_state(tmp_path, capsys, plain_terminal):
    path = write_script(tmp_path, "type Hello\nselect 0 5\nformat bold\n")
    assert main(["replay", path]) == 0
    out = capsys.readouterr().out
    assert out == "Hello\n[0:5] pending=body+bold\n"


def test_main_trace_renders_every_event(tmp_path, capsys, plain_terminal):
    path = write_script(tmp_path, "type a\ntype b\n")
    assert main(["replay", path, "--trace"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines == ["a", "[1:1] pending=body", "ab", "[2:2] pending=body"]


def test_main_title_flag(tmp_path, capsys, plain_terminal):
    path = write_script(tmp_path, "type T\n")
    assert main(["replay", path, "--title"]) == 0
    assert "pending=heading1" in capsys.readouterr().out


def test_main_reports_script_errors(tmp_path, capsys):
    path = write_script(tmp_path, "type a\nwiggle\n")
    assert main(["replay", path]) == 1
    assert "line 2: unknown directive 'wiggle'" in capsys.readouterr().err


def test_main_missing_script(tmp_path, capsys):
    assert main(["replay", str(tmp_path / "missing.txt")]) == 1
    assert "Error reading script" in capsys.readouterr().err


@pytest.mark.parametrize("argv", [[], ["replay"], ["replay", "a", "b"], ["replay", "a", "--bogus"], ["edit"]])
def test_main_usage(argv, capsys):
    assert main(argv) == 2
    assert "Usage:" in capsys.readouterr().err


def test_main_version(capsys):
    assert main(["--version"]) == 0
    assert capsys.readouterr().out.strip()
