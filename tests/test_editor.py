"""Tests for the editor loop: dispatch, saving, quitting and cleanup."""

import io
import os
from unittest.mock import MagicMock

import pytest

from plainpad.actions import (
    Backspace, Direction, Ignored, InsertChar, Navigate, NewLine, Quit, Save,
)
from plainpad.editor import Editor
from plainpad.model import CursorPosition
from plainpad.source import FileSource, StreamSource


def make_terminal():
    terminal = MagicMock()
    # Consume the diff the way the real renderer does
    terminal.render.side_effect = lambda changed, row, col: len(list(changed))
    return terminal


def make_editor(text="abc\ndef", actions=(), page_size=5, writer=None):
    writer = writer if writer is not None else io.StringIO()
    source = StreamSource("memory", io.StringIO(text), lambda: writer)
    keyboard = MagicMock()
    keyboard.get_action.side_effect = list(actions)
    editor = Editor(source, page_size, terminal=make_terminal(), keyboard=keyboard)
    editor.load()
    return editor


def test_load_initializes_model():
    editor = make_editor("one\ntwo\nthree")

    assert editor.model.lines == ["one", "two", "three"]
    assert editor.model.cursor_position == CursorPosition(0, 0)
    assert editor.modified is False


def test_run_applies_actions_until_quit():
    editor = make_editor(actions=[
        Navigate(Direction.RIGHT), InsertChar('X'), NewLine(), Quit(),
        InsertChar('n'),
    ])

    editor.run()

    assert editor.model.lines == ["aX", "bc", "def"]
    assert editor.running is False
    assert editor.modified is True
    assert editor.keyboard.get_action.call_count == 4
    editor.terminal.setup.assert_called_once()
    editor.terminal.cleanup.assert_called_once()


def test_run_renders_once_per_key():
    editor = make_editor(actions=[InsertChar('x'), Ignored(), Quit()])

    editor.run()

    assert editor.terminal.render.call_count == 3


def test_first_render_paints_whole_window_then_only_changes():
    drawn = []
    editor = make_editor(actions=[InsertChar('x'), Navigate(Direction.DOWN), Quit()])
    editor.terminal.render.side_effect = lambda changed, row, col: drawn.append(list(changed))

    editor.run()

    assert [len(d) for d in drawn] == [5, 1, 0]
    assert drawn[1][0].content == "xabc"


def test_run_cleans_up_and_reraises_on_error():
    editor = make_editor()
    editor.keyboard.get_action.side_effect = RuntimeError("boom")

    with pytest.raises(RuntimeError, match="boom"):
        editor.run()

    editor.terminal.cleanup.assert_called_once()


def test_run_cleans_up_when_setup_fails():
    editor = make_editor()
    editor.terminal.setup.side_effect = OSError("no tty")

    with pytest.raises(OSError, match="no tty"):
        editor.run()

    editor.terminal.cleanup.assert_called_once()
    editor.keyboard.get_action.assert_not_called()


def test_run_cleans_up_on_keyboard_interrupt():
    editor = make_editor()
    editor.keyboard.get_action.side_effect = KeyboardInterrupt

    with pytest.raises(KeyboardInterrupt):
        editor.run()

    editor.terminal.cleanup.assert_called_once()


def test_none_action_is_skipped():
    editor = make_editor(actions=[None, InsertChar('z'), Quit()])

    editor.run()

    assert editor.model.lines == ["zabc", "def"]


def test_save_action_writes_to_stream():
    writer = io.StringIO()
    editor = make_editor(writer=writer)
    pending = iter([InsertChar('!'), Save()])
    seen = []

    def next_action(timeout=None):
        action = next(pending, None)
        if action is not None:
            return action
        # Status shown after the save, before the next key clears it
        seen.append(editor.status_message)
        return Quit()

    editor.keyboard.get_action.side_effect = next_action

    editor.run()

    assert writer.getvalue() == "!abc" + os.linesep + "def"
    assert editor.modified is False
    assert seen[-1] == "Saved to memory"
    assert editor.status_message is None


def test_status_message_cleared_on_next_key():
    editor = make_editor()
    editor.handle_action(Save())
    assert editor.status_message == "Saved to memory"

    editor.handle_action(Navigate(Direction.RIGHT))

    assert editor.status_message is None


def test_ignored_and_noop_actions_do_not_mark_modified():
    editor = make_editor()

    editor.handle_action(Ignored())
    editor.handle_action(Backspace())
    editor.handle_action(Navigate(Direction.DOWN))

    assert editor.modified is False
    assert editor.model.lines == ["abc", "def"]


def test_save_file_source(tmp_path):
    path = tmp_path / "doc.txt"
    path.write_text("hello", encoding="utf-8")
    editor = Editor(FileSource(str(path)), 5, terminal=make_terminal(), keyboard=MagicMock())
    editor.load()
    editor.model.move_end_of_line()
    editor.handle_action(InsertChar('!'))

    assert editor.save() is True

    assert path.read_text(encoding="utf-8") == "hello!"
    assert editor.status_message == f"Saved to {path}"


def test_failed_save_reports_status_and_stays_modified(tmp_path, monkeypatch):
    path = tmp_path / "doc.txt"
    path.write_text("hello", encoding="utf-8")
    editor = Editor(FileSource(str(path)), 5, terminal=make_terminal(), keyboard=MagicMock())
    editor.load()
    editor.handle_action(InsertChar('x'))

    def failing_replace(src, dst):
        raise PermissionError("denied")

    monkeypatch.setattr("plainpad.source.os.replace", failing_replace)

    assert editor.save() is False

    assert editor.modified is True
    assert editor.status_message.startswith("Error: Cannot save to")
    assert path.read_text(encoding="utf-8") == "hello"


def test_header_redrawn_when_document_becomes_modified():
    editor = make_editor(actions=[InsertChar('a'), InsertChar('b'), Quit()])

    editor.run()

    headers = editor.terminal.draw_header.call_args_list
    assert headers[0].args == ("memory", False)
    assert headers[-1].args == ("memory", True)
    assert len(headers) == 2
