"""Tests for command line handling."""

from unittest.mock import MagicMock

import pytest

import plainpad.__main__ as cli
from plainpad.settings import Settings


@pytest.fixture(autouse=True)
def isolated(monkeypatch):
    monkeypatch.setattr(cli, "configure_logging", lambda debug=False: None)
    monkeypatch.setattr(cli, "load_settings", lambda: Settings())
    saved = MagicMock(return_value=True)
    monkeypatch.setattr(cli, "save_settings", saved)
    return saved


def test_parse_args_defaults():
    options = cli.parse_args(["notes.txt"])
    assert options == {
        'lines': None,
        'keep_whitespace': False,
        'save_defaults': False,
        'debug': False,
        'filename': "notes.txt",
    }


def test_parse_args_all_flags():
    options = cli.parse_args(["-n", "30", "--keep-whitespace", "--save-defaults", "--debug", "a.txt"])
    assert options['lines'] == 30
    assert options['keep_whitespace']
    assert options['save_defaults']
    assert options['debug']
    assert options['filename'] == "a.txt"


@pytest.mark.parametrize("args, message", [
    ([], "No file given"),
    (["--lines"], "needs a value"),
    (["--lines", "ten", "a.txt"], "integer"),
    (["--bogus", "a.txt"], "Unknown option"),
    (["a.txt", "b.txt"], "one file"),
])
def test_parse_args_errors(args, message):
    with pytest.raises(ValueError, match=message):
        cli.parse_args(args)


def test_version(capsys):
    assert cli.main(["--version"]) == 0
    assert capsys.readouterr().out.strip()


def test_usage_error_exits_2(capsys):
    assert cli.main([]) == 2
    assert "usage:" in capsys.readouterr().err


def test_bad_page_size_exits_2(tmp_path, capsys):
    doc = tmp_path / "doc.txt"
    doc.write_text("x")
    assert cli.main(["--lines", "0", str(doc)]) == 2
    assert "at least 1" in capsys.readouterr().err


def test_missing_file_exits_1(tmp_path, capsys):
    assert cli.main([str(tmp_path / "absent.txt")]) == 1
    assert "No such file" in capsys.readouterr().err


def test_runs_editor_with_overrides(tmp_path, monkeypatch, isolated):
    doc = tmp_path / "doc.txt"
    doc.write_text("x")
    editor_cls = MagicMock()
    monkeypatch.setattr("plainpad.editor.Editor", editor_cls)

    assert cli.main(["-n", "5", "--keep-whitespace", "--save-defaults", str(doc)]) == 0

    source, page_size = editor_cls.call_args.args
    assert page_size == 5
    assert source.trim_whitespace is False
    assert source.filename == str(doc)
    editor_cls.return_value.load.assert_called_once()
    editor_cls.return_value.run.assert_called_once()
    isolated.assert_called_once_with(Settings(page_size=5, trim_whitespace=False))
