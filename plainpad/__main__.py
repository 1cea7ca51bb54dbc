"""Plainpad CLI entry point.

Allows running via `python -m plainpad` and provides the console script
defined in `pyproject.toml`.

Usage:
    plainpad [--lines N] [--keep-whitespace] [--save-defaults] [--debug] FILE
    plainpad --version
    plainpad --keytest
"""

from __future__ import annotations

import importlib.metadata
import logging
import sys
from typing import Optional

from .settings import APP_NAME, load_settings, log_dir, save_settings

USAGE = "usage: plainpad [--lines N] [--keep-whitespace] [--save-defaults] [--debug] FILE"


def _escape_bytes(s: str) -> str:
    """Return a printable representation of raw key string."""
    return s.encode('unicode_escape').decode('ascii')


def get_version_string() -> str:
    try:
        return importlib.metadata.version(APP_NAME)
    except importlib.metadata.PackageNotFoundError:
        return "unknown"


def configure_logging(debug: bool = False) -> None:
    """Send log records to a file; the terminal belongs to the editor."""
    directory = log_dir()
    try:
        directory.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(directory / "plainpad.log", encoding="utf-8")
    except OSError:
        handler = logging.NullHandler()
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    root = logging.getLogger(APP_NAME)
    root.addHandler(handler)
    root.setLevel(logging.DEBUG if debug else logging.INFO)


def run_keyboard_test() -> None:
    """Print the parsed event and classified action for each key. Quit with ESC."""
    from .keyboard import KeyboardHandler, KeyType, classify
    from .terminal import TerminalInterface

    print("Keyboard test mode - press keys to see parsed events.")
    print("Quit with ESC.")

    term = TerminalInterface()
    term.setup()
    kb = KeyboardHandler(term)
    try:
        with term.input_mode():
            while True:
                ev = kb.get_key_event(timeout=None)
                if not ev:
                    continue
                if ev.key_type == KeyType.SPECIAL and ev.value == 'escape':
                    print("Exiting keyboard test.")
                    break
                raw = _escape_bytes(ev.raw)
                print(f"type={ev.key_type.value} value={ev.value} raw='{raw}' action={classify(ev)!r}")
    finally:
        term.cleanup()


def parse_args(args: list[str]) -> dict:
    """Parse command line flags.

    Raises:
        ValueError: on unknown flags, a bad --lines value or a missing filename
    """
    options: dict = {
        'lines': None,
        'keep_whitespace': False,
        'save_defaults': False,
        'debug': False,
        'filename': None,
    }
    it = iter(args)
    for arg in it:
        if arg in ('--lines', '-n'):
            value = next(it, None)
            if value is None:
                raise ValueError("--lines needs a value")
            try:
                options['lines'] = int(value)
            except ValueError:
                raise ValueError(f"Page size must be an integer, got {value!r}") from None
        elif arg == '--keep-whitespace':
            options['keep_whitespace'] = True
        elif arg == '--save-defaults':
            options['save_defaults'] = True
        elif arg == '--debug':
            options['debug'] = True
        elif arg.startswith('-'):
            raise ValueError(f"Unknown option {arg}")
        elif options['filename'] is None:
            options['filename'] = arg
        else:
            raise ValueError("Only one file can be edited at a time")
    if options['filename'] is None:
        raise ValueError("No file given")
    return options


def main(argv: Optional[list[str]] = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    if args and args[0] in ("--version", "-V"):
        print(get_version_string())
        return 0
    if args and args[0] in ('--keytest', '--keyboard-test'):
        run_keyboard_test()
        return 0

    from .validation import validate_file, validate_page_size

    try:
        options = parse_args(args)
    except ValueError as e:
        print(f"plainpad: {e}\n{USAGE}", file=sys.stderr)
        return 2

    configure_logging(options['debug'])
    settings = load_settings()
    if options['lines'] is not None:
        settings.page_size = options['lines']
    if options['keep_whitespace']:
        settings.trim_whitespace = False

    try:
        page_size = validate_page_size(settings.page_size)
    except ValueError as e:
        print(f"plainpad: {e}", file=sys.stderr)
        return 2
    try:
        filename = validate_file(options['filename'])
    except OSError as e:
        print(f"plainpad: {e}", file=sys.stderr)
        return 1

    if options['save_defaults']:
        save_settings(settings)

    # Lazy import to avoid importing UI deps for --version
    from .editor import Editor
    from .source import FileSource

    editor = Editor(FileSource(filename, trim_whitespace=settings.trim_whitespace), page_size)
    editor.load()
    editor.run()
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
