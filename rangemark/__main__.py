"""Rangemark CLI entry point.

Allows running via `python -m rangemark` and provides the console script
defined in `pyproject.toml`.

Usage:
    rangemark --version
    rangemark replay SCRIPT [--title] [--coalesce] [--trace] [--verbose]

A replay script holds one event per line:
    type TEXT       type TEXT at the caret (replacing any selection)
    enter           type a line break
    backspace       delete the selection or the character before the caret
    select A B      select from A to B
    caret N         place the caret at N
    format NAME     format command: body, bold, italic, underline,
                    heading1..3 (or title, heading, subheading, b, i, u)
    key TOKEN       key press, e.g. <Ctrl-b> or <Alt-1>
Blank lines and lines starting with '#' are ignored.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import replace
from typing import Iterable, Optional

from .version import get_version_string

FORMAT_ALIASES = {
    'title': 'heading1',
    'heading': 'heading2',
    'subheading': 'heading3',
    'b': 'bold',
    'i': 'italic',
    'u': 'underline',
}


class ReplayError(ValueError):
    """A replay script line could not be understood."""

    def __init__(self, line_number: int, message: str):
        super().__init__(f"line {line_number}: {message}")
        self.line_number = line_number


def _parse_index(value: str, line_number: int) -> int:
    try:
        return int(value)
    except ValueError:
        raise ReplayError(line_number, f"not an index: {value!r}") from None


def replay(session, lines: Iterable[str], registry=None) -> None:
    """Feed script lines through a session, one event per line."""
    from .commands import CommandRegistry
    from .formatting import FormattingKind, Selection
    from .keyboard import parse_key

    registry = registry or CommandRegistry()
    for line_number, line in enumerate(lines, start=1):
        line = line.rstrip('\n')
        if not line.strip() or line.lstrip().startswith('#'):
            continue
        directive, _, argument = line.strip().partition(' ')
        directive = directive.lower()

        if directive == 'type':
            # Keep the argument verbatim apart from the separating space
            session.type_text(line.lstrip()[len('type '):])
        elif directive == 'enter':
            session.type_text('\n')
        elif directive == 'backspace':
            session.backspace()
        elif directive in ('select', 'caret'):
            values = argument.split()
            expected = 2 if directive == 'select' else 1
            if len(values) != expected:
                raise ReplayError(line_number, f"{directive} takes {expected} index(es)")
            indexes = [_parse_index(v, line_number) for v in values]
            if any(i < 0 or i > len(session.text) for i in indexes):
                raise ReplayError(line_number, f"index outside text of length {len(session.text)}")
            if directive == 'select':
                session.on_selection_changed(Selection.between(*indexes))
            else:
                session.on_selection_changed(Selection.caret(indexes[0]))
        elif directive == 'format':
            name = argument.strip().lower()
            name = FORMAT_ALIASES.get(name, name)
            try:
                kind = FormattingKind(name)
            except ValueError:
                raise ReplayError(line_number, f"unknown format {argument.strip()!r}") from None
            session.on_format_command(kind)
        elif directive == 'key':
            if not argument:
                raise ReplayError(line_number, "key needs a token")
            registry.execute(session, parse_key(argument))
        else:
            raise ReplayError(line_number, f"unknown directive {directive!r}")


def run_replay(args: list[str]) -> int:
    from .session import EditorSession
    from .settings_persistence import get_persistence
    from .view import TerminalStateView

    flags = {a for a in args if a.startswith('--')}
    paths = [a for a in args if not a.startswith('--')]
    unknown = flags - {'--title', '--coalesce', '--trace', '--verbose'}
    if unknown or len(paths) != 1:
        print(__doc__, file=sys.stderr)
        return 2
    if '--verbose' in flags:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    settings = get_persistence().load_editor_settings()
    if '--title' in flags:
        settings = replace(settings, title_first_line=True)
    if '--coalesce' in flags:
        settings = replace(settings, coalesce_ranges=True)

    view = TerminalStateView()
    session = EditorSession(settings=settings, view=view if '--trace' in flags else None)
    try:
        with open(paths[0], 'r', encoding='utf-8') as f:
            replay(session, f)
    except OSError as e:
        print(f"Error reading script: {e}", file=sys.stderr)
        return 1
    except ReplayError as e:
        print(f"Error in {paths[0]}: {e}", file=sys.stderr)
        return 1

    if '--trace' not in flags:
        view.render(session.state)
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    # Very small arg parsing: version, replay, or usage
    args = sys.argv[1:] if argv is None else argv
    if args and args[0] in ("--version", "-V"):
        print(get_version_string())
        return 0
    if args and args[0] == 'replay':
        return run_replay(args[1:])
    print(__doc__, file=sys.stderr)
    return 2


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
