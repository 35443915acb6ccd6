"""Terminal output: styling, symbols and the release report widgets."""

import itertools
import os
import shutil
import sys
import textwrap
import threading


RESET = '\033[0m'
STYLES = {
    'bold': '\033[1m',
    'dim': '\033[2m',
    'red': '\033[31m',
    'green': '\033[32m',
    'yellow': '\033[33m',
    'cyan': '\033[36m',
}

# Red for breaking, green for features, cyan for fixes
BUMP_STYLES = {
    'major': ('bold', 'red'),
    'minor': ('bold', 'green'),
    'patch': ('bold', 'cyan'),
}


def _color_wanted(stream) -> bool:
    if os.environ.get('NO_COLOR'):
        return False
    if os.environ.get('FORCE_COLOR'):
        return True
    if not hasattr(stream, 'isatty') or not stream.isatty():
        return False
    if sys.platform == 'win32':
        # Old consoles need VT processing switched on
        try:
            import ctypes
            kernel32 = ctypes.windll.kernel32
            return bool(kernel32.SetConsoleMode(kernel32.GetStdHandle(-11), 7))
        except (AttributeError, OSError):
            return False
    return True


def _encodable(chars: str, stream) -> bool:
    try:
        chars.encode(getattr(stream, 'encoding', None) or 'utf-8')
    except (UnicodeEncodeError, LookupError):
        return False
    return True


COLORS_ENABLED = _color_wanted(sys.stdout)
UNICODE_ENABLED = _encodable('✓✗→┌─│⠋', sys.stdout)

CHECK, CROSS, ARROW = ('✓', '✗', '→') if UNICODE_ENABLED else ('[OK]', '[X]', '->')
# horizontal, vertical, then corners clockwise from top-left
BOX = ('─', '│', '┌', '┐', '┘', '└') if UNICODE_ENABLED else ('-', '|', '+', '+', '+', '+')


def paint(text: str, *styles: str) -> str:
    """Wrap text in the named STYLES. Plain text when colour is off."""
    if not COLORS_ENABLED or not styles:
        return text
    return ''.join(STYLES[name] for name in styles) + text + RESET


def success(text: str) -> str:
    return paint(text, 'green')


def error(text: str) -> str:
    return paint(text, 'red')


def warning(text: str) -> str:
    return paint(text, 'yellow')


def info(text: str) -> str:
    return paint(text, 'cyan')


def dim(text: str) -> str:
    return paint(text, 'dim')


def bold(text: str) -> str:
    return paint(text, 'bold')


def colorize_bump(bump_name: str, text: str | None = None) -> str:
    """Style text (default: the bump name) in the colour of its bump type."""
    return paint(bump_name if text is None else text, *BUMP_STYLES.get(bump_name, ()))


# ---------------------------------------------------------------------------
# Release report
# ---------------------------------------------------------------------------

def report_done(message: str) -> None:
    """A finished release step."""
    print(f"{success(CHECK)} {message}")


def report_error(message: str) -> None:
    print(f"{error(CROSS)} {error(message)}", file=sys.stderr)


def print_release_plan(bump_name: str, current, new_version, changes) -> None:
    """Detected bump, the version move and the changelog lines."""
    print(f"Detected {colorize_bump(bump_name)} release")
    print(f"  {dim('Version:')} {current} {ARROW} {colorize_bump(bump_name, str(new_version))}")
    print(f"  {dim('Changes detected:')}")
    for change in changes:
        print(f"    - {change}")


def print_changelog_preview(entry: str, bump_name: str, title: str = 'CHANGELOG.md') -> None:
    """Frame a changelog section with the file name in the top border.

    The frame takes the bump type's colour. Long bullets wrap with a hanging
    indent so they stay readable at narrow widths.
    """
    horizontal, vertical, top_left, top_right, bottom_right, bottom_left = BOX
    width = max(shutil.get_terminal_size((80, 24)).columns - 4, 40)

    rows = []
    for line in entry.split('\n'):
        indent = '  ' if line.startswith('- ') else ''
        rows.extend(textwrap.wrap(line, width=width, subsequent_indent=indent) or [''])

    label = f' {title} '
    inner = max([len(label)] + [len(row) for row in rows])
    frame = BUMP_STYLES.get(bump_name, ('dim',))

    print(paint(top_left + horizontal + label + horizontal * (inner - len(label) + 1) + top_right, *frame))
    for row in rows:
        print(f"{paint(vertical, *frame)} {row.ljust(inner)} {paint(vertical, *frame)}")
    print(paint(bottom_left + horizontal * (inner + 2) + bottom_right, *frame))


class Spinner:
    """Spinner with a label while git runs. Silent unless stdout is a terminal."""
    FRAMES = '⠋⠙⠹⠸⠼⠴⠦⠧⠇⠏' if UNICODE_ENABLED else '-\\|/'

    def __init__(self, label: str = ''):
        self.label = label
        self._done = threading.Event()
        self._thread = None

    def _run(self):
        for frame in itertools.cycle(self.FRAMES):
            print(f"\r\033[K{frame} {dim(self.label)}", end='', flush=True)
            if self._done.wait(0.08):
                return

    def __enter__(self):
        if sys.stdout.isatty():
            self._done.clear()
            self._thread = threading.Thread(target=self._run, daemon=True)
            self._thread.start()
        return self

    def __exit__(self, *exc_info):
        self._done.set()
        if self._thread:
            self._thread.join()
            self._thread = None
            print('\r\033[K', end='', flush=True)
        return False


__all__ = [
    "STYLES", "BUMP_STYLES", "COLORS_ENABLED", "UNICODE_ENABLED",
    "CHECK", "CROSS", "ARROW", "BOX",
    "paint", "success", "error", "warning", "info", "dim", "bold", "colorize_bump",
    "report_done", "report_error", "print_release_plan", "print_changelog_preview",
    "Spinner",
]
