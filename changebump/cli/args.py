"""CLI Argument Parsing"""

import argparse
import argcomplete

from changebump import BUMP_TYPE_NAMES, __version__


def positive_int(value: str) -> int:
    """argparse type: an integer of at least 1."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: {value!r}")
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='bump',
        description='Recommend a version bump and changelog entry from git changes',
        epilog='Example: bump --dry-run (show the recommendation without writing files)'
    )

    parser.add_argument('-v', '--version', action='version', version=f'%(prog)s {__version__}')

    # Repository options
    parser.add_argument('-C', '--cwd', type=str, metavar='DIR', help='Run as if started in DIR')
    parser.add_argument('--fallback-count', type=positive_int, metavar='N',
                        help='Commits to inspect when no tag exists (default: 10)')

    # Release options
    parser.add_argument('-t', '--type', type=str, choices=BUMP_TYPE_NAMES, help='Override the recommended bump type')
    parser.add_argument('--version-file', type=str, metavar='PATH', help='Manifest holding the version (default: pyproject.toml)')
    parser.add_argument('--changelog', type=str, metavar='PATH', help='Changelog to update (default: CHANGELOG.md)')
    parser.add_argument('--manual-changes', action='store_true',
                        help='Write a placeholder changelog line instead of the detected changes')
    parser.add_argument('-y', '--yes', action='store_true', help='Apply the bump without prompting')
    parser.add_argument('--dry-run', action='store_true', help='Show the recommendation, never write files')

    # Output options
    parser.add_argument('--verbose', action='store_true', help='List changed files and commit subjects')

    # Info/config
    parser.add_argument('--status', action='store_true', help='Show repository status and exit')
    parser.add_argument('--display-config', action='store_true', help='Show current configuration')
    parser.add_argument('--install-completion', action='store_true', help='Install shell tab completion')

    return parser


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = build_parser()
    argcomplete.autocomplete(parser)
    return parser.parse_args(argv)
