"""CLI Main Entry Point"""

import os
import sys
from pathlib import Path

from changebump.config import Config, ENV_CHANGELOG, ENV_VERSION_FILE, load_config
from changebump.git import BumpType, ChangeClassifier, ChangeSnapshot, GitError, GitReader, RepositoryQuery
from changebump.output import (
    ARROW, Spinner, bold, dim, print_changelog_preview, print_release_plan, report_done, report_error, warning,
)
from changebump.release import (
    MANUAL_DESCRIPTION, Version, VersionError, format_entry, read_version, update_changelog, write_version,
)

from changebump.cli.args import parse_args
from changebump.cli.commands import display_config, run_install_completion, show_status
from changebump.cli.utils import confirm, select_bump_type


def _resolve_paths(args, config: Config, project_dir: Path) -> tuple[Path, Path]:
    """Resolve version and changelog files.

    Precedence: CLI args > environment variables > config file
    """
    version_file = args.version_file or os.environ.get(ENV_VERSION_FILE) or config.version_file
    changelog = args.changelog or os.environ.get(ENV_CHANGELOG) or config.changelog_file
    return project_dir / version_file, project_dir / changelog


def _display_file_list(snapshot: ChangeSnapshot, max_shown: int) -> None:
    """Show changed files, collapsing long lists."""
    if not snapshot.changed_files:
        return
    print(bold("Changed files:"))
    files = sorted(snapshot.changed_files)
    for path in files[:max_shown]:
        print(dim(f"  {path}"))
    remaining = len(files) - max_shown
    if remaining > 0:
        print(dim(f"  ... and {remaining} more files"))


def _display_commits(snapshot: ChangeSnapshot, tag: str | None) -> None:
    if not snapshot.recent_commit_subjects:
        return
    source = f"since {tag}" if tag else "recent"
    print(bold(f"Commits ({source}):"))
    for subject in snapshot.recent_commit_subjects:
        print(dim(f"  {subject}"))


def _apply_release(version_path: Path, changelog_path: Path, current: Version,
                   new_version: Version, bump_type: BumpType, changes, quiet: bool = False) -> int:
    """Write the new version and changelog section."""
    try:
        write_version(version_path, new_version)
        update_changelog(changelog_path, str(new_version), bump_type.label, changes)
    except (VersionError, OSError) as e:
        report_error(str(e))
        return 1

    if not quiet:
        report_done(f"Version updated: {current} {ARROW} {new_version}")
        report_done(f"Changelog updated with {len(changes)} changes ({changelog_path.name})")
    return 0


def _terminal_modes() -> tuple[bool, bool]:
    """Return (is_pipe, is_interactive) for the current stdio."""
    is_pipe = not sys.stdout.isatty()
    return is_pipe, sys.stdin.isatty() and not is_pipe


def release_flow(args, config: Config, reader: RepositoryQuery, project_dir: Path) -> int:
    """Analyse changes since the last tag and, when asked to, write version and changelog.

    Returns:
        int: Exit code
    """
    is_pipe, is_interactive = _terminal_modes()
    fallback_count = args.fallback_count if args.fallback_count is not None else config.fallback_commit_count
    version_path, changelog_path = _resolve_paths(args, config, project_dir)

    if not reader.is_repository():
        report_error(f"Not inside a git repository: {project_dir}")
        return 1

    try:
        with Spinner("Reading changes"):
            snapshot = reader.snapshot(fallback_count)
            tag = reader.latest_tag()
    except GitError as e:
        report_error(str(e))
        return 1

    # Clean tree and no commits since the tag
    if snapshot.is_empty:
        if not is_pipe:
            since = tag or "the last release"
            print(warning(f"No changes since {since}. Nothing to release."))
        return 0

    recommendation = ChangeClassifier().classify(snapshot)

    try:
        current = read_version(version_path)
    except VersionError as e:
        report_error(str(e))
        return 1

    bump_type = BumpType.from_name(args.type) if args.type else recommendation.bump_type
    new_version = current.bump(bump_type)
    changes = (MANUAL_DESCRIPTION,) if args.manual_changes else recommendation.changes

    # Pipe mode: apply only with --yes, print only the next version
    if is_pipe:
        if args.yes and not args.dry_run:
            code = _apply_release(version_path, changelog_path, current, new_version,
                                  bump_type, changes, quiet=True)
            if code:
                return code
        print(new_version)
        return 0

    if args.verbose:
        _display_file_list(snapshot, config.max_file_display)
        _display_commits(snapshot, tag)
        print()

    print_release_plan(str(recommendation.bump_type), current, new_version, recommendation.changes)

    if args.dry_run:
        print()
        print_changelog_preview(format_entry(str(new_version), bump_type.label, changes),
                                str(bump_type), changelog_path.name)
        print(dim("Dry run: no files written."))
        return 0

    if not args.yes:
        if not is_interactive:
            print(dim("\nRun with --yes to apply."))
            return 0
        if not args.type:
            bump_type = select_bump_type(recommendation.bump_type)
            if bump_type is None:
                print(dim("Cancelled."))
                return 0
            new_version = current.bump(bump_type)
        if not args.manual_changes and not confirm("Use the detected changes for the changelog?"):
            changes = (MANUAL_DESCRIPTION,)
            print(warning(f"Edit {changelog_path.name} by hand after the release."))
        if not confirm(f"Proceed with {bump_type} release to v{new_version}?"):
            print(dim("Release cancelled."))
            return 0

    return _apply_release(version_path, changelog_path, current, new_version, bump_type, changes)


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    args = parse_args(argv)

    if args.install_completion:
        return run_install_completion()

    project_dir = Path(args.cwd).resolve() if args.cwd else Path.cwd()
    config, config_path = load_config(project_dir)

    if args.display_config:
        return display_config(config, config_path)

    reader = GitReader(project_dir)
    if args.status:
        return show_status(reader)

    return release_flow(args, config, reader, project_dir)


if __name__ == "__main__":
    sys.exit(main())
