"""CLI Commands"""

import os
import sys
from pathlib import Path

from changebump.config import Config, ENV_CHANGELOG, ENV_VERSION_FILE
from changebump.git import GitError, GitReader
from changebump.output import bold, dim, info, success, warning, report_error


def display_config(config: Config, config_path: Path | None) -> int:
    """Display current configuration."""
    print(f"\n{bold('Current Configuration')}\n")

    if config_path:
        print(f"  {dim('Loaded from:')} {config_path}")
    else:
        print(f"  {dim('Loaded from:')} defaults (no .bumprc found)")

    env_version_file = os.environ.get(ENV_VERSION_FILE)
    env_changelog = os.environ.get(ENV_CHANGELOG)
    if env_version_file or env_changelog:
        print(f"  {dim('Environment overrides:')}")
        if env_version_file:
            print(f"    {ENV_VERSION_FILE}={env_version_file}")
        if env_changelog:
            print(f"    {ENV_CHANGELOG}={env_changelog}")

    print()
    print(f"  {bold('Settings:')}")
    print(f"    version_file:          {info(config.version_file)}")
    print(f"    changelog_file:        {info(config.changelog_file)}")
    print(f"    fallback_commit_count: {info(str(config.fallback_commit_count))}")
    print(f"    max_file_display:      {info(str(config.max_file_display))}")

    print(f"\n  {dim('Config locations:')}")
    print(f"    Local:  .bumprc (in project directory)")
    print(f"    Global: ~/.bumprc\n")

    return 0


def show_status(reader: GitReader) -> int:
    """Print branch, repository name, latest tag and working tree state."""
    if not reader.is_repository():
        report_error(f"Not inside a git repository: {reader.working_directory}")
        return 1

    try:
        name = reader.repository_name()
        branch = reader.current_branch_name() or dim('(detached)')
        tag = reader.latest_tag()
        dirty = reader.has_uncommitted_changes()
    except GitError as e:
        report_error(str(e))
        return 1

    print(f"\n{bold('Repository Status')}\n")
    print(f"  repository:  {info(name)}")
    print(f"  branch:      {info(branch)}")
    print(f"  latest tag:  {info(tag) if tag else dim('none')}")
    print(f"  working tree: {warning('uncommitted changes') if dirty else success('clean')}\n")
    return 0


def run_install_completion() -> int:
    """Install shell tab completion."""
    shell = os.environ.get('SHELL', '')

    print(f"\n{bold('Tab Completion Setup')}\n")

    if 'zsh' in shell or 'bash' in shell:
        rc_file = os.path.expanduser('~/.zshrc' if 'zsh' in shell else '~/.bashrc')
        line = 'eval "$(register-python-argcomplete bump)"'
        print(f"Add this line to {dim(rc_file)}:\n")
        print(f"  {line}\n")
        print(f"Then run: {dim('source ' + rc_file)}")
    elif sys.platform == 'win32':
        print("For PowerShell, run:\n")
        print("  register-python-argcomplete --shell powershell bump | Out-String | Invoke-Expression\n")
        print("To make it permanent, add it to your $PROFILE.")
    else:
        print("Run one of these based on your shell:\n")
        print(f"  {dim('# Bash/Zsh')}")
        print('  eval "$(register-python-argcomplete bump)"\n')
        print(f"  {dim('# Fish')}")
        print("  register-python-argcomplete --shell fish bump | source")

    print(f"\n{dim('After setup, press TAB to autocomplete flags.')}")
    return 0
