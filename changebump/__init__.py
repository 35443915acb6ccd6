"""
Change Bump

Recommend a semantic version bump and changelog entry from git changes.
"""

__version__ = "1.0.0"

# Bump type names, highest precedence first
# Used by: cli/args.py (argparse choices), cli/utils.py (prompt)
BUMP_TYPE_NAMES = ['major', 'minor', 'patch']
