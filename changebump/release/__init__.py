"""Release Files Package"""

from changebump.release.version import Version, VersionError, increment_version, read_version, write_version
from changebump.release.changelog import MANUAL_DESCRIPTION, format_entry, insert_entry, update_changelog

__all__ = [
    "Version",
    "VersionError",
    "increment_version",
    "read_version",
    "write_version",
    "MANUAL_DESCRIPTION",
    "format_entry",
    "insert_entry",
    "update_changelog",
]
