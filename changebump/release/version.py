"""Semantic versions and the manifest files that hold them."""

import json
import re
from dataclasses import dataclass
from pathlib import Path

from changebump.git.classifier import BumpType


VERSION_RE = re.compile(r'^(0|[1-9]\d*)\.(0|[1-9]\d*)\.(0|[1-9]\d*)$')
TOML_VERSION_RE = re.compile(r'^(version\s*=\s*)(["\'])([^"\']*)\2', re.MULTILINE)


class VersionError(ValueError):
    """Raised when a version string or version file can't be used."""
    pass


@dataclass(frozen=True, order=True)
class Version:
    """MAJOR.MINOR.PATCH without pre-release or build metadata."""
    major: int = 0
    minor: int = 0
    patch: int = 0

    @classmethod
    def parse(cls, text: str) -> 'Version':
        match = VERSION_RE.match(text.strip())
        if not match:
            raise VersionError(f"Invalid version '{text}', expected MAJOR.MINOR.PATCH")
        return cls(*(int(part) for part in match.groups()))

    def bump(self, bump_type: BumpType) -> 'Version':
        if bump_type == BumpType.MAJOR:
            return Version(self.major + 1, 0, 0)
        if bump_type == BumpType.MINOR:
            return Version(self.major, self.minor + 1, 0)
        return Version(self.major, self.minor, self.patch + 1)

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"


def increment_version(version: str, bump_type: BumpType) -> str:
    return str(Version.parse(version).bump(bump_type))


def read_version(path: str | Path) -> Version:
    """Read the version held in a package.json, pyproject.toml or plain VERSION file."""
    path = Path(path)
    text = _read_text(path)

    if path.suffix == '.json':
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise VersionError(f"Could not parse {path}: {e}")
        if not isinstance(data, dict) or 'version' not in data:
            raise VersionError(f"No version field in {path}")
        return Version.parse(str(data['version']))

    if path.suffix == '.toml':
        match = TOML_VERSION_RE.search(text)
        if not match:
            raise VersionError(f"No version assignment in {path}")
        return Version.parse(match.group(3))

    return Version.parse(text)


def write_version(path: str | Path, version: Version) -> None:
    """Replace the version in ``path`` leaving the rest of the file intact."""
    path = Path(path)

    if path.suffix == '.json':
        data = json.loads(_read_text(path))
        data['version'] = str(version)
        path.write_text(json.dumps(data, indent=2) + '\n', encoding='utf-8')
        return

    if path.suffix == '.toml':
        text = _read_text(path)
        if not TOML_VERSION_RE.search(text):
            raise VersionError(f"No version assignment in {path}")
        updated = TOML_VERSION_RE.sub(lambda m: f"{m.group(1)}{m.group(2)}{version}{m.group(2)}", text, count=1)
        path.write_text(updated, encoding='utf-8')
        return

    path.write_text(f"{version}\n", encoding='utf-8')


def _read_text(path: Path) -> str:
    try:
        return path.read_text(encoding='utf-8')
    except FileNotFoundError:
        raise VersionError(f"Version file not found: {path}")
    except OSError as e:
        raise VersionError(f"Could not read {path}: {e}")
