"""Change Classifier - Turn a change snapshot into a version bump recommendation."""

import re
from dataclasses import dataclass
from enum import IntEnum

from changebump.git.reader import ChangeSnapshot


class BumpType(IntEnum):
    """Semantic version bump, ordered by precedence."""
    PATCH = 1
    MINOR = 2
    MAJOR = 3

    @property
    def label(self) -> str:
        return f"{self.name.capitalize()} Changes"

    def __str__(self) -> str:
        return self.name.lower()

    def __format__(self, format_spec: str) -> str:
        return format(str(self), format_spec)

    @classmethod
    def from_name(cls, name: str) -> 'BumpType':
        try:
            return cls[name.strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown bump type: {name}. Use 'major', 'minor' or 'patch'.")


BREAKING_DESCRIPTION = "**BREAKING CHANGES**: Major updates that may require code changes"
FALLBACK_DESCRIPTION = "General improvements and bug fixes"


@dataclass(frozen=True)
class DescriptionRule:
    """One row of a rule table: a pattern and the text it contributes."""
    pattern: re.Pattern
    description: str

    def matches(self, text: str) -> bool:
        return self.pattern.search(text) is not None


@dataclass(frozen=True)
class VersionBumpRecommendation:
    """Recommended bump plus changelog lines for a snapshot."""
    bump_type: BumpType
    changes: tuple[str, ...]
    snapshot: ChangeSnapshot

    @property
    def change_type(self) -> str:
        return self.bump_type.label


class ChangeClassifier:
    """Applies ordered pattern tables to commit subjects and changed paths.

    The two description tables combine matches differently:

    - file table: any-match union. Each row contributes once if any path
      matches it.
    - commit table: first-new-match-per-line. Each subject contributes at
      most one row, the first matching row not already used.
    """

    BREAKING_PATTERNS: list[str] = [
        r'BREAKING[\s_-]*CHANGE',
        r'^\w+(\([^)]*\))?!:',
        r'breaking',
    ]

    FEATURE_PATTERNS: list[str] = [
        r'^(feat|feature|add)[(:]',
        r'new feature',
        r'^enhancement',
    ]

    FILE_RULES: list[tuple[str, str]] = [
        (r'\.(py|pyi|ts|tsx|js|jsx|mjs|cjs)$', "Update source code and functionality"),
        (r'\.(css|scss|sass|less)$', "Update styling and design"),
        (r'(^|/)(package\.json|pyproject\.toml|setup\.py|setup\.cfg|requirements[^/]*\.txt)$',
         "Update dependencies and package configuration"),
        (r'(^|/)tsconfig[^/]*\.json$', "Update TypeScript configuration"),
        (r'(^|/)README(\.(md|rst|txt))?$', "Update documentation"),
        (r'test|spec', "Improve testing coverage"),
        (r'config', "Update configuration files"),
    ]

    COMMIT_RULES: list[tuple[str, str]] = [
        (r'^fix[(:]|bug|error|issue', "Fix bugs and resolve issues"),
        (r'^feat[(:]|feature|add', "Add new features and functionality"),
        (r'^style[(:]|css|design|ui|ux', "Improve visual design and user experience"),
        (r'^perf[(:]|performance|optimization|speed', "Enhance performance and optimization"),
        (r'^refactor[(:]|cleanup|reorganize', "Refactor code for better maintainability"),
        (r'^docs[(:]|documentation|readme', "Update documentation"),
        (r'^test[(:]|testing|spec', "Improve testing coverage"),
        (r'^chore[(:]|maintenance|update', "General maintenance and updates"),
        (r'security|vulnerability|cve', "Address security improvements"),
    ]

    def __init__(self):
        self._breaking_re = [re.compile(p, re.IGNORECASE) for p in self.BREAKING_PATTERNS]
        self._feature_re = [re.compile(p, re.IGNORECASE) for p in self.FEATURE_PATTERNS]
        self.file_rules = [DescriptionRule(re.compile(p, re.IGNORECASE), d) for p, d in self.FILE_RULES]
        self.commit_rules = [DescriptionRule(re.compile(p, re.IGNORECASE), d) for p, d in self.COMMIT_RULES]

    def classify(self, snapshot: ChangeSnapshot) -> VersionBumpRecommendation:
        """Main entry point: snapshot -> recommendation. Never raises."""
        commits = list(snapshot.recent_commit_subjects)
        bump_type = self.detect_bump_type(commits)

        changes = []
        if bump_type == BumpType.MAJOR:
            changes.append(BREAKING_DESCRIPTION)
        changes.extend(self.describe_files(snapshot.changed_files))
        changes.extend(self.describe_commits(commits))

        if not changes:
            changes.append(FALLBACK_DESCRIPTION)

        return VersionBumpRecommendation(
            bump_type=bump_type,
            changes=tuple(dict.fromkeys(changes)),
            snapshot=snapshot,
        )

    def detect_bump_type(self, commits: list[str]) -> BumpType:
        if self._any_match(self._breaking_re, commits):
            return BumpType.MAJOR
        if self._any_match(self._feature_re, commits):
            return BumpType.MINOR
        return BumpType.PATCH

    def describe_files(self, files) -> list[str]:
        return [rule.description for rule in self.file_rules if any(rule.matches(f) for f in files)]

    def describe_commits(self, commits: list[str]) -> list[str]:
        changes = []
        seen = set()
        for commit in commits:
            for rule in self.commit_rules:
                # Rows already used let the scan fall through to later rows
                if rule.matches(commit) and rule.description not in seen:
                    changes.append(rule.description)
                    seen.add(rule.description)
                    break
        return changes

    @staticmethod
    def _any_match(patterns: list[re.Pattern], commits: list[str]) -> bool:
        return any(p.search(commit) for commit in commits for p in patterns)


def classify(snapshot: ChangeSnapshot) -> VersionBumpRecommendation:
    """Classify with the default rule tables."""
    return ChangeClassifier().classify(snapshot)
