"""Git Operations Package"""

from changebump.git.reader import (
    ChangeSnapshot,
    ExternalToolFailure,
    GitError,
    GitReader,
    RepositoryQuery,
    RepositoryUnavailable,
)
from changebump.git.classifier import (
    BumpType,
    ChangeClassifier,
    DescriptionRule,
    VersionBumpRecommendation,
    classify,
)

__all__ = [
    "ChangeSnapshot",
    "ExternalToolFailure",
    "GitError",
    "GitReader",
    "RepositoryQuery",
    "RepositoryUnavailable",
    "BumpType",
    "ChangeClassifier",
    "DescriptionRule",
    "VersionBumpRecommendation",
    "classify",
]
