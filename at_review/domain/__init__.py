"""Domain layer: errors and schemas."""

from .errors import ErrorCodes, NoCommandData, ReviewBuildError
from .schemas import (
    AllKnownATs,
    Applicability,
    AssistiveTechnology,
    ATTestRecord,
    BuildLog,
    ExplicitATs,
    PatternReport,
    ReviewTest,
    TestDescriptor,
)

__all__ = [
    "ReviewBuildError",
    "NoCommandData",
    "ErrorCodes",
    "AssistiveTechnology",
    "Applicability",
    "AllKnownATs",
    "ExplicitATs",
    "TestDescriptor",
    "ATTestRecord",
    "ReviewTest",
    "PatternReport",
    "BuildLog",
]
