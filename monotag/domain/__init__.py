"""
Domain layer for monotag.

Contains pure domain objects with no I/O or side effects:
- ProjectVersionRecord: Computed version for one project
- SemanticVersion: Parsed version string
- TagRequest / TagOutcome / RunResult: Tag operation results

These objects are immutable where possible and provide
serialization methods for JSON output.
"""

from .project import ProjectVersionRecord
from .version import SemanticVersion, VersionParseError
from .operation import (
    GLOBAL_PROJECT_NAME,
    TagStatus,
    TagRequest,
    TagOutcome,
    RunResult,
)

__all__ = [
    'ProjectVersionRecord',
    'SemanticVersion',
    'VersionParseError',
    'GLOBAL_PROJECT_NAME',
    'TagStatus',
    'TagRequest',
    'TagOutcome',
    'RunResult',
]
