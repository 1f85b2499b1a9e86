"""
Infrastructure layer for monotag.

Contains abstractions for external systems:
- GitClient: Git command execution (tags, identity config)
- VersionResolver: The external version calculation tool

These provide clean interfaces that can be mocked for testing.
"""

from .git_client import GitClient
from .version_resolver import VersionResolver

__all__ = [
    'GitClient',
    'VersionResolver',
]
