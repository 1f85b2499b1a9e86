"""
Semantic version value object for monotag.

Versions arrive as plain strings from the version tool
(``MAJOR.MINOR.PATCH[-PRERELEASE][+BUILD]``). Only the numeric prefix of
each of the first three dot-separated components matters for tagging
decisions, so parsing is lenient:

    SemanticVersion.parse("2.0.0")          -> (2, 0, 0)
    SemanticVersion.parse("1.0.0-beta.1")   -> (1, 0, 0), prerelease="beta.1"
    SemanticVersion.parse("1.2")            -> VersionParseError
"""

import re
from dataclasses import dataclass
from typing import Optional

_LEADING_INT = re.compile(r'^(\d+)')


class VersionParseError(ValueError):
    """Raised when a version has fewer than three dot-separated components."""

    def __init__(self, version: str):
        super().__init__(f"Version {version!r} has fewer than 3 components")
        self.version = version


def _leading_int(component: str) -> Optional[int]:
    match = _LEADING_INT.match(component)
    return int(match.group(1)) if match else None


@dataclass(frozen=True)
class SemanticVersion:
    """
    Parsed semantic version.

    Attributes:
        raw: The version string exactly as received
        major: Leading integer of the first component, or None
        minor: Leading integer of the second component, or None
        patch: Leading integer of the third component, or None
        prerelease: Text after the first '-' (e.g. "beta.1"), or None
    """

    raw: str
    major: Optional[int]
    minor: Optional[int]
    patch: Optional[int]
    prerelease: Optional[str] = None

    @classmethod
    def parse(cls, version: str) -> 'SemanticVersion':
        """
        Parse a version string.

        Raises:
            VersionParseError: if the string splits into fewer than
                three components on '.'
        """
        parts = version.split('.')
        if len(parts) < 3:
            raise VersionParseError(version)

        core = version.split('+', 1)[0]
        prerelease = core.split('-', 1)[1] if '-' in core else None

        return cls(
            raw=version,
            major=_leading_int(parts[0]),
            minor=_leading_int(parts[1]),
            patch=_leading_int(parts[2]),
            prerelease=prerelease or None,
        )

    @property
    def is_major_release(self) -> bool:
        """True for X.0.0 (including pre-releases such as 3.0.0-rc.1)."""
        return self.minor == 0 and self.patch == 0

    def __str__(self) -> str:
        return self.raw
