"""
Global tag planning for monotag.

Global tags are repository-wide markers (``v3.0.0``) derived from the
versions of the projects being tagged. Strategies:

    major-only  X.0.0 versions only (stable "latest major" marker)
    all         every version
    none        nothing

Unknown strategy names behave like ``none``. Tag names are deduplicated,
first occurrence wins, so several projects releasing 3.0.0 together
produce a single ``v3.0.0``.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, List

from ..domain.project import ProjectVersionRecord
from ..domain.version import SemanticVersion, VersionParseError

logger = logging.getLogger(__name__)

EXCLUDED_UNPARSABLE = "version unparsable, excluded from global-tag planning"


class GlobalTagStrategy(Enum):
    """Which versions produce a global tag."""
    MAJOR_ONLY = "major-only"
    ALL = "all"
    NONE = "none"

    @classmethod
    def parse(cls, value) -> 'GlobalTagStrategy':
        """Parse a strategy name; unknown names map to NONE."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            logger.debug(f"Unknown global tag strategy {value!r}, treating as 'none'")
            return cls.NONE

    def includes(self, version: SemanticVersion) -> bool:
        if self is GlobalTagStrategy.MAJOR_ONLY:
            return version.is_major_release
        return self is GlobalTagStrategy.ALL


@dataclass(frozen=True)
class PlannedGlobalTag:
    """A global tag to create."""
    tag_name: str
    version: str


@dataclass(frozen=True)
class ExcludedVersion:
    """A project left out of global-tag planning."""
    project_name: str
    version: str
    reason: str = EXCLUDED_UNPARSABLE


@dataclass
class GlobalTagPlan:
    """Planned tags plus the projects excluded for unparsable versions."""
    tags: List[PlannedGlobalTag] = field(default_factory=list)
    excluded: List[ExcludedVersion] = field(default_factory=list)


def build_global_tag_plan(
    selected: Iterable[ProjectVersionRecord],
    strategy,
    tag_prefix: str
) -> GlobalTagPlan:
    """
    Work out the global tags for the selected projects.

    Args:
        selected: Projects that passed selection, in order
        strategy: GlobalTagStrategy or its string name
        tag_prefix: Prefix for every tag name (e.g. "v")

    Returns:
        GlobalTagPlan with tags in first-seen order
    """
    strategy = GlobalTagStrategy.parse(strategy)
    plan = GlobalTagPlan()
    planned: Dict[str, PlannedGlobalTag] = {}

    for record in selected:
        try:
            version = SemanticVersion.parse(record.version)
        except VersionParseError:
            logger.debug(f"{record.name} {record.version}: {EXCLUDED_UNPARSABLE}")
            plan.excluded.append(ExcludedVersion(record.name, record.version))
            continue

        if not strategy.includes(version):
            continue

        tag_name = f"{tag_prefix}{record.version}"
        if tag_name not in planned:
            planned[tag_name] = PlannedGlobalTag(tag_name=tag_name, version=record.version)

    plan.tags = list(planned.values())
    return plan


def plan_global_tags(
    selected: Iterable[ProjectVersionRecord],
    strategy,
    tag_prefix: str
) -> List[PlannedGlobalTag]:
    """Return the deduplicated global tags for the selected projects."""
    return build_global_tag_plan(selected, strategy, tag_prefix).tags
