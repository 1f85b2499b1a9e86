"""
Tag operation domain objects for monotag.

Provides the request/outcome types flowing through a tagging run:
a TagRequest is what we would like to exist, a TagOutcome is what
happened when we tried, and a RunResult collects every outcome.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Any, List, Optional

GLOBAL_PROJECT_NAME = "Global"

REASON_EXISTS = "Tag already exists"
REASON_DRY_RUN = "Dry run mode"
REASON_FAILED_PREFIX = "Failed to create: "


class TagStatus(Enum):
    """What happened to an individual tag request."""
    CREATED = "created"
    EXISTING = "existing"    # Skipped, tag already present
    DRY_RUN = "dry_run"      # Skipped, would have been created
    FAILED = "failed"        # Skipped, git refused to write it

    @property
    def skipped(self) -> bool:
        return self is not TagStatus.CREATED


@dataclass(frozen=True)
class TagRequest:
    """A tag we want to exist."""
    tag_name: str
    message: str
    project_name: str
    version: str
    is_global: bool = False


@dataclass(frozen=True)
class TagOutcome:
    """
    Result of attempting to realize one TagRequest.

    ``created`` and ``skipped`` are derived from ``status`` so they can
    never both be true, and every skipped outcome carries a reason.
    """
    tag_name: str
    version: str
    project_name: str
    is_global: bool
    message: str
    status: TagStatus
    reason: Optional[str] = None

    def __post_init__(self):
        if self.status.skipped and not self.reason:
            raise ValueError(f"Skipped outcome for {self.tag_name} needs a reason")

    @classmethod
    def from_request(
        cls,
        request: TagRequest,
        status: TagStatus,
        reason: Optional[str] = None
    ) -> 'TagOutcome':
        return cls(
            tag_name=request.tag_name,
            version=request.version,
            project_name=request.project_name,
            is_global=request.is_global,
            message=request.message,
            status=status,
            reason=reason,
        )

    @property
    def created(self) -> bool:
        return self.status is TagStatus.CREATED

    @property
    def skipped(self) -> bool:
        return self.status.skipped

    @property
    def failed(self) -> bool:
        return self.status is TagStatus.FAILED

    @property
    def scope(self) -> str:
        return "Global" if self.is_global else "Project"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result = {
            'tagName': self.tag_name,
            'version': self.version,
            'projectName': self.project_name,
            'isGlobal': self.is_global,
            'message': self.message,
            'created': self.created,
            'skipped': self.skipped,
        }
        if self.reason:
            result['reason'] = self.reason
        return result


@dataclass
class RunResult:
    """
    Aggregate of every tag outcome in a run.

    Counters are computed from the outcomes, so
    ``total_count + skipped_count == len(tags)`` always holds.
    """
    tags: List[TagOutcome] = field(default_factory=list)
    global_tags: List[TagOutcome] = field(default_factory=list)
    project_tags: List[TagOutcome] = field(default_factory=list)
    dry_run: bool = False
    project_count: int = 0

    def add_outcome(self, outcome: TagOutcome) -> None:
        """Add an outcome to the run and its scope partition."""
        self.tags.append(outcome)
        if outcome.is_global:
            self.global_tags.append(outcome)
        else:
            self.project_tags.append(outcome)

    @property
    def total_count(self) -> int:
        """Number of tags actually written."""
        return sum(1 for t in self.tags if t.created)

    @property
    def skipped_count(self) -> int:
        """Number of tags not written (existing, dry run or failed)."""
        return sum(1 for t in self.tags if t.skipped)

    @property
    def created(self) -> List[TagOutcome]:
        return [t for t in self.tags if t.created]

    @property
    def skipped(self) -> List[TagOutcome]:
        return [t for t in self.tags if t.skipped and not t.failed]

    @property
    def failed(self) -> List[TagOutcome]:
        return [t for t in self.tags if t.failed]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            'tagsCreated': [t.to_dict() for t in self.tags],
            'globalTags': [t.to_dict() for t in self.global_tags],
            'projectTags': [t.to_dict() for t in self.project_tags],
            'totalCount': self.total_count,
            'skippedCount': self.skipped_count,
        }
