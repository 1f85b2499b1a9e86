"""
Project selection for monotag.

Decides which projects are eligible for tagging.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional

from ..domain.project import ProjectVersionRecord

logger = logging.getLogger(__name__)


@dataclass
class SelectionOptions:
    """Inclusion rules. All enabled filters must pass."""
    include_test_projects: bool = False
    include_non_packable: bool = False
    only_changed: bool = True


def exclusion_reason(record: ProjectVersionRecord, options: SelectionOptions) -> Optional[str]:
    """Return why a record is filtered out, or None if it is eligible."""
    if not options.include_test_projects and record.is_test_project:
        return "test project"
    if not options.include_non_packable and not record.is_packable:
        return "not packable"
    if options.only_changed and not record.version_changed:
        return "version unchanged"
    return None


def select_projects(
    records: Iterable[ProjectVersionRecord],
    options: SelectionOptions
) -> List[ProjectVersionRecord]:
    """
    Filter records down to the ones that should be tagged.

    Input order is preserved. An empty result is valid.
    """
    selected = []
    for record in records:
        reason = exclusion_reason(record, options)
        if reason:
            logger.debug(f"Excluding {record.name}: {reason}")
            continue
        selected.append(record)
    return selected
