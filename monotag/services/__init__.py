"""
Service layer for monotag.

Services orchestrate domain objects and infrastructure:
- select_projects: Which projects get tagged
- plan_global_tags: Which repository-wide tags to create
- TagService: Existence-checked, dry-run-aware tag creation
- TaggingService: A complete tagging run
"""

from .selection import SelectionOptions, select_projects
from .global_tags import (
    GlobalTagStrategy,
    GlobalTagPlan,
    PlannedGlobalTag,
    build_global_tag_plan,
    plan_global_tags,
)
from .tag_service import TagPolicy, TagService
from .tagging_service import (
    TaggingOptions,
    TaggingService,
    project_tag_name,
    render_message,
)

__all__ = [
    'SelectionOptions',
    'select_projects',
    'GlobalTagStrategy',
    'GlobalTagPlan',
    'PlannedGlobalTag',
    'build_global_tag_plan',
    'plan_global_tags',
    'TagPolicy',
    'TagService',
    'TaggingOptions',
    'TaggingService',
    'project_tag_name',
    'render_message',
]
