"""
monotag - Git tags for projects inside a monorepo.

monotag takes versions computed per project (by the mr-version tool),
selects the projects that should be released, and creates
project-scoped tags (``webapp/v1.2.0``) plus optional repository-wide
tags (``v2.0.0``).

Quick Start:
    from monotag import TaggingService, TaggingOptions

    service = TaggingService()
    options = TaggingOptions(dry_run=True, create_global_tags=True)

    for progress in service.run(["src/Api/Api.csproj"], options):
        print(progress)

    result = service.last_result
    print(result.total_count, result.skipped_count)

Domain Objects:
    ProjectVersionRecord - Computed version for one project
    SemanticVersion - Parsed version string
    TagRequest / TagOutcome / RunResult - Tag operation results

Services:
    select_projects - Which projects get tagged
    plan_global_tags - Which repository-wide tags to create
    TagService - Tag creation for one repository
    TaggingService - A complete run
"""

__version__ = "0.3.0"

# Domain objects
from .domain import (
    ProjectVersionRecord,
    SemanticVersion,
    VersionParseError,
    TagStatus,
    TagRequest,
    TagOutcome,
    RunResult,
)

# Services
from .services import (
    SelectionOptions,
    select_projects,
    GlobalTagStrategy,
    plan_global_tags,
    TagPolicy,
    TagService,
    TaggingOptions,
    TaggingService,
)

# Errors
from .exit_codes import (
    CommandError,
    ConfigError,
    ResolutionError,
    TagExistsError,
    TagCreationError,
)

# Configuration
from .config import load_config

__all__ = [
    # Version
    "__version__",
    # Domain objects
    "ProjectVersionRecord",
    "SemanticVersion",
    "VersionParseError",
    "TagStatus",
    "TagRequest",
    "TagOutcome",
    "RunResult",
    # Services
    "SelectionOptions",
    "select_projects",
    "GlobalTagStrategy",
    "plan_global_tags",
    "TagPolicy",
    "TagService",
    "TaggingOptions",
    "TaggingService",
    # Errors
    "CommandError",
    "ConfigError",
    "ResolutionError",
    "TagExistsError",
    "TagCreationError",
    # Configuration
    "load_config",
]
