"""
Tagging run orchestration for monotag.

Sequences a full run: resolve versions, select projects, create the
project-scoped tags, plan and create the global tags, and collect every
outcome into a RunResult. Everything runs strictly in order; tag N+1 is
never attempted before tag N has an outcome.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Generator, List, Optional, Sequence

from ..config import coerce_setting, load_config
from ..domain.operation import GLOBAL_PROJECT_NAME, RunResult, TagRequest
from ..domain.project import ProjectVersionRecord
from ..infra.git_client import GitClient
from ..infra.version_resolver import DEFAULT_COMMAND, VersionResolver
from .global_tags import build_global_tag_plan
from .selection import SelectionOptions, select_projects
from .tag_service import (
    DEFAULT_IDENTITY_EMAIL,
    DEFAULT_IDENTITY_NAME,
    TagPolicy,
    TagService,
)

logger = logging.getLogger(__name__)

DEFAULT_MESSAGE_TEMPLATE = "Release {type} {version}"


@dataclass
class TaggingOptions:
    """Options for a tagging run."""
    repository_path: str = "."
    tag_prefix: str = "v"
    create_global_tags: bool = False
    global_tag_strategy: str = "major-only"
    tag_message_template: str = DEFAULT_MESSAGE_TEMPLATE
    dry_run: bool = False
    fail_on_existing: bool = False
    include_test_projects: bool = False
    include_non_packable: bool = False
    only_changed: bool = True
    sign_tags: bool = False

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'TaggingOptions':
        """
        Build options from the ``tagging`` config section.

        Unknown keys are ignored. Values are coerced to the option types
        (``dry_run: "false"`` is False, ``tag_prefix: 2`` is "2").

        Raises:
            ConfigError: a value cannot be converted
        """
        known = {}
        for name, field_ in cls.__dataclass_fields__.items():
            if name in data:
                known[name] = coerce_setting(name, data[name], field_.default)
        return cls(**known)

    def selection_options(self) -> SelectionOptions:
        return SelectionOptions(
            include_test_projects=self.include_test_projects,
            include_non_packable=self.include_non_packable,
            only_changed=self.only_changed,
        )

    def tag_policy(self) -> TagPolicy:
        return TagPolicy(
            dry_run=self.dry_run,
            fail_on_existing=self.fail_on_existing,
            sign_tags=self.sign_tags,
        )


def render_message(template: str, version: str, project: str, type_: str) -> str:
    """Fill the first {version}, {project} and {type} placeholders, in that order."""
    return (
        template
        .replace('{version}', version, 1)
        .replace('{project}', project, 1)
        .replace('{type}', type_, 1)
    )


def project_tag_name(project_name: str, tag_prefix: str, version: str) -> str:
    """Project-scoped tag name, e.g. ``webapp/v1.0.0``."""
    return f"{project_name.lower()}/{tag_prefix}{version}"


class TaggingService:
    """
    Service for a complete tagging run.

    Example:
        service = TaggingService()
        options = TaggingOptions(dry_run=True)

        for progress in service.run(project_files, options):
            print(progress)

        result = service.last_result
        print(f"{result.total_count} created, {result.skipped_count} skipped")
    """

    def __init__(
        self,
        config: Optional[Dict[str, Any]] = None,
        git_client: Optional[GitClient] = None,
        resolver: Optional[VersionResolver] = None
    ):
        """
        Initialize TaggingService.

        Args:
            config: Configuration dict (loads default if None)
            git_client: GitClient instance (creates new if None)
            resolver: VersionResolver instance (built from config if None)
        """
        self.config = config if config is not None else load_config()
        resolver_config = self.config.get('resolver', {})
        self.git = git_client or GitClient(timeout=self.config.get('git', {}).get('timeout'))
        self.resolver = resolver or VersionResolver(
            command=resolver_config.get('command') or DEFAULT_COMMAND,
            timeout=resolver_config.get('timeout'),
        )
        self.last_result: Optional[RunResult] = None

    def _tag_service(self, options: TaggingOptions) -> TagService:
        identity = self.config.get('identity', {})
        return TagService(
            options.repository_path,
            git_client=self.git,
            identity_name=identity.get('name') or DEFAULT_IDENTITY_NAME,
            identity_email=identity.get('email') or DEFAULT_IDENTITY_EMAIL,
        )

    def resolve_versions(
        self,
        project_files: Sequence[str],
        options: TaggingOptions
    ) -> Generator[str, None, List[ProjectVersionRecord]]:
        """
        Resolve a version record for every project file.

        Raises:
            ResolutionError: on the first project that cannot be resolved
        """
        records = []
        for project_file in project_files:
            record = self.resolver.resolve(project_file, options.repository_path, options.tag_prefix)
            records.append(record)
            changed = "changed" if record.version_changed else "unchanged"
            yield f"Resolved {record.name}: {record.version} ({changed})"
        return records

    def run(
        self,
        project_files: Sequence[str],
        options: TaggingOptions
    ) -> Generator[str, None, RunResult]:
        """
        Resolve versions for the project files, then tag them.

        Args:
            project_files: Discovered project files
            options: Tagging options

        Yields:
            Progress messages

        Returns:
            RunResult with every tag outcome

        Raises:
            ResolutionError: version resolution failed for any project
            TagExistsError: a tag exists and fail_on_existing is set
        """
        self.last_result = RunResult(dry_run=options.dry_run)

        if options.dry_run:
            yield "Running in dry-run mode - no tags will be created"

        if not project_files:
            yield "No project files to process"
            return self.last_result

        if not self.git.is_git_repo(options.repository_path):
            logger.warning(f"{options.repository_path} does not look like a git repository")

        records = yield from self.resolve_versions(project_files, options)
        return (yield from self.tag_projects(records, options))

    def tag_projects(
        self,
        records: Sequence[ProjectVersionRecord],
        options: TaggingOptions
    ) -> Generator[str, None, RunResult]:
        """
        Select, plan and create tags for already resolved projects.

        Yields:
            Progress messages

        Returns:
            RunResult with every tag outcome
        """
        result = RunResult(dry_run=options.dry_run)
        self.last_result = result

        selected = select_projects(records, options.selection_options())
        result.project_count = len(selected)
        yield f"Processing {len(selected)} projects for tagging"

        if not selected:
            yield "No projects eligible for tagging"
            return result

        tags = self._tag_service(options)
        policy = options.tag_policy()

        for record in selected:
            message = render_message(
                options.tag_message_template,
                record.version,
                record.name,
                record.name,
            )
            request = TagRequest(
                tag_name=project_tag_name(record.name, options.tag_prefix, record.version),
                message=message,
                project_name=record.name,
                version=record.version,
                is_global=False,
            )
            outcome = tags.create_tag(request, policy)
            result.add_outcome(outcome)
            yield _describe(outcome)

        if options.create_global_tags:
            plan = build_global_tag_plan(
                selected,
                options.global_tag_strategy,
                options.tag_prefix
            )
            for excluded in plan.excluded:
                yield f"Skipping global tag for {excluded.project_name} {excluded.version}: {excluded.reason}"

            for planned in plan.tags:
                message = render_message(
                    options.tag_message_template,
                    planned.version,
                    GLOBAL_PROJECT_NAME,
                    GLOBAL_PROJECT_NAME,
                )
                request = TagRequest(
                    tag_name=planned.tag_name,
                    message=message,
                    project_name=GLOBAL_PROJECT_NAME,
                    version=planned.version,
                    is_global=True,
                )
                outcome = tags.create_tag(request, policy)
                result.add_outcome(outcome)
                yield _describe(outcome)

        return result


def _describe(outcome) -> str:
    if outcome.created:
        return f"  ✓ {outcome.tag_name}: created"
    return f"  - {outcome.tag_name}: {outcome.reason}"
