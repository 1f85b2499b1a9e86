"""
Tag creation service for monotag.

Turns one TagRequest into one TagOutcome:

    exists?  -> skipped "Tag already exists" (fatal with fail_on_existing)
    dry run? -> skipped "Dry run mode"
    identity -> make sure git can author the tag (once per service)
    create   -> created, or skipped "Failed to create: <error>"

Creation failures are isolated to their tag and never abort a run.
"""

import logging
import subprocess
from dataclasses import dataclass
from typing import Optional

from ..domain.operation import (
    REASON_DRY_RUN,
    REASON_EXISTS,
    REASON_FAILED_PREFIX,
    TagOutcome,
    TagRequest,
    TagStatus,
)
from ..exit_codes import CommandError, TagExistsError
from ..infra.git_client import GitClient

logger = logging.getLogger(__name__)

DEFAULT_IDENTITY_NAME = "GitHub Actions"
DEFAULT_IDENTITY_EMAIL = "actions@github.com"


@dataclass
class TagPolicy:
    """How tag requests are realized."""
    dry_run: bool = False
    fail_on_existing: bool = False
    sign_tags: bool = False


class TagService:
    """
    Creates tags in one repository.

    Example:
        service = TagService("/path/to/repo")
        outcome = service.create_tag(
            TagRequest("api/v1.0.0", "Release Api 1.0.0", "Api", "1.0.0"),
            TagPolicy(dry_run=True),
        )
        print(outcome.reason)  # "Dry run mode"
    """

    def __init__(
        self,
        repository_path: str,
        git_client: Optional[GitClient] = None,
        identity_name: str = DEFAULT_IDENTITY_NAME,
        identity_email: str = DEFAULT_IDENTITY_EMAIL,
    ):
        """
        Initialize TagService.

        Args:
            repository_path: Git repository root
            git_client: GitClient instance (creates new if None)
            identity_name: user.name to set when none is configured
            identity_email: user.email to set when none is configured
        """
        self.repository_path = repository_path
        self.git = git_client or GitClient()
        self.identity_name = identity_name
        self.identity_email = identity_email
        self._identity_ensured = False

    def ensure_identity(self) -> None:
        """
        Make sure git has a committer identity for annotated tags.

        Runs at most once per service. If no user.email is configured the
        default bot identity is written to the repository config; if the
        check itself fails, the default identity is written anyway.
        """
        if self._identity_ensured:
            return

        try:
            email = self.git.get_config(self.repository_path, 'user.email')
            needs_identity = not (email and email.strip())
        except (OSError, subprocess.SubprocessError) as e:
            logger.debug(f"Could not read git identity, setting default: {e}")
            needs_identity = True

        if needs_identity:
            logger.info(f"Configuring git identity {self.identity_name} <{self.identity_email}>")
            self.git.set_config(self.repository_path, 'user.email', self.identity_email)
            self.git.set_config(self.repository_path, 'user.name', self.identity_name)

        self._identity_ensured = True

    def create_tag(self, request: TagRequest, policy: TagPolicy) -> TagOutcome:
        """
        Realize one tag request.

        Args:
            request: Tag to create
            policy: Dry-run, fail-on-existing and signing flags

        Returns:
            TagOutcome describing what happened

        Raises:
            TagExistsError: the tag exists and policy.fail_on_existing is set
        """
        if self.git.tag_exists(self.repository_path, request.tag_name):
            if policy.fail_on_existing:
                raise TagExistsError(request.tag_name)
            logger.warning(f"Tag {request.tag_name} already exists, skipping")
            return TagOutcome.from_request(request, TagStatus.EXISTING, REASON_EXISTS)

        if policy.dry_run:
            logger.info(f"[DRY RUN] Would create tag: {request.tag_name}")
            return TagOutcome.from_request(request, TagStatus.DRY_RUN, REASON_DRY_RUN)

        try:
            self.ensure_identity()
            self.git.create_tag(
                self.repository_path,
                request.tag_name,
                request.message,
                sign=policy.sign_tags
            )
        except (CommandError, OSError, subprocess.SubprocessError) as e:
            logger.error(f"Failed to create tag {request.tag_name}: {e}")
            return TagOutcome.from_request(request, TagStatus.FAILED, f"{REASON_FAILED_PREFIX}{e}")

        logger.info(f"Created tag: {request.tag_name}")
        return TagOutcome.from_request(request, TagStatus.CREATED)
