"""
Tests for TagService (single tag creation).
"""

import subprocess
from unittest.mock import MagicMock, call

import pytest

from monotag.domain import TagRequest, TagStatus
from monotag.exit_codes import TagCreationError, TagExistsError
from monotag.infra.git_client import GitClient
from monotag.services.tag_service import TagPolicy, TagService


REPO = "/repo"


@pytest.fixture
def mock_git_client():
    """Create a mock git client with no tags and a configured identity."""
    client = MagicMock(spec=GitClient)
    client.tag_exists.return_value = False
    client.get_config.return_value = "dev@example.com"
    client.create_tag.return_value = None
    return client


@pytest.fixture
def request_():
    return TagRequest(
        tag_name="myservice/v1.2.3",
        message="Release MyService 1.2.3",
        project_name="MyService",
        version="1.2.3",
    )


class TestTagPolicy:
    """Tests for TagPolicy defaults."""

    def test_default_policy(self):
        policy = TagPolicy()

        assert policy.dry_run is False
        assert policy.fail_on_existing is False
        assert policy.sign_tags is False


class TestCreateTag:
    """Tests for TagService.create_tag."""

    def test_creates_tag(self, mock_git_client, request_):
        service = TagService(REPO, git_client=mock_git_client)

        outcome = service.create_tag(request_, TagPolicy())

        assert outcome.status is TagStatus.CREATED
        assert outcome.created is True
        assert outcome.skipped is False
        assert outcome.reason is None
        mock_git_client.create_tag.assert_called_once_with(
            REPO, "myservice/v1.2.3", "Release MyService 1.2.3", sign=False
        )

    def test_signed_tag(self, mock_git_client, request_):
        service = TagService(REPO, git_client=mock_git_client)

        service.create_tag(request_, TagPolicy(sign_tags=True))

        assert mock_git_client.create_tag.call_args.kwargs['sign'] is True

    def test_existing_tag_skipped(self, mock_git_client, request_):
        mock_git_client.tag_exists.return_value = True
        service = TagService(REPO, git_client=mock_git_client)

        outcome = service.create_tag(request_, TagPolicy())

        assert outcome.skipped is True
        assert outcome.reason == "Tag already exists"
        assert outcome.status is TagStatus.EXISTING
        mock_git_client.create_tag.assert_not_called()

    def test_existing_tag_fatal_with_fail_on_existing(self, mock_git_client, request_):
        mock_git_client.tag_exists.return_value = True
        service = TagService(REPO, git_client=mock_git_client)

        with pytest.raises(TagExistsError) as exc_info:
            service.create_tag(request_, TagPolicy(fail_on_existing=True))

        assert exc_info.value.tag_name == "myservice/v1.2.3"
        assert "already exists" in str(exc_info.value)
        mock_git_client.create_tag.assert_not_called()

    def test_existing_wins_over_dry_run(self, mock_git_client, request_):
        mock_git_client.tag_exists.return_value = True
        service = TagService(REPO, git_client=mock_git_client)

        outcome = service.create_tag(request_, TagPolicy(dry_run=True))

        assert outcome.reason == "Tag already exists"

    def test_dry_run(self, mock_git_client, request_):
        service = TagService(REPO, git_client=mock_git_client)

        outcome = service.create_tag(request_, TagPolicy(dry_run=True))

        assert outcome.skipped is True
        assert outcome.reason == "Dry run mode"
        mock_git_client.create_tag.assert_not_called()
        mock_git_client.set_config.assert_not_called()

    def test_creation_failure_is_not_fatal(self, mock_git_client, request_):
        mock_git_client.create_tag.side_effect = TagCreationError(
            "Git tag creation failed: gpg failed to sign the data"
        )
        service = TagService(REPO, git_client=mock_git_client)

        outcome = service.create_tag(request_, TagPolicy(sign_tags=True))

        assert outcome.created is False
        assert outcome.skipped is True
        assert outcome.status is TagStatus.FAILED
        assert outcome.reason.startswith("Failed to create: ")
        assert "gpg failed to sign the data" in outcome.reason

    def test_outcome_echoes_request(self, mock_git_client, request_):
        service = TagService(REPO, git_client=mock_git_client)

        outcome = service.create_tag(request_, TagPolicy())

        assert outcome.tag_name == request_.tag_name
        assert outcome.message == request_.message
        assert outcome.project_name == "MyService"
        assert outcome.version == "1.2.3"
        assert outcome.is_global is False


class TestEnsureIdentity:
    """Tests for TagService.ensure_identity."""

    def test_identity_present(self, mock_git_client):
        service = TagService(REPO, git_client=mock_git_client)

        service.ensure_identity()

        mock_git_client.set_config.assert_not_called()

    def test_identity_missing_sets_default(self, mock_git_client):
        mock_git_client.get_config.return_value = None
        service = TagService(REPO, git_client=mock_git_client)

        service.ensure_identity()

        mock_git_client.set_config.assert_has_calls([
            call(REPO, 'user.email', 'actions@github.com'),
            call(REPO, 'user.name', 'GitHub Actions'),
        ])

    def test_blank_identity_sets_default(self, mock_git_client):
        mock_git_client.get_config.return_value = "   "
        service = TagService(REPO, git_client=mock_git_client)

        service.ensure_identity()

        assert mock_git_client.set_config.call_count == 2

    def test_check_failure_falls_back_to_default(self, mock_git_client):
        mock_git_client.get_config.side_effect = subprocess.CalledProcessError(128, ['git'])
        service = TagService(REPO, git_client=mock_git_client)

        service.ensure_identity()

        assert mock_git_client.set_config.call_count == 2

    def test_custom_identity(self, mock_git_client):
        mock_git_client.get_config.return_value = None
        service = TagService(
            REPO,
            git_client=mock_git_client,
            identity_name="Release Bot",
            identity_email="bot@example.com",
        )

        service.ensure_identity()

        mock_git_client.set_config.assert_any_call(REPO, 'user.email', 'bot@example.com')
        mock_git_client.set_config.assert_any_call(REPO, 'user.name', 'Release Bot')

    def test_runs_once_per_service(self, mock_git_client, request_):
        mock_git_client.get_config.return_value = None
        service = TagService(REPO, git_client=mock_git_client)

        service.create_tag(request_, TagPolicy())
        service.create_tag(request_, TagPolicy())

        assert mock_git_client.get_config.call_count == 1
        assert mock_git_client.set_config.call_count == 2

    def test_set_failure_reported_as_creation_failure(self, mock_git_client, request_):
        mock_git_client.get_config.return_value = None
        mock_git_client.set_config.side_effect = subprocess.CalledProcessError(255, ['git', 'config'])
        service = TagService(REPO, git_client=mock_git_client)

        outcome = service.create_tag(request_, TagPolicy())

        assert outcome.status is TagStatus.FAILED
        mock_git_client.create_tag.assert_not_called()
