"""
Tests for VersionResolver (mr-version wrapper).
"""

import json
import subprocess
from unittest.mock import MagicMock, patch

import pytest

from monotag.exit_codes import RESOLUTION_ERROR, ResolutionError
from monotag.infra.version_resolver import VersionResolver


def completed(returncode=0, stdout="", stderr=""):
    result = MagicMock()
    result.returncode = returncode
    result.stdout = stdout
    result.stderr = stderr
    return result


TOOL_OUTPUT = {
    'project': 'MyService',
    'path': '/repo/src/MyService/MyService.csproj',
    'version': '1.2.3',
    'versionChanged': True,
    'isTestProject': False,
    'isPackable': True,
    'dependencies': [],
}


class TestVersionResolver:
    """Tests for VersionResolver.resolve."""

    @patch('monotag.infra.version_resolver.subprocess.run')
    def test_resolve(self, mock_run):
        mock_run.return_value = completed(stdout=json.dumps(TOOL_OUTPUT))

        record = VersionResolver().resolve("src/MyService/MyService.csproj", "/repo", "v")

        assert record.name == "MyService"
        assert record.version == "1.2.3"
        assert record.version_changed is True
        assert mock_run.call_args[0][0] == [
            'mr-version', 'version',
            '--repo', '/repo',
            '--project', 'src/MyService/MyService.csproj',
            '--tag-prefix', 'v',
            '--json',
        ]

    @patch('monotag.infra.version_resolver.subprocess.run')
    def test_custom_command_and_timeout(self, mock_run):
        mock_run.return_value = completed(stdout=json.dumps(TOOL_OUTPUT))

        VersionResolver(command="/opt/mr-version", timeout=30).resolve("a.csproj", ".", "v")

        assert mock_run.call_args[0][0][0] == "/opt/mr-version"
        assert mock_run.call_args.kwargs['timeout'] == 30

    @patch('monotag.infra.version_resolver.subprocess.run')
    def test_nonzero_exit(self, mock_run):
        mock_run.return_value = completed(returncode=1, stderr="Project file not found\n")

        with pytest.raises(ResolutionError) as exc_info:
            VersionResolver().resolve("missing.csproj", ".", "v")

        assert str(exc_info.value) == "mr-version failed for missing.csproj: Project file not found"
        assert exc_info.value.exit_code == RESOLUTION_ERROR
        assert exc_info.value.project_file == "missing.csproj"

    @patch('monotag.infra.version_resolver.subprocess.run')
    def test_unparsable_output(self, mock_run):
        mock_run.return_value = completed(stdout="Version: 1.2.3")

        with pytest.raises(ResolutionError) as exc_info:
            VersionResolver().resolve("a.csproj", ".", "v")

        assert "Failed to parse mr-version output for a.csproj" in str(exc_info.value)

    @patch('monotag.infra.version_resolver.subprocess.run')
    def test_output_not_an_object(self, mock_run):
        mock_run.return_value = completed(stdout="[]")

        with pytest.raises(ResolutionError):
            VersionResolver().resolve("a.csproj", ".", "v")

    @patch('monotag.infra.version_resolver.subprocess.run')
    def test_output_without_version(self, mock_run):
        mock_run.return_value = completed(stdout=json.dumps({'project': 'Api'}))

        with pytest.raises(ResolutionError):
            VersionResolver().resolve("a.csproj", ".", "v")

    @patch('monotag.infra.version_resolver.subprocess.run')
    def test_tool_not_installed(self, mock_run):
        mock_run.side_effect = FileNotFoundError("mr-version")

        with pytest.raises(ResolutionError) as exc_info:
            VersionResolver().resolve("a.csproj", ".", "v")

        assert "mr-version failed for a.csproj" in str(exc_info.value)

    @patch('monotag.infra.version_resolver.subprocess.run')
    def test_timeout(self, mock_run):
        mock_run.side_effect = subprocess.TimeoutExpired(cmd="mr-version", timeout=1)

        with pytest.raises(ResolutionError) as exc_info:
            VersionResolver(timeout=1).resolve("a.csproj", ".", "v")

        assert "timed out" in str(exc_info.value)
