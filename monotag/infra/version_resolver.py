"""
Version resolver infrastructure for monotag.

Wraps the external ``mr-version`` tool, which computes the semantic
version of one project inside a monorepo and prints it as JSON.
"""

import json
import logging
import subprocess
from typing import Optional

from ..domain.project import ProjectVersionRecord
from ..exit_codes import ResolutionError

logger = logging.getLogger(__name__)

DEFAULT_COMMAND = "mr-version"


class VersionResolver:
    """
    Runs the version tool once per project file.

    Any failure (tool missing, non-zero exit, bad JSON) raises
    ResolutionError; callers treat that as fatal for the whole run.

    Example:
        resolver = VersionResolver()
        record = resolver.resolve("src/Api/Api.csproj", ".", "v")
        print(record.name, record.version)
    """

    def __init__(self, command: str = DEFAULT_COMMAND, timeout: Optional[int] = None):
        """
        Initialize VersionResolver.

        Args:
            command: Executable to run (default: "mr-version")
            timeout: Per-project timeout in seconds (default: none)
        """
        self.command = command
        self.timeout = timeout

    def resolve(self, project_file: str, repository_path: str, tag_prefix: str) -> ProjectVersionRecord:
        """
        Compute the version record for one project.

        Args:
            project_file: Path to the project file
            repository_path: Git repository root
            tag_prefix: Prefix the tool uses to find previous version tags

        Returns:
            ProjectVersionRecord for the project

        Raises:
            ResolutionError: if the tool fails or its output is unusable
        """
        cmd = [
            self.command, 'version',
            '--repo', repository_path,
            '--project', project_file,
            '--tag-prefix', tag_prefix,
            '--json',
        ]
        logger.debug(f"Resolving version: {' '.join(cmd)}")

        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=self.timeout
            )
        except subprocess.TimeoutExpired:
            raise ResolutionError(
                f"{self.command} timed out for {project_file}",
                project_file=project_file
            )
        except OSError as e:
            raise ResolutionError(
                f"{self.command} failed for {project_file}: {e}",
                project_file=project_file
            ) from e

        if result.returncode != 0:
            raise ResolutionError(
                f"{self.command} failed for {project_file}: {result.stderr.strip()}",
                project_file=project_file
            )

        try:
            data = json.loads(result.stdout)
            if not isinstance(data, dict):
                raise ValueError("expected a JSON object")
            return ProjectVersionRecord.from_dict(data, path=project_file)
        except ValueError as e:
            raise ResolutionError(
                f"Failed to parse {self.command} output for {project_file}: {e}",
                project_file=project_file
            ) from e
