"""
Git client infrastructure for monotag.

Provides a clean abstraction over git command execution.
All git operations go through this client, making them:
- Easy to mock for testing
- Consistent in error handling
- Isolated from business logic
"""

import subprocess
from typing import Optional, List, Sequence, Tuple
import logging

from ..exit_codes import TagCreationError

logger = logging.getLogger(__name__)


class GitClient:
    """
    Abstraction over git commands.

    Provides the tag and identity primitives the tagging run needs:
    existence checks, (optionally signed) annotated tag creation and
    repository-local config access.

    Example:
        client = GitClient()
        if not client.tag_exists("/path/to/repo", "v1.0.0"):
            client.create_tag("/path/to/repo", "v1.0.0", "Release 1.0.0")
    """

    def __init__(self, timeout: Optional[int] = None):
        """
        Initialize GitClient.

        Args:
            timeout: Command timeout in seconds (default: no timeout)
        """
        self.timeout = timeout

    def _run(
        self,
        args: Sequence[str],
        cwd: str,
        check: bool = False,
        capture_stderr: bool = False
    ) -> Tuple[Optional[str], int]:
        """
        Run a git command.

        Args:
            args: Arguments after ``git``
            cwd: Working directory
            check: Raise on non-zero exit or when git cannot be run
            capture_stderr: Include stderr in output

        Returns:
            Tuple of (stdout, returncode)
        """
        cmd = ['git'] + list(args)
        try:
            result = subprocess.run(
                cmd,
                cwd=cwd,
                capture_output=True,
                text=True,
                timeout=self.timeout
            )
        except subprocess.TimeoutExpired:
            logger.warning(f"Git command timed out: {' '.join(cmd)}")
            if check:
                raise
            return None, -1
        except OSError as e:
            logger.error(f"Git command failed: {' '.join(cmd)} - {e}")
            if check:
                raise
            return None, -1

        output = result.stdout
        if capture_stderr and result.stderr:
            output += result.stderr

        if check and result.returncode != 0:
            raise subprocess.CalledProcessError(
                result.returncode,
                cmd,
                output=result.stdout,
                stderr=result.stderr
            )

        return output.strip() if output else None, result.returncode

    def is_git_repo(self, path: str) -> bool:
        """Check if path is a git repository."""
        _, code = self._run(['rev-parse', '--git-dir'], cwd=path)
        return code == 0

    def tag_exists(self, path: str, tag_name: str) -> bool:
        """
        Check whether a tag with exactly this name exists.

        A git failure is treated as "does not exist"; creation will then
        report the real problem.
        """
        output, code = self._run(['tag', '-l', tag_name], cwd=path)
        if code != 0 or not output:
            return False
        return tag_name in output.splitlines()

    def list_tags(self, path: str) -> List[str]:
        """List all tag names in the repository, sorted by name."""
        output, code = self._run(['tag', '-l'], cwd=path)
        if code != 0 or not output:
            return []
        return sorted(line.strip() for line in output.splitlines() if line.strip())

    def create_tag(
        self,
        path: str,
        tag_name: str,
        message: str,
        sign: bool = False
    ) -> None:
        """
        Create an annotated tag on HEAD.

        Args:
            path: Path to git repository
            tag_name: Name of the tag
            message: Tag annotation
            sign: GPG-sign the tag (needs user.signingkey configured)

        Raises:
            TagCreationError: if git could not write the tag
        """
        args = ['tag']
        if sign:
            args.append('-s')
        args.extend(['-m', message, tag_name])

        output, code = self._run(args, cwd=path, capture_stderr=True)
        if code != 0:
            detail = output or 'git could not be run'
            raise TagCreationError(f"Git tag creation failed: {detail}", tag_name=tag_name)

    def get_config(self, path: str, key: str) -> Optional[str]:
        """
        Read a git config value.

        Returns:
            The value, or None if the key is not set

        Raises:
            subprocess.CalledProcessError: git reported an error other
                than "key not set"
            OSError: git could not be run
        """
        output, code = self._run(['config', '--get', key], cwd=path)
        if code == 0:
            return output or None
        if code == 1:
            return None
        if code == -1:
            raise OSError(f"Unable to run git config --get {key}")
        raise subprocess.CalledProcessError(code, ['git', 'config', '--get', key])

    def set_config(self, path: str, key: str, value: str) -> None:
        """Set a repository-local git config value."""
        self._run(['config', key, value], cwd=path, check=True)
