"""
Project file discovery for monotag.

Expands the configured project patterns into the list of project files
to version and tag. Patterns are evaluated in order:

    src                  a directory matches every file below it
    **/*.csproj          recursive glob
    !tests/**            exclude what an earlier pattern matched
    # comment            ignored
"""

import glob
import logging
import os
from typing import Iterable, List, Set, Union

logger = logging.getLogger(__name__)

PROJECT_FILE_EXTENSIONS = ('.csproj', '.vbproj', '.fsproj')

SKIPPED_DIRS = {'.git'}


def split_patterns(pattern: Union[str, Iterable[str]]) -> List[str]:
    """Split a comma- or newline-separated pattern list (or a list of them)."""
    if not isinstance(pattern, str):
        pattern = '\n'.join(str(p) for p in pattern)
    parts = pattern.replace('\n', ',').split(',')
    return [p.strip() for p in parts if p.strip() and not p.strip().startswith('#')]


def _files_below(path: str) -> Iterable[str]:
    if not os.path.isdir(path):
        yield path
        return
    for dirpath, dirnames, filenames in os.walk(path):
        dirnames[:] = [d for d in dirnames if d not in SKIPPED_DIRS]
        for filename in filenames:
            yield os.path.join(dirpath, filename)


def _expand(root: str, pattern: str) -> Set[str]:
    """Files matched by one pattern, directories expanded to their contents."""
    matches = glob.glob(os.path.join(root, os.path.expanduser(pattern)), recursive=True)
    if not matches:
        logger.debug(f"No matches for pattern: {pattern}")
    return {os.path.abspath(f) for match in matches for f in _files_below(match)}


def find_project_files(pattern: Union[str, Iterable[str]], repository_path: str = '.') -> List[str]:
    """
    Find project files matching a glob pattern.

    Args:
        pattern: Glob (``**`` is recursive), directory, or comma/newline
            separated list of them, relative to the repository path.
            Entries starting with ``!`` remove earlier matches.
        repository_path: Repository root

    Returns:
        Sorted, de-duplicated absolute paths of .csproj/.vbproj/.fsproj files
    """
    root = os.path.expanduser(repository_path)
    found: Set[str] = set()

    for single in split_patterns(pattern):
        if single.startswith('!'):
            found -= _expand(root, single[1:].strip())
        else:
            found |= _expand(root, single)

    return sorted(f for f in found if f.endswith(PROJECT_FILE_EXTENSIONS))
