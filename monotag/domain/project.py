"""
Project version record for monotag.

One record per discovered project file, built from the JSON the version
tool prints. Records are immutable and live for a single run.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True)
class ProjectVersionRecord:
    """
    Computed version information for one project.

    Attributes:
        name: Project name (e.g. "MyService")
        path: Path to the project file, kept for traceability
        version: Semantic version string (e.g. "1.2.3-beta.1")
        version_changed: True if this run computed a new version
        is_test_project: Project is a test project
        is_packable: Project produces a distributable package
        change_reason: Why the version changed, as reported by the tool
        branch_type: Branch classification (main, release, feature, ...)
        branch_name: Branch the version was computed on
        dependencies: Project files this project depends on
    """

    name: str
    path: str
    version: str
    version_changed: bool = False
    is_test_project: bool = False
    is_packable: bool = True
    change_reason: Optional[str] = None
    branch_type: Optional[str] = None
    branch_name: Optional[str] = None
    dependencies: Tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def from_dict(cls, data: Dict[str, Any], path: Optional[str] = None) -> 'ProjectVersionRecord':
        """
        Build a record from the version tool's JSON output.

        Accepts the tool's camelCase keys (``project``, ``versionChanged``,
        ``isTestProject``, ...) as well as snake_case equivalents.

        Args:
            data: Parsed JSON object
            path: Project file path, used when the output has none

        Raises:
            ValueError: if the name or version is missing or empty
        """
        name = data.get('project') or data.get('name') or ''
        version = data.get('version') or ''
        if not isinstance(name, str) or not name.strip():
            raise ValueError("version output has no project name")
        if not isinstance(version, str) or not version.strip():
            raise ValueError(f"version output for {name} has no version")

        def flag(camel: str, snake: str, default: bool) -> bool:
            value = data.get(camel, data.get(snake, default))
            return bool(value) if value is not None else default

        return cls(
            name=name.strip(),
            path=data.get('path') or path or '',
            version=version.strip(),
            version_changed=flag('versionChanged', 'version_changed', False),
            is_test_project=flag('isTestProject', 'is_test_project', False),
            is_packable=flag('isPackable', 'is_packable', True),
            change_reason=data.get('changeReason', data.get('change_reason')),
            branch_type=data.get('branchType', data.get('branch_type')),
            branch_name=data.get('branchName', data.get('branch_name')),
            dependencies=tuple(data.get('dependencies') or ()),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result = {
            'project': self.name,
            'path': self.path,
            'version': self.version,
            'versionChanged': self.version_changed,
            'isTestProject': self.is_test_project,
            'isPackable': self.is_packable,
            'dependencies': list(self.dependencies),
        }
        if self.change_reason:
            result['changeReason'] = self.change_reason
        if self.branch_type:
            result['branchType'] = self.branch_type
        if self.branch_name:
            result['branchName'] = self.branch_name
        return result
