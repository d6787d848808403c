"""Core data models for depinit."""

import json
import re
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

BUNDLED_TOOL_MANIFEST = Path(__file__).parent / "tool_manifest.json"


@dataclass
class NpmOptions:
    """Options shared by registry lookups and package manager calls."""

    use_yarn: bool = False


@dataclass
class InstallOptions(NpmOptions):
    """Options controlling how resolved packages are applied."""

    skip_install: bool = False
    install_as_dev_dependencies: bool = False
    package_json: "Manifest | None" = None


def _dependency_map(data: dict[str, Any], key: str) -> dict[str, str]:
    entries = data.get(key) or {}
    if not isinstance(entries, dict):
        raise ValueError(f"{key} must be an object mapping package names to versions")
    for name, version in entries.items():
        if not isinstance(version, str):
            raise ValueError(f"{key}.{name} must be a version string, got {version!r}")
    return dict(entries)


@dataclass
class Manifest:
    """An in-memory package.json.

    Only the dependency maps are modelled; every other top-level field is
    kept in ``fields`` so the file round-trips unchanged.
    """

    dependencies: dict[str, str] = field(default_factory=dict)
    dev_dependencies: dict[str, str] = field(default_factory=dict)
    fields: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Manifest":
        """Build a manifest, rejecting dependency maps that are not name -> range strings."""
        return cls(
            dependencies=_dependency_map(data, "dependencies"),
            dev_dependencies=_dependency_map(data, "devDependencies"),
            fields=dict(data),
        )

    def to_dict(self) -> dict[str, Any]:
        data = dict(self.fields)
        if self.dependencies or "dependencies" in data:
            data["dependencies"] = dict(self.dependencies)
        if self.dev_dependencies or "devDependencies" in data:
            data["devDependencies"] = dict(self.dev_dependencies)
        return data

    def has(self, name: str) -> bool:
        """Check whether a package is declared in either dependency map."""
        return name in self.dependencies or name in self.dev_dependencies

    def declared_version(self, name: str) -> str | None:
        if name in self.dependencies:
            return self.dependencies[name]
        return self.dev_dependencies.get(name)

    def add_dev_dependency_if_absent(self, name: str, version: str) -> None:
        if not self.has(name):
            self.dev_dependencies[name] = version


@dataclass(frozen=True)
class ToolVersions:
    """Versions pinned by the running tool itself.

    ``name`` is the tool's own package name; resolving it yields ``version``.
    Packages whose name matches ``pattern`` are looked up in
    ``dev_dependencies``.
    """

    name: str
    version: str
    dev_dependencies: Mapping[str, str] = field(default_factory=dict)
    pattern: str = "storybook"

    def __post_init__(self):
        object.__setattr__(
            self, "dev_dependencies", MappingProxyType(dict(self.dev_dependencies))
        )

    def current_for(self, package_name: str) -> str | None:
        """Return the version this tool pins for ``package_name``, if any."""
        if package_name == self.name:
            return self.version
        if re.search(self.pattern, package_name):
            return self.dev_dependencies.get(package_name)
        return None

    @classmethod
    def from_package_json(cls, path: str | Path, pattern: str = "storybook") -> "ToolVersions":
        data = json.loads(Path(path).read_text(encoding="utf-8"))
        return cls(
            name=data["name"],
            version=data["version"],
            dev_dependencies=data.get("devDependencies") or {},
            pattern=data.get("versionPattern", pattern),
        )

    @classmethod
    def bundled(cls) -> "ToolVersions":
        return cls.from_package_json(BUNDLED_TOOL_MANIFEST)


class ResolutionStatus(str, Enum):
    RESOLVED = "resolved"
    FALLBACK = "fallback"
    FAILED = "failed"


@dataclass
class ResolutionOutcome:
    """Result of resolving a single package version."""

    package_name: str
    status: ResolutionStatus
    version: str | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.status is not ResolutionStatus.FAILED


class StoryFormat(str, Enum):
    CSF = "csf"
    CSF_TYPESCRIPT = "csf-ts"
    MDX = "mdx"
