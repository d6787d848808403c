"""Version resolution for packages added by the scaffolder."""

import asyncio

from . import console
from .errors import FatalResolutionError, RegistryLookupError
from .models import NpmOptions, ResolutionOutcome, ResolutionStatus, ToolVersions
from .registry import NpmRegistry
from .semver import bare_version, greater_than, satisfies


class VersionResolver:
    """Pick the version range to install for a package.

    The registry's latest version is preferred unless the running tool pins
    a newer compatible version of the same package.
    """

    def __init__(
        self,
        registry: NpmRegistry | None = None,
        tool_versions: ToolVersions | None = None,
    ):
        self.registry = registry or NpmRegistry()
        self.tool_versions = tool_versions or ToolVersions.bundled()

    def current_version(self, package_name: str) -> str | None:
        return self.tool_versions.current_for(package_name)

    async def resolve_outcome(
        self, options: NpmOptions, package_name: str, constraint: str | None = None
    ) -> ResolutionOutcome:
        """Resolve a package without side effects.

        Args:
            options: npm options passed to the registry
            package_name: Name of the package
            constraint: Optional npm range the version must satisfy

        Returns:
            RESOLVED with a caret range, FALLBACK with the pinned version
            when the registry failed, or FAILED with the registry error
        """
        current = self.current_version(package_name)

        try:
            latest = await self.registry.fetch_latest(options, package_name, constraint)
        except RegistryLookupError as e:
            if current:
                return ResolutionOutcome(
                    package_name, ResolutionStatus.FALLBACK, version=current, error=str(e)
                )
            return ResolutionOutcome(package_name, ResolutionStatus.FAILED, error=str(e))

        use_current = (
            current
            and (not constraint or satisfies(current, constraint))
            and greater_than(current, latest)
        )
        chosen = bare_version(current) if use_current else latest
        return ResolutionOutcome(package_name, ResolutionStatus.RESOLVED, version=f"^{chosen}")

    async def resolve(
        self, options: NpmOptions, package_name: str, constraint: str | None = None
    ) -> str:
        """Resolve a package, warning on fallback.

        Raises:
            FatalResolutionError: if the registry failed and nothing is pinned
        """
        outcome = await self.resolve_outcome(options, package_name, constraint)
        if not outcome.ok:
            raise FatalResolutionError(package_name, outcome.error or f"Could not resolve {package_name}")
        if outcome.status is ResolutionStatus.FALLBACK:
            console.warn(outcome.error or f"Using pinned version of {package_name}")
        return outcome.version

    async def resolve_many(self, options: NpmOptions, *package_names: str) -> list[str]:
        tasks = [self.resolve(options, package_name) for package_name in package_names]
        return list(await asyncio.gather(*tasks))

    async def resolve_specifiers(self, options: NpmOptions, *package_names: str) -> list[str]:
        """Resolve packages concurrently into ``name@version`` specifiers."""
        versions = await self.resolve_many(options, *package_names)
        return [f"{name}@{version}" for name, version in zip(package_names, versions)]
