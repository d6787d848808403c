"""Detect babel packages a project needs before adding loaders."""

from .models import Manifest, NpmOptions
from .semver import satisfies
from .versions import VersionResolver

DEFAULT_LOADER_RANGE = "^8.0.0-0"
# babel-loader 8 requires @babel/core; projects still on babel-core 6 need loader 7
LEGACY_LOADER_RANGE = "^7.0.0"
LEGACY_CORE_RANGE = "^6.0.0"


async def plan_babel_additions(
    resolver: VersionResolver, options: NpmOptions, manifest: Manifest
) -> list[str]:
    """Detect which babel packages need to be added to the project.

    Args:
        resolver: Resolver used for versions and registry lookups
        options: npm options passed along to the resolver
        manifest: The current package.json, inspected but not modified

    Returns:
        ``name@version`` specifiers to install, e.g.
        ``["@babel/core@^7.11.0", "babel-loader@^8.1.0"]``
    """
    additions = []
    loader_range = DEFAULT_LOADER_RANGE

    if not manifest.has("babel-core"):
        if not manifest.has("@babel/core"):
            core_version = await resolver.resolve(options, "@babel/core")
            additions.append(f"@babel/core@{core_version}")
    else:
        declared = manifest.declared_version("babel-core") or None
        compatible = await resolver.registry.fetch_latest(options, "babel-core", declared)
        if satisfies(compatible, LEGACY_CORE_RANGE):
            loader_range = LEGACY_LOADER_RANGE

    if not manifest.has("babel-loader"):
        loader_version = await resolver.resolve(options, "babel-loader", loader_range)
        additions.append(f"babel-loader@{loader_version}")

    return additions
