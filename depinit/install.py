"""Apply resolved packages to a project."""

import shutil
import subprocess
from typing import Any, Callable

from . import console
from .errors import InstallationError
from .manifest_io import write_package_json
from .models import InstallOptions, Manifest, NpmOptions


def parse_specifier(specifier: str) -> tuple[str, str]:
    """Split ``name@version`` on its last ``@``.

    ``@scope/name@1.2.3`` gives ``("@scope/name", "1.2.3")``.
    """
    name, separator, version = specifier.rpartition("@")
    if not separator or not name or not version:
        raise ValueError(f"Invalid package specifier: {specifier!r}")
    return name, version


def _run(args: list[str]) -> subprocess.CompletedProcess:
    return subprocess.run([shutil.which(args[0]) or args[0], *args[1:]])


class DependencyInstaller:
    """Install packages with npm or yarn, or record them in package.json."""

    def __init__(
        self,
        runner: Callable[[list[str]], Any] | None = None,
        write_manifest: Callable[[Manifest], None] | None = None,
    ):
        """Initialize installer.

        Args:
            runner: Runs a command with inherited stdio and returns an object
                with a ``returncode``
            write_manifest: Persists the manifest in skip-install mode
        """
        self.runner = runner or _run
        self.write_manifest = write_manifest or write_package_json

    def install(self, options: InstallOptions, dependencies: list[str]) -> None:
        """Add dependencies to a project using ``yarn add`` or ``npm install``.

        With ``skip_install`` nothing is installed; the specifiers are merged
        into ``options.package_json`` which is then written back.

        Example:
            installer.install(options, [
                "@storybook/react@^6.0.0",
                "@storybook/addon-actions@^6.0.0",
            ])
        """
        if options.skip_install:
            self._record(options, dependencies)
            return

        command = ["yarn", "add"] if options.use_yarn else ["npm", "install"]
        command.extend(dependencies)

        if options.install_as_dev_dependencies:
            command.append("-D")

        if options.use_yarn:
            command.append("--ignore-workspace-root-check")

        result = self.runner(command)
        if result.returncode != 0:
            console.error("An error occurred while installing dependencies.")
            raise InstallationError(result.returncode, command)

    def _record(self, options: InstallOptions, dependencies: list[str]) -> None:
        manifest = options.package_json
        if manifest is None:
            raise ValueError("skip_install requires a package_json to update")

        resolved = dict(parse_specifier(dependency) for dependency in dependencies)

        if options.install_as_dev_dependencies:
            manifest.dev_dependencies.update(resolved)
        else:
            manifest.dependencies.update(resolved)

        self.write_manifest(manifest)

    def install_from_manifest(self, options: NpmOptions) -> None:
        """Run a bare ``yarn`` / ``npm install`` for the current package.json."""
        done = console.command_log("Preparing to install dependencies")
        done()
        console.console.print()

        command = ["yarn"] if options.use_yarn else ["npm", "install"]
        result = self.runner(command)

        console.console.print()
        done = console.command_log("Installing dependencies")
        if result.returncode != 0:
            done("An error occurred while installing dependencies.")
            raise InstallationError(result.returncode, command)
        done()
