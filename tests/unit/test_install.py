"""Tests for applying resolved packages to a project."""

import subprocess
from unittest.mock import MagicMock

import pytest

from depinit.errors import InstallationError
from depinit.install import DependencyInstaller, parse_specifier
from depinit.models import InstallOptions, Manifest, NpmOptions


def completed(returncode=0):
    return subprocess.CompletedProcess(args=[], returncode=returncode)


class TestParseSpecifier:
    """Test splitting name@version specifiers."""

    def test_plain_name(self):
        assert parse_specifier("react@^16.13.0") == ("react", "^16.13.0")

    def test_scoped_name_splits_on_last_at(self):
        assert parse_specifier("@scope/name@1.2.3") == ("@scope/name", "1.2.3")

    @pytest.mark.parametrize("specifier", ["react", "@scope/name", "react@", "@1.0.0"])
    def test_invalid_specifiers(self, specifier):
        with pytest.raises(ValueError):
            parse_specifier(specifier)


class TestSkipInstall:
    """Test recording packages in package.json without installing."""

    def setup_method(self):
        self.runner = MagicMock()
        self.writer = MagicMock()
        self.installer = DependencyInstaller(runner=self.runner, write_manifest=self.writer)

    def test_merge_into_empty_dependencies(self):
        manifest = Manifest()
        options = InstallOptions(skip_install=True, package_json=manifest)

        self.installer.install(options, ["a@1.0.0", "@scope/b@2.0.0"])

        assert manifest.dependencies == {"a": "1.0.0", "@scope/b": "2.0.0"}
        assert manifest.dev_dependencies == {}
        self.writer.assert_called_once_with(manifest)
        self.runner.assert_not_called()

    def test_merge_preserves_unrelated_and_overwrites_same_name(self):
        manifest = Manifest(dependencies={"react": "^16.13.0", "a": "0.9.0"})
        options = InstallOptions(skip_install=True, package_json=manifest)

        self.installer.install(options, ["a@1.0.0"])

        assert manifest.dependencies == {"react": "^16.13.0", "a": "1.0.0"}

    def test_merge_into_dev_dependencies(self):
        manifest = Manifest(dependencies={"react": "^16.13.0"}, dev_dependencies={"jest": "^26.0.0"})
        options = InstallOptions(
            skip_install=True, install_as_dev_dependencies=True, package_json=manifest
        )

        self.installer.install(options, ["@storybook/react@^6.1.0"])

        assert manifest.dev_dependencies == {"jest": "^26.0.0", "@storybook/react": "^6.1.0"}
        assert manifest.dependencies == {"react": "^16.13.0"}

    def test_invalid_specifier_leaves_manifest_untouched(self):
        manifest = Manifest(dependencies={"react": "^16.13.0"})
        options = InstallOptions(skip_install=True, package_json=manifest)

        with pytest.raises(ValueError):
            self.installer.install(options, ["a@1.0.0", "broken"])

        assert manifest.dependencies == {"react": "^16.13.0"}
        self.writer.assert_not_called()

    def test_missing_manifest_raises(self):
        with pytest.raises(ValueError):
            self.installer.install(InstallOptions(skip_install=True), ["a@1.0.0"])


class TestInstall:
    """Test package manager invocations."""

    def setup_method(self):
        self.runner = MagicMock(return_value=completed(0))
        self.installer = DependencyInstaller(runner=self.runner, write_manifest=MagicMock())

    def test_npm_install(self):
        self.installer.install(InstallOptions(), ["react@^17.0.1", "react-dom@^17.0.1"])

        self.runner.assert_called_once_with(["npm", "install", "react@^17.0.1", "react-dom@^17.0.1"])

    def test_npm_install_dev(self):
        self.installer.install(InstallOptions(install_as_dev_dependencies=True), ["jest@^26.0.0"])

        self.runner.assert_called_once_with(["npm", "install", "jest@^26.0.0", "-D"])

    def test_yarn_add_dev(self):
        options = InstallOptions(use_yarn=True, install_as_dev_dependencies=True)

        self.installer.install(options, ["jest@^26.0.0"])

        self.runner.assert_called_once_with(
            ["yarn", "add", "jest@^26.0.0", "-D", "--ignore-workspace-root-check"]
        )

    def test_failed_install_raises(self):
        """Should raise with the exit status of the package manager."""
        self.runner.return_value = completed(1)

        with pytest.raises(InstallationError) as exc_info:
            self.installer.install(InstallOptions(), ["react@^17.0.1"])

        assert exc_info.value.returncode == 1
        assert exc_info.value.command == ["npm", "install", "react@^17.0.1"]


class TestInstallFromManifest:
    """Test bare installs from an existing package.json."""

    def test_npm(self, capsys):
        runner = MagicMock(return_value=completed(0))

        DependencyInstaller(runner=runner).install_from_manifest(NpmOptions())

        runner.assert_called_once_with(["npm", "install"])
        out = capsys.readouterr().out
        assert "Preparing to install dependencies" in out
        assert "✓" in out

    def test_yarn(self):
        runner = MagicMock(return_value=completed(0))

        DependencyInstaller(runner=runner).install_from_manifest(NpmOptions(use_yarn=True))

        runner.assert_called_once_with(["yarn"])

    def test_failure_raises(self, capsys):
        runner = MagicMock(return_value=completed(1))

        with pytest.raises(InstallationError):
            DependencyInstaller(runner=runner).install_from_manifest(NpmOptions())

        assert "An error occurred while installing dependencies." in capsys.readouterr().out
