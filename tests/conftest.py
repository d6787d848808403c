"""Pytest configuration and fixtures."""


import pytest

from depinit.models import ToolVersions


@pytest.fixture
def tool_versions():
    """Pinned versions of a fictional scaffolding tool."""
    return ToolVersions(
        name="@storybook/cli",
        version="6.1.0",
        dev_dependencies={
            "@storybook/react": "6.1.0",
            "@storybook/addons": "^6.0.5",
        },
    )


@pytest.fixture
def sample_package_json():
    """Sample package.json content for testing."""
    return """
{
  "name": "test-project",
  "version": "1.0.0",
  "scripts": {
    "test": "jest"
  },
  "dependencies": {
    "react": "^16.13.0"
  },
  "devDependencies": {
    "jest": "^26.0.0"
  }
}
"""


@pytest.fixture
def package_json_file(tmp_path, sample_package_json):
    """Create a temporary package.json for testing."""
    manifest = tmp_path / "package.json"
    manifest.write_text(sample_package_json)
    return manifest
