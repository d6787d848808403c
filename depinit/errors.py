"""Exceptions raised by depinit."""


class DepinitError(Exception):
    """Base class for depinit failures."""


class RegistryLookupError(DepinitError):
    """The registry could not answer a version query."""


class FatalResolutionError(DepinitError):
    """A version could not be resolved and no fallback was available."""

    def __init__(self, package_name: str, message: str):
        super().__init__(message)
        self.package_name = package_name


class InstallationError(DepinitError):
    """The package manager exited with a non-zero status."""

    def __init__(self, returncode: int, command: list[str] | None = None):
        super().__init__(f"An error occurred while installing dependencies (exit status {returncode}).")
        self.returncode = returncode
        self.command = command or []


class UnsupportedFormatError(DepinitError):
    """No template exists for the requested story format."""
