"""CLI application for depinit."""

import asyncio
from pathlib import Path

import typer
import uvicorn

from depinit.babel import plan_babel_additions
from depinit.console import console
from depinit.errors import DepinitError
from depinit.install import DependencyInstaller
from depinit.manifest_io import retrieve_package_json
from depinit.models import InstallOptions, NpmOptions, StoryFormat, ToolVersions
from depinit.templates import copy_template
from depinit.versions import VersionResolver


def build_resolver(tool_manifest: Path | None) -> VersionResolver:
    tool_versions = ToolVersions.from_package_json(tool_manifest) if tool_manifest else None
    return VersionResolver(tool_versions=tool_versions)


async def collect_specifiers(
    resolver: VersionResolver, options: InstallOptions, packages: list[str], babel: bool
) -> list[str]:
    """Resolve requested packages and any babel packages they need."""
    specifiers = await resolver.resolve_specifiers(options, *packages)
    if babel:
        specifiers.extend(await plan_babel_additions(resolver, options, options.package_json))
    return specifiers


app = typer.Typer(
    name="depinit",
    help="depinit - Resolve and install npm dependencies for scaffolded projects",
    add_completion=False,
)

TOOL_MANIFEST_HELP = "package.json of the tool whose pinned versions take precedence"


@app.command()
def resolve(
    packages: list[str] = typer.Argument(help="Package names to resolve"),
    use_yarn: bool = typer.Option(False, "--yarn", help="Query the yarn registry"),
    tool_manifest: Path | None = typer.Option(None, "--tool-manifest", help=TOOL_MANIFEST_HELP),
) -> None:
    """Print the name@version specifier each package would be installed as."""
    try:
        resolver = build_resolver(tool_manifest)
        specifiers = asyncio.run(resolver.resolve_specifiers(NpmOptions(use_yarn=use_yarn), *packages))
        for specifier in specifiers:
            console.print(specifier, markup=False, highlight=False)
    except DepinitError as e:
        console.print(f"Error: {e}", style="red", markup=False)
        raise typer.Exit(1)


@app.command()
def add(
    packages: list[str] = typer.Argument(help="Package names to add"),
    dev: bool = typer.Option(False, "--dev", "-D", help="Add as devDependencies"),
    skip_install: bool = typer.Option(
        False, "--skip-install", help="Only record the packages in package.json"
    ),
    use_yarn: bool = typer.Option(False, "--yarn", help="Use yarn instead of npm"),
    babel: bool = typer.Option(False, "--babel", help="Also add the babel packages the project needs"),
    tool_manifest: Path | None = typer.Option(None, "--tool-manifest", help=TOOL_MANIFEST_HELP),
) -> None:
    """Resolve packages and install them into the current project."""
    try:
        options = InstallOptions(
            use_yarn=use_yarn,
            skip_install=skip_install,
            install_as_dev_dependencies=dev,
            package_json=retrieve_package_json(),
        )
        resolver = build_resolver(tool_manifest)
        specifiers = asyncio.run(collect_specifiers(resolver, options, packages, babel))

        DependencyInstaller().install(options, specifiers)

        verb = "Recorded" if skip_install else "Installed"
        console.print(f"{verb} {', '.join(specifiers)}", markup=False, highlight=False)
    except (DepinitError, ValueError) as e:
        console.print(f"Error: {e}", style="red", markup=False)
        raise typer.Exit(1)


@app.command()
def install(
    use_yarn: bool = typer.Option(False, "--yarn", help="Use yarn instead of npm"),
) -> None:
    """Install the dependencies already declared in package.json."""
    try:
        DependencyInstaller().install_from_manifest(NpmOptions(use_yarn=use_yarn))
    except DepinitError:
        raise typer.Exit(1)


@app.command()
def template(
    story_format: StoryFormat = typer.Argument(help="Story format of the template"),
    root: Path = typer.Option(Path("templates"), "--root", help="Directory holding template-<format>/"),
    dest: Path = typer.Option(Path("."), "--dest", help="Directory to copy the template into"),
) -> None:
    """Copy a project template."""
    try:
        copy_template(root, story_format, dest)
    except DepinitError as e:
        console.print(f"Error: {e}", style="red", markup=False)
        raise typer.Exit(1)


@app.command()
def serve(
    host: str = typer.Option("127.0.0.1", "--host", help="Interface to bind"),
    port: int = typer.Option(8000, "--port", help="Port to listen on"),
    reload: bool = typer.Option(False, "--reload", help="Restart when apps/ or depinit/ change"),
) -> None:
    """Run the HTTP API."""
    console.print(f"Serving depinit API on http://{host}:{port} (docs at /docs)", markup=False, highlight=False)
    uvicorn.run(
        "apps.web.main:app",
        host=host,
        port=port,
        reload=reload,
        reload_dirs=["apps", "depinit"] if reload else None,
    )


if __name__ == "__main__":
    app()
