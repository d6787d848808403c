"""FastAPI web application for depinit."""

from typing import Any

from fastapi import FastAPI, HTTPException
from fastapi.responses import HTMLResponse
from pydantic import BaseModel

from depinit.babel import plan_babel_additions
from depinit.errors import FatalResolutionError, RegistryLookupError
from depinit.models import Manifest, NpmOptions
from depinit.versions import VersionResolver

app = FastAPI(
    title="depinit",
    description="Resolve npm dependency versions for scaffolded projects",
    version="0.1.0",
)


class ResolveRequest(BaseModel):
    """Request model for resolving package versions."""
    packages: list[str]
    use_yarn: bool = False


class ResolveResponse(BaseModel):
    specifiers: list[str]


class BabelRequest(BaseModel):
    """Request model for planning babel additions."""
    package_json: dict[str, Any]
    use_yarn: bool = False


class BabelResponse(BaseModel):
    additions: list[str]


@app.get("/", response_class=HTMLResponse)
async def home():
    """Serve the landing page."""
    return get_index_html()


@app.post("/api/resolve", response_model=ResolveResponse)
async def resolve_packages(request: ResolveRequest):
    """Resolve package names into name@version specifiers."""
    packages = [name.strip() for name in request.packages if name.strip()]
    if not packages:
        raise HTTPException(status_code=400, detail="No packages provided")

    resolver = VersionResolver()
    try:
        specifiers = await resolver.resolve_specifiers(NpmOptions(use_yarn=request.use_yarn), *packages)
    except FatalResolutionError as e:
        raise HTTPException(status_code=502, detail=str(e))

    return ResolveResponse(specifiers=specifiers)


@app.post("/api/babel", response_model=BabelResponse)
async def babel_additions(request: BabelRequest):
    """List the babel packages a package.json is missing."""
    resolver = VersionResolver()
    try:
        manifest = Manifest.from_dict(request.package_json)
    except (TypeError, ValueError) as e:
        raise HTTPException(status_code=400, detail=f"Invalid package.json: {e}")

    try:
        additions = await plan_babel_additions(
            resolver, NpmOptions(use_yarn=request.use_yarn), manifest
        )
    except (FatalResolutionError, RegistryLookupError) as e:
        raise HTTPException(status_code=502, detail=str(e))

    return BabelResponse(additions=additions)


def get_index_html() -> str:
    """Return the landing page."""
    return """
    <!DOCTYPE html>
    <html lang="en">
    <head>
        <meta charset="UTF-8">
        <title>depinit - Dependency Resolver</title>
    </head>
    <body>
        <h1>depinit</h1>
        <p>Resolve npm dependency versions for scaffolded projects.</p>
        <ul>
            <li><code>POST /api/resolve</code> with <code>{"packages": ["react"]}</code></li>
            <li><code>POST /api/babel</code> with <code>{"package_json": {...}}</code></li>
        </ul>
        <p>See <a href="/docs">/docs</a> for the full API.</p>
    </body>
    </html>
    """
