"""npm registry lookups."""

import asyncio
from urllib.parse import quote

import httpx
import semantic_version

from .errors import RegistryLookupError
from .models import NpmOptions
from .semver import parse_npm_spec, parse_version

NPM_REGISTRY_URL = "https://registry.npmjs.org"
YARN_REGISTRY_URL = "https://registry.yarnpkg.com"


class NpmRegistry:
    """Client answering "what is the latest version" questions."""

    def __init__(
        self,
        registry_url: str | None = None,
        timeout: float = 30.0,
        max_concurrency: int = 6,
    ):
        """Initialize registry client.

        Args:
            registry_url: Registry base URL; defaults to the npm or yarn
                registry depending on the options passed to each lookup
            timeout: Request timeout in seconds
            max_concurrency: Maximum concurrent requests
        """
        self.registry_url = registry_url
        self.timeout = timeout
        self.max_concurrency = max_concurrency
        self._cache: dict[str, dict] = {}
        self._semaphore = asyncio.Semaphore(max_concurrency)

    def base_url(self, options: NpmOptions) -> str:
        if self.registry_url:
            return self.registry_url.rstrip("/")
        return YARN_REGISTRY_URL if options.use_yarn else NPM_REGISTRY_URL

    async def fetch_latest(
        self, options: NpmOptions, package_name: str, constraint: str | None = None
    ) -> str:
        """Get the latest version of a package.

        Args:
            options: npm options selecting the registry
            package_name: Name of the package
            constraint: Optional npm semver range the version must satisfy

        Returns:
            Version string

        Raises:
            RegistryLookupError: if the registry cannot answer
        """
        document = await self._fetch_package_document(options, package_name)
        dist_tags = document.get("dist-tags", {})

        if not constraint:
            latest = dist_tags.get("latest")
            if not latest:
                raise RegistryLookupError(f"No latest version published for {package_name}")
            return latest

        # npm accepts a dist-tag wherever it accepts a range
        tagged = dist_tags.get(constraint.strip())
        if tagged:
            return tagged

        try:
            spec = parse_npm_spec(constraint)
        except ValueError:
            raise RegistryLookupError(f"Invalid version range {constraint!r} for {package_name}")

        matching: list[semantic_version.Version] = []
        for version_str in document.get("versions", {}):
            version = parse_version(version_str)
            if version is not None and spec.match(version):
                matching.append(version)

        if not matching:
            raise RegistryLookupError(f"No version of {package_name} satisfies {constraint}")

        return str(max(matching))

    async def _fetch_package_document(self, options: NpmOptions, package_name: str) -> dict:
        """Fetch the package document (all versions and dist-tags).

        Args:
            options: npm options selecting the registry
            package_name: Name of the package

        Returns:
            Package document dict
        """
        url = f"{self.base_url(options)}/{quote(package_name, safe='@')}"

        if url in self._cache:
            return self._cache[url]

        async with self._semaphore:
            try:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.get(url, headers={"Accept": "application/json"})
                    if response.status_code == 404:
                        raise RegistryLookupError(f"Package {package_name} not found in registry")
                    response.raise_for_status()
                    document = response.json()
            except RegistryLookupError:
                raise
            except httpx.TimeoutException:
                raise RegistryLookupError(f"Timeout fetching metadata for {package_name}")
            except httpx.HTTPStatusError as e:
                raise RegistryLookupError(f"HTTP error fetching {package_name}: {e}")
            except (httpx.HTTPError, ValueError) as e:
                raise RegistryLookupError(f"Network error fetching {package_name}: {e}")

        if not isinstance(document, dict):
            raise RegistryLookupError(f"Malformed registry response for {package_name}")

        self._cache[url] = document
        return document
