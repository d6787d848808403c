"""npm-flavoured semver helpers built on semantic_version."""

import re

import semantic_version

# Leading range operators that may prefix a pinned version (^1.2.3, ~1.2.3, >=1.2.3, v1.2.3)
_RANGE_PREFIX = re.compile(r"^\s*(?:[\^~]|[<>]=?|=)?\s*v?")


def parse_version(value: str | None) -> semantic_version.Version | None:
    """Parse a version, tolerating a single leading range operator."""
    if not value:
        return None
    cleaned = _RANGE_PREFIX.sub("", value).strip()
    try:
        return semantic_version.Version(cleaned)
    except ValueError:
        return None


def parse_npm_spec(constraint: str) -> semantic_version.NpmSpec:
    """Parse an npm range expression. Raises ValueError when invalid."""
    return semantic_version.NpmSpec(constraint)


def satisfies(version: str, constraint: str) -> bool:
    parsed = parse_version(version)
    if parsed is None:
        return False
    try:
        spec = parse_npm_spec(constraint)
    except ValueError:
        return False
    return spec.match(parsed)


def greater_than(left: str, right: str) -> bool:
    """Strict semver precedence comparison; unparseable versions are never greater."""
    left_version = parse_version(left)
    right_version = parse_version(right)
    if left_version is None or right_version is None:
        return False
    return left_version > right_version


def bare_version(value: str) -> str:
    """Return ``value`` without range operators when it parses as a version."""
    parsed = parse_version(value)
    return str(parsed) if parsed is not None else value
